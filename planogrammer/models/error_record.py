from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the diagnostics log.

One ErrorRecord per rejected price-book line or failed load. ``line=-1`` marks
a file-level entry where no single line is to blame.
"""

__all__ = [
    "ErrorRecord",
    "LOAD_FAILURE",
]

LOAD_FAILURE = "LOAD_FAILURE"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: price-book file name
        line: 1-based line number, or -1 for file-level errors
        error_type: UPPER_SNAKE_CASE classification
        message: human readable detail
    """
    timestamp: str
    file: str
    line: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, line: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            line=line,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
