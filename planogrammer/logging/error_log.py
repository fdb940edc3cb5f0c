from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.catalog import REJECT_DUPLICATE, REJECT_SHORT, Rejection
from ..models.error_record import ErrorRecord

"""Rejection log buffering.

Collects ErrorRecords during a load and writes them as JSON Lines to
``<log_directory>/rejections-YYYYMMDD-HHMMSS.log`` (UTC, one file per buffer).
Only used when ``diagnostics.rejection_log`` is enabled.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush appends JSON Lines.

    - The file path is fixed on first access
    - Not thread safe (loads are single-flight)
    """
    def __init__(self, log_directory: Path | str = Path("./logs")) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self.log_directory = Path(log_directory)

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self.log_directory.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.log_directory / f"rejections-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def extend_rejections(self, file_name: str, rejections: Iterable[Rejection]) -> None:
        for rejection in rejections:
            self.append(
                ErrorRecord.create(
                    file=file_name,
                    line=rejection.line_number,
                    error_type=rejection.reason,
                    message=_REASON_MESSAGES.get(rejection.reason, rejection.reason),
                )
            )

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp


_REASON_MESSAGES = {
    REJECT_DUPLICATE: "item code or UPC already seen earlier in the file",
    REJECT_SHORT: "fewer fields than required to read the item code",
}
