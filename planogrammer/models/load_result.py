from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Load result model: metrics for one price-book load.

Feeds the SUMMARY line rendered by ``services.summary``.
"""

__all__ = [
    "LoadResult",
]


@dataclass(frozen=True)
class LoadResult:
    """Aggregated outcome of a single successful load."""
    file_name: str
    total_lines: int  # lines after the header block
    records: int  # catalog entries
    rejected_duplicate: int
    rejected_short: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

    @property
    def rejected(self) -> int:
        return self.rejected_duplicate + self.rejected_short
