from __future__ import annotations

from ..models.load_result import LoadResult

"""SUMMARY line rendering for a price-book load.

Format:
    SUMMARY records={records} shelves={shelves} elapsed_sec={elapsed}
With rejection diagnostics enabled, two more fields are appended:
    rejected_duplicate={n} rejected_short={n}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: LoadResult, shelves: int, *, include_rejections: bool = False) -> str:
    """Render the SUMMARY line for one load.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = LoadResult(
        ...     file_name="book.csv", total_lines=10, records=8,
        ...     rejected_duplicate=1, rejected_short=1,
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result, 1)
        'SUMMARY records=8 shelves=1 elapsed_sec=2'
    """
    line = (
        f"SUMMARY records={result.records} "
        f"shelves={shelves} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
    if include_rejections:
        line += (
            f" rejected_duplicate={result.rejected_duplicate}"
            f" rejected_short={result.rejected_short}"
        )
    return line
