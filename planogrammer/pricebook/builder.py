from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.catalog import REJECT_DUPLICATE, REJECT_SHORT, Catalog, Rejection
from ..models.record import HEADER_LINES, MIN_FIELDS, Record
from .parser import parse_line

if TYPE_CHECKING:
    from ..services.progress import ProgressTracker

"""Catalog builder: whole price-book text -> Catalog.

Steps:
1. Split into lines, skip the 3-line banner
2. Parse every remaining line with a build-local ``seen`` set
3. Drop duplicates (parser) and records too short to carry an item code
4. Key the survivors by item code, in file order (last write wins)

Per-line problems never fail the build; they are collected as Rejections.
"""

__all__ = [
    "CatalogBuildError",
    "build_catalog",
    "split_lines",
]


class CatalogBuildError(Exception):
    """Raised when the price-book text cannot be processed at all."""


def split_lines(raw_text: str) -> list[str]:
    """Data lines of the export (banner removed)."""
    return raw_text.split("\n")[HEADER_LINES:]


def build_catalog(raw_text: str, progress: ProgressTracker | None = None) -> Catalog:
    """Build a deduplicated catalog from raw price-book text.

    Args:
        raw_text: full file contents
        progress: optional line progress display

    Returns:
        Catalog keyed by item code; ``rejections`` lists every dropped line

    Raises:
        CatalogBuildError: input is not processable text
    """
    seen: set[str] = set()
    records: dict[str, Record] = {}
    rejections: list[Rejection] = []

    try:
        lines = split_lines(raw_text)
        for line_number, line in enumerate(lines, start=HEADER_LINES + 1):
            record = parse_line(line, seen)
            if progress is not None:
                progress.advance()
            if record is None:
                rejections.append(Rejection(line_number, REJECT_DUPLICATE))
                continue
            if len(record) < MIN_FIELDS:
                rejections.append(Rejection(line_number, REJECT_SHORT))
                continue
            records[record.item_code] = record
    except Exception as e:
        raise CatalogBuildError(f"failed to build catalog: {e}") from e

    return Catalog(records, tuple(rejections))
