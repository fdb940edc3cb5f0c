from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from .record import Record

"""Catalog model: item code -> Record, in price-book order.

A Catalog is produced by one price-book load and never mutated afterwards;
the next load builds a new one. Lines dropped during the build are kept in
``rejections`` for the optional diagnostics log.
"""

__all__ = [
    "Catalog",
    "Rejection",
    "REJECT_DUPLICATE",
    "REJECT_SHORT",
]

REJECT_DUPLICATE = "DUPLICATE_IDENTIFIER"
REJECT_SHORT = "SHORT_RECORD"


@dataclass(frozen=True)
class Rejection:
    """A price-book line that did not make it into the catalog."""
    line_number: int  # 1-based line number in the source file
    reason: str  # REJECT_DUPLICATE / REJECT_SHORT


class Catalog(Mapping[str, Record]):
    """Read-only mapping from item code to Record."""

    def __init__(
        self,
        records: Mapping[str, Record] | None = None,
        rejections: tuple[Rejection, ...] = (),
    ) -> None:
        self._records: dict[str, Record] = dict(records or {})
        self.rejections = rejections

    def __getitem__(self, code: str) -> Record:
        return self._records[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Catalog(records={len(self._records)}, rejections={len(self.rejections)})"

    def records(self) -> list[Record]:
        """Records in insertion (price-book) order."""
        return list(self._records.values())

    def count_rejections(self, reason: str) -> int:
        return sum(1 for r in self.rejections if r.reason == reason)
