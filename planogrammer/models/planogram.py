from __future__ import annotations

from collections.abc import Mapping

from .record import CODE_WIDTH, Record

"""Planogram model: an ordered list of shelves holding catalog records.

Invariants:
- there is always at least one shelf (a new Planogram starts with one empty shelf)
- ``current`` is always a valid shelf index
- shelves and the items on them are append-only
"""

__all__ = [
    "Planogram",
    "Shelf",
    "normalize_code",
]

Shelf = tuple[Record, ...]


def normalize_code(code: str) -> str:
    """Trim user input down to the catalog's item-code width, lower-cased like catalog keys."""
    return code.strip()[:CODE_WIDTH].lower()


class Planogram:
    """Mutable shelf arrangement for a single session."""

    def __init__(self) -> None:
        self._shelves: list[list[Record]] = [[]]
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def __len__(self) -> int:
        return len(self._shelves)

    def add_shelf(self) -> int:
        """Append an empty shelf, make it current and return its index."""
        self._shelves.append([])
        self._current = len(self._shelves) - 1
        return self._current

    def set_current(self, index: int) -> None:
        """Select the shelf that receives subsequent items.

        Raises:
            IndexError: index is outside 0..len(self)-1
        """
        if not 0 <= index < len(self._shelves):
            raise IndexError(f"shelf index out of range: {index} (shelves={len(self._shelves)})")
        self._current = index

    def assign_item(self, code: str, catalog: Mapping[str, Record]) -> Record | None:
        """Append the catalog record for ``code`` to the current shelf.

        Unknown codes leave the planogram untouched and return None.
        """
        record = catalog.get(normalize_code(code))
        if record is None:
            return None
        self._shelves[self._current].append(record)
        return record

    def shelves(self) -> list[Shelf]:
        """Snapshot of every shelf in order, empty ones included."""
        return [tuple(shelf) for shelf in self._shelves]

    def placed_records(self) -> list[Record]:
        """All shelved records, shelf by shelf, left to right."""
        return [record for shelf in self._shelves for record in shelf]
