from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

"""Record model for the price-book catalog.

A Record is one normalized price-book line. The export is positional, so the
schema below maps each logical field to its source column. Call sites read
fields by name (``record.item_code``) instead of indexing the raw tuple.
"""

__all__ = [
    "CODE_WIDTH",
    "HEADER_LINES",
    "MIN_FIELDS",
    "RECORD_SCHEMA",
    "RESTRICTED_MARKER",
    "Record",
]

# Logical field name -> 0-based column position in the price-book export
RECORD_SCHEMA: dict[str, int] = {
    "brand": 5,
    "name": 6,
    "pack": 7,
    "size": 8,
    "item_code": 11,
    "restricted": 12,
    "upc": 20,
    "item_class": 58,
    "subclass": 60,
}

HEADER_LINES = 3  # banner lines at the top of every export
MIN_FIELDS = RECORD_SCHEMA["item_code"] + 1
CODE_WIDTH = 7  # item codes are looked up by their first 7 characters
RESTRICTED_MARKER = "*"


@dataclass(frozen=True)
class Record:
    """Immutable, normalized price-book line.

    ``fields`` keeps every column of the source line (minus the trailing
    terminator column). Named accessors go through ``RECORD_SCHEMA``; a
    position past the end of the line reads as an empty string.
    """
    fields: tuple[str, ...]

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> Record:
        return cls(fields=tuple(fields))

    def get(self, name: str) -> str:
        index = RECORD_SCHEMA[name]
        if index < len(self.fields):
            return self.fields[index]
        return ""

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def brand(self) -> str:
        return self.get("brand")

    @property
    def name(self) -> str:
        return self.get("name")

    @property
    def pack(self) -> str:
        return self.get("pack")

    @property
    def size(self) -> str:
        return self.get("size")

    @property
    def item_code(self) -> str:
        return self.get("item_code")

    @property
    def restricted(self) -> str:
        return self.get("restricted")

    @property
    def upc(self) -> str:
        return self.get("upc")

    @property
    def item_class(self) -> str:
        return self.get("item_class")

    @property
    def subclass(self) -> str:
        return self.get("subclass")

    @property
    def is_restricted(self) -> bool:
        return self.restricted == RESTRICTED_MARKER
