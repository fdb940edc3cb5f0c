from __future__ import annotations

import re

from ..models.record import RECORD_SCHEMA, Record

"""Price-book line parser.

Turns one raw export line into a normalized Record, or rejects it when its
item code or UPC has already been seen earlier in the same load.

Normalization per field:
1. double quotes removed (the export has no real quoting)
2. whitespace runs collapsed to a single space
3. trimmed
4. lower-cased
"""

__all__ = [
    "DELIMITER",
    "normalize_field",
    "parse_line",
]

DELIMITER = ","

_WHITESPACE_RUN = re.compile(r"\s+")

_CODE_INDEX = RECORD_SCHEMA["item_code"]
_UPC_INDEX = RECORD_SCHEMA["upc"]


def normalize_field(raw: str) -> str:
    return _WHITESPACE_RUN.sub(" ", raw.replace('"', "")).strip().lower()


def _identifiers(parts: list[str]) -> list[str]:
    # A column the line does not reach reads as "", same as Record.get
    return [parts[i] if i < len(parts) else "" for i in (_CODE_INDEX, _UPC_INDEX)]


def parse_line(line: str, seen: set[str]) -> Record | None:
    """Parse one price-book line.

    Item codes and UPCs share one uniqueness domain: the line is rejected when
    either of its identifiers is already in ``seen`` (an item code equal to an
    earlier UPC counts too). A rejected line leaves ``seen`` untouched; an
    accepted line adds both identifiers. A missing identifier column counts as
    the empty string, so at most one line without a UPC gets through.

    The last column is the row terminator and is dropped from the Record.
    Minimum field count is not checked here.

    Returns:
        The normalized Record, or None when the line is a duplicate
    """
    parts = [normalize_field(p) for p in line.split(DELIMITER)]

    ids = _identifiers(parts)
    if any(i in seen for i in ids):
        return None
    seen.update(ids)

    return Record.from_fields(parts[:-1])
