from __future__ import annotations

from collections.abc import Iterable

from ..models.catalog import Catalog
from ..models.record import Record

"""Missing-items report.

An item is "missing" when something from its subclass is already on a shelf
but the item itself is not.
"""

__all__ = [
    "missing_in_subclasses",
]


def missing_in_subclasses(placed: Iterable[Record], catalog: Catalog) -> list[Record]:
    """Catalog records sharing a subclass with a shelved item but not shelved themselves.

    Args:
        placed: every shelved record (see ``Planogram.placed_records``)
        catalog: the loaded catalog

    Returns:
        Matching records in catalog order; empty when nothing is shelved
    """
    placed = list(placed)
    item_codes = {r.item_code for r in placed}
    subclasses = {r.subclass for r in placed}

    return [
        record
        for record in catalog.records()
        if record.subclass in subclasses and record.item_code not in item_codes
    ]
