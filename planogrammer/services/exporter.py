from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from pathlib import Path

from ..models.record import Record

"""CSV exporters.

Planogram export (no header, one line per populated shelf):
    "<name>\\n<brand> (<pack>@<size>)\\nSVC: <code><restricted>\\nUPC: <upc><restricted>",...

Missing-items export (header + one unquoted row per record):
    brand,name,pack,size,itemcode,restricted,upc,class,subclass
"""

logger = logging.getLogger(__name__)

__all__ = [
    "MISSING_ITEMS_HEADER",
    "MISSING_ITEMS_PREFIX",
    "PLANOGRAM_PREFIX",
    "export_filename",
    "export_missing_items",
    "export_planogram",
    "format_item_cell",
    "write_export",
]

MISSING_ITEMS_HEADER = [
    "brand", "name", "pack", "size", "itemcode", "restricted", "upc", "class", "subclass",
]
# Record fields backing each header column, same order
MISSING_ITEMS_FIELDS = [
    "brand", "name", "pack", "size", "item_code", "restricted", "upc", "item_class", "subclass",
]

PLANOGRAM_PREFIX = "planogram"
MISSING_ITEMS_PREFIX = "missing-items-in-sub-class"


def format_item_cell(record: Record) -> str:
    """Multi-line shelf label for one item (restricted marker repeated on both code lines)."""
    return (
        f"{record.name}\n"
        f"{record.brand} ({record.pack}@{record.size})\n"
        f"SVC: {record.item_code}{record.restricted}\n"
        f"UPC: {record.upc}{record.restricted}"
    )


def export_planogram(shelves: Iterable[Sequence[Record]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for shelf in shelves:
        if not shelf:
            continue
        writer.writerow([format_item_cell(record) for record in shelf])
    return buf.getvalue()


def export_missing_items(records: Iterable[Record]) -> str:
    # Fields never contain the delimiter or quotes (split on ',' and stripped on parse)
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONE, lineterminator="\n")
    writer.writerow(MISSING_ITEMS_HEADER)
    for record in records:
        writer.writerow([record.get(name) for name in MISSING_ITEMS_FIELDS])
    return buf.getvalue()


def export_filename(prefix: str, now: datetime) -> str:
    """``<prefix>-<ISO-8601 basic timestamp>.csv``; UTC gets a 'Z' suffix."""
    stamp = now.strftime("%Y%m%dT%H%M%S")
    offset = now.utcoffset()
    if offset is None or offset == timedelta(0):
        stamp += "Z"
    else:
        stamp += now.strftime("%z")
    return f"{prefix}-{stamp}.csv"


def write_export(content: str, directory: Path, prefix: str, now: datetime) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(prefix, now)
    # newline="" keeps "\n" line endings on every platform
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.debug(f"wrote {path} ({len(content)} chars)")
    return path
