from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import PlanogramSession

"""Plan files: a text rendition of shelf edits for the command line.

One shelf per non-blank line, item codes separated by commas or whitespace.
Lines starting with '#' are comments. The first shelf line fills the session's
initial shelf; every following one is placed on a newly added shelf.

    # top shelf
    1234567, 2345678
    3456789 4567890
"""

logger = logging.getLogger(__name__)

__all__ = [
    "PlanError",
    "apply_plan",
    "parse_plan",
    "read_plan",
]

_SEPARATORS = re.compile(r"[,\s]+")


class PlanError(Exception):
    pass


def parse_plan(text: str) -> list[list[str]]:
    shelves: list[list[str]] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        shelves.append([code for code in _SEPARATORS.split(line) if code])
    return shelves


def read_plan(path: Path) -> list[list[str]]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PlanError(f"cannot read plan file {path}: {e}") from e
    return parse_plan(text)


def apply_plan(session: PlanogramSession, shelves: list[list[str]]) -> list[str]:
    """Replay a plan against the session.

    Returns:
        Codes that were not found in the catalog (skipped)
    """
    unknown: list[str] = []
    for i, codes in enumerate(shelves):
        if i > 0:
            session.add_shelf()
        for code in codes:
            if session.assign_item(code) is None:
                unknown.append(code)
    if unknown:
        logger.debug(f"skipped {len(unknown)} unknown codes: {unknown}")
    return unknown
