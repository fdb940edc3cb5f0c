# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable

import pytest

from planogrammer.models.record import Record

BANNER = [
    "PRICE BOOK EXPORT",
    "STORE,0001,WEEK 42",
    "generated,2024-10-14",
]

# Columns in a full-width export line, excluding the row terminator column
LINE_WIDTH = 62


def make_fields(
    code: str,
    upc: str,
    *,
    brand: str = "acme",
    name: str = "widget",
    pack: str = "1",
    size: str = "10oz",
    restricted: str = "",
    item_class: str = "c1",
    subclass: str = "s1",
    width: int = LINE_WIDTH,
) -> list[str]:
    cols = [""] * width
    cols[5] = brand
    cols[6] = name
    cols[7] = pack
    cols[8] = size
    cols[11] = code
    cols[12] = restricted
    if width > 20:
        cols[20] = upc
    if width > 58:
        cols[58] = item_class
    if width > 60:
        cols[60] = subclass
    return cols


def make_line(code: str, upc: str, **kwargs) -> str:
    # trailing "" is the row terminator column the parser drops
    return ",".join(make_fields(code, upc, **kwargs) + [""])


def make_record(code: str, upc: str, **kwargs) -> Record:
    return Record.from_fields(make_fields(code, upc, **kwargs))


def make_book_text(lines: list[str]) -> str:
    return "\n".join(BANNER + lines) + "\n"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PLANOGRAMMER_CONFIG", raising=False)
        monkeypatch.delenv("PLANOGRAMMER_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_directory: ./out
timezone: UTC
encoding: utf-8
diagnostics:
  rejection_log: false
  log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "planogram.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def line() -> Callable[..., str]:
    return make_line


@pytest.fixture()
def record() -> Callable[..., Record]:
    return make_record


@pytest.fixture()
def sample_book_lines() -> list[str]:
    return [
        make_line("1234567", "000111", name="widget", subclass="s1"),
        make_line("2345678", "000222", name="gadget", subclass="s1", restricted="*"),
        make_line("3456789", "000333", name="gizmo", subclass="s2"),
        make_line("1234567", "000999", name="widget dup"),  # duplicate item code
        make_line("4567890", "000111", name="upc dup"),  # duplicate UPC
        "short,line,only",
    ]


@pytest.fixture()
def write_book(temp_workdir: Path) -> Callable[[list[str]], Path]:
    def _write(lines: list[str], name: str = "book.csv") -> Path:
        path = temp_workdir / "data" / name
        path.write_text(make_book_text(lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def sample_book(write_book, sample_book_lines: list[str]) -> Path:
    return write_book(sample_book_lines)


@pytest.fixture()
def book_text() -> Callable[[list[str]], str]:
    return make_book_text
