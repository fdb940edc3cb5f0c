from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from planogrammer.services.exporter import (
    MISSING_ITEMS_PREFIX,
    PLANOGRAM_PREFIX,
    export_filename,
    export_missing_items,
    export_planogram,
    format_item_cell,
    write_export,
)

HEADER = "brand,name,pack,size,itemcode,restricted,upc,class,subclass"


def test_format_item_cell(record):
    r = record("1234567", "000111", brand="acme", name="widget", pack="1", size="10oz")

    assert format_item_cell(r) == "widget\nacme (1@10oz)\nSVC: 1234567\nUPC: 000111"


def test_format_item_cell_restricted_marker_on_both_codes(record):
    r = record("1234567", "000111", restricted="*")

    cell = format_item_cell(r)

    assert "SVC: 1234567*" in cell
    assert cell.endswith("UPC: 000111*")


def test_export_planogram_single_item(record):
    r = record("1234567", "000111")

    assert export_planogram([(r,)]) == '"widget\nacme (1@10oz)\nSVC: 1234567\nUPC: 000111"\n'


def test_export_planogram_one_line_per_populated_shelf(record):
    a = record("1111111", "1", name="a")
    b = record("2222222", "2", name="b")
    c = record("3333333", "3", name="c")

    out = export_planogram([(), (a, b), (), (c,), ()])

    assert out == (
        '"a\nacme (1@10oz)\nSVC: 1111111\nUPC: 1","b\nacme (1@10oz)\nSVC: 2222222\nUPC: 2"\n'
        '"c\nacme (1@10oz)\nSVC: 3333333\nUPC: 3"\n'
    )


def test_export_planogram_all_empty():
    assert export_planogram([(), ()]) == ""


def test_export_missing_items_header_only():
    assert export_missing_items([]) == HEADER + "\n"


def test_export_missing_items_rows(record):
    rows = [
        record("1234567", "000111", restricted="*", item_class="c1", subclass="s1"),
        record("2345678", "000222", brand="zeta", name="gizmo", item_class="c2", subclass="s1"),
    ]

    out = export_missing_items(rows)

    assert out.splitlines() == [
        HEADER,
        "acme,widget,1,10oz,1234567,*,000111,c1,s1",
        "zeta,gizmo,1,10oz,2345678,,000222,c2,s1",
    ]


def test_export_filename_utc():
    now = datetime(2024, 10, 19, 8, 5, 3, tzinfo=UTC)

    assert export_filename(PLANOGRAM_PREFIX, now) == "planogram-20241019T080503Z.csv"


def test_export_filename_with_offset():
    now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=ZoneInfo("America/New_York"))

    assert export_filename(MISSING_ITEMS_PREFIX, now) == "missing-items-in-sub-class-20240102T030405-0500.csv"


def test_write_export_keeps_lf_line_endings(tmp_path, record):
    now = datetime(2024, 10, 19, 8, 5, 3, tzinfo=UTC)
    content = export_planogram([(record("1234567", "000111"),)])

    path = write_export(content, tmp_path / "out", PLANOGRAM_PREFIX, now)

    assert path == tmp_path / "out" / "planogram-20241019T080503Z.csv"
    assert path.read_bytes() == content.encode("utf-8")
    assert b"\r" not in path.read_bytes()
