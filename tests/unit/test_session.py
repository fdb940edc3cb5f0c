from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from planogrammer.models.config_models import AppConfig, DiagnosticsConfig
from planogrammer.services.session import BookLoadError, PlanogramSession, SessionBusyError


def test_load_installs_catalog(sample_book: Path):
    session = PlanogramSession()

    result = session.load(sample_book)

    assert list(session.catalog) == ["1234567", "2345678", "3456789"]
    assert session.error is False
    assert session.loading is False
    assert result.file_name == "book.csv"
    assert result.records == 3
    assert result.total_lines == 7
    assert result.rejected_duplicate == 3
    assert result.rejected_short == 1
    assert session.last_result is result


def test_load_replaces_previous_catalog(sample_book: Path, write_book, line):
    session = PlanogramSession()
    session.load(sample_book)

    other = write_book([line("7777777", "777")], name="other.csv")
    session.load(other)

    assert list(session.catalog) == ["7777777"]


def test_load_missing_file_clears_catalog_and_sets_error(sample_book: Path, temp_workdir: Path):
    session = PlanogramSession()
    session.load(sample_book)
    session.assign_item("1234567")

    with pytest.raises(BookLoadError, match="cannot read"):
        session.load(temp_workdir / "data" / "missing.csv")

    assert session.error is True
    assert session.loading is False
    assert len(session.catalog) == 0
    assert session.last_result is None
    # planogram untouched by a failed load
    assert [r.item_code for r in session.shelves()[0]] == ["1234567"]


def test_load_keeps_stray_carriage_return_inside_line(temp_workdir: Path, line, book_text):
    path = temp_workdir / "data" / "cr.csv"
    path.write_bytes(book_text([line("1234567", "000111", brand="ac\rme")]).encode("utf-8"))
    session = PlanogramSession()

    session.load(path)

    assert list(session.catalog) == ["1234567"]
    assert session.catalog["1234567"].upc == "000111"


def test_load_crlf_book(temp_workdir: Path, line, book_text):
    text = book_text([line("1234567", "000111"), line("2345678", "000222")])
    path = temp_workdir / "data" / "crlf.csv"
    path.write_bytes(text.replace("\n", "\r\n").encode("utf-8"))
    session = PlanogramSession()

    session.load(path)

    assert list(session.catalog) == ["1234567", "2345678"]
    assert len(session.catalog["1234567"]) == 62


def test_load_undecodable_file(temp_workdir: Path):
    path = temp_workdir / "data" / "binary.csv"
    path.write_bytes(b"\xff\xfe\xfa\n" * 5)
    session = PlanogramSession()

    with pytest.raises(BookLoadError):
        session.load(path)
    assert session.error is True


def test_successful_load_clears_error_flag(sample_book: Path, temp_workdir: Path):
    session = PlanogramSession()
    with pytest.raises(BookLoadError):
        session.load(temp_workdir / "nope.csv")

    session.load(sample_book)

    assert session.error is False
    assert len(session.catalog) == 3


def test_load_refused_while_loading(sample_book: Path):
    session = PlanogramSession()
    session.loading = True

    with pytest.raises(SessionBusyError):
        session.load(sample_book)
    with pytest.raises(SessionBusyError):
        session.assign_item("1234567")


def test_load_async(sample_book: Path):
    session = PlanogramSession()

    result = asyncio.run(session.load_async(sample_book))

    assert result.records == 3
    assert session.loading is False


def test_concurrent_async_loads_are_rejected(sample_book: Path):
    session = PlanogramSession()

    async def both():
        return await asyncio.gather(
            session.load_async(sample_book),
            session.load_async(sample_book),
            return_exceptions=True,
        )

    first, second = asyncio.run(both())

    assert first.records == 3
    assert isinstance(second, SessionBusyError)
    assert session.loading is False


def test_assign_item_and_lookup(sample_book: Path):
    session = PlanogramSession()
    session.load(sample_book)

    assert session.lookup(" 1234567 ").name == "widget"
    assert session.assign_item("1234567") is not None
    assert session.assign_item("0000000") is None
    assert len(session.shelves()[0]) == 1


def test_shelf_operations(sample_book: Path):
    session = PlanogramSession()
    session.load(sample_book)

    assert session.add_shelf() == 1
    session.assign_item("2345678")
    session.set_current(0)
    session.assign_item("3456789")

    assert [len(s) for s in session.shelves()] == [1, 1]
    with pytest.raises(IndexError):
        session.set_current(2)


def test_round_trip_exports(write_book, line):
    book = write_book([line("1234567", "000111", brand="acme", name="widget", pack="1",
                            size="10oz", item_class="c1", subclass="s1")])
    session = PlanogramSession()
    session.load(book)
    session.assign_item("1234567")

    planogram_csv = session.export_planogram()
    missing_csv = session.export_missing_items()

    assert planogram_csv.splitlines(keepends=False)[0] == '"widget'
    assert planogram_csv == '"widget\nacme (1@10oz)\nSVC: 1234567\nUPC: 000111"\n'
    assert missing_csv == "brand,name,pack,size,itemcode,restricted,upc,class,subclass\n"


def test_missing_items_report(sample_book: Path):
    session = PlanogramSession()
    session.load(sample_book)
    session.assign_item("1234567")

    assert [r.item_code for r in session.missing_items()] == ["2345678"]


def test_save_exports_to_output_directory(sample_book: Path, temp_workdir: Path):
    session = PlanogramSession(AppConfig(output_directory=str(temp_workdir / "out")))
    session.load(sample_book)
    session.assign_item("1234567")
    now = datetime(2024, 10, 19, 12, 0, 0, tzinfo=UTC)

    planogram_path = session.save_planogram(now)
    missing_path = session.save_missing_items(now)

    assert planogram_path.name == "planogram-20241019T120000Z.csv"
    assert missing_path.name == "missing-items-in-sub-class-20241019T120000Z.csv"
    assert planogram_path.read_text(encoding="utf-8") == session.export_planogram()
    assert "2345678" in missing_path.read_text(encoding="utf-8")


def test_save_uses_configured_timezone(sample_book: Path, temp_workdir: Path):
    cfg = AppConfig(output_directory=str(temp_workdir / "out"), timezone="Asia/Tokyo")
    session = PlanogramSession(cfg)

    path = session.save_planogram()

    assert path.name.endswith("+0900.csv")


def test_rejection_log_written_when_enabled(sample_book: Path, temp_workdir: Path):
    cfg = AppConfig(diagnostics=DiagnosticsConfig(rejection_log=True, log_directory=str(temp_workdir / "logs")))
    session = PlanogramSession(cfg)

    session.load(sample_book)

    logs = list((temp_workdir / "logs").glob("rejections-*.log"))
    assert len(logs) == 1
    entries = [json.loads(raw) for raw in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [e["line"] for e in entries] == [7, 8, 9, 10]
    assert {e["file"] for e in entries} == {"book.csv"}


def test_rejection_log_not_written_by_default(sample_book: Path, temp_workdir: Path):
    session = PlanogramSession()
    session.load(sample_book)

    assert not (temp_workdir / "logs").exists()


def test_load_failure_logged_when_enabled(temp_workdir: Path):
    cfg = AppConfig(diagnostics=DiagnosticsConfig(rejection_log=True, log_directory=str(temp_workdir / "logs")))
    session = PlanogramSession(cfg)

    with pytest.raises(BookLoadError):
        session.load(temp_workdir / "missing.csv")

    logs = list((temp_workdir / "logs").glob("rejections-*.log"))
    entry = json.loads(logs[0].read_text(encoding="utf-8").strip())
    assert entry["error_type"] == "LOAD_FAILURE"
    assert entry["line"] == -1
