from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from ..logging.error_log import ErrorLogBuffer
from ..models.catalog import REJECT_DUPLICATE, REJECT_SHORT, Catalog
from ..models.config_models import AppConfig
from ..models.error_record import LOAD_FAILURE, ErrorRecord
from ..models.load_result import LoadResult
from ..models.planogram import Planogram, Shelf, normalize_code
from ..models.record import HEADER_LINES, Record
from ..pricebook.builder import CatalogBuildError, build_catalog
from .exporter import (
    MISSING_ITEMS_PREFIX,
    PLANOGRAM_PREFIX,
    export_missing_items,
    export_planogram,
    write_export,
)
from .progress import ProgressTracker
from .report import missing_in_subclasses

"""Planogram session: the surface a front end drives.

Owns the current catalog, the planogram and the load state flags:
- ``loading``: a load is in flight; further loads and item assignments are refused
- ``error``: the last load failed; the catalog is empty

A successful load swaps the catalog in one assignment, so readers see either
the old catalog or the new one. The planogram is never touched by a load.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "BookLoadError",
    "PlanogramSession",
    "SessionBusyError",
]


class BookLoadError(Exception):
    """The price book could not be read or processed."""


class SessionBusyError(Exception):
    """An operation was attempted while a load is in flight."""


class PlanogramSession:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.catalog = Catalog()
        self.planogram = Planogram()
        self.loading = False
        self.error = False
        self.last_result: LoadResult | None = None

    # ---- loading -------------------------------------------------------

    def load(self, path: Path | str) -> LoadResult:
        """Read and ingest a price book, replacing the current catalog.

        Raises:
            SessionBusyError: another load is in flight
            BookLoadError: unreadable file or unprocessable content
                (catalog cleared, ``error`` set)
        """
        path = Path(path)
        self._begin_load()
        try:
            try:
                text = self._read(path)
            except (OSError, UnicodeDecodeError) as e:
                raise self._fail(path, f"cannot read {path}: {e}") from e
            return self._install(path, text)
        finally:
            self.loading = False

    async def load_async(self, path: Path | str) -> LoadResult:
        """Same as ``load`` but the file read runs off the event loop."""
        path = Path(path)
        self._begin_load()
        try:
            try:
                text = await asyncio.to_thread(self._read, path)
            except (OSError, UnicodeDecodeError) as e:
                raise self._fail(path, f"cannot read {path}: {e}") from e
            return self._install(path, text)
        finally:
            self.loading = False

    def _begin_load(self) -> None:
        if self.loading:
            raise SessionBusyError("a price book load is already in progress")
        self.loading = True
        self.error = False

    def _read(self, path: Path) -> str:
        # Lines end at "\n" only; a CRLF "\r" lands in the dropped terminator column
        with path.open(encoding=self.config.encoding, newline="") as f:
            return f.read()

    def _install(self, path: Path, text: str) -> LoadResult:
        start = datetime.now(UTC)
        total_lines = max(text.count("\n") + 1 - HEADER_LINES, 0)
        try:
            with ProgressTracker(total_lines) as progress:
                catalog = build_catalog(text, progress=progress)
        except CatalogBuildError as e:
            raise self._fail(path, str(e)) from e
        end = datetime.now(UTC)

        self.catalog = catalog
        self.error = False
        result = LoadResult(
            file_name=path.name,
            total_lines=total_lines,
            records=len(catalog),
            rejected_duplicate=catalog.count_rejections(REJECT_DUPLICATE),
            rejected_short=catalog.count_rejections(REJECT_SHORT),
            start_time=start,
            end_time=end,
            elapsed_seconds=(end - start).total_seconds(),
        )
        self.last_result = result
        logger.info(f"loaded {result.records} items from {path.name}")

        if self.config.diagnostics.rejection_log and catalog.rejections:
            buf = self._error_log()
            buf.extend_rejections(path.name, catalog.rejections)
            log_path = buf.flush()
            logger.info(f"{result.rejected} rejected lines logged to {log_path}")
        return result

    def _fail(self, path: Path, message: str) -> BookLoadError:
        """Clear the catalog, flag the error and return the exception to raise."""
        self.catalog = Catalog()
        self.error = True
        self.last_result = None
        if self.config.diagnostics.rejection_log:
            buf = self._error_log()
            buf.append(ErrorRecord.create(path.name, -1, LOAD_FAILURE, message))
            buf.flush()
        return BookLoadError(message)

    def _error_log(self) -> ErrorLogBuffer:
        return ErrorLogBuffer(Path(self.config.diagnostics.log_directory))

    # ---- planogram -----------------------------------------------------

    @property
    def current(self) -> int:
        return self.planogram.current

    def shelves(self) -> list[Shelf]:
        return self.planogram.shelves()

    def add_shelf(self) -> int:
        return self.planogram.add_shelf()

    def set_current(self, index: int) -> None:
        self.planogram.set_current(index)

    def lookup(self, code: str) -> Record | None:
        return self.catalog.get(normalize_code(code))

    def assign_item(self, code: str) -> Record | None:
        """Place an item on the current shelf; unknown codes are ignored."""
        if self.loading:
            raise SessionBusyError("cannot assign items while a price book is loading")
        record = self.planogram.assign_item(code, self.catalog)
        if record is None:
            logger.debug(f"unknown item code: {code!r}")
        return record

    # ---- exports -------------------------------------------------------

    def missing_items(self) -> list[Record]:
        return missing_in_subclasses(self.planogram.placed_records(), self.catalog)

    def export_planogram(self) -> str:
        return export_planogram(self.planogram.shelves())

    def export_missing_items(self) -> str:
        return export_missing_items(self.missing_items())

    def _now(self) -> datetime:
        return datetime.now(ZoneInfo(self.config.timezone))

    def save_planogram(self, now: datetime | None = None) -> Path:
        return write_export(
            self.export_planogram(),
            Path(self.config.output_directory),
            PLANOGRAM_PREFIX,
            now or self._now(),
        )

    def save_missing_items(self, now: datetime | None = None) -> Path:
        return write_export(
            self.export_missing_items(),
            Path(self.config.output_directory),
            MISSING_ITEMS_PREFIX,
            now or self._now(),
        )
