from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from planogrammer.config.loader import ConfigError, apply_env_overrides, load_config_or_default
from planogrammer.logging.init import log_summary, setup_logging
from planogrammer.models.load_result import LoadResult
from planogrammer.services.plan import PlanError, apply_plan, read_plan
from planogrammer.services.session import BookLoadError, PlanogramSession
from planogrammer.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env and config (config/planogram.yml, optional)
- Load the price book into a session
- Replay an optional plan file (one shelf per line)
- Write the planogram CSV, and the missing-items report on request
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_SAMPLE = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="planogrammer",
        description="Build a planogram from a price-book export",
    )
    p.add_argument("book", type=Path, help="Price-book export (CSV text)")
    p.add_argument("--plan", type=Path, help="Plan file: one shelf per line of item codes")
    p.add_argument("--missing-items", action="store_true", help="Also write the missing-items-in-subclass report")
    p.add_argument("--inspect-data", action="store_true", help="Print catalog size & first records then exit")
    p.add_argument("--config", type=Path, help="Config file (default: config/planogram.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(session: PlanogramSession, result: LoadResult) -> int:
    records = session.catalog.records()
    print(f"catalog: {result.records} items, {result.rejected} rejected lines")
    for record in records[:INSPECT_SAMPLE]:
        flag = " (restricted)" if record.is_restricted else ""
        print(
            f"  {record.item_code} upc={record.upc} {record.brand} {record.name} "
            f"{record.pack}@{record.size} class={record.item_class} subclass={record.subclass}{flag}"
        )
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # None -> read sys.argv; an explicit [] must not pick up the test runner's args
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = apply_env_overrides(load_config_or_default(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    session = PlanogramSession(cfg)
    logger.info(f"Loading price book: {args.book}")
    try:
        result = session.load(args.book)
    except BookLoadError as e:
        logger.error(f"load: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(session, result)

    if args.plan is not None:
        try:
            shelves = read_plan(args.plan)
        except PlanError as e:
            logger.error(f"plan: {e}")
            return EXIT_FATAL
        apply_plan(session, shelves)

    planogram_path = session.save_planogram()
    logger.info(f"planogram written: {planogram_path}")
    if args.missing_items:
        report_path = session.save_missing_items()
        logger.info(f"missing items written: {report_path} ({len(session.missing_items())} items)")

    summary_line = render_summary_line(
        result,
        len(session.planogram),
        include_rejections=cfg.diagnostics.rejection_log,
    )
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
