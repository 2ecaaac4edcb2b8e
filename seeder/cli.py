"""
seeder/cli.py

Command-line entry point for seeding the store from CSV files.

Exit status: 0 when every entity type was processed (per-row skips and
failures included), 1 when a structural error aborted the run, 2 on usage
errors.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from seeder.config import get_seed_settings
from seeder.domain.entity_catalog import UnknownEntityTypeError, describe_catalog, get_entity_specs
from seeder.domain.load_result import MigrationSummary
from seeder.reporting import LoggingReporter
from seeder.schemas.seed_summary import SeedSummaryResponse
from seeder.services.migration_orchestrator import (
    MigrationAbortedError,
    MigrationOrchestrator,
    StoreScope,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """
    Configure root logging once for the seed process.
    """

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the store from CSV files (safe to re-run).")
    parser.add_argument(
        "--csv-dir",
        dest="csv_dir",
        default=None,
        help="Directory holding the entity CSV files. Defaults to SEED_CSV_DIR.",
    )
    parser.add_argument(
        "--only",
        dest="only",
        action="append",
        default=None,
        metavar="ENTITY",
        help="Seed only this entity type (repeatable).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run summary as JSON.",
    )
    parser.add_argument(
        "--fail-on-row-errors",
        dest="fail_on_row_errors",
        action="store_true",
        default=None,
        help="Exit non-zero when any row failed to upsert.",
    )
    parser.add_argument(
        "--list-entities",
        dest="list_entities",
        action="store_true",
        help="List entity types with their source files and exit.",
    )
    return parser


def _print_summary(summary: MigrationSummary, *, json_output: bool) -> None:
    if json_output:
        print(SeedSummaryResponse.from_summary(summary).model_dump_json(indent=2))
        return

    for result in summary.results:
        print(
            f"Seeded {result.rows_attempted} {result.label or result.entity_type} "
            f"(upserted={result.rows_upserted} skipped={result.rows_skipped} "
            f"failed={result.rows_failed})"
        )
    if summary.succeeded:
        print("Database seeded successfully.")
    else:
        print(f"Seeding aborted: {summary.error}")


def main(argv: Sequence[str] | None = None, *, store_scope: StoreScope | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = get_seed_settings()

    _configure_logging(args.log_level or settings.log_level)

    try:
        specs = get_entity_specs(args.only or settings.entities)
    except UnknownEntityTypeError as exc:
        parser.error(str(exc))

    if args.list_entities:
        for line in describe_catalog(specs):
            print(line)
        return 0

    if store_scope is None:
        from db.session import store_scope as default_store_scope

        store_scope = default_store_scope

    csv_dir = Path(args.csv_dir).expanduser() if args.csv_dir else settings.csv_dir
    fail_on_row_errors = (
        settings.fail_on_row_errors if args.fail_on_row_errors is None else args.fail_on_row_errors
    )

    orchestrator = MigrationOrchestrator(store_scope=store_scope, reporter=LoggingReporter())
    try:
        summary = orchestrator.run(specs, csv_dir=csv_dir)
    except MigrationAbortedError as exc:
        logger.error("Seed run aborted: %s", exc)
        _print_summary(exc.summary, json_output=args.json_output)
        return 1

    _print_summary(summary, json_output=args.json_output)
    if fail_on_row_errors and summary.rows_failed:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
