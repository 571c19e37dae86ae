"""Command-line entry point: rebuild the snapshot from the CSV tables.

Usage
-----
Place the ``df_VEH*.csv`` files under ``tmp/csv/`` and run::

    howmanyleft

Options::

    --csv-dir DIR        Directory with the source CSV files
    --output FILE        Snapshot file to (re)create
    --current-year YYYY  Reporting year read from the yearly tables
    --verbose, -v        Debug logging
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from howmanyleft.config import BuildConfig
from howmanyleft.exceptions import ConfigError, IdentityError, InputError, PersistenceError
from howmanyleft.ingestion.pipeline import build_index
from howmanyleft.snapshot import save_index

_logger = logging.getLogger("howmanyleft")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="howmanyleft",
        description="Build the vehicle licensing statistics snapshot from DfT CSV tables.",
    )
    parser.add_argument("--csv-dir", help="Directory with the source CSV files (default: tmp/csv)")
    parser.add_argument("--output", dest="output_path", help="Snapshot file to create (default: howmanyleft.sqlite3)")
    parser.add_argument("--current-year", help="Reporting year column for the yearly tables")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BuildConfig.from_env(
            csv_dir=args.csv_dir,
            output_path=args.output_path,
            current_year=args.current_year,
        )
    except ConfigError as exc:
        _logger.error("Config error: %s", exc)
        return 1

    try:
        index = build_index(config)
    except (InputError, IdentityError) as exc:
        _logger.error("Parse error: %s", exc)
        return 1

    try:
        save_index(index, config.output_path, fast_writes=config.fast_writes)
    except PersistenceError as exc:
        _logger.error("Save error: %s", exc)
        return 1
    return 0
