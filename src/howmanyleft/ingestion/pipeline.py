"""Build pipeline: read every source table, fold rows into the index, save.

Runs strictly sequentially.  The first failure aborts the build.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from howmanyleft.config import BuildConfig
from howmanyleft.exceptions import InputError
from howmanyleft.index import VehicleIndex
from howmanyleft.ingestion.reader import read_table
from howmanyleft.ingestion.sources import TableSource, build_sources
from howmanyleft.snapshot import save_index

_logger = logging.getLogger(__name__)


def ingest_table(index: VehicleIndex, path: Path, source: TableSource) -> int:
    """Insert every row of one source file; return the number of rows read."""
    _logger.info("Reading %s", path)
    rows = 0
    for row_number, row in read_table(path, source.row_model):
        try:
            index.insert(row, source.merge)
        except InputError as exc:
            raise InputError(str(exc), filename=str(path), row=row_number) from exc
        rows += 1
    _logger.info("Read %d rows from %s", rows, path.name)
    return rows


def build_index(config: BuildConfig, sources: Sequence[TableSource] | None = None) -> VehicleIndex:
    index = VehicleIndex()
    for source in build_sources(config) if sources is None else sources:
        ingest_table(index, config.source_path(source.filename), source)
    _logger.info("Index built: %s", index.counts())
    return index


def build_snapshot(config: BuildConfig, sources: Sequence[TableSource] | None = None) -> Path:
    """Rebuild the snapshot at ``config.output_path`` from the source tables."""
    index = build_index(config, sources)
    return save_index(index, config.output_path, fast_writes=config.fast_writes)
