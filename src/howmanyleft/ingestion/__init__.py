"""Ingestion layer.

This package reads the DfT CSV tables into typed rows and feeds them,
source by source, into a :class:`howmanyleft.index.VehicleIndex`.
"""

from howmanyleft.ingestion.pipeline import build_index, build_snapshot, ingest_table
from howmanyleft.ingestion.reader import read_table
from howmanyleft.ingestion.sources import TableSource, build_sources

__all__ = [
    "TableSource",
    "build_index",
    "build_snapshot",
    "build_sources",
    "ingest_table",
    "read_table",
]
