"""The source tables of a build and the merge rule for each.

Order matters only for model ids: models get their dense id from the
first table that mentions them.
"""

from __future__ import annotations

import dataclasses
import functools

from howmanyleft.aggregate import (
    MergeFunction,
    merge_veh0120_gb,
    merge_veh0120_uk,
    merge_veh0124,
    merge_veh0160_gb,
    merge_veh0160_uk,
    merge_veh0220,
)
from howmanyleft.config import BuildConfig
from howmanyleft.models._base import DftRowModel
from howmanyleft.models.tables import Veh0120, Veh0124, Veh0160, Veh0220


@dataclasses.dataclass(frozen=True)
class TableSource:
    """One CSV file, the row schema it holds and how its rows are merged."""

    filename: str
    row_model: type[DftRowModel]
    merge: MergeFunction


def build_sources(config: BuildConfig) -> tuple[TableSource, ...]:
    """Return every source of a build, in processing order."""
    merge_stock_by_year = functools.partial(merge_veh0124, current_year=config.current_year)
    return (
        TableSource("df_VEH0120_GB.csv", Veh0120, functools.partial(merge_veh0120_gb, cutoff=config.gb_cutoff_period)),
        TableSource("df_VEH0120_UK.csv", Veh0120, merge_veh0120_uk),
        TableSource("df_VEH0124_AM.csv", Veh0124, merge_stock_by_year),
        TableSource("df_VEH0124_NZ.csv", Veh0124, merge_stock_by_year),
        TableSource("df_VEH0160_GB.csv", Veh0160, functools.partial(merge_veh0160_gb, cutoff=config.gb_cutoff_period)),
        TableSource("df_VEH0160_UK.csv", Veh0160, merge_veh0160_uk),
        TableSource("df_VEH0220.csv", Veh0220, functools.partial(merge_veh0220, current_year=config.current_year)),
    )
