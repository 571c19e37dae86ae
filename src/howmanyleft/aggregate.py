"""Per-table merge rules folding one source row into a :class:`Stats`.

Every function here has the shape ``merge(stats, row, **options)`` and
only ever adds to the counts in *stats*.  The index applies the same
function to the make, generic model and model a row belongs to.

Non-positive and flagged cells are skipped entirely rather than being
written as zero.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from howmanyleft._constants import CURRENT_FULL_YEAR, FLAG_LABELS, GB_CUTOFF_PERIOD, UNKNOWN_BUCKET
from howmanyleft.exceptions import InputError
from howmanyleft.models._base import Flag, count_value
from howmanyleft.models.entities import Stats
from howmanyleft.models.tables import FuelClass, LicenceStatus, Veh0120, Veh0124, Veh0160, Veh0220

_QUARTER_RE = re.compile(r"^(\d{4})Q([1-4])$")

MergeFunction = Callable[[Stats, Any], None]


def _increment(series: dict[str, int], key: str, count: int) -> None:
    series[key] = series.get(key, 0) + count


def quarter_bucket(period: str) -> str:
    """Rewrite a ``"2013Q4"`` column name to the ``"2013 q4"`` bucket key."""
    match = _QUARTER_RE.match(period)
    if match is None:
        raise InputError(f"Unrecognised quarter column {period!r}")
    return f"{match.group(1)} q{match.group(2)}"


def _quarterly_counts(extra: Mapping[str, int | Flag], *, cutoff: str | None) -> Iterator[tuple[str, int]]:
    """Yield ``(bucket, count)`` for every usable quarter column.

    Quarter codes are fixed width, so string order is chronological.
    """
    for period, value in extra.items():
        bucket = quarter_bucket(period)
        count = count_value(value)
        if count is None or count <= 0:
            continue
        if cutoff is not None and period >= cutoff:
            continue
        yield bucket, count


def _current_year_count(extra: Mapping[str, int | Flag], current_year: str) -> int | None:
    count = count_value(extra.get(current_year))
    if count is None or count <= 0:
        return None
    return count


def _year_bucket(value: int | Flag) -> str:
    count = count_value(value)
    return UNKNOWN_BUCKET if count is None else str(count)


def engine_size_bucket(description: str) -> str:
    return UNKNOWN_BUCKET if description in FLAG_LABELS else description


# ------------------------------------------------------------------
# VEH0120: licensed / SORN stock per quarter
# ------------------------------------------------------------------


def _merge_quarterly_stock(stats: Stats, row: Veh0120, *, cutoff: str | None) -> None:
    if row.licence_status is LicenceStatus.LICENSED:
        series = stats.quarterly_licensed
    else:
        series = stats.quarterly_sorn
    for bucket, count in _quarterly_counts(row.extra, cutoff=cutoff):
        _increment(series, bucket, count)


def merge_veh0120_gb(stats: Stats, row: Veh0120, *, cutoff: str = GB_CUTOFF_PERIOD) -> None:
    """GB-only table: quarters from *cutoff* onwards come from the UK table."""
    _merge_quarterly_stock(stats, row, cutoff=cutoff)


def merge_veh0120_uk(stats: Stats, row: Veh0120) -> None:
    _merge_quarterly_stock(stats, row, cutoff=None)


# ------------------------------------------------------------------
# VEH0160: first registrations per quarter
# ------------------------------------------------------------------


def merge_veh0160_gb(stats: Stats, row: Veh0160, *, cutoff: str = GB_CUTOFF_PERIOD) -> None:
    for bucket, count in _quarterly_counts(row.extra, cutoff=cutoff):
        _increment(stats.new_reg, bucket, count)


def merge_veh0160_uk(stats: Stats, row: Veh0160) -> None:
    for bucket, count in _quarterly_counts(row.extra, cutoff=None):
        _increment(stats.new_reg, bucket, count)


# ------------------------------------------------------------------
# VEH0124 / VEH0220: current reporting year only
# ------------------------------------------------------------------


def merge_veh0124(stats: Stats, row: Veh0124, *, current_year: str = CURRENT_FULL_YEAR) -> None:
    """Fold the current year's stock into the manufacture / first-use series."""
    # TODO: breakdowns for earlier reporting years; only the current year column is read.
    count = _current_year_count(row.extra, current_year)
    if count is None:
        return
    manufactured = _year_bucket(row.manufactured)
    first_used = _year_bucket(row.first_used)
    if row.licence_status is LicenceStatus.LICENSED:
        _increment(stats.manufacture_licensed, manufactured, count)
        _increment(stats.first_reg_licensed, first_used, count)
    else:
        _increment(stats.manufacture_sorn, manufactured, count)
        _increment(stats.first_reg_sorn, first_used, count)


def _engine_size_series(stats: Stats, fuel_class: FuelClass, licence_status: LicenceStatus) -> dict[str, int]:
    licensed = licence_status is LicenceStatus.LICENSED
    if fuel_class is FuelClass.PETROL:
        return stats.petrol_licensed if licensed else stats.petrol_sorn
    if fuel_class is FuelClass.DIESEL:
        return stats.diesel_licensed if licensed else stats.diesel_sorn
    return stats.other_licensed if licensed else stats.other_sorn


def merge_veh0220(stats: Stats, row: Veh0220, *, current_year: str = CURRENT_FULL_YEAR) -> None:
    """Fold the current year's stock into the fuel / engine-size series."""
    count = _current_year_count(row.extra, current_year)
    if count is None:
        return
    series = _engine_size_series(stats, row.fuel.fuel_class, row.licence_status)
    _increment(series, engine_size_bucket(row.engine_size_desc), count)
