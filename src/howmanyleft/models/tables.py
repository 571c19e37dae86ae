"""Row schemas for the DfT vehicle licensing statistics tables.

* ``VEH0120`` licensed / SORN vehicles at the end of each quarter.
* ``VEH0124`` licensed / SORN vehicles by year of manufacture and
  year of first use.
* ``VEH0160`` vehicles registered for the first time, per quarter.
* ``VEH0220`` licensed / SORN vehicles by fuel and engine size.

Columns named after a period (``2023Q4``, ``2024``) are not declared
here; they end up in :attr:`DftRowModel.extra`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import Field

from howmanyleft.models._base import Count, DftEnum, DftRowModel, enum_lookup

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class FuelClass(StrEnum):
    """Coarse fuel grouping used by the engine-size series."""

    PETROL = "petrol"
    DIESEL = "diesel"
    OTHER = "other"


class FuelType(DftEnum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    GAS = "Gas"
    BATTERY_ELECTRIC = "Battery electric"
    PETROL_HYBRID = "Hybrid electric (petrol)"
    DIESEL_HYBRID = "Hybrid electric (diesel)"
    PETROL_PLUGIN_HYBRID = "Plug-in hybrid electric (petrol)"
    DIESEL_PLUGIN_HYBRID = "Plug-in hybrid electric (diesel)"
    FUEL_CELL = "Fuel cell electric"
    RANGE_EXTENDER = "Range extended electric"
    OTHER = "Other fuel types"

    @classmethod
    def _missing_(cls, value: object) -> FuelType | None:
        # Older releases label the catch-all column plain "Other".
        if isinstance(value, str) and value.strip().casefold() == "other":
            return cls.OTHER
        member = super()._missing_(value)
        return member if isinstance(member, FuelType) else None

    @property
    def fuel_class(self) -> FuelClass:
        if self is FuelType.PETROL:
            return FuelClass.PETROL
        if self is FuelType.DIESEL:
            return FuelClass.DIESEL
        return FuelClass.OTHER


class LicenceStatus(DftEnum):
    LICENSED = "Licensed"
    SORN = "SORN"


FuelField = Annotated[FuelType, enum_lookup(FuelType)]
LicenceStatusField = Annotated[LicenceStatus, enum_lookup(LicenceStatus)]

# ------------------------------------------------------------------
# Rows
# ------------------------------------------------------------------


class Veh0120(DftRowModel):
    """Licensed / SORN stock by quarter (``df_VEH0120_GB``, ``df_VEH0120_UK``)."""

    fuel: FuelField = Field(alias="Fuel")
    licence_status: LicenceStatusField = Field(alias="LicenceStatus")


class Veh0124(DftRowModel):
    """Stock by year of manufacture and first use (``df_VEH0124_AM``, ``df_VEH0124_NZ``).

    The year columns in ``extra`` are reporting years; ``first_used`` and
    ``manufactured`` are the vehicle's own years and may be flagged.
    """

    first_used: Count = Field(alias="YearFirstUsed")
    manufactured: Count = Field(alias="YearManufacture")
    licence_status: LicenceStatusField = Field(alias="LicenceStatus")


class Veh0160(DftRowModel):
    """First registrations by quarter (``df_VEH0160_GB``, ``df_VEH0160_UK``)."""

    fuel: FuelField = Field(alias="Fuel")


class Veh0220(DftRowModel):
    """Stock by fuel and engine size (``df_VEH0220``)."""

    fuel: FuelField = Field(alias="Fuel")
    engine_size_simple: Count = Field(alias="EngineSizeSimple")
    engine_size_desc: str = Field(alias="EngineSizeDesc")
    licence_status: LicenceStatusField = Field(alias="LicenceStatus")


TableRow = Veh0120 | Veh0124 | Veh0160 | Veh0220
