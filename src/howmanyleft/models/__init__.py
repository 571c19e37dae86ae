"""Row schemas for the DfT tables and the entities built from them."""

from howmanyleft.models._base import BodyType, Count, DftEnum, DftRowModel, Flag, count_value
from howmanyleft.models.entities import GenericModel, Link, Make, Model, Stats
from howmanyleft.models.tables import FuelClass, FuelType, LicenceStatus, TableRow, Veh0120, Veh0124, Veh0160, Veh0220

__all__ = [
    "BodyType",
    "Count",
    "DftEnum",
    "DftRowModel",
    "Flag",
    "FuelClass",
    "FuelType",
    "GenericModel",
    "LicenceStatus",
    "Link",
    "Make",
    "Model",
    "Stats",
    "TableRow",
    "Veh0120",
    "Veh0124",
    "Veh0160",
    "Veh0220",
    "count_value",
]
