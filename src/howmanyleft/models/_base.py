"""Base row model and enum for DfT vehicle licensing tables.

Every table row model inherits from :class:`DftRowModel` which
provides:

* Field aliases matching the CSV header (``Make``, ``GenModel``, ...).
* A ``model_validator(mode="before")`` that gathers every column the
  schema does not declare into ``extra``.  Those are the period and
  year columns, whose names change with every release.
* :meth:`DftRowModel.identity` so the index can treat all row shapes
  alike.

Enums inherit from :class:`DftEnum` which matches labels
case-insensitively.  The published tables are not consistent about
capitalisation (``"Petrol"`` vs ``"PETROL"``).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from howmanyleft._constants import FLAG_LABELS
from howmanyleft.identity import VehicleIdentity

TEnum = TypeVar("TEnum", bound=StrEnum)


class DftEnum(StrEnum):
    """Base for DfT label enums.

    Unknown labels still raise ``ValueError``; an unrecognised fuel or
    body type means the table layout changed and the row is rejected.
    """

    @classmethod
    def _missing_(cls, value: object) -> DftEnum | None:
        if not isinstance(value, str):
            return None
        folded = value.strip().casefold()
        for member in cls:
            if member.value.casefold() == folded:
                return member
        return None


class Flag(DftEnum):
    """Marker published in place of a number."""

    NOT_AVAILABLE = "[x]"
    NOT_APPLICABLE = "[z]"


class BodyType(DftEnum):
    CARS = "Cars"
    MOTORCYCLES = "Motorcycles"
    BUSES = "Buses and coaches"
    LIGHT_GOODS = "Light goods vehicles"
    HEAVY_GOODS = "Heavy goods vehicles"
    OTHER = "Other vehicles"


def parse_count(value: Any) -> Any:
    """Turn flag labels into :class:`Flag` members before union validation."""
    if isinstance(value, str):
        text = value.strip()
        if text in FLAG_LABELS:
            return Flag(text)
        return text
    return value


Count = Annotated[int | Flag, BeforeValidator(parse_count)]
"""A table cell: either a plain integer or a :class:`Flag`."""


def enum_lookup(enum_cls: type[TEnum]) -> BeforeValidator:
    """Validator that routes string labels through ``enum_cls(...)``."""

    def _validate(value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, enum_cls):
            return enum_cls(value)
        return value

    return BeforeValidator(_validate)


def count_value(value: int | Flag | None) -> int | None:
    """Return the integer in *value*, or ``None`` for flags and missing cells."""
    if value is None or isinstance(value, Flag):
        return None
    return value


class DftRowModel(BaseModel):
    """Base for a single row of a DfT licensing table."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    body_type: Annotated[BodyType, enum_lookup(BodyType)] = Field(alias="BodyType")
    make: str = Field(alias="Make")
    generic_model: str = Field(alias="GenModel")
    model: str = Field(alias="Model")

    extra: dict[str, Count] = Field(default_factory=dict)
    """Every column not declared by the schema, in file order."""

    @classmethod
    def declared_columns(cls) -> frozenset[str]:
        names: set[str] = set()
        for name, info in cls.model_fields.items():
            if name == "extra":
                continue
            names.add(name)
            if info.alias:
                names.add(info.alias)
        return frozenset(names)

    @model_validator(mode="before")
    @classmethod
    def _collect_extra_columns(cls, values: Any) -> Any:
        """Move undeclared CSV columns into ``extra``."""
        if not isinstance(values, dict) or "extra" in values:
            return values
        declared = cls.declared_columns()
        fields: dict[Any, Any] = {}
        extra: dict[Any, Any] = {}
        for key, value in values.items():
            if key in declared:
                fields[key] = value
            else:
                extra[key] = value
        fields["extra"] = extra
        return fields

    def identity(self) -> VehicleIdentity:
        return VehicleIdentity(self.make, self.generic_model, self.model)
