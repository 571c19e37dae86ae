"""Index entities: makes, generic models, models and their stats.

These are mutable Pydantic models owned by
:class:`~howmanyleft.index.VehicleIndex`.  Their JSON form is the
``json`` column of the snapshot, so serialization is kept
deterministic:

* every stats series is written with its keys sorted,
* link sets are written as lists sorted by ``(slug, name)``,
* stats series are flattened into the entity object.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, field_serializer, model_serializer


class Link(BaseModel):
    """Reference to another entity by slug and display name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    slug: str
    name: str

    def sort_key(self) -> tuple[str, str]:
        return (self.slug, self.name)


def _sorted_links(links: set[Link]) -> list[dict[str, str]]:
    return [link.model_dump() for link in sorted(links, key=Link.sort_key)]


class Stats(BaseModel):
    """Independent count series keyed by period or category label."""

    model_config = ConfigDict(extra="forbid")

    quarterly_licensed: dict[str, int] = Field(default_factory=dict)
    quarterly_sorn: dict[str, int] = Field(default_factory=dict)

    first_reg_licensed: dict[str, int] = Field(default_factory=dict)
    first_reg_sorn: dict[str, int] = Field(default_factory=dict)

    manufacture_licensed: dict[str, int] = Field(default_factory=dict)
    manufacture_sorn: dict[str, int] = Field(default_factory=dict)

    new_reg: dict[str, int] = Field(default_factory=dict)

    petrol_licensed: dict[str, int] = Field(default_factory=dict)
    petrol_sorn: dict[str, int] = Field(default_factory=dict)

    diesel_licensed: dict[str, int] = Field(default_factory=dict)
    diesel_sorn: dict[str, int] = Field(default_factory=dict)

    other_licensed: dict[str, int] = Field(default_factory=dict)
    other_sorn: dict[str, int] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in type(self).model_fields)

    @model_serializer(mode="wrap")
    def _sort_series(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {name: dict(sorted(series.items())) for name, series in data.items()}


class _Entity(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    slug: str
    stats: Stats = Field(default_factory=Stats)

    def link(self) -> Link:
        return Link(slug=self.slug, name=self.name)

    def to_json(self) -> str:
        return self.model_dump_json()

    @model_serializer(mode="wrap")
    def _flatten_stats(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        stats = data.pop("stats", None) or {}
        data.update(stats)
        return data


class Make(_Entity):
    """A vehicle manufacturer."""

    generic_models: set[Link] = Field(default_factory=set)

    @field_serializer("generic_models")
    def _serialize_generic_models(self, links: set[Link]) -> list[dict[str, str]]:
        return _sorted_links(links)


class GenericModel(_Entity):
    """A model family under a make, e.g. ``3 Series`` under ``BMW``."""

    make: Link
    models: set[Link] = Field(default_factory=set)

    @field_serializer("models")
    def _serialize_models(self, links: set[Link]) -> list[dict[str, str]]:
        return _sorted_links(links)


class Model(_Entity):
    """A specific model variant.

    ``index`` is the dense creation-order id used by the keyword index.
    """

    make: Link
    generic_model: Link
    index: int

    @property
    def full_name(self) -> str:
        return f"{self.make.name} {self.name}"
