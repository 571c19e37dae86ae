"""Make / generic model / model hierarchy with aggregated stats.

This is the only component allowed to create entities or change their
stats.  Rows for the same identity always resolve to the same entity
objects, so repeated rows accumulate instead of overwriting.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TypeVar

from howmanyleft.identity import HasIdentity, generic_model_slug, make_slug, model_slug
from howmanyleft.models.entities import GenericModel, Make, Model, Stats
from howmanyleft.search import SearchIndex

_logger = logging.getLogger(__name__)

R = TypeVar("R", bound=HasIdentity)


class VehicleIndex:
    """In-memory index built from every source row of a run.

    Entities are keyed by slug and never removed or re-keyed.  Models get
    a dense id (``0, 1, 2, ...``) in the order they are first seen.
    """

    def __init__(self) -> None:
        self._makes: dict[str, Make] = {}
        self._generic_models: dict[str, GenericModel] = {}
        self._models: dict[str, Model] = {}
        self._search = SearchIndex()

    @property
    def makes(self) -> Mapping[str, Make]:
        return self._makes

    @property
    def generic_models(self) -> Mapping[str, GenericModel]:
        return self._generic_models

    @property
    def models(self) -> Mapping[str, Model]:
        return self._models

    @property
    def search(self) -> SearchIndex:
        return self._search

    def counts(self) -> dict[str, int]:
        return {
            "makes": len(self._makes),
            "generic_models": len(self._generic_models),
            "models": len(self._models),
            "keywords": len(self._search.keywords),
            "metaphones": len(self._search.metaphones),
        }

    def _make(self, slug: str, name: str) -> Make:
        make = self._makes.get(slug)
        if make is None:
            make = Make(name=name, slug=slug)
            self._makes[slug] = make
            _logger.debug("New make %s", slug)
        return make

    def _generic_model(self, make: Make, slug: str, name: str) -> GenericModel:
        generic_model = self._generic_models.get(slug)
        if generic_model is None:
            generic_model = GenericModel(name=name, slug=slug, make=make.link())
            self._generic_models[slug] = generic_model
        return generic_model

    def _model(self, make: Make, generic_model: GenericModel, slug: str, name: str) -> Model:
        model = self._models.get(slug)
        if model is None:
            model = Model(
                name=name,
                slug=slug,
                make=make.link(),
                generic_model=generic_model.link(),
                index=len(self._models),
            )
            self._models[slug] = model
            _logger.debug("New model %s id=%d", slug, model.index)
        return model

    def insert(self, row: R, merge: Callable[[Stats, R], None]) -> Model:
        """Fold *row* into the make, generic model and model it belongs to.

        All three slugs are derived before anything is created, so an
        :class:`~howmanyleft.exceptions.IdentityError` leaves the index
        untouched.
        """
        identity = row.identity()
        make_key = make_slug(identity)
        generic_model_key = generic_model_slug(identity)
        model_key = model_slug(identity)

        make = self._make(make_key, identity.make)
        generic_model = self._generic_model(make, generic_model_key, identity.generic_model)
        make.generic_models.add(generic_model.link())
        model = self._model(make, generic_model, model_key, identity.model)
        generic_model.models.add(model.link())

        merge(make.stats, row)
        merge(generic_model.stats, row)
        merge(model.stats, row)

        self._search.add(model.index, model.full_name)
        return model
