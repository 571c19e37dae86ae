"""Vehicle identity and slug derivation.

Slugs are the primary keys of every entity in the index and end up in
downstream URLs, so they must be reproducible from the same names across
runs.  :func:`slugify` is the only place names are normalized.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, Protocol

from howmanyleft.exceptions import InvalidCharacterError

_SLUG_TRANSLATION = str.maketrans({" ": "_", "/": "_"})


class VehicleIdentity(NamedTuple):
    """Make / generic model / model names of a single source row."""

    make: str
    generic_model: str
    model: str


class HasIdentity(Protocol):
    """Anything that can be inserted into a :class:`~howmanyleft.index.VehicleIndex`."""

    def identity(self) -> VehicleIdentity: ...


def slugify(parts: Sequence[str]) -> str:
    """Join name fragments into a lowercase, underscore separated slug.

    Raises :class:`InvalidCharacterError` if any fragment contains a
    non-ASCII character.
    """
    if not all(part.isascii() for part in parts):
        raise InvalidCharacterError(parts)
    return "_".join(part.lower().translate(_SLUG_TRANSLATION) for part in parts)


def make_slug(identity: VehicleIdentity) -> str:
    return slugify([identity.make])


def generic_model_slug(identity: VehicleIdentity) -> str:
    return slugify([identity.make, identity.generic_model])


def model_slug(identity: VehicleIdentity) -> str:
    return slugify([identity.make, identity.model])
