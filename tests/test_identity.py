from __future__ import annotations

import pytest

from howmanyleft.exceptions import IdentityError, InvalidCharacterError
from howmanyleft.identity import VehicleIdentity, generic_model_slug, make_slug, model_slug, slugify


def test_slugify_lowercases_and_replaces_spaces_and_slashes() -> None:
    assert slugify(["BMW"]) == "bmw"
    assert slugify(["Land Rover", "Range Rover/Sport"]) == "land_rover_range_rover_sport"


def test_slugify_is_deterministic() -> None:
    parts = ["Mercedes-Benz", "A 200 D"]
    assert slugify(parts) == slugify(list(parts)) == "mercedes-benz_a_200_d"


def test_slugify_collapses_case_variants_to_one_identity() -> None:
    assert slugify(["Ford", "Focus"]) == slugify(["FORD", "FOCUS"])


def test_slugify_rejects_non_ascii() -> None:
    with pytest.raises(InvalidCharacterError) as exc_info:
        slugify(["Citroën", "C4"])

    assert isinstance(exc_info.value, IdentityError)
    assert exc_info.value.parts == ("Citroën", "C4")
    assert "Citro" in str(exc_info.value)


def test_slugify_rejects_non_ascii_in_any_fragment() -> None:
    with pytest.raises(InvalidCharacterError):
        slugify(["Skoda", "Octavia", "Série"])


def test_identity_slugs_include_make_name() -> None:
    vw = VehicleIdentity(make="Volkswagen", generic_model="Golf", model="Golf GTI")
    classics = VehicleIdentity(make="VW-Classics", generic_model="Golf", model="Golf GTI")

    assert make_slug(vw) == "volkswagen"
    assert generic_model_slug(vw) == "volkswagen_golf"
    assert model_slug(vw) == "volkswagen_golf_gti"
    assert generic_model_slug(vw) != generic_model_slug(classics)
    assert model_slug(vw) != model_slug(classics)
