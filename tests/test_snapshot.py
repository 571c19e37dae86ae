"""Tests for the SQLite snapshot writer."""

from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from pathlib import Path

import pytest

from howmanyleft.aggregate import merge_veh0120_uk
from howmanyleft.exceptions import PersistenceError
from howmanyleft.index import VehicleIndex
from howmanyleft.models import BodyType, FuelType, LicenceStatus, Veh0120
from howmanyleft.snapshot import decode_indices, encode_indices, join_tokens, save_index, split_tokens


def _index(*names: tuple[str, str, str]) -> VehicleIndex:
    index = VehicleIndex()
    for make, generic_model, model in names:
        index.insert(
            Veh0120(
                body_type=BodyType.CARS,
                make=make,
                generic_model=generic_model,
                model=model,
                fuel=FuelType.DIESEL,
                licence_status=LicenceStatus.LICENSED,
                extra={"2020Q1": 3},
            ),
            merge_veh0120_uk,
        )
    return index


def _query(path: Path, sql: str) -> list[tuple]:
    with closing(sqlite3.connect(path)) as connection:
        return connection.execute(sql).fetchall()


# ------------------------------------------------------------------
# Column encodings
# ------------------------------------------------------------------


def test_encode_indices_is_sorted_little_endian_uint32() -> None:
    blob = encode_indices({300, 1, 3})
    assert blob == b"\x01\x00\x00\x00\x03\x00\x00\x00\x2c\x01\x00\x00"
    assert decode_indices(blob) == [1, 3, 300]


def test_encode_no_indices() -> None:
    assert encode_indices([]) == b""
    assert decode_indices(b"") == []


def test_decode_rejects_truncated_blob() -> None:
    with pytest.raises(ValueError):
        decode_indices(b"\x01\x00\x00")


def test_tokens_are_sorted_and_joined() -> None:
    assert join_tokens({"series", "sirius"}) == "series|sirius"
    assert split_tokens("series|sirius") == ["series", "sirius"]
    assert split_tokens("") == []


# ------------------------------------------------------------------
# save_index
# ------------------------------------------------------------------


class TestSaveIndex:
    def test_writes_every_table(self, tmp_path: Path) -> None:
        index = _index(("Ford", "Focus", "Focus"), ("BMW", "3 Series", "320d"))
        path = save_index(index, tmp_path / "snapshot.sqlite3")

        tables = {name for (name,) in _query(path, "SELECT name FROM sqlite_master WHERE type = 'table'")}
        assert tables == {"makes", "generic_models", "models", "keywords", "metaphones"}

        assert _query(path, "SELECT slug, name FROM makes ORDER BY slug") == [("bmw", "BMW"), ("ford", "Ford")]
        assert _query(path, "SELECT slug FROM generic_models ORDER BY slug") == [("bmw_3_series",), ("ford_focus",)]
        assert _query(path, "SELECT slug, id FROM models ORDER BY id") == [("ford_focus", 0), ("bmw_320d", 1)]

    def test_model_json_round_trips(self, tmp_path: Path) -> None:
        index = _index(("Ford", "Focus", "Focus"))
        path = save_index(index, tmp_path / "snapshot.sqlite3")

        [(raw,)] = _query(path, "SELECT json FROM models WHERE slug = 'ford_focus'")
        data = json.loads(raw)
        assert data["quarterly_licensed"] == {"2020 q1": 3}
        assert data["generic_model"] == {"slug": "ford_focus", "name": "Focus"}
        assert raw == index.models["ford_focus"].to_json()

    def test_keyword_blobs(self, tmp_path: Path) -> None:
        index = _index(("Ford", "Focus", "Focus"), ("Ford", "Fiesta", "Fiesta"))
        path = save_index(index, tmp_path / "snapshot.sqlite3")

        keywords = dict(_query(path, "SELECT keyword, bytes FROM keywords"))
        assert set(keywords) == {"ford", "focus", "fiesta"}
        assert decode_indices(keywords["ford"]) == [0, 1]
        assert decode_indices(keywords["fiesta"]) == [1]

    def test_metaphone_rows(self, tmp_path: Path) -> None:
        index = _index(("Ford", "Focus", "Focus"))
        path = save_index(index, tmp_path / "snapshot.sqlite3")

        rows = _query(path, "SELECT metaphone, data FROM metaphones")
        assert rows
        assert {data for _, data in rows} == {"focus"}
        assert {code for code, _ in rows} == set(index.search.metaphones)

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "snapshot.sqlite3"
        target.write_bytes(b"not a database")

        save_index(_index(("Ford", "Focus", "Focus")), target)

        assert _query(target, "SELECT count(*) FROM models") == [(1,)]

    def test_rebuild_drops_stale_rows(self, tmp_path: Path) -> None:
        target = tmp_path / "snapshot.sqlite3"
        save_index(_index(("Ford", "Focus", "Focus"), ("BMW", "3 Series", "320d")), target)
        save_index(_index(("Ford", "Focus", "Focus")), target)

        assert _query(target, "SELECT slug FROM makes") == [("ford",)]

    def test_durable_writes(self, tmp_path: Path) -> None:
        path = save_index(_index(("Ford", "Focus", "Focus")), tmp_path / "snapshot.sqlite3", fast_writes=False)
        assert _query(path, "SELECT count(*) FROM keywords") == [(2,)]

    def test_empty_index(self, tmp_path: Path) -> None:
        path = save_index(VehicleIndex(), tmp_path / "snapshot.sqlite3")
        assert _query(path, "SELECT count(*) FROM models") == [(0,)]

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        target = tmp_path / "missing" / "snapshot.sqlite3"
        with pytest.raises(PersistenceError) as exc_info:
            save_index(_index(("Ford", "Focus", "Focus")), target)

        assert exc_info.value.path == str(target)
        assert not target.exists()
