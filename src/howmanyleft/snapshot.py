"""SQLite snapshot of a :class:`~howmanyleft.index.VehicleIndex`.

The snapshot is read by the lookup service and is rebuilt from scratch on
every run, so any existing file is removed first and writes favour speed
over durability.

Tables::

    makes           slug PK, name, json
    generic_models  slug PK, json
    models          slug PK, id UNIQUE, json
    keywords        keyword PK, bytes   (model ids, uint32 little-endian, ascending)
    metaphones      metaphone PK, data  (tokens, sorted, "|"-joined)
"""

from __future__ import annotations

import logging
import sqlite3
import struct
from collections.abc import Iterable, Iterator
from contextlib import closing
from os import PathLike
from pathlib import Path

from howmanyleft._constants import METAPHONE_SEPARATOR
from howmanyleft.exceptions import PersistenceError
from howmanyleft.index import VehicleIndex

_logger = logging.getLogger(__name__)

_FAST_PRAGMAS: tuple[str, ...] = (
    "PRAGMA journal_mode = OFF",
    "PRAGMA synchronous = 0",
    "PRAGMA cache_size = 1000000",
    "PRAGMA locking_mode = EXCLUSIVE",
    "PRAGMA temp_store = MEMORY",
)

_SCHEMA = """
CREATE TABLE makes (slug VARCHAR(255) PRIMARY KEY, name VARCHAR(255), json TEXT);
CREATE TABLE generic_models (slug VARCHAR(255) PRIMARY KEY, json TEXT);
CREATE TABLE models (slug VARCHAR(255) PRIMARY KEY, id UNSIGNED INTEGER UNIQUE, json TEXT);
CREATE TABLE keywords (keyword VARCHAR(255) PRIMARY KEY, bytes BLOB);
CREATE TABLE metaphones (metaphone VARCHAR(255) PRIMARY KEY, data TEXT);
"""

_INDEX_STRUCT = struct.Struct("<I")


# ------------------------------------------------------------------
# Column encodings
# ------------------------------------------------------------------


def encode_indices(indices: Iterable[int]) -> bytes:
    """Pack model ids as ascending little-endian uint32s, no delimiters."""
    ordered = sorted(indices)
    return struct.pack(f"<{len(ordered)}I", *ordered)


def decode_indices(blob: bytes) -> list[int]:
    if len(blob) % _INDEX_STRUCT.size:
        raise ValueError(f"keyword blob length {len(blob)} is not a multiple of {_INDEX_STRUCT.size}")
    return [value for (value,) in _INDEX_STRUCT.iter_unpack(blob)]


def join_tokens(tokens: Iterable[str]) -> str:
    return METAPHONE_SEPARATOR.join(sorted(tokens))


def split_tokens(data: str) -> list[str]:
    return data.split(METAPHONE_SEPARATOR) if data else []


# ------------------------------------------------------------------
# Rows
# ------------------------------------------------------------------


def _make_rows(index: VehicleIndex) -> Iterator[tuple[str, str, str]]:
    for slug, make in sorted(index.makes.items()):
        yield slug, make.name, make.to_json()


def _generic_model_rows(index: VehicleIndex) -> Iterator[tuple[str, str]]:
    for slug, generic_model in sorted(index.generic_models.items()):
        yield slug, generic_model.to_json()


def _model_rows(index: VehicleIndex) -> Iterator[tuple[str, int, str]]:
    for slug, model in sorted(index.models.items()):
        yield slug, model.index, model.to_json()


def _keyword_rows(index: VehicleIndex) -> Iterator[tuple[str, bytes]]:
    for keyword, indices in sorted(index.search.keywords.items()):
        yield keyword, encode_indices(indices)


def _metaphone_rows(index: VehicleIndex) -> Iterator[tuple[str, str]]:
    for code, tokens in sorted(index.search.metaphones.items()):
        yield code, join_tokens(tokens)


def _write(connection: sqlite3.Connection, index: VehicleIndex, *, fast_writes: bool) -> None:
    if fast_writes:
        for pragma in _FAST_PRAGMAS:
            connection.execute(pragma)
    connection.executescript(_SCHEMA)
    with connection:
        connection.executemany("INSERT INTO makes VALUES (?, ?, ?)", _make_rows(index))
        connection.executemany("INSERT INTO generic_models VALUES (?, ?)", _generic_model_rows(index))
        connection.executemany("INSERT INTO models VALUES (?, ?, ?)", _model_rows(index))
        connection.executemany("INSERT INTO keywords VALUES (?, ?)", _keyword_rows(index))
        connection.executemany("INSERT INTO metaphones VALUES (?, ?)", _metaphone_rows(index))


def _discard(target: Path) -> None:
    try:
        target.unlink(missing_ok=True)
    except OSError:
        _logger.warning("Could not remove incomplete snapshot %s", target, exc_info=True)


def save_index(index: VehicleIndex, path: str | PathLike[str], *, fast_writes: bool = True) -> Path:
    """Write *index* to a fresh SQLite file at *path*.

    Raises :class:`PersistenceError` if the file cannot be replaced or
    written.  A failed write leaves no file behind.
    """
    target = Path(path)
    try:
        target.unlink(missing_ok=True)
    except OSError as exc:
        raise PersistenceError(f"Could not remove stale snapshot {target}: {exc}", path=str(target)) from exc

    try:
        with closing(sqlite3.connect(target)) as connection:
            _write(connection, index, fast_writes=fast_writes)
    except sqlite3.Error as exc:
        _discard(target)
        raise PersistenceError(f"Could not write snapshot {target}: {exc}", path=str(target)) from exc

    _logger.info("Wrote snapshot %s", target)
    return target
