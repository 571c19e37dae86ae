"""CSV reader yielding validated table rows."""

from __future__ import annotations

import csv
from collections.abc import Iterator
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from howmanyleft.exceptions import InputError
from howmanyleft.models._base import DftRowModel

TRow = TypeVar("TRow", bound=DftRowModel)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}" if location else error.get("msg", ""))
    return "; ".join(parts) or str(exc)


def read_table(path: Path, row_model: type[TRow]) -> Iterator[tuple[int, TRow]]:
    """Yield ``(row_number, row)`` for every data row of the CSV at *path*.

    Row numbers are 1-based and exclude the header.  Any unreadable file
    or invalid row raises :class:`InputError`; nothing is skipped.
    """
    filename = str(path)
    try:
        handle = path.open(newline="", encoding="utf-8-sig")
    except OSError as exc:
        raise InputError(f"Cannot open file: {exc.strerror or exc}", filename=filename) from exc

    with handle:
        reader = csv.DictReader(handle)
        row_number = 0
        try:
            for record in reader:
                row_number += 1
                if None in record:
                    raise InputError("Row has more cells than the header", filename=filename, row=row_number)
                try:
                    row = row_model.model_validate(record)
                except ValidationError as exc:
                    raise InputError(_describe(exc), filename=filename, row=row_number) from exc
                yield row_number, row
        except (csv.Error, UnicodeDecodeError) as exc:
            raise InputError(f"Malformed CSV: {exc}", filename=filename, row=row_number + 1) from exc
