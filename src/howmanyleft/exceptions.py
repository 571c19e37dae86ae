"""Custom exception hierarchy for howmanyleft."""

from __future__ import annotations

from collections.abc import Sequence


class HowManyLeftError(Exception):
    """Base exception for all howmanyleft errors."""


class ConfigError(HowManyLeftError):
    """Invalid or missing configuration."""


class InputError(HowManyLeftError):
    """A source file could not be read or one of its rows is malformed."""

    def __init__(
        self,
        message: str,
        *,
        filename: str = "",
        row: int | None = None,
    ) -> None:
        self.filename = filename
        self.row = row
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.filename and self.row is not None:
            return f"{self.filename} row {self.row}: {message}"
        if self.filename:
            return f"{self.filename}: {message}"
        return message


class IdentityError(HowManyLeftError):
    """A make or model name cannot be turned into a slug."""


class InvalidCharacterError(IdentityError):
    """Name fragment contains a non-ASCII character.

    A silently mangled slug would fold unrelated vehicles into the same
    entity, so the whole build is aborted instead.
    """

    def __init__(self, parts: Sequence[str]) -> None:
        self.parts = tuple(parts)
        super().__init__(f"Invalid characters in name: {list(self.parts)!r}")


class PersistenceError(HowManyLeftError):
    """The snapshot database could not be created or written."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
