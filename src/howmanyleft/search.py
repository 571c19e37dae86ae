"""Keyword and phonetic lookup tables built from model names.

``keywords`` maps every token of a model's full name to the ids of the
models containing it.  ``metaphones`` maps double metaphone codes to the
tokens that produce them, so a misspelt query can be widened to real
tokens before the keyword lookup.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Mapping

from metaphone import doublemetaphone

from howmanyleft._constants import MIN_PHONETIC_LENGTH

# Letters and digits never share a token: "3 Series" -> {"3", "series"}.
_KEYWORD_RE = re.compile(r"[a-z]+|[0-9]+")


def tokenize(full_name: str) -> set[str]:
    """Split a name into lowercase alphabetic and numeric tokens."""
    return set(_KEYWORD_RE.findall(full_name.lower()))


@functools.lru_cache(maxsize=65536)
def phonetic_codes(token: str) -> tuple[str, str] | None:
    """Return ``(primary, alternate)`` double metaphone codes for *token*.

    The alternate falls back to the primary when the word has only one
    pronunciation.  Returns ``None`` when no code can be produced.
    """
    primary, alternate = doublemetaphone(token)
    if not primary:
        return None
    return primary, alternate or primary


class SearchIndex:
    """Inverted keyword index plus phonetic code lookup."""

    def __init__(self) -> None:
        self._keywords: dict[str, set[int]] = {}
        self._metaphones: dict[str, set[str]] = {}

    @property
    def keywords(self) -> Mapping[str, set[int]]:
        return self._keywords

    @property
    def metaphones(self) -> Mapping[str, set[str]]:
        return self._metaphones

    def add(self, model_index: int, full_name: str) -> None:
        """Register every token of *full_name* for the given model id."""
        for token in tokenize(full_name):
            self._keywords.setdefault(token, set()).add(model_index)
            if len(token) <= MIN_PHONETIC_LENGTH:
                continue
            codes = phonetic_codes(token)
            if codes is None:
                continue
            for code in codes:
                self._metaphones.setdefault(code, set()).add(token)

    def lookup(self, keyword: str) -> set[int]:
        return set(self._keywords.get(keyword.lower(), ()))

    def sounds_like(self, word: str) -> set[str]:
        """Known tokens sharing a phonetic code with *word*."""
        codes = phonetic_codes(word.lower())
        if codes is None:
            return set()
        matches: set[str] = set()
        for code in codes:
            matches |= self._metaphones.get(code, set())
        return matches
