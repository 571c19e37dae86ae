from __future__ import annotations

from howmanyleft.search import SearchIndex, phonetic_codes, tokenize


def test_tokenize_splits_letters_and_digits() -> None:
    assert tokenize("BMW 3 Series") == {"bmw", "3", "series"}
    assert tokenize("Mercedes-Benz A200") == {"mercedes", "benz", "a", "200"}
    assert tokenize("Focus Focus") == {"focus"}


def test_tokenize_drops_punctuation_only_names() -> None:
    assert tokenize("--- / ()") == set()


def test_phonetic_codes_are_a_pair_of_strings() -> None:
    codes = phonetic_codes("series")
    assert codes is not None
    primary, alternate = codes
    assert primary
    assert alternate
    assert phonetic_codes("series") == codes


class TestSearchIndex:
    def test_only_long_tokens_get_phonetic_codes(self) -> None:
        search = SearchIndex()
        search.add(0, "BMW 3 Series")

        tokens = set().union(*search.metaphones.values())
        assert tokens == {"series"}
        assert search.keywords == {"bmw": {0}, "3": {0}, "series": {0}}

    def test_keywords_collect_every_model_id(self) -> None:
        search = SearchIndex()
        search.add(0, "Ford Focus")
        search.add(1, "Ford Fiesta")
        search.add(1, "Ford Fiesta")

        assert search.lookup("ford") == {0, 1}
        assert search.lookup("FORD") == {0, 1}
        assert search.lookup("fiesta") == {1}
        assert search.lookup("mondeo") == set()

    def test_sounds_like_finds_misspelt_tokens(self) -> None:
        search = SearchIndex()
        search.add(0, "Ford Focus")

        assert search.sounds_like("fokus") == {"focus"}
        assert search.sounds_like("Focus") == {"focus"}

    def test_sounds_like_unknown_word(self) -> None:
        search = SearchIndex()
        search.add(0, "Ford Focus")

        assert search.sounds_like("zzzzzz") == set()
