"""Tests for rust_docstyle.rules.mood."""

from __future__ import annotations

import pytest

from rust_docstyle.rules.mood import is_imperative, is_not_imperative, suggested_form


class TestIsImperative:
    def test_base_form(self) -> None:
        assert is_imperative("Return") is True

    def test_third_person_form(self) -> None:
        assert is_imperative("Returns") is False

    def test_trailing_punctuation_ignored(self) -> None:
        assert is_imperative("Returns,") is False

    def test_empty_word_is_undecided(self) -> None:
        assert is_imperative("") is None
        assert is_imperative("???") is None


class TestIsNotImperative:
    @pytest.mark.parametrize("word", ["Returns", "This", "The", "A", "Gets"])
    def test_flagged(self, word: str) -> None:
        assert is_not_imperative(word)

    @pytest.mark.parametrize("word", ["Return", "Frobnicate", "`Vec`"])
    def test_not_flagged(self, word: str) -> None:
        assert not is_not_imperative(word)


def test_suggested_form() -> None:
    assert suggested_form("Returns") == "Return"
    assert suggested_form("Xyzzyplugh") is None
