"""Tests for splitting text into word tokens."""

from __future__ import annotations

from etymolens.utils.tokenizer import clean_word, tokenize


def test_tokenize_strips_punctuation_for_lookup_only() -> None:
    tokens = tokenize("The cats' toys.")

    assert [token.clean for token in tokens] == ["The", "cats", "toys"]
    assert [token.surface for token in tokens] == ["The", "cats'", "toys"]


def test_tokenize_splits_on_hyphen_period_and_slash() -> None:
    tokens = tokenize("well-known and/or  e.g.\tfine")

    assert [token.surface for token in tokens] == ["well", "known", "and", "or", "e", "g", "fine"]


def test_tokenize_keeps_trailing_punctuation_in_surface_form() -> None:
    tokens = tokenize('He said, "hello!"')

    assert tokens[1].surface == "said,"
    assert tokens[1].clean == "said"
    assert tokens[2].surface == '"hello!"'
    assert tokens[2].clean == "hello"


def test_tokenize_keeps_tokens_with_empty_clean_form() -> None:
    tokens = tokenize("wait ... !! ok")

    assert [token.surface for token in tokens] == ["wait", "!!", "ok"]
    assert tokens[1].clean == ""


def test_tokenize_empty_text() -> None:
    assert tokenize("") == []
    assert tokenize("  -- // ") == []


def test_clean_word() -> None:
    assert clean_word("don't") == "dont"
    assert clean_word("(word)") == "word"
