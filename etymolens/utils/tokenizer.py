"""Split free text into word tokens for origin lookup."""

import re
from typing import List

from etymolens.models.origin_models import Token

_SEPARATORS = re.compile(r"[\s\-./]+")
_NON_WORD = re.compile(r"[^\w]")


def clean_word(word: str) -> str:
    """Remove every non-word character from a word."""
    return _NON_WORD.sub("", word)


def tokenize(text: str) -> List[Token]:
    """
    Split text on runs of whitespace, hyphens, periods and slashes.

    Args:
        text: Arbitrary input text

    Returns:
        Tokens in input order; each keeps its punctuation in ``surface``
        and drops it in ``clean``
    """
    return [
        Token(surface=piece, clean=clean_word(piece))
        for piece in _SEPARATORS.split(text)
        if piece
    ]
