"""
Data models for word origin analysis.

This module contains the core data structures shared between the tokenizer,
the origin cache, the resolver and the aggregator. A resolution is one of three
variants: a single origin label, a two-part compound breakdown, or a network
failure that must be retried rather than remembered.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Union


class OriginLabel(str, Enum):
    """Historical source languages a word or word part can be assigned to."""
    OLD_ENGLISH = "Old English"
    LATIN = "Latin"
    FRENCH = "French"
    OLD_NORSE = "Old Norse"
    GERMANIC = "Germanic"
    GREEK = "Greek"
    CELTIC = "Celtic"
    SANSKRIT = "Sanskrit"
    DUTCH = "Dutch"
    ITALIAN = "Italian"
    SPANISH = "Spanish"
    ARABIC = "Arabic"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


NETWORK_ERROR_LABEL = "Network Error"


@dataclass(frozen=True)
class Token:
    """
    A word-like substring of the input text.

    Attributes:
        surface: Original form, punctuation included, used for display
        clean: Form with every non-word character removed, used for lookup
    """
    surface: str
    clean: str


@dataclass(frozen=True)
class SimpleOrigin:
    """A word resolved to a single origin label."""
    label: OriginLabel

    @property
    def is_unknown(self) -> bool:
        return self.label is OriginLabel.UNKNOWN

    @property
    def origins(self) -> List[OriginLabel]:
        return [self.label]


@dataclass(frozen=True)
class CompoundPart:
    """
    One morpheme of a compound word.

    Attributes:
        text: The morpheme as it appears in the etymology, affix hyphens removed
        origin: Origin assigned to the morpheme
    """
    text: str
    origin: OriginLabel

    def to_dict(self) -> Dict:
        return {"text": self.text, "origin": self.origin.value}


@dataclass(frozen=True)
class CompoundOrigin:
    """
    A word decomposed into a leading morpheme and a trailing morpheme or suffix.

    Attributes:
        parts: Exactly two parts; order matters
        original_word: The word that was decomposed
    """
    parts: Tuple[CompoundPart, CompoundPart]
    original_word: str

    def __post_init__(self):
        if len(self.parts) != 2:
            raise ValueError(f"Compound words have exactly two parts, got {len(self.parts)}")

    @property
    def is_unknown(self) -> bool:
        return all(part.origin is OriginLabel.UNKNOWN for part in self.parts)

    @property
    def origins(self) -> List[OriginLabel]:
        return [part.origin for part in self.parts]

    def merge_unknown(self) -> "CompoundOrigin":
        """
        Give Unknown parts the origin of the first known part.

        Compound words are displayed either fully known or fully unknown, never mixed.
        """
        known = next(
            (part.origin for part in self.parts if part.origin is not OriginLabel.UNKNOWN),
            None
        )
        if known is None:
            return self
        return CompoundOrigin(
            parts=tuple(
                CompoundPart(part.text, known if part.origin is OriginLabel.UNKNOWN else part.origin)
                for part in self.parts
            ),
            original_word=self.original_word
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary for storage."""
        return {
            "compound": True,
            "parts": [part.to_dict() for part in self.parts],
            "originalWord": self.original_word,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "CompoundOrigin":
        """
        Rebuild a cached compound from its dictionary form.

        Raises:
            ValueError: If the data does not describe a compound
        """
        if not data.get("compound"):
            raise ValueError("not a compound entry")
        parts = tuple(
            CompoundPart(text=str(part["text"]), origin=OriginLabel(part["origin"]))
            for part in data["parts"]
        )
        return cls(parts=parts, original_word=str(data.get("originalWord", "")))


@dataclass(frozen=True)
class NetworkFailure:
    """
    The dictionary source could not be reached for a word.

    This is a transient outcome: it is never cached and aborts the whole batch.
    """
    word: str
    reason: str = ""

    @property
    def label(self) -> str:
        return NETWORK_ERROR_LABEL


Origin = Union[SimpleOrigin, CompoundOrigin]
Resolution = Union[SimpleOrigin, CompoundOrigin, NetworkFailure]

UNKNOWN = SimpleOrigin(OriginLabel.UNKNOWN)


@dataclass(frozen=True)
class ProcessedWord:
    """
    A token paired with its resolved origin.

    Attributes:
        word: Surface form of the token, for display
        origin: Resolved origin; compounds are already merged
        clean: Lookup form of the token
    """
    word: str
    origin: Origin
    clean: str = ""

    @property
    def is_compound(self) -> bool:
        return isinstance(self.origin, CompoundOrigin)

    @property
    def origins(self) -> List[OriginLabel]:
        return self.origin.origins

    def to_dict(self) -> Dict:
        if isinstance(self.origin, CompoundOrigin):
            return {
                "word": self.word,
                "origin": "compound",
                "parts": [part.to_dict() for part in self.origin.parts],
            }
        return {"word": self.word, "origin": self.origin.label.value}


@dataclass(frozen=True)
class OriginStat:
    """
    Share of one origin label in a set of processed words.

    Attributes:
        origin: The origin label
        count: Number of words or compound parts carrying the label
        percentage: count / total * 100, formatted with one decimal
        angle: count / total * 360, for radial chart layout
    """
    origin: OriginLabel
    count: int
    percentage: str
    angle: float

    def to_dict(self) -> Dict:
        return {
            "origin": self.origin.value,
            "count": self.count,
            "percentage": self.percentage,
            "angle": self.angle,
        }


@dataclass
class BatchResult:
    """
    Outcome of resolving a whole text.

    Attributes:
        results: Processed words in input order, empty if any token failed
        has_network_error: Whether the batch was discarded because of a network failure
        failed_words: Words whose resolution hit a network failure
    """
    results: List[ProcessedWord] = field(default_factory=list)
    has_network_error: bool = False
    failed_words: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "results": [word.to_dict() for word in self.results],
            "has_network_error": self.has_network_error,
        }


@dataclass(frozen=True)
class SectionInfo:
    """
    A heading in a dictionary page.

    Attributes:
        line: The heading text, e.g. "Etymology 1"
        index: Section index used to fetch the section's content
    """
    line: str
    index: str

    @property
    def is_etymology(self) -> bool:
        return self.line.startswith("Etymology")
