"""
Extraction of etymology-relevant text and links from dictionary markup.

Dictionary pages arrive as rendered HTML fragments. Everything the resolver needs
from them goes through the helpers in this module, so the scraping heuristics can
be exercised against fixed HTML without any network access.
"""

import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from etymolens.models.languages import (
    ETYMOLOGY_PATTERNS,
    INFLECTION_FALLBACK_PATTERNS,
    INFLECTION_PATTERNS,
    LANGUAGE_CODE_PATTERNS
)
from etymolens.models.origin_models import OriginLabel

_ENGLISH_SECTION = re.compile(
    r'<h2[^>]*><span[^>]*id="English"[^>]*>English</span>.*?</h2>(.*?)(?=<h2|$)',
    re.S
)
# Newer parser output wraps headings in <div class="mw-heading"><h2 id="English">.
_ENGLISH_SECTION_HEADING_ID = re.compile(
    r'<h2[^>]*id="English"[^>]*>.*?</h2>(.*?)(?=<h2|$)',
    re.S
)

_LINKED_COMPOUND_PATTERNS = [
    re.compile(
        r'from\s+.*?<a[^>]*title="([^"]+)"[^>]*>([^<]+)</a>(?:\s*</[^>]+>)*\s*\+[\u200e\s]*.*?'
        r'<a[^>]*title="([^"]+)"[^>]*>([^<]+)</a>',
        re.I
    ),
    re.compile(
        r'equivalent\s+to\s+.*?<a[^>]*title="([^"]+)"[^>]*>([^<]+)</a>(?:\s*</[^>]+>)*\s*\+[\u200e\s]*.*?'
        r'<a[^>]*title="([^"]+)"[^>]*>([^<]+)</a>',
        re.I
    ),
]
_PLAIN_COMPOUND = re.compile(
    r"(?:from|equivalent\s+to)\s+([^\s+]+)\s*\+[\u200e\s]*([^\s.,]+)",
    re.I
)
_INTERNAL_HYPHEN = re.compile(r"(?<=\w)-(?=\w)")
_SEE_ALSO = re.compile(r'see also[:\s]*<a[^>]*title="([^"]+)"', re.I)


@dataclass(frozen=True)
class CompoundMatch:
    """The two components of a "X + Y" etymology."""
    first: str
    second: str


def html_to_text(html: str) -> str:
    """Strip markup and return the text content of an HTML fragment."""
    if not html:
        return ""
    return BeautifulSoup(html, "html.parser").get_text()


def is_affix(text: str) -> bool:
    """Bound affixes are written with a leading or trailing hyphen."""
    return text.startswith("-") or text.endswith("-")


def classify_etymology_text(text: str) -> Optional[OriginLabel]:
    """Return the origin named by the first matching language indicator."""
    for pattern, origin in ETYMOLOGY_PATTERNS:
        if pattern.search(text):
            return origin
    return None


def extract_english_section(html: str) -> Optional[str]:
    """Return the markup between the English heading and the next language heading."""
    match = _ENGLISH_SECTION.search(html) or _ENGLISH_SECTION_HEADING_ID.search(html)
    return match.group(1) if match else None


def find_inflection_target(html: str, text: Optional[str] = None) -> Optional[str]:
    """
    Find the headword an inflected form points to.

    Linked phrases inside the English section are preferred; plain-text phrases
    anywhere on the page are the fallback.

    Args:
        html: Full page markup
        text: Plain text of the page, computed from ``html`` when omitted

    Returns:
        The base word, or None if the page does not describe an inflection
    """
    english = extract_english_section(html)
    if english is not None:
        for pattern in INFLECTION_PATTERNS:
            match = pattern.search(english)
            if match and match.group(1):
                return match.group(1).split("#")[0]

    if text is None:
        text = html_to_text(html)
    for pattern in INFLECTION_FALLBACK_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1)
    return None


def find_compound_parts(html: str, text: Optional[str] = None) -> Optional[CompoundMatch]:
    """
    Find a "from X + Y" or "equivalent to X + Y" construct.

    Link text is preferred over plain text. Hyphens inside link text are dropped;
    leading and trailing hyphens are kept so callers can recognise bound affixes.
    """
    for pattern in _LINKED_COMPOUND_PATTERNS:
        match = pattern.search(html)
        if match:
            return CompoundMatch(
                first=_INTERNAL_HYPHEN.sub("", match.group(2)),
                second=_INTERNAL_HYPHEN.sub("", match.group(4))
            )

    if text is None:
        text = html_to_text(html)
    match = _PLAIN_COMPOUND.search(text)
    if match:
        return CompoundMatch(first=match.group(1), second=match.group(2))
    return None


def find_see_also_target(html: str) -> Optional[str]:
    """Return the lowercased target of a "see also" link, if any."""
    match = _SEE_ALSO.search(html)
    if match and match.group(1):
        return match.group(1).lower()
    return None


def match_language_code(text: str) -> Optional[OriginLabel]:
    """Scan text for language codes or names as a last resort."""
    for patterns, origin in LANGUAGE_CODE_PATTERNS:
        if any(pattern.search(text) for pattern in patterns):
            return origin
    return None
