"""
Pattern tables used to classify dictionary etymologies.

The tables are ordered: the first matching entry wins everywhere they are used.
"""

import re
from typing import Callable, Dict, List, Pattern, Tuple

from etymolens.models.origin_models import OriginLabel

# Language indicators tested against the plain text of an etymology section.
ETYMOLOGY_PATTERNS: List[Tuple[Pattern, OriginLabel]] = [
    (re.compile(r"from\s+(?:the\s+)?old\s+english", re.I), OriginLabel.OLD_ENGLISH),
    (re.compile(r"from\s+(?:the\s+)?latin", re.I), OriginLabel.LATIN),
    (re.compile(r"from\s+(?:the\s+)?(?:old\s+)?french", re.I), OriginLabel.FRENCH),
    (re.compile(r"from\s+(?:the\s+)?old\s+norse", re.I), OriginLabel.OLD_NORSE),
    (re.compile(r"from\s+(?:the\s+)?(?:proto-)?germanic", re.I), OriginLabel.GERMANIC),
    (re.compile(r"from\s+(?:the\s+)?(?:ancient\s+)?greek", re.I), OriginLabel.GREEK),
    (re.compile(r"from\s+(?:the\s+)?celtic", re.I), OriginLabel.CELTIC),
    (re.compile(r"from\s+(?:the\s+)?sanskrit", re.I), OriginLabel.SANSKRIT),
    (re.compile(r"from\s+(?:the\s+)?dutch", re.I), OriginLabel.DUTCH),
    (re.compile(r"from\s+(?:the\s+)?italian", re.I), OriginLabel.ITALIAN),
    (re.compile(r"from\s+(?:the\s+)?spanish", re.I), OriginLabel.SPANISH),
    (re.compile(r"from\s+(?:the\s+)?arabic", re.I), OriginLabel.ARABIC),
    (re.compile(r"borrowed\s+from\s+(?:the\s+)?latin", re.I), OriginLabel.LATIN),
    (re.compile(r"borrowed\s+from\s+(?:the\s+)?(?:old\s+)?french", re.I), OriginLabel.FRENCH),
    (re.compile(r"of\s+(?:the\s+)?latin\s+origin", re.I), OriginLabel.LATIN),
    (re.compile(r"of\s+(?:the\s+)?(?:old\s+)?french\s+origin", re.I), OriginLabel.FRENCH),
    (re.compile(r"of\s+(?:the\s+)?germanic\s+origin", re.I), OriginLabel.GERMANIC),
]


def _stem(match) -> str:
    return match.group(1)


def _stem_y(match) -> str:
    return match.group(1) + "y"


# Suffix-stripping rules: (pattern, stem builder). Group 1 is the kept stem.
MORPHOLOGICAL_PATTERNS: List[Tuple[Pattern, Callable]] = [
    (re.compile(r"^(.+)s$"), _stem),      # files -> file
    (re.compile(r"^(.+)es$"), _stem),     # boxes -> box
    (re.compile(r"^(.+)ies$"), _stem_y),  # flies -> fly
    (re.compile(r"^(.+)ed$"), _stem),     # walked -> walk
    (re.compile(r"^(.+)ing$"), _stem),    # walking -> walk
    (re.compile(r"^(.+)er$"), _stem),     # bigger -> big
    (re.compile(r"^(.+)est$"), _stem),    # biggest -> big
]

_LINK_TARGET = r'.*?<a[^>]*title="([^"#]+)(?:#[^"]*)?"[^>]*>'

# Inflection phrases followed by a link, searched in the English section markup.
INFLECTION_PATTERNS: List[Pattern] = [
    re.compile(r"plural\s+of\s+" + _LINK_TARGET, re.I),
    re.compile(r"past\s+(?:tense\s+)?(?:and\s+past\s+participle\s+)?of\s+" + _LINK_TARGET, re.I),
    re.compile(r"present\s+participle\s+of\s+" + _LINK_TARGET, re.I),
    re.compile(r"third-person\s+singular\s+.*?of\s+" + _LINK_TARGET, re.I),
    re.compile(r"simple\s+past\s+.*?of\s+" + _LINK_TARGET, re.I),
    re.compile(r"past\s+participle\s+of\s+" + _LINK_TARGET, re.I),
]

# Plain-text inflection phrases, searched in the whole page text.
INFLECTION_FALLBACK_PATTERNS: List[Pattern] = [
    re.compile(r"plural\s+of\s+(\w+)", re.I),
    re.compile(r"past\s+(?:tense\s+)?(?:and\s+past\s+participle\s+)?of\s+(\w+)", re.I),
    re.compile(r"present\s+participle\s+of\s+(\w+)", re.I),
    re.compile(r"gerund\s+of\s+(\w+)", re.I),
    re.compile(
        r"third-person\s+singular\s+(?:simple\s+)?present\s+(?:indicative\s+)?(?:form\s+)?of\s+(\w+)",
        re.I
    ),
    re.compile(r"simple\s+past\s+tense\s+and\s+past\s+participle\s+of\s+(\w+)", re.I),
    re.compile(r"comparative\s+form\s+of\s+(\w+)", re.I),
    re.compile(r"superlative\s+form\s+of\s+(\w+)", re.I),
    re.compile(r"past\s+participle\s+of\s+(\w+)", re.I),
    re.compile(r"inflection\s+of\s+(\w+)", re.I),
]

# Historical origin of common English affixes, used when the affix has no entry of its own.
AFFIX_ORIGINS: Dict[str, OriginLabel] = {
    "-ly": OriginLabel.OLD_ENGLISH,
    "-ness": OriginLabel.OLD_ENGLISH,
    "-ment": OriginLabel.FRENCH,
    "-tion": OriginLabel.LATIN,
    "-sion": OriginLabel.LATIN,
    "-ity": OriginLabel.LATIN,
    "-ous": OriginLabel.LATIN,
    "-ful": OriginLabel.OLD_ENGLISH,
    "-less": OriginLabel.OLD_ENGLISH,
    "-ward": OriginLabel.OLD_ENGLISH,
    "-wise": OriginLabel.OLD_ENGLISH,
    "un-": OriginLabel.OLD_ENGLISH,
    "re-": OriginLabel.LATIN,
    "pre-": OriginLabel.LATIN,
    "dis-": OriginLabel.LATIN,
    "in-": OriginLabel.LATIN,
    "im-": OriginLabel.LATIN,
}

# Last-resort language codes and names found in etymology text.
LANGUAGE_CODE_PATTERNS: List[Tuple[List[Pattern], OriginLabel]] = [
    ([re.compile(r"\bfro\b"), re.compile(r"Old French", re.I)], OriginLabel.FRENCH),
    ([re.compile(r"\bang\b"), re.compile(r"Old English", re.I)], OriginLabel.OLD_ENGLISH),
    ([re.compile(r"\bla\b"), re.compile(r"\blat\b")], OriginLabel.LATIN),
    ([re.compile(r"\bgrc\b")], OriginLabel.GREEK),
]
