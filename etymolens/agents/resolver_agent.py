"""
Resolver Agent for word origin classification.

This module implements the EtymologyResolver, responsible for turning a single
word into an origin classification. It follows a fallback pattern, moving to the
next strategy only when the previous one found nothing:
1. Strip a common inflectional suffix and resolve the stem (top-level calls only)
2. Look up the word's Etymology section in the dictionary
3. Without an Etymology section, follow "plural of X"-style inflection links
4. Match language indicators in the etymology text
5. Split "from X + Y" compounds and resolve both parts
6. Follow a "see also" cross-reference
7. Scan for bare language codes
8. Give up with Unknown

Network failures are returned as NetworkFailure values, never cached, and passed
unchanged up through every enclosing recursive call.
"""

from typing import Optional

from loguru import logger

from etymolens.agents.data_sources import DictionarySource, DictionaryUnavailableError
from etymolens.cache.origin_cache import OriginCache
from etymolens.config import RESOLVER_CONFIG
from etymolens.models.languages import AFFIX_ORIGINS, MORPHOLOGICAL_PATTERNS
from etymolens.models.origin_models import (
    UNKNOWN,
    CompoundOrigin,
    CompoundPart,
    NetworkFailure,
    OriginLabel,
    Resolution,
    SimpleOrigin
)
from etymolens.utils.markup import (
    classify_etymology_text,
    find_compound_parts,
    find_inflection_target,
    find_see_also_target,
    html_to_text,
    is_affix,
    match_language_code
)
from etymolens.utils.tokenizer import clean_word


def label_of(resolution: Resolution) -> OriginLabel:
    """
    Collapse a resolution to one label for use as a compound part.

    A nested compound contributes its first known part's origin.
    """
    if isinstance(resolution, SimpleOrigin):
        return resolution.label
    if isinstance(resolution, CompoundOrigin):
        return resolution.merge_unknown().parts[0].origin
    return OriginLabel.UNKNOWN


class EtymologyResolver:
    """
    Agent responsible for resolving the origin language of words.

    The resolver is recursive: stems, inflection targets, compound parts and
    cross-references are resolved with the same procedure one level deeper,
    up to a fixed depth.
    """

    def __init__(
        self,
        source: DictionarySource,
        cache: Optional[OriginCache] = None,
        max_depth: Optional[int] = None,
        min_stem_length: Optional[int] = None
    ):
        """
        Initialize the resolver.

        Args:
            source: Dictionary to query
            cache: Origin cache shared across resolutions
            max_depth: Deepest recursion level that still queries the dictionary
            min_stem_length: Shortest stem accepted by suffix stripping
        """
        self.source = source
        self.cache = cache if cache is not None else OriginCache()
        self.max_depth = RESOLVER_CONFIG["max_depth"] if max_depth is None else max_depth
        self.min_stem_length = (
            RESOLVER_CONFIG["min_stem_length"] if min_stem_length is None else min_stem_length
        )

    async def resolve_origin(self, word: str, depth: int = 0) -> Resolution:
        """
        Resolve the origin of a word.

        Args:
            word: Word to resolve, without punctuation
            depth: Recursion level; 0 for words taken directly from the text

        Returns:
            SimpleOrigin, CompoundOrigin, or NetworkFailure if the dictionary
            could not be reached anywhere along the way
        """
        if depth > self.max_depth or not word:
            return UNKNOWN

        cached = self.cache.get(word)
        if cached is not None:
            logger.debug(f"Cache hit for {word}: {cached}")
            return cached

        if depth == 0:
            stem_result = await self._resolve_by_morphology(word, depth)
            if stem_result is not None:
                self.cache.set(word, stem_result)
                return stem_result

        result = await self._resolve_from_dictionary(word, depth)
        self.cache.set(word, result)
        return result

    async def _resolve_by_morphology(self, word: str, depth: int) -> Optional[Resolution]:
        """Resolve the stem left by the first suffix rule that leads somewhere."""
        for pattern, build_stem in MORPHOLOGICAL_PATTERNS:
            match = pattern.match(word)
            if not match or len(match.group(1)) < self.min_stem_length:
                continue
            stem = build_stem(match)
            result = await self.resolve_origin(stem, depth + 1)
            if isinstance(result, NetworkFailure):
                return result
            if not result.is_unknown:
                logger.debug(f"{word} resolved through stem {stem}")
                return result
        return None

    async def _query(self, word: str, fetch, *args):
        """Run one dictionary call, turning unavailability into a NetworkFailure."""
        try:
            return await fetch(*args)
        except DictionaryUnavailableError as e:
            logger.warning(f"Dictionary unavailable while resolving {word}: {str(e)}")
            return NetworkFailure(word=word, reason=str(e))

    async def _resolve_from_dictionary(self, word: str, depth: int) -> Resolution:
        sections = await self._query(word, self.source.fetch_sections, word)
        if isinstance(sections, NetworkFailure):
            return sections
        if sections is None:
            logger.debug(f"No dictionary page for {word}")
            return UNKNOWN

        etymology = next((section for section in sections if section.is_etymology), None)
        if etymology is None:
            return await self._resolve_inflection(word, depth)

        html = await self._query(word, self.source.fetch_section_html, word, etymology.index)
        if isinstance(html, NetworkFailure):
            return html
        if not html:
            return UNKNOWN

        text = html_to_text(html)
        label = classify_etymology_text(text)
        if label is not None:
            logger.debug(f"{word} classified from etymology text as {label.value}")
            return SimpleOrigin(label)

        compound = await self._resolve_compound(word, html, text, depth)
        if compound is not None:
            return compound

        target = find_see_also_target(html)
        if target and target != word.lower() and not is_affix(target):
            logger.debug(f"{word} follows see-also link to {target}")
            return await self.resolve_origin(target, depth + 1)

        label = match_language_code(text)
        if label is not None:
            logger.debug(f"{word} classified from language code as {label.value}")
            return SimpleOrigin(label)

        return UNKNOWN

    async def _resolve_inflection(self, word: str, depth: int) -> Resolution:
        """Resolve a page without etymology through the headword it inflects."""
        html = await self._query(word, self.source.fetch_page_html, word)
        if isinstance(html, NetworkFailure):
            return html
        if not html:
            return UNKNOWN

        target = find_inflection_target(html, html_to_text(html))
        if not target:
            return UNKNOWN
        logger.debug(f"{word} is an inflection of {target}")
        return await self.resolve_origin(target, depth + 1)

    async def _resolve_compound(
        self,
        word: str,
        html: str,
        text: str,
        depth: int
    ) -> Optional[Resolution]:
        """
        Split a "from X + Y" etymology and resolve both parts.

        Returns:
            CompoundOrigin, NetworkFailure, or None if the etymology is not a compound
        """
        match = find_compound_parts(html, text)
        if match is None:
            return None

        first = await self.resolve_origin(match.first, depth + 1)
        if isinstance(first, NetworkFailure):
            return first

        if is_affix(match.second):
            second = await self.resolve_origin(match.second, depth + 1)
            if isinstance(second, NetworkFailure):
                return second
            second_label = label_of(second)
            if second_label is OriginLabel.UNKNOWN:
                second_label = AFFIX_ORIGINS.get(match.second, OriginLabel.UNKNOWN)
        else:
            second = await self.resolve_origin(clean_word(match.second), depth + 1)
            if isinstance(second, NetworkFailure):
                return second
            second_label = label_of(second)

        logger.debug(f"{word} decomposed into {match.first} + {match.second}")
        return CompoundOrigin(
            parts=(
                CompoundPart(text=match.first.strip("-"), origin=label_of(first)),
                CompoundPart(text=match.second.strip("-"), origin=second_label)
            ),
            original_word=word
        )
