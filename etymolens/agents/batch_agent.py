"""
Batch processing and aggregation of word origins.

This module resolves every token of a text concurrently and derives the
statistics the presentation layer draws from: per-origin counts, percentages
and chart angles, and the set of origins present.
"""

import asyncio
import time
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from loguru import logger

from etymolens.agents.data_sources import DictionarySource, WiktionaryAPISource
from etymolens.agents.resolver_agent import EtymologyResolver
from etymolens.cache.origin_cache import OriginCache
from etymolens.models.origin_models import (
    UNKNOWN,
    BatchResult,
    CompoundOrigin,
    NetworkFailure,
    OriginLabel,
    OriginStat,
    ProcessedWord,
    Resolution,
    Token
)
from etymolens.utils.logging_config import log_method_call, log_method_result
from etymolens.utils.tokenizer import tokenize


class BatchProcessor:
    """
    Resolves whole texts with all-or-nothing semantics.

    If any token hits a network failure the batch is discarded so that callers
    can offer a full retry instead of showing partial results.
    """

    def __init__(self, resolver: EtymologyResolver):
        self.resolver = resolver

    async def process_text(self, text: str) -> BatchResult:
        """
        Resolve every token of a text.

        Args:
            text: Free English text

        Returns:
            BatchResult with processed words in input order, or an empty result
            flagged with has_network_error
        """
        start_time = time.time()
        log_method_call("process_text", length=len(text))

        tokens = tokenize(text) if text.strip() else []
        if not tokens:
            return BatchResult()

        self.resolver.cache.rollover_if_stale()
        async with self.resolver.source:
            resolutions = await asyncio.gather(
                *(self._resolve_token(token) for token in tokens)
            )

        failed = [
            token.surface
            for token, resolution in zip(tokens, resolutions)
            if isinstance(resolution, NetworkFailure)
        ]
        if failed:
            logger.warning(
                f"Network issues detected: {len(failed)} words could not be processed "
                f"due to connectivity problems with {self.resolver.source.source_name}"
            )
            log_method_result("process_text", "network error", time.time() - start_time)
            return BatchResult(results=[], has_network_error=True, failed_words=failed)

        results = [
            self._to_processed_word(token, resolution)
            for token, resolution in zip(tokens, resolutions)
        ]
        log_method_result("process_text", f"{len(results)} words", time.time() - start_time)
        return BatchResult(results=results)

    async def _resolve_token(self, token: Token) -> Resolution:
        if not token.clean:
            return UNKNOWN
        return await self.resolver.resolve_origin(token.clean)

    @staticmethod
    def _to_processed_word(token: Token, resolution: Resolution) -> ProcessedWord:
        if isinstance(resolution, CompoundOrigin):
            resolution = resolution.merge_unknown()
        return ProcessedWord(word=token.surface, origin=resolution, clean=token.clean)


def _flatten_origins(results: Iterable[ProcessedWord]) -> List[OriginLabel]:
    origins = []
    for item in results:
        origin = item.origin
        if isinstance(origin, CompoundOrigin):
            origin = origin.merge_unknown()
        origins.extend(origin.origins)
    return origins


def _format_percentage(value: float) -> str:
    """One decimal place, exact halves rounded up."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calculate_origin_stats(results: Iterable[ProcessedWord]) -> List[OriginStat]:
    """
    Count origins across processed words, compound parts counted individually.

    Returns:
        One OriginStat per origin, sorted by descending count
    """
    counts = Counter(_flatten_origins(results))
    total = sum(counts.values())
    if not total:
        return []

    stats = [
        OriginStat(
            origin=origin,
            count=count,
            percentage=_format_percentage(count / total * 100),
            angle=count / total * 360
        )
        for origin, count in counts.items()
    ]
    return sorted(stats, key=lambda stat: stat.count, reverse=True)


def get_active_languages(results: Iterable[ProcessedWord]) -> List[OriginLabel]:
    """Return the distinct origins present, including inside compounds, sorted by name."""
    return sorted(set(_flatten_origins(results)), key=lambda origin: origin.value)


def create_batch_processor(
    cache: Optional[OriginCache] = None,
    source: Optional[DictionarySource] = None
) -> BatchProcessor:
    """Build a processor wired to Wiktionary and the on-disk origin cache."""
    resolver = EtymologyResolver(
        source=source or WiktionaryAPISource(),
        cache=cache if cache is not None else OriginCache()
    )
    return BatchProcessor(resolver)
