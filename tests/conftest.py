"""Shared fixtures: an in-memory dictionary built from fixed HTML fragments."""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Dict, List, Optional

import pytest

from etymolens.agents.data_sources import DictionarySource, DictionaryUnavailableError
from etymolens.agents.resolver_agent import EtymologyResolver
from etymolens.cache.origin_cache import MemoryStore, OriginCache
from etymolens.models.origin_models import SectionInfo


def etymology_page(html: str) -> Dict:
    """A page whose first section is an Etymology section with the given markup."""
    return {
        "sections": [SectionInfo(line="Etymology", index="1"), SectionInfo(line="Noun", index="2")],
        "section_html": {"1": html},
    }


def inflection_page(html: str) -> Dict:
    """A page without an Etymology section; html is the full page markup."""
    return {
        "sections": [SectionInfo(line="English", index="1"), SectionInfo(line="Noun", index="2")],
        "page_html": html,
    }


class FakeDictionarySource(DictionarySource):
    """Dictionary source answering from a dict of pages and counting every call."""

    def __init__(self, pages: Dict[str, Dict], unavailable: Optional[List[str]] = None):
        self.pages = {word.lower(): page for word, page in pages.items()}
        self.unavailable = {word.lower() for word in (unavailable or [])}
        self.calls: Counter = Counter()
        self.entered = 0

    @property
    def source_name(self) -> str:
        return "Fake dictionary"

    async def __aenter__(self):
        self.entered += 1
        return self

    def _check(self, word: str) -> None:
        if word.lower() in self.unavailable:
            raise DictionaryUnavailableError(f"HTTP 503 for {word}")

    async def fetch_sections(self, word: str) -> Optional[List[SectionInfo]]:
        self.calls[("sections", word.lower())] += 1
        self._check(word)
        page = self.pages.get(word.lower())
        return None if page is None else page["sections"]

    async def fetch_section_html(self, word: str, index: str) -> Optional[str]:
        self.calls[("section", word.lower())] += 1
        self._check(word)
        return self.pages.get(word.lower(), {}).get("section_html", {}).get(index)

    async def fetch_page_html(self, word: str) -> Optional[str]:
        self.calls[("page", word.lower())] += 1
        self._check(word)
        return self.pages.get(word.lower(), {}).get("page_html")

    def queried(self, word: str) -> int:
        return sum(count for (_, w), count in self.calls.items() if w == word.lower())


class FixedClock:
    """Callable clock whose date can be moved in tests."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def memory_cache() -> OriginCache:
    return OriginCache(store=MemoryStore(), today=FixedClock(date(2024, 5, 1)))


@pytest.fixture
def make_resolver(memory_cache):
    def _make(pages: Dict[str, Dict], unavailable: Optional[List[str]] = None) -> EtymologyResolver:
        return EtymologyResolver(FakeDictionarySource(pages, unavailable), cache=memory_cache)

    return _make
