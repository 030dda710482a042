"""
Dictionary source abstractions for origin resolution.

This module provides the interface the resolver uses to reach a dictionary and
its Wiktionary implementation. Sources report a missing page by returning None
and an unreachable or failing server by raising DictionaryUnavailableError.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import aiohttp
from loguru import logger

from etymolens.config import SCRAPING_CONFIG, WIKTIONARY_API_URL
from etymolens.models.origin_models import SectionInfo

NOT_FOUND_ERROR_CODES = {"missingtitle", "invalidtitle"}
NOT_FOUND_STATUSES = {400, 404}


class DictionarySourceError(Exception):
    """Base exception for dictionary source failures."""
    pass


class DictionaryUnavailableError(DictionarySourceError):
    """The dictionary could not be reached or answered with a server error."""
    pass


class DictionarySource(ABC):
    """Abstract base class for dictionary sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Get the name of this data source."""
        pass

    @abstractmethod
    async def fetch_sections(self, word: str) -> Optional[List[SectionInfo]]:
        """Return the section headings of a word's page, or None if there is no page."""
        pass

    @abstractmethod
    async def fetch_section_html(self, word: str, index: str) -> Optional[str]:
        """Return the rendered markup of one section, or None."""
        pass

    @abstractmethod
    async def fetch_page_html(self, word: str) -> Optional[str]:
        """Return the rendered markup of the whole page, or None."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


class WiktionaryAPISource(DictionarySource):
    """Wiktionary action API data source."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the Wiktionary source.

        Args:
            base_url: API endpoint (defaults to the configured Wiktionary endpoint)
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
            session: Existing client session to reuse; owned by the caller
        """
        self.base_url = base_url or WIKTIONARY_API_URL
        self.timeout = aiohttp.ClientTimeout(total=timeout or SCRAPING_CONFIG["timeout"])
        self.headers = {"User-Agent": user_agent or SCRAPING_CONFIG["user_agent"]}
        self._session = session
        self._owns_session = False

    @property
    def source_name(self) -> str:
        return "Wiktionary"

    async def __aenter__(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def fetch_sections(self, word: str) -> Optional[List[SectionInfo]]:
        data = await self._query({"page": word.lower(), "prop": "sections"})
        if data is None or "sections" not in data:
            return None
        return [
            SectionInfo(
                line=section.get("line") or "",
                index=str(section.get("index", ""))
            )
            for section in data["sections"]
        ]

    async def fetch_section_html(self, word: str, index: str) -> Optional[str]:
        data = await self._query({"page": word.lower(), "section": index, "prop": "text"})
        return self._text_of(data)

    async def fetch_page_html(self, word: str) -> Optional[str]:
        data = await self._query({"page": word.lower(), "prop": "text"})
        return self._text_of(data)

    @staticmethod
    def _text_of(data: Optional[Dict[str, Any]]) -> Optional[str]:
        if not data or "text" not in data:
            return None
        text = data["text"]
        if isinstance(text, dict):
            return text.get("*")
        return text

    async def _query(self, params: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Run one parse request and return its "parse" payload.

        Returns:
            The parse payload, or None if the page does not exist

        Raises:
            DictionaryUnavailableError: On connection failures, timeouts and server errors
        """
        query = {"action": "parse", "format": "json", "origin": "*", **params}
        try:
            if self._session is not None:
                return await self._request(self._session, query)
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                return await self._request(session, query)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Error querying Wiktionary API for {params.get('page')}: {str(e)}")
            raise DictionaryUnavailableError(str(e) or type(e).__name__) from e

    async def _request(self, session, query: Dict[str, str]) -> Optional[Dict[str, Any]]:
        async with session.get(self.base_url, params=query) as response:
            if response.status in NOT_FOUND_STATUSES:
                logger.debug(f"Wiktionary returned {response.status} for {query['page']}")
                return None
            if response.status < 200 or response.status >= 300:
                raise DictionaryUnavailableError(
                    f"Wiktionary returned HTTP {response.status} for {query['page']}"
                )

            data = await response.json(content_type=None)

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            if error.get("code") in NOT_FOUND_ERROR_CODES:
                logger.debug(f"No Wiktionary page for {query['page']} ({error.get('code')})")
                return None
            raise DictionaryUnavailableError(
                f"Wiktionary API error {error.get('code')}: {error.get('info', '')}"
            )
        if not isinstance(data, dict) or not isinstance(data.get("parse"), dict):
            return None
        return data["parse"]
