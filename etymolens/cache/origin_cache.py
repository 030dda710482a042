"""
Day-scoped cache of resolved word origins.

This module provides the origin cache used by the resolver. Entries are keyed by
the lowercased word and live in a key-value store next to a "last active date"
marker; when the marker differs from today's date the whole mapping is dropped.
Storage problems never fail a resolution: an unreadable store is an empty cache.
"""

import json
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from loguru import logger

from etymolens.config import CACHE_CONFIG, CACHE_DIR
from etymolens.models.origin_models import (
    CompoundOrigin,
    NetworkFailure,
    Origin,
    OriginLabel,
    Resolution,
    SimpleOrigin
)


class KeyValueStore(ABC):
    """Abstract base class for the persistence behind the origin cache."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store value under key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""
        pass


class MemoryStore(KeyValueStore):
    """In-process store; contents vanish with the process."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    The file is read once and written through on every change.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        """
        Initialize the file store.

        Args:
            path: JSON file location (defaults to CACHE_DIR / CACHE_CONFIG["file_name"])
        """
        self.path = Path(path) if path else CACHE_DIR / CACHE_CONFIG["file_name"]
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._data is None:
            self._data = {}
            if self.path.exists():
                try:
                    loaded = json.loads(self.path.read_text(encoding="utf-8"))
                    if isinstance(loaded, dict):
                        self._data = {str(k): str(v) for k, v in loaded.items()}
                    else:
                        logger.warning(f"Ignoring malformed cache file {self.path}")
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to read cache file {self.path}: {str(e)}")
        return self._data

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._load(), ensure_ascii=False), encoding="utf-8")

    def read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        self._load()[key] = value
        self._save()

    def delete(self, key: str) -> None:
        if self._load().pop(key, None) is not None:
            self._save()


class OriginCache:
    """
    Cache of resolved origins scoped to the current calendar day.

    Network failures are never stored. Every operation first checks the stored
    date marker, so entries written on an earlier day are never returned.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        today: Callable[[], date] = date.today
    ):
        """
        Initialize the origin cache.

        Args:
            store: Backing key-value store (defaults to a JsonFileStore)
            today: Clock returning the current date
        """
        self.store = store if store is not None else JsonFileStore()
        self.cache_key = CACHE_CONFIG["cache_key"]
        self.date_key = CACHE_CONFIG["date_key"]
        self._today = today
        self.rollover_if_stale(self._today())

    def rollover_if_stale(self, current_date: Optional[date] = None) -> bool:
        """
        Clear the cache if it was last active on another day.

        Args:
            current_date: Date to compare against (defaults to today)

        Returns:
            True if stale entries were dropped
        """
        current = (current_date or self._today()).isoformat()
        try:
            stored = self.store.read(self.date_key)
            if stored == current:
                return False
            cleared = stored is not None
            if cleared:
                self.store.delete(self.cache_key)
                logger.info(f"Origin cache from {stored} expired, cleared for {current}")
            self.store.write(self.date_key, current)
            return cleared
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to check origin cache date: {str(e)}")
            return False

    def _entries(self) -> Dict[str, object]:
        self.rollover_if_stale()
        try:
            raw = self.store.read(self.cache_key)
            entries = json.loads(raw) if raw else {}
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read origin cache: {str(e)}")
            return {}
        return entries if isinstance(entries, dict) else {}

    def _save(self, entries: Dict[str, object]) -> None:
        try:
            self.store.write(self.cache_key, json.dumps(entries, ensure_ascii=False))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to write origin cache: {str(e)}")

    def get(self, word: str) -> Optional[Origin]:
        """Return the cached origin of word, or None."""
        value = self._entries().get(word.lower())
        if value is None:
            return None
        try:
            if isinstance(value, str):
                return SimpleOrigin(OriginLabel(value))
            return CompoundOrigin.from_dict(value)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Dropping unreadable cache entry for {word}: {str(e)}")
            return None

    def set(self, word: str, origin: Resolution) -> None:
        """Store the origin of word; network failures are ignored."""
        if isinstance(origin, NetworkFailure):
            logger.debug(f"Not caching network failure for {word}")
            return
        entries = self._entries()
        if isinstance(origin, CompoundOrigin):
            entries[word.lower()] = origin.to_dict()
        else:
            entries[word.lower()] = origin.label.value
        self._save(entries)

    def has(self, word: str) -> bool:
        return word.lower() in self._entries()

    def clear(self) -> None:
        """Clear all cached data."""
        try:
            self.store.delete(self.cache_key)
            self.store.delete(self.date_key)
            logger.info("Origin cache cleared")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to clear origin cache: {str(e)}")

    def stats(self) -> Dict[str, object]:
        """Get cache statistics for debugging."""
        entries = self._entries()
        try:
            cached_date = self.store.read(self.date_key)
        except (OSError, ValueError):
            cached_date = None
        return {
            "entries": len(entries),
            "date": cached_date,
            "size": len(json.dumps(entries, ensure_ascii=False)),
        }
