"""
Caching of resolved word origins.
"""

from etymolens.cache.origin_cache import JsonFileStore, KeyValueStore, MemoryStore, OriginCache

__all__ = [
    'JsonFileStore',
    'KeyValueStore',
    'MemoryStore',
    'OriginCache'
]
