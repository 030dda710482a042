"""
Agent modules for the Etymolens project.

This module provides the dictionary sources, the origin resolver and the
batch processor.
"""

from etymolens.agents.batch_agent import (
    BatchProcessor,
    calculate_origin_stats,
    create_batch_processor,
    get_active_languages
)
from etymolens.agents.data_sources import (
    DictionarySource,
    DictionarySourceError,
    DictionaryUnavailableError,
    WiktionaryAPISource
)
from etymolens.agents.resolver_agent import EtymologyResolver

__all__ = [
    'BatchProcessor',
    'DictionarySource',
    'DictionarySourceError',
    'DictionaryUnavailableError',
    'EtymologyResolver',
    'WiktionaryAPISource',
    'calculate_origin_stats',
    'create_batch_processor',
    'get_active_languages'
]
