"""
Data models for the Etymolens project.
"""

from etymolens.models.origin_models import (
    BatchResult,
    CompoundOrigin,
    CompoundPart,
    NetworkFailure,
    Origin,
    OriginLabel,
    OriginStat,
    ProcessedWord,
    Resolution,
    SectionInfo,
    SimpleOrigin,
    Token,
    UNKNOWN
)

__all__ = [
    'BatchResult',
    'CompoundOrigin',
    'CompoundPart',
    'NetworkFailure',
    'Origin',
    'OriginLabel',
    'OriginStat',
    'ProcessedWord',
    'Resolution',
    'SectionInfo',
    'SimpleOrigin',
    'Token',
    'UNKNOWN'
]
