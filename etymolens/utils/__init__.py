"""
Utility modules for the Etymolens project.
"""

from etymolens.utils.logging_config import setup_logging
from etymolens.utils.tokenizer import clean_word, tokenize

__all__ = [
    'clean_word',
    'setup_logging',
    'tokenize'
]
