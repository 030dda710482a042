"""
Etymolens: colour English text by the origin language of its words.
"""

__version__ = "1.0.0"
