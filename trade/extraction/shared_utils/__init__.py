"""
Shared utilities for trade field extraction
"""

from .pattern_matcher import PatternMatcher
from .text_cleaner import TextCleaner

__all__ = [
    'PatternMatcher',
    'TextCleaner'
]
