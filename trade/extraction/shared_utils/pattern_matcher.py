"""
Pattern Matcher - Handles regex pattern matching for trade extraction
"""
import re
from typing import Optional, Match, Pattern, Iterable

from ...models.trade_models import TradeSide

SIDE_PATTERN = r'\b(?:buy|sell)\b'
SIDE_CAPTURE_PATTERN = r'\b(buy|sell)\b'
DECIMAL_NUMBER_PATTERN = r'\d+\.\d+'


class PatternMatcher:
    """Regex matching for tickers, trade sides and decimal numbers."""

    def __init__(self, symbols: Iterable[str], quote_suffixes: Iterable[str] = ()):
        self.cache = {}  # Cache compiled patterns for performance

        # Longest first so DOGE is tried before DOT-like prefixes
        self.symbols = sorted({s.upper() for s in symbols if s}, key=lambda s: (-len(s), s))
        self.quote_suffixes = sorted({q.upper() for q in quote_suffixes if q}, key=lambda q: (-len(q), q))

        alternation = '|'.join(re.escape(s) for s in self.symbols) or r'(?!)'
        suffix = ''
        if self.quote_suffixes:
            suffix = '(?:' + '|'.join(re.escape(q) for q in self.quote_suffixes) + ')?'

        # Non-capturing form for pandas str.contains, capturing form for lookup
        self.symbol_pattern = rf'\b(?:{alternation}){suffix}\b'
        self.symbol_capture_pattern = rf'\b({alternation}){suffix}\b'

    def compile_pattern(self, pattern_str: str, flags: int = re.IGNORECASE) -> Pattern:
        """Compile and cache regex pattern."""
        cache_key = f"{pattern_str}_{flags}"
        if cache_key not in self.cache:
            self.cache[cache_key] = re.compile(pattern_str, flags)
        return self.cache[cache_key]

    def search_pattern(self, text: str, pattern_str: str, flags: int = re.IGNORECASE) -> Optional[Match]:
        """Search for pattern in text (first match)."""
        pattern = self.compile_pattern(pattern_str, flags)
        return pattern.search(text)

    def find_symbol(self, text: str) -> Optional[str]:
        """
        First allow-listed ticker in text, uppercase, quote suffix dropped.

        Tickers are matched case-sensitively: OCR renders the symbol column in
        capitals, and lowercase words such as "near" or "link" are prose.
        """
        if not text:
            return None
        match = self.search_pattern(text, self.symbol_capture_pattern, 0)
        return match.group(1).upper() if match else None

    def find_side(self, text: str) -> Optional[TradeSide]:
        """First Buy/Sell keyword in text, case-insensitive."""
        if not text:
            return None
        match = self.search_pattern(text, SIDE_CAPTURE_PATTERN)
        return TradeSide.from_text(match.group(1)) if match else None

    def has_symbol(self, text: str) -> bool:
        return self.find_symbol(text) is not None

    def has_side(self, text: str) -> bool:
        return self.find_side(text) is not None

    def has_decimal_number(self, text: str) -> bool:
        return bool(text) and self.search_pattern(text, DECIMAL_NUMBER_PATTERN, 0) is not None
