"""
Row Locator - Finds the closed-trade table row in raw OCR text
"""
import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .shared_utils.pattern_matcher import PatternMatcher, SIDE_PATTERN, DECIMAL_NUMBER_PATTERN
from .shared_utils.text_cleaner import TextCleaner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocatedRow:
    """The OCR line chosen as the trade row."""
    text: str
    line_number: int


class RowLocator:
    """
    Picks the first OCR line that has a ticker, a side keyword and a decimal.

    All three must hold on the same line: falling back to row-agnostic
    extraction is acceptable, locating the wrong line is not.
    """

    def __init__(self, pattern_matcher: PatternMatcher, text_cleaner: Optional[TextCleaner] = None):
        self.pattern_matcher = pattern_matcher
        self.text_cleaner = text_cleaner or TextCleaner()

    def build_line_table(self, raw_text: str) -> pd.DataFrame:
        """One row per non-blank OCR line, numbered from 1 in reading order."""
        lines = self.text_cleaner.split_lines(raw_text)
        return pd.DataFrame({
            'line_number': range(1, len(lines) + 1),
            'text': lines,
        }, columns=['line_number', 'text'])

    def locate(self, raw_text: str) -> Optional[LocatedRow]:
        df = self.build_line_table(raw_text)
        if df.empty:
            logger.debug("No OCR lines to scan for a trade row")
            return None

        text = df['text']
        has_symbol = text.str.contains(self.pattern_matcher.symbol_pattern, regex=True)
        has_side = text.str.contains(SIDE_PATTERN, case=False, regex=True)
        has_decimal = text.str.contains(DECIMAL_NUMBER_PATTERN, regex=True)

        candidates = df[has_symbol & has_side & has_decimal]
        if candidates.empty:
            logger.info(f"⚠️ No trade row found in {len(df)} OCR lines")
            return None

        first = candidates.iloc[0]
        logger.info(f"✅ Trade row located on line {first['line_number']} of {len(df)}")
        logger.debug(f"   📋 Row text: {first['text'][:120]}")
        return LocatedRow(text=first['text'], line_number=int(first['line_number']))
