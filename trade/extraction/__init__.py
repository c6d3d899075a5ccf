"""
Trade Extraction Module - OCR text to trade fields

📂 shared_utils/ - PatternMatcher (tickers, sides, decimals), TextCleaner
   row_locator        - RowLocator: finds the closed-trade table row
   field_classifier   - FieldClassifier: ordered rules over row numbers
   datetime_extractor - DateTimeExtractor: open/close timestamps
   fallback_extractor - FallbackExtractor: symbol/side when no row exists
   trade_text_parser  - TradeTextParser: composes the above
"""

from .row_locator import RowLocator, LocatedRow
from .field_classifier import (
    FieldClassifier,
    ClassifiedFields,
    ClassificationRule,
    CLASSIFICATION_RULES
)
from .datetime_extractor import DateTimeExtractor, TradeTimes, extract_trade_times
from .fallback_extractor import FallbackExtractor
from .trade_text_parser import (
    TradeTextParser,
    ParseResult,
    get_trade_text_parser,
    parse_trade_text,
    locate_trade_row,
    classify_row_fields,
    extract_fallback_fields
)

__all__ = [
    'RowLocator',
    'LocatedRow',
    'FieldClassifier',
    'ClassifiedFields',
    'ClassificationRule',
    'CLASSIFICATION_RULES',
    'DateTimeExtractor',
    'TradeTimes',
    'extract_trade_times',
    'FallbackExtractor',
    'TradeTextParser',
    'ParseResult',
    'get_trade_text_parser',
    'parse_trade_text',
    'locate_trade_row',
    'classify_row_fields',
    'extract_fallback_fields'
]
