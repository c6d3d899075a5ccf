"""
Trade Text Parser - Turns raw OCR text into a TradeExtraction

Parsing never fails. Row location decides the path:
- row found: field classifier on the cleaned row, datetime extractor on the
  row as OCR produced it (month names and AM/PM must survive cleaning)
- no row: fallback extractor over the whole text, everything else null
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from config.config_manager import ConfigManager, get_config_manager
from ..models.trade_models import TradeExtraction
from .datetime_extractor import DateTimeExtractor
from .fallback_extractor import FallbackExtractor
from .field_classifier import ClassifiedFields, FieldClassifier
from .row_locator import LocatedRow, RowLocator
from .shared_utils.pattern_matcher import PatternMatcher
from .shared_utils.text_cleaner import TextCleaner

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    extraction: TradeExtraction
    located_row: Optional[LocatedRow]

    @property
    def used_fallback(self) -> bool:
        return self.located_row is None


class TradeTextParser:
    """Runs row location, then classification or fallback, on OCR text."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or get_config_manager()

        self.pattern_matcher = PatternMatcher(
            self.config_manager.get_symbols(),
            self.config_manager.get_quote_suffixes(),
        )
        self.text_cleaner = TextCleaner(self.config_manager.get_decorative_glyphs())

        self.row_locator = RowLocator(self.pattern_matcher, self.text_cleaner)
        self.field_classifier = FieldClassifier(self.pattern_matcher, self.text_cleaner)
        self.datetime_extractor = DateTimeExtractor()
        self.fallback_extractor = FallbackExtractor(self.pattern_matcher)

    def parse(self, raw_text: str, now: Optional[datetime] = None) -> ParseResult:
        now = now or datetime.now()
        raw_text = raw_text or ''

        located_row = self.row_locator.locate(raw_text)
        if located_row is None:
            fields = self.fallback_extractor.extract(raw_text)
            return ParseResult(
                extraction=self._build_extraction(fields, trade_date=now),
                located_row=None,
            )

        fields = self.field_classifier.classify(located_row.text)
        times = self.datetime_extractor.extract(located_row.text, now=now)

        extraction = self._build_extraction(
            fields,
            trade_date=times.trade_date,
            open_time=times.open_time,
            close_time=times.close_time,
        )
        logger.info(f"📊 Parsed trade row: {extraction.extracted_field_count()} fields extracted")
        return ParseResult(extraction=extraction, located_row=located_row)

    def _build_extraction(self, fields: ClassifiedFields, trade_date: datetime,
                          open_time: Optional[datetime] = None,
                          close_time: Optional[datetime] = None) -> TradeExtraction:
        return TradeExtraction(
            trade_date=trade_date,
            symbol=fields.symbol,
            side=fields.side,
            volume=fields.volume,
            open_price=fields.open_price,
            close_price=fields.close_price,
            take_profit=fields.take_profit,
            stop_loss=fields.stop_loss,
            profit_loss=fields.profit_loss,
            open_time=open_time,
            close_time=close_time,
        )


_trade_text_parser = None


def get_trade_text_parser() -> TradeTextParser:
    """Get or create the process-wide parser."""
    global _trade_text_parser
    if _trade_text_parser is None:
        _trade_text_parser = TradeTextParser()
    return _trade_text_parser


def parse_trade_text(raw_text: str, now: Optional[datetime] = None) -> TradeExtraction:
    """Parse OCR text with the default configuration."""
    return get_trade_text_parser().parse(raw_text, now=now).extraction


def locate_trade_row(raw_text: str) -> Optional[LocatedRow]:
    """First OCR line holding a ticker, a side and a decimal, or None."""
    return get_trade_text_parser().row_locator.locate(raw_text)


def classify_row_fields(row: str) -> ClassifiedFields:
    return get_trade_text_parser().field_classifier.classify(row)


def extract_fallback_fields(raw_text: str) -> ClassifiedFields:
    """Symbol and side only, for text where no trade row was located."""
    return get_trade_text_parser().fallback_extractor.extract(raw_text)
