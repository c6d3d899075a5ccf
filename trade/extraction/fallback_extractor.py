"""
Fallback Extractor - Salvages symbol and side when no trade row is found

Only used to pre-fill manual entry. Numbers, prices and times are not
attempted on text that failed row location.
"""
import logging

from .field_classifier import ClassifiedFields
from .shared_utils.pattern_matcher import PatternMatcher

logger = logging.getLogger(__name__)


class FallbackExtractor:

    def __init__(self, pattern_matcher: PatternMatcher):
        self.pattern_matcher = pattern_matcher

    def extract(self, raw_text: str) -> ClassifiedFields:
        fields = ClassifiedFields(
            symbol=self.pattern_matcher.find_symbol(raw_text),
            side=self.pattern_matcher.find_side(raw_text),
        )
        logger.info(f"🔄 Fallback extraction: symbol={fields.symbol}, "
                    f"side={fields.side.value if fields.side else None}")
        return fields
