"""
Trade Orchestration Module - Main API entry points

Exports:
- TradeScreenshotExtractor: state machine over fetch, recognition and parsing
- get_trade_extractor: process-wide extractor
- extract_trade_data_from_image: bytes or URL in, ExtractionOutcome out
"""

from .trade_extractor import (
    TradeScreenshotExtractor,
    get_trade_extractor,
    extract_trade_data_from_image
)

__all__ = [
    'TradeScreenshotExtractor',
    'get_trade_extractor',
    'extract_trade_data_from_image'
]
