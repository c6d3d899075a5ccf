"""
Trade Models - transfer values produced by the extraction pipeline
"""

from .trade_models import (
    TradeSide,
    TradeExtraction,
    ExtractionState,
    ExtractionOutcome,
    REQUIRED_FIELDS
)

__all__ = [
    'TradeSide',
    'TradeExtraction',
    'ExtractionState',
    'ExtractionOutcome',
    'REQUIRED_FIELDS'
]
