"""
Trade Models - Data classes for extracted trades and extraction outcomes
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, List


# Fields the trade store refuses to save without
REQUIRED_FIELDS = ['symbol', 'side', 'open_price', 'close_price']


class TradeSide(str, Enum):
    """Direction of a closed position."""
    BUY = 'Buy'
    SELL = 'Sell'

    @classmethod
    def from_text(cls, text: Optional[str]) -> Optional['TradeSide']:
        """Map 'buy' / 'SELL' / ... to a side, None when unrecognized."""
        if not text:
            return None
        normalized = text.strip().title()
        for side in cls:
            if side.value == normalized:
                return side
        return None


@dataclass
class TradeExtraction:
    """Structured trade record recovered from one screenshot."""
    trade_date: datetime
    symbol: Optional[str] = None
    side: Optional[TradeSide] = None
    volume: Optional[float] = None
    open_price: Optional[float] = None
    close_price: Optional[float] = None
    take_profit: Optional[float] = None
    stop_loss: Optional[float] = None
    profit_loss: Optional[float] = None
    open_time: Optional[datetime] = None
    close_time: Optional[datetime] = None

    def missing_required_fields(self) -> List[str]:
        """Required fields still None; a non-empty list means manual entry."""
        return [name for name in REQUIRED_FIELDS if getattr(self, name) is None]

    def extracted_field_count(self) -> int:
        """Number of fields filled by extraction (trade_date is always set)."""
        names = [
            'symbol', 'side', 'volume', 'open_price', 'close_price', 'take_profit',
            'stop_loss', 'profit_loss', 'open_time', 'close_time'
        ]
        return sum(1 for name in names if getattr(self, name) is not None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the trade record's external field names."""
        return {
            'symbol': self.symbol,
            'type': self.side.value if self.side else None,
            'volumeLot': self.volume,
            'openPrice': self.open_price,
            'closePrice': self.close_price,
            'takeProfit': self.take_profit,
            'stopLoss': self.stop_loss,
            'profitLoss': self.profit_loss,
            'tradeDate': self.trade_date.isoformat(),
            'openTime': self.open_time.isoformat() if self.open_time else None,
            'closeTime': self.close_time.isoformat() if self.close_time else None,
        }


class ExtractionState(str, Enum):
    """States of one extraction call."""
    IDLE = 'idle'
    FETCHING = 'fetching'
    VALIDATING = 'validating'
    RECOGNIZING = 'recognizing'
    PARSING = 'parsing'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class ExtractionOutcome:
    """Result of an extraction call; never raised, always returned."""
    success: bool
    data: Optional[TradeExtraction] = None
    raw_text: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    state: ExtractionState = ExtractionState.IDLE
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def succeeded(cls, data: TradeExtraction, raw_text: str, **metadata) -> 'ExtractionOutcome':
        return cls(success=True, data=data, raw_text=raw_text,
                   state=ExtractionState.DONE, metadata=metadata)

    @classmethod
    def failed(cls, error: str, error_type: str = 'extraction_error', **metadata) -> 'ExtractionOutcome':
        return cls(success=False, error=error, error_type=error_type,
                   state=ExtractionState.FAILED, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {'success': True, 'data': self.data.to_dict(), 'rawText': self.raw_text}
        return {'success': False, 'error': self.error}
