"""
Field Classifier - Assigns the numbers of a located trade row to fields

The closed-position table has a fixed column order:

    symbol  side  volume  open  close  [position id]  open time  close time
    take profit  stop loss  profit/loss

Tokens are classified once each, left to right, by the first matching rule in
CLASSIFICATION_RULES. Prices are then assigned by position, which is exact as
long as OCR keeps the columns in reading order.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..models.trade_models import TradeSide
from ..support.number_normalizer import NumericToken, scan_numeric_tokens
from .shared_utils.pattern_matcher import PatternMatcher
from .shared_utils.text_cleaner import TextCleaner

logger = logging.getLogger(__name__)

VOLUME_UPPER_BOUND = 100
POSITION_ID_LOWER_BOUND = 100_000_000
PRICE_LOWER_BOUND = 1000

# Positional meaning of the price list
PRICE_FIELDS = ['open_price', 'close_price', 'take_profit', 'stop_loss']


@dataclass
class ClassifiedFields:
    """Fields recovered from one row (or from the whole text on fallback)."""
    symbol: Optional[str] = None
    side: Optional[TradeSide] = None
    volume: Optional[float] = None
    open_price: Optional[float] = None
    close_price: Optional[float] = None
    take_profit: Optional[float] = None
    stop_loss: Optional[float] = None
    profit_loss: Optional[float] = None
    discarded_tokens: List[str] = field(default_factory=list)


@dataclass
class ClassificationState:
    """Running state while walking a row's tokens."""
    volume: Optional[float] = None
    prices: List[float] = field(default_factory=list)
    profit_loss: Optional[float] = None
    discarded: List[NumericToken] = field(default_factory=list)


@dataclass(frozen=True)
class ClassificationRule:
    """A predicate over (token, state) and the assignment made when it holds."""
    name: str
    predicate: Callable[[NumericToken, ClassificationState], bool]
    assign: Callable[[NumericToken, ClassificationState], None]

    def matches(self, token: NumericToken, state: ClassificationState) -> bool:
        return self.predicate(token, state)


def _is_volume(token: NumericToken, state: ClassificationState) -> bool:
    return state.volume is None and token.has_decimal and 0 < token.value < VOLUME_UPPER_BOUND


def _assign_volume(token: NumericToken, state: ClassificationState) -> None:
    state.volume = token.value


def _is_position_id(token: NumericToken, state: ClassificationState) -> bool:
    return not token.has_decimal and token.value > POSITION_ID_LOWER_BOUND


def _discard(token: NumericToken, state: ClassificationState) -> None:
    state.discarded.append(token)


def _is_profit_loss(token: NumericToken, state: ClassificationState) -> bool:
    return token.value < 0


def _assign_profit_loss(token: NumericToken, state: ClassificationState) -> None:
    # Last negative wins: the P/L column comes after every other number
    state.profit_loss = token.value


def _is_price(token: NumericToken, state: ClassificationState) -> bool:
    return token.has_decimal and token.value > PRICE_LOWER_BOUND


def _append_price(token: NumericToken, state: ClassificationState) -> None:
    state.prices.append(token.value)


CLASSIFICATION_RULES: Sequence[ClassificationRule] = (
    ClassificationRule('volume', _is_volume, _assign_volume),
    ClassificationRule('position_id', _is_position_id, _discard),
    ClassificationRule('profit_loss', _is_profit_loss, _assign_profit_loss),
    ClassificationRule('price', _is_price, _append_price),
)


class FieldClassifier:
    """Classifies the tokens of a located trade row."""

    def __init__(self, pattern_matcher: PatternMatcher, text_cleaner: TextCleaner,
                 rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES):
        self.pattern_matcher = pattern_matcher
        self.text_cleaner = text_cleaner
        self.rules = list(rules)

    def classify_tokens(self, tokens: Sequence[NumericToken]) -> ClassificationState:
        """Apply the first matching rule to each token; unmatched tokens are ignored."""
        state = ClassificationState()
        for token in tokens:
            for rule in self.rules:
                if rule.matches(token, state):
                    rule.assign(token, state)
                    logger.debug(f"   🔢 {token.text!r} -> {rule.name}")
                    break
        return state

    def classify(self, row: str) -> ClassifiedFields:
        cleaned = self.text_cleaner.strip_decorations(row)

        fields = ClassifiedFields(
            symbol=self.pattern_matcher.find_symbol(cleaned),
            side=self.pattern_matcher.find_side(cleaned),
        )

        state = self.classify_tokens(scan_numeric_tokens(cleaned))
        fields.volume = state.volume
        fields.profit_loss = state.profit_loss
        fields.discarded_tokens = [token.text for token in state.discarded]

        for field_name, price in zip(PRICE_FIELDS, state.prices):
            setattr(fields, field_name, price)

        if len(state.prices) > len(PRICE_FIELDS):
            logger.warning(f"⚠️ {len(state.prices)} price-shaped tokens in row, "
                           f"ignoring {state.prices[len(PRICE_FIELDS):]}")

        return fields
