from trade.extraction.field_classifier import (
    CLASSIFICATION_RULES,
    FieldClassifier,
)
from trade.extraction.shared_utils import PatternMatcher, TextCleaner
from trade.models import TradeSide
from trade.support import scan_numeric_tokens

EXAMPLE_ROW = ("BTC Buy 0.02 87.526.77 87461.90 106997749 Jan 1, 12:37:44 PM "
               "Jan 1, 12:41:33 PM 87598.54 87482.01 -1.30")


def _classifier():
    return FieldClassifier(
        PatternMatcher(['BTC', 'ETH', 'SOL'], ['USDT', 'USD']),
        TextCleaner("•●|"),
    )


def test_example_row_is_fully_classified():
    fields = _classifier().classify(EXAMPLE_ROW)

    assert fields.symbol == 'BTC'
    assert fields.side is TradeSide.BUY
    assert fields.volume == 0.02
    assert fields.open_price == 87526.77
    assert fields.close_price == 87461.90
    assert fields.take_profit == 87598.54
    assert fields.stop_loss == 87482.01
    assert fields.profit_loss == -1.30


def test_position_id_is_discarded():
    fields = _classifier().classify(EXAMPLE_ROW)

    assert fields.discarded_tokens == ['106997749']
    assert 106997749.0 not in (fields.open_price, fields.close_price,
                                fields.take_profit, fields.stop_loss)


def test_decorations_and_unicode_minus_are_cleaned():
    fields = _classifier().classify("● SOL | Sell 2.5 1450.20 1462.75 −4.10")

    assert fields.symbol == 'SOL'
    assert fields.side is TradeSide.SELL
    assert fields.volume == 2.5
    assert fields.open_price == 1450.20
    assert fields.close_price == 1462.75
    assert fields.profit_loss == -4.10


def test_no_negative_number_means_no_profit_loss():
    fields = _classifier().classify("ETH Buy 0.50 3100.10 3150.60 3200.00 3050.00 25.25")

    assert fields.profit_loss is None


def test_fewer_prices_leave_trailing_fields_null():
    fields = _classifier().classify("ETH Sell 1.00 3100.10 3090.00")

    assert fields.open_price == 3100.10
    assert fields.close_price == 3090.00
    assert fields.take_profit is None
    assert fields.stop_loss is None


def test_surplus_prices_are_ignored():
    fields = _classifier().classify("BTC Buy 0.02 1001.5 1002.5 1003.5 1004.5 1005.5")

    assert fields.stop_loss == 1004.5


def test_only_first_small_decimal_is_volume():
    fields = _classifier().classify("BTC Buy 0.02 0.05 64000.10 64100.20")

    assert fields.volume == 0.02
    assert fields.open_price == 64000.10


def test_integers_are_never_volume_or_price():
    state = _classifier().classify_tokens(scan_numeric_tokens("5 2500 0.5"))

    assert state.volume == 0.5
    assert state.prices == []


def test_last_negative_wins():
    state = _classifier().classify_tokens(scan_numeric_tokens("-2.00 1500.50 -3.25"))

    assert state.profit_loss == -3.25
    assert state.prices == [1500.50]


def test_rules_are_applied_in_priority_order():
    assert [rule.name for rule in CLASSIFICATION_RULES] == [
        'volume', 'position_id', 'profit_loss', 'price'
    ]
