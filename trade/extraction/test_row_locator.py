from trade.extraction.row_locator import RowLocator
from trade.extraction.shared_utils import PatternMatcher, TextCleaner


def _locator():
    return RowLocator(PatternMatcher(['BTC', 'ETH', 'NEAR', 'LINK'], ['USDT', 'USD']), TextCleaner())


def test_locates_first_line_with_ticker_side_and_decimal():
    text = "\n".join([
        "Closed positions",
        "Symbol Type Volume Open price Close price",
        "BTC Buy 0.02 87.526.77 87461.90",
        "ETH Sell 1.50 3120.44 3098.10",
    ])

    row = _locator().locate(text)

    assert row is not None
    assert row.text == "BTC Buy 0.02 87.526.77 87461.90"
    assert row.line_number == 3


def test_conditions_must_hold_on_the_same_line():
    text = "BTC overview\nBuy orders\nVolume 0.02"

    assert _locator().locate(text) is None


def test_line_without_decimal_is_not_a_row():
    assert _locator().locate("ETH position closed, sell order filled") is None


def test_lowercase_prose_is_not_a_ticker():
    assert _locator().locate("the market is near a buy zone at 1.25") is None


def test_side_keyword_is_case_insensitive():
    row = _locator().locate("LINK SELL 3.00 1450.25 1432.80")

    assert row is not None
    assert row.line_number == 1


def test_ticker_with_quote_suffix_is_recognized():
    row = _locator().locate("BTCUSDT Sell 0.10 64250.00 64100.50")

    assert row is not None
    assert row.text.startswith("BTCUSDT")


def test_empty_text_has_no_row():
    assert _locator().locate("") is None
    assert _locator().locate("   \n\n  ") is None


def test_line_table_numbers_non_blank_lines_from_one():
    df = _locator().build_line_table("first\n\n  second  \n")

    assert list(df['line_number']) == [1, 2]
    assert list(df['text']) == ['first', 'second']
