from datetime import datetime

from trade.extraction.datetime_extractor import DateTimeExtractor, to_24_hour

NOW = datetime(2026, 6, 20, 15, 45, 10)


def test_twelve_hour_conversion():
    assert to_24_hour(12, 'AM') == 0
    assert to_24_hour(12, 'PM') == 12
    assert to_24_hour(1, 'pm') == 13
    assert to_24_hour(11, 'AM') == 11


def test_open_and_close_times_from_row():
    times = DateTimeExtractor().extract(
        "BTC Buy 0.02 Jan 1, 12:37:44 PM Jan 1, 12:41:33 PM -1.30", now=NOW
    )

    assert times.open_time == datetime(2026, 1, 1, 12, 37, 44)
    assert times.close_time == datetime(2026, 1, 1, 12, 41, 33)
    assert times.trade_date == datetime(2026, 1, 1)


def test_midnight_hour_and_missing_comma():
    times = DateTimeExtractor().extract("Mar 5 12:05:00 AM Mar 5 1:15:30 PM", now=NOW)

    assert times.open_time == datetime(2026, 3, 5, 0, 5, 0)
    assert times.close_time == datetime(2026, 3, 5, 13, 15, 30)


def test_year_comes_from_current_clock():
    times = DateTimeExtractor().extract("Feb 2, 9:00:00 AM Feb 2, 9:30:00 AM")

    assert times.open_time.year == datetime.now().year
    assert times.close_time.year == datetime.now().year


def test_single_timestamp_leaves_both_times_null():
    times = DateTimeExtractor().extract("ETH Sell Jan 1, 12:37:44 PM", now=NOW)

    assert times.open_time is None
    assert times.close_time is None
    assert times.trade_date == NOW


def test_no_timestamps_defaults_trade_date_to_now():
    times = DateTimeExtractor().extract("", now=NOW)

    assert times.trade_date == NOW


def test_impossible_values_are_skipped():
    extractor = DateTimeExtractor()

    found = extractor.find_timestamps(
        "Jan 1, 13:00:00 PM Feb 30, 1:00:00 PM Apr 2, 3:04:05 AM", 2026
    )

    assert found == [datetime(2026, 4, 2, 3, 4, 5)]
