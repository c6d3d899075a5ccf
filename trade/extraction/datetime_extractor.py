"""
DateTime Extractor - Recovers open/close timestamps from a trade row

The platform prints times as "Jan 1, 12:37:44 PM", without a year. The year
is taken from the extraction clock, so a trade closed on Dec 31 and uploaded
on Jan 1 lands in the wrong year. That approximation is accepted.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

logger = logging.getLogger(__name__)

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

TIMESTAMP_PATTERN = re.compile(
    r'\b(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+(\d{1,2}),?\s+'
    r'(\d{1,2}):(\d{2}):(\d{2})\s*(AM|PM)\b',
    re.IGNORECASE
)


@dataclass
class TradeTimes:
    open_time: Optional[datetime]
    close_time: Optional[datetime]
    trade_date: datetime


def to_24_hour(hour: int, meridiem: str) -> int:
    """12 AM -> 0, 12 PM -> 12, other PM hours +12."""
    meridiem = meridiem.upper()
    if meridiem == 'AM':
        return 0 if hour == 12 else hour
    return hour if hour == 12 else hour + 12


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


class DateTimeExtractor:
    """Parses the first two platform timestamps of a row as open and close."""

    def find_timestamps(self, row: str, year: int) -> List[datetime]:
        """Every valid timestamp in row, in order. Impossible dates are skipped."""
        timestamps = []
        for match in TIMESTAMP_PATTERN.finditer(row or ''):
            month_abbrev, day, hour, minute, second, meridiem = match.groups()
            hour = int(hour)
            if not 1 <= hour <= 12:
                logger.debug(f"Skipping timestamp with 12-hour value out of range: {match.group(0)!r}")
                continue
            try:
                timestamps.append(datetime(
                    year,
                    MONTHS[month_abbrev.lower()],
                    int(day),
                    to_24_hour(hour, meridiem),
                    int(minute),
                    int(second),
                ))
            except ValueError:
                logger.debug(f"Skipping invalid calendar timestamp: {match.group(0)!r}")
        return timestamps

    def extract(self, row: str, now: Optional[datetime] = None) -> TradeTimes:
        now = now or datetime.now()
        timestamps = self.find_timestamps(row, now.year)

        if len(timestamps) < 2:
            logger.info(f"⚠️ Found {len(timestamps)} timestamp(s) in row, trade date defaults to now")
            return TradeTimes(open_time=None, close_time=None, trade_date=now)

        open_time, close_time = timestamps[0], timestamps[1]
        logger.debug(f"   🕒 Open {open_time.isoformat()} / close {close_time.isoformat()}")
        return TradeTimes(open_time=open_time, close_time=close_time, trade_date=start_of_day(open_time))


def extract_trade_times(row: str, now: Optional[datetime] = None) -> TradeTimes:
    return DateTimeExtractor().extract(row, now=now)
