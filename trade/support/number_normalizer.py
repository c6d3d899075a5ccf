"""
Number Normalizer - Converts OCR numeric tokens into floats

The platform renders large prices with '.' as a digit-group separator in some
UI density modes, and OCR reproduces that verbatim ("87.526.77"). Every
numeric interpretation in the pipeline goes through normalize_number so the
separator repair happens before any value is compared or assigned.
"""
import re
import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

# Number-shaped substrings: optional sign, digits, comma groups, dot groups
NUMBER_TOKEN_PATTERN = re.compile(r'-?\d+(?:,\d{3})*(?:\.\d+)*')

# Two or more embedded dots, e.g. 87.526.77
MULTI_DOT_PATTERN = re.compile(r'^([+-]?)(\d+(?:\.\d+){2,})$')

DECIMAL_LITERAL_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)$')


@dataclass(frozen=True)
class NumericToken:
    """A number-shaped substring and its normalized value."""
    text: str
    value: float
    position: int

    @property
    def has_decimal(self) -> bool:
        """Whether the token as scanned contained a literal decimal point."""
        return '.' in self.text


def normalize_number(token: Optional[str]) -> Optional[float]:
    """
    Convert an OCR numeric token to a float, None when it is not a number.

    Rules, in order:
    1. Strip every ',' (always a thousands separator on this platform).
    2. With two or more dots, all dots are separators: drop them and put a
       single decimal point two digits from the end.
    3. Otherwise parse as a plain decimal literal.

    >>> normalize_number("87.526.77")
    87526.77
    >>> normalize_number("1,234.56")
    1234.56
    """
    if token is None:
        return None

    cleaned = str(token).strip().replace(',', '')
    if not cleaned:
        return None

    multi_dot = MULTI_DOT_PATTERN.match(cleaned)
    if multi_dot:
        sign, body = multi_dot.groups()
        digits = body.replace('.', '')
        cleaned = f"{sign}{digits[:-2]}.{digits[-2:]}"
        logger.debug(f"Repaired dotted thousands separator: {token!r} -> {cleaned}")

    if not DECIMAL_LITERAL_PATTERN.match(cleaned):
        return None

    return float(cleaned)


def scan_numeric_tokens(text: str) -> List[NumericToken]:
    """Every number-shaped substring of text, left to right, normalized."""
    tokens = []
    for match in NUMBER_TOKEN_PATTERN.finditer(text or ''):
        value = normalize_number(match.group(0))
        if value is None:
            continue
        tokens.append(NumericToken(text=match.group(0), value=value, position=match.start()))
    return tokens
