"""
Trade Support Module - numeric helpers shared by the extractors

Exports:
- normalize_number: OCR numeric token -> float with separator repair
- scan_numeric_tokens: all number-shaped substrings of a line, normalized
- NumericToken: one scanned token
"""

from .number_normalizer import NumericToken, normalize_number, scan_numeric_tokens

__all__ = [
    'NumericToken',
    'normalize_number',
    'scan_numeric_tokens'
]
