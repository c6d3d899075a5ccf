"""
Text Cleaner - Handles OCR text cleaning and normalization
"""
import re
from typing import List


class TextCleaner:
    """Cleans OCR lines before tokenization."""

    def __init__(self, decorative_glyphs: str = ""):
        self.decorative_glyphs = decorative_glyphs
        self._glyph_pattern = re.compile('[' + re.escape(decorative_glyphs) + ']') if decorative_glyphs else None

    def split_lines(self, text: str) -> List[str]:
        """Split raw OCR text into trimmed, non-blank lines."""
        if not text:
            return []
        return [line.strip() for line in text.splitlines() if line.strip()]

    def clean_text_line_for_ocr(self, line: str) -> str:
        """
        Normalize OCR artifacts in one line.
        Replaces unicode dash/minus variants with '-' and collapses spacing.
        """
        if not line:
            return ""

        # Replace all dash variants with standard dash
        line = re.sub(r"[\u2010-\u2015\u2212]", "-", line)

        # Normalize spacing
        line = re.sub(r"\s+", " ", line)

        return line.strip()

    def strip_decorations(self, line: str) -> str:
        """Remove bullet/marker glyphs the table draws next to cells."""
        if not line:
            return ""
        if self._glyph_pattern is not None:
            line = self._glyph_pattern.sub(" ", line)
        return self.clean_text_line_for_ocr(line)
