"""
Trade Screenshot Extractor - Main entry point of the extraction pipeline

    IDLE -> FETCHING -> VALIDATING -> RECOGNIZING -> PARSING -> DONE
                 \\          \\              \\
                  +-----------+--------------+-> FAILED

FETCHING only happens for URL input; VALIDATING runs for every image.
PARSING cannot fail. Every call returns
an ExtractionOutcome; callers degrade to manual entry on failure.

Usage:
    from trade.orchestration import extract_trade_data_from_image

    outcome = await extract_trade_data_from_image(image_bytes)
    if outcome.success:
        trade = outcome.data
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional, Union

from config.config_manager import ConfigManager, get_config_manager
from ..exceptions import InvalidInputError, TradeExtractionError
from ..extraction.trade_text_parser import TradeTextParser
from ..models.trade_models import ExtractionOutcome, ExtractionState
from ..ocr.image_loader import ImageLoader
from ..ocr.recognition_queue import RecognitionQueue, get_recognition_queue

logger = logging.getLogger(__name__)


class TradeScreenshotExtractor:
    """Runs image -> OCR text -> TradeExtraction for one screenshot at a time."""

    def __init__(
        self,
        recognition_queue: Optional[RecognitionQueue] = None,
        config_manager: Optional[ConfigManager] = None,
        parser: Optional[TradeTextParser] = None,
        image_loader: Optional[ImageLoader] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config_manager = config_manager or get_config_manager()
        self.config = self.config_manager.ocr_config
        self.recognition_queue = recognition_queue or get_recognition_queue()
        self.parser = parser or TradeTextParser(self.config_manager)
        self.image_loader = image_loader or ImageLoader(self.config)
        self.clock = clock

    async def extract(self, image_bytes: Optional[bytes] = None,
                      image_url: Optional[str] = None) -> ExtractionOutcome:
        """
        Extract a trade from exactly one of image_bytes or image_url.

        Returns:
            ExtractionOutcome with data and raw_text on success, or error and
            error_type on failure. Never raises.
        """
        state = ExtractionState.IDLE

        try:
            if (image_bytes is None) == (image_url is None):
                raise InvalidInputError("Provide exactly one of image bytes or an image URL")

            if image_url is not None:
                state = ExtractionState.FETCHING
                logger.info("📥 Fetching screenshot...")
                image_bytes = await self.image_loader.fetch(image_url)
            else:
                logger.info(f"📷 Using provided image buffer, size: {len(image_bytes)} bytes")

            state = ExtractionState.VALIDATING
            self.image_loader.validate(image_bytes)

            state = ExtractionState.RECOGNIZING
            logger.info("🔍 Starting text recognition...")
            raw_text = await self.recognition_queue.recognize(
                image_bytes, timeout=self.config.recognition_timeout
            )
        except TradeExtractionError as e:
            logger.error(f"❌ Extraction failed while {state.value}: {e}")
            return ExtractionOutcome.failed(str(e), e.error_type, failed_during=state.value)
        except Exception as e:
            logger.error(f"❌ Unexpected extraction failure while {state.value}: {e}", exc_info=True)
            return ExtractionOutcome.failed(str(e) or 'OCR processing failed', 'extraction_error',
                                            failed_during=state.value)

        state = ExtractionState.PARSING
        logger.info(f"📝 OCR text extracted, length: {len(raw_text)}")
        logger.debug(f"   Extracted text preview: {raw_text[:200]!r}")

        try:
            result = self.parser.parse(raw_text, now=self.clock())
        except Exception as e:
            logger.error(f"❌ Unexpected parsing failure: {e}", exc_info=True)
            return ExtractionOutcome.failed(f"Parsing failed: {e}", 'extraction_error',
                                            failed_during=state.value)

        missing = result.extraction.missing_required_fields()
        if missing:
            logger.info(f"⚠️ Extraction incomplete, manual entry needed for: {', '.join(missing)}")

        return ExtractionOutcome.succeeded(
            result.extraction,
            raw_text,
            row_line_number=result.located_row.line_number if result.located_row else None,
            used_fallback=result.used_fallback,
            missing_fields=missing,
        )

    async def extract_within(self, image_bytes: Optional[bytes] = None,
                             image_url: Optional[str] = None,
                             timeout: Optional[float] = None) -> ExtractionOutcome:
        """extract() bounded by an end-to-end deadline (defaults to extraction_timeout)."""
        timeout = timeout if timeout is not None else self.config.extraction_timeout
        try:
            return await asyncio.wait_for(self.extract(image_bytes=image_bytes, image_url=image_url), timeout)
        except asyncio.TimeoutError:
            logger.error(f"❌ Extraction exceeded {timeout:g}s deadline")
            return ExtractionOutcome.failed(f"Extraction timed out after {timeout:g}s", 'extraction_timeout')


# Service instance for API integration
_trade_extractor = None


def get_trade_extractor() -> TradeScreenshotExtractor:
    """Get or create the process-wide extractor."""
    global _trade_extractor
    if _trade_extractor is None:
        _trade_extractor = TradeScreenshotExtractor()
    return _trade_extractor


async def extract_trade_data_from_image(image_input: Union[bytes, bytearray, str],
                                        timeout: Optional[float] = None) -> ExtractionOutcome:
    """
    Extract trade data from image bytes or an image URL (http(s) or data: URL).

    Args:
        image_input: Raw screenshot bytes, or a URL to fetch them from
        timeout: End-to-end deadline in seconds (default: extraction_timeout)
    """
    extractor = get_trade_extractor()

    if isinstance(image_input, (bytes, bytearray, memoryview)):
        return await extractor.extract_within(image_bytes=bytes(image_input), timeout=timeout)
    if isinstance(image_input, str):
        return await extractor.extract_within(image_url=image_input, timeout=timeout)

    return ExtractionOutcome.failed(
        f"Unsupported image input type: {type(image_input).__name__}", InvalidInputError.error_type
    )
