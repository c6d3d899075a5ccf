"""
OCR Engine - Tesseract recognition behind a process-wide lazy handle

The engine is expensive to start and not safe for concurrent recognition.
EngineHandle creates it at most once per process: concurrent first callers
share one initialization, a failed initialization is not remembered, and the
instance lives until reset() is called explicitly. EngineHandle.recognize
holds a lock for the duration of each engine call, so recognitions issued from
different event loops or threads never overlap. RecognitionQueue adds FIFO
ordering on top.
"""

import asyncio
import io
import logging
import threading
from typing import Callable, Optional, Protocol

import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from config.config_manager import TradeOCRConfig, get_config_manager
from ..exceptions import EngineError

logger = logging.getLogger(__name__)


class OCREngine(Protocol):
    """Anything that turns image bytes into text."""

    def recognize(self, image_bytes: bytes) -> str:
        ...


class TesseractEngine:
    """OCR engine backed by the tesseract binary via pytesseract."""

    def __init__(self, config: TradeOCRConfig):
        self.config = config

        if config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = config.tesseract_cmd

        try:
            self.version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise EngineError(
                "Tesseract OCR binary not found. Install tesseract-ocr or set TESSERACT_CMD"
            ) from e

        logger.info(f"✅ Tesseract OCR initialized (version {self.version}, lang={config.language})")

    def _prepare_image(self, image_bytes: bytes) -> Image.Image:
        """Grayscale, autocontrast and upscale narrow screenshots for small table text."""
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise EngineError(f"OCR engine could not decode image: {e}") from e

        image = ImageOps.autocontrast(image.convert("L"))

        if image.width < self.config.min_image_width:
            ratio = self.config.min_image_width / image.width
            new_size = (self.config.min_image_width, int(image.height * ratio))
            image = image.resize(new_size, Image.Resampling.LANCZOS)
            logger.debug(f"Upscaled screenshot to {new_size} for OCR")

        return image

    def recognize(self, image_bytes: bytes) -> str:
        image = self._prepare_image(image_bytes)
        try:
            return pytesseract.image_to_string(
                image,
                lang=self.config.language,
                config=self.config.tesseract_flags,
            )
        except pytesseract.TesseractError as e:
            raise EngineError(f"Tesseract recognition failed: {e}") from e


class EngineHandle:
    """Lazily created, race-safe holder of the single OCR engine."""

    def __init__(self, factory: Callable[[], OCREngine]):
        self._factory = factory
        self._engine: Optional[OCREngine] = None
        self._lock = threading.Lock()
        # Held for the whole of every recognize() call, whichever loop or thread issued it
        self.recognition_lock = threading.Lock()
        self.initializations = 0

    @property
    def is_ready(self) -> bool:
        return self._engine is not None

    def get_sync(self) -> OCREngine:
        """Return the engine, creating it under the lock on first use."""
        engine = self._engine
        if engine is not None:
            return engine

        with self._lock:
            if self._engine is None:
                logger.info("Creating OCR engine...")
                self.initializations += 1
                try:
                    self._engine = self._factory()
                except EngineError:
                    logger.error("❌ OCR engine initialization failed; will retry on next call")
                    raise
                except Exception as e:
                    logger.error(f"❌ OCR engine initialization failed: {e}", exc_info=True)
                    raise EngineError(f"OCR engine initialization failed: {e}") from e
            return self._engine

    async def get(self) -> OCREngine:
        if self._engine is not None:
            return self._engine
        return await asyncio.to_thread(self.get_sync)

    def recognize(self, engine: OCREngine, image_bytes: bytes) -> str:
        """Run one blocking recognition while holding the process-wide engine lock."""
        with self.recognition_lock:
            return engine.recognize(image_bytes)

    def reset(self):
        """Drop the engine so the next call creates a fresh one."""
        with self._lock:
            self._engine = None


def create_tesseract_engine(config: Optional[TradeOCRConfig] = None) -> TesseractEngine:
    return TesseractEngine(config or get_config_manager().ocr_config)


# Singleton instance
_engine_handle = None
_engine_handle_lock = threading.Lock()


def get_engine_handle(config: Optional[TradeOCRConfig] = None) -> EngineHandle:
    """Get or create the process-wide engine handle (config applies on creation only)."""
    global _engine_handle

    with _engine_handle_lock:
        if _engine_handle is None:
            _engine_handle = EngineHandle(lambda: create_tesseract_engine(config))

    return _engine_handle
