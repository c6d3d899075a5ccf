import io
import threading
import time
from datetime import datetime

import pytest
from PIL import Image

from config.config_manager import ConfigManager
from trade.ocr.engine import EngineHandle
from trade.ocr.recognition_queue import RecognitionQueue
from trade.orchestration.trade_extractor import TradeScreenshotExtractor

FIXED_NOW = datetime(2026, 3, 15, 9, 30, 0)

SAMPLE_ROW = ("• BTC Buy 0.02 87.526.77 87461.90 106997749 Jan 1, 12:37:44 PM "
              "Jan 1, 12:41:33 PM 87598.54 87482.01 -1.30")

SAMPLE_OCR_TEXT = f"""
Positions   Orders   History

Symbol Type Volume Open price Close price Position Open time Close time T/P S/L Profit
{SAMPLE_ROW}

Balance: 10,234.56   Equity: 10,233.26
"""


class FakeEngine:
    """Stands in for Tesseract; records when each recognition ran."""

    def __init__(self, text=SAMPLE_OCR_TEXT, delay=0.0, fail_on=()):
        self.text = text
        self.delay = delay
        self.fail_on = set(fail_on)
        self.calls = []
        self.intervals = []
        self._lock = threading.Lock()

    def recognize(self, image_bytes):
        started = time.monotonic()
        if self.delay:
            time.sleep(self.delay)
        finished = time.monotonic()
        with self._lock:
            self.calls.append(image_bytes)
            self.intervals.append((started, finished))
        if image_bytes in self.fail_on:
            raise RuntimeError("engine exploded")
        return self.text


def _png(color="white"):
    buffer = io.BytesIO()
    Image.new("RGB", (32, 16), color).save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return _png()


@pytest.fixture
def make_engine():
    return FakeEngine


@pytest.fixture
def make_extractor():
    """Build an extractor around a fake engine with its own queue and config."""

    def factory(engine=None, clock=lambda: FIXED_NOW, **config_overrides):
        engine = engine or FakeEngine()
        config_manager = ConfigManager()
        for key, value in config_overrides.items():
            setattr(config_manager.ocr_config, key, value)
        queue = RecognitionQueue(EngineHandle(lambda: engine))
        return TradeScreenshotExtractor(
            recognition_queue=queue,
            config_manager=config_manager,
            clock=clock,
        )

    return factory


@pytest.fixture
def fixed_now():
    return FIXED_NOW
