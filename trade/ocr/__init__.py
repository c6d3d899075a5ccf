"""
Trade OCR Module - Image input and serialized engine access

Exports:
- ImageLoader: URL / data-URL fetch and image validation
- TesseractEngine, EngineHandle, get_engine_handle: the process-wide engine
- RecognitionQueue, get_recognition_queue: one recognition at a time
"""

from .image_loader import ImageLoader
from .engine import (
    OCREngine,
    TesseractEngine,
    EngineHandle,
    create_tesseract_engine,
    get_engine_handle
)
from .recognition_queue import RecognitionJob, RecognitionQueue, get_recognition_queue

__all__ = [
    'ImageLoader',
    'OCREngine',
    'TesseractEngine',
    'EngineHandle',
    'create_tesseract_engine',
    'get_engine_handle',
    'RecognitionJob',
    'RecognitionQueue',
    'get_recognition_queue'
]
