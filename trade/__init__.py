"""
Trade Screenshot Extraction - closed-position screenshots to trade records

Organized into 5 functional components:

📂 orchestration/ - Main API entry points
   ├─ TradeScreenshotExtractor: fetch -> recognize -> parse state machine
   └─ extract_trade_data_from_image: bytes or URL in, outcome out

📂 ocr/ - Image input and the shared OCR engine
   ├─ ImageLoader: URL / data-URL fetch and validation
   ├─ EngineHandle: lazy, race-safe Tesseract engine
   └─ RecognitionQueue: one recognition at a time

📂 extraction/ - OCR text to trade fields
   ├─ RowLocator, FieldClassifier, DateTimeExtractor
   ├─ FallbackExtractor: symbol/side when no row is found
   └─ TradeTextParser: composes the above

📂 support/ - normalize_number and numeric token scanning

📂 models/ - TradeExtraction, ExtractionOutcome

QUICK START:
    from trade import extract_trade_data_from_image

    outcome = await extract_trade_data_from_image(image_bytes)
    print(outcome.to_dict())
"""

from .exceptions import (
    TradeExtractionError,
    InvalidInputError,
    FetchError,
    ImageValidationError,
    EngineError,
    EngineTimeoutError
)
from .models import (
    TradeSide,
    TradeExtraction,
    ExtractionState,
    ExtractionOutcome,
    REQUIRED_FIELDS
)
from .support import normalize_number
from .extraction import TradeTextParser, parse_trade_text
from .orchestration import (
    TradeScreenshotExtractor,
    get_trade_extractor,
    extract_trade_data_from_image
)

__all__ = [
    # Errors
    'TradeExtractionError',
    'InvalidInputError',
    'FetchError',
    'ImageValidationError',
    'EngineError',
    'EngineTimeoutError',

    # Models
    'TradeSide',
    'TradeExtraction',
    'ExtractionState',
    'ExtractionOutcome',
    'REQUIRED_FIELDS',

    # Extraction
    'normalize_number',
    'TradeTextParser',
    'parse_trade_text',

    # Orchestration
    'TradeScreenshotExtractor',
    'get_trade_extractor',
    'extract_trade_data_from_image'
]
