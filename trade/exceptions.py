"""
Extraction Errors - failures that abort a screenshot extraction

Parse ambiguity is never an error: unresolved fields are returned as None.
Only problems obtaining the image or running the OCR engine are raised, and
the orchestrator converts them into a failed ExtractionOutcome.
"""


class TradeExtractionError(Exception):
    """Base class for all extraction failures."""

    error_type = "extraction_error"


class InvalidInputError(TradeExtractionError):
    """Neither or both of image bytes and image URL were supplied."""

    error_type = "invalid_input"


class FetchError(TradeExtractionError):
    """The image could not be retrieved from its URL."""

    error_type = "fetch_error"


class ImageValidationError(TradeExtractionError):
    """The image bytes are empty, too large or not a supported image."""

    error_type = "invalid_image"


class EngineError(TradeExtractionError):
    """The OCR engine failed to initialize or to recognize the image."""

    error_type = "engine_error"


class EngineTimeoutError(EngineError):
    """Recognition did not settle before the caller's deadline."""

    error_type = "engine_timeout"
