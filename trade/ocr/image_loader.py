"""
Image Loader - Fetches screenshot bytes and checks they are a usable image

Usage:
    loader = ImageLoader(get_config_manager().ocr_config)
    image_bytes = await loader.fetch("https://res.cloudinary.com/.../trade.png")
    loader.validate(image_bytes)
"""

import asyncio
import base64
import binascii
import io
import logging
from typing import Optional
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError

from config.config_manager import TradeOCRConfig
from ..exceptions import FetchError, ImageValidationError

logger = logging.getLogger(__name__)


class ImageLoader:
    """Retrieves images from http(s) or data: URLs and validates image bytes."""

    def __init__(self, config: TradeOCRConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    async def fetch(self, url: str) -> bytes:
        """Fetch image bytes, bounded by the configured fetch timeout."""
        timeout = self.config.fetch_timeout
        try:
            return await asyncio.wait_for(asyncio.to_thread(self.fetch_sync, url), timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(f"Image fetch timed out after {timeout:g}s") from e

    def fetch_sync(self, url: str) -> bytes:
        if not url or not isinstance(url, str):
            raise FetchError("Image URL is empty")

        if url.startswith('data:'):
            return self.decode_data_url(url)

        logger.info(f"📥 Fetching image from URL: {url[:120]}")
        try:
            resp = self.session.get(url, timeout=self.config.fetch_timeout)
            resp.raise_for_status()
        except requests.Timeout as e:
            logger.error("Image fetch timed out")
            raise FetchError(f"Image fetch timed out after {self.config.fetch_timeout:g}s") from e
        except requests.RequestException as e:
            logger.error(f"Image fetch failed: {e}")
            raise FetchError(f"Image fetch failed: {e}") from e

        logger.info(f"✅ Image fetched, size: {len(resp.content)} bytes")
        return resp.content

    def decode_data_url(self, url: str) -> bytes:
        """Decode a data: URL such as data:image/png;base64,iVBOR..."""
        header, separator, payload = url.partition(',')
        if not separator:
            raise FetchError("Malformed data URL: missing ',' separator")

        if header.endswith(';base64'):
            try:
                return base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError) as e:
                raise FetchError(f"Malformed base64 data URL: {e}") from e
        return unquote_to_bytes(payload)

    def validate(self, image_bytes: bytes) -> str:
        """
        Check image bytes before they reach the OCR engine.

        Returns:
            The PIL format name (e.g. 'PNG')

        Raises:
            ImageValidationError: empty, over the size limit, undecodable, or
                a format outside allowed_image_formats
        """
        if not image_bytes:
            raise ImageValidationError("Image is empty")

        if len(image_bytes) > self.config.max_image_bytes:
            limit_mb = self.config.max_image_bytes / (1024 * 1024)
            raise ImageValidationError(
                f"Image too large: {len(image_bytes)} bytes (maximum {limit_mb:g} MB)"
            )

        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image_format = image.format
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ImageValidationError(f"Not a readable image: {e}") from e

        allowed = [f.upper() for f in self.config.allowed_image_formats]
        if not image_format or image_format.upper() not in allowed:
            raise ImageValidationError(
                f"Unsupported image format {image_format}; expected one of {', '.join(allowed)}"
            )

        return image_format
