import asyncio
import base64
import io

import pytest
import requests
from PIL import Image

from config.config_manager import ConfigManager
from trade.exceptions import FetchError, ImageValidationError
from trade.ocr.image_loader import ImageLoader


class DummyResponse:
    def __init__(self, content=b"", status_error=None):
        self.content = content
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


def _loader(session=None, **overrides):
    config = ConfigManager().ocr_config
    for key, value in overrides.items():
        setattr(config, key, value)
    return ImageLoader(config, session=session or DummySession())


def _image(fmt):
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), "black").save(buffer, fmt)
    return buffer.getvalue()


def test_fetch_returns_response_body_and_passes_timeout(png_bytes):
    session = DummySession(DummyResponse(png_bytes))
    loader = _loader(session, fetch_timeout=7.5)

    assert asyncio.run(loader.fetch("https://cdn.example.com/trade.png")) == png_bytes
    assert session.requests == [("https://cdn.example.com/trade.png", 7.5)]


def test_network_failure_becomes_fetch_error():
    loader = _loader(DummySession(error=requests.ConnectionError("connection refused")))

    with pytest.raises(FetchError, match="connection refused"):
        asyncio.run(loader.fetch("https://cdn.example.com/trade.png"))


def test_http_error_status_becomes_fetch_error():
    response = DummyResponse(status_error=requests.HTTPError("404 Client Error"))
    loader = _loader(DummySession(response))

    with pytest.raises(FetchError, match="404"):
        loader.fetch_sync("https://cdn.example.com/missing.png")


def test_request_timeout_becomes_fetch_error():
    loader = _loader(DummySession(error=requests.Timeout()))

    with pytest.raises(FetchError, match="timed out"):
        loader.fetch_sync("https://cdn.example.com/slow.png")


def test_base64_data_url_is_decoded_without_network(png_bytes):
    session = DummySession()
    url = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")

    assert _loader(session).fetch_sync(url) == png_bytes
    assert session.requests == []


def test_malformed_data_urls_are_rejected():
    loader = _loader()

    with pytest.raises(FetchError):
        loader.fetch_sync("data:image/png;base64")
    with pytest.raises(FetchError):
        loader.fetch_sync("data:image/png;base64,@@not-base64@@")


def test_empty_url_is_rejected():
    with pytest.raises(FetchError):
        _loader().fetch_sync("")


def test_validate_accepts_supported_formats(png_bytes):
    loader = _loader()

    assert loader.validate(png_bytes) == "PNG"
    assert loader.validate(_image("JPEG")) == "JPEG"


def test_validate_rejects_empty_and_oversized_images(png_bytes):
    with pytest.raises(ImageValidationError, match="empty"):
        _loader().validate(b"")

    with pytest.raises(ImageValidationError, match="too large"):
        _loader(max_image_bytes=10).validate(png_bytes)


def test_validate_rejects_non_images():
    with pytest.raises(ImageValidationError, match="readable"):
        _loader().validate(b"this is not an image")


def test_validate_rejects_unsupported_formats():
    with pytest.raises(ImageValidationError, match="Unsupported image format BMP"):
        _loader().validate(_image("BMP"))
