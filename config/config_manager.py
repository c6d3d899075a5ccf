"""
Configuration Manager for Trade Screenshot Extraction
"""
import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

# Tickers the closed-position table can show
DEFAULT_SYMBOLS = [
    'BTC', 'ETH', 'BNB', 'ADA', 'SOL', 'XRP', 'DOT', 'DOGE', 'MATIC', 'AVAX',
    'LINK', 'UNI', 'LTC', 'ATOM', 'ETC', 'XLM', 'ALGO', 'FIL', 'TRX', 'EOS',
    'AAVE', 'MKR', 'COMP', 'SUSHI', 'YFI', 'SNX', 'CRV', 'BAL', 'ZRX', 'BAT',
    'ZEC', 'DASH', 'XMR', 'WAVES', 'NEAR', 'FTM', 'SAND', 'MANA', 'ENJ', 'AXS',
    'GALA', 'CHZ', 'THETA', 'FLOW', 'ICP', 'HBAR', 'VET', 'IOTA', 'NEO', 'ONT',
    'QTUM', 'ZIL', 'IOST', 'KSM',
]


@dataclass
class TradeOCRConfig:
    """Configuration class for OCR recognition and trade row extraction."""

    # Path configuration
    config_path: str = ""

    # Timeouts (seconds)
    fetch_timeout: float = 30.0
    recognition_timeout: float = 30.0
    extraction_timeout: float = 120.0

    # Image input limits
    max_image_bytes: int = 5 * 1024 * 1024
    allowed_image_formats: List[str] = field(default_factory=lambda: [
        'JPEG', 'PNG', 'GIF', 'WEBP'
    ])

    # Tesseract engine
    tesseract_cmd: Optional[str] = None
    language: str = "eng"
    tesseract_flags: str = "--oem 3 --psm 6"
    min_image_width: int = 1600

    # Row extraction vocabulary
    symbols: List[str] = field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    quote_suffixes: List[str] = field(default_factory=lambda: ['USDT', 'USDC', 'USD'])
    decorative_glyphs: str = "•●○◦▪▫■□◆◇▲△▼▽►◄★☆✓✔|"

    def __post_init__(self):
        """Resolve config path and load overrides from JSON and environment."""
        current_file = Path(__file__).resolve()
        config_dir = current_file.parent

        if not self.config_path:
            self.config_path = os.getenv('TRADE_OCR_CONFIG') or str(config_dir / "trade_ocr_config.json")

        self.load_config()
        self.apply_env_overrides()

    def load_config(self):
        """Load configuration from JSON if file exists."""
        if not os.path.exists(self.config_path):
            return
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load config from {self.config_path}: {e}")
            return

        for key, value in data.items():
            if key != 'config_path' and hasattr(self, key):
                setattr(self, key, value)

    def apply_env_overrides(self):
        """Environment variables win over the JSON file."""
        self.tesseract_cmd = os.getenv('TESSERACT_CMD') or self.tesseract_cmd
        self.language = os.getenv('TRADE_OCR_LANGUAGE') or self.language

        for attr, env_name in [
            ('fetch_timeout', 'TRADE_OCR_FETCH_TIMEOUT'),
            ('recognition_timeout', 'TRADE_OCR_RECOGNITION_TIMEOUT'),
            ('extraction_timeout', 'TRADE_OCR_EXTRACTION_TIMEOUT'),
        ]:
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                setattr(self, attr, float(raw))
            except ValueError:
                logger.warning(f"Ignoring non-numeric {env_name}={raw!r}")


class ConfigManager:
    """Wrapper around TradeOCRConfig giving normalized vocabulary lists to extractors."""

    def __init__(self, config_path=None):
        self.ocr_config = TradeOCRConfig(config_path=config_path) if config_path else TradeOCRConfig()

    def get_symbols(self) -> List[str]:
        """Get the ticker allow-list, uppercased and de-duplicated in order."""
        seen = []
        for symbol in self.ocr_config.symbols:
            symbol = symbol.strip().upper()
            if symbol and symbol not in seen:
                seen.append(symbol)
        return seen

    def get_quote_suffixes(self) -> List[str]:
        return [s.upper() for s in self.ocr_config.quote_suffixes]

    def get_decorative_glyphs(self) -> str:
        return self.ocr_config.decorative_glyphs


_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get or create the process-wide config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
