#!/usr/bin/env python3
"""
Process a trade screenshot: OCR the closed-position table and print the trade.

Usage:
    trade-ocr screenshot.png
    trade-ocr https://example.com/trade.png --json
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from config.config_manager import ConfigManager
from .ocr.engine import EngineHandle, create_tesseract_engine
from .ocr.recognition_queue import RecognitionQueue
from .orchestration.trade_extractor import TradeScreenshotExtractor

URL_PREFIXES = ('http://', 'https://', 'data:')


def build_extractor(config_path=None) -> TradeScreenshotExtractor:
    """Extractor with its own engine, configured from config_path when given."""
    config_manager = ConfigManager(config_path)
    engine_handle = EngineHandle(lambda: create_tesseract_engine(config_manager.ocr_config))
    return TradeScreenshotExtractor(
        recognition_queue=RecognitionQueue(engine_handle),
        config_manager=config_manager,
    )


def print_outcome(outcome, show_raw_text=False):
    """Human-readable summary of an extraction outcome."""
    if not outcome.success:
        print(f"❌ Extraction failed: {outcome.error}")
        return

    trade = outcome.data
    print("\n" + "=" * 70)
    print("TRADE EXTRACTION")
    print("=" * 70)

    if outcome.metadata.get('used_fallback'):
        print("⚠️ No trade row found, only symbol/side were salvaged")
    else:
        print(f"[✓] Trade row found on OCR line {outcome.metadata.get('row_line_number')}")

    print(f"    Symbol:       {trade.symbol or 'N/A'}")
    print(f"    Type:         {trade.side.value if trade.side else 'N/A'}")
    print(f"    Volume:       {trade.volume if trade.volume is not None else 'N/A'}")
    print(f"    Open price:   {trade.open_price if trade.open_price is not None else 'N/A'}")
    print(f"    Close price:  {trade.close_price if trade.close_price is not None else 'N/A'}")
    print(f"    Take profit:  {trade.take_profit if trade.take_profit is not None else 'N/A'}")
    print(f"    Stop loss:    {trade.stop_loss if trade.stop_loss is not None else 'N/A'}")
    print(f"    Profit/loss:  {trade.profit_loss if trade.profit_loss is not None else 'N/A'}")
    print(f"    Open time:    {trade.open_time.isoformat() if trade.open_time else 'N/A'}")
    print(f"    Close time:   {trade.close_time.isoformat() if trade.close_time else 'N/A'}")
    print(f"    Trade date:   {trade.trade_date.date().isoformat()}")

    missing = outcome.metadata.get('missing_fields') or []
    if missing:
        print(f"\n⚠️ Manual entry needed for: {', '.join(missing)}")

    if show_raw_text:
        print("-" * 70)
        print("OCR TEXT:")
        print(outcome.raw_text)
        print("-" * 70)


def main(argv=None):
    """Main function for command-line usage."""
    import argparse

    parser = argparse.ArgumentParser(description="Extract a closed trade from a trading platform screenshot")
    parser.add_argument("source", help="Screenshot file path, or http(s)/data: URL")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--raw-text", action="store_true", help="Also print the raw OCR text")
    parser.add_argument("--config", help="Path to a trade OCR JSON config file")
    parser.add_argument("--timeout", type=float, help="End-to-end deadline in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    extractor = build_extractor(args.config)

    if args.source.startswith(URL_PREFIXES):
        request = {'image_url': args.source}
    else:
        path = Path(args.source)
        if not path.is_file():
            print(f"❌ Error: Image file not found: {args.source}")
            return 1
        request = {'image_bytes': path.read_bytes()}

    outcome = asyncio.run(extractor.extract_within(timeout=args.timeout, **request))

    if args.json:
        result = outcome.to_dict()
        if outcome.success and not args.raw_text:
            result.pop('rawText', None)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print_outcome(outcome, show_raw_text=args.raw_text)

    return 0 if outcome.success else 1


if __name__ == "__main__":
    sys.exit(main())
