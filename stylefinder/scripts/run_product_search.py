#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv

from stylefinder.core.logging import configure_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the style -> products pipeline against live detector/search keys.")
    parser.add_argument("--image-url", required=True, help="Publicly fetchable style photo URL.")
    parser.add_argument("--per-slot", type=int, default=10, help="Max products per slot.")
    parser.add_argument("--deadline", type=float, default=None, help="Pipeline deadline in seconds.")
    return parser.parse_args()


def main() -> int:
    load_dotenv()
    configure_logging()
    args = parse_args()

    # Imported after load_dotenv so settings pick up the .env values.
    from stylefinder.services.product_search import ConfigurationError, build_pipeline

    try:
        pipeline = build_pipeline()
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    pipeline.per_slot = args.per_slot
    if args.deadline is not None:
        pipeline.deadline_sec = args.deadline

    result = asyncio.run(pipeline.run(args.image_url))
    print(json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))
    counts = {slot: len(items) for slot, items in result.model_dump().items()}
    print(f"counts={counts}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
