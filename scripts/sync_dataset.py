#!/usr/bin/env python3
"""
Manual ingestion check.

Usage:
    uv run python scripts/sync_dataset.py
    uv run python scripts/sync_dataset.py data/base.csv https://example.com/base.csv
    uv run python scripts/sync_dataset.py base.csv --select A100_601 A100_602
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import get_settings  # noqa: E402
from src.jobs.data_sync import DataSync  # noqa: E402
from src.modules.properties import get_stats  # noqa: E402
from src.modules.selections import Selection  # noqa: E402
from src.modules.selections.presenter import SelectionPresenter  # noqa: E402
from src.sources import get_dataset_fetcher  # noqa: E402
from src.utils.logging import setup_logging  # noqa: E402


async def main(sources: list[str], select: list[str]) -> int:
    """Run one ingestion pass and optionally resolve a selection."""
    data_sync = DataSync(fetcher=get_dataset_fetcher(candidates=sources or None))

    try:
        result = await data_sync.sync()

        print(f"\n{'=' * 60}")
        if not result.success:
            print(f"Sync FAILED: {result.error}")
            print(f"{'=' * 60}\n")
            return 1

        print(f"Loaded {result.count} properties from {result.source}")
        print(f"{'=' * 60}\n")

        for prop in data_sync.get_all()[:3]:
            print(prop)
            print()

        stats = get_stats(data_sync.get_all())
        print(f"Prices: avg {stats['avg_price']}, min {stats['min_price']}, max {stats['max_price']}")
        print(f"By status: {stats['by_status']}")

        if select:
            presenter = SelectionPresenter(data_sync)
            presented = await presenter.present(Selection(property_ids=select))
            print(f"\nSelection: {presented.status.value}")
            print(presented.resolution.diagnostics.summary())
            for prop in presented.properties:
                print(f"  - {prop.id}: {prop.title} ({prop.price})")
    finally:
        await data_sync.close()

    return 0


if __name__ == "__main__":
    load_dotenv()

    parser = argparse.ArgumentParser(description="Load a listing export and print a summary")
    parser.add_argument("sources", nargs="*", help="Candidate locations (default: DATASET_SOURCES)")
    parser.add_argument("--select", nargs="+", default=[], help="Property ids to resolve")
    args = parser.parse_args()

    setup_logging(get_settings().log_level)
    sys.exit(asyncio.run(main(args.sources, args.select)))
