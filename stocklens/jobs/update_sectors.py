from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from stocklens.cache_store import save_sector_rankings
from stocklens.config import SECTOR_RANKINGS_FILE, SECTOR_TOP_N
from stocklens.errors import MarketDataError
from stocklens.logging_config import setup_logging
from stocklens.market_data import fetch_daily_prices
from stocklens.sectors import SECTOR_STOCKS, average_sector_changes, compute_stock_changes, rank_sectors

logger = logging.getLogger(__name__)


def collect_changes(pause: float = 0.0) -> dict[str, dict[str, float] | None]:
    symbols = sorted({s for members in SECTOR_STOCKS.values() for s in members})
    changes: dict[str, dict[str, float] | None] = {}
    for symbol in symbols:
        try:
            changes[symbol] = compute_stock_changes(fetch_daily_prices(symbol, years=1))
        except MarketDataError as exc:
            logger.warning("%s: skipped (%s)", symbol, exc)
            changes[symbol] = None
        if changes[symbol] is None:
            logger.info("%s: not enough data", symbol)
        if pause:
            time.sleep(pause)
    return changes


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank sectors by average 1d/1w/1m price change")
    parser.add_argument("--top", type=int, default=SECTOR_TOP_N)
    parser.add_argument("--pause", type=float, default=0.5)
    parser.add_argument("--out-json", default=str(SECTOR_RANKINGS_FILE))
    return parser.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()
    averages = average_sector_changes(collect_changes(pause=args.pause))
    if not averages:
        raise SystemExit("No sector data collected.")

    payload = {"averages": averages, "rankings": rank_sectors(averages, top_n=args.top)}
    save_sector_rankings(payload, Path(args.out_json))
    logger.info("Saved rankings for %d sectors to %s", len(averages), args.out_json)


if __name__ == "__main__":
    main()
