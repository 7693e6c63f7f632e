from __future__ import annotations

from .config import SECTOR_MIN_POINTS, SECTOR_TOP_N
from .models import PricePoint

SECTOR_STOCKS: dict[str, list[str]] = {
    "AI・クラウド": ["NVDA", "MSFT", "GOOGL", "META", "AMZN", "ORCL", "ADBE", "NOW", "SNOW", "PLTR", "DDOG", "NET"],
    "半導体": ["TSM", "ASML", "AMD", "INTC", "QCOM", "AVGO", "MU", "MRVL", "ON", "ARM"],
    "EV・自動車": ["TSLA", "F", "GM", "RIVN", "LCID", "NIO"],
    "金融": ["JPM", "BAC", "WFC", "GS", "MS", "BLK", "AXP", "V"],
    "ヘルスケア・製薬": ["JNJ", "PFE", "ABBV", "LLY"],
    "エネルギー": ["XOM", "CVX", "COP", "SLB", "EOG"],
    "消費財・小売": ["WMT", "COST", "HD", "MCD", "NKE", "SBUX"],
    "通信・メディア": ["T", "VZ", "DIS", "NFLX", "SPOT", "EA"],
    "航空宇宙・防衛": ["BA", "LMT", "RTX", "GD"],
    "鉱山・資源": ["FCX", "NEM", "SCCO", "RIO", "BHP"],
    "量子コンピューティング": ["IONQ", "RGTI", "QBTS", "IBM"],
    "暗号資産・ブロックチェーン": ["COIN", "MARA", "RIOT", "MSTR"],
}

# offsets in trading days from the latest close
PERIODS = {"1day": 1, "1week": 5, "1month": 20}


def _change(current: float, past: float) -> float:
    return (current - past) / past * 100.0


def compute_stock_changes(prices: list[PricePoint]) -> dict[str, float] | None:
    if len(prices) < SECTOR_MIN_POINTS:
        return None
    newest_first = sorted(prices, key=lambda p: p.date, reverse=True)
    latest = newest_first[0].price
    out = {}
    for period, offset in PERIODS.items():
        past = newest_first[offset].price
        if past <= 0:
            return None
        out[period] = _change(latest, past)
    return out


def average_sector_changes(stock_changes: dict[str, dict[str, float] | None]) -> dict[str, dict[str, float]]:
    """Mean change per period for every sector with at least one usable stock."""
    averages: dict[str, dict[str, float]] = {}
    for sector, symbols in SECTOR_STOCKS.items():
        rows = [stock_changes[s] for s in symbols if stock_changes.get(s)]
        if not rows:
            continue
        averages[sector] = {period: sum(r[period] for r in rows) / len(rows) for period in PERIODS}
    return averages


def rank_sectors(averages: dict[str, dict[str, float]], top_n: int = SECTOR_TOP_N) -> dict[str, dict[str, list[dict]]]:
    rankings = {}
    for period in PERIODS:
        ordered = sorted(averages.items(), key=lambda item: item[1][period], reverse=True)
        rows = [{"sector": sector, "change": round(values[period], 2)} for sector, values in ordered]
        # top and bottom of the same ordering, regardless of sign
        rising = rows[:top_n]
        falling = rows[::-1][:top_n]
        rankings[period] = {"rising": rising, "falling": falling}
    return rankings
