from __future__ import annotations

from datetime import date, timedelta

import pandas as pd

from .models import ChartPoint, Granularity, PricePoint


def week_key(day: date) -> date:
    return day - timedelta(days=day.weekday())


def resample(points: list[PricePoint], granularity: Granularity) -> list[PricePoint]:
    """Keep the latest point of every week or month bucket.

    Buckets are returned in ascending order. A tie on the latest date goes to
    the point seen last in the input.
    """
    if granularity == Granularity.DAY:
        return list(points)
    if not points:
        return []

    frame = points_to_frame(points)
    # W-SUN periods run Monday through Sunday
    freq = "W-SUN" if granularity == Granularity.WEEK else "M"
    buckets = frame["date"].dt.to_period(freq)
    last_pos = frame.groupby(buckets, sort=True)["pos"].last()
    return [points[int(pos)] for pos in last_pos.tolist()]


def to_weekly(points: list[PricePoint]) -> list[PricePoint]:
    return resample(points, Granularity.WEEK)


def to_monthly(points: list[PricePoint]) -> list[PricePoint]:
    return resample(points, Granularity.MONTH)


def to_chart_points(points: list[PricePoint]) -> list[ChartPoint]:
    ordered = sorted(points, key=lambda p: p.date)
    return [ChartPoint(x=p.date.isoformat(), y=p.price) for p in ordered]


def points_from_frame(symbol: str, history: pd.DataFrame | None) -> list[PricePoint]:
    if history is None or history.empty or "Close" not in history.columns:
        return []
    if not isinstance(history.index, pd.DatetimeIndex):
        return []

    close = pd.to_numeric(history["Close"], errors="coerce").dropna()
    if close.index.tz is not None:
        close.index = close.index.tz_localize(None)
    close = close[close > 0]
    return [PricePoint(symbol=symbol, date=ts.date(), price=float(val)) for ts, val in close.items()]


def points_to_frame(points: list[PricePoint]) -> pd.DataFrame:
    """Frame of date/price with the input position, stable-sorted by date."""
    frame = pd.DataFrame(
        {
            "date": pd.to_datetime([p.date for p in points]),
            "price": [p.price for p in points],
            "pos": range(len(points)),
        }
    )
    return frame.sort_values("date", kind="stable").reset_index(drop=True)
