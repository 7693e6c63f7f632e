from __future__ import annotations

import numpy as np

from .models import PricePoint, PriceStats


def summarize(points: list[PricePoint]) -> PriceStats | None:
    if not points:
        return None

    values = np.array([p.price for p in points], dtype=float)
    # argmax/argmin return the first occurrence on ties
    max_idx = int(np.argmax(values))
    min_idx = int(np.argmin(values))
    max_price = float(values[max_idx])
    min_price = float(values[min_idx])
    price_range = max_price - min_price

    range_pct = (price_range / max_price) * 100.0 if max_price != 0 else 0.0
    volatility = (price_range / min_price) * 100.0 if min_price != 0 else 0.0

    return PriceStats(
        max_price=max_price,
        max_price_date=points[max_idx].date,
        min_price=min_price,
        min_price_date=points[min_idx].date,
        price_range=price_range,
        price_range_percent=range_pct,
        volatility_percent=volatility,
    )
