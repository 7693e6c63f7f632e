from __future__ import annotations

import math

from .config import (
    DEFAULT_SUITABILITY,
    GROWTH_RATING_THRESHOLDS,
    SWEET_SPOT_BANDS,
    ScoreTierThresholds,
    SuitabilityPolicy,
    SweetSpotBands,
)
from .currency import format_market_cap, to_usd
from .models import CompositeScore, Currency, FundamentalsSnapshot, RevenueGrowth, Tier

# (min CAGR %, points, tier, comment)
CAGR_STEPS = (
    (35.0, 30, Tier.EXCELLENT, "超高成長"),
    (25.0, 22, Tier.EXCELLENT, "高成長"),
    (15.0, 15, Tier.GOOD, "成長"),
    (8.0, 8, Tier.FAIR, "まあまあ"),
)

# (max current/low multiple, points, tier, comment)
PRICE_POSITION_STEPS = (
    (1.2, 15, Tier.EXCELLENT, "安値圏"),
    (1.5, 10, Tier.GOOD, "上昇余地あり"),
    (2.0, 5, Tier.FAIR, "上昇済み"),
    (3.0, 0, Tier.POOR, "高値圏"),
)
PRICE_POSITION_OVERHEAT = -10

ROE_STEPS = (
    (20.0, 10, Tier.EXCELLENT, "高収益"),
    (15.0, 7, Tier.GOOD, "良好"),
    (10.0, 4, Tier.FAIR, "まあまあ"),
)

OCF_MARGIN_STEPS = (
    (20.0, 5, Tier.EXCELLENT, "高い"),
    (10.0, 3, Tier.GOOD, "良好"),
)

PER_STEPS = (
    (25.0, 10, Tier.EXCELLENT, "適正範囲"),
    (50.0, 6, Tier.GOOD, "やや割高"),
    (100.0, 2, Tier.FAIR, "割高"),
)
PER_BUBBLE = -5


def evaluate_long_term_suitability(
    screening: dict[str, Tier],
    policy: SuitabilityPolicy = DEFAULT_SUITABILITY,
) -> Tier:
    if any(screening.get(key) == Tier.POOR for key in policy.critical_factors):
        return Tier.POOR

    tiers = list(screening.values())
    excellent = sum(1 for t in tiers if t == Tier.EXCELLENT)
    good_or_better = sum(1 for t in tiers if t in (Tier.EXCELLENT, Tier.GOOD))
    fair = sum(1 for t in tiers if t == Tier.FAIR)

    if good_or_better >= policy.best_min_good_or_better and excellent >= policy.best_min_excellent:
        return Tier.EXCELLENT
    if good_or_better >= policy.second_min_good_or_better:
        return Tier.GOOD
    if policy.second_min_fair is not None and fair >= policy.second_min_fair:
        return Tier.GOOD
    return Tier.FAIR


def compute_revenue_growth(revenues: list[float]) -> RevenueGrowth | None:
    """CAGR and latest year-over-year growth from annual revenues, oldest first."""
    vals = [float(v) for v in revenues if v is not None and math.isfinite(float(v))]
    if len(vals) < 2:
        return None

    oldest, latest = vals[0], vals[-1]
    if oldest <= 0 or latest <= 0:
        return None
    years = len(vals) - 1
    cagr = ((latest / oldest) ** (1.0 / years) - 1.0) * 100.0

    previous = vals[-2]
    recent = (latest - previous) / previous * 100.0 if previous > 0 else 0.0
    return RevenueGrowth(cagr=cagr, recent_growth=recent)


def rate_score(score: int, thresholds: ScoreTierThresholds = GROWTH_RATING_THRESHOLDS) -> Tier:
    if score >= thresholds.excellent:
        return Tier.EXCELLENT
    if score >= thresholds.good:
        return Tier.GOOD
    if score >= thresholds.fair:
        return Tier.FAIR
    return Tier.POOR


def _finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def _usable(value: float | None) -> bool:
    return _finite(value) and value > 0


def _line(tier: Tier, label: str, value: str, comment: str) -> str:
    return f"{tier.value} {label}: {value} ({comment})"


def _score_cagr(growth: RevenueGrowth | None) -> tuple[int, str]:
    if growth is None:
        return 0, _line(Tier.POOR, "売上CAGR", "-", "データ取得不可")
    for bound, points, tier, comment in CAGR_STEPS:
        if growth.cagr >= bound:
            return points, _line(tier, "売上CAGR", f"{growth.cagr:.1f}%", comment)
    return 0, _line(Tier.POOR, "売上CAGR", f"{growth.cagr:.1f}%", "低成長")


def _score_acceleration(growth: RevenueGrowth | None) -> tuple[int, str]:
    if growth is None:
        return 0, _line(Tier.POOR, "直近成長率", "-", "データ取得不可")
    value = f"{growth.recent_growth:.1f}%"
    gap = growth.recent_growth - growth.cagr
    if gap >= 5.0:
        return 10, _line(Tier.EXCELLENT, "直近成長率", value, "加速中")
    if gap >= 0.0:
        return 5, _line(Tier.GOOD, "直近成長率", value, "トレンド維持")
    if gap >= -10.0:
        return -5, _line(Tier.FAIR, "直近成長率", value, "やや鈍化")
    return -10, _line(Tier.POOR, "直近成長率", value, "鈍化懸念")


def _score_market_cap(market_cap: float, currency: Currency, usd_jpy_rate: float) -> tuple[int, str]:
    if not _usable(market_cap):
        return 0, _line(Tier.POOR, "時価総額", "-", "データなし")

    bands: SweetSpotBands = SWEET_SPOT_BANDS[currency]
    size = market_cap / bands.unit
    label = format_market_cap(market_cap, currency)
    if currency == Currency.JPY:
        label = f"{label} (≈${to_usd(market_cap, currency, usd_jpy_rate) / 1e9:.1f}B)"

    if bands.best[0] <= size <= bands.best[1]:
        return 20, _line(Tier.EXCELLENT, "時価総額", label, "成長余地大")
    if bands.good[0] < size <= bands.good[1]:
        return 12, _line(Tier.GOOD, "時価総額", label, "許容範囲")
    if bands.fair_low[0] <= size < bands.fair_low[1] or bands.fair_high[0] < size <= bands.fair_high[1]:
        return 5, _line(Tier.FAIR, "時価総額", label, "やや範囲外")
    if size < bands.fair_low[0]:
        return -5, _line(Tier.POOR, "時価総額", label, "小さすぎる")
    return -10, _line(Tier.POOR, "時価総額", label, "大きすぎる")


def _score_price_position(current_price: float | None, low: float) -> tuple[int, str]:
    if not _usable(current_price) or not _usable(low):
        return 0, _line(Tier.POOR, "52週安値比", "-", "データなし")

    multiple = current_price / low
    value = f"{multiple:.1f}倍"
    for bound, points, tier, comment in PRICE_POSITION_STEPS:
        if multiple <= bound:
            return points, _line(tier, "52週安値比", value, comment)
    return PRICE_POSITION_OVERHEAT, _line(Tier.POOR, "52週安値比", value, "急騰済み")


def _score_roe(return_on_equity: float) -> tuple[int, str]:
    if not _finite(return_on_equity):
        return 0, _line(Tier.POOR, "ROE", "-", "データなし")

    roe = (return_on_equity or 0.0) * 100.0
    value = f"{roe:.1f}%"
    for bound, points, tier, comment in ROE_STEPS:
        if roe >= bound:
            return points, _line(tier, "ROE", value, comment)
    # growth-stage losses are not penalized
    if roe < 0:
        return 0, _line(Tier.FAIR, "ROE", value, "赤字(先行投資期)")
    return 0, _line(Tier.FAIR, "ROE", value, "低い")


def _score_cf_margin(operating_cashflow: float, revenue: float) -> tuple[int, str]:
    if not _usable(revenue) or not _finite(operating_cashflow):
        return 0, _line(Tier.POOR, "営業CFマージン", "-", "データなし")

    margin = operating_cashflow / revenue * 100.0
    value = f"{margin:.1f}%"
    for bound, points, tier, comment in OCF_MARGIN_STEPS:
        if margin >= bound:
            return points, _line(tier, "営業CFマージン", value, comment)
    if margin > 0:
        return 1, _line(Tier.FAIR, "営業CFマージン", value, "プラス")
    return 0, _line(Tier.POOR, "営業CFマージン", value, "マイナス")


def _score_per(per: float) -> tuple[int, str]:
    if not _usable(per):
        return 0, _line(Tier.POOR, "PER", "-", "赤字または異常値")

    value = f"{per:.1f}倍"
    for bound, points, tier, comment in PER_STEPS:
        if per <= bound:
            return points, _line(tier, "PER", value, comment)
    return PER_BUBBLE, _line(Tier.POOR, "PER", value, "バブル懸念")


def evaluate_growth_potential(
    snapshot: FundamentalsSnapshot,
    currency: Currency,
    revenue_growth: RevenueGrowth | None = None,
    current_price: float | None = None,
    usd_jpy_rate: float = 0.0,
    thresholds: ScoreTierThresholds = GROWTH_RATING_THRESHOLDS,
) -> CompositeScore:
    """Weighted growth score: revenue growth 40, market cap 20, price position 15,
    profitability 15, PER 10. The total is not clamped and can go negative.
    """
    if current_price is None:
        current_price = snapshot.current_price

    parts = [
        _score_cagr(revenue_growth),
        _score_acceleration(revenue_growth),
        _score_market_cap(snapshot.market_cap, currency, usd_jpy_rate),
        _score_price_position(current_price, snapshot.fifty_two_week_low),
        _score_roe(snapshot.return_on_equity),
        _score_cf_margin(snapshot.operating_cashflow, snapshot.revenue),
        _score_per(snapshot.per),
    ]
    score = sum(points for points, _ in parts)
    rationale = [text for _, text in parts]
    return CompositeScore(rating=rate_score(score, thresholds), score=int(score), rationale=rationale)
