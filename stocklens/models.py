from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    JPY = "JPY"


class Granularity(str, Enum):
    DAY = "daily"
    WEEK = "weekly"
    MONTH = "monthly"


class Tier(str, Enum):
    EXCELLENT = "◎"
    GOOD = "〇"
    FAIR = "△"
    POOR = "×"


@dataclass
class PricePoint:
    symbol: str
    date: date
    price: float


@dataclass
class ChartPoint:
    x: str
    y: float


@dataclass
class PriceStats:
    max_price: float
    max_price_date: date
    min_price: float
    min_price_date: date
    price_range: float
    price_range_percent: float
    volatility_percent: float


@dataclass
class FundamentalsSnapshot:
    symbol: str
    return_on_equity: float = 0.0
    market_cap: float = 0.0
    revenue: float = 0.0
    total_cash: float = 0.0
    operating_cashflow: float = 0.0
    per: float = 0.0
    pbr: float = 0.0
    roa: float = 0.0
    equity_ratio: float = 0.0
    eps: float = 0.0
    fifty_two_week_low: float = 0.0
    fifty_two_week_high: float = 0.0
    revenue_growth: float = 0.0
    current_price: float = 0.0
    reported_currency: str = ""


@dataclass
class RevenueGrowth:
    cagr: float
    recent_growth: float


@dataclass
class CompositeScore:
    rating: Tier
    score: int
    rationale: list[str] = field(default_factory=list)


@dataclass
class StockReport:
    symbol: str
    currency: Currency
    stats: PriceStats | None
    screening: dict[str, Tier]
    actual_values: dict[str, float]
    long_term_suitability: Tier
    growth_score: CompositeScore
    exchange_rate: float
