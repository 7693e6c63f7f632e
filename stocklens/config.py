from dataclasses import dataclass, field
from pathlib import Path

from .models import Currency

PRICE_HISTORY_YEARS = 3
DOMESTIC_SUFFIXES = (".T", ".JP")

DEFAULT_USD_JPY_RATE = 150.0
EXCHANGE_RATE_SYMBOL = "JPY=X"

OKU = 1e8
BILLION = 1e9

CACHE_DIR = Path("data_cache")
SECTOR_RANKINGS_FILE = CACHE_DIR / "sector_rankings.json"
CACHE_TTL_SECONDS = 60 * 5
PRICE_CACHE_TTL_SECONDS = 60 * 10

SECTOR_MIN_POINTS = 21
SECTOR_TOP_N = 5


@dataclass(frozen=True)
class Bands:
    excellent: float
    good: float
    fair: float


@dataclass(frozen=True)
class RangeBands:
    excellent: tuple[float, float]
    good: tuple[float, float]
    fair: tuple[float, float]


@dataclass(frozen=True)
class ScreeningThresholds:
    roe: Bands = Bands(15.0, 10.0, 5.0)
    psr: Bands = Bands(1.0, 2.0, 3.0)
    cash_rich: Bands = Bands(50.0, 20.0, 10.0)
    positive_cf: Bands = Bands(0.0, -10.0, -20.0)
    per: Bands = Bands(15.0, 20.0, 30.0)
    pbr: Bands = Bands(1.0, 2.0, 3.0)
    roa: Bands = Bands(8.0, 5.0, 3.0)
    equity_ratio: Bands = Bands(60.0, 40.0, 20.0)
    eps: dict[Currency, Bands] = field(
        default_factory=lambda: {
            Currency.USD: Bands(1.0, 0.5, 0.1),
            Currency.JPY: Bands(100.0, 50.0, 10.0),
        }
    )
    # raw currency units
    market_cap: dict[Currency, RangeBands] = field(
        default_factory=lambda: {
            Currency.USD: RangeBands(
                excellent=(50 * BILLION, 500 * BILLION),
                good=(10 * BILLION, 1000 * BILLION),
                fair=(1 * BILLION, 10 * BILLION),
            ),
            Currency.JPY: RangeBands(
                excellent=(50_000 * OKU, 500_000 * OKU),
                good=(10_000 * OKU, 1_000_000 * OKU),
                fair=(1_000 * OKU, 10_000 * OKU),
            ),
        }
    )


LEGACY_ROA_BANDS = Bands(5.0, 3.0, 1.0)
DEFAULT_SCREENING = ScreeningThresholds()


@dataclass(frozen=True)
class SuitabilityPolicy:
    critical_factors: tuple[str, ...] = ("positive_cf", "equity_ratio")
    best_min_good_or_better: int = 5
    best_min_excellent: int = 2
    second_min_good_or_better: int = 3
    # None disables the fair-count route to the second tier
    second_min_fair: int | None = 4


DEFAULT_SUITABILITY = SuitabilityPolicy()


@dataclass(frozen=True)
class ScoreTierThresholds:
    excellent: int = 60
    good: int = 40
    fair: int = 25


GROWTH_RATING_THRESHOLDS = ScoreTierThresholds()


@dataclass(frozen=True)
class SweetSpotBands:
    """Market cap bands in display units (USD billions or JPY oku)."""

    unit: float
    best: tuple[float, float]
    good: tuple[float, float]
    fair_low: tuple[float, float]
    fair_high: tuple[float, float]


SWEET_SPOT_BANDS = {
    Currency.USD: SweetSpotBands(
        unit=BILLION,
        best=(0.3, 2.0),
        good=(2.0, 10.0),
        fair_low=(0.1, 0.3),
        fair_high=(10.0, 50.0),
    ),
    Currency.JPY: SweetSpotBands(
        unit=OKU,
        best=(300.0, 3000.0),
        good=(3000.0, 15000.0),
        fair_low=(100.0, 300.0),
        fair_high=(15000.0, 75000.0),
    ),
}
