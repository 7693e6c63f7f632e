from datetime import date

from stocklens.models import PricePoint
from stocklens.stats import summarize


def _p(day: str, price: float) -> PricePoint:
    return PricePoint(symbol="TEST", date=date.fromisoformat(day), price=price)


def test_summarize_empty_returns_none():
    assert summarize([]) is None


def test_summarize_single_point():
    stats = summarize([_p("2024-01-01", 10.0)])
    assert stats.max_price == 10.0
    assert stats.min_price == 10.0
    assert stats.price_range == 0.0
    assert stats.price_range_percent == 0.0


def test_summarize_range_and_dates():
    stats = summarize([_p("2024-01-01", 150.0), _p("2024-01-02", 200.0), _p("2024-01-03", 160.0)])
    assert stats.max_price_date == date(2024, 1, 2)
    assert stats.min_price_date == date(2024, 1, 1)
    assert stats.price_range == 50.0
    assert round(stats.price_range_percent, 4) == 25.0
    assert round(stats.volatility_percent, 4) == round(50.0 / 150.0 * 100.0, 4)


def test_summarize_ties_keep_first_encountered():
    stats = summarize([_p("2024-01-05", 5.0), _p("2024-01-01", 9.0), _p("2024-01-03", 9.0), _p("2024-01-02", 5.0)])
    assert stats.max_price_date == date(2024, 1, 1)
    assert stats.min_price_date == date(2024, 1, 5)
