from stocklens.currency import detect_currency, format_market_cap, normalize_symbol, to_usd
from stocklens.models import Currency


def test_detect_currency_by_suffix_or_code():
    assert detect_currency("7203.T") == Currency.JPY
    assert detect_currency("6758.jp") == Currency.JPY
    assert detect_currency("7203") == Currency.JPY
    assert detect_currency("AAPL") == Currency.USD
    assert detect_currency("BRK-B") == Currency.USD
    assert detect_currency("12345") == Currency.USD


def test_normalize_symbol():
    assert normalize_symbol(" 7203 ") == "7203.T"
    assert normalize_symbol("aapl") == "AAPL"
    assert normalize_symbol("6758.T") == "6758.T"
    assert normalize_symbol("") == ""


def test_to_usd_uses_supplied_rate():
    assert to_usd(150_000.0, Currency.JPY, 150.0) == 1000.0
    assert to_usd(1000.0, Currency.USD, 150.0) == 1000.0
    assert to_usd(1000.0, Currency.JPY, 0.0) == 0.0


def test_format_market_cap_units():
    assert format_market_cap(30e9, Currency.USD) == "30.0B"
    assert format_market_cap(4.5e11, Currency.JPY) == "4,500億円"
