from stocklens.cache_store import TTLCache, load_sector_rankings, save_sector_rankings


class _Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_ttl_cache_expires_entries():
    clock = _Clock()
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("report:AAPL", {"score": 42})

    clock.now += 299
    assert cache.get("report:AAPL") == {"score": 42}

    clock.now += 2
    assert cache.get("report:AAPL") is None
    assert len(cache) == 0


def test_ttl_cache_miss_and_clear():
    cache = TTLCache(ttl_seconds=60)
    assert cache.get("missing") is None
    cache.set("a", 1)
    cache.clear()
    assert cache.get("a") is None


def test_sector_rankings_round_trip(tmp_path):
    path = tmp_path / "nested" / "rankings.json"
    assert load_sector_rankings(path) is None

    save_sector_rankings({"rankings": {"1day": {"rising": [{"sector": "半導体", "change": 1.5}]}}}, path)
    loaded = load_sector_rankings(path)

    assert loaded["rankings"]["1day"]["rising"][0]["sector"] == "半導体"
    assert "updated_at_utc" in loaded


def test_expired_entry_read_twice_is_a_miss():
    clock = _Clock()
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("fx:JPY=X", 150.0)
    clock.now += 11

    assert cache.get("fx:JPY=X") is None
    assert cache.get("fx:JPY=X") is None
    assert len(cache) == 0
