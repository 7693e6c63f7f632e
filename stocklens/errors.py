class MarketDataError(Exception):
    code = "FETCH_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class NoDataError(MarketDataError):
    code = "NO_DATA"


class RateLimitError(MarketDataError):
    code = "RATE_LIMIT"


class FetchError(MarketDataError):
    code = "FETCH_ERROR"
