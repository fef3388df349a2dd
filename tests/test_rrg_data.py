import numpy as np
import pandas as pd
import pytest

import rrg_data
from rrg_data import fetch_close_history, get_params_for_period, history_to_price_map
from rrg_errors import PriceFetchError
from rrg_models import Period


@pytest.mark.parametrize("period,expected", [
    (Period.FIVE_MIN, ("5d", "5m")),
    (Period.FIFTEEN_MIN, ("5d", "15m")),
    (Period.HOUR, ("1mo", "1h")),
    (Period.DAY, ("1y", "1d")),
    (Period.WEEK, ("5y", "1wk")),
    (Period.MONTH, ("max", "1mo")),
    ("1w", ("5y", "1wk")),
    ("3y", ("1y", "1d")),
])
def test_params_for_period(period, expected):
    assert get_params_for_period(period) == expected


def _history(closes, tz="America/New_York"):
    index = pd.date_range("2024-01-02 09:30", periods=len(closes), freq="D", tz=tz)
    return pd.DataFrame({"Open": closes, "Close": closes}, index=index)


def test_history_to_price_map_uses_epoch_seconds():
    history = _history([10.0, np.nan, 12.0])

    prices = history_to_price_map(history)

    first = int(pd.Timestamp("2024-01-02 09:30", tz="America/New_York").timestamp())
    assert list(prices) == [first, first + 2 * 86_400]
    assert list(prices.values()) == [10.0, 12.0]


def test_history_to_price_map_naive_index_is_utc():
    history = _history([1.0], tz=None)
    assert list(history_to_price_map(history)) == [int(pd.Timestamp("2024-01-02 09:30", tz="UTC").timestamp())]


def test_history_to_price_map_empty():
    assert history_to_price_map(pd.DataFrame()) == {}
    assert history_to_price_map(None) == {}


class FakeTicker:
    def __init__(self, frame=None, error=None):
        self.frame = frame
        self.error = error
        self.calls = []

    def __call__(self, symbol):
        self.symbol = symbol
        return self

    def history(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.frame


def test_fetch_close_history(monkeypatch):
    ticker = FakeTicker(_history([100.0, 101.0, 102.0]))
    monkeypatch.setattr(rrg_data.yf, "Ticker", ticker)

    prices = fetch_close_history("XLK", Period.WEEK)

    assert len(prices) == 3
    assert ticker.symbol == "XLK"
    assert ticker.calls[0]["period"] == "5y"
    assert ticker.calls[0]["interval"] == "1wk"


def test_fetch_provider_error(monkeypatch):
    monkeypatch.setattr(rrg_data.yf, "Ticker", FakeTicker(error=ConnectionError("proxy down")))

    with pytest.raises(PriceFetchError, match="proxy down"):
        fetch_close_history("XLK", Period.DAY)


def test_fetch_empty_frame(monkeypatch):
    monkeypatch.setattr(rrg_data.yf, "Ticker", FakeTicker(pd.DataFrame()))

    with pytest.raises(PriceFetchError, match="Invalid response format"):
        fetch_close_history("XLK", Period.DAY)
