from datetime import datetime, timezone

import numpy as np
import pytest

from rrg_models import RRGPoint

T0 = 1_700_000_000
DAY = 86_400


def make_price_map(n, seed=0, start=T0, step=DAY, drift=0.0005, vol=0.01, base=100.0):
    """Deterministic geometric random walk keyed by epoch seconds."""
    rng = np.random.default_rng(seed)
    returns = rng.normal(drift, vol, n)
    prices = base * np.cumprod(1 + returns)
    return {start + i * step: float(p) for i, p in enumerate(prices)}


def make_point(rs_ratio, rs_momentum, as_of=None):
    return RRGPoint(rs_ratio=rs_ratio, rs_momentum=rs_momentum,
                    produced_at=datetime(2024, 1, 1, tzinfo=timezone.utc), as_of=as_of)


@pytest.fixture
def price_map():
    return make_price_map


@pytest.fixture
def point():
    return make_point


@pytest.fixture
def sector_universe():
    return {
        "XLK": ["Technology", "#60a5fa"], "XLU": ["Utilities", "#fbbf24"],
        "XLE": ["Energy", "#f87171"], "XLC": ["Communication", "#a78bfa"],
        "XLB": ["Materials", "#fb923c"], "XLP": ["Consumer Staples", "#34d399"],
        "XLRE": ["Real Estate", "#f472b6"], "XLY": ["Consumer Discretionary", "#818cf8"],
        "XLI": ["Industrials", "#94a3b8"], "XLV": ["Health Care", "#2dd4bf"],
        "XLF": ["Financials", "#fb7185"],
    }


@pytest.fixture
def fake_fetch():
    """Builds a fetch(symbol, period) callable from {symbol: price_map or Exception}."""
    def factory(data):
        calls = []

        def fetch(symbol, period):
            calls.append((symbol, period))
            value = data[symbol]
            if isinstance(value, Exception):
                raise value
            return value

        fetch.calls = calls
        return fetch
    return factory
