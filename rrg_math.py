import math
from datetime import datetime, timezone

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from rrg_config import CENTER, MOMENTUM_LAG, MOMENTUM_SCALE, RS_WINDOW
from rrg_models import AlignedSeries, Quadrant, RRGPoint, TickerSeries

_EMPTY = np.empty(0, dtype=float)


# --- SERIES ALIGNMENT ---
def _as_price_series(prices):
    """Price series keyed by epoch seconds; datetime indexes are converted (naive = UTC)."""
    if not isinstance(prices, pd.Series):
        return pd.Series(dict(prices), dtype=float)

    series = prices.astype(float)
    if isinstance(series.index, pd.DatetimeIndex):
        index = series.index
        if index.tz is None:
            index = index.tz_localize("UTC")
        series.index = pd.Index([int(ts.timestamp()) for ts in index], dtype="int64")
    return series[~series.index.duplicated(keep="last")]


def align_series(sector_prices, benchmark_prices):
    """
    Projects two timestamp->price mappings onto their common timestamps.
    Only exact key matches survive; no interpolation or gap filling.
    """
    sector = _as_price_series(sector_prices)
    bench = _as_price_series(benchmark_prices)

    common_idx = sector.index.intersection(bench.index).sort_values()

    return AlignedSeries(
        timestamps=tuple(int(t) for t in common_idx),
        sector_prices=tuple(float(v) for v in sector.loc[common_idx]),
        benchmark_prices=tuple(float(v) for v in bench.loc[common_idx]),
    )


# --- RRG MATH ENGINE ---
# Every step keeps IEEE-754 semantics: zero division and NaN propagate as
# non-finite values instead of raising.
def relative_ratio(sector_prices, benchmark_prices):
    s = np.asarray(sector_prices, dtype=float)
    b = np.asarray(benchmark_prices, dtype=float)
    if s.shape != b.shape:
        raise ValueError(f"Aligned series differ in length: {s.shape[0]} vs {b.shape[0]}")
    with np.errstate(divide="ignore", invalid="ignore"):
        return s / b


def smooth_ratio(ratio, window=RS_WINDOW):
    """Trailing SMA: value i is the mean of ratio[i-window:i], for i in [window, N)."""
    ratio = np.asarray(ratio, dtype=float)
    if len(ratio) <= window:
        return _EMPTY
    # Drop the last window, it would include the final bar itself.
    with np.errstate(invalid="ignore"):
        return sliding_window_view(ratio, window)[:-1].mean(axis=1)


def normalize(smoothed, center=CENTER):
    """Scales the whole trend by its own mean so it centres on 100."""
    smoothed = np.asarray(smoothed, dtype=float)
    if len(smoothed) == 0:
        return _EMPTY
    with np.errstate(divide="ignore", invalid="ignore"):
        return (smoothed / smoothed.mean()) * center


def momentum(normalized, lag=MOMENTUM_LAG, scale=MOMENTUM_SCALE, center=CENTER):
    normalized = np.asarray(normalized, dtype=float)
    if len(normalized) <= lag:
        return _EMPTY
    current = normalized[lag:]
    prev = normalized[:-lag]
    with np.errstate(divide="ignore", invalid="ignore"):
        return center + ((current - prev) / prev) * scale


def calculate_rrg(sector_prices, benchmark_prices, timestamps=None, produced_at=None,
                  window=RS_WINDOW, lag=MOMENTUM_LAG):
    """
    Calculates the RS-Ratio / RS-Momentum trail for one aligned pair.

    Normalization uses the full window, so the trail must be recomputed from
    scratch whenever new bars arrive. Returns max(0, N - window - lag) points.
    """
    normalized = normalize(smooth_ratio(relative_ratio(sector_prices, benchmark_prices), window))
    mom = momentum(normalized, lag)
    if len(mom) == 0:
        return []

    produced_at = produced_at or datetime.now(timezone.utc)
    offset = window + lag

    points = []
    for k, (r, m) in enumerate(zip(normalized[lag:], mom)):
        as_of = int(timestamps[k + offset]) if timestamps is not None else None
        points.append(RRGPoint(rs_ratio=float(r), rs_momentum=float(m),
                               produced_at=produced_at, as_of=as_of))
    return points


def calculate_rrg_aligned(aligned, produced_at=None):
    return calculate_rrg(aligned.sector_prices, aligned.benchmark_prices,
                         timestamps=aligned.timestamps, produced_at=produced_at)


# --- CLASSIFICATION ---
def classify_quadrant(rs_ratio, rs_momentum, center=CENTER):
    # Ties at the centre resolve to the >= side; NaN fails both tests -> Lagging.
    if rs_ratio >= center and rs_momentum >= center: return Quadrant.LEADING
    if rs_ratio >= center: return Quadrant.WEAKENING
    if rs_momentum >= center: return Quadrant.IMPROVING
    return Quadrant.LAGGING


def distance_from_center(rs_ratio, rs_momentum, center=CENTER):
    dx = rs_ratio - center
    dy = rs_momentum - center
    return math.sqrt(dx * dx + dy * dy)


def build_ticker_series(symbol, name, history, color="#94a3b8"):
    """Wraps a trail with the quadrant and distance of its last point. None for an empty trail."""
    if not history:
        return None
    last = history[-1]
    return TickerSeries(
        symbol=symbol,
        name=name,
        history=tuple(history),
        current_quadrant=classify_quadrant(last.rs_ratio, last.rs_momentum),
        distance_from_center=distance_from_center(last.rs_ratio, last.rs_momentum),
        color=color,
    )


def get_heading(history):
    """
    Direction of travel from T-1 to T on the RRG plane.
    Returns one of NE, SE, SW, NW or FLAT.
    """
    if len(history) < 2: return "FLAT"
    prev, curr = history[-2], history[-1]
    dx = curr.rs_ratio - prev.rs_ratio
    dy = curr.rs_momentum - prev.rs_momentum

    if dx > 0 and dy > 0: return "NE"
    if dx > 0 and dy < 0: return "SE"
    if dx < 0 and dy < 0: return "SW"
    if dx < 0 and dy > 0: return "NW"
    return "FLAT"
