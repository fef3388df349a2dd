import logging

import pandas as pd
import yfinance as yf

from rrg_config import FALLBACK_PARAMS, PERIOD_PARAMS
from rrg_errors import PriceFetchError
from rrg_models import Period

logger = logging.getLogger(__name__)


def get_params_for_period(period):
    """Maps a Period to Yahoo Finance (range, interval)."""
    try:
        period = Period(period)
    except ValueError:
        return FALLBACK_PARAMS
    return PERIOD_PARAMS.get(period, FALLBACK_PARAMS)


def history_to_price_map(history):
    """
    Converts a yfinance history frame into {epoch seconds: close}.
    Bars with a missing close are dropped.
    """
    if history is None or history.empty or "Close" not in history.columns:
        return {}

    closes = history["Close"].dropna()
    index = pd.DatetimeIndex(closes.index)
    if index.tz is None:
        index = index.tz_localize("UTC")

    return {int(ts.timestamp()): float(px) for ts, px in zip(index, closes.values)}


def fetch_close_history(symbol, period):
    """Fetches close prices for one symbol; raises PriceFetchError on any provider failure."""
    range_, interval = get_params_for_period(period)
    try:
        history = yf.Ticker(symbol).history(period=range_, interval=interval, auto_adjust=False)
    except Exception as e:
        logger.error(f"Failed to fetch data for {symbol}: {e}")
        raise PriceFetchError(symbol, str(e)) from e

    price_map = history_to_price_map(history)
    if not price_map:
        logger.error(f"Failed to fetch data for {symbol}: empty or invalid response")
        raise PriceFetchError(symbol, "Invalid response format")

    logger.debug(f"{symbol}: {len(price_map)} bars ({range_}/{interval})")
    return price_map
