"""
Sector rotation engine.

Fetches the benchmark first (hard dependency), then fetches and transforms
every sector concurrently. Each task reports an InstrumentOutcome instead of
raising, so one failing instrument never breaks the batch.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from rrg_config import BENCHMARK, DEFAULT_PERIOD, MAX_WORKERS, MIN_OVERLAP, SECTORS
from rrg_data import fetch_close_history
from rrg_errors import BenchmarkFetchError, InsufficientOverlapError, NoDataRetrievedError
from rrg_math import align_series, build_ticker_series, calculate_rrg_aligned
from rrg_models import TickerSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstrumentOutcome:
    symbol: str
    series: Optional[TickerSeries] = None
    skip_reason: Optional[str] = None

    @property
    def ok(self):
        return self.series is not None


def rotate_instrument(symbol, name, color, sector_prices, benchmark_prices,
                      min_overlap=MIN_OVERLAP, produced_at=None):
    """
    Aligns one sector against the benchmark and computes its trail.
    Raises InsufficientOverlapError below min_overlap; returns None if the trail is empty.
    """
    aligned = align_series(sector_prices, benchmark_prices)
    if len(aligned) < min_overlap:
        raise InsufficientOverlapError(symbol, len(aligned), min_overlap)

    history = calculate_rrg_aligned(aligned, produced_at=produced_at)
    return build_ticker_series(symbol, name, history, color=color)


def _process_sector(symbol, name, color, benchmark_prices, period, fetch, min_overlap, produced_at):
    try:
        sector_prices = fetch(symbol, period)
        series = rotate_instrument(symbol, name, color, sector_prices, benchmark_prices,
                                   min_overlap=min_overlap, produced_at=produced_at)
    except InsufficientOverlapError as e:
        logger.warning(f"{e} at period {getattr(period, 'value', period)}")
        return InstrumentOutcome(symbol, skip_reason=str(e))
    except Exception as e:
        logger.error(f"Skipping {symbol} due to error: {e}")
        return InstrumentOutcome(symbol, skip_reason=str(e))

    if series is None:
        logger.warning(f"Skipping {symbol}: RRG history is empty")
        return InstrumentOutcome(symbol, skip_reason="empty RRG history")
    return InstrumentOutcome(symbol, series=series)


def get_sector_rotation_data(trail_length=None, period=DEFAULT_PERIOD, fetch=fetch_close_history,
                             sectors=None, benchmark=BENCHMARK, max_workers=MAX_WORKERS,
                             min_overlap=MIN_OVERLAP):
    """
    Computes the rotation trail of every sector vs the benchmark.

    trail_length is accepted for call-site symmetry with the chart; the full
    history is always returned and slicing happens at display time.
    Results keep the order of `sectors`. Raises BenchmarkFetchError when the
    benchmark cannot be fetched and NoDataRetrievedError when every sector
    was skipped.
    """
    sectors = SECTORS if sectors is None else sectors

    try:
        benchmark_prices = fetch(benchmark, period)
    except Exception as e:
        raise BenchmarkFetchError(benchmark, e) from e

    produced_at = datetime.now(timezone.utc)
    outcomes = {}
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        future_to_symbol = {
            executor.submit(_process_sector, symbol, name, color, benchmark_prices,
                            period, fetch, min_overlap, produced_at): symbol
            for symbol, (name, color) in sectors.items()
        }
        for future in as_completed(future_to_symbol):
            outcome = future.result()
            outcomes[outcome.symbol] = outcome

    results = [outcomes[s].series for s in sectors if s in outcomes and outcomes[s].ok]
    skipped = len(sectors) - len(results)
    logger.info(f"Rotation computed for {len(results)} instruments ({skipped} skipped)")

    if not results:
        raise NoDataRetrievedError(period)
    return results
