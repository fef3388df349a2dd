from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Quadrant(str, Enum):
    LEADING = "Leading"
    WEAKENING = "Weakening"
    LAGGING = "Lagging"
    IMPROVING = "Improving"


class Period(str, Enum):
    FIVE_MIN = "5m"
    FIFTEEN_MIN = "15m"
    HOUR = "1h"
    DAY = "1d"
    WEEK = "1w"
    MONTH = "1M"


@dataclass(frozen=True)
class AlignedSeries:
    """Two price sequences projected onto their common, ascending timestamps."""
    timestamps: Tuple[int, ...]
    sector_prices: Tuple[float, ...]
    benchmark_prices: Tuple[float, ...]

    def __len__(self):
        return len(self.timestamps)


@dataclass(frozen=True)
class RRGPoint:
    rs_ratio: float
    rs_momentum: float
    produced_at: datetime
    as_of: Optional[int] = None  # epoch seconds of the bar this point reports


@dataclass(frozen=True)
class TickerSeries:
    """
    Rotation trail of one instrument against the benchmark.
    History is chronological, most recent point last.
    """
    symbol: str
    name: str
    history: Tuple[RRGPoint, ...]
    current_quadrant: Quadrant
    distance_from_center: float
    color: str = "#94a3b8"

    @property
    def latest(self) -> RRGPoint:
        return self.history[-1]


@dataclass(frozen=True)
class MarketInsight:
    summary: str
    top_sectors: Tuple[str, ...] = field(default_factory=tuple)
    risk_assessment: str = ""
    rotation_strategy: str = ""
