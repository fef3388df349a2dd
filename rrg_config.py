# ==============================================================================
#  QUANTROTATE CONFIGURATION (Sector RRG vs SPY)
# ==============================================================================
import logging
import os

from dotenv import load_dotenv

from rrg_models import Period, Quadrant

load_dotenv()

# --- BENCHMARK ---
BENCHMARK = "SPY"
BENCHMARK_NAME = "SPY (S&P 500 ETF)"

# --- SECTOR UNIVERSE ---
# Format: "TICKER": ["Display Name", "Trail Colour"]
SECTORS = {
    "XLK":  ["Technology", "#60a5fa"],
    "XLU":  ["Utilities", "#fbbf24"],
    "XLE":  ["Energy", "#f87171"],
    "XLC":  ["Communication", "#a78bfa"],
    "XLB":  ["Materials", "#fb923c"],
    "XLP":  ["Consumer Staples", "#34d399"],
    "XLRE": ["Real Estate", "#f472b6"],
    "XLY":  ["Consumer Discretionary", "#818cf8"],
    "XLI":  ["Industrials", "#94a3b8"],
    "XLV":  ["Health Care", "#2dd4bf"],
    "XLF":  ["Financials", "#fb7185"],
}

QUADRANT_COLORS = {
    Quadrant.LEADING:   "#22c55e",  # Green
    Quadrant.WEAKENING: "#eab308",  # Yellow
    Quadrant.LAGGING:   "#ef4444",  # Red
    Quadrant.IMPROVING: "#3b82f6",  # Blue
}

# --- PERIOD MAP ---
# Period -> (Yahoo range, Yahoo interval)
PERIOD_PARAMS = {
    Period.FIVE_MIN:    ("5d", "5m"),
    Period.FIFTEEN_MIN: ("5d", "15m"),
    Period.HOUR:        ("1mo", "1h"),
    Period.DAY:         ("1y", "1d"),
    Period.WEEK:        ("5y", "1wk"),
    Period.MONTH:       ("max", "1mo"),
}
FALLBACK_PARAMS = ("1y", "1d")
DEFAULT_PERIOD = Period.WEEK

# --- RRG MATH ---
RS_WINDOW = 14        # SMA window over the relative ratio
MOMENTUM_LAG = 10     # Rate-of-change lag over the normalized ratio
MOMENTUM_SCALE = 500  # Amplification so momentum spans a range comparable to the ratio axis
MIN_OVERLAP = 30      # Minimum common timestamps per instrument
CENTER = 100.0

# --- DISPLAY ---
INITIAL_TRAIL_LENGTH = 12
TRAIL_MIN = 5
TRAIL_MAX = 60
CACHE_TTL = 3600

# --- AI INSIGHTS ---
INSIGHT_MODEL = os.getenv("RRG_INSIGHT_MODEL", "gemini-3-flash-preview")


def get_api_key():
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


# --- RUNTIME ---
MAX_WORKERS = int(os.getenv("RRG_MAX_WORKERS", "8"))
LOG_LEVEL = os.getenv("RRG_LOG_LEVEL", "INFO").upper()


def configure_logging(level=None):
    """Configures root logging once for the dashboard and scripts."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
