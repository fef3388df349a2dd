import math

import pandas as pd
import plotly.graph_objects as go

from rrg_config import CENTER, QUADRANT_COLORS, TRAIL_MAX, TRAIL_MIN
from rrg_math import get_heading
from rrg_models import Quadrant

HEADING_ARROWS = {"NE": "↗️", "SE": "↘️", "SW": "↙️", "NW": "↖️", "FLAT": "➡️"}


def clamp_trail_length(value):
    return max(TRAIL_MIN, min(TRAIL_MAX, int(value)))


def tail(history, trail_length):
    """Most recent trail_length points of a trail (display-only slicing)."""
    if trail_length <= 0: return ()
    return tuple(history[-trail_length:])


def _axis_domain(values, pad_floor=2.0):
    lo, hi = min(values), max(values)
    pad = (hi - lo) * 0.2 or pad_floor
    return min(CENTER - 4, lo - pad), max(CENTER + 4, hi + pad)


def compute_axis_ranges(series_list, trail_length):
    """Domain covers every visible point with 20% padding and always includes 96..104."""
    points = [p for s in series_list for p in tail(s.history, trail_length)]
    xs = [p.rs_ratio for p in points if math.isfinite(p.rs_ratio)]
    ys = [p.rs_momentum for p in points if math.isfinite(p.rs_momentum)]
    if not xs or not ys:
        return (CENTER - 4, CENTER + 4), (CENTER - 4, CENTER + 4)
    return _axis_domain(xs), _axis_domain(ys)


def trail_width(distance):
    # Wider trails for instruments further from the centre
    return max(1.0, min(4.0, distance * 0.8))


# --- RRG FIGURE ---
def plot_rrg_chart(series_list, trail_length, title="Sector Rotation vs SPY", is_dark=True):
    fig = go.Figure()

    bg_color = "#0f172a" if is_dark else "#ffffff"
    grid_color = "#1e293b" if is_dark else "#ddd"
    (x0, x1), (y0, y1) = compute_axis_ranges(series_list, trail_length)

    # Quadrants
    quads = [
        (Quadrant.LEADING,   CENTER, x1, CENTER, y1),
        (Quadrant.WEAKENING, CENTER, x1, y0, CENTER),
        (Quadrant.LAGGING,   x0, CENTER, y0, CENTER),
        (Quadrant.IMPROVING, x0, CENTER, CENTER, y1),
    ]
    for quad, qx0, qx1, qy0, qy1 in quads:
        color = QUADRANT_COLORS[quad]
        fig.add_shape(type="rect", x0=qx0, y0=qy0, x1=qx1, y1=qy1, fillcolor=color,
                      opacity=0.05, layer="below", line_width=0)
        fig.add_annotation(x=(qx0 + qx1) / 2, y=(qy0 + qy1) / 2, text=quad.value.upper(),
                           showarrow=False, opacity=0.25, font=dict(size=24, color=color))

    # Crosshair at (100, 100)
    fig.add_hline(y=CENTER, line_dash="dash", line_color="#475569", line_width=2)
    fig.add_vline(x=CENTER, line_dash="dash", line_color="#475569", line_width=2)

    for s in series_list:
        trail = tail(s.history, trail_length)
        if not trail: continue
        color = QUADRANT_COLORS[s.current_quadrant]
        x_tail = [p.rs_ratio for p in trail]
        y_tail = [p.rs_momentum for p in trail]

        fig.add_trace(go.Scatter(
            x=x_tail, y=y_tail, mode="lines+markers",
            line=dict(color=color, width=trail_width(s.distance_from_center), shape="spline"),
            marker=dict(size=4, color=color), opacity=0.6, hoverinfo="skip", showlegend=False
        ))

        fig.add_trace(go.Scatter(
            x=[x_tail[-1]], y=[y_tail[-1]], mode="markers+text",
            marker=dict(color=color, size=12, line=dict(color="white", width=1.5)),
            text=[s.symbol], textposition="top right", name=s.name,
            hovertemplate=f"<b>{s.symbol}</b> {s.name}<br>RS-Ratio: %{{x:.2f}}<br>RS-Momentum: %{{y:.2f}}<extra></extra>"
        ))

    fig.update_layout(
        title=title,
        xaxis=dict(title="JdK RS-Ratio (Trend)", showgrid=True, gridcolor=grid_color, zeroline=False, range=[x0, x1]),
        yaxis=dict(title="JdK RS-Momentum (Rate of Change)", showgrid=True, gridcolor=grid_color, zeroline=False, range=[y0, y1]),
        paper_bgcolor=bg_color, plot_bgcolor=bg_color,
        font=dict(color="#94a3b8" if is_dark else "black"),
        height=700, showlegend=False
    )
    return fig


# --- DATA TABLE ---
def build_rotation_table(series_list):
    rows = []
    for s in series_list:
        last = s.latest
        rows.append({
            "Symbol": s.symbol,
            "Name": s.name,
            "Quadrant": s.current_quadrant.value,
            "Heading": HEADING_ARROWS[get_heading(s.history)],
            "RS-Ratio": last.rs_ratio,
            "RS-Momentum": last.rs_momentum,
            "Distance": s.distance_from_center,
        })
    return pd.DataFrame(rows, columns=["Symbol", "Name", "Quadrant", "Heading", "RS-Ratio", "RS-Momentum", "Distance"])


def quadrant_counts(series_list):
    counts = {q: 0 for q in Quadrant}
    for s in series_list:
        counts[s.current_quadrant] += 1
    return counts


def format_last_refresh(series_list):
    """Computation time of the displayed data (UTC), not the time of the page rerun."""
    if not series_list: return "—"
    return series_list[0].latest.produced_at.strftime("%H:%M:%S UTC")
