# FILE: sector_rotation.py
# ROLE: Live Sector Rotation Dashboard (RRG vs SPY)
# RUN: streamlit run sector_rotation.py

import streamlit as st

import rrg_config as rc
from rrg_chart import build_rotation_table, clamp_trail_length, format_last_refresh, plot_rrg_chart, quadrant_counts
from rrg_engine import get_sector_rotation_data
from rrg_errors import RotationError
from rrg_insights import get_market_insights
from rrg_models import Period, Quadrant
from rrg_style import style_rotation_table

rc.configure_logging()

# --- CONFIGURATION ---
st.set_page_config(layout="wide", page_title="QuantRotate RRG")
st.title("🔄 QuantRotate RRG: Live Sector Rotation")
st.caption(f"Relative Rotation Graph | Benchmark: {rc.BENCHMARK_NAME} | Source: Yahoo Finance")

METHODOLOGY = {
    Quadrant.LEADING:   ("LEADING (+RS, +MOM)", "Sectors are outperforming the benchmark with strong upward momentum."),
    Quadrant.WEAKENING: ("WEAKENING (+RS, -MOM)", "Sectors still outperforming but losing relative momentum; potential peak."),
    Quadrant.LAGGING:   ("LAGGING (-RS, -MOM)", "Sectors underperforming with weak momentum. Avoid or short bias."),
    Quadrant.IMPROVING: ("IMPROVING (-RS, +MOM)", "Sectors underperforming but momentum is turning; early recovery signal."),
}


# --- DATA INGESTION ---
@st.cache_data(ttl=rc.CACHE_TTL, show_spinner=False)
def load_rotation(period_value):
    return get_sector_rotation_data(period=Period(period_value))


# --- CONTROLS ---
periods = [p.value for p in Period]
c1, c2, c3 = st.columns([3, 3, 1])
with c1:
    period_value = st.radio("Period", periods, index=periods.index(rc.DEFAULT_PERIOD.value), horizontal=True)
with c2:
    trail_length = clamp_trail_length(st.slider("Trail", rc.TRAIL_MIN, rc.TRAIL_MAX, rc.INITIAL_TRAIL_LENGTH))
with c3:
    if st.button("🔄 Refresh", help="Refresh Market Data"):
        load_rotation.clear()
        st.session_state.pop("insights", None)

ticker_data = []
with st.spinner(f"Fetching Market Data | Period: {period_value} | Syncing with Yahoo Finance..."):
    try:
        ticker_data = load_rotation(period_value)
    except RotationError as e:
        st.error(str(e))

# Insights belong to one period; a new period supersedes the old commentary.
if st.session_state.get("insights_period") != period_value:
    st.session_state.pop("insights", None)
    st.session_state["insights_period"] = period_value

left, right = st.columns([8, 4])

# --- CHART / TABLE ---
with left:
    counts = quadrant_counts(ticker_data)
    legend = st.columns(4)
    for col, quad in zip(legend, Quadrant):
        col.markdown(f"<span style='color:{rc.QUADRANT_COLORS[quad]}; font-weight:bold'>● {quad.value.upper()}</span> ({counts[quad]})",
                     unsafe_allow_html=True)

    show_table = st.toggle("View Data", value=False)
    if ticker_data:
        if show_table:
            df = build_rotation_table(ticker_data)
            st.dataframe(style_rotation_table(df.style), use_container_width=True)
        else:
            st.plotly_chart(plot_rrg_chart(ticker_data, trail_length, title=f"Sector Rotation vs {rc.BENCHMARK} ({period_value})"),
                            use_container_width=True)

# --- MARKET INTELLIGENCE ---
with right:
    st.subheader("🤖 Market Intelligence")
    st.caption("GEMINI AI")

    label = "Refresh Analysis" if st.session_state.get("insights") else "Analyze Rotation"
    if st.button(label, disabled=not ticker_data, use_container_width=True) or (
            ticker_data and "insights" not in st.session_state):
        with st.spinner("Generating commentary..."):
            st.session_state["insights"] = get_market_insights(ticker_data)

    insights = st.session_state.get("insights")
    if insights:
        st.markdown("**🎯 Summary**")
        st.markdown(f"> *\"{insights.summary}\"*")
        st.markdown("**🚀 Top Performers**")
        st.markdown(" ".join(f"`{s}`" for s in insights.top_sectors) or "—")
        st.markdown("**⚠️ Risk View**")
        st.caption(insights.risk_assessment)
        st.markdown("**♟️ Strategy Output**")
        st.info(insights.rotation_strategy)
    elif ticker_data:
        st.caption("Commentary unavailable (set GEMINI_API_KEY to enable).")

    st.divider()
    st.markdown("**ℹ️ RRG Methodology**")
    for quad, (heading, text) in METHODOLOGY.items():
        st.markdown(f"<span style='color:{rc.QUADRANT_COLORS[quad]}; font-weight:bold'>{heading}</span><br>"
                    f"<span style='font-size:12px'>{text}</span>", unsafe_allow_html=True)

st.divider()
st.caption(f"Benchmark: {rc.BENCHMARK_NAME} | Source: Yahoo Finance | Last refresh: {format_last_refresh(ticker_data)}")
