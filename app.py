import streamlit as st

from sections import live_data, outcomes, overview, theft_map

st.set_page_config(
    page_title="Bicycle Theft Outcomes",
    page_icon="🚲",
    layout="wide"
)

# ── Sidebar ───────────────────────────────────────────────────────

SECTIONS = {
    "Overview":            overview.render,
    "Theft Map":           theft_map.render,
    "Outcomes Over Time":  outcomes.render,
    "Live Data":           live_data.render,
}

st.sidebar.title("Bicycle Theft Outcomes")
section = st.sidebar.radio("Navigate", list(SECTIONS))
st.sidebar.caption(
    "Run `python run_all.py` first to build the processed data "
    "this dashboard reads."
)

SECTIONS[section]()
