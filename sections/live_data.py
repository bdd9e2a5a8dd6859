"""
sections/live_data.py
---------------------
'Live Data' section — latest bicycle thefts within a mile of a chosen
point, straight from the police.uk API and run through the same
classification and palette as the bulk data.
"""

import streamlit as st

from utils.charts import incident_map
from utils.constants import CHART_CONFIG, UK_MAP_CENTRE
from utils.data_loaders import get_live_data
from utils.legend import assign_palette
from utils.outcomes import count_statuses


def render():
    st.title("Live Data")
    st.markdown(
        "Most recent bicycle thefts within one mile of a point, "
        "via the police.uk API."
    )

    col1, col2, col3 = st.columns(3)
    lat  = col1.number_input("Latitude",  value=UK_MAP_CENTRE["lat"], format="%.4f")
    lng  = col2.number_input("Longitude", value=UK_MAP_CENTRE["lon"], format="%.4f")
    date = col3.text_input("Month (YYYY-MM, blank for latest)", value="").strip()

    with st.spinner("Fetching live data..."):
        live = get_live_data(lat, lng, date or None)

    if live is None:
        return
    if live.empty:
        st.info("No bicycle thefts reported near that point.")
        return

    st.success(f"{len(live):,} thefts loaded")
    palette = assign_palette(count_statuses(live))
    fig = incident_map(live, palette, zoom=14, height=550)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)
