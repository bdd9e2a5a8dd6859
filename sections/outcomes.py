"""
sections/outcomes.py
--------------------
'Outcomes Over Time' section — monthly counts per status and the raw
outcome wording behind each bucket.
"""

import streamlit as st

from utils.charts import monthly_status_chart
from utils.constants import CHART_CONFIG
from utils.data_loaders import load_status_summary, load_theft_map_data
from utils.legend import palette_from_frame


def render():
    st.title("Outcomes Over Time")
    st.markdown("""
    Recent thefts are more likely to show as *Ongoing* simply because the
    police have not finished with them yet. Older months settle into
    *Closed* or *Concluded* as investigations end, so compare months with
    that lag in mind.
    """)

    data    = load_theft_map_data()
    summary = load_status_summary()
    palette = palette_from_frame(data["legend"])
    monthly = summary["monthly"]

    if monthly.empty:
        st.info("No incidents match the configured window.")
        return

    fig = monthly_status_chart(monthly, palette)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.subheader("What each status is made of")
    filtered  = data["filtered"]
    breakdown = (
        filtered.fillna({"outcome_text": "No outcome recorded"})
        .groupby(["status", "outcome_text"])
        .size()
        .reset_index(name="incidents")
        .sort_values(["status", "incidents"], ascending=[True, False])
        .rename(columns={"status": "Status", "outcome_text": "Outcome",
                         "incidents": "Incidents"})
    )
    st.dataframe(breakdown, hide_index=True, use_container_width=True)
