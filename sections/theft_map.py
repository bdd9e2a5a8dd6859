"""
sections/theft_map.py
---------------------
'Theft Map' section — every filtered incident as a marker coloured by
outcome status, with the cluster layer available from the legend.
"""

import streamlit as st

from utils.charts import incident_map
from utils.constants import CHART_CONFIG
from utils.data_loaders import load_theft_map_data
from utils.legend import palette_from_frame
from utils.outcomes import StatusCategory


def render():
    st.title("Bicycle Theft Map")
    st.markdown("""
    Each dot is one reported theft, placed at the anonymised location
    police.uk publishes (the centre of the nearest street, not the exact
    spot). Click a status in the legend to hide it. Switch on the cluster
    layer to see where thefts concentrate when zoomed out.
    """)

    data     = load_theft_map_data()
    filtered = data["filtered"]
    palette  = palette_from_frame(data["legend"])

    statuses = st.multiselect(
        "Statuses to show",
        options=[status.value for status, _, _ in palette],
        default=[status.value for status, _, _ in palette],
    )
    shown   = [entry for entry in palette if entry[0].value in statuses]
    visible = filtered[filtered["status"].isin(statuses)]

    if visible.empty:
        st.info("No incidents to show for the selected statuses.")

    fig = incident_map(visible, shown)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    ongoing = int((filtered["status"] == StatusCategory.ONGOING.value).sum())
    st.caption(
        f"{len(filtered):,} incidents in total, {ongoing:,} still ongoing. "
        "Source: data.police.uk"
    )
