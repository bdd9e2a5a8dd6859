"""
sections/overview.py
--------------------
'Overview' section — headline counts and the share of thefts in each
outcome status for the configured window.
"""

import streamlit as st

from utils.charts import status_bar_chart
from utils.constants import CHART_CONFIG
from utils.data_loaders import load_status_summary, load_theft_map_data
from utils.helpers import fmt_count, fmt_date_span, fmt_pct
from utils.legend import palette_from_frame
from utils.outcomes import StatusCategory


def render():
    st.title("Where Do Stolen Bikes Go?")
    st.markdown("""
    Every bicycle theft reported to a police force in England, Wales and
    Northern Ireland ends up with an outcome on police.uk. Most of those
    outcomes are not good news. This page sums up what happened to the
    thefts in the selected window; the map shows where they happened.
    """)

    data     = load_theft_map_data()
    summary  = load_status_summary()
    legend   = data["legend"]
    headline = summary["headline"].iloc[0]

    total = int(headline["total_incidents"])

    def share(status: StatusCategory) -> str:
        if not total:
            return "–"
        return fmt_pct(int(headline[status.value.lower()]) / total * 100)

    span = fmt_date_span(headline["date_from"], headline["date_to"])
    if total and span:
        st.caption(f"Bicycle thefts recorded {span}.")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Thefts recorded", fmt_count(total))
    col2.metric("Closed, no action", share(StatusCategory.CLOSED))
    col3.metric("Concluded",         share(StatusCategory.CONCLUDED))
    col4.metric("Still ongoing",     share(StatusCategory.ONGOING))

    st.divider()

    st.subheader("Outcome status")
    st.markdown("""
    *Closed* means the investigation ended without anyone being dealt with.
    *Concluded* means a suspect was cautioned, charged, fined or otherwise
    dealt with. *Ongoing* cases are still under investigation or awaiting
    court. *Unavailable* covers thefts with no outcome published.
    """)

    if legend.empty:
        st.info("No incidents match the configured window.")
        return

    palette = palette_from_frame(legend)
    counts  = {StatusCategory(s): int(c) for s, c in zip(legend["status"], legend["count"])}
    fig = status_bar_chart(palette, counts)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.caption("Source: data.police.uk street-level crime data")
