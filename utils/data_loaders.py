"""
utils/data_loaders.py
---------------------
All data loading functions for the dashboard.
Every function is decorated with @st.cache_data so that data is only
read from disk (or the police.uk API) once per session.

Missing processed files stop the page with a message naming the
processing script that produces them.
"""

import os

import pandas as pd
import streamlit as st

from utils.constants import PROCESSED_DIR
from utils.incidents import normalise_records
from utils.police_api import PoliceApiError, fetch_street_crimes


def _path(filename: str) -> str:
    return os.path.join(PROCESSED_DIR, filename)


def _read_or_stop(filename: str, script: str) -> pd.DataFrame:
    try:
        return pd.read_csv(_path(filename))
    except FileNotFoundError:
        st.error(f"{filename} not found. Run processing/{script} first.")
        st.stop()
    except Exception as e:
        st.error(f"Could not load {filename}: {e}")
        st.stop()


# ── Shared / multi-section ────────────────────────────────────────

@st.cache_data
def load_incidents() -> pd.DataFrame:
    return _read_or_stop("incidents_clean.csv", "01_clean_street_data.py")


@st.cache_data
def load_theft_map_data() -> dict:
    """
    Returns a dict of DataFrames written by 02_bicycle_theft_map.py.

    Keys:
        filtered – theft_filtered.csv, annotated incidents
        legend   – status_legend.csv, one row per legend entry in
                   palette order (status, colour, label, count)
    """
    script = "02_bicycle_theft_map.py"
    return {
        "filtered": _read_or_stop("theft_filtered.csv", script),
        "legend":   _read_or_stop("status_legend.csv",  script),
    }


@st.cache_data
def load_status_summary() -> dict:
    script = "03_precompute_summary.py"
    return {
        "monthly":  _read_or_stop("monthly_status_counts.csv", script),
        "headline": _read_or_stop("headline_totals.csv",       script),
    }


# ── Live data ─────────────────────────────────────────────────────

@st.cache_data(ttl=3600)
def get_live_data(lat: float, lng: float, date: str | None = None) -> pd.DataFrame | None:
    """
    Latest bicycle thefts near (lat, lng) from the police.uk API,
    normalised. Returns None if the API is unavailable.
    """
    try:
        raw = fetch_street_crimes(lat, lng, date=date)
    except PoliceApiError as e:
        st.warning(f"Could not fetch live data: {e}")
        return None
    return normalise_records(raw)
