"""
utils/constants.py
------------------
Shared constants used across the processing scripts and dashboard sections.
Import from here rather than defining locally in section files.

The outcome literal sets below are the 'Last outcome category' strings
published by data.police.uk. They are grouped into four disjoint buckets
and are read-only: utils.outcomes builds its lookup from them once at
import time.
"""

import os

# ── Paths ─────────────────────────────────────────────────────────
RAW_DIR       = os.path.join("data", "raw")
PROCESSED_DIR = os.path.join("data", "processed")
OUTPUT_DIR    = "outputs"

# ── Default filter window ─────────────────────────────────────────
DEFAULT_CRIME_TYPE = "Bicycle theft"
DEFAULT_YEAR       = 2020
DEFAULT_MONTH_FROM = 1
DEFAULT_MONTH_TO   = 12

# ── Raw police.uk column names ────────────────────────────────────
RAW_REQUIRED_COLUMNS = [
    "Month",
    "Longitude",
    "Latitude",
    "Crime type",
    "Last outcome category",
]

EXPECTED_CRIME_TYPES = {
    "Anti-social behaviour",
    "Bicycle theft",
    "Burglary",
    "Criminal damage and arson",
    "Drugs",
    "Possession of weapons",
    "Public order",
    "Robbery",
    "Shoplifting",
    "Theft from the person",
    "Vehicle crime",
    "Violence and sexual offences",
    "Other theft",
    "Other crime",
}

# ── Outcome literal sets ──────────────────────────────────────────
# Investigation stopped without anyone being dealt with.
CLOSED_OUTCOMES = frozenset({
    "Investigation complete; no suspect identified",
    "Unable to prosecute suspect",
    "Formal action is not in the public interest",
    "Further action is not in the public interest",
    "Further investigation is not in the public interest",
    "Action to be taken by another organisation",
    "Court case unable to proceed",
})

# Someone was dealt with, by the courts or otherwise.
CONCLUDED_OUTCOMES = frozenset({
    "Offender given a caution",
    "Offender given a drugs possession warning",
    "Offender given penalty notice",
    "Offender given community sentence",
    "Offender given conditional discharge",
    "Offender given absolute discharge",
    "Offender given suspended prison sentence",
    "Offender sent to prison",
    "Offender fined",
    "Offender deprived of property",
    "Offender ordered to pay compensation",
    "Offender otherwise dealt with",
    "Local resolution",
    "Defendant found not guilty",
    "Suspect charged as part of another case",
})

ONGOING_OUTCOMES = frozenset({
    "Under investigation",
    "Awaiting court outcome",
    "Defendant sent to Crown Court",
})

UNCLEAR_OUTCOMES = frozenset({
    "Status update unavailable",
    "Court result unavailable",
})

# ── Colour palette ────────────────────────────────────────────────
# Assigned positionally to legend entries after they are sorted by
# ascending count, so the rarest status always gets the first colour.
STATUS_PALETTE = ["#e74c3c", "#f39c12", "#3498db", "#95a5a6"]

# ── Plotly chart config ───────────────────────────────────────────
CHART_CONFIG = {'displayModeBar': False, 'scrollZoom': True}

# ── Map defaults ──────────────────────────────────────────────────
UK_MAP_CENTRE = {'lat': 52.4862, 'lon': -1.8904}
UK_MAP_ZOOM   = 10
MAP_STYLE     = 'carto-positron'
MARKER_SIZE   = 8
CLUSTER_LAYER_NAME = 'Clusters (all incidents)'

# ── Shared layout defaults applied to all Plotly figures ─────────
BASE_LAYOUT = dict(
    plot_bgcolor='rgba(0,0,0,0)',
    paper_bgcolor='rgba(0,0,0,0)',
    dragmode=False,
    hovermode='x unified',
)

AXIS_DEFAULTS = dict(
    showspikes=False,
    gridcolor='rgba(0,0,0,0.08)',
)

LEGEND_TOP = dict(
    orientation='h',
    yanchor='bottom',
    y=1.02,
)

# ── police.uk API ─────────────────────────────────────────────────
POLICE_API_BASE = "https://data.police.uk/api"
POLICE_API_TIMEOUT = 10

# API category slug → CSV 'Crime type' label
API_CATEGORY_LABELS = {
    'anti-social-behaviour':  'Anti-social behaviour',
    'bicycle-theft':          'Bicycle theft',
    'burglary':               'Burglary',
    'criminal-damage-arson':  'Criminal damage and arson',
    'drugs':                  'Drugs',
    'other-theft':            'Other theft',
    'possession-of-weapons':  'Possession of weapons',
    'public-order':           'Public order',
    'robbery':                'Robbery',
    'shoplifting':            'Shoplifting',
    'theft-from-the-person':  'Theft from the person',
    'vehicle-crime':          'Vehicle crime',
    'violent-crime':          'Violence and sexual offences',
    'other-crime':            'Other crime',
}
