"""
utils/charts.py
---------------
Shared chart helpers used by the processing scripts and dashboard sections.
All builder functions return a Plotly figure object.

Import example:
    from utils.charts import incident_map, save_map_html
"""

import os

import pandas as pd
import plotly.graph_objects as go

from utils.constants import (
    AXIS_DEFAULTS,
    BASE_LAYOUT,
    CHART_CONFIG,
    CLUSTER_LAYER_NAME,
    LEGEND_TOP,
    MAP_STYLE,
    MARKER_SIZE,
    UK_MAP_CENTRE,
    UK_MAP_ZOOM,
)

_CLUSTER_COLOUR = "#2c3e50"
_NO_OUTCOME     = "No outcome recorded"


# ── Layout helpers ────────────────────────────────────────────────

def apply_base_layout(fig: go.Figure, height: int = 420, **kwargs) -> go.Figure:
    """
    Apply the standard transparent background and drag/spike
    settings to a figure. Additional layout kwargs are passed through
    so callers can override individual properties.

    Usage:
        fig = apply_base_layout(fig, height=360, hovermode='y')
    """
    layout = {**BASE_LAYOUT, "height": height, **kwargs}
    fig.update_layout(**layout)
    return fig


def style_xaxis(fig: go.Figure, show_labels: bool = False, **kwargs) -> go.Figure:
    """Apply standard x-axis defaults. Labels hidden by default."""
    props = {**AXIS_DEFAULTS, "showticklabels": show_labels, **kwargs}
    fig.update_xaxes(**props)
    return fig


def style_yaxis(fig: go.Figure, title: str = "", **kwargs) -> go.Figure:
    """Apply standard y-axis defaults."""
    props = {**AXIS_DEFAULTS, "title": title, **kwargs}
    fig.update_yaxes(**props)
    return fig


# ── Map ───────────────────────────────────────────────────────────

def map_centre(df: pd.DataFrame) -> dict:
    """Mean incident position, or the default centre for an empty frame."""
    if df.empty:
        return dict(UK_MAP_CENTRE)
    return {"lat": float(df["latitude"].mean()), "lon": float(df["longitude"].mean())}


def _hover_data(df: pd.DataFrame):
    """(period, outcome) rows for customdata, e.g. ('03/2020', 'Under investigation')."""
    month   = df["month"].astype(int).astype(str).str.zfill(2)
    period  = month + "/" + df["year"].astype(int).astype(str)
    outcome = df["outcome_text"].where(df["outcome_text"].notna(), _NO_OUTCOME)
    return pd.DataFrame({"period": period, "outcome": outcome}).to_numpy()


def incident_map(
    df: pd.DataFrame,
    palette: list,
    zoom: int = UK_MAP_ZOOM,
    height: int = 650,
    title: str | None = None,
) -> go.Figure:
    """
    Interactive incident map.

    One marker trace per legend entry, added in palette order so the
    legend reads rarest status first, plus a cluster layer over all
    incidents that starts hidden and can be toggled from the legend.

    Args:
        df:      Normalised incidents with a 'status' column.
        palette: Output of utils.legend.assign_palette().
        zoom:    Initial map zoom.
        height:  Figure height in pixels.
        title:   Optional figure title.
    """
    fig = go.Figure()

    for status, colour, label in palette:
        subset = df[df["status"] == status.value]
        fig.add_trace(go.Scattermap(
            lat=subset["latitude"],
            lon=subset["longitude"],
            mode="markers",
            name=label,
            marker=dict(size=MARKER_SIZE, color=colour, opacity=0.8),
            customdata=_hover_data(subset),
            hovertemplate=(
                f"<b>{status.value}</b><br>"
                "%{customdata[1]}<br>"
                "%{customdata[0]}<extra></extra>"
            ),
        ))

    fig.add_trace(go.Scattermap(
        lat=df["latitude"],
        lon=df["longitude"],
        mode="markers",
        name=CLUSTER_LAYER_NAME,
        marker=dict(size=MARKER_SIZE, color=_CLUSTER_COLOUR),
        cluster=dict(enabled=True, color=_CLUSTER_COLOUR, opacity=0.7),
        hoverinfo="skip",
        visible="legendonly",
    ))

    fig.update_layout(
        map=dict(style=MAP_STYLE, center=map_centre(df), zoom=zoom),
        height=height,
        margin=dict(l=0, r=0, t=40 if title else 0, b=0),
        paper_bgcolor="rgba(0,0,0,0)",
        legend=dict(title="Status", x=0.01, y=0.99, bgcolor="rgba(255,255,255,0.85)"),
        title=title,
    )
    return fig


def save_map_html(fig: go.Figure, path: str) -> str:
    """Write *fig* as a standalone interactive HTML page. Returns the path."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.write_html(path, include_plotlyjs="cdn", config=CHART_CONFIG)
    return path


# ── Reusable chart builders ───────────────────────────────────────

def status_bar_chart(
    palette: list,
    status_counts: dict,
    height: int = 320,
) -> go.Figure:
    """
    Horizontal bar chart of incidents per status, coloured with the
    same palette as the map so the two read together.
    """
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[status_counts[status] for status, _, _ in palette],
        y=[status.value for status, _, _ in palette],
        orientation="h",
        marker=dict(color=[colour for _, colour, _ in palette]),
        hovertemplate="<b>%{y}</b><br>%{x:,} incidents<extra></extra>",
    ))

    fig = apply_base_layout(fig, height=height, hovermode="y")
    fig = style_xaxis(fig, show_labels=True, title="Incidents")
    fig = style_yaxis(fig)
    return fig


def time_series_chart(
    traces: list[dict],
    height: int = 420,
    y_title: str = "",
    show_x_labels: bool = True,
) -> go.Figure:
    """
    Build a multi-trace time series figure.

    Each item in `traces` is a dict with keys:
        x, y       – data arrays
        name       – legend label
        color      – line colour
        width      – line width (default 2)
        dash       – line dash style (default 'solid')
        hover      – hovertemplate string (optional)
    """
    fig = go.Figure()

    for t in traces:
        scatter_kwargs = dict(
            x=t["x"],
            y=t["y"],
            name=t.get("name", ""),
            line=dict(
                color=t.get("color", "#95a5a6"),
                width=t.get("width", 2),
                dash=t.get("dash", "solid"),
            ),
            showlegend=t.get("name") is not None,
        )
        if "hover" in t:
            scatter_kwargs["hovertemplate"] = t["hover"]

        fig.add_trace(go.Scatter(**scatter_kwargs))

    fig = apply_base_layout(fig, height=height, legend=LEGEND_TOP)
    fig = style_xaxis(fig, show_labels=show_x_labels)
    fig = style_yaxis(fig, title=y_title)

    return fig


def monthly_status_chart(monthly: pd.DataFrame, palette: list) -> go.Figure:
    """
    Monthly incident counts, one line per status.

    Args:
        monthly: DataFrame with columns year, month, status, count.
        palette: Legend entries; sets line colours and names.
    """
    parts   = monthly[["year", "month"]].assign(day=1)
    monthly = monthly.assign(period=pd.to_datetime(parts)).sort_values("period")

    traces = []
    for status, colour, label in palette:
        rows = monthly[monthly["status"] == status.value]
        traces.append({
            "x":     rows["period"],
            "y":     rows["count"],
            "name":  label,
            "color": colour,
            "hover": f"{status.value}<br>%{{x|%b %Y}}: %{{y:,}}<extra></extra>",
        })

    return time_series_chart(traces, height=380, y_title="Incidents per month")
