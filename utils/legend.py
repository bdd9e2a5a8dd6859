"""
utils/legend.py
---------------
Legend entries for the status map: which colour and label each status
gets, given how many incidents have it.

Import example:
    from utils.legend import assign_palette, annotate_incidents
"""

import pandas as pd

from utils.constants import STATUS_PALETTE
from utils.helpers import fmt_count
from utils.outcomes import StatusCategory


def status_label(status: StatusCategory, count: int) -> str:
    """e.g. 'Closed (n=1,204)'."""
    return f"{status.value} (n={fmt_count(count)})"


def assign_palette(status_counts: dict) -> list[tuple[StatusCategory, str, str]]:
    """
    Build ordered legend entries from per-status counts.

    Args:
        status_counts: {status: count}. Keys may be StatusCategory
                       members or their string values. Zero counts
                       are dropped.

    Returns:
        List of (status, colour, label) tuples sorted by ascending
        count. Ties keep StatusCategory declaration order. Colours come
        from STATUS_PALETTE in array order, one per entry.
    """
    counts = {}
    for key, count in status_counts.items():
        status = StatusCategory(key)
        if count:
            counts[status] = counts.get(status, 0) + int(count)

    ordered = [s for s in StatusCategory if s in counts]
    ordered.sort(key=lambda s: counts[s])

    return [
        (status, colour, status_label(status, counts[status]))
        for status, colour in zip(ordered, STATUS_PALETTE)
    ]


def palette_to_frame(palette: list, status_counts: dict) -> pd.DataFrame:
    """One row per legend entry, in palette order, for writing to CSV."""
    counts = {StatusCategory(k): int(v) for k, v in status_counts.items()}
    return pd.DataFrame(
        [
            {"status": status.value, "colour": colour, "label": label,
             "count": counts[status]}
            for status, colour, label in palette
        ],
        columns=["status", "colour", "label", "count"],
    )


def palette_from_frame(legend: pd.DataFrame) -> list[tuple[StatusCategory, str, str]]:
    """Inverse of palette_to_frame(); row order is kept."""
    return [
        (StatusCategory(row.status), row.colour, row.label)
        for row in legend.itertuples(index=False)
    ]


def annotate_incidents(df: pd.DataFrame, palette: list) -> pd.DataFrame:
    """
    Return a copy of *df* with 'colour' and 'legend_label' columns
    resolved from the palette entries for each row's status.

    Rows whose status has no palette entry get NaN for both.
    """
    colours = {status.value: colour for status, colour, _ in palette}
    labels  = {status.value: label  for status, _, label in palette}

    out = df.copy()
    out["colour"]       = out["status"].map(colours)
    out["legend_label"] = out["status"].map(labels)
    return out
