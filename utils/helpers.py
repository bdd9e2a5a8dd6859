"""
utils/helpers.py
----------------
Small general-purpose helper functions used across sections.
These are pure Python with no Streamlit or Plotly dependencies
so they can also be used safely inside processing scripts.

Import example:
    from utils.helpers import fmt_count, fmt_pct, snake_case_columns
"""

import calendar

import pandas as pd


# ── DataFrame helpers ─────────────────────────────────────────────

def snake_case_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy of *df* with lowercase snake_case column names,
    e.g. 'Crime type' → 'crime_type'.
    """
    out = df.copy()
    out.columns = [str(c).strip().lower().replace(" ", "_") for c in out.columns]
    return out


# ── Formatting helpers ────────────────────────────────────────────

def fmt_pct(value: float, sign: bool = False, decimals: int = 0) -> str:
    """
    Format a float as a percentage string.

    Args:
        value:    Numeric value (e.g. 53.5 for 53.5%).
        sign:     If True, prepend '+' for positive values.
        decimals: Number of decimal places.

    Returns:
        Formatted string e.g. '53%', '+18.5%'.
    """
    fmt = f"+.{decimals}f" if sign else f".{decimals}f"
    return f"{value:{fmt}}%"


def fmt_count(value: float | int) -> str:
    """Format a number with thousands separator."""
    return f"{int(value):,}"


def fmt_month_window(year: int, month_from: int, month_to: int) -> str:
    """'Jan–Jun 2020' style label for a filter window."""
    start = calendar.month_abbr[month_from]
    end   = calendar.month_abbr[month_to]
    if month_from == month_to:
        return f"{start} {year}"
    return f"{start}–{end} {year}"


def fmt_date_span(date_from, date_to) -> str | None:
    """
    'between 2020-03 and 2020-05' for a headline row, or None when
    either end is missing (an empty window reads back from CSV as NaN).
    """
    if pd.isna(date_from) or pd.isna(date_to):
        return None
    return f"between {date_from} and {date_to}"


# ── Validation helpers ────────────────────────────────────────────

def check_required_columns(
    df: pd.DataFrame,
    required: list[str],
    label: str = "DataFrame",
) -> list[str]:
    """
    Check that all required columns are present.

    Returns a list of missing column names (empty list if all present).
    Useful for giving clear error messages in processing scripts.

    Args:
        df:       DataFrame to check.
        required: List of expected column names.
        label:    Human-readable name for the DataFrame, used in messages.

    Returns:
        List of missing column names.
    """
    missing = [c for c in required if c not in df.columns]
    if missing:
        print(f"  WARNING [{label}]: missing columns: {missing}")
    return missing
