"""
utils/incidents.py
------------------
Turns raw police.uk street crime rows into normalised incidents and
filters them to a crime type and month window.

Raw rows carry the published column names ('Month', 'Crime type',
'Last outcome category', ...). Normalised rows carry:

    year, month, longitude, latitude, crime_type, outcome_text, status

plus any of the passthrough columns in _PASSTHROUGH that the source had.

Neither function mutates its input; both return new DataFrames.
"""

import pandas as pd

from utils.constants import RAW_REQUIRED_COLUMNS
from utils.helpers import check_required_columns, snake_case_columns
from utils.outcomes import classify_outcomes

NORMALISED_COLUMNS = [
    "year", "month", "longitude", "latitude",
    "crime_type", "outcome_text", "status",
]

# Kept when present so the map hover and validation output can use them
_PASSTHROUGH = ["force", "location", "lsoa_name"]

_MONTH_PATTERN = r"^\s*(\d{4})-(\d{1,2})\s*$"


class DataFormatError(ValueError):
    """Raised when raw crime data cannot be normalised."""


def parse_months(months: pd.Series) -> pd.DataFrame:
    """
    Split 'YYYY-MM' strings into integer year and month columns.

    Raises DataFormatError listing (up to five of) the offending values
    if any entry is missing, non-numeric, or has a month outside 1–12.
    """
    text  = months.map(lambda v: v if isinstance(v, str) else "").astype(object)
    parts = text.str.extract(_MONTH_PATTERN)

    year_num  = pd.to_numeric(parts[0], errors="coerce")
    month_num = pd.to_numeric(parts[1], errors="coerce")
    bad = (
        year_num.isna().to_numpy()
        | month_num.isna().to_numpy()
        | ~month_num.fillna(0).between(1, 12).to_numpy()
    )

    if bad.any():
        examples = months[bad].astype(str).unique()[:5].tolist()
        raise DataFormatError(
            f"{int(bad.sum()):,} rows have a malformed month "
            f"(expected 'YYYY-MM'): {examples}"
        )

    return pd.DataFrame({
        "year":  year_num.astype(int),
        "month": month_num.astype(int),
    }, index=months.index)


def _strip_text(values: pd.Series) -> pd.Series:
    """Strip strings; anything else, and empty strings, become None."""
    return values.map(
        lambda v: (v.strip() or None) if isinstance(v, str) else None
    ).astype(object)


def normalise_records(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Normalise raw police.uk street crime rows.

    Rows missing either coordinate are dropped silently. Outcome text
    is stripped (empty becomes missing) and classified into a status.

    Raises:
        DataFormatError: a required column is absent or a month value
                         is malformed.
    """
    missing = check_required_columns(raw, RAW_REQUIRED_COLUMNS, "raw street data")
    if missing:
        raise DataFormatError(f"Raw street data is missing columns: {missing}")

    df = snake_case_columns(raw)
    df = df.rename(columns={"last_outcome_category": "outcome_text"})

    df["latitude"]  = pd.to_numeric(df["latitude"],  errors="coerce")
    df["longitude"] = pd.to_numeric(df["longitude"], errors="coerce")
    df = df.dropna(subset=["latitude", "longitude"])

    dates = parse_months(df["month"])

    out = pd.DataFrame({
        "year":         dates["year"],
        "month":        dates["month"],
        "longitude":    df["longitude"].astype(float),
        "latitude":     df["latitude"].astype(float),
        "crime_type":   _strip_text(df["crime_type"]),
        "outcome_text": _strip_text(df["outcome_text"]),
    }, index=df.index)
    out["status"] = classify_outcomes(out["outcome_text"])

    for col in _PASSTHROUGH:
        if col in df.columns:
            out[col] = df[col]

    return out.reset_index(drop=True)


def filter_incidents(
    records: pd.DataFrame,
    crime_type: str,
    year: int,
    month_from: int,
    month_to: int,
) -> pd.DataFrame:
    """
    Keep incidents of *crime_type* in *year* with
    month_from <= month <= month_to (both inclusive).

    Input order and index are preserved. A window where month_from is
    after month_to simply matches nothing.
    """
    mask = (
        (records["crime_type"] == crime_type) &
        (records["year"]       == year) &
        (records["month"]      >= month_from) &
        (records["month"]      <= month_to)
    )
    return records.loc[mask].copy()
