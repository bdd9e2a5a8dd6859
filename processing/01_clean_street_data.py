"""
01_clean_street_data.py
-----------------------
Reads raw police.uk street crime CSVs, normalises, validates,
and writes data/processed/incidents_clean.csv.

Raw files expected at:
    data/raw/**/*street*.csv   (recursive glob, any subfolder depth)

This matches the police.uk bulk download layout where files are
named e.g. 2020-03-west-midlands-street.csv

Normalised columns:
    year, month, longitude, latitude, crime_type, outcome_text, status,
    force (+ location, lsoa_name when present)

Rows with no coordinates are dropped. A malformed Month value stops
the script with a DataFormatError.

Run from project root (after `pip install -e .`, or via run_all.py):
    python processing/01_clean_street_data.py
"""

import os
import re
import glob
import pandas as pd

from utils.constants import EXPECTED_CRIME_TYPES, PROCESSED_DIR, RAW_DIR
from utils.incidents import normalise_records
from utils.outcomes import count_statuses, unrecognised_outcomes

OUTPUT_PATH = os.path.join(PROCESSED_DIR, "incidents_clean.csv")

# '2020-03-west-midlands-street.csv' → 'west-midlands'
_FORCE_PATTERN = re.compile(r"^\d{4}-\d{2}-(?P<force>.+?)-street\.csv$")


# ── Helpers ───────────────────────────────────────────────────────

def find_street_files(raw_dir: str) -> list:
    pattern = os.path.join(raw_dir, "**", "*street*.csv")
    files = glob.glob(pattern, recursive=True)
    if not files:
        raise FileNotFoundError(
            f"No street crime CSV files found under {raw_dir}.\n"
            "Expected files matching: data/raw/**/*street*.csv\n"
            "Download from: https://data.police.uk/data/"
        )
    return files


def extract_force(filepath: str) -> str:
    """
    Force slug from a police.uk street filename.

    Returns 'unknown' when the filename does not follow the
    'YYYY-MM-<force>-street.csv' layout.
    """
    match = _FORCE_PATTERN.match(os.path.basename(filepath).lower())
    return match.group("force") if match else "unknown"


def load_all(files: list) -> pd.DataFrame:
    frames = []
    for fp in sorted(files):
        try:
            df = pd.read_csv(fp, low_memory=False)
        except (OSError, pd.errors.ParserError) as e:
            print(f"  WARNING: could not read {fp}: {e}")
            continue
        df["force"] = extract_force(fp)
        frames.append(df)

    if not frames:
        raise RuntimeError("No files loaded successfully.")

    return pd.concat(frames, ignore_index=True)


def validate(df: pd.DataFrame):
    print(f"\n── Validation ───────────────────────────────")
    print(f"  Total rows:       {len(df):,}")
    if df.empty:
        print("  WARNING - no rows with coordinates survived cleaning.")
        return

    first = df.sort_values(["year", "month"]).iloc[0]
    last  = df.sort_values(["year", "month"]).iloc[-1]
    print(f"  Date range:       {first['year']}-{first['month']:02d} "
          f"to {last['year']}-{last['month']:02d}")
    print(f"  Forces:           {sorted(df['force'].unique())}")

    unknown_force_rows = (df["force"] == "unknown").sum()
    if unknown_force_rows:
        print(f"  WARNING - {unknown_force_rows:,} rows have force='unknown'. "
              "Check that raw filenames follow YYYY-MM-<force>-street.csv.")

    unknown_crime = set(df["crime_type"].dropna().unique()) - EXPECTED_CRIME_TYPES
    if unknown_crime:
        print(f"  WARNING - unexpected crime types: {unknown_crime}")
    else:
        print(f"  Crime types:      all expected")

    unknown_outcomes = unrecognised_outcomes(df["outcome_text"])
    if unknown_outcomes:
        print(f"  WARNING - unrecognised outcomes (classed Unavailable): "
              f"{sorted(unknown_outcomes)}")
    else:
        print(f"  Outcomes:         all recognised")

    print(f"\n  Rows per status:")
    for status, count in count_statuses(df).items():
        print(f"    {status.value}: {count:,}")


# ── Main ──────────────────────────────────────────────────────────

def main():
    print("01_clean_street_data.py")
    print("=" * 50)

    print(f"Searching for street crime files in {RAW_DIR}...")
    files = find_street_files(RAW_DIR)
    print(f"Found {len(files)} files")

    print("Loading and concatenating...")
    raw = load_all(files)
    print(f"  {len(raw):,} raw rows loaded")

    print("Normalising...")
    clean_df = normalise_records(raw)
    print(f"  {len(clean_df):,} rows after dropping missing coordinates")

    validate(clean_df)

    os.makedirs(os.path.dirname(OUTPUT_PATH), exist_ok=True)
    clean_df.to_csv(OUTPUT_PATH, index=False)
    print(f"\n✓ Written to {OUTPUT_PATH}")


if __name__ == "__main__":
    main()
