"""
02_bicycle_theft_map.py
-----------------------
Filters the cleaned incidents to one crime type and month window,
assigns legend colours by outcome status, and renders the interactive
map.

Reads:
    data/processed/incidents_clean.csv   (from 01_clean_street_data.py)

Outputs:
    data/processed/theft_filtered.csv    — incidents with colour + legend_label
    data/processed/status_legend.csv     — legend entries in palette order
    outputs/bicycle_theft_map.html       — interactive map

Defaults come from utils/constants.py; override on the command line:
    python processing/02_bicycle_theft_map.py --year 2021 --month-from 1 --month-to 6
"""

import os
import argparse
import pandas as pd

from utils.charts import incident_map, save_map_html
from utils.constants import (
    DEFAULT_CRIME_TYPE,
    DEFAULT_MONTH_FROM,
    DEFAULT_MONTH_TO,
    DEFAULT_YEAR,
    OUTPUT_DIR,
    PROCESSED_DIR,
)
from utils.helpers import fmt_month_window
from utils.incidents import filter_incidents
from utils.legend import annotate_incidents, assign_palette, palette_to_frame
from utils.outcomes import count_statuses

# ── Paths ─────────────────────────────────────────────────────────
CLEAN_PATH    = os.path.join(PROCESSED_DIR, "incidents_clean.csv")
FILTERED_PATH = os.path.join(PROCESSED_DIR, "theft_filtered.csv")
LEGEND_PATH   = os.path.join(PROCESSED_DIR, "status_legend.csv")
MAP_PATH      = os.path.join(OUTPUT_DIR, "bicycle_theft_map.html")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render the bicycle theft outcomes map")
    parser.add_argument("--crime-type", default=DEFAULT_CRIME_TYPE,
                        help=f"Crime type to keep (default: {DEFAULT_CRIME_TYPE!r})")
    parser.add_argument("--year", type=int, default=DEFAULT_YEAR)
    parser.add_argument("--month-from", type=int, default=DEFAULT_MONTH_FROM,
                        choices=range(1, 13), metavar="1-12")
    parser.add_argument("--month-to", type=int, default=DEFAULT_MONTH_TO,
                        choices=range(1, 13), metavar="1-12")
    return parser.parse_args(argv)


def load_clean(path: str = CLEAN_PATH) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"{path} not found. Run 01_clean_street_data.py first."
        )
    return pd.read_csv(path)


def build_outputs(
    incidents: pd.DataFrame,
    crime_type: str,
    year: int,
    month_from: int,
    month_to: int,
) -> dict:
    """
    Filter, classify counts, assign the palette and build the map.

    Returns a dict with keys filtered, legend, palette, counts, figure.
    """
    filtered = filter_incidents(incidents, crime_type, year, month_from, month_to)
    counts   = count_statuses(filtered)
    palette  = assign_palette(counts)

    title = f"{crime_type}, {fmt_month_window(year, month_from, month_to)}"
    return {
        "filtered": annotate_incidents(filtered, palette),
        "legend":   palette_to_frame(palette, counts),
        "palette":  palette,
        "counts":   counts,
        "figure":   incident_map(filtered, palette, title=title),
    }


# ── Main ──────────────────────────────────────────────────────────

def main(argv=None):
    args = parse_args(argv)

    print("02_bicycle_theft_map.py")
    print("=" * 50)

    if args.month_from > args.month_to:
        print(f"  WARNING - month window {args.month_from}–{args.month_to} "
              "is empty; outputs will have no incidents.")

    print("Loading cleaned incidents...")
    incidents = load_clean()
    print(f"  {len(incidents):,} records")

    window = fmt_month_window(args.year, args.month_from, args.month_to)
    print(f"Filtering to {args.crime_type!r}, {window}...")
    out = build_outputs(
        incidents, args.crime_type, args.year, args.month_from, args.month_to,
    )
    print(f"  {len(out['filtered']):,} incidents kept")
    if out["filtered"].empty:
        print("  WARNING - no incidents match; the map will be empty.")

    print("\n  Legend:")
    for _, colour, label in out["palette"]:
        print(f"    {colour}  {label}")

    os.makedirs(PROCESSED_DIR, exist_ok=True)
    out["filtered"].to_csv(FILTERED_PATH, index=False)
    print(f"\n  ✓ {FILTERED_PATH}")
    out["legend"].to_csv(LEGEND_PATH, index=False)
    print(f"  ✓ {LEGEND_PATH}")
    save_map_html(out["figure"], MAP_PATH)
    print(f"  ✓ {MAP_PATH}")

    print(f"\n✓ Map written to {MAP_PATH}")


if __name__ == "__main__":
    main()
