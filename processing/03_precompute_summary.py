"""
03_precompute_summary.py
------------------------
Pre-computes monthly status counts from theft_filtered.csv so the
dashboard's Outcomes page does not need to regroup the incidents at
runtime.

Outputs (all small, suitable for git):
    data/processed/monthly_status_counts.csv — incidents per year/month/status
    data/processed/headline_totals.csv       — totals and window for the overview

Run from project root:
    python processing/03_precompute_summary.py
"""

import os
import pandas as pd

from utils.constants import PROCESSED_DIR
from utils.outcomes import StatusCategory

FILTERED_PATH = os.path.join(PROCESSED_DIR, "theft_filtered.csv")
OUT_DIR       = PROCESSED_DIR


def monthly_status_counts(filtered: pd.DataFrame) -> pd.DataFrame:
    return (
        filtered.groupby(["year", "month", "status"])
        .size()
        .reset_index(name="count")
        .sort_values(["year", "month", "status"])
        .reset_index(drop=True)
    )


def headline_totals(filtered: pd.DataFrame) -> pd.DataFrame:
    row = {"total_incidents": len(filtered)}
    for status in StatusCategory:
        row[status.value.lower()] = int((filtered["status"] == status.value).sum())

    if filtered.empty:
        row["date_from"] = row["date_to"] = None
    else:
        ordered = filtered.sort_values(["year", "month"])
        first, last = ordered.iloc[0], ordered.iloc[-1]
        row["date_from"] = f"{first['year']}-{first['month']:02d}"
        row["date_to"]   = f"{last['year']}-{last['month']:02d}"
    return pd.DataFrame([row])


def main():
    print("03_precompute_summary.py")
    print("=" * 50)

    if not os.path.exists(FILTERED_PATH):
        raise FileNotFoundError(
            f"{FILTERED_PATH} not found. Run 02_bicycle_theft_map.py first."
        )

    print("Loading filtered incidents...")
    filtered = pd.read_csv(FILTERED_PATH)
    print(f"  {len(filtered):,} records")

    os.makedirs(OUT_DIR, exist_ok=True)

    # ── 1. Monthly counts per status ─────────────────────────────
    print("  Building monthly_status_counts.csv...")
    monthly = monthly_status_counts(filtered)
    monthly.to_csv(os.path.join(OUT_DIR, "monthly_status_counts.csv"), index=False)
    print(f"    ✓ {len(monthly):,} rows")

    # ── 2. Headline totals scalar ─────────────────────────────────
    print("  Building headline_totals.csv...")
    headline_totals(filtered).to_csv(
        os.path.join(OUT_DIR, "headline_totals.csv"), index=False
    )
    print(f"    ✓ 1 row")

    print(f"\n✓ Summary outputs written to {OUT_DIR}")


if __name__ == "__main__":
    main()
