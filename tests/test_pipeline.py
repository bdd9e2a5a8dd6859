"""
tests/test_pipeline.py
----------------------
Processing scripts end to end on small synthetic police.uk files, plus
schema and sanity tests for the processed data files.

Run with:
    pytest tests/test_pipeline.py -v

The processed-file tests read data/processed/ and skip when the
pipeline has not been run there yet (python run_all.py).
"""

import os
import importlib.util

import pandas as pd
import pytest

import run_all
from utils.constants import STATUS_PALETTE
from utils.helpers import fmt_date_span
from utils.outcomes import StatusCategory

# ── Paths ─────────────────────────────────────────────────────────
ROOT      = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PROCESSED = os.path.join("data", "processed")


def p(filename: str) -> str:
    return os.path.join(PROCESSED, filename)


# ── Helpers ───────────────────────────────────────────────────────

def load_script(filename: str):
    """Import a numbered processing script as a module."""
    path = os.path.join(ROOT, "processing", filename)
    name = "processing_" + os.path.splitext(filename)[0].split("_", 1)[1]
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load(filename: str) -> pd.DataFrame:
    if not os.path.exists(p(filename)):
        pytest.skip(f"{filename} not built; run python run_all.py first.")
    return pd.read_csv(p(filename))


def assert_columns(df: pd.DataFrame, required_cols: list, filename: str):
    missing = [c for c in required_cols if c not in df.columns]
    assert not missing, (
        f"{filename} is missing columns: {missing}. "
        f"Found: {list(df.columns)}"
    )


def assert_values_in_range(
    df: pd.DataFrame, col: str, lo: float, hi: float, filename: str
):
    vals = df[col].dropna()
    if vals.empty:
        return
    assert vals.min() >= lo and vals.max() <= hi, (
        f"{filename}: column '{col}' has values outside [{lo}, {hi}]. "
        f"Min={vals.min():.4f}, Max={vals.max():.4f}"
    )


RAW_HEADER = [
    "Crime ID", "Month", "Reported by", "Falls within", "Longitude",
    "Latitude", "Location", "LSOA code", "LSOA name", "Crime type",
    "Last outcome category", "Context",
]


def raw_rows() -> list[dict]:
    rows = [
        ("2020-03", -1.89, 52.48, "Bicycle theft", "Under investigation"),
        ("2020-03", -1.88, 52.47, "Bicycle theft", "Investigation complete; no suspect identified"),
        ("2020-04", -1.87, 52.49, "Bicycle theft", "Investigation complete; no suspect identified"),
        ("2020-04", None,  None,  "Bicycle theft", "Offender given a caution"),
        ("2020-05", -1.86, 52.46, "Bicycle theft", None),
        ("2020-08", -1.85, 52.45, "Bicycle theft", "Offender given a caution"),
        ("2020-03", -1.84, 52.44, "Burglary",      "Under investigation"),
        ("2020-04", -1.83, 52.43, "Anti-social behaviour", None),
    ]
    return [
        {
            "Crime ID": f"id{i}", "Month": m, "Reported by": "West Midlands Police",
            "Falls within": "West Midlands Police", "Longitude": lon,
            "Latitude": lat, "Location": "On or near Broad Street",
            "LSOA code": "E01000001", "LSOA name": "Birmingham 001A",
            "Crime type": crime, "Last outcome category": outcome, "Context": None,
        }
        for i, (m, lon, lat, crime, outcome) in enumerate(rows)
    ]


@pytest.fixture
def raw_dir(tmp_path):
    """Two monthly police.uk street files in a nested download layout."""
    rows = pd.DataFrame(raw_rows(), columns=RAW_HEADER)
    for month, chunk in rows.groupby("Month"):
        folder = tmp_path / "raw" / month
        folder.mkdir(parents=True)
        chunk.to_csv(folder / f"{month}-west-midlands-street.csv", index=False)
    return tmp_path / "raw"


# ══════════════════════════════════════════════════════════════════
# 01 — clean street data
# ══════════════════════════════════════════════════════════════════

class TestCleanScript:

    @pytest.fixture(scope="class")
    def script(self):
        return load_script("01_clean_street_data.py")

    @pytest.mark.parametrize("filename, force", [
        ("2020-03-west-midlands-street.csv", "west-midlands"),
        ("data/raw/2020-03/2020-03-city-of-london-street.csv", "city-of-london"),
        ("2020-03-metropolitan-stop-and-search.csv", "unknown"),
    ])
    def test_extract_force(self, script, filename, force):
        assert script.extract_force(filename) == force

    def test_find_street_files_recursive(self, script, raw_dir):
        files = script.find_street_files(str(raw_dir))
        assert len(files) == 4

    def test_find_street_files_none(self, script, tmp_path):
        with pytest.raises(FileNotFoundError, match="data.police.uk"):
            script.find_street_files(str(tmp_path))

    def test_load_and_normalise(self, script, raw_dir):
        from utils.incidents import normalise_records

        raw = script.load_all(script.find_street_files(str(raw_dir)))
        assert len(raw) == len(raw_rows())
        assert set(raw["force"]) == {"west-midlands"}

        clean = normalise_records(raw)
        assert len(clean) == len(raw_rows()) - 1
        assert set(clean["force"]) == {"west-midlands"}

    def test_validate_reports_unrecognised_outcomes(self, script, capsys):
        from utils.incidents import normalise_records

        raw = pd.DataFrame(raw_rows(), columns=RAW_HEADER)
        raw.loc[0, "Last outcome category"] = "Bike returned to owner"
        raw["force"] = "west-midlands"
        script.validate(normalise_records(raw))
        out = capsys.readouterr().out
        assert "Bike returned to owner" in out
        assert "Crime types:      all expected" in out

    def test_validate_ignores_outcomes_on_dropped_rows(self, script, capsys):
        from utils.incidents import normalise_records

        raw = pd.DataFrame(raw_rows(), columns=RAW_HEADER)
        no_coords = raw["Latitude"].isna()
        assert no_coords.sum() == 1
        raw.loc[no_coords, "Last outcome category"] = "Bike returned to owner"
        raw["force"] = "west-midlands"
        script.validate(normalise_records(raw))
        out = capsys.readouterr().out
        assert "Bike returned to owner" not in out
        assert "Outcomes:         all recognised" in out


# ══════════════════════════════════════════════════════════════════
# 02 — bicycle theft map
# ══════════════════════════════════════════════════════════════════

class TestMapScript:

    @pytest.fixture(scope="class")
    def script(self):
        return load_script("02_bicycle_theft_map.py")

    @pytest.fixture
    def incidents(self):
        from utils.incidents import normalise_records

        return normalise_records(pd.DataFrame(raw_rows(), columns=RAW_HEADER))

    def test_build_outputs(self, script, incidents):
        out = script.build_outputs(incidents, "Bicycle theft", 2020, 1, 6)
        filtered = out["filtered"]
        assert len(filtered) == 4
        assert (filtered["crime_type"] == "Bicycle theft").all()
        assert filtered["month"].between(1, 6).all()
        assert filtered["colour"].notna().all()

        assert list(out["legend"]["status"]) == ["Ongoing", "Unavailable", "Closed"]
        assert list(out["legend"]["colour"]) == STATUS_PALETTE[:3]
        assert out["counts"][StatusCategory.CLOSED] == 2
        assert len(out["figure"].data) == 4

    def test_build_outputs_no_match(self, script, incidents):
        out = script.build_outputs(incidents, "Bicycle theft", 2019, 1, 12)
        assert out["filtered"].empty
        assert out["legend"].empty
        assert out["palette"] == []

    def test_parse_args_defaults(self, script):
        args = script.parse_args([])
        assert args.crime_type == "Bicycle theft"
        assert 1 <= args.month_from <= args.month_to <= 12

    def test_parse_args_rejects_bad_month(self, script):
        with pytest.raises(SystemExit):
            script.parse_args(["--month-to", "13"])

    def test_main_writes_outputs(self, script, incidents, tmp_path, monkeypatch):
        clean_path = tmp_path / "incidents_clean.csv"
        incidents.to_csv(clean_path, index=False)
        monkeypatch.setattr(script, "CLEAN_PATH", str(clean_path))
        monkeypatch.setattr(script, "PROCESSED_DIR", str(tmp_path))
        monkeypatch.setattr(script, "FILTERED_PATH", str(tmp_path / "theft_filtered.csv"))
        monkeypatch.setattr(script, "LEGEND_PATH", str(tmp_path / "status_legend.csv"))
        monkeypatch.setattr(script, "MAP_PATH", str(tmp_path / "out" / "map.html"))
        monkeypatch.setattr(script, "load_clean", lambda: pd.read_csv(clean_path))

        script.main(["--year", "2020", "--month-from", "3", "--month-to", "4"])

        filtered = pd.read_csv(tmp_path / "theft_filtered.csv")
        assert len(filtered) == 3
        assert (tmp_path / "out" / "map.html").exists()
        legend = pd.read_csv(tmp_path / "status_legend.csv")
        assert list(legend["label"]) == ["Ongoing (n=1)", "Closed (n=2)"]


# ══════════════════════════════════════════════════════════════════
# 03 — precompute summary
# ══════════════════════════════════════════════════════════════════

class TestSummaryScript:

    @pytest.fixture(scope="class")
    def script(self):
        return load_script("03_precompute_summary.py")

    @pytest.fixture
    def filtered(self):
        return pd.DataFrame({
            "year":   [2020, 2020, 2020, 2020],
            "month":  [3, 3, 4, 5],
            "status": ["Closed", "Closed", "Ongoing", "Unavailable"],
        })

    def test_monthly_status_counts(self, script, filtered):
        monthly = script.monthly_status_counts(filtered)
        assert list(monthly.columns) == ["year", "month", "status", "count"]
        assert monthly["count"].sum() == len(filtered)
        march = monthly[(monthly["month"] == 3) & (monthly["status"] == "Closed")]
        assert int(march["count"].iloc[0]) == 2

    def test_headline_totals(self, script, filtered):
        row = script.headline_totals(filtered).iloc[0]
        assert row["total_incidents"] == 4
        assert row["closed"] == 2
        assert row["concluded"] == 0
        assert row["date_from"] == "2020-03"
        assert row["date_to"] == "2020-05"

    def test_headline_totals_empty(self, script, filtered):
        row = script.headline_totals(filtered.iloc[0:0]).iloc[0]
        assert row["total_incidents"] == 0
        assert pd.isna(row["date_from"])

    def test_empty_headline_has_no_date_span(self, script, filtered, tmp_path):
        # The dashboard reads the headline back from CSV, where the
        # missing dates come back as NaN.
        path = tmp_path / "headline_totals.csv"
        script.headline_totals(filtered.iloc[0:0]).to_csv(path, index=False)
        row = pd.read_csv(path).iloc[0]
        assert fmt_date_span(row["date_from"], row["date_to"]) is None

    def test_headline_date_span(self, script, filtered):
        row = script.headline_totals(filtered).iloc[0]
        assert fmt_date_span(row["date_from"], row["date_to"]) == (
            "between 2020-03 and 2020-05"
        )


# ══════════════════════════════════════════════════════════════════
# run_all.py
# ══════════════════════════════════════════════════════════════════

class TestRunAll:

    def test_window_args_only_forwards_set_flags(self):
        args = run_all.parse_args(["--year", "2021", "--month-to", "6"])
        assert run_all.window_args(args) == ["--year", "2021", "--month-to", "6"]

    def test_select_from(self):
        args = run_all.parse_args(["--from", "02"])
        assert [n for n, _ in run_all.select_scripts(args)] == ["02", "03"]

    def test_select_only(self):
        args = run_all.parse_args(["--only", "01", "03"])
        assert [n for n, _ in run_all.select_scripts(args)] == ["01", "03"]

    def test_select_from_unknown_exits(self):
        with pytest.raises(SystemExit):
            run_all.select_scripts(run_all.parse_args(["--from", "09"]))

    def test_scripts_exist(self):
        for _, path in run_all.SCRIPTS:
            assert os.path.exists(os.path.join(ROOT, path)), f"{path} is missing"


# ══════════════════════════════════════════════════════════════════
# Processed outputs
# ══════════════════════════════════════════════════════════════════

class TestProcessedOutputs:

    def test_incidents_clean(self):
        df = load("incidents_clean.csv")
        assert_columns(
            df,
            ["year", "month", "longitude", "latitude", "crime_type",
             "outcome_text", "status", "force"],
            "incidents_clean.csv",
        )
        assert df[["latitude", "longitude"]].notna().all().all(), (
            "incidents_clean.csv has rows without coordinates."
        )
        assert_values_in_range(df, "month", 1, 12, "incidents_clean.csv")
        assert_values_in_range(df, "latitude", 49.0, 61.0, "incidents_clean.csv")
        assert_values_in_range(df, "longitude", -8.5, 2.0, "incidents_clean.csv")

    def test_statuses_valid(self):
        df = load("incidents_clean.csv")
        valid = {s.value for s in StatusCategory}
        unexpected = set(df["status"].dropna().unique()) - valid
        assert not unexpected, f"incidents_clean.csv: unexpected statuses {unexpected}"

    def test_theft_filtered(self):
        df = load("theft_filtered.csv")
        assert_columns(df, ["status", "colour", "legend_label"], "theft_filtered.csv")
        assert df["crime_type"].nunique() <= 1
        assert df["year"].nunique() <= 1

    def test_status_legend(self):
        legend = load("status_legend.csv")
        assert_columns(legend, ["status", "colour", "label", "count"], "status_legend.csv")
        assert list(legend["count"]) == sorted(legend["count"]), (
            "status_legend.csv is not in ascending count order."
        )
        assert list(legend["colour"]) == STATUS_PALETTE[:len(legend)]

    def test_legend_matches_filtered_counts(self):
        legend   = load("status_legend.csv")
        filtered = load("theft_filtered.csv")
        counts   = filtered["status"].value_counts().to_dict()
        for status, count in zip(legend["status"], legend["count"]):
            assert counts.get(status, 0) == count

    def test_monthly_status_counts(self):
        df = load("monthly_status_counts.csv")
        assert_columns(df, ["year", "month", "status", "count"], "monthly_status_counts.csv")
