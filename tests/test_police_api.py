"""
tests/test_police_api.py
------------------------
police.uk API client. No network: requests are served by a fake
session.

Run with:
    pytest tests/test_police_api.py -v
"""

import pandas as pd
import pytest
import requests

from utils.constants import RAW_REQUIRED_COLUMNS
from utils.incidents import normalise_records
from utils.police_api import PoliceApiError, fetch_street_crimes, records_from_api

PAYLOAD = [
    {
        "category": "bicycle-theft",
        "location_type": "Force",
        "location": {
            "latitude": "52.629729",
            "street": {"id": 1, "name": "On or near Granby Street"},
            "longitude": "-1.131592",
        },
        "context": "",
        "outcome_status": {"category": "Under investigation", "date": "2020-03"},
        "persistent_id": "abc",
        "id": 1,
        "location_subtype": "",
        "month": "2020-03",
    },
    {
        "category": "bicycle-theft",
        "location": {
            "latitude": "52.6",
            "street": {"id": 2, "name": "On or near Park Road"},
            "longitude": "-1.1",
        },
        "outcome_status": None,
        "month": "2020-03",
    },
]


# ── Fakes ─────────────────────────────────────────────────────────

class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else []
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise self._json_error
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


# ══════════════════════════════════════════════════════════════════
# records_from_api()
# ══════════════════════════════════════════════════════════════════

class TestRecordsFromApi:

    def test_csv_shaped_columns(self):
        df = records_from_api(PAYLOAD)
        assert list(df.columns) == RAW_REQUIRED_COLUMNS + ["Location"]
        assert len(df) == 2

    def test_values(self):
        row = records_from_api(PAYLOAD).iloc[0]
        assert row["Month"] == "2020-03"
        assert row["Crime type"] == "Bicycle theft"
        assert row["Last outcome category"] == "Under investigation"
        assert row["Location"] == "On or near Granby Street"

    def test_null_outcome_status(self):
        row = records_from_api(PAYLOAD).iloc[1]
        assert pd.isna(row["Last outcome category"])

    def test_empty_payload(self):
        df = records_from_api([])
        assert df.empty
        assert list(df.columns) == RAW_REQUIRED_COLUMNS + ["Location"]

    def test_flows_through_normaliser(self):
        out = normalise_records(records_from_api(PAYLOAD))
        assert list(out["status"]) == ["Ongoing", "Unavailable"]
        assert out.iloc[0]["latitude"] == pytest.approx(52.629729)
        assert (out["crime_type"] == "Bicycle theft").all()


# ══════════════════════════════════════════════════════════════════
# fetch_street_crimes()
# ══════════════════════════════════════════════════════════════════

class TestFetchStreetCrimes:

    def test_request_shape(self):
        session = FakeSession(FakeResponse(payload=PAYLOAD))
        df = fetch_street_crimes(52.63, -1.13, date="2020-03", session=session)
        url, params, timeout = session.calls[0]
        assert url.endswith("/crimes-street/bicycle-theft")
        assert params == {"lat": 52.63, "lng": -1.13, "date": "2020-03"}
        assert timeout > 0
        assert len(df) == 2

    def test_date_omitted_when_not_given(self):
        session = FakeSession(FakeResponse(payload=[]))
        fetch_street_crimes(52.63, -1.13, session=session)
        assert "date" not in session.calls[0][1]

    def test_non_200_raises(self):
        session = FakeSession(FakeResponse(status_code=503))
        with pytest.raises(PoliceApiError, match="503"):
            fetch_street_crimes(52.63, -1.13, session=session)

    def test_html_body_raises(self):
        # e.g. a maintenance page served with status 200
        error   = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        session = FakeSession(FakeResponse(json_error=error))
        with pytest.raises(PoliceApiError, match="not JSON"):
            fetch_street_crimes(52.63, -1.13, session=session)

    def test_network_error_raises(self):
        session = FakeSession(error=requests.ConnectionError("boom"))
        with pytest.raises(PoliceApiError, match="boom"):
            fetch_street_crimes(52.63, -1.13, session=session)

    def test_uses_requests_when_no_session(self, monkeypatch):
        fake = FakeSession(FakeResponse(payload=PAYLOAD[:1]))
        monkeypatch.setattr(requests, "get", fake.get)
        df = fetch_street_crimes(52.63, -1.13, category="all-crime")
        assert fake.calls[0][0].endswith("/crimes-street/all-crime")
        assert len(df) == 1
