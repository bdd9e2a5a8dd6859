"""
utils/police_api.py
-------------------
Fetches street-level crimes from the data.police.uk API and reshapes
them into the same columns as the bulk CSV downloads, so API results
go through utils.incidents.normalise_records unchanged.

The API only serves a one-mile radius per request and returns
'outcome_status': null for crimes with no recorded outcome.

Import example:
    from utils.police_api import fetch_street_crimes
"""

import pandas as pd
import requests

from utils.constants import (
    API_CATEGORY_LABELS,
    POLICE_API_BASE,
    POLICE_API_TIMEOUT,
    RAW_REQUIRED_COLUMNS,
)


class PoliceApiError(RuntimeError):
    """Raised when the police.uk API cannot be reached or refuses a request."""


def records_from_api(payload: list[dict]) -> pd.DataFrame:
    """
    Convert a crimes-street API payload into raw CSV-shaped rows.

    Columns: Month, Longitude, Latitude, Crime type,
    Last outcome category, Location.
    """
    rows = []
    for crime in payload:
        location = crime.get("location") or {}
        outcome  = crime.get("outcome_status") or {}
        street   = location.get("street") or {}
        category = crime.get("category", "")
        rows.append({
            "Month":                 crime.get("month"),
            "Longitude":             location.get("longitude"),
            "Latitude":              location.get("latitude"),
            "Crime type":            API_CATEGORY_LABELS.get(category, category),
            "Last outcome category": outcome.get("category"),
            "Location":              street.get("name"),
        })
    return pd.DataFrame(rows, columns=RAW_REQUIRED_COLUMNS + ["Location"])


def fetch_street_crimes(
    lat: float,
    lng: float,
    date: str | None = None,
    category: str = "bicycle-theft",
    session: requests.Session | None = None,
) -> pd.DataFrame:
    """
    Fetch crimes within one mile of (lat, lng).

    Args:
        lat, lng:  Centre point.
        date:      'YYYY-MM'. The API defaults to its latest month.
        category:  API category slug, e.g. 'bicycle-theft' or 'all-crime'.
        session:   Optional requests session (connection reuse, tests).

    Raises:
        PoliceApiError: network failure, a non-200 response, or a
                        body that is not JSON.
    """
    url    = f"{POLICE_API_BASE}/crimes-street/{category}"
    params = {"lat": lat, "lng": lng}
    if date:
        params["date"] = date

    http = session or requests
    try:
        r = http.get(url, params=params, timeout=POLICE_API_TIMEOUT)
    except requests.RequestException as e:
        raise PoliceApiError(f"Could not reach {url}: {e}") from e

    if r.status_code != 200:
        raise PoliceApiError(
            f"{url} returned HTTP {r.status_code} for {params}"
        )

    try:
        payload = r.json()
    except ValueError as e:
        raise PoliceApiError(f"{url} returned a body that is not JSON: {e}") from e

    return records_from_api(payload)
