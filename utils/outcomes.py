"""
utils/outcomes.py
-----------------
Classifies police.uk 'Last outcome category' text into four status
buckets. Pure Python/pandas with no Streamlit or Plotly dependencies.

Classification is total: every input, including None, NaN and strings
that appear in no literal set, maps to exactly one StatusCategory.
Sets are checked in the order Closed, Concluded, Ongoing, Unclear so an
accidental overlap between them resolves to the earlier set.

Import example:
    from utils.outcomes import StatusCategory, classify, classify_outcomes
"""

from enum import Enum

import numpy as np
import pandas as pd

from utils.constants import (
    CLOSED_OUTCOMES,
    CONCLUDED_OUTCOMES,
    ONGOING_OUTCOMES,
    UNCLEAR_OUTCOMES,
)


class StatusCategory(str, Enum):
    CLOSED      = "Closed"
    CONCLUDED   = "Concluded"
    ONGOING     = "Ongoing"
    UNAVAILABLE = "Unavailable"


# Evaluation order matters, see module docstring.
_LOOKUP_ORDER = (
    (CLOSED_OUTCOMES,    StatusCategory.CLOSED),
    (CONCLUDED_OUTCOMES, StatusCategory.CONCLUDED),
    (ONGOING_OUTCOMES,   StatusCategory.ONGOING),
    (UNCLEAR_OUTCOMES,   StatusCategory.UNAVAILABLE),
)

KNOWN_OUTCOMES = frozenset().union(*(literals for literals, _ in _LOOKUP_ORDER))


def _clean(outcome_text) -> str | None:
    if outcome_text is None or not isinstance(outcome_text, str):
        return None
    text = outcome_text.strip()
    return text or None


def classify(outcome_text: str | None) -> StatusCategory:
    """
    Map a single outcome string to its StatusCategory.

    Missing, empty and unrecognised text all return
    StatusCategory.UNAVAILABLE.
    """
    text = _clean(outcome_text)
    if text is None:
        return StatusCategory.UNAVAILABLE
    for literals, status in _LOOKUP_ORDER:
        if text in literals:
            return status
    return StatusCategory.UNAVAILABLE


def classify_outcomes(outcomes: pd.Series) -> pd.Series:
    """
    Vectorised classify(). Returns a Series of status strings
    ('Closed', 'Concluded', ...) aligned to the input index.
    """
    text = outcomes.map(_clean)

    conditions = [text.isin(literals) for literals, _ in _LOOKUP_ORDER]
    choices    = [status.value for _, status in _LOOKUP_ORDER]

    return pd.Series(
        np.select(conditions, choices, default=StatusCategory.UNAVAILABLE.value),
        index=outcomes.index,
        name="status",
        dtype=object,
    )


def unrecognised_outcomes(outcomes: pd.Series) -> set[str]:
    """
    Return non-empty outcome strings that are in none of the literal sets.

    These still classify as Unavailable; the processing scripts print
    them so new police.uk outcome wording gets noticed.
    """
    cleaned = {_clean(v) for v in outcomes.dropna().unique()}
    cleaned.discard(None)
    return cleaned - KNOWN_OUTCOMES


def count_statuses(df: pd.DataFrame, status_col: str = "status") -> dict:
    """
    Count incidents per status.

    Returns {StatusCategory: count} in StatusCategory declaration order,
    with zero counts omitted.
    """
    counts = df[status_col].value_counts()
    return {
        status: int(counts[status.value])
        for status in StatusCategory
        if counts.get(status.value, 0) > 0
    }
