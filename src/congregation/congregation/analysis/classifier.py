from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import as_datetime
from .model import LapseClassification
from .thresholds import ThresholdSet


def elapsed_whole_days(last_attended: Union[date, datetime], now: Union[date, datetime]) -> int:
    """Whole days between two instants, truncated; never negative."""
    delta = as_datetime(now) - as_datetime(last_attended)
    return max(0, delta.days)


def classify_lapse(
    last_attended: Optional[Union[date, datetime]],
    now: Union[date, datetime],
    thresholds: ThresholdSet,
) -> LapseClassification:
    """Map a last-attended date (or None) to a lapse tier and day count.

    Never attended counts as beyond every threshold. Otherwise the tier is the
    most severe one whose threshold is strictly exceeded; 0 means not lapsed.
    """
    if last_attended is None:
        return LapseClassification(tier=thresholds.highest_tier, elapsed_days=None)

    days = elapsed_whole_days(last_attended, now)
    for tier, threshold in thresholds.most_severe_first():
        if days > threshold:
            return LapseClassification(tier=tier, elapsed_days=days)
    return LapseClassification(tier=0, elapsed_days=days)
