from datetime import date, datetime, timedelta

import pytest

from congregation.analysis.classifier import classify_lapse, elapsed_whole_days
from congregation.analysis.thresholds import ThresholdSet

THRESHOLDS = ThresholdSet.from_mapping({1: 90, 2: 182, 3: 365, 4: 730})


def test_never_attended_is_highest_tier_with_unbounded_days(fixed_now):
    c = classify_lapse(None, fixed_now, THRESHOLDS)

    assert c.tier == 4
    assert c.elapsed_days is None


@pytest.mark.parametrize(
    "days_ago, tier",
    [
        (0, 0),
        (89, 0),
        (90, 0),  # equal to the threshold is not yet lapsed
        (91, 1),
        (100, 1),
        (182, 1),
        (183, 2),
        (400, 3),
        (730, 3),
        (731, 4),
        (5000, 4),
    ],
)
def test_tier_boundaries_are_exclusive(fixed_now, days_ago, tier):
    c = classify_lapse(fixed_now - timedelta(days=days_ago), fixed_now, THRESHOLDS)

    assert c.tier == tier
    assert c.elapsed_days == days_ago


def test_partial_days_are_truncated(fixed_now):
    last = fixed_now - timedelta(days=90, hours=23, minutes=59)

    c = classify_lapse(last, fixed_now, THRESHOLDS)

    assert c.elapsed_days == 90
    assert c.tier == 0


def test_future_attendance_never_gives_negative_days(fixed_now):
    assert elapsed_whole_days(fixed_now + timedelta(hours=5), fixed_now) == 0


def test_accepts_plain_dates():
    assert elapsed_whole_days(date(2025, 1, 1), datetime(2025, 4, 11, 8, 0)) == 100


def test_classification_is_deterministic(fixed_now):
    last = fixed_now - timedelta(days=200)
    assert classify_lapse(last, fixed_now, THRESHOLDS) == classify_lapse(last, fixed_now, THRESHOLDS)
