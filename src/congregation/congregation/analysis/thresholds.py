"""Lapse tier thresholds.

A threshold set maps tier numbers 1..K (increasing severity) to the number of
days that must be *exceeded* before a member lands in that tier. It is plain
configuration, validated once and passed into every classification call.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Mapping, Tuple

from ..core.exceptions import ConfigurationError

_TIER_KEY = re.compile(r"^(?:level|tier)?\s*_?(\d+)$", re.IGNORECASE)


def _tier_number(key: object) -> int:
    if isinstance(key, bool):
        raise ConfigurationError(f"invalid lapse tier name: {key!r}")
    if isinstance(key, int):
        return key
    match = _TIER_KEY.match(str(key).strip())
    if not match:
        raise ConfigurationError(f"invalid lapse tier name: {key!r}")
    return int(match.group(1))


@dataclass(frozen=True)
class ThresholdSet:
    tiers: Tuple[Tuple[int, int], ...]

    def __post_init__(self):
        if not self.tiers:
            raise ConfigurationError("at least one lapse tier is required")

        expected = 1
        previous_days = -1
        for tier, days in self.tiers:
            if tier != expected:
                raise ConfigurationError(f"lapse tiers must be numbered 1..K without gaps (missing tier {expected})")
            if isinstance(days, bool) or not isinstance(days, int) or days < 0:
                raise ConfigurationError(f"tier {tier}: threshold must be a non-negative whole number of days")
            if days <= previous_days:
                raise ConfigurationError(
                    f"tier {tier}: threshold {days} must be greater than tier {tier - 1} threshold {previous_days}"
                )
            previous_days = days
            expected += 1

    @classmethod
    def from_mapping(cls, mapping: Mapping[object, object]) -> "ThresholdSet":
        """Build from ``{1: 90, 2: 182}`` or ``{"level1": 90, "level2": 182}``."""
        if not mapping:
            raise ConfigurationError("lapse thresholds are not configured")

        pairs = []
        for key, value in mapping.items():
            try:
                days = int(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"tier {key!r}: threshold {value!r} is not a number") from None
            if days != value and not isinstance(value, str):
                raise ConfigurationError(f"tier {key!r}: threshold {value!r} is not a whole number")
            pairs.append((_tier_number(key), days))

        numbers = [tier for tier, _ in pairs]
        if len(set(numbers)) != len(numbers):
            raise ConfigurationError("duplicate lapse tier")
        return cls(tiers=tuple(sorted(pairs)))

    @classmethod
    def parse(cls, value: str) -> "ThresholdSet":
        """Build from ``"90,182,365,730"`` (tier 1 first)."""
        parts = [p.strip() for p in (value or "").split(",") if p.strip()]
        return cls.from_mapping({i: p for i, p in enumerate(parts, start=1)})

    @property
    def highest_tier(self) -> int:
        return self.tiers[-1][0]

    def most_severe_first(self) -> Iterator[Tuple[int, int]]:
        return reversed(self.tiers)

    def as_dict(self) -> dict[int, int]:
        return dict(self.tiers)
