"""Weighted time/cost scoring used by the balanced strategy."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Sequence

from ...models.domain import Money, to_decimal
from .models import PathResult

DEFAULT_TIME_WEIGHT = Decimal("0.6")
DEFAULT_COST_WEIGHT = Decimal("0.4")

_ZERO = Decimal("0")


def _microseconds(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds


def build_baseline(candidates: Sequence[PathResult]) -> PathResult:
    """Per-axis maximum of the candidates, used to normalise their scores."""

    if not candidates:
        raise ValueError("At least one candidate is required to build a baseline.")
    worst_cost: Money = max((c.total_cost for c in candidates), key=lambda money: money.amount)
    return PathResult(
        node_ids=(),
        total_distance_km=max(c.total_distance_km for c in candidates),
        total_duration=max(c.total_duration for c in candidates),
        total_cost=worst_cost,
    )


def calculate_score(
    candidate: PathResult,
    baseline: PathResult,
    time_weight: Decimal | float = DEFAULT_TIME_WEIGHT,
    cost_weight: Decimal | float = DEFAULT_COST_WEIGHT,
) -> Decimal:
    """Return ``duration/baseline_duration * tw + cost/baseline_cost * cw``; lower is better.

    An axis whose baseline is zero contributes nothing. When both axes are zero
    the score is zero.
    """

    time_weight = to_decimal(time_weight)
    cost_weight = to_decimal(cost_weight)

    baseline_duration = _microseconds(baseline.total_duration)
    baseline_cost = baseline.total_cost.amount
    if baseline_duration <= 0 and baseline_cost <= 0:
        return _ZERO

    normalized_time = (
        Decimal(_microseconds(candidate.total_duration)) / Decimal(baseline_duration)
        if baseline_duration > 0
        else _ZERO
    )
    normalized_cost = candidate.total_cost.amount / baseline_cost if baseline_cost > 0 else _ZERO

    return normalized_time * time_weight + normalized_cost * cost_weight


def select_best(
    candidates: Sequence[PathResult],
    baseline: PathResult,
    time_weight: Decimal | float = DEFAULT_TIME_WEIGHT,
    cost_weight: Decimal | float = DEFAULT_COST_WEIGHT,
) -> PathResult | None:
    """Lowest scoring candidate; ties go to the earliest candidate."""

    best: PathResult | None = None
    best_score: Decimal | None = None
    for candidate in candidates:
        score = calculate_score(candidate, baseline, time_weight, cost_weight)
        if best_score is None or score < best_score:
            best, best_score = candidate, score
    return best
