"""Deduction primitives shared by the category evaluators.

Two kinds of rule exist and must not be mixed up:
- Tier tables: highest matching tier only, never cumulative.
- Unit rules: per occurrence, summed, then capped.
"""

import math

from orghealth.consts import MAX_SCORE, METRIC_VALUE_CEILING, MIN_SCORE
from orghealth.models.model_eval import TierTable, UnitRule
from orghealth.models.model_score import ScoreFactor


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    if isinstance(value, int):
        return value
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round and clamp a raw score into [0, 100]."""
    # Bounds first so huge ints never reach float arithmetic
    if value >= MAX_SCORE:
        return MAX_SCORE
    if value <= MIN_SCORE:
        return MIN_SCORE
    return round_half_up(value)


def tiered_deduction(value: float, table: TierTable) -> int:
    """Deduction of the highest tier whose threshold ``value`` strictly exceeds."""
    for tier in table.tiers:
        if value > tier.threshold:
            return tier.deduction
    return 0


def unit_deduction(count: float, rule: UnitRule) -> int:
    """Per-unit deduction, capped when the rule has a cap."""
    count = min(count, METRIC_VALUE_CEILING)
    raw = count * rule.per_unit
    if rule.cap is not None and raw >= rule.cap:
        return rule.cap
    total = round_half_up(raw)
    if rule.cap is None:
        return total
    return min(rule.cap, total)


def deduction_factors(*candidates: tuple[str, float, int]) -> list[ScoreFactor]:
    """Build factors from ``(name, value, deduction)``, dropping zero deductions."""
    return [
        ScoreFactor(name=name, value=min(value, METRIC_VALUE_CEILING), impact=-deduction)
        for name, value, deduction in candidates
        if deduction > 0
    ]


def score_from_factors(factors: list[ScoreFactor]) -> int:
    """Start at 100, apply every factor, clamp at 0."""
    return clamp_score(MAX_SCORE + sum(factor.impact for factor in factors))
