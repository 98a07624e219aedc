"""Recommendation consolidation and executive summary helpers."""

from collections.abc import Iterable

from orghealth.consts import NEXT_STEP_ITEMS, PRIORITY_ORDER, TOP_RECOMMENDATIONS_LIMIT
from orghealth.models.model_metrics import MetricBundle
from orghealth.models.model_score import (
    HealthStatus,
    NextStep,
    PotentialSavings,
    Priority,
    Recommendation,
    RiskLevel,
)

# Share of yearly storage overage / technical debt cost counted as recoverable
STORAGE_SAVINGS_SHARE = 0.3
TECHNICAL_DEBT_SAVINGS_SHARE = 0.5


def priority_rank(recommendation: Recommendation) -> int:
    return PRIORITY_ORDER[recommendation.priority.value]


def consolidate_recommendations(
    recommendation_lists: Iterable[Iterable[Recommendation]],
) -> list[Recommendation]:
    """Merge per-category recommendations into one list, most urgent first.

    The sort is stable: recommendations of equal priority keep the order in
    which their categories emitted them. Duplicate titles from different
    categories are kept as-is.

    Args:
        recommendation_lists: One list per category, in category order

    Returns:
        Flat list sorted critical → high → medium → low
    """
    merged = [rec for recommendations in recommendation_lists for rec in recommendations]
    return sorted(merged, key=priority_rank)


def filter_by_priority(
    recommendations: Iterable[Recommendation], priority: Priority
) -> list[Recommendation]:
    return [rec for rec in recommendations if rec.priority == priority]


def top_recommendations(
    recommendations: Iterable[Recommendation], limit: int = TOP_RECOMMENDATIONS_LIMIT
) -> list[Recommendation]:
    return consolidate_recommendations([recommendations])[:limit]


def health_status(technical: int, financial: int) -> HealthStatus:
    """Label the average of the two dimension scores."""
    average = (technical + financial) / 2

    if average >= 90:
        return HealthStatus.EXCELLENT
    elif average >= 75:
        return HealthStatus.GOOD
    elif average >= 60:
        return HealthStatus.FAIR
    elif average >= 40:
        return HealthStatus.POOR
    else:
        return HealthStatus.CRITICAL


def risk_level(technical: int, financial: int) -> RiskLevel:
    """Each dimension below 60 adds 3 risk points, below 40 another 2."""
    points = 0
    for score in (technical, financial):
        if score < 60:
            points += 3
        if score < 40:
            points += 2

    if points >= 6:
        return RiskLevel.HIGH
    elif points >= 3:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def next_steps(
    recommendations: Iterable[Recommendation], items_per_step: int = NEXT_STEP_ITEMS
) -> list[NextStep]:
    recommendations = list(recommendations)
    steps = []

    critical = filter_by_priority(recommendations, Priority.CRITICAL)
    if critical:
        steps.append(
            NextStep(
                priority=Priority.CRITICAL,
                action="Address critical issues immediately",
                items=critical[:items_per_step],
            )
        )

    high = filter_by_priority(recommendations, Priority.HIGH)
    if high:
        steps.append(
            NextStep(
                priority=Priority.HIGH,
                action="Plan high-impact improvements",
                items=high[:items_per_step],
            )
        )

    return steps


def calculate_potential_savings(bundle: MetricBundle) -> PotentialSavings:
    """Estimate annual savings from the financial metrics.

    - immediate: unused license spend over a year
    - short term: 30% of the yearly storage overage
    - long term: 50% of the technical debt cost
    """
    immediate = short_term = long_term = 0.0

    if bundle.licenses is not None:
        immediate = bundle.licenses.monthly_waste * 12
    if bundle.storage is not None:
        short_term = bundle.storage.monthly_overage * 12 * STORAGE_SAVINGS_SHARE
    if bundle.technical_debt is not None:
        long_term = bundle.technical_debt.estimated_cost * TECHNICAL_DEBT_SAVINGS_SHARE

    return PotentialSavings(immediate=immediate, short_term=short_term, long_term=long_term)
