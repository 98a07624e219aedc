"""Composite scoring functions for combining category scores."""

from collections.abc import Mapping

from orghealth.evaluators.deductions import clamp_score
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_score import Category, CategoryScore


def weighted_average(scores: Mapping[Category, CategoryScore]) -> int:
    """Calculate the weighted average of the category scores present.

    Only categories passed in contribute to the denominator, so a category
    whose metrics were absent is excluded rather than counted as zero.

    Args:
        scores: Category scores of one dimension (0-100 each)

    Returns:
        Rounded weighted score between 0-100, or 0 when no weight is present
    """
    total_weight = sum(score.weight for score in scores.values())
    if total_weight <= 0:
        return 0

    weighted = sum(score.score * score.weight for score in scores.values())
    return clamp_score(weighted / total_weight)


def calculate_overall_score(technical: int, financial: int, config: ScoringConfig) -> int:
    """Combine the dimension totals.

    Args:
        technical: Technical dimension score (0-100)
        financial: Financial dimension score (0-100)
        config: Scoring configuration holding the dimension shares

    Returns:
        round(technical × 0.6 + financial × 0.4) with the default shares
    """
    return clamp_score(technical * config.technical_share + financial * config.financial_share)


def main() -> None:
    """Demonstrate weighted aggregation with missing categories."""
    config = ScoringConfig()
    weights = config.technical_weights

    print("Composite Scoring Demo")
    print("=" * 50)

    print("\n## Technical Weights")
    for category, weight in weights.weights.items():
        print(f"  {category.label:<15} {weight:.2f}")

    full = {
        category: CategoryScore(score=score, weight=weights.weight_for(category))
        for category, score in [
            (Category.CODE_QUALITY, 87),
            (Category.TEST_COVERAGE, 72),
            (Category.PERFORMANCE, 70),
            (Category.ARCHITECTURE, 95),
            (Category.DATA_QUALITY, 100),
        ]
    }
    partial = {k: v for k, v in full.items() if k != Category.TEST_COVERAGE}

    technical_full = weighted_average(full)
    technical_partial = weighted_average(partial)

    print("\n## Results")
    print(f"  All categories present:     {technical_full}")
    print(f"  Test coverage absent:       {technical_partial} (weight excluded, not zero-filled)")
    print(f"  Overall with financial=80:  {calculate_overall_score(technical_full, 80, config)}")


if __name__ == "__main__":
    main()
