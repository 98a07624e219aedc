"""Technical debt evaluator."""

from orghealth.evaluators.deductions import deduction_factors, score_from_factors, tiered_deduction
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import TechnicalDebtMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

REFACTOR_HOURS_PER_CLASS = 16
TEST_HOURS_PER_CLASS = 8


class TechnicalDebtEvaluator:
    """Evaluates accumulated technical debt by remediation hours.

    Algorithm (exclusive tiers):
        > 2000h → -40
        > 1000h → -25
        > 500h  → -15
        > 200h  → -10
        > 100h  → -5
    """

    category = Category.TECHNICAL_DEBT

    def explain(
        self, metrics: TechnicalDebtMetrics, config: ScoringConfig
    ) -> list[ScoreFactor]:
        return deduction_factors(
            ("Technical debt hours", metrics.total_hours,
             tiered_deduction(metrics.total_hours, config.thresholds.technical_debt.total_hours)),
        )

    def evaluate(self, metrics: TechnicalDebtMetrics, config: ScoringConfig) -> int:
        return score_from_factors(self.explain(metrics, config))

    def recommend(
        self, metrics: TechnicalDebtMetrics, config: ScoringConfig
    ) -> list[Recommendation]:
        recommendations = []

        if metrics.large_classes > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.HIGH,
                    title="Refactor Large Classes",
                    description=f"{metrics.large_classes} classes exceed 3000 lines",
                    effort=metrics.large_classes * REFACTOR_HOURS_PER_CLASS,
                    category=self.category,
                )
            )

        if metrics.low_coverage_classes > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.CRITICAL,
                    title="Add Tests for Large Classes",
                    description=(
                        f"{metrics.low_coverage_classes} large classes without test coverage"
                    ),
                    effort=metrics.low_coverage_classes * TEST_HOURS_PER_CLASS,
                    category=self.category,
                )
            )

        return recommendations
