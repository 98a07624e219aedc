"""Code quality evaluator for Apex class health."""

from orghealth.evaluators.deductions import deduction_factors, score_from_factors, unit_deduction
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import CodeQualityMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

# Effort estimates (hours per occurrence)
REFACTOR_HOURS_PER_CLASS = 16
API_UPGRADE_HOURS_PER_CLASS = 2
TRIGGER_CONSOLIDATION_HOURS = 8


class CodeQualityEvaluator:
    """Evaluates Apex code quality.

    Algorithm:
        score = 100
              - min(30, large_classes × 5)
              - min(20, legacy_classes × 3)
              - min(25, multi_triggers × 8)
        Minimum: 0

    Each rule is per-unit with its own cap, so 100 large classes still only
    cost 30 points.
    """

    category = Category.CODE_QUALITY

    def explain(self, metrics: CodeQualityMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        rules = config.thresholds.code_quality
        return deduction_factors(
            ("Large classes", metrics.large_classes,
             unit_deduction(metrics.large_classes, rules.large_classes)),
            ("Legacy API classes", metrics.legacy_classes,
             unit_deduction(metrics.legacy_classes, rules.legacy_classes)),
            ("Objects with multiple triggers", metrics.multi_triggers,
             unit_deduction(metrics.multi_triggers, rules.multi_triggers)),
        )

    def evaluate(self, metrics: CodeQualityMetrics, config: ScoringConfig) -> int:
        """Calculate code quality score.

        Args:
            metrics: Normalized code quality counts
            config: Scoring configuration with code quality rules

        Returns:
            Code quality score between 0-100
        """
        return score_from_factors(self.explain(metrics, config))

    def recommend(
        self, metrics: CodeQualityMetrics, config: ScoringConfig
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

        if metrics.legacy_classes > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.CRITICAL,
                    title="Update API Versions",
                    description=f"{metrics.legacy_classes} classes use outdated API versions",
                    effort=metrics.legacy_classes * API_UPGRADE_HOURS_PER_CLASS,
                    category=self.category,
                )
            )

        if metrics.multi_triggers > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.HIGH,
                    title="Consolidate Triggers",
                    description=f"{metrics.multi_triggers} objects have multiple triggers",
                    effort=metrics.multi_triggers * TRIGGER_CONSOLIDATION_HOURS,
                    category=self.category,
                )
            )

        return recommendations


def main() -> None:
    """Demonstrate code quality scoring with sample metrics."""
    print("Code Quality Evaluator Demo")
    print("=" * 50)

    evaluator = CodeQualityEvaluator()
    config = ScoringConfig()

    test_cases = [
        ("Clean org", CodeQualityMetrics()),
        ("Two large classes, one legacy", CodeQualityMetrics(large_classes=2, legacy_classes=1)),
        ("Large class cap reached", CodeQualityMetrics(large_classes=100)),
        (
            "Everything capped (floors at 25)",
            CodeQualityMetrics(large_classes=50, legacy_classes=50, multi_triggers=50),
        ),
    ]

    print("\n## Test Cases")
    for description, metrics in test_cases:
        score = evaluator.evaluate(metrics, config)
        print(f"\n{description}:")
        print(
            f"  Large={metrics.large_classes}, Legacy={metrics.legacy_classes}, "
            f"MultiTriggers={metrics.multi_triggers}"
        )
        print(f"  Score: {score}/100")
        for factor in evaluator.explain(metrics, config):
            print(f"  {factor.name}: {factor.impact}")

    print("\n## Scoring Formula")
    print("score = 100 - min(30, large×5) - min(20, legacy×3) - min(25, multi_triggers×8)")


if __name__ == "__main__":
    main()
