"""License evaluator for user license utilization."""

from orghealth.evaluators.deductions import deduction_factors, score_from_factors, tiered_deduction
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import LicenseMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor


class LicenseEvaluator:
    """Evaluates license utilization.

    Algorithm:
        unused% = unused / total × 100 (0 when total is 0)
        unused%:        > 30 → -40, > 15 → -20, > 5 → -10
        inactive users: > 50 → -15, > 20 → -10, > 10 → -5
        Minimum: 0
    """

    category = Category.LICENSES

    def explain(self, metrics: LicenseMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        tiers = config.thresholds.licenses
        return deduction_factors(
            ("Unused license percentage", round(metrics.unused_percentage, 1),
             tiered_deduction(metrics.unused_percentage, tiers.unused_percentage)),
            ("Inactive users", metrics.inactive_users,
             tiered_deduction(metrics.inactive_users, tiers.inactive_users)),
        )

    def evaluate(self, metrics: LicenseMetrics, config: ScoringConfig) -> int:
        """Calculate license score.

        Args:
            metrics: Normalized license counts
            config: Scoring configuration with license tiers

        Returns:
            License score between 0-100
        """
        return score_from_factors(self.explain(metrics, config))

    def recommend(self, metrics: LicenseMetrics, config: ScoringConfig) -> list[Recommendation]:
        """Recommendations with monthly savings estimates.

        Inactive and never-logged-in users are priced at
        ``config.license_monthly_cost`` each.
        """
        recommendations = []

        if metrics.unused_licenses > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.CRITICAL,
                    title="Optimize Unused Licenses",
                    description=(
                        f"{metrics.unused_licenses} unused licenses generating "
                        f"${metrics.monthly_waste:,.0f} of monthly waste"
                    ),
                    effort=16,
                    monthly_savings=metrics.monthly_waste,
                    category=self.category,
                )
            )

        if metrics.inactive_users > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.HIGH,
                    title="Deactivate Inactive Users",
                    description=f"{metrics.inactive_users} users inactive for more than 90 days",
                    effort=8,
                    monthly_savings=metrics.inactive_users * config.license_monthly_cost,
                    category=self.category,
                )
            )

        if metrics.never_logged_users > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.HIGH,
                    title="Review Users Who Never Logged In",
                    description=f"{metrics.never_logged_users} users have never logged in",
                    effort=4,
                    monthly_savings=metrics.never_logged_users * config.license_monthly_cost,
                    category=self.category,
                )
            )

        return recommendations


def main() -> None:
    """Demonstrate license scoring with sample metrics."""
    print("License Evaluator Demo")
    print("=" * 50)

    evaluator = LicenseEvaluator()
    config = ScoringConfig()

    test_cases = [
        ("Fully used", LicenseMetrics(total_licenses=100, unused_licenses=0)),
        ("10% unused", LicenseMetrics(total_licenses=100, unused_licenses=10)),
        ("40% unused", LicenseMetrics(total_licenses=100, unused_licenses=40)),
        (
            "40% unused, 60 inactive users",
            LicenseMetrics(total_licenses=100, unused_licenses=40, inactive_users=60),
        ),
        ("No licenses reported", LicenseMetrics()),
    ]

    print("\n## Test Cases")
    for description, metrics in test_cases:
        score = evaluator.evaluate(metrics, config)
        print(f"\n{description}:")
        print(f"  Unused: {metrics.unused_percentage:.1f}%  Inactive: {metrics.inactive_users}")
        print(f"  Score: {score}/100")

    print("\n## Tiers")
    print("unused%:  >30 → -40, >15 → -20, >5 → -10")
    print("inactive: >50 → -15, >20 → -10, >10 → -5")


if __name__ == "__main__":
    main()
