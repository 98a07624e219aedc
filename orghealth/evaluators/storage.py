"""Storage evaluator for data and file storage usage."""

from orghealth.evaluators.deductions import (
    deduction_factors,
    score_from_factors,
    tiered_deduction,
    unit_deduction,
)
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import StorageMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

ARCHIVE_USAGE_THRESHOLD = 80
GROWTH_RATE_THRESHOLD = 10

# Share of the monthly overage each action is expected to recover
ARCHIVE_SAVINGS_SHARE = 0.3
GROWTH_SAVINGS_SHARE = 0.2


class StorageEvaluator:
    """Evaluates storage usage.

    Algorithm:
        data usage: > 90% → -30, > 80% → -15, > 60% → -5
        file usage: > 90% → -25, > 80% → -12, > 60% → -5
        large files: -3 each, max -15
    """

    category = Category.STORAGE

    def explain(self, metrics: StorageMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        rules = config.thresholds.storage
        return deduction_factors(
            ("Data storage usage", metrics.data_usage_percentage,
             tiered_deduction(metrics.data_usage_percentage, rules.data_usage)),
            ("File storage usage", metrics.file_usage_percentage,
             tiered_deduction(metrics.file_usage_percentage, rules.file_usage)),
            ("Large files", metrics.large_files,
             unit_deduction(metrics.large_files, rules.large_files)),
        )

    def evaluate(self, metrics: StorageMetrics, config: ScoringConfig) -> int:
        return score_from_factors(self.explain(metrics, config))

    def recommend(self, metrics: StorageMetrics, config: ScoringConfig) -> list[Recommendation]:
        recommendations = []

        if metrics.data_usage_percentage > ARCHIVE_USAGE_THRESHOLD:
            recommendations.append(
                Recommendation(
                    priority=Priority.HIGH,
                    title="Archive Old Data",
                    description=f"Data storage at {metrics.data_usage_percentage:.1f}%",
                    effort=24,
                    monthly_savings=metrics.monthly_overage * ARCHIVE_SAVINGS_SHARE,
                    category=self.category,
                )
            )

        if metrics.growth_rate > GROWTH_RATE_THRESHOLD:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Monitor Data Growth",
                    description=f"Data growth rate at {metrics.growth_rate:.1f}% per month",
                    effort=8,
                    monthly_savings=metrics.monthly_overage * GROWTH_SAVINGS_SHARE,
                    category=self.category,
                )
            )

        if metrics.large_files > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Clean Up Large Files",
                    description=f"{metrics.large_files} large files unused for 6+ months",
                    effort=16,
                    monthly_savings=metrics.large_files * config.large_file_monthly_savings,
                    category=self.category,
                )
            )

        return recommendations
