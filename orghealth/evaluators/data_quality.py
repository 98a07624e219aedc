"""Data quality evaluator for record hygiene."""

from orghealth.evaluators.deductions import deduction_factors, score_from_factors, tiered_deduction
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import DataQualityMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

ARCHIVAL_THRESHOLD = 1000


class DataQualityEvaluator:
    """Evaluates data quality.

    Algorithm (exclusive tiers per metric):
        duplicate records:  > 1000 → -25, > 500 → -15, > 100 → -5
        incomplete records: > 5000 → -20, > 1000 → -10
    """

    category = Category.DATA_QUALITY

    def explain(self, metrics: DataQualityMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        tiers = config.thresholds.data_quality
        return deduction_factors(
            ("Duplicate records", metrics.duplicate_records,
             tiered_deduction(metrics.duplicate_records, tiers.duplicate_records)),
            ("Incomplete records", metrics.incomplete_records,
             tiered_deduction(metrics.incomplete_records, tiers.incomplete_records)),
        )

    def evaluate(self, metrics: DataQualityMetrics, config: ScoringConfig) -> int:
        return score_from_factors(self.explain(metrics, config))

    def recommend(
        self, metrics: DataQualityMetrics, config: ScoringConfig
    ) -> list[Recommendation]:
        recommendations = []

        if metrics.old_opportunities > ARCHIVAL_THRESHOLD:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Archive Old Opportunities",
                    description=f"{metrics.old_opportunities} old opportunities ready for archival",
                    effort=16,
                    category=self.category,
                )
            )

        if metrics.old_cases > ARCHIVAL_THRESHOLD:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Archive Old Cases",
                    description=f"{metrics.old_cases} old cases ready for archival",
                    effort=16,
                    category=self.category,
                )
            )

        if metrics.large_files > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.LOW,
                    title="Optimize Large Files",
                    description=f"{metrics.large_files} files larger than 10MB detected",
                    effort=8,
                    category=self.category,
                )
            )

        return recommendations
