"""Performance evaluator for governor limit usage and job health."""

from orghealth.consts import GOVERNOR_LIMIT_CRITICAL
from orghealth.evaluators.deductions import (
    deduction_factors,
    score_from_factors,
    tiered_deduction,
    unit_deduction,
)
from orghealth.models.common import humanize_camel
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import PerformanceMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

# Failed jobs are only worth a recommendation above this count
FAILED_JOBS_THRESHOLD = 5


class PerformanceEvaluator:
    """Evaluates runtime performance.

    Algorithm:
        CPU time usage (exclusive tiers, highest first):
            > 85% → -30
            > 70% → -15
            > 50% → -5
        Slow queries: -4 each, max -20
        Heavy pages:  -5 each, max -20
        Minimum: 0

    CPU usage saturates at the top tier: 86% and 100% score the same.
    """

    category = Category.PERFORMANCE

    def explain(self, metrics: PerformanceMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        rules = config.thresholds.performance
        return deduction_factors(
            ("CPU time usage", metrics.cpu_time_percentage,
             tiered_deduction(metrics.cpu_time_percentage, rules.cpu_time)),
            ("Slow queries", metrics.slow_queries,
             unit_deduction(metrics.slow_queries, rules.slow_queries)),
            ("Heavy pages", metrics.heavy_pages,
             unit_deduction(metrics.heavy_pages, rules.heavy_pages)),
        )

    def evaluate(self, metrics: PerformanceMetrics, config: ScoringConfig) -> int:
        """Calculate performance score.

        Args:
            metrics: Normalized performance metrics
            config: Scoring configuration with performance rules

        Returns:
            Performance score between 0-100
        """
        return score_from_factors(self.explain(metrics, config))

    def recommend(
        self, metrics: PerformanceMetrics, config: ScoringConfig
    ) -> list[Recommendation]:
        recommendations = []

        if metrics.failed_jobs > FAILED_JOBS_THRESHOLD:
            recommendations.append(
                Recommendation(
                    priority=Priority.HIGH,
                    title="Fix Failed Batch Jobs",
                    description=f"{metrics.failed_jobs} jobs failed in the last 7 days",
                    effort=metrics.failed_jobs * 4,
                    category=self.category,
                )
            )

        if metrics.long_running_jobs > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Optimize Long-Running Jobs",
                    description=f"{metrics.long_running_jobs} jobs taking more than 2 hours",
                    effort=metrics.long_running_jobs * 4,
                    category=self.category,
                )
            )

        if metrics.debug_logs > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Optimize Debug Logs",
                    description=f"{metrics.debug_logs} large debug logs detected",
                    effort=8,
                    category=self.category,
                )
            )

        if metrics.slow_queries > 0:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Optimize Slow Queries",
                    description=f"{metrics.slow_queries} slow queries detected",
                    effort=metrics.slow_queries * 4,
                    category=self.category,
                )
            )

        limits = dict(metrics.governor_limits)
        limits.setdefault("cpuTime", metrics.cpu_time_percentage)
        for name, percentage in limits.items():
            if percentage > GOVERNOR_LIMIT_CRITICAL:
                recommendations.append(
                    Recommendation(
                        priority=Priority.CRITICAL,
                        title=f"Optimize {humanize_camel(name)}",
                        description=f"{name} usage at {percentage:.1f}%",
                        effort=16,
                        category=self.category,
                    )
                )

        return recommendations
