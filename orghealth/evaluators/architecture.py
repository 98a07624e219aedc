"""Architecture evaluator for metadata volume."""

from orghealth.evaluators.deductions import deduction_factors, score_from_factors, tiered_deduction
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import ArchitectureMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

# Recommendation triggers
CUSTOM_OBJECTS_REVIEW = 50
CUSTOM_FIELDS_REVIEW = 500
STORAGE_MONITOR_GB = 5


class ArchitectureEvaluator:
    """Evaluates org architecture.

    Three independent tier tables, each applying only its highest match:
        custom objects: > 200 → -15, > 100 → -5
        active flows:   > 100 → -20, > 50  → -10
        custom fields:  > 1000 → -15, > 500 → -5
    """

    category = Category.ARCHITECTURE

    def explain(self, metrics: ArchitectureMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        tiers = config.thresholds.architecture
        return deduction_factors(
            ("Custom objects", metrics.custom_objects,
             tiered_deduction(metrics.custom_objects, tiers.custom_objects)),
            ("Active flows", metrics.active_flows,
             tiered_deduction(metrics.active_flows, tiers.active_flows)),
            ("Custom fields", metrics.custom_fields,
             tiered_deduction(metrics.custom_fields, tiers.custom_fields)),
        )

    def evaluate(self, metrics: ArchitectureMetrics, config: ScoringConfig) -> int:
        return score_from_factors(self.explain(metrics, config))

    def recommend(
        self, metrics: ArchitectureMetrics, config: ScoringConfig
    ) -> list[Recommendation]:
        recommendations = []

        if metrics.custom_objects > CUSTOM_OBJECTS_REVIEW:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Review Custom Objects",
                    description=(
                        f"{metrics.custom_objects} custom objects detected. "
                        "Consider consolidation."
                    ),
                    effort=16,
                    category=self.category,
                )
            )

        if metrics.custom_fields > CUSTOM_FIELDS_REVIEW:
            recommendations.append(
                Recommendation(
                    priority=Priority.MEDIUM,
                    title="Optimize Custom Fields",
                    description=(
                        f"{metrics.custom_fields} custom fields detected. "
                        "Review for unused fields."
                    ),
                    effort=24,
                    category=self.category,
                )
            )

        if metrics.storage_used_gb > STORAGE_MONITOR_GB:
            recommendations.append(
                Recommendation(
                    priority=Priority.LOW,
                    title="Monitor Storage Usage",
                    description=f"Storage usage at {metrics.storage_used_gb:g} GB.",
                    effort=8,
                    category=self.category,
                )
            )

        return recommendations
