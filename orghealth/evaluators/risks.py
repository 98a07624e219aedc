"""Risk evaluator for open risks by severity."""

from orghealth.evaluators.deductions import deduction_factors, score_from_factors, unit_deduction
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import RiskMetrics
from orghealth.models.model_score import Category, Priority, Recommendation, ScoreFactor

HOURS_PER_CRITICAL_RISK = 8


class RiskEvaluator:
    """Evaluates open risks.

    Algorithm:
        risk_score = 100 - (critical×15 + high×8 + medium×3)
        Additive and uncapped; only the final score floors at 0.
        Low severity risks carry no penalty.
    """

    category = Category.RISKS

    def explain(self, metrics: RiskMetrics, config: ScoringConfig) -> list[ScoreFactor]:
        rules = config.thresholds.risks
        return deduction_factors(
            ("Critical risks", metrics.critical, unit_deduction(metrics.critical, rules.critical)),
            ("High risks", metrics.high, unit_deduction(metrics.high, rules.high)),
            ("Medium risks", metrics.medium, unit_deduction(metrics.medium, rules.medium)),
        )

    def evaluate(self, metrics: RiskMetrics, config: ScoringConfig) -> int:
        return score_from_factors(self.explain(metrics, config))

    def recommend(self, metrics: RiskMetrics, config: ScoringConfig) -> list[Recommendation]:
        if metrics.critical == 0:
            return []
        return [
            Recommendation(
                priority=Priority.CRITICAL,
                title="Mitigate Critical Risks",
                description=f"{metrics.critical} critical risks are open",
                effort=metrics.critical * HOURS_PER_CRITICAL_RISK,
                category=self.category,
            )
        ]
