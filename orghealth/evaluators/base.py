"""Base evaluator protocol defining the contract for all category evaluators."""

from typing import Any, Protocol

from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_score import Category, Recommendation, ScoreFactor


class BaseEvaluator(Protocol):
    """Protocol defining the evaluator contract.

    Evaluators are stateless pure functions over one normalized metric record.
    All configuration (thresholds, cost estimates) comes through ``config``;
    evaluators never read module globals or perform I/O. This enables:
    - Per-test threshold overrides without shared state
    - Reproducible scoring
    """

    category: Category

    def evaluate(self, metrics: Any, config: ScoringConfig) -> int:
        """Score the category.

        Args:
            metrics: Normalized metric record for this category
            config: Scoring configuration

        Returns:
            Integer score between 0-100
        """
        ...

    def explain(self, metrics: Any, config: ScoringConfig) -> list[ScoreFactor]:
        """Return the deductions that produced the score (empty when healthy)."""
        ...

    def recommend(self, metrics: Any, config: ScoringConfig) -> list[Recommendation]:
        """Return recommendations in emission order."""
        ...
