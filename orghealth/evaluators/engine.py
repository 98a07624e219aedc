"""Scoring engine orchestrating all category evaluators."""

import logging
from collections.abc import Mapping
from typing import Any

from orghealth.evaluators.architecture import ArchitectureEvaluator
from orghealth.evaluators.base import BaseEvaluator
from orghealth.evaluators.code_quality import CodeQualityEvaluator
from orghealth.evaluators.composite import calculate_overall_score, weighted_average
from orghealth.evaluators.data_quality import DataQualityEvaluator
from orghealth.evaluators.licenses import LicenseEvaluator
from orghealth.evaluators.performance import PerformanceEvaluator
from orghealth.evaluators.recommendations import (
    calculate_potential_savings,
    consolidate_recommendations,
    health_status,
    next_steps,
    risk_level,
    top_recommendations,
)
from orghealth.evaluators.risks import RiskEvaluator
from orghealth.evaluators.storage import StorageEvaluator
from orghealth.evaluators.technical_debt import TechnicalDebtEvaluator
from orghealth.evaluators.test_coverage import TestCoverageEvaluator
from orghealth.models.model_eval import ScoringConfig, WeightTable
from orghealth.models.model_metrics import MetricBundle
from orghealth.models.model_score import (
    AnalysisReport,
    Category,
    ComponentScore,
    DimensionScore,
    ExecutiveSummary,
    Recommendation,
    ScoreBreakdown,
)
from orghealth.normalizer import normalize_bundle

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Scores metric bundles and consolidates their recommendations.

    The engine is constructed with its configuration instead of reading
    globals, so differently configured engines can coexist. It handles:
    - Running every category evaluator on the categories present
    - Weighted aggregation per dimension and overall
    - Recommendation consolidation and the executive summary

    All methods are pure apart from the report timestamp.
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        """Initialize engine with all evaluators.

        Args:
            config: Scoring configuration. Uses defaults if None.
        """
        self.config = config or ScoringConfig()
        self.evaluators: dict[Category, BaseEvaluator] = {
            Category.CODE_QUALITY: CodeQualityEvaluator(),
            Category.TEST_COVERAGE: TestCoverageEvaluator(),
            Category.PERFORMANCE: PerformanceEvaluator(),
            Category.ARCHITECTURE: ArchitectureEvaluator(),
            Category.DATA_QUALITY: DataQualityEvaluator(),
            Category.LICENSES: LicenseEvaluator(),
            Category.STORAGE: StorageEvaluator(),
            Category.TECHNICAL_DEBT: TechnicalDebtEvaluator(),
            Category.RISKS: RiskEvaluator(),
        }

    def score_category(
        self, category: Category, metrics: Any, weights: WeightTable | None = None
    ) -> ComponentScore:
        """Score one category from its normalized metric record.

        The component weight comes from ``weights``, or from the configured
        table of the category's dimension.
        """
        weights = weights or self.config.weights_for(category.dimension)
        evaluator = self.evaluators[category]
        score = evaluator.evaluate(metrics, self.config)
        logger.debug(f"{category.value}: {score}")
        return ComponentScore(
            score=score,
            weight=weights.weight_for(category),
            factors=evaluator.explain(metrics, self.config),
        )

    def score_dimension(self, bundle: MetricBundle, weights: WeightTable) -> DimensionScore:
        """Score every category of a dimension that has metrics.

        Absent categories are listed in ``missing`` and left out of the
        weighted average.
        """
        components: dict[Category, ComponentScore] = {}
        missing: list[Category] = []

        for category in weights.weights:
            metrics = bundle.get(category)
            if metrics is None:
                missing.append(category)
                continue
            components[category] = self.score_category(category, metrics, weights)

        if missing:
            logger.warning(
                f"{weights.dimension.value} score excludes categories without metrics: "
                f"{', '.join(c.value for c in missing)}"
            )

        return DimensionScore(
            total=weighted_average(components),
            components=components,
            missing=missing,
        )

    def score_bundle(self, bundle: MetricBundle) -> ScoreBreakdown:
        """Calculate the full score breakdown for a bundle."""
        technical = self.score_dimension(bundle, self.config.technical_weights)
        financial = self.score_dimension(bundle, self.config.financial_weights)
        overall = calculate_overall_score(technical.total, financial.total, self.config)
        return ScoreBreakdown(technical=technical, financial=financial, overall=overall)

    def recommend(self, bundle: MetricBundle) -> list[Recommendation]:
        """Collect recommendations from every present category, most urgent first."""
        per_category = []
        for category, evaluator in self.evaluators.items():
            metrics = bundle.get(category)
            if metrics is None:
                continue
            per_category.append(evaluator.recommend(metrics, self.config))
        return consolidate_recommendations(per_category)

    def analyze(self, metrics: MetricBundle | Mapping[str, Any]) -> AnalysisReport:
        """Run a complete analysis.

        Args:
            metrics: A normalized bundle, or a raw payload to normalize first

        Returns:
            AnalysisReport with breakdown, recommendations and summary
        """
        bundle = metrics if isinstance(metrics, MetricBundle) else normalize_bundle(metrics)

        breakdown = self.score_bundle(bundle)
        recommendations = self.recommend(bundle)
        technical = breakdown.technical.total
        financial = breakdown.financial.total

        summary = ExecutiveSummary(
            health_status=health_status(technical, financial),
            risk_level=risk_level(technical, financial),
            technical_score=technical,
            financial_score=financial,
            potential_savings=calculate_potential_savings(bundle),
            top_recommendations=top_recommendations(recommendations),
            next_steps=next_steps(recommendations),
        )

        logger.info(
            f"Analysis complete: overall={breakdown.overall} technical={technical} "
            f"financial={financial} recommendations={len(recommendations)}"
        )
        return AnalysisReport(
            breakdown=breakdown,
            recommendations=recommendations,
            summary=summary,
        )


def main() -> None:
    """Demonstrate a full analysis on a sample payload."""
    sample = {
        "codeQuality": {"largeClasses": 2, "legacyCode": 1, "multiTriggers": 0},
        "testCoverage": {"overallCoverage": 68},
        "performance": {"cpuTime": {"percentage": 72}},
        "architecture": {"customObjects": 120, "activeFlows": 40, "customFields": 650},
        "licenses": {"totalLicenses": 100, "unusedLicenses": 40, "monthlyWaste": 6600},
        "storage": {"dataStorage": {"percentage": 83}, "fileStorage": {"percentage": 40}},
        "technicalDebt": {"totalHours": 320},
        "risks": [{"severity": "high"}, {"severity": "medium"}],
    }

    print("Scoring Engine Demo")
    print("=" * 50)

    engine = ScoringEngine()
    report = engine.analyze(sample)
    breakdown = report.breakdown

    for name, dimension in (("Technical", breakdown.technical), ("Financial", breakdown.financial)):
        print(f"\n## {name}: {dimension.total}/100")
        for category, component in dimension.components.items():
            print(f"  {category.label:<15} {component.score:>3}  (weight {component.weight:.2f})")
        for category in dimension.missing:
            print(f"  {category.label:<15}   -  (no metrics)")

    print(f"\n## Overall: {breakdown.overall}/100")
    print(f"Health: {report.summary.health_status.value}  Risk: {report.summary.risk_level.value}")

    print("\n## Recommendations")
    for rec in report.recommendations:
        print(f"  [{rec.priority.value:<8}] {rec.title} ({rec.effort:g}h)")


if __name__ == "__main__":
    main()
