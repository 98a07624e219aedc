"""Tests for the scoring engine."""

import json
import logging

import pytest

from orghealth.config import config_from_dict
from orghealth.evaluators.engine import ScoringEngine
from orghealth.models.model_metrics import CodeQualityMetrics, MetricBundle
from orghealth.models.model_score import (
    AnalysisReport,
    Category,
    HealthStatus,
    Priority,
    RiskLevel,
)
from orghealth.normalizer import normalize_bundle


class TestScoreBundle:
    """Tests for ScoringEngine.score_bundle."""

    def test_full_bundle(self, engine: ScoringEngine, sample_bundle: MetricBundle) -> None:
        breakdown = engine.score_bundle(sample_bundle)

        technical = {c: s.score for c, s in breakdown.technical.components.items()}
        financial = {c: s.score for c, s in breakdown.financial.components.items()}

        assert technical == {
            Category.CODE_QUALITY: 87,
            Category.TEST_COVERAGE: 68,
            Category.PERFORMANCE: 77,
            Category.ARCHITECTURE: 90,
            Category.DATA_QUALITY: 100,
        }
        assert financial == {
            Category.LICENSES: 55,
            Category.STORAGE: 79,
            Category.TECHNICAL_DEBT: 90,
            Category.RISKS: 89,
        }
        assert breakdown.technical.total == 83
        assert breakdown.financial.total == 77
        assert breakdown.overall == 81
        assert breakdown.technical.missing == []
        assert breakdown.financial.missing == []

    def test_component_weights_and_factors(
        self, engine: ScoringEngine, sample_bundle: MetricBundle
    ) -> None:
        breakdown = engine.score_bundle(sample_bundle)
        performance = breakdown.technical.components[Category.PERFORMANCE]

        assert performance.weight == 0.25
        assert {f.name: f.impact for f in performance.factors} == {
            "CPU time usage": -15,
            "Slow queries": -8,
        }

    def test_partial_bundle_excludes_missing(self, engine: ScoringEngine) -> None:
        bundle = MetricBundle(
            code_quality=CodeQualityMetrics(large_classes=2, legacy_classes=1)
        )

        breakdown = engine.score_bundle(bundle)

        assert breakdown.technical.total == 87
        assert list(breakdown.technical.components) == [Category.CODE_QUALITY]
        assert Category.TEST_COVERAGE in breakdown.technical.missing
        assert breakdown.financial.total == 0
        assert len(breakdown.financial.missing) == 4
        # Empty financial dimension still takes its 40% share
        assert breakdown.overall == 52

    def test_missing_categories_logged(
        self, engine: ScoringEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        bundle = MetricBundle(code_quality=CodeQualityMetrics())

        with caplog.at_level(logging.WARNING, logger="orghealth.evaluators.engine"):
            engine.score_bundle(bundle)

        assert "testCoverage" in caplog.text
        assert "licenses" in caplog.text

    def test_empty_record_scores_healthy(self, engine: ScoringEngine) -> None:
        """A present but empty record is scored, unlike an absent category."""
        breakdown = engine.score_bundle(normalize_bundle({"storage": {}}))

        assert breakdown.financial.components[Category.STORAGE].score == 100
        assert breakdown.financial.total == 100

    def test_empty_bundle(self, engine: ScoringEngine) -> None:
        breakdown = engine.score_bundle(MetricBundle())
        assert breakdown.technical.total == 0
        assert breakdown.financial.total == 0
        assert breakdown.overall == 0

    def test_deterministic(self, engine: ScoringEngine, sample_bundle: MetricBundle) -> None:
        assert engine.score_bundle(sample_bundle) == engine.score_bundle(sample_bundle)

    def test_custom_weights(self, sample_bundle: MetricBundle) -> None:
        config = config_from_dict(
            {
                "financial_weights": {
                    "weights": {
                        "licenses": 1.0,
                        "storage": 0.0,
                        "technicalDebt": 0.0,
                        "risks": 0.0,
                    }
                }
            }
        )
        engine = ScoringEngine(config)

        assert engine.score_bundle(sample_bundle).financial.total == 55

    def test_engines_do_not_share_config(self, sample_bundle: MetricBundle) -> None:
        custom = ScoringEngine(config_from_dict({"technical_share": 1.0, "financial_share": 0.0}))
        default = ScoringEngine()

        assert custom.score_bundle(sample_bundle).overall == 83
        assert default.score_bundle(sample_bundle).overall == 81


class TestRecommend:
    """Tests for ScoringEngine.recommend."""

    def test_consolidated_order(self, engine: ScoringEngine, sample_bundle: MetricBundle) -> None:
        recs = engine.recommend(sample_bundle)

        assert [r.title for r in recs] == [
            "Update API Versions",
            "Optimize Unused Licenses",
            "Refactor Large Classes",
            "Increase Test Coverage",
            "Fix Failed Batch Jobs",
            "Deactivate Inactive Users",
            "Archive Old Data",
            "Optimize Slow Queries",
            "Review Custom Objects",
            "Optimize Custom Fields",
            "Clean Up Large Files",
        ]

    def test_absent_categories_emit_nothing(self, engine: ScoringEngine) -> None:
        assert engine.recommend(MetricBundle()) == []


class TestAnalyze:
    """Tests for ScoringEngine.analyze."""

    def test_analyze_raw_payload(self, engine: ScoringEngine, sample_raw_bundle: dict) -> None:
        report = engine.analyze(sample_raw_bundle)

        assert isinstance(report, AnalysisReport)
        assert report.overall_score == 81
        assert len(report.recommendations) == 11

    def test_analyze_huge_values(self, engine: ScoringEngine) -> None:
        raw = json.loads(
            '{"risks": {"critical": 1e308}, "codeQuality": {"largeClasses": 1'
            + "0" * 400
            + "}}"
        )

        report = engine.analyze(raw)

        assert report.breakdown.financial.components[Category.RISKS].score == 0
        assert report.breakdown.technical.components[Category.CODE_QUALITY].score == 70
        assert 0 <= report.overall_score <= 100
        assert report.recommendations[0].priority == Priority.CRITICAL

    def test_analyze_bundle_matches_raw(
        self, engine: ScoringEngine, sample_raw_bundle: dict, sample_bundle: MetricBundle
    ) -> None:
        from_raw = engine.analyze(sample_raw_bundle)
        from_bundle = engine.analyze(sample_bundle)

        assert from_raw.breakdown == from_bundle.breakdown
        assert from_raw.recommendations == from_bundle.recommendations

    def test_executive_summary(self, engine: ScoringEngine, sample_raw_bundle: dict) -> None:
        summary = engine.analyze(sample_raw_bundle).summary

        assert summary.health_status == HealthStatus.GOOD
        assert summary.risk_level == RiskLevel.LOW
        assert summary.technical_score == 83
        assert summary.financial_score == 77
        assert [r.title for r in summary.top_recommendations] == [
            "Update API Versions",
            "Optimize Unused Licenses",
            "Refactor Large Classes",
            "Increase Test Coverage",
            "Fix Failed Batch Jobs",
        ]
        assert [step.priority for step in summary.next_steps] == [Priority.CRITICAL, Priority.HIGH]
        assert len(summary.next_steps[1].items) == 3

    def test_potential_savings(self, engine: ScoringEngine, sample_raw_bundle: dict) -> None:
        savings = engine.analyze(sample_raw_bundle).summary.potential_savings

        assert savings.immediate == pytest.approx(79200)
        assert savings.short_term == pytest.approx(1800)
        assert savings.long_term == pytest.approx(20000)
        assert savings.total == pytest.approx(101000)

    def test_analyze_malformed_payload(self, engine: ScoringEngine) -> None:
        """Garbage in never raises; it scores as healthy or absent."""
        report = engine.analyze(
            {
                "codeQuality": {"largeClasses": "lots", "legacyCode": None},
                "licenses": "not a record",
                "risks": 42,
            }
        )

        assert report.breakdown.technical.components[Category.CODE_QUALITY].score == 100
        assert report.breakdown.financial.components[Category.LICENSES].score == 100
        assert report.breakdown.financial.components[Category.RISKS].score == 100
        assert 0 <= report.overall_score <= 100

    def test_analyze_non_mapping(self, engine: ScoringEngine) -> None:
        report = engine.analyze([1, 2, 3])
        assert report.overall_score == 0
        assert report.recommendations == []
