"""Tests for metric normalization."""

import json
import math

import pytest

from orghealth.consts import METRIC_VALUE_CEILING
from orghealth.models.model_metrics import MetricBundle
from orghealth.models.model_score import Category
from orghealth.normalizer import (
    normalize_bundle,
    normalize_code_quality,
    normalize_licenses,
    normalize_performance,
    normalize_risks,
    normalize_storage,
    normalize_technical_debt,
    normalize_test_coverage,
)


class TestCoercion:
    """Malformed values coerce to zero instead of raising."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (3, 3),
            (3.9, 3),
            ("4", 4),
            (" 5 ", 5),
            ("many", 0),
            (None, 0),
            (True, 0),
            (-2, 0),
            (math.nan, 0),
            (math.inf, 0),
            ([1, 2, 3], 3),
            ({"nested": 1}, 0),
        ],
    )
    def test_count_coercion(self, value, expected) -> None:
        metrics = normalize_code_quality({"largeClasses": value})
        assert metrics.large_classes == expected

    @pytest.mark.parametrize("value", [10**400, 1e308, 10**13])
    def test_huge_values_clamp_to_ceiling(self, value) -> None:
        metrics = normalize_code_quality({"largeClasses": value})
        assert metrics.large_classes == METRIC_VALUE_CEILING

    def test_huge_json_int_does_not_raise(self) -> None:
        raw = json.loads('{"codeQuality": {"largeClasses": 1' + "0" * 400 + "}}")
        bundle = normalize_bundle(raw)
        assert bundle.code_quality.large_classes == METRIC_VALUE_CEILING

    def test_non_mapping_record_is_empty(self) -> None:
        metrics = normalize_code_quality("broken")
        assert metrics is not None
        assert metrics.large_classes == 0

    def test_absent_record_stays_absent(self) -> None:
        assert normalize_code_quality(None) is None
        assert normalize_licenses(None) is None
        assert normalize_risks(None) is None


class TestCategoryNormalizers:
    """Tests for per-category field mapping."""

    def test_code_quality_aliases(self) -> None:
        assert normalize_code_quality({"legacyCode": 2}).legacy_classes == 2
        assert normalize_code_quality({"legacyClasses": 5, "legacyCode": 2}).legacy_classes == 5

    def test_test_coverage_forms(self) -> None:
        assert normalize_test_coverage(72.5).overall_coverage == 72.5
        assert normalize_test_coverage({"overallCoverage": 150}).overall_coverage == 100

        metrics = normalize_test_coverage({"overallCoverage": 40, "classesNeedingTests": 7})
        assert metrics.classes_without_coverage == 7
        assert metrics.available is True

        assert normalize_test_coverage({"available": False}).available is False

    def test_performance_nested_cpu(self) -> None:
        metrics = normalize_performance(
            {
                "cpuTime": {"percentage": 72},
                "slowQueries": [{"id": 1}, {"id": 2}],
                "governorLimits": {"heapSize": {"percentage": 91}, "soql": 10},
            }
        )

        assert metrics.cpu_time_percentage == 72
        assert metrics.slow_queries == 2
        assert metrics.governor_limits == {"heapSize": 91, "soql": 10}

    def test_performance_from_governor_limits_only(self) -> None:
        metrics = normalize_performance(None, {"cpuTime": {"percentage": 88}})

        assert metrics is not None
        assert metrics.cpu_time_percentage == 88
        assert metrics.governor_limits == {"cpuTime": 88}

    def test_performance_absent(self) -> None:
        assert normalize_performance(None, None) is None

    def test_licenses(self) -> None:
        metrics = normalize_licenses(
            {"totalLicenses": 100, "unusedLicenses": 40, "monthlyWaste": "6600.50"}
        )

        assert metrics.unused_percentage == pytest.approx(40)
        assert metrics.monthly_waste == 6600.5

    def test_storage_aliases(self) -> None:
        nested = normalize_storage(
            {
                "dataStorage": {"percentage": 83},
                "fileStorage": {"percentage": 41},
                "growthTrends": {"growthRate": 12},
            }
        )
        flat = normalize_storage({"dataUsed": 83, "fileUsed": 41, "growthRate": 12})

        assert nested == flat
        assert nested.data_usage_percentage == 83

    def test_technical_debt_hourly_rate(self) -> None:
        assert normalize_technical_debt({"totalHours": 10}).hourly_rate == 125
        assert normalize_technical_debt({"totalHours": 10, "hourlyRate": 90}).estimated_cost == 900

    def test_risks_from_list(self) -> None:
        metrics = normalize_risks(
            [
                {"severity": "critical"},
                {"severity": "High"},
                "medium",
                {"severity": "unknown"},
                {"title": "no severity"},
                42,
            ]
        )

        assert (metrics.critical, metrics.high, metrics.medium, metrics.low) == (1, 1, 1, 0)

    def test_risks_from_counts(self) -> None:
        metrics = normalize_risks({"critical": 2, "high": "3", "low": -1})
        assert (metrics.critical, metrics.high, metrics.medium, metrics.low) == (2, 3, 0, 0)


class TestNormalizeBundle:
    """Tests for normalize_bundle."""

    def test_full_bundle(self, sample_raw_bundle: dict) -> None:
        bundle = normalize_bundle(sample_raw_bundle)
        assert bundle.present_categories() == list(Category)

    def test_absent_categories_are_none(self) -> None:
        bundle = normalize_bundle({"codeQuality": {"largeClasses": 1}, "risks": None})

        assert bundle.present_categories() == [Category.CODE_QUALITY]
        assert bundle.get(Category.RISKS) is None

    def test_empty_record_is_present(self) -> None:
        bundle = normalize_bundle({"storage": {}})
        assert bundle.present_categories() == [Category.STORAGE]

    def test_grouped_payload(self) -> None:
        bundle = normalize_bundle(
            {
                "technical": {"codeQuality": {"largeClasses": 1}},
                "financial": {"licenses": {"totalLicenses": 10}},
            }
        )

        assert bundle.code_quality.large_classes == 1
        assert bundle.licenses.total_licenses == 10

    def test_top_level_wins_over_group(self) -> None:
        bundle = normalize_bundle(
            {
                "technical": {"codeQuality": {"largeClasses": 1}},
                "codeQuality": {"largeClasses": 4},
            }
        )
        assert bundle.code_quality.large_classes == 4

    def test_coverage_nested_in_code_quality(self) -> None:
        bundle = normalize_bundle({"codeQuality": {"testCoverage": {"overallCoverage": 55}}})
        assert bundle.test_coverage.overall_coverage == 55

    def test_nested_coverage_wins_over_top_level(self) -> None:
        bundle = normalize_bundle(
            {
                "testCoverage": {"overallCoverage": 80},
                "codeQuality": {"testCoverage": {"overallCoverage": 55}},
            }
        )
        assert bundle.test_coverage.overall_coverage == 55

    def test_governor_limits_key(self) -> None:
        bundle = normalize_bundle({"governorLimits": {"cpuTime": {"percentage": 90}}})
        assert bundle.performance.cpu_time_percentage == 90

    @pytest.mark.parametrize("raw", [None, [], "metrics", 42])
    def test_non_mapping_payload(self, raw) -> None:
        assert normalize_bundle(raw) == MetricBundle()

    def test_idempotent(self, sample_raw_bundle: dict) -> None:
        assert normalize_bundle(sample_raw_bundle) == normalize_bundle(sample_raw_bundle)
