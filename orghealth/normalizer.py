"""Metric normalization: raw collaborator payloads -> typed MetricBundle.

This is the single boundary where missing or malformed data is handled.
Evaluators downstream never check for missing fields again.

Rules:
- A category whose key is absent (or None) stays absent in the bundle.
- A present category always yields a fully populated record; missing fields
  take the record defaults (0 for counts and percentages).
- Lists count as their length, numeric strings are parsed, and booleans,
  NaN, infinities, negatives and anything else coerce to 0.
- Finite values above METRIC_VALUE_CEILING are clamped to it.
- A nested codeQuality.testCoverage wins over a top-level testCoverage.

Nothing in this module raises for bad input.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from orghealth.consts import METRIC_VALUE_CEILING
from orghealth.models.model_metrics import (
    ArchitectureMetrics,
    CodeQualityMetrics,
    DataQualityMetrics,
    LicenseMetrics,
    MetricBundle,
    PerformanceMetrics,
    RiskMetrics,
    StorageMetrics,
    TechnicalDebtMetrics,
    TestCoverageMetrics,
)

logger = logging.getLogger(__name__)

_GROUP_KEYS = ("technical", "financial")
_SEVERITIES = ("critical", "high", "medium", "low")


def _as_number(value: Any) -> float:
    """Coerce a raw value to a non-negative finite number (0 when unusable)."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (list, tuple, set)):
        return float(len(value))
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0.0
    if not isinstance(value, (int, float)):
        return 0.0
    if isinstance(value, int):
        # Arbitrary-size ints from json.loads do not fit in a float
        value = min(value, METRIC_VALUE_CEILING)
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return min(number, float(METRIC_VALUE_CEILING))


def _as_count(value: Any) -> int:
    # Fractional counts are truncated
    return int(_as_number(value))


def _as_percentage(value: Any) -> float:
    return _as_number(value)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _get(data: Any, *path: str) -> Any:
    """Walk nested mappings, returning None as soon as a key is missing."""
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _first(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _flatten_groups(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``{"technical": {...}, "financial": {...}}`` groups into one mapping.

    Top-level category keys win over grouped ones.
    """
    flat: dict[str, Any] = {}
    for group in _GROUP_KEYS:
        nested = raw.get(group)
        if isinstance(nested, Mapping):
            flat.update(nested)
    flat.update({k: v for k, v in raw.items() if k not in _GROUP_KEYS})
    return flat


def normalize_code_quality(raw: Any) -> CodeQualityMetrics | None:
    if raw is None:
        return None
    data = _as_mapping(raw)
    return CodeQualityMetrics(
        large_classes=_as_count(data.get("largeClasses")),
        legacy_classes=_as_count(_first(data.get("legacyClasses"), data.get("legacyCode"))),
        multi_triggers=_as_count(data.get("multiTriggers")),
    )


def normalize_test_coverage(raw: Any) -> TestCoverageMetrics | None:
    """Accepts a bare percentage or an ``{overallCoverage, ...}`` record."""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        return TestCoverageMetrics(overall_coverage=min(100.0, _as_percentage(raw)))

    available = raw.get("available")
    return TestCoverageMetrics(
        overall_coverage=min(100.0, _as_percentage(raw.get("overallCoverage"))),
        classes_without_coverage=_as_count(
            _first(raw.get("classesWithoutCoverage"), raw.get("classesNeedingTests"))
        ),
        available=available if isinstance(available, bool) else True,
    )


def _normalize_governor_limits(raw: Any) -> dict[str, float]:
    limits: dict[str, float] = {}
    for name, limit in _as_mapping(raw).items():
        if isinstance(limit, Mapping):
            limits[str(name)] = _as_percentage(limit.get("percentage"))
        else:
            limits[str(name)] = _as_percentage(limit)
    return limits


def normalize_performance(raw: Any, governor_limits: Any = None) -> PerformanceMetrics | None:
    """Normalize performance metrics.

    When only a ``governorLimits`` payload exists it is passed as
    ``governor_limits`` and doubles as the performance record.
    """
    if raw is None and governor_limits is None:
        return None
    data = _as_mapping(raw if raw is not None else governor_limits)
    limits_raw = data.get("governorLimits") if raw is not None else governor_limits
    limits = _normalize_governor_limits(limits_raw)

    cpu = _first(_get(data, "cpuTime", "percentage"), _get(limits_raw, "cpuTime", "percentage"))
    cpu_percentage = _as_percentage(cpu) if cpu is not None else limits.get("cpuTime", 0.0)

    return PerformanceMetrics(
        cpu_time_percentage=cpu_percentage,
        slow_queries=_as_count(data.get("slowQueries")),
        heavy_pages=_as_count(data.get("heavyPages")),
        failed_jobs=_as_count(data.get("failedJobs")),
        long_running_jobs=_as_count(data.get("longRunningJobs")),
        debug_logs=_as_count(data.get("debugLogs")),
        governor_limits=limits,
    )


def normalize_architecture(raw: Any) -> ArchitectureMetrics | None:
    if raw is None:
        return None
    data = _as_mapping(raw)
    return ArchitectureMetrics(
        custom_objects=_as_count(data.get("customObjects")),
        active_flows=_as_count(data.get("activeFlows")),
        custom_fields=_as_count(data.get("customFields")),
        storage_used_gb=_as_number(data.get("storageUsed")),
    )


def normalize_data_quality(raw: Any) -> DataQualityMetrics | None:
    if raw is None:
        return None
    data = _as_mapping(raw)
    return DataQualityMetrics(
        duplicate_records=_as_count(data.get("duplicateRecords")),
        incomplete_records=_as_count(data.get("incompleteRecords")),
        old_opportunities=_as_count(
            _first(_get(data, "dataVolume", "oldOpportunities"), data.get("oldOpportunities"))
        ),
        old_cases=_as_count(_first(_get(data, "dataVolume", "oldCases"), data.get("oldCases"))),
        large_files=_as_count(data.get("largeFiles")),
    )


def normalize_licenses(raw: Any) -> LicenseMetrics | None:
    if raw is None:
        return None
    data = _as_mapping(raw)
    return LicenseMetrics(
        total_licenses=_as_count(data.get("totalLicenses")),
        unused_licenses=_as_count(data.get("unusedLicenses")),
        inactive_users=_as_count(data.get("inactiveUsers")),
        never_logged_users=_as_count(data.get("neverLoggedUsers")),
        monthly_waste=_as_number(data.get("monthlyWaste")),
    )


def normalize_storage(raw: Any) -> StorageMetrics | None:
    if raw is None:
        return None
    data = _as_mapping(raw)
    return StorageMetrics(
        data_usage_percentage=_as_percentage(
            _first(_get(data, "dataStorage", "percentage"), data.get("dataUsed"))
        ),
        file_usage_percentage=_as_percentage(
            _first(_get(data, "fileStorage", "percentage"), data.get("fileUsed"))
        ),
        large_files=_as_count(data.get("largeFiles")),
        monthly_overage=_as_number(data.get("monthlyOverage")),
        growth_rate=_as_percentage(
            _first(_get(data, "growthTrends", "growthRate"), data.get("growthRate"))
        ),
    )


def normalize_technical_debt(raw: Any) -> TechnicalDebtMetrics | None:
    if raw is None:
        return None
    data = _as_mapping(raw)
    hourly_rate = data.get("hourlyRate")
    fields: dict[str, Any] = {
        "total_hours": _as_number(data.get("totalHours")),
        "large_classes": _as_count(data.get("largeClasses")),
        "low_coverage_classes": _as_count(data.get("lowCoverageClasses")),
        "total_cost": _as_number(data.get("totalCost")),
    }
    if hourly_rate is not None:
        fields["hourly_rate"] = _as_number(hourly_rate)
    return TechnicalDebtMetrics(**fields)


def normalize_risks(raw: Any) -> RiskMetrics | None:
    """Accepts a list of ``{"severity": ...}`` records or a severity -> count mapping."""
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return RiskMetrics(**{severity: _as_count(raw.get(severity)) for severity in _SEVERITIES})

    counts = dict.fromkeys(_SEVERITIES, 0)
    if isinstance(raw, (list, tuple)):
        for risk in raw:
            severity = risk.get("severity") if isinstance(risk, Mapping) else risk
            if isinstance(severity, str) and severity.lower() in counts:
                counts[severity.lower()] += 1
    return RiskMetrics(**counts)


def normalize_bundle(raw: Any) -> MetricBundle:
    """Normalize a raw metric payload into a MetricBundle.

    Args:
        raw: Mapping of category name -> raw record, optionally grouped under
            ``technical``/``financial`` keys. Anything else yields an empty bundle.

    Returns:
        MetricBundle with absent categories left as None
    """
    if not isinstance(raw, Mapping):
        logger.debug(f"Ignoring non-mapping metric payload of type {type(raw).__name__}")
        return MetricBundle()

    data = _flatten_groups(raw)
    code_quality_raw = data.get("codeQuality")

    bundle = MetricBundle(
        code_quality=normalize_code_quality(code_quality_raw),
        test_coverage=normalize_test_coverage(
            _first(_get(code_quality_raw, "testCoverage"), data.get("testCoverage"))
        ),
        performance=normalize_performance(data.get("performance"), data.get("governorLimits")),
        architecture=normalize_architecture(data.get("architecture")),
        data_quality=normalize_data_quality(data.get("dataQuality")),
        licenses=normalize_licenses(data.get("licenses")),
        storage=normalize_storage(data.get("storage")),
        technical_debt=normalize_technical_debt(data.get("technicalDebt")),
        risks=normalize_risks(data.get("risks")),
    )

    logger.debug(
        f"Normalized bundle with categories: "
        f"{', '.join(c.value for c in bundle.present_categories()) or 'none'}"
    )
    return bundle
