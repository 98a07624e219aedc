"""Pydantic models for orghealth."""

from orghealth.models.model_eval import (
    ScoringConfig,
    ScoringThresholds,
    Tier,
    TierTable,
    UnitRule,
    WeightTable,
)
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
from orghealth.models.model_score import (
    FINANCIAL_CATEGORIES,
    TECHNICAL_CATEGORIES,
    AnalysisReport,
    Category,
    CategoryScore,
    ComponentScore,
    Dimension,
    DimensionScore,
    ExecutiveSummary,
    HealthStatus,
    NextStep,
    PotentialSavings,
    Priority,
    Recommendation,
    RiskLevel,
    ScoreBreakdown,
    ScoreFactor,
)

__all__ = [
    # Categories
    "Category",
    "Dimension",
    "TECHNICAL_CATEGORIES",
    "FINANCIAL_CATEGORIES",
    # Metric records
    "ArchitectureMetrics",
    "CodeQualityMetrics",
    "DataQualityMetrics",
    "LicenseMetrics",
    "MetricBundle",
    "PerformanceMetrics",
    "RiskMetrics",
    "StorageMetrics",
    "TechnicalDebtMetrics",
    "TestCoverageMetrics",
    # Configuration
    "ScoringConfig",
    "ScoringThresholds",
    "Tier",
    "TierTable",
    "UnitRule",
    "WeightTable",
    # Scores
    "CategoryScore",
    "ComponentScore",
    "DimensionScore",
    "ScoreBreakdown",
    "ScoreFactor",
    # Recommendations and reports
    "AnalysisReport",
    "ExecutiveSummary",
    "HealthStatus",
    "NextStep",
    "PotentialSavings",
    "Priority",
    "Recommendation",
    "RiskLevel",
]
