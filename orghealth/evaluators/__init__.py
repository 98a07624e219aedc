"""Evaluators module for scoring CRM organization health.

Organizations are scored on nine categories grouped into two dimensions:
- Technical: code quality, test coverage, performance, architecture, data quality
- Financial: licenses, storage, technical debt, risks

All evaluators are stateless pure functions: metric record + ScoringConfig → score.
"""

from orghealth.evaluators.architecture import ArchitectureEvaluator
from orghealth.evaluators.base import BaseEvaluator
from orghealth.evaluators.code_quality import CodeQualityEvaluator
from orghealth.evaluators.composite import calculate_overall_score, weighted_average
from orghealth.evaluators.data_quality import DataQualityEvaluator
from orghealth.evaluators.engine import ScoringEngine
from orghealth.evaluators.licenses import LicenseEvaluator
from orghealth.evaluators.performance import PerformanceEvaluator
from orghealth.evaluators.recommendations import (
    calculate_potential_savings,
    consolidate_recommendations,
    filter_by_priority,
    health_status,
    next_steps,
    risk_level,
    top_recommendations,
)
from orghealth.evaluators.risks import RiskEvaluator
from orghealth.evaluators.storage import StorageEvaluator
from orghealth.evaluators.technical_debt import TechnicalDebtEvaluator
from orghealth.evaluators.test_coverage import TestCoverageEvaluator

__all__ = [
    # Protocol
    "BaseEvaluator",
    # Individual evaluators
    "ArchitectureEvaluator",
    "CodeQualityEvaluator",
    "DataQualityEvaluator",
    "LicenseEvaluator",
    "PerformanceEvaluator",
    "RiskEvaluator",
    "StorageEvaluator",
    "TechnicalDebtEvaluator",
    "TestCoverageEvaluator",
    # Orchestration
    "ScoringEngine",
    # Composite scoring
    "calculate_overall_score",
    "weighted_average",
    # Recommendations
    "calculate_potential_savings",
    "consolidate_recommendations",
    "filter_by_priority",
    "health_status",
    "next_steps",
    "risk_level",
    "top_recommendations",
]
