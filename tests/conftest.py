"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from orghealth.evaluators.engine import ScoringEngine
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_metrics import MetricBundle
from orghealth.normalizer import normalize_bundle


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config() -> ScoringConfig:
    """Default scoring configuration."""
    return ScoringConfig()


@pytest.fixture
def engine(config: ScoringConfig) -> ScoringEngine:
    """Scoring engine with the default configuration."""
    return ScoringEngine(config)


@pytest.fixture
def sample_raw_bundle() -> dict[str, Any]:
    """Raw metrics covering every category.

    Expected category scores with the default config:
        codeQuality 87, testCoverage 68, performance 77,
        architecture 90, dataQuality 100 → technical 83
        licenses 55, storage 79, technicalDebt 90, risks 89 → financial 77
        overall = round(83 × 0.6 + 77 × 0.4) = 81
    """
    return {
        "codeQuality": {"largeClasses": 2, "legacyCode": 1, "multiTriggers": 0},
        "testCoverage": {"overallCoverage": 68, "classesWithoutCoverage": 4},
        "performance": {
            "cpuTime": {"percentage": 72},
            "slowQueries": 2,
            "heavyPages": 0,
            "failedJobs": 6,
        },
        "architecture": {"customObjects": 120, "activeFlows": 40, "customFields": 650},
        "dataQuality": {"duplicateRecords": 50, "incompleteRecords": 0},
        "licenses": {
            "totalLicenses": 100,
            "unusedLicenses": 40,
            "inactiveUsers": 12,
            "monthlyWaste": 6600,
        },
        "storage": {
            "dataStorage": {"percentage": 83},
            "fileStorage": {"percentage": 40},
            "largeFiles": 2,
            "monthlyOverage": 500,
        },
        "technicalDebt": {"totalHours": 320},
        "risks": [{"severity": "high"}, {"severity": "medium"}, {"severity": "low"}],
    }


@pytest.fixture
def sample_bundle(sample_raw_bundle: dict[str, Any]) -> MetricBundle:
    """Normalized version of sample_raw_bundle."""
    return normalize_bundle(sample_raw_bundle)


@pytest.fixture
def bundle_file(temp_dir: Path, sample_raw_bundle: dict[str, Any]) -> Path:
    """sample_raw_bundle written to a JSON file."""
    path = temp_dir / "bundle.json"
    path.write_text(json.dumps(sample_raw_bundle), encoding="utf-8")
    return path
