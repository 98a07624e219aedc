# Dimension weights (each table sums to 1.0)
TECHNICAL_WEIGHTS = {
    "codeQuality": 0.20,
    "testCoverage": 0.20,
    "performance": 0.25,
    "architecture": 0.20,
    "dataQuality": 0.15,
}

FINANCIAL_WEIGHTS = {
    "licenses": 0.30,
    "storage": 0.25,
    "technicalDebt": 0.25,
    "risks": 0.20,
}

# Overall score = technical * 0.6 + financial * 0.4
TECHNICAL_SHARE = 0.6
FINANCIAL_SHARE = 0.4

WEIGHT_SUM_TOLERANCE = 0.001

# Scores
MAX_SCORE = 100
MIN_SCORE = 0

# Raw metric values above this are clamped before scoring
METRIC_VALUE_CEILING = 10**12

# Priority rank used when consolidating recommendations (lower sorts first)
PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}

# Test coverage below this percentage triggers a recommendation
TEST_COVERAGE_TARGET = 75

# Governor limit usage above this percentage triggers a critical recommendation
GOVERNOR_LIMIT_CRITICAL = 85

# Cost estimates (USD) used for savings
DEFAULT_HOURLY_RATE = 125  # Developer hour for technical debt
LICENSE_MONTHLY_COST = 165  # Average full license
LARGE_FILE_MONTHLY_SAVINGS = 25  # Per large file cleaned up

# Executive summary
TOP_RECOMMENDATIONS_LIMIT = 5
NEXT_STEP_ITEMS = 3

# Metric collection
COLLECTOR_DEFAULT_TIMEOUT = 30.0  # Seconds per metric source
COLLECTOR_DEFAULT_CONCURRENCY = 8

# Environment variable pointing at a JSON scoring config
CONFIG_ENV_VAR = "ORGHEALTH_CONFIG"
