"""Typed metric records consumed by the evaluators.

Records are produced by the normalizer from raw collaborator payloads. Every
field carries a default so an empty record is valid; whether a whole category
is present is expressed on the bundle (``None`` = absent).
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from orghealth.consts import DEFAULT_HOURLY_RATE
from orghealth.models.model_score import Category


class _MetricRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


class CodeQualityMetrics(_MetricRecord):
    """Apex class health counts."""

    large_classes: int = Field(default=0, ge=0, description="Classes over 3000 lines")
    legacy_classes: int = Field(default=0, ge=0, description="Classes on outdated API versions")
    multi_triggers: int = Field(default=0, ge=0, description="Objects with more than one trigger")


class TestCoverageMetrics(_MetricRecord):
    """Org-wide Apex test coverage."""

    __test__ = False

    overall_coverage: float = Field(default=0.0, ge=0.0, le=100.0)
    classes_without_coverage: int = Field(default=0, ge=0)
    available: bool = Field(default=True, description="False when the org cannot report coverage")


class PerformanceMetrics(_MetricRecord):
    """Governor limit usage and job health."""

    cpu_time_percentage: float = Field(default=0.0, ge=0.0)
    slow_queries: int = Field(default=0, ge=0)
    heavy_pages: int = Field(default=0, ge=0)
    failed_jobs: int = Field(default=0, ge=0, description="Failed async jobs in the last 7 days")
    long_running_jobs: int = Field(default=0, ge=0, description="Jobs running more than 2 hours")
    debug_logs: int = Field(default=0, ge=0, description="Large debug logs")
    governor_limits: dict[str, float] = Field(
        default_factory=dict, description="Limit name -> usage percentage"
    )


class ArchitectureMetrics(_MetricRecord):
    """Metadata volume."""

    custom_objects: int = Field(default=0, ge=0)
    active_flows: int = Field(default=0, ge=0)
    custom_fields: int = Field(default=0, ge=0)
    storage_used_gb: float = Field(default=0.0, ge=0.0)


class DataQualityMetrics(_MetricRecord):
    """Record hygiene and archival candidates."""

    duplicate_records: int = Field(default=0, ge=0)
    incomplete_records: int = Field(default=0, ge=0)
    old_opportunities: int = Field(default=0, ge=0)
    old_cases: int = Field(default=0, ge=0)
    large_files: int = Field(default=0, ge=0, description="Files larger than 10MB")


class LicenseMetrics(_MetricRecord):
    """User license utilization."""

    total_licenses: int = Field(default=0, ge=0)
    unused_licenses: int = Field(default=0, ge=0)
    inactive_users: int = Field(default=0, ge=0, description="No login for 90+ days")
    never_logged_users: int = Field(default=0, ge=0)
    monthly_waste: float = Field(default=0.0, ge=0.0, description="USD spent on unused licenses")

    @computed_field
    @property
    def unused_percentage(self) -> float:
        if self.total_licenses <= 0:
            return 0.0
        # Tops out at 100%
        return min(self.unused_licenses, self.total_licenses) / self.total_licenses * 100


class StorageMetrics(_MetricRecord):
    """Data and file storage usage."""

    data_usage_percentage: float = Field(default=0.0, ge=0.0)
    file_usage_percentage: float = Field(default=0.0, ge=0.0)
    large_files: int = Field(default=0, ge=0, description="Large files unused for 6+ months")
    monthly_overage: float = Field(default=0.0, ge=0.0, description="USD over the storage allowance")
    growth_rate: float = Field(default=0.0, ge=0.0, description="Monthly data growth percentage")


class TechnicalDebtMetrics(_MetricRecord):
    """Estimated remediation effort."""

    total_hours: float = Field(default=0.0, ge=0.0)
    large_classes: int = Field(default=0, ge=0)
    low_coverage_classes: int = Field(default=0, ge=0)
    hourly_rate: float = Field(default=DEFAULT_HOURLY_RATE, ge=0.0)
    total_cost: float = Field(default=0.0, ge=0.0)

    @computed_field
    @property
    def estimated_cost(self) -> float:
        """Reported cost, or hours priced at the hourly rate when none was reported."""
        if self.total_cost > 0:
            return self.total_cost
        return self.total_hours * self.hourly_rate


class RiskMetrics(_MetricRecord):
    """Open risks by severity."""

    critical: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    low: int = Field(default=0, ge=0)


class MetricBundle(BaseModel):
    """All metric records for one analysis.

    A ``None`` category means its metrics were entirely absent; the aggregator
    leaves it out of the weighted average instead of scoring it.
    """

    model_config = ConfigDict(frozen=True)

    code_quality: CodeQualityMetrics | None = None
    test_coverage: TestCoverageMetrics | None = None
    performance: PerformanceMetrics | None = None
    architecture: ArchitectureMetrics | None = None
    data_quality: DataQualityMetrics | None = None
    licenses: LicenseMetrics | None = None
    storage: StorageMetrics | None = None
    technical_debt: TechnicalDebtMetrics | None = None
    risks: RiskMetrics | None = None

    def get(self, category: Category) -> _MetricRecord | None:
        """Return the record for a category, or None when absent."""
        return getattr(self, BUNDLE_FIELDS[category])

    def present_categories(self) -> list[Category]:
        return [category for category in Category if self.get(category) is not None]


BUNDLE_FIELDS: dict[Category, str] = {
    Category.CODE_QUALITY: "code_quality",
    Category.TEST_COVERAGE: "test_coverage",
    Category.PERFORMANCE: "performance",
    Category.ARCHITECTURE: "architecture",
    Category.DATA_QUALITY: "data_quality",
    Category.LICENSES: "licenses",
    Category.STORAGE: "storage",
    Category.TECHNICAL_DEBT: "technical_debt",
    Category.RISKS: "risks",
}
