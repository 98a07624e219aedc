"""Score, recommendation and report models produced by the scoring engine."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from orghealth.models.common import _utc_now, humanize_camel


class Dimension(str, Enum):
    """Score dimensions combined into the overall score."""

    TECHNICAL = "technical"
    FINANCIAL = "financial"


class Category(str, Enum):
    """Metric categories, one evaluator each."""

    CODE_QUALITY = "codeQuality"
    TEST_COVERAGE = "testCoverage"
    PERFORMANCE = "performance"
    ARCHITECTURE = "architecture"
    DATA_QUALITY = "dataQuality"
    LICENSES = "licenses"
    STORAGE = "storage"
    TECHNICAL_DEBT = "technicalDebt"
    RISKS = "risks"

    @property
    def dimension(self) -> Dimension:
        """Dimension this category contributes to."""
        if self in TECHNICAL_CATEGORIES:
            return Dimension.TECHNICAL
        return Dimension.FINANCIAL

    @property
    def label(self) -> str:
        """Human readable name ("technicalDebt" -> "Technical Debt")."""
        return humanize_camel(self.value)


TECHNICAL_CATEGORIES = (
    Category.CODE_QUALITY,
    Category.TEST_COVERAGE,
    Category.PERFORMANCE,
    Category.ARCHITECTURE,
    Category.DATA_QUALITY,
)

FINANCIAL_CATEGORIES = (
    Category.LICENSES,
    Category.STORAGE,
    Category.TECHNICAL_DEBT,
    Category.RISKS,
)


class Priority(str, Enum):
    """Recommendation priority, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HealthStatus(str, Enum):
    """Overall health label derived from dimension scores."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    CRITICAL = "Critical"


class RiskLevel(str, Enum):
    """Organization risk level derived from dimension scores."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Recommendation(BaseModel):
    """Structured improvement suggestion.

    Created once per category while scoring and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    priority: Priority = Field(description="Urgency of the recommendation")
    title: str = Field(description="Short action title")
    description: str = Field(default="", description="What was detected")
    effort: float = Field(default=0, ge=0, description="Estimated effort in hours")
    monthly_savings: float | None = Field(
        default=None, ge=0, description="Estimated monthly savings in USD"
    )
    category: Category = Field(description="Category that emitted the recommendation")


class ScoreFactor(BaseModel):
    """One deduction that contributed to a category score (explanatory only)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Metric that triggered the deduction")
    value: float = Field(description="Observed metric value")
    impact: int = Field(le=0, description="Points deducted (negative or zero)")


class CategoryScore(BaseModel):
    """Score of one category with its weight inside its dimension."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Category health score")
    weight: float = Field(ge=0.0, le=1.0, description="Weight within the dimension")


class ComponentScore(CategoryScore):
    """Category score enriched with the factors that produced it."""

    factors: list[ScoreFactor] = Field(default_factory=list)


class DimensionScore(BaseModel):
    """Weighted result of one dimension (technical or financial)."""

    total: int = Field(ge=0, le=100, description="Weighted average of present components")
    components: dict[Category, ComponentScore] = Field(default_factory=dict)
    missing: list[Category] = Field(
        default_factory=list, description="Categories excluded because their metrics were absent"
    )


class ScoreBreakdown(BaseModel):
    """Complete score output: both dimensions and the overall score."""

    technical: DimensionScore
    financial: DimensionScore
    overall: int = Field(ge=0, le=100)


class PotentialSavings(BaseModel):
    """Annualized savings estimate (USD)."""

    immediate: float = Field(default=0.0, ge=0.0, description="Unused licenses")
    short_term: float = Field(default=0.0, ge=0.0, description="Storage archival")
    long_term: float = Field(default=0.0, ge=0.0, description="Technical debt reduction")

    @computed_field
    @property
    def total(self) -> float:
        return self.immediate + self.short_term + self.long_term


class NextStep(BaseModel):
    """Group of recommendations to act on together."""

    priority: Priority
    action: str
    items: list[Recommendation] = Field(default_factory=list)


class ExecutiveSummary(BaseModel):
    """High level view of an analysis."""

    health_status: HealthStatus
    risk_level: RiskLevel
    technical_score: int = Field(ge=0, le=100)
    financial_score: int = Field(ge=0, le=100)
    potential_savings: PotentialSavings = Field(default_factory=PotentialSavings)
    top_recommendations: list[Recommendation] = Field(default_factory=list)
    next_steps: list[NextStep] = Field(default_factory=list)


class AnalysisReport(BaseModel):
    """Result of one analysis request."""

    breakdown: ScoreBreakdown
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: ExecutiveSummary
    generated_at: datetime = Field(default_factory=_utc_now)

    @property
    def overall_score(self) -> int:
        return self.breakdown.overall
