"""Scoring configuration models: weight tables and deduction thresholds.

All models are frozen so a config can be shared between engines and tests
without one caller changing another's weights.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from orghealth.consts import (
    FINANCIAL_SHARE,
    FINANCIAL_WEIGHTS,
    LARGE_FILE_MONTHLY_SAVINGS,
    LICENSE_MONTHLY_COST,
    TECHNICAL_SHARE,
    TECHNICAL_WEIGHTS,
    WEIGHT_SUM_TOLERANCE,
)
from orghealth.models.model_score import (
    FINANCIAL_CATEGORIES,
    TECHNICAL_CATEGORIES,
    Category,
    Dimension,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Tier(_Frozen):
    """Deduct ``deduction`` points when a value is strictly above ``threshold``."""

    threshold: float
    deduction: int = Field(ge=0)


class TierTable(_Frozen):
    """Mutually exclusive deduction tiers.

    Tiers are kept sorted highest threshold first; only the first matching
    tier applies, so crossing a higher threshold replaces a lower one.
    """

    tiers: tuple[Tier, ...] = ()

    @field_validator("tiers")
    @classmethod
    def sort_highest_first(cls, tiers: tuple[Tier, ...]) -> tuple[Tier, ...]:
        return tuple(sorted(tiers, key=lambda tier: tier.threshold, reverse=True))

    @classmethod
    def of(cls, *pairs: tuple[float, int]) -> "TierTable":
        """Build from ``(threshold, deduction)`` pairs."""
        return cls(tiers=tuple(Tier(threshold=t, deduction=d) for t, d in pairs))


class UnitRule(_Frozen):
    """Deduct ``per_unit`` points per occurrence, up to ``cap`` (None = uncapped)."""

    per_unit: int = Field(ge=0)
    cap: int | None = Field(default=None, ge=0)


class CodeQualityThresholds(_Frozen):
    large_classes: UnitRule = UnitRule(per_unit=5, cap=30)
    legacy_classes: UnitRule = UnitRule(per_unit=3, cap=20)
    multi_triggers: UnitRule = UnitRule(per_unit=8, cap=25)


class PerformanceThresholds(_Frozen):
    cpu_time: TierTable = TierTable.of((85, 30), (70, 15), (50, 5))
    slow_queries: UnitRule = UnitRule(per_unit=4, cap=20)
    heavy_pages: UnitRule = UnitRule(per_unit=5, cap=20)


class ArchitectureThresholds(_Frozen):
    custom_objects: TierTable = TierTable.of((200, 15), (100, 5))
    active_flows: TierTable = TierTable.of((100, 20), (50, 10))
    custom_fields: TierTable = TierTable.of((1000, 15), (500, 5))


class DataQualityThresholds(_Frozen):
    duplicate_records: TierTable = TierTable.of((1000, 25), (500, 15), (100, 5))
    incomplete_records: TierTable = TierTable.of((5000, 20), (1000, 10))


class LicenseThresholds(_Frozen):
    unused_percentage: TierTable = TierTable.of((30, 40), (15, 20), (5, 10))
    inactive_users: TierTable = TierTable.of((50, 15), (20, 10), (10, 5))


class StorageThresholds(_Frozen):
    data_usage: TierTable = TierTable.of((90, 30), (80, 15), (60, 5))
    file_usage: TierTable = TierTable.of((90, 25), (80, 12), (60, 5))
    large_files: UnitRule = UnitRule(per_unit=3, cap=15)


class TechnicalDebtThresholds(_Frozen):
    total_hours: TierTable = TierTable.of(
        (2000, 40), (1000, 25), (500, 15), (200, 10), (100, 5)
    )


class RiskThresholds(_Frozen):
    critical: UnitRule = UnitRule(per_unit=15)
    high: UnitRule = UnitRule(per_unit=8)
    medium: UnitRule = UnitRule(per_unit=3)


class ScoringThresholds(_Frozen):
    """Deduction rules for every category."""

    code_quality: CodeQualityThresholds = CodeQualityThresholds()
    performance: PerformanceThresholds = PerformanceThresholds()
    architecture: ArchitectureThresholds = ArchitectureThresholds()
    data_quality: DataQualityThresholds = DataQualityThresholds()
    licenses: LicenseThresholds = LicenseThresholds()
    storage: StorageThresholds = StorageThresholds()
    technical_debt: TechnicalDebtThresholds = TechnicalDebtThresholds()
    risks: RiskThresholds = RiskThresholds()


class WeightTable(_Frozen):
    """Category weights for one dimension.

    Weights must sum to 1.0 and only name categories of ``dimension``.
    """

    dimension: Dimension
    weights: dict[Category, float]

    @field_validator("weights")
    @classmethod
    def weights_in_range(cls, weights: dict[Category, float]) -> dict[Category, float]:
        for category, weight in weights.items():
            if not 0.0 <= weight <= 1.0:
                msg = f"Weight for {category.value} must be between 0 and 1, got {weight}"
                raise ValueError(msg)
        return weights

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "WeightTable":
        """Validate that weights sum to 1.0 and belong to the dimension."""
        allowed = TECHNICAL_CATEGORIES if self.dimension == Dimension.TECHNICAL else FINANCIAL_CATEGORIES
        foreign = [c.value for c in self.weights if c not in allowed]
        if foreign:
            msg = f"Categories {foreign} do not belong to the {self.dimension.value} dimension"
            raise ValueError(msg)

        total = sum(self.weights.values())
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            msg = f"Weights must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self

    def weight_for(self, category: Category) -> float:
        return self.weights.get(category, 0.0)


def _technical_weights() -> WeightTable:
    return WeightTable(
        dimension=Dimension.TECHNICAL,
        weights={Category(k): v for k, v in TECHNICAL_WEIGHTS.items()},
    )


def _financial_weights() -> WeightTable:
    return WeightTable(
        dimension=Dimension.FINANCIAL,
        weights={Category(k): v for k, v in FINANCIAL_WEIGHTS.items()},
    )


class ScoringConfig(_Frozen):
    """Everything the engine needs besides the metrics themselves."""

    technical_weights: WeightTable = Field(default_factory=_technical_weights)
    financial_weights: WeightTable = Field(default_factory=_financial_weights)
    technical_share: float = Field(default=TECHNICAL_SHARE, ge=0.0, le=1.0)
    financial_share: float = Field(default=FINANCIAL_SHARE, ge=0.0, le=1.0)
    thresholds: ScoringThresholds = Field(default_factory=ScoringThresholds)

    # Cost estimates used for savings
    license_monthly_cost: float = Field(default=LICENSE_MONTHLY_COST, ge=0.0)
    large_file_monthly_savings: float = Field(default=LARGE_FILE_MONTHLY_SAVINGS, ge=0.0)

    @model_validator(mode="after")
    def validate_dimensions(self) -> "ScoringConfig":
        """Validate dimension tables and that the shares sum to 1.0."""
        if self.technical_weights.dimension != Dimension.TECHNICAL:
            raise ValueError("technical_weights must be a technical weight table")
        if self.financial_weights.dimension != Dimension.FINANCIAL:
            raise ValueError("financial_weights must be a financial weight table")

        total = self.technical_share + self.financial_share
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            msg = f"Dimension shares must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self

    def weights_for(self, dimension: Dimension) -> WeightTable:
        if dimension == Dimension.TECHNICAL:
            return self.technical_weights
        return self.financial_weights
