"""Side-by-side comparison Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MetricComparison(BaseModel):
    """One metric for both companies, with the signed gap between them."""

    model_config = ConfigDict(frozen=True)

    metric: str
    company1_value: Decimal | None = None
    company2_value: Decimal | None = None
    delta: Decimal | None = Field(None, description="company1 - company2")
    percent_difference: Decimal | None = Field(
        None, description="delta relative to |company2|, x100"
    )


class YearComparison(BaseModel):
    """Every financial and airline metric paired for one pair of fiscal years."""

    model_config = ConfigDict(frozen=True)

    company1_fiscal_year: str
    company2_fiscal_year: str
    financial: list[MetricComparison] = Field(default_factory=list)
    airline: list[MetricComparison] = Field(default_factory=list)

    def get(self, metric: str) -> MetricComparison | None:
        """Look up a metric in either section by name."""
        return next((m for m in self.financial + self.airline if m.metric == metric), None)


class ComparativeAnalysis(BaseModel):
    """Comparison of two analysed companies."""

    model_config = ConfigDict(frozen=True)

    company1: str
    company2: str
    analysis_date: datetime
    latest: YearComparison | None = None
    by_year: list[YearComparison] = Field(default_factory=list)
    revenue_cagr: MetricComparison
