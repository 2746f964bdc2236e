"""Company-level Pydantic schemas."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from fincompare.schemas.airline import AirlineMetrics, AirlineOperationalData
from fincompare.schemas.financial import (
    BalanceSheet,
    CashFlowStatement,
    FinancialMetrics,
    IncomeStatement,
)

_YEAR_DIGITS = re.compile(r"\d+")


def fiscal_year_number(fiscal_year: str) -> int | None:
    """Numeric year in a label such as "2024" or "FY2023", if it has one."""
    match = _YEAR_DIGITS.search(fiscal_year)
    return int(match.group()) if match else None


def fiscal_year_key(fiscal_year: str) -> tuple[int, str]:
    """Sort key ordering fiscal years by their number, then by label."""
    number = fiscal_year_number(fiscal_year)
    return (-1 if number is None else number, fiscal_year)


class CompanyInfo(BaseModel):
    """Identity of the filer."""

    model_config = ConfigDict(frozen=True)

    ticker: str = Field(..., min_length=1)
    name: str | None = None
    cik: str | None = None
    fiscal_year_end: str | None = None


class YearlyFinancialData(BaseModel):
    """Raw statements for one fiscal year plus whatever has been derived from them."""

    model_config = ConfigDict(frozen=True)

    fiscal_year: str
    income_statement: IncomeStatement | None = None
    balance_sheet: BalanceSheet | None = None
    cash_flow_statement: CashFlowStatement | None = None
    operational_data: AirlineOperationalData | None = None
    metrics: FinancialMetrics | None = None
    airline_metrics: AirlineMetrics | None = None
    airline_metrics_valid: bool | None = None


class CompanyFinancialData(BaseModel):
    """Multi-year dataset for one company."""

    model_config = ConfigDict(frozen=True)

    company: CompanyInfo
    yearly_data: list[YearlyFinancialData] = Field(default_factory=list)

    @property
    def ticker(self) -> str:
        return self.company.ticker.upper()

    def latest_year_data(self) -> YearlyFinancialData | None:
        """Most recent fiscal year, or None when the dataset is empty."""
        if not self.yearly_data:
            return None
        return max(self.yearly_data, key=lambda y: fiscal_year_key(y.fiscal_year))

    def year(self, fiscal_year: str) -> YearlyFinancialData | None:
        return next((y for y in self.yearly_data if y.fiscal_year == fiscal_year), None)
