"""Argument models for MCP tools; their JSON schemas are the tools' inputSchema."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fincompare.schemas.airline import AirlineOperationalData
from fincompare.schemas.company import CompanyFinancialData, YearlyFinancialData
from fincompare.schemas.financial import IncomeStatement


class CalculateFinancialMetricsArgs(BaseModel):
    current_year: YearlyFinancialData = Field(..., description="Statements for the year to analyse")
    prior_year: YearlyFinancialData | None = Field(
        None, description="Prior fiscal year, needed for growth rates"
    )


class CalculateAirlineMetricsArgs(BaseModel):
    operational_data: AirlineOperationalData = Field(
        ..., description="ASM/RPM etc.; mileage in millions unless mile_unit says otherwise"
    )
    income_statement: IncomeStatement | None = Field(
        None, description="Same-year income statement for RASM/CASM"
    )


class AnalyzeCompanyArgs(BaseModel):
    company: CompanyFinancialData


class CompareAirlinesArgs(BaseModel):
    company1: CompanyFinancialData
    company2: CompanyFinancialData
