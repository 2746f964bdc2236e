"""Pydantic data records for statements, derived metrics and comparisons."""

from fincompare.schemas.airline import (
    AirlineMetrics,
    AirlineOperationalData,
    MileUnit,
    MissingFuelPolicy,
)
from fincompare.schemas.common import ErrorCode, ErrorDetail, Meta, ToolResponse
from fincompare.schemas.company import CompanyFinancialData, CompanyInfo, YearlyFinancialData
from fincompare.schemas.comparison import ComparativeAnalysis, MetricComparison, YearComparison
from fincompare.schemas.financial import (
    BalanceSheet,
    CashFlowStatement,
    FinancialMetrics,
    IncomeStatement,
)
from fincompare.schemas.requests import (
    AnalyzeCompanyArgs,
    CalculateAirlineMetricsArgs,
    CalculateFinancialMetricsArgs,
    CompareAirlinesArgs,
)

__all__ = [
    "AirlineMetrics",
    "AirlineOperationalData",
    "MileUnit",
    "MissingFuelPolicy",
    "ErrorCode",
    "ErrorDetail",
    "Meta",
    "ToolResponse",
    "CompanyFinancialData",
    "CompanyInfo",
    "YearlyFinancialData",
    "ComparativeAnalysis",
    "MetricComparison",
    "YearComparison",
    "BalanceSheet",
    "CashFlowStatement",
    "FinancialMetrics",
    "IncomeStatement",
    "AnalyzeCompanyArgs",
    "CalculateAirlineMetricsArgs",
    "CalculateFinancialMetricsArgs",
    "CompareAirlinesArgs",
]
