"""Shared pytest fixtures – statement and company records built in memory."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from fincompare.middleware.rate_limit import rate_limiter
from fincompare.schemas.airline import AirlineOperationalData
from fincompare.schemas.company import CompanyFinancialData, CompanyInfo, YearlyFinancialData
from fincompare.schemas.financial import BalanceSheet, CashFlowStatement, IncomeStatement


@pytest.fixture(autouse=True)
def _fresh_rate_limits():
    """Each test starts with empty rate-limit windows."""
    asyncio.run(rate_limiter.reset())
    yield


@pytest.fixture
def income_statement() -> IncomeStatement:
    return IncomeStatement(
        fiscal_year="2024",
        total_revenue=Decimal("10000000000"),
        operating_income=Decimal("1000000000"),
        net_income=Decimal("500000000"),
        gross_profit=Decimal("3000000000"),
    )


@pytest.fixture
def balance_sheet() -> BalanceSheet:
    return BalanceSheet(
        fiscal_year="2024",
        current_assets=Decimal("5000000000"),
        current_liabilities=Decimal("2500000000"),
        cash_and_equivalents=Decimal("2000000000"),
        total_assets=Decimal("20000000000"),
        total_equity=Decimal("4000000000"),
    )


@pytest.fixture
def year_2024(income_statement, balance_sheet) -> YearlyFinancialData:
    return YearlyFinancialData(
        fiscal_year="2024",
        income_statement=income_statement,
        balance_sheet=balance_sheet,
    )


def make_airline_year(
    fiscal_year: str,
    revenue: str,
    operating_expenses: str,
    fuel_costs: str | None,
    net_income: str,
    asm: str,
    rpm: str,
) -> YearlyFinancialData:
    """One year of an airline with just enough data for every core metric."""
    return YearlyFinancialData(
        fiscal_year=fiscal_year,
        income_statement=IncomeStatement(
            fiscal_year=fiscal_year,
            total_revenue=Decimal(revenue),
            operating_expenses=Decimal(operating_expenses),
            operating_income=Decimal(revenue) - Decimal(operating_expenses),
            fuel_costs=None if fuel_costs is None else Decimal(fuel_costs),
            net_income=Decimal(net_income),
        ),
        balance_sheet=BalanceSheet(
            fiscal_year=fiscal_year,
            current_assets=Decimal("5000000000"),
            current_liabilities=Decimal("2500000000"),
            cash_and_equivalents=Decimal("2000000000"),
            total_assets=Decimal("20000000000"),
            total_equity=Decimal("4000000000"),
        ),
        cash_flow_statement=CashFlowStatement(
            fiscal_year=fiscal_year,
            operating_cash_flow=Decimal("1500000000"),
            capital_expenditures=Decimal("1000000000"),
        ),
        operational_data=AirlineOperationalData(
            fiscal_year=fiscal_year,
            available_seat_miles=Decimal(asm),
            revenue_passenger_miles=Decimal(rpm),
        ),
    )


@pytest.fixture
def alpha_air() -> CompanyFinancialData:
    """Two years, 2023 then 2024 (deliberately oldest first)."""
    return CompanyFinancialData(
        company=CompanyInfo(ticker="alph", name="Alpha Air"),
        yearly_data=[
            make_airline_year(
                "2023", "10000000000", "9000000000", "3000000000", "500000000", "90000", "75000"
            ),
            make_airline_year(
                "2024", "11000000000", "9800000000", "3200000000", "600000000", "100000", "85000"
            ),
        ],
    )


@pytest.fixture
def beta_jet() -> CompanyFinancialData:
    """2024 only."""
    return CompanyFinancialData(
        company=CompanyInfo(ticker="BETA", name="Beta Jet"),
        yearly_data=[
            make_airline_year(
                "2024", "15000000000", "14000000000", "4000000000", "400000000", "100000", "80000"
            ),
        ],
    )
