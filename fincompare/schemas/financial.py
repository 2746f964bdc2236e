"""Financial statement and ratio Pydantic schemas."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class IncomeStatement(BaseModel):
    """Income statement line items for one fiscal year, in currency units."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fiscal_year: str | None = None
    total_revenue: Decimal | None = None
    passenger_revenue: Decimal | None = None
    cargo_revenue: Decimal | None = None
    cost_of_revenue: Decimal | None = None
    gross_profit: Decimal | None = None
    operating_expenses: Decimal | None = None
    fuel_costs: Decimal | None = None
    labor_costs: Decimal | None = None
    depreciation_amortization: Decimal | None = None
    interest_expense: Decimal | None = None
    operating_income: Decimal | None = None
    ebitda: Decimal | None = None
    net_income: Decimal | None = None
    diluted_eps: Decimal | None = None
    shares_outstanding_basic: int | None = None


class BalanceSheet(BaseModel):
    """Balance sheet line items at fiscal year end."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fiscal_year: str | None = None
    total_assets: Decimal | None = None
    current_assets: Decimal | None = None
    cash_and_equivalents: Decimal | None = None
    accounts_receivable: Decimal | None = None
    inventory: Decimal | None = None
    current_liabilities: Decimal | None = None
    short_term_debt: Decimal | None = None
    current_portion_long_term_debt: Decimal | None = None
    long_term_debt: Decimal | None = None
    total_liabilities: Decimal | None = None
    total_equity: Decimal | None = None


class CashFlowStatement(BaseModel):
    """Cash flow statement line items."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fiscal_year: str | None = None
    operating_cash_flow: Decimal | None = None
    capital_expenditures: Decimal | None = None
    free_cash_flow: Decimal | None = None


class FinancialMetrics(BaseModel):
    """Derived ratios for one fiscal year.

    Percent fields are already multiplied by 100. A field is ``None`` when an
    input it needs was not disclosed or its denominator was zero.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fiscal_year: str | None = None

    # Margins
    gross_margin: Decimal | None = None
    operating_margin: Decimal | None = None
    net_margin: Decimal | None = None
    ebitda_margin: Decimal | None = None

    # Returns
    return_on_assets: Decimal | None = None
    return_on_equity: Decimal | None = None
    return_on_invested_capital: Decimal | None = None

    # Liquidity
    current_ratio: Decimal | None = None
    quick_ratio: Decimal | None = None
    cash_ratio: Decimal | None = None
    working_capital: Decimal | None = None

    # Leverage
    total_debt: Decimal | None = None
    net_debt: Decimal | None = None
    debt_to_equity: Decimal | None = None
    debt_to_assets: Decimal | None = None
    equity_multiplier: Decimal | None = None
    interest_coverage: Decimal | None = None

    # Efficiency
    asset_turnover: Decimal | None = None
    receivables_turnover: Decimal | None = None
    inventory_turnover: Decimal | None = None

    # Cash flow
    operating_cash_flow_ratio: Decimal | None = None
    cash_flow_to_debt: Decimal | None = None
    cash_conversion_ratio: Decimal | None = None
    free_cash_flow_per_share: Decimal | None = None
    book_value_per_share: Decimal | None = None

    # Growth (year over year)
    revenue_growth: Decimal | None = None
    net_income_growth: Decimal | None = None
    eps_growth: Decimal | None = None
    operating_cash_flow_growth: Decimal | None = None

    # Airline cost structure
    fuel_cost_percentage: Decimal | None = None
    labor_cost_percentage: Decimal | None = None
