"""Financial ratio calculator.

Derives margins, returns, liquidity, leverage, efficiency, cash-flow and
growth ratios from one fiscal year's statements. Each ratio checks its own
operands: a missing line item or a zero denominator drops only the ratios
that need it.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fincompare.schemas.company import YearlyFinancialData
from fincompare.schemas.financial import (
    BalanceSheet,
    CashFlowStatement,
    FinancialMetrics,
    IncomeStatement,
)
from fincompare.services.metrics import (
    difference,
    first_present,
    growth_rate,
    percent_of,
    safe_divide,
    sum_all,
    sum_present,
    to_decimal,
)

logger = logging.getLogger(__name__)

_EMPTY_INCOME = IncomeStatement()
_EMPTY_BALANCE = BalanceSheet()
_EMPTY_CASH_FLOW = CashFlowStatement()


def calculate_metrics(
    current_year: YearlyFinancialData,
    prior_year: YearlyFinancialData | None = None,
) -> FinancialMetrics:
    """Calculate all financial metrics for *current_year*.

    Growth rates are only filled in when *prior_year* is given and carries a
    non-zero base for the line item. Never raises on missing data.
    """
    logger.info("Calculating financial metrics for fiscal year %s", current_year.fiscal_year)

    income = current_year.income_statement or _EMPTY_INCOME
    balance = current_year.balance_sheet or _EMPTY_BALANCE
    cash_flow = current_year.cash_flow_statement or _EMPTY_CASH_FLOW

    fields: dict[str, Decimal | None] = {}
    fields.update(_margin_ratios(income))
    fields.update(_liquidity_ratios(balance))
    fields.update(_leverage_ratios(income, balance))
    fields.update(_profitability_ratios(income, balance))
    fields.update(_efficiency_ratios(income, balance))
    fields.update(_cash_flow_ratios(income, balance, cash_flow, fields["total_debt"]))
    fields.update(_cost_structure(income))
    if prior_year is not None:
        fields.update(_growth_rates(current_year, prior_year))

    metrics = FinancialMetrics(fiscal_year=current_year.fiscal_year, **fields)
    logger.debug("Financial metrics for %s: %s", current_year.fiscal_year, metrics)
    return metrics


def _margin_ratios(income: IncomeStatement) -> dict[str, Decimal | None]:
    revenue = income.total_revenue
    ebitda = first_present(
        income.ebitda, sum_all(income.operating_income, income.depreciation_amortization)
    )
    return {
        "gross_margin": percent_of(income.gross_profit, revenue),
        "operating_margin": percent_of(income.operating_income, revenue),
        "net_margin": percent_of(income.net_income, revenue),
        "ebitda_margin": percent_of(ebitda, revenue),
    }


def _liquidity_ratios(balance: BalanceSheet) -> dict[str, Decimal | None]:
    current_liabilities = balance.current_liabilities
    # Undisclosed inventory is treated as none held.
    quick_assets = difference(balance.current_assets, balance.inventory or Decimal(0))
    return {
        "current_ratio": safe_divide(balance.current_assets, current_liabilities),
        "quick_ratio": safe_divide(quick_assets, current_liabilities),
        "cash_ratio": safe_divide(balance.cash_and_equivalents, current_liabilities),
        "working_capital": difference(balance.current_assets, current_liabilities),
    }


def _leverage_ratios(income: IncomeStatement, balance: BalanceSheet) -> dict[str, Decimal | None]:
    total_debt = total_debt_of(balance)
    return {
        "total_debt": total_debt,
        "net_debt": difference(total_debt, balance.cash_and_equivalents),
        "debt_to_equity": safe_divide(total_debt, balance.total_equity),
        "debt_to_assets": safe_divide(total_debt, balance.total_assets),
        "equity_multiplier": safe_divide(balance.total_assets, balance.total_equity),
        "interest_coverage": safe_divide(income.operating_income, income.interest_expense),
    }


def _profitability_ratios(
    income: IncomeStatement, balance: BalanceSheet
) -> dict[str, Decimal | None]:
    invested_capital = None
    if balance.total_equity is not None:
        invested_capital = sum_present(balance.total_equity, total_debt_of(balance))
    return {
        "return_on_assets": percent_of(income.net_income, balance.total_assets),
        "return_on_equity": percent_of(income.net_income, balance.total_equity),
        # Operating income stands in for NOPAT.
        "return_on_invested_capital": percent_of(income.operating_income, invested_capital),
    }


def _efficiency_ratios(income: IncomeStatement, balance: BalanceSheet) -> dict[str, Decimal | None]:
    return {
        "asset_turnover": safe_divide(income.total_revenue, balance.total_assets),
        "receivables_turnover": safe_divide(income.total_revenue, balance.accounts_receivable),
        "inventory_turnover": safe_divide(income.cost_of_revenue, balance.inventory),
    }


def _cash_flow_ratios(
    income: IncomeStatement,
    balance: BalanceSheet,
    cash_flow: CashFlowStatement,
    total_debt: Decimal | None,
) -> dict[str, Decimal | None]:
    shares = to_decimal(income.shares_outstanding_basic)
    free_cash_flow = first_present(
        cash_flow.free_cash_flow,
        difference(cash_flow.operating_cash_flow, cash_flow.capital_expenditures),
    )
    return {
        "operating_cash_flow_ratio": safe_divide(
            cash_flow.operating_cash_flow, balance.current_liabilities
        ),
        "cash_flow_to_debt": safe_divide(cash_flow.operating_cash_flow, total_debt),
        "cash_conversion_ratio": safe_divide(cash_flow.operating_cash_flow, income.net_income),
        "free_cash_flow_per_share": safe_divide(free_cash_flow, shares),
        "book_value_per_share": safe_divide(balance.total_equity, shares),
    }


def _cost_structure(income: IncomeStatement) -> dict[str, Decimal | None]:
    return {
        "fuel_cost_percentage": percent_of(income.fuel_costs, income.operating_expenses),
        "labor_cost_percentage": percent_of(income.labor_costs, income.operating_expenses),
    }


def _growth_rates(
    current_year: YearlyFinancialData, prior_year: YearlyFinancialData
) -> dict[str, Decimal | None]:
    current_income = current_year.income_statement or _EMPTY_INCOME
    prior_income = prior_year.income_statement or _EMPTY_INCOME
    current_cf = current_year.cash_flow_statement or _EMPTY_CASH_FLOW
    prior_cf = prior_year.cash_flow_statement or _EMPTY_CASH_FLOW
    return {
        "revenue_growth": growth_rate(prior_income.total_revenue, current_income.total_revenue),
        "net_income_growth": growth_rate(prior_income.net_income, current_income.net_income),
        "eps_growth": growth_rate(prior_income.diluted_eps, current_income.diluted_eps),
        "operating_cash_flow_growth": growth_rate(
            prior_cf.operating_cash_flow, current_cf.operating_cash_flow
        ),
    }


def total_debt_of(balance: BalanceSheet) -> Decimal | None:
    """Sum of the disclosed debt components, or None when no debt line is disclosed."""
    return sum_present(
        balance.long_term_debt,
        balance.short_term_debt,
        balance.current_portion_long_term_debt,
    )
