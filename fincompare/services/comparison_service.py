"""Comparative analysis: pairs every derived metric of two analysed companies."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel

from fincompare.schemas.airline import AirlineMetrics
from fincompare.schemas.company import (
    CompanyFinancialData,
    YearlyFinancialData,
    fiscal_year_key,
    fiscal_year_number,
)
from fincompare.schemas.comparison import ComparativeAnalysis, MetricComparison, YearComparison
from fincompare.schemas.financial import FinancialMetrics
from fincompare.services.metrics import cagr, difference, magnitude, percent_of

logger = logging.getLogger(__name__)

FINANCIAL_METRIC_NAMES: tuple[str, ...] = tuple(
    name for name in FinancialMetrics.model_fields if name != "fiscal_year"
)
AIRLINE_METRIC_NAMES: tuple[str, ...] = tuple(
    name for name in AirlineMetrics.model_fields if name != "fiscal_year"
)


def compare(
    company1: CompanyFinancialData,
    company2: CompanyFinancialData,
    as_of: datetime | None = None,
) -> ComparativeAnalysis:
    """Compare two companies whose yearly data already carries metrics.

    Produces a comparison of each company's latest year, one comparison per
    fiscal year both companies report, and a revenue CAGR comparison.
    """
    logger.info("Performing comparative analysis between %s and %s", company1.ticker, company2.ticker)

    latest1 = company1.latest_year_data()
    latest2 = company2.latest_year_data()
    latest = None
    if latest1 is None or latest2 is None:
        logger.warning(
            "Missing financial data for %s",
            company1.ticker if latest1 is None else company2.ticker,
        )
    else:
        latest = compare_years(latest1, latest2)

    common_years = sorted(
        {y.fiscal_year for y in company1.yearly_data} & {y.fiscal_year for y in company2.yearly_data},
        key=fiscal_year_key,
        reverse=True,
    )
    by_year = [compare_years(company1.year(fy), company2.year(fy)) for fy in common_years]

    analysis = ComparativeAnalysis(
        company1=company1.ticker,
        company2=company2.ticker,
        analysis_date=as_of or datetime.now(timezone.utc),
        latest=latest,
        by_year=by_year,
        revenue_cagr=compare_metric(
            "revenue_cagr", revenue_cagr(company1), revenue_cagr(company2)
        ),
    )
    logger.info("Comparative analysis completed (%d shared fiscal years)", len(by_year))
    return analysis


def compare_years(year1: YearlyFinancialData, year2: YearlyFinancialData) -> YearComparison:
    return YearComparison(
        company1_fiscal_year=year1.fiscal_year,
        company2_fiscal_year=year2.fiscal_year,
        financial=_pair_fields(FINANCIAL_METRIC_NAMES, year1.metrics, year2.metrics),
        airline=_pair_fields(AIRLINE_METRIC_NAMES, year1.airline_metrics, year2.airline_metrics),
    )


def compare_metric(name: str, value1: Decimal | None, value2: Decimal | None) -> MetricComparison:
    """Signed gap between two values; absent whenever either side is absent."""
    delta = difference(value1, value2)
    percent_difference = None
    if delta is not None:
        percent_difference = percent_of(delta, magnitude(value2))
    return MetricComparison(
        metric=name,
        company1_value=value1,
        company2_value=value2,
        delta=delta,
        percent_difference=percent_difference,
    )


def revenue_cagr(company: CompanyFinancialData) -> Decimal | None:
    """Revenue CAGR between the oldest and newest year that disclose revenue."""
    with_revenue = sorted(
        (
            y
            for y in company.yearly_data
            if y.income_statement is not None and y.income_statement.total_revenue is not None
        ),
        key=lambda y: fiscal_year_key(y.fiscal_year),
    )
    if len(with_revenue) < 2:
        return None
    first, last = with_revenue[0], with_revenue[-1]
    first_number = fiscal_year_number(first.fiscal_year)
    last_number = fiscal_year_number(last.fiscal_year)
    if first_number is None or last_number is None:
        years = len(with_revenue) - 1
    else:
        years = last_number - first_number
    return cagr(first.income_statement.total_revenue, last.income_statement.total_revenue, years)


def _pair_fields(
    names: tuple[str, ...], record1: BaseModel | None, record2: BaseModel | None
) -> list[MetricComparison]:
    return [
        compare_metric(name, getattr(record1, name, None), getattr(record2, name, None))
        for name in names
    ]
