"""Company analysis service: runs both calculators over every fiscal year."""

from __future__ import annotations

import logging

from fincompare.schemas.company import CompanyFinancialData, YearlyFinancialData, fiscal_year_key
from fincompare.services.airline_metrics import calculate_airline_metrics, validate_metrics
from fincompare.services.financial_metrics import calculate_metrics

logger = logging.getLogger(__name__)


def analyze_company(company: CompanyFinancialData) -> CompanyFinancialData:
    """Return a copy of *company* with metrics attached to each year.

    Years are ordered newest first; each year's growth rates use the next
    older year in the dataset as the prior period. Airline metrics are only
    derived for years that carry operational data.
    """
    logger.info("Analyzing %s over %d fiscal years", company.ticker, len(company.yearly_data))

    ordered = sorted(
        company.yearly_data, key=lambda y: fiscal_year_key(y.fiscal_year), reverse=True
    )
    analysed: list[YearlyFinancialData] = []
    for i, current_year in enumerate(ordered):
        prior_year = ordered[i + 1] if i + 1 < len(ordered) else None
        analysed.append(analyze_year(current_year, prior_year))

    logger.info("Analysis completed for %s", company.ticker)
    return company.model_copy(update={"yearly_data": analysed})


def analyze_year(
    current_year: YearlyFinancialData,
    prior_year: YearlyFinancialData | None = None,
) -> YearlyFinancialData:
    """Attach FinancialMetrics and, when possible, AirlineMetrics to one year."""
    update: dict = {"metrics": calculate_metrics(current_year, prior_year)}

    if current_year.operational_data is not None:
        airline_metrics = calculate_airline_metrics(
            current_year.operational_data, current_year.income_statement
        )
        update["airline_metrics"] = airline_metrics
        update["airline_metrics_valid"] = validate_metrics(airline_metrics)

    return current_year.model_copy(update=update)
