"""Airline unit-economics calculator and plausibility check.

Load factor, RASM, CASM, CASM-ex, yields and break-even load factor are
derived from operating statistics plus the income statement. Per-mile figures
are expressed in cents; the operational record's ``mile_unit`` says how to
turn its mileage into actual miles.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fincompare.config import settings
from fincompare.schemas.airline import AirlineMetrics, AirlineOperationalData, MissingFuelPolicy
from fincompare.schemas.financial import IncomeStatement
from fincompare.services.metrics import (
    HUNDRED,
    difference,
    magnitude,
    multiply,
    percent_of,
    safe_divide,
    to_decimal,
)

logger = logging.getLogger(__name__)

_EMPTY_INCOME = IncomeStatement()


def calculate_airline_metrics(
    operational_data: AirlineOperationalData,
    income_statement: IncomeStatement | None = None,
    *,
    fuel_policy: MissingFuelPolicy | None = None,
) -> AirlineMetrics:
    """Derive airline metrics without touching *operational_data*.

    Args:
        operational_data: ASM / RPM and friends for one fiscal year.
        income_statement: Same-year income statement; unit revenue and cost
            metrics stay empty without it.
        fuel_policy: Overrides ``settings.casm_ex_fuel_policy`` for CASM-ex
            when fuel costs are not disclosed.
    """
    logger.info(
        "Calculating airline-specific metrics for fiscal year %s", operational_data.fiscal_year
    )
    income = income_statement or _EMPTY_INCOME
    policy = fuel_policy or settings.casm_ex_fuel_policy

    unit = _unit_metrics(operational_data, income, policy)
    metrics = AirlineMetrics(
        fiscal_year=operational_data.fiscal_year,
        **_load_factors(operational_data),
        **unit,
        **_yields(operational_data, income),
        break_even_load_factor=percent_of(unit["casm"], _positive(unit["rasm"])),
        average_stage_length=safe_divide(
            operational_data.actual_miles(operational_data.revenue_passenger_miles),
            _positive(to_decimal(operational_data.passengers_carried)),
        ),
    )
    logger.debug("Airline metrics for %s: %s", operational_data.fiscal_year, metrics)
    return metrics


def _load_factors(data: AirlineOperationalData) -> dict[str, Decimal | None]:
    # RPM and ASM share a unit, so no scaling. A load factor disclosed in the
    # filing wins over the derived one.
    passenger_load_factor = data.reported_passenger_load_factor
    if passenger_load_factor is None:
        passenger_load_factor = percent_of(
            data.revenue_passenger_miles, _positive(data.available_seat_miles)
        )
    return {
        "passenger_load_factor": passenger_load_factor,
        "cargo_load_factor": percent_of(data.cargo_ton_miles, _positive(data.available_ton_miles)),
    }


def _unit_metrics(
    data: AirlineOperationalData,
    income: IncomeStatement,
    policy: MissingFuelPolicy,
) -> dict[str, Decimal | None]:
    asm = _positive(data.actual_miles(data.available_seat_miles))
    if asm is None:
        logger.warning(
            "ASM not available or not positive for %s, cannot calculate unit metrics",
            data.fiscal_year,
        )
        return {"rasm": None, "casm": None, "casm_ex": None}

    fuel_costs = income.fuel_costs
    if fuel_costs is None and policy is MissingFuelPolicy.ZERO:
        fuel_costs = Decimal(0)

    return {
        "rasm": _cents_per_mile(income.total_revenue, asm),
        "casm": _cents_per_mile(income.operating_expenses, asm),
        "casm_ex": _cents_per_mile(difference(income.operating_expenses, fuel_costs), asm),
    }


def _yields(data: AirlineOperationalData, income: IncomeStatement) -> dict[str, Decimal | None]:
    return {
        "passenger_yield": _cents_per_mile(
            income.passenger_revenue, _positive(data.actual_miles(data.revenue_passenger_miles))
        ),
        "cargo_yield": _cents_per_mile(
            income.cargo_revenue, _positive(data.actual_miles(data.cargo_ton_miles))
        ),
    }


def _cents_per_mile(amount: Decimal | None, actual_miles: Decimal | None) -> Decimal | None:
    return safe_divide(multiply(amount, HUNDRED), actual_miles)


def _positive(value: Decimal | None) -> Decimal | None:
    if value is None or value <= 0:
        return None
    return value


def validate_metrics(metrics: AirlineMetrics, *, ceiling: Decimal | None = None) -> bool:
    """Flag implausible airline metrics.

    Only the break-even load factor is checked: above 100% the airline cannot
    cover its costs at full capacity (still valid); beyond *ceiling* (default
    ``settings.break_even_validation_ceiling``) the inputs are most likely bad.
    An absent break-even load factor is valid.
    """
    limit = settings.break_even_validation_ceiling if ceiling is None else ceiling
    belf = metrics.break_even_load_factor
    if belf is None:
        return True

    size = magnitude(belf)
    if size is None or size > limit:
        logger.warning(
            "Suspicious break-even load factor %s%% for %s (limit %s%%), likely a data quality issue",
            belf,
            metrics.fiscal_year,
            limit,
        )
        return False

    if belf > HUNDRED:
        logger.info(
            "Break-even load factor %s%% for %s: cannot break even at full capacity",
            belf,
            metrics.fiscal_year,
        )
    return True
