"""MCP tool handlers – the bridge between MCP protocol and service layer."""

from __future__ import annotations

import logging
import time
from typing import Any

from pydantic import ValidationError

from fincompare.middleware.rate_limit import TOOL_RATE_LIMITS, rate_limiter
from fincompare.schemas.common import ErrorCode, ErrorDetail, Meta, ToolResponse
from fincompare.schemas.requests import (
    AnalyzeCompanyArgs,
    CalculateAirlineMetricsArgs,
    CalculateFinancialMetricsArgs,
    CompareAirlinesArgs,
)
from fincompare.services.airline_metrics import calculate_airline_metrics, validate_metrics
from fincompare.services.analysis_service import analyze_company
from fincompare.services.comparison_service import compare
from fincompare.services.financial_metrics import calculate_metrics

logger = logging.getLogger("mcp.tools")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _elapsed_ms(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 2)


def _error_response(
    tool: str, code: ErrorCode, message: str, elapsed: float, hint: str | None = None
) -> dict:
    return ToolResponse(
        tool=tool,
        ok=False,
        data=None,
        error=ErrorDetail(error_code=code, message=message, hint=hint),
        meta=Meta(execution_ms=elapsed, row_count=0),
    ).model_dump(mode="json")


def _ok(tool: str, data: Any, elapsed: float, row_count: int | None = None) -> dict:
    return ToolResponse(
        tool=tool,
        ok=True,
        data=data,
        error=None,
        meta=Meta(execution_ms=elapsed, row_count=row_count),
    ).model_dump(mode="json")


def _invalid_input(tool: str, exc: ValidationError, t0: float) -> dict:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "arguments"
    return _error_response(
        tool,
        ErrorCode.INVALID_INPUT,
        f"{location}: {first['msg']}",
        _elapsed_ms(t0),
        hint=f"{exc.error_count()} validation error(s); amounts must be finite numbers.",
    )


async def _check_rate_limit(tool_name: str, t0: float) -> dict | None:
    """Check rate limit for a tool.  Returns an error dict if blocked, else None."""
    limits = TOOL_RATE_LIMITS.get(tool_name, {})
    allowed, error_msg = await rate_limiter.check_rate_limit(
        tool_name,
        max_requests=limits.get("max_requests"),
        window_seconds=limits.get("window_seconds"),
    )
    if not allowed:
        return _error_response(
            tool_name,
            ErrorCode.RATE_LIMIT_EXCEEDED,
            error_msg or "Rate limit exceeded",
            _elapsed_ms(t0),
            hint="Wait before retrying.",
        )
    return None


# ---------------------------------------------------------------------------
# Tool implementations
# ---------------------------------------------------------------------------


async def handle_calculate_financial_metrics(arguments: dict) -> dict:
    """Derive financial ratios for one fiscal year.

    Args:
        arguments: {"current_year": YearlyFinancialData, "prior_year": YearlyFinancialData | None}
    """
    tool = "calculate_financial_metrics"
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit(tool, t0)
    if rate_error:
        return rate_error

    try:
        args = CalculateFinancialMetricsArgs.model_validate(arguments)
    except ValidationError as exc:
        return _invalid_input(tool, exc, t0)

    metrics = calculate_metrics(args.current_year, args.prior_year)

    elapsed = _elapsed_ms(t0)
    logger.info("%s fiscal_year=%s ms=%.1f", tool, args.current_year.fiscal_year, elapsed)
    return _ok(tool, metrics.model_dump(mode="json"), elapsed, row_count=1)


async def handle_calculate_airline_metrics(arguments: dict) -> dict:
    """Derive airline unit economics for one fiscal year and validate them.

    Args:
        arguments: {"operational_data": AirlineOperationalData,
                     "income_statement": IncomeStatement | None}
    """
    tool = "calculate_airline_metrics"
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit(tool, t0)
    if rate_error:
        return rate_error

    try:
        args = CalculateAirlineMetricsArgs.model_validate(arguments)
    except ValidationError as exc:
        return _invalid_input(tool, exc, t0)

    metrics = calculate_airline_metrics(args.operational_data, args.income_statement)
    valid = validate_metrics(metrics)

    elapsed = _elapsed_ms(t0)
    logger.info(
        "%s fiscal_year=%s valid=%s ms=%.1f",
        tool,
        args.operational_data.fiscal_year,
        valid,
        elapsed,
    )
    return _ok(
        tool,
        {"metrics": metrics.model_dump(mode="json"), "valid": valid},
        elapsed,
        row_count=1,
    )


async def handle_analyze_company(arguments: dict) -> dict:
    """Compute metrics for every fiscal year of one company.

    Args:
        arguments: {"company": CompanyFinancialData}
    """
    tool = "analyze_company"
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit(tool, t0)
    if rate_error:
        return rate_error

    try:
        args = AnalyzeCompanyArgs.model_validate(arguments)
    except ValidationError as exc:
        return _invalid_input(tool, exc, t0)

    analysed = analyze_company(args.company)

    elapsed = _elapsed_ms(t0)
    logger.info(
        "%s ticker=%s years=%d ms=%.1f", tool, analysed.ticker, len(analysed.yearly_data), elapsed
    )
    return _ok(tool, analysed.model_dump(mode="json"), elapsed, row_count=len(analysed.yearly_data))


async def handle_compare_airlines(arguments: dict) -> dict:
    """Analyse two airlines and pair their metrics side by side.

    Args:
        arguments: {"company1": CompanyFinancialData, "company2": CompanyFinancialData}
    """
    tool = "compare_airlines"
    t0 = time.perf_counter()

    rate_error = await _check_rate_limit(tool, t0)
    if rate_error:
        return rate_error

    try:
        args = CompareAirlinesArgs.model_validate(arguments)
    except ValidationError as exc:
        return _invalid_input(tool, exc, t0)

    company1 = analyze_company(args.company1)
    company2 = analyze_company(args.company2)
    analysis = compare(company1, company2)

    elapsed = _elapsed_ms(t0)
    logger.info(
        "%s tickers=%s,%s shared_years=%d ms=%.1f",
        tool,
        company1.ticker,
        company2.ticker,
        len(analysis.by_year),
        elapsed,
    )
    return _ok(tool, analysis.model_dump(mode="json"), elapsed, row_count=len(analysis.by_year))
