"""Tests for MCP tool handlers (the full handler path through tools.py).

These cover input validation, rate limiting and response formatting on top
of the calculation services.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from fincompare.mcp.tools import (
    _error_response,
    _ok,
    handle_analyze_company,
    handle_calculate_airline_metrics,
    handle_calculate_financial_metrics,
    handle_compare_airlines,
)
from fincompare.schemas.common import ErrorCode

# ---------------------------------------------------------------------------
# Helper tests
# ---------------------------------------------------------------------------


def test_error_response_shape():
    resp = _error_response("test_tool", ErrorCode.INVALID_INPUT, "Something broke", 1.23, hint="Fix it")
    assert resp["tool"] == "test_tool"
    assert resp["ok"] is False
    assert resp["error"]["error_code"] == "INVALID_INPUT"
    assert resp["error"]["hint"] == "Fix it"
    assert resp["meta"]["execution_ms"] == 1.23


def test_ok_response_shape():
    resp = _ok("test_tool", {"foo": "bar"}, 2.34, row_count=5)
    assert resp["ok"] is True
    assert resp["data"] == {"foo": "bar"}
    assert resp["error"] is None
    assert resp["meta"]["row_count"] == 5


# ---------------------------------------------------------------------------
# calculate_financial_metrics
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_financial_metrics_happy_path(year_2024):
    result = await handle_calculate_financial_metrics(
        {"current_year": year_2024.model_dump(mode="json")}
    )
    assert result["ok"] is True
    data = result["data"]
    assert data["fiscal_year"] == "2024"
    assert float(data["operating_margin"]) == pytest.approx(10.0)
    assert float(data["current_ratio"]) == pytest.approx(2.0)
    assert data["revenue_growth"] is None


@pytest.mark.asyncio
async def test_financial_metrics_accepts_plain_numbers():
    result = await handle_calculate_financial_metrics(
        {
            "current_year": {
                "fiscal_year": "2024",
                "income_statement": {"total_revenue": 11_000, "net_income": 600},
            },
            "prior_year": {
                "fiscal_year": "2023",
                "income_statement": {"total_revenue": "10000", "net_income": 500},
            },
        }
    )
    assert result["ok"] is True
    assert float(result["data"]["revenue_growth"]) == pytest.approx(10.0)
    assert float(result["data"]["net_income_growth"]) == pytest.approx(20.0)


@pytest.mark.asyncio
async def test_financial_metrics_missing_current_year():
    result = await handle_calculate_financial_metrics({})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"
    assert "current_year" in result["error"]["message"]


@pytest.mark.asyncio
async def test_financial_metrics_rejects_non_finite_amounts():
    result = await handle_calculate_financial_metrics(
        {"current_year": {"fiscal_year": "2024", "income_statement": {"total_revenue": "NaN"}}}
    )
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"
    assert "total_revenue" in result["error"]["message"]


@pytest.mark.asyncio
async def test_response_is_json_serialisable(year_2024):
    result = await handle_calculate_financial_metrics(
        {"current_year": year_2024.model_dump(mode="json")}
    )
    encoded = json.dumps(result)
    assert "NaN" not in encoded
    assert "Infinity" not in encoded


# ---------------------------------------------------------------------------
# calculate_airline_metrics
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_airline_metrics_happy_path():
    result = await handle_calculate_airline_metrics(
        {
            "operational_data": {
                "fiscal_year": "2024",
                "available_seat_miles": 100_000,
                "revenue_passenger_miles": 85_000,
            },
            "income_statement": {
                "total_revenue": 15_000_000_000,
                "operating_expenses": 14_000_000_000,
                "fuel_costs": 4_000_000_000,
            },
        }
    )
    assert result["ok"] is True
    metrics = result["data"]["metrics"]
    assert float(metrics["passenger_load_factor"]) == pytest.approx(85.0)
    assert float(metrics["rasm"]) == pytest.approx(15.0)
    assert float(metrics["casm_ex"]) == pytest.approx(10.0)
    assert result["data"]["valid"] is True


@pytest.mark.asyncio
async def test_airline_metrics_flags_implausible_break_even():
    result = await handle_calculate_airline_metrics(
        {
            "operational_data": {"available_seat_miles": 100_000},
            "income_statement": {
                "total_revenue": 5_000_000_000,
                "operating_expenses": 14_000_000_000,
            },
        }
    )
    assert result["ok"] is True
    assert float(result["data"]["metrics"]["break_even_load_factor"]) == pytest.approx(280.0)
    assert result["data"]["valid"] is False


@pytest.mark.asyncio
async def test_airline_metrics_out_of_range_mileage_returns_ok():
    result = await handle_calculate_airline_metrics(
        {
            "operational_data": {
                "available_seat_miles": "9E+999999",
                "revenue_passenger_miles": 85_000,
            },
            "income_statement": {
                "total_revenue": 15_000_000_000,
                "operating_expenses": 14_000_000_000,
            },
        }
    )
    assert result["ok"] is True
    assert result["data"]["metrics"]["rasm"] is None
    assert result["data"]["metrics"]["casm"] is None
    assert result["data"]["valid"] is True
    json.dumps(result)


@pytest.mark.asyncio
async def test_airline_metrics_bad_mile_unit():
    result = await handle_calculate_airline_metrics(
        {"operational_data": {"available_seat_miles": 1, "mile_unit": "furlongs"}}
    )
    assert result["ok"] is False
    assert "mile_unit" in result["error"]["message"]


# ---------------------------------------------------------------------------
# analyze_company / compare_airlines
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_analyze_company(alpha_air):
    result = await handle_analyze_company({"company": alpha_air.model_dump(mode="json")})
    assert result["ok"] is True
    assert result["meta"]["row_count"] == 2
    latest = result["data"]["yearly_data"][0]
    assert latest["fiscal_year"] == "2024"
    assert latest["metrics"]["revenue_growth"] is not None
    assert latest["airline_metrics_valid"] is True


@pytest.mark.asyncio
async def test_analyze_company_requires_ticker():
    result = await handle_analyze_company({"company": {"company": {}, "yearly_data": []}})
    assert result["ok"] is False
    assert result["error"]["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_compare_airlines(alpha_air, beta_jet):
    result = await handle_compare_airlines(
        {
            "company1": alpha_air.model_dump(mode="json"),
            "company2": beta_jet.model_dump(mode="json"),
        }
    )
    assert result["ok"] is True
    data = result["data"]
    assert data["company1"] == "ALPH"
    assert data["company2"] == "BETA"
    assert result["meta"]["row_count"] == 1
    airline = {m["metric"]: m for m in data["latest"]["airline"]}
    assert float(airline["rasm"]["delta"]) == pytest.approx(-4.0)


@pytest.mark.asyncio
async def test_compare_airlines_needs_both_companies(alpha_air):
    result = await handle_compare_airlines({"company1": alpha_air.model_dump(mode="json")})
    assert result["ok"] is False
    assert "company2" in result["error"]["message"]


# ---------------------------------------------------------------------------
# Rate limiting integration in handlers
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_handler_returns_rate_limit_error(year_2024):
    with patch("fincompare.mcp.tools.rate_limiter") as mock_rl:
        mock_rl.check_rate_limit = AsyncMock(return_value=(False, "Rate limit exceeded"))
        result = await handle_calculate_financial_metrics(
            {"current_year": year_2024.model_dump(mode="json")}
        )
    assert result["ok"] is False
    assert result["error"]["error_code"] == "RATE_LIMIT_EXCEEDED"
