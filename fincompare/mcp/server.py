"""MCP server bootstrap – registers tools, resources, prompts and runs the stdio transport."""

from __future__ import annotations

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Prompt, PromptArgument, PromptMessage, Resource, TextContent, Tool

from fincompare.config import settings
from fincompare.mcp.tools import (
    handle_analyze_company,
    handle_calculate_airline_metrics,
    handle_calculate_financial_metrics,
    handle_compare_airlines,
)
from fincompare.schemas.common import ErrorCode
from fincompare.schemas.requests import (
    AnalyzeCompanyArgs,
    CalculateAirlineMetricsArgs,
    CalculateFinancialMetricsArgs,
    CompareAirlinesArgs,
)

logger = logging.getLogger("mcp.server")

# ---------------------------------------------------------------------------
# Tool registry
# ---------------------------------------------------------------------------

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="calculate_financial_metrics",
        description=(
            "Derive margins, liquidity, leverage, return and growth ratios for one fiscal year. "
            "Pass prior_year to get growth rates. Ratios whose inputs are missing come back null."
        ),
        inputSchema=CalculateFinancialMetricsArgs.model_json_schema(),
    ),
    Tool(
        name="calculate_airline_metrics",
        description=(
            "Derive passenger load factor, RASM, CASM, CASM-ex, yields and break-even load "
            "factor (cents per seat mile / percent) and report whether they pass validation."
        ),
        inputSchema=CalculateAirlineMetricsArgs.model_json_schema(),
    ),
    Tool(
        name="analyze_company",
        description=(
            "Compute financial and airline metrics for every fiscal year of one company, "
            "using each year's predecessor for growth rates."
        ),
        inputSchema=AnalyzeCompanyArgs.model_json_schema(),
    ),
    Tool(
        name="compare_airlines",
        description=(
            "Analyse two airlines and pair every derived metric side by side with the signed "
            "delta and percent difference, for the latest year and each shared fiscal year."
        ),
        inputSchema=CompareAirlinesArgs.model_json_schema(),
    ),
]

TOOL_HANDLERS = {
    "calculate_financial_metrics": handle_calculate_financial_metrics,
    "calculate_airline_metrics": handle_calculate_airline_metrics,
    "analyze_company": handle_analyze_company,
    "compare_airlines": handle_compare_airlines,
}

METRIC_DESCRIPTIONS: dict[str, str] = {
    "operating_margin": "Operating income / revenue, percent",
    "net_margin": "Net income / revenue, percent",
    "gross_margin": "Gross profit / revenue, percent",
    "current_ratio": "Current assets / current liabilities",
    "cash_ratio": "Cash and equivalents / current liabilities",
    "working_capital": "Current assets - current liabilities, currency",
    "return_on_assets": "Net income / total assets, percent",
    "return_on_equity": "Net income / total equity, percent",
    "revenue_growth": "Year-over-year revenue change, percent",
    "net_income_growth": "Year-over-year net income change, percent",
    "passenger_load_factor": "RPM / ASM, percent",
    "rasm": "Revenue per available seat mile, cents",
    "casm": "Operating cost per available seat mile, cents",
    "casm_ex": "Operating cost excluding fuel per available seat mile, cents",
    "break_even_load_factor": "CASM / RASM, percent",
}

# ---------------------------------------------------------------------------
# Server factory
# ---------------------------------------------------------------------------


def create_mcp_server() -> Server:
    """Create and configure the MCP server instance."""
    server = Server(settings.mcp_server_name)

    # ── Tools ─────────────────────────────────────────────────────────────

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return TOOL_DEFINITIONS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
        return [TextContent(type="text", text=json.dumps(await dispatch_tool(name, arguments)))]

    # ── Resources ─────────────────────────────────────────────────────────

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return [
            Resource(
                uri="fincompare://metrics",
                name="Derived Metrics",
                description="Core derived metrics with their formulas and units",
                mimeType="application/json",
            ),
        ]

    @server.read_resource()
    async def read_resource(uri: str) -> str:
        if str(uri) == "fincompare://metrics":
            return json.dumps(
                {"metrics": list(METRIC_DESCRIPTIONS), "descriptions": METRIC_DESCRIPTIONS},
                indent=2,
            )
        raise ValueError(f"Unknown resource: {uri}")

    # ── Prompts ───────────────────────────────────────────────────────────

    @server.list_prompts()
    async def list_prompts() -> list[Prompt]:
        return [
            Prompt(
                name="airline_comparison",
                description="Walk through a side-by-side comparison of two airlines",
                arguments=[
                    PromptArgument(name="ticker1", description="First airline", required=True),
                    PromptArgument(name="ticker2", description="Second airline", required=True),
                ],
            ),
        ]

    @server.get_prompt()
    async def get_prompt(name: str, arguments: dict | None = None) -> list[PromptMessage]:
        args = arguments or {}
        if name == "airline_comparison":
            ticker1 = args.get("ticker1", "DAL")
            ticker2 = args.get("ticker2", "UAL")
            return [
                PromptMessage(
                    role="user",
                    content=TextContent(
                        type="text",
                        text=(
                            f"Compare {ticker1} and {ticker2}:\n\n"
                            "1. Call compare_airlines with both companies' yearly statements "
                            "and operational data\n"
                            "2. Review the latest-year deltas for margins, liquidity and returns\n"
                            "3. Review RASM, CASM, CASM-ex and load factor deltas\n"
                            "4. Note any year whose airline metrics failed validation\n"
                            "5. Summarise cost efficiency versus revenue generation for each"
                        ),
                    ),
                )
            ]
        raise ValueError(f"Unknown prompt: {name}")

    return server


async def dispatch_tool(name: str, arguments: dict | None) -> dict:
    """Route a tool call to its handler; unknown names get an UNKNOWN_TOOL envelope."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return {
            "tool": name,
            "ok": False,
            "data": None,
            "error": {
                "error_code": ErrorCode.UNKNOWN_TOOL.value,
                "message": f"Tool '{name}' is not registered",
                "hint": f"Available tools: {list(TOOL_HANDLERS)}",
            },
            "meta": {"execution_ms": 0, "row_count": 0},
        }
    return await handler(arguments or {})


# ---------------------------------------------------------------------------
# Entry-point: run MCP server over stdio
# ---------------------------------------------------------------------------


async def run_mcp_server() -> None:
    """Start the MCP server using stdio transport."""
    server = create_mcp_server()
    logger.info(
        "Starting MCP server '%s' v%s (stdio)",
        settings.mcp_server_name,
        settings.mcp_server_version,
    )

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """CLI entry-point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(run_mcp_server())


if __name__ == "__main__":
    main()
