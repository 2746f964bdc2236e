"""Application configuration loaded from environment variables."""

from __future__ import annotations

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from fincompare.schemas.airline import MissingFuelPolicy


class Settings(BaseSettings):
    """Central settings pulled from .env / environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # MCP
    mcp_server_name: str = "airline-fincompare-mcp"
    mcp_server_version: str = "0.1.0"

    # Metrics engine
    decimal_precision: int = 28
    """Significant digits kept by every ratio division."""

    casm_ex_fuel_policy: MissingFuelPolicy = MissingFuelPolicy.SUPPRESS
    """What CASM-ex does when fuel costs are not disclosed: 'suppress' or 'zero'."""

    break_even_validation_ceiling: Decimal = Decimal("150")
    """Break-even load factor (percent) above which a record is flagged as bad data."""

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_default: int = 60
    rate_limit_compare: int = 30


settings = Settings()
