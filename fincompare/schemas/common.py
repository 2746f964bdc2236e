"""Shared ToolResponse envelope and error schema."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Machine-readable failure categories returned by tools."""

    INVALID_INPUT = "INVALID_INPUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"


class ErrorDetail(BaseModel):
    """Structured error returned when a tool rejects its input."""

    error_code: ErrorCode
    message: str
    hint: str | None = None


class Meta(BaseModel):
    """Execution metadata attached to every response."""

    execution_ms: float = Field(..., description="Wall-clock milliseconds")
    row_count: int | None = Field(None, description="Number of fiscal-year records in data")


class ToolResponse(BaseModel):
    """Standard envelope for every tool result."""

    tool: str
    ok: bool
    data: Any | None = None
    error: ErrorDetail | None = None
    meta: Meta
