"""Per-tool call throttling for the MCP surface.

Each tool name keeps the monotonic timestamps of its recent calls; a call is
refused once the window already holds the tool's quota. The per-call metric
tools share ``settings.rate_limit_default``; analyze_company and
compare_airlines, which run the calculators over every fiscal year, share
``settings.rate_limit_compare``.
"""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from fincompare.config import settings

WINDOW_SECONDS = 60


class RateLimiter:
    """Sliding window of call timestamps per tool name.

    ``enabled=False`` turns every check into a pass without recording the
    call, which is how ``RATE_LIMIT_ENABLED=false`` switches throttling off.
    """

    def __init__(
        self,
        default_max_requests: int = 60,
        default_window_seconds: int = WINDOW_SECONDS,
        enabled: bool = True,
    ) -> None:
        self.default_max_requests = default_max_requests
        self.default_window_seconds = default_window_seconds
        self.enabled = enabled
        self._calls: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()

    async def check_rate_limit(
        self,
        tool_name: str,
        max_requests: int | None = None,
        window_seconds: int | None = None,
    ) -> tuple[bool, str | None]:
        """Record a call to *tool_name* if its window has room.

        Returns ``(True, None)`` for an accepted call, otherwise ``False`` and
        a message naming the quota and how long until the oldest call expires.
        """
        if not self.enabled:
            return True, None

        quota = max_requests or self.default_max_requests
        window = window_seconds or self.default_window_seconds

        async with self._lock:
            now = time.monotonic()
            calls = self._calls[tool_name]
            while calls and calls[0] <= now - window:
                calls.popleft()

            if len(calls) >= quota:
                wait = int(calls[0] + window - now) + 1
                return False, (
                    f"Rate limit exceeded for '{tool_name}'. "
                    f"Max {quota} calls per {window}s. "
                    f"Retry after {wait}s."
                )

            calls.append(now)
            return True, None

    async def reset(self, tool_name: str | None = None) -> None:
        """Forget recorded calls for *tool_name*, or for every tool."""
        async with self._lock:
            if tool_name is None:
                self._calls.clear()
            else:
                self._calls.pop(tool_name, None)


rate_limiter = RateLimiter(
    default_max_requests=settings.rate_limit_default,
    enabled=settings.rate_limit_enabled,
)

_SINGLE_YEAR = {"max_requests": settings.rate_limit_default, "window_seconds": WINDOW_SECONDS}
_MULTI_YEAR = {"max_requests": settings.rate_limit_compare, "window_seconds": WINDOW_SECONDS}

TOOL_RATE_LIMITS: dict[str, dict[str, int]] = {
    "calculate_financial_metrics": _SINGLE_YEAR,
    "calculate_airline_metrics": _SINGLE_YEAR,
    "analyze_company": _MULTI_YEAR,
    "compare_airlines": _MULTI_YEAR,
}
