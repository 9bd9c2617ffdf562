"""Retry wrapper serialising requests into a single agent."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from concierge import ui
from concierge.agent.loop import ShoppingAgent

logger = logging.getLogger("concierge.runner")

BUSY_MESSAGE = "Please wait, processing previous request..."


class AgentRunner:
    """Guard an agent with a busy flag and retry unexpected faults.

    Retries re-run the whole turn, so a tool that already committed on a
    failed attempt commits again. Every attempt is logged, and each retry
    adds a ``Retrying... (n/max)`` notice ahead of the final reply.
    """

    def __init__(
        self,
        agent: ShoppingAgent,
        *,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.agent = agent
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds
        self._sleep = sleep
        self._busy = False
        self._cancelled = False

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop retrying after the current attempt."""

        self._cancelled = True

    async def process(self, request: str) -> str:
        if self._busy:
            return ui.message_box(BUSY_MESSAGE, "warning")

        self._busy = True
        self._cancelled = False
        try:
            return await self._attempt(request)
        finally:
            self._busy = False

    async def _attempt(self, request: str) -> str:
        last_error: Exception | None = None
        notices: list[str] = []
        for attempt in range(1, self.max_retries + 1):
            if self._cancelled:
                logger.info("Request cancelled before attempt %d", attempt)
                break
            try:
                reply = await self.agent.run(request)
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                logger.exception("Attempt %d/%d failed", attempt, self.max_retries)
                if attempt < self.max_retries and not self._cancelled:
                    notices.append(ui.message_box(f"Retrying... ({attempt}/{self.max_retries})", "warning"))
                    await self._sleep(self.retry_delay_seconds * attempt)
            else:
                return "\n".join([*notices, reply])

        reason = str(last_error) if last_error is not None else "request cancelled"
        apology = ui.message_box(f"Sorry, I encountered an error: {reason}. Please try again.", "error")
        return "\n".join([*notices, apology])
