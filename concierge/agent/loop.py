"""Tool-orchestration loop: planner decisions in, shopper-facing text out."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from concierge import ui
from concierge.agent.commands import COMMAND_OPERATIONS, QuickCommand, match_quick_command
from concierge.agent.context import enrich_request
from concierge.core.errors import ConciergeError, DecisionUnavailable
from concierge.core.metrics import MetricsCollector
from concierge.memory.models import ProductReference, TranscriptEntry
from concierge.memory.store import ConversationMemory
from concierge.planner.base import Planner
from concierge.planner.types import Operation, PlannerDecision
from concierge.shop.session import ShoppingSession
from concierge.tools.router import ToolCall, ToolRouter

logger = logging.getLogger("concierge.agent")

CLARIFICATION_MESSAGE = "I've processed your request but need more information. Could you please clarify?"
RESET_MESSAGE = "Conversation history cleared. Starting fresh!"


class ShoppingAgent:
    """Drive the planner and tools for one shopper until a turn completes.

    ``run`` never raises: planner failures, malformed parameters, unknown
    operations and rejected operations all end the turn with a formatted
    message. The transcript and product reference live in
    :class:`ConversationMemory`; cart, wishlist and orders stay in the
    :class:`ShoppingSession` handle and are only touched through tools.
    """

    def __init__(
        self,
        planner: Planner,
        router: ToolRouter,
        session: ShoppingSession,
        *,
        max_iterations: int = 10,
        max_history_length: int = 20,
        memory: ConversationMemory | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.planner = planner
        self.router = router
        self.session = session
        self.max_iterations = max_iterations
        self.memory = memory if memory is not None else ConversationMemory(max_history_length)
        self.metrics = metrics

    @property
    def transcript(self) -> Sequence[TranscriptEntry]:
        return self.memory.entries

    @property
    def product_reference(self) -> ProductReference | None:
        return self.memory.product_reference

    def reset(self) -> None:
        """Forget the conversation; cart, wishlist and orders are kept."""

        self.memory.reset()
        logger.info("Conversation memory reset for session %s", self.session.session_id)

    async def run(self, user_request: str) -> str:
        command = match_quick_command(user_request)
        if command is not None:
            self._record("quick_command")
            return await self._run_quick_command(command)

        enriched = enrich_request(user_request, self.memory.product_reference)
        if enriched != user_request:
            logger.debug("Request enriched with product %s", self.memory.product_reference)
        self.memory.append_user(enriched)

        tool_outputs: list[str] = []
        for iteration in range(1, self.max_iterations + 1):
            try:
                decision = await self._decide(user_request)
            except DecisionUnavailable as exc:
                logger.warning("Planner failed on iteration %d: %s", iteration, exc)
                return self._error(f"Failed to process request: {exc}", tool_outputs)

            logger.debug("Iteration %d decision: %s", iteration, decision.summary())
            self.memory.append_thought(decision.thought)

            if decision.is_terminal:
                self._record("final")
                return ui.final_response(decision.final_response or decision.thought, tool_outputs)

            try:
                call = self.router.decode(decision.action.tool, decision.action.parameters)
                response = await self.router.dispatch(call, self.session)
            except ConciergeError as exc:
                logger.warning("Tool %s rejected: %s", decision.action.tool.value, exc)
                return self._error(f"Tool execution failed: {exc}", tool_outputs)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Tool dispatch failed", extra={"operation": decision.action.tool.value})
                return self._error(f"Tool execution failed: {exc}", tool_outputs)

            if self.metrics is not None:
                self.metrics.record_tool_call(call.operation.value)
            if not response.success:
                return self._error(f"Tool execution failed: {response.content}", tool_outputs)

            self._track_product(call, response.data)
            tool_outputs.append(response.content)
            self.memory.append_tool(call.operation.value, call.raw_parameters, response.data)

            # A tool call that already carries the closing message ends the turn.
            if decision.final_response:
                self._record("tool_final")
                return ui.final_response(decision.final_response, tool_outputs)

        logger.info("Iteration ceiling of %d reached without a final answer", self.max_iterations)
        self._record("exhausted")
        return ui.final_response("", tool_outputs) + ui.message_box(CLARIFICATION_MESSAGE, "warning")

    async def _decide(self, user_request: str) -> PlannerDecision:
        history = self.memory.render()
        try:
            return await self.planner.decide(user_request, history)
        except DecisionUnavailable:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Planner raised unexpectedly")
            raise DecisionUnavailable(str(exc) or exc.__class__.__name__) from exc

    async def _run_quick_command(self, command: QuickCommand) -> str:
        if command is QuickCommand.HELP:
            return ui.help_menu()
        if command is QuickCommand.RESET:
            self.reset()
            return ui.message_box(RESET_MESSAGE, "success")

        operation = COMMAND_OPERATIONS[command]
        try:
            response = await self.router.dispatch(self.router.decode(operation, "{}"), self.session)
        except ConciergeError as exc:
            return ui.message_box(str(exc), "error")
        if not response.success:
            return ui.message_box(response.content, "error")
        return response.content

    def _track_product(self, call: ToolCall, data: Any) -> None:
        product: Any = None
        if call.operation is Operation.GET_PRODUCT_DETAILS:
            product = data
        elif call.operation is Operation.SEARCH_PRODUCTS and isinstance(data, list) and len(data) == 1:
            product = data[0]

        if isinstance(product, dict) and product.get("id"):
            reference = self.memory.remember_product(str(product["id"]), str(product.get("title", "")))
            logger.debug("Product reference set to %s", reference.product_id)

    def _error(self, message: str, tool_outputs: list[str]) -> str:
        self._record("error")
        return "\n".join([*tool_outputs, ui.message_box(message, "error")])

    def _record(self, outcome: str) -> None:
        if self.metrics is not None:
            self.metrics.record_request(outcome)
