"""API routes for invoking individual shop operations directly."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from concierge.agent.runner import BUSY_MESSAGE, AgentRunner
from concierge.core.errors import MalformedParameters, UnknownOperation
from concierge.core.metrics import MetricsCollector
from concierge.shop.session import ShoppingSession
from concierge.tools.router import ToolRouter

logger = logging.getLogger("concierge.api")


def create_tools_router(
    tool_router: ToolRouter,
    session: ShoppingSession,
    runner: AgentRunner,
    metrics: MetricsCollector | None = None,
) -> APIRouter:
    """Expose each operation directly; calls are refused while a chat turn is running."""

    router = APIRouter(prefix="/tools", tags=["tools"])

    @router.get("")
    async def list_tools() -> list[dict[str, str]]:
        return [
            {"name": tool.name.value, "description": tool.describe(), "parameters": tool.parameter_hint()}
            for tool in tool_router.tools()
        ]

    @router.post("/{operation}")
    async def tool_endpoint(operation: str, payload: dict[str, Any] | None = Body(default=None)) -> dict:
        if runner.busy:
            raise HTTPException(status_code=409, detail=BUSY_MESSAGE)
        try:
            call = tool_router.decode(operation, json.dumps(payload or {}))
        except UnknownOperation as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except MalformedParameters as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        result = await tool_router.dispatch(call, session)
        if metrics is not None:
            metrics.record_tool_call(call.operation.value)
        if not result.success:
            raise HTTPException(status_code=422, detail=result.content)
        return {"message": result.content, "data": result.data}

    return router
