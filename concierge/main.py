"""FastAPI application entry point for the shopping concierge."""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from concierge.agent.factory import build_agent, build_runner
from concierge.agent.loop import RESET_MESSAGE
from concierge.agent.runner import BUSY_MESSAGE
from concierge.api.tools import create_tools_router
from concierge.core.config import get_settings
from concierge.core.errors import unhandled_exception_handler
from concierge.core.logging import configure_logging, request_id_middleware
from concierge.core.metrics import MetricsCollector
from concierge.shop.storefront import Storefront

settings = get_settings()
logger = logging.getLogger("concierge.api")

metrics = MetricsCollector()
storefront = Storefront()
agent = build_agent(settings, storefront=storefront, metrics=metrics)
runner = build_runner(settings, agent)

app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

app.include_router(create_tools_router(agent.router, agent.session, runner, metrics))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/ready", tags=["health"])
async def readiness_probe() -> dict[str, Any]:
    """Readiness endpoint reporting the planner backend and catalog size."""

    catalog_size = len(storefront.catalog)
    components: dict[str, dict[str, Any]] = {
        "planner": {
            "backend": settings.resolve_planner_backend(),
            "description": agent.planner.describe(),
            "ok": True,
        },
        "catalog": {"products": catalog_size, "ok": catalog_size > 0},
        "tools": {"registered": len(agent.router.operations), "ok": bool(agent.router.operations)},
    }
    overall = "ok" if all(component["ok"] for component in components.values()) else "fail"
    return {
        "status": overall,
        "environment": settings.environment,
        "components": components,
    }


@app.post("/chat", tags=["chat"])
async def chat(message: dict) -> dict:
    """Run one conversational turn through the agent."""

    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        raise HTTPException(status_code=400, detail="content is required")
    if runner.busy:
        raise HTTPException(status_code=409, detail=BUSY_MESSAGE)

    reply = await runner.process(content.strip())
    return {
        "session_id": agent.session.session_id,
        "message": reply,
        "product_context": (
            {"product_id": agent.product_reference.product_id, "title": agent.product_reference.title}
            if agent.product_reference
            else None
        ),
    }


@app.post("/reset", tags=["chat"])
async def reset_conversation() -> dict[str, str]:
    """Clear the transcript and product reference; the cart is kept."""

    if runner.busy:
        raise HTTPException(status_code=409, detail=BUSY_MESSAGE)
    agent.reset()
    return {"message": RESET_MESSAGE}


@app.on_event("startup")
async def startup() -> None:
    level = configure_logging(settings)
    logger.info("Logging configured at %s level for %s environment", logging.getLevelName(level), settings.environment)


app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    snapshot = metrics.snapshot()
    return {
        "total_requests": snapshot.total_requests,
        "outcomes": snapshot.outcomes,
        "tool_calls": snapshot.tool_calls,
    }
