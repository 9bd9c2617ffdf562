"""Wiring helpers shared by the HTTP service and the interactive shell."""

from __future__ import annotations

import logging

from concierge.agent.loop import ShoppingAgent
from concierge.agent.runner import AgentRunner
from concierge.core.config import Settings
from concierge.core.metrics import MetricsCollector
from concierge.planner.base import Planner
from concierge.planner.openrouter import OpenRouterPlanner
from concierge.planner.simple import RuleBasedPlanner
from concierge.shop.session import ShoppingSession
from concierge.shop.storefront import Storefront
from concierge.tools.router import ToolRouter, build_tool_router

logger = logging.getLogger("concierge.agent")


def build_planner(settings: Settings, router: ToolRouter) -> Planner:
    backend = settings.resolve_planner_backend()
    if backend == "openrouter":
        if not settings.openrouter_api_key:
            raise ValueError("planner_backend=openrouter requires OPENROUTER_API_KEY")
        planner: Planner = OpenRouterPlanner(
            router.tools(),
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            base_url=settings.openrouter_base_url,
            referer=settings.openrouter_referer,
            title=settings.openrouter_title,
            timeout_seconds=settings.openrouter_timeout_seconds,
        )
    else:
        planner = RuleBasedPlanner()
    logger.info("Using %s", planner.describe())
    return planner


def build_agent(
    settings: Settings,
    *,
    storefront: Storefront | None = None,
    session: ShoppingSession | None = None,
    planner: Planner | None = None,
    metrics: MetricsCollector | None = None,
) -> ShoppingAgent:
    """Assemble a single-shopper agent from settings."""

    router = build_tool_router(storefront or Storefront())
    return ShoppingAgent(
        planner or build_planner(settings, router),
        router,
        session or ShoppingSession(),
        max_iterations=settings.max_iterations,
        max_history_length=settings.max_history_length,
        metrics=metrics,
    )


def build_runner(settings: Settings, agent: ShoppingAgent) -> AgentRunner:
    return AgentRunner(
        agent,
        max_retries=settings.max_retries,
        retry_delay_seconds=settings.retry_delay_seconds,
    )
