from __future__ import annotations

import itertools
import json
from datetime import date
from pathlib import Path
from typing import Any, Iterable

import pytest

from concierge.planner.base import Planner
from concierge.planner.types import PlannerDecision
from concierge.shop.session import ShoppingSession
from concierge.shop.storefront import Storefront
from concierge.tools.router import build_tool_router


class ScriptedPlanner(Planner):
    """Planner replaying a fixed list of decisions and recording its inputs."""

    def __init__(self, decisions: Iterable[PlannerDecision | dict | Exception]) -> None:
        self._decisions = list(decisions)
        self.calls: list[tuple[str, str]] = []

    def describe(self) -> str:
        return "Scripted planner"

    async def decide(self, user_request: str, conversation_history: str) -> PlannerDecision:
        self.calls.append((user_request, conversation_history))
        if not self._decisions:
            raise AssertionError("planner consulted more often than scripted")
        item = self._decisions.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            return PlannerDecision.model_validate(item)
        return item


def make_decision(
    tool: str = "None",
    parameters: Any = "{}",
    *,
    thought: str = "thinking",
    should_continue: bool | None = None,
    final_response: str | None = None,
) -> dict:
    if should_continue is None:
        should_continue = tool != "None"
    return {
        "thought": thought,
        "action": {"tool": tool, "reasoning": "test", "parameters": parameters},
        "should_continue": should_continue,
        "final_response": final_response,
    }


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def usb_scenario(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "usb_scenario.json").read_text(encoding="utf-8"))


@pytest.fixture
def storefront() -> Storefront:
    counter = itertools.count(1)
    return Storefront(
        order_id_factory=lambda: f"ORD-TEST-{next(counter):04d}",
        today=lambda: date(2025, 1, 8),
    )


@pytest.fixture
def session() -> ShoppingSession:
    return ShoppingSession(session_id="test-session")


@pytest.fixture
def router(storefront):
    return build_tool_router(storefront)


@pytest.fixture
def scripted_planner():
    return ScriptedPlanner


@pytest.fixture
def decision():
    return make_decision
