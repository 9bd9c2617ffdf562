"""Planner abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import PlannerDecision


class Planner(ABC):
    """Decides the next action given the request and the conversation so far."""

    @abstractmethod
    async def decide(self, user_request: str, conversation_history: str) -> PlannerDecision:
        """Return the planner decision for the current transcript.

        Implementations raise ``DecisionUnavailable`` when no valid decision
        can be produced.
        """

    @abstractmethod
    def describe(self) -> str:
        """Human-readable summary of planner strategy."""
