"""Planner backed by an OpenRouter chat-completions model."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from concierge.core.errors import DecisionUnavailable
from concierge.planner.base import Planner
from concierge.planner.prompts import build_system_prompt, build_user_prompt
from concierge.planner.types import PlannerDecision
from concierge.tools.base import Tool

logger = logging.getLogger("concierge.planner")

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapped around a JSON reply."""

    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    return match.group(1) if match else stripped


class OpenRouterPlanner(Planner):
    """Ask an OpenRouter-hosted model for the next decision.

    The system prompt is built once from the registered tools. Every
    transport, HTTP or parsing problem surfaces as ``DecisionUnavailable``.
    """

    def __init__(
        self,
        tools: Iterable[Tool],
        *,
        api_key: str,
        model: str = "openai/gpt-4o-mini",
        base_url: str = "https://openrouter.ai/api/v1",
        referer: str | None = None,
        title: str | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("OpenRouter API key is required")
        self._api_key = api_key
        self._model = model
        self._endpoint = base_url.rstrip("/") + "/chat/completions"
        self._referer = referer
        self._title = title
        self._timeout = timeout_seconds
        self._transport = transport
        self.system_prompt = build_system_prompt(tools)

    def describe(self) -> str:
        return f"OpenRouter planner ({self._model})"

    async def decide(self, user_request: str, conversation_history: str) -> PlannerDecision:
        content = await self._complete(build_user_prompt(user_request, conversation_history))
        try:
            decision = PlannerDecision.model_validate_json(strip_code_fence(content))
        except ValidationError as exc:
            logger.warning("Planner reply failed validation: %s", content[:200])
            raise DecisionUnavailable(f"Invalid planner response: {exc.error_count()} validation error(s)") from exc
        logger.debug("Planner decided %s", decision.summary())
        return decision

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self._referer:
            headers["HTTP-Referer"] = self._referer
        if self._title:
            headers["X-Title"] = self._title
        return headers

    def _payload(self, user_prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0,
        }

    async def _complete(self, user_prompt: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._endpoint, headers=self._headers(), json=self._payload(user_prompt))
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("OpenRouter returned %s", exc.response.status_code)
            raise DecisionUnavailable(f"Planner service returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.warning("OpenRouter request failed: %s", exc)
            raise DecisionUnavailable(f"Planner service unreachable: {exc}") from exc
        except ValueError as exc:
            raise DecisionUnavailable("Planner service returned a non-JSON body") from exc

        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise DecisionUnavailable("Planner service returned an unexpected payload") from exc
        if not content.strip():
            raise DecisionUnavailable("Planner service returned an empty reply")
        return content
