"""Prompt construction for LLM-backed planners."""

from __future__ import annotations

from typing import Iterable

from concierge.tools.base import Tool

SYSTEM_PREAMBLE = (
    "You are a helpful shopping assistant for an online store. "
    "Decide the single next action needed to satisfy the shopper's request. "
    "Use the conversation history, including earlier tool results, and never "
    "invent product IDs: search first when you do not know one. When the "
    "history contains a [Context: ...] note, use that product ID for requests "
    "such as \"buy it\" or \"add this to my cart\"."
)

RESPONSE_FORMAT = r"""Reply with a single JSON object and nothing else:
{
  "thought": "your reasoning about what to do next",
  "action": {
    "tool": "SearchProducts",
    "reasoning": "why this tool, or why no tool is needed",
    "parameters": "{\"searchTerm\": \"hiking boots\", \"filters\": {\"maxPrice\": 200}}"
  },
  "should_continue": true,
  "final_response": "message for the shopper, or null while more tools are needed"
}
"tool" is one of the tool names above, or "None" when no tool is needed.
"parameters" is always a JSON-encoded string; use "{}" for tools without parameters.
Set should_continue to false and tool to "None" once you can answer the shopper."""


def render_tool_catalog(tools: Iterable[Tool]) -> str:
    lines = []
    for tool in tools:
        lines.append(f"- {tool.name.value}: {tool.describe()}")
        lines.append(f"  parameters: {tool.parameter_hint()}")
    return "\n".join(lines)


def build_system_prompt(tools: Iterable[Tool]) -> str:
    return f"{SYSTEM_PREAMBLE}\n\nAvailable tools:\n{render_tool_catalog(tools)}\n\n{RESPONSE_FORMAT}"


def build_user_prompt(user_request: str, conversation_history: str) -> str:
    history = conversation_history.strip() or "(no previous messages)"
    return f"Conversation so far:\n{history}\n\nCurrent request: {user_request}"
