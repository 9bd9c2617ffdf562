"""Tool package exports."""

from .base import Tool, ToolContext, ToolParams, ToolResponse
from .router import ToolCall, ToolRouter, build_tool_router

__all__ = [
    "Tool",
    "ToolCall",
    "ToolContext",
    "ToolParams",
    "ToolResponse",
    "ToolRouter",
    "build_tool_router",
]
