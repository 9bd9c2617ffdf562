"""Dataclasses representing transcript entries and the product reference."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class EntryRole(str, Enum):
    USER = "user"
    THOUGHT = "thought"
    TOOL = "tool"


_PREFIXES = {
    EntryRole.USER: "User: ",
    EntryRole.THOUGHT: "Agent Thought: ",
    EntryRole.TOOL: "",
}


@dataclass(slots=True)
class TranscriptEntry:
    """Single line of the conversation transcript."""

    role: EntryRole
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def render(self) -> str:
        return f"{_PREFIXES[self.role]}{self.content}"


@dataclass(slots=True, frozen=True)
class ProductReference:
    """The last product the shopper was shown unambiguously."""

    product_id: str
    title: str

    def annotation(self) -> str:
        return f"[Context: User is referring to {self.title} (ID: {self.product_id})]"
