"""Bounded in-process conversation memory."""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from .models import EntryRole, ProductReference, TranscriptEntry

logger = logging.getLogger("concierge.memory")


class ConversationMemory:
    """Transcript plus a single-slot product reference for one conversation.

    The transcript is append-only between resets and never holds more than
    ``max_history_length`` entries: every append drops the oldest overflow.
    The product reference lives outside the transcript so trimming never
    drops it.
    """

    def __init__(self, max_history_length: int = 20) -> None:
        if max_history_length < 1:
            raise ValueError("max_history_length must be at least 1")
        self.max_history_length = max_history_length
        self._entries: list[TranscriptEntry] = []
        self._product_reference: ProductReference | None = None

    @property
    def entries(self) -> Sequence[TranscriptEntry]:
        return tuple(self._entries)

    @property
    def product_reference(self) -> ProductReference | None:
        return self._product_reference

    def append_user(self, content: str) -> TranscriptEntry:
        return self._append(EntryRole.USER, content)

    def append_thought(self, content: str) -> TranscriptEntry:
        return self._append(EntryRole.THOUGHT, content)

    def append_tool(self, operation: str, parameters: str, result: Any) -> TranscriptEntry:
        serialized = json.dumps(result, indent=2, ensure_ascii=False, default=str)
        return self._append(
            EntryRole.TOOL,
            f"Tool: {operation}\nParameters: {parameters}\nResult: {serialized}",
        )

    def trim(self) -> int:
        """Drop the oldest entries beyond the limit; return how many were dropped."""

        overflow = len(self._entries) - self.max_history_length
        if overflow <= 0:
            return 0
        del self._entries[:overflow]
        logger.debug("Trimmed %d transcript entries", overflow)
        return overflow

    def render(self) -> str:
        return "\n\n".join(entry.render() for entry in self._entries)

    def remember_product(self, product_id: str, title: str) -> ProductReference:
        self._product_reference = ProductReference(product_id=product_id, title=title)
        return self._product_reference

    def reset(self) -> None:
        """Clear the transcript and the product reference."""

        self._entries.clear()
        self._product_reference = None

    def _append(self, role: EntryRole, content: str) -> TranscriptEntry:
        entry = TranscriptEntry(role=role, content=content)
        self._entries.append(entry)
        self.trim()
        return entry
