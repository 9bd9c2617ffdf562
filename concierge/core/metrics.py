"""Lightweight in-memory metrics collector."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricSnapshot:
    total_requests: int
    outcomes: Dict[str, int]
    tool_calls: Dict[str, int]


class MetricsCollector:
    """Thread-safe counter storage for basic agent metrics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_requests = 0
        self._outcomes: Counter[str] = Counter()
        self._tool_calls: Counter[str] = Counter()

    def record_request(self, outcome: str) -> None:
        with self._lock:
            self._total_requests += 1
            self._outcomes[outcome] += 1

    def record_tool_call(self, operation: str) -> None:
        with self._lock:
            self._tool_calls[operation] += 1

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_requests=self._total_requests,
                outcomes=dict(self._outcomes),
                tool_calls=dict(self._tool_calls),
            )
