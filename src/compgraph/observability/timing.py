"""Wall-clock stopwatch for latency_ms log fields."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class Stopwatch:
    _start: float = field(default_factory=time.perf_counter)

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 3)


def timed() -> Stopwatch:
    """Start a stopwatch."""
    return Stopwatch()
