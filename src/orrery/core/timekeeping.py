"""Clock helpers for frame timing."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


def monotonic_now() -> float:
    return time.perf_counter()


@dataclass
class FrameTimer:
    """Turns successive timestamps into per-frame deltas.

    The first call to :meth:`tick` returns ``0.0`` so the opening frame does
    not jump by however long startup took.
    """

    last_time: Optional[float] = field(default=None)

    def tick(self, now: float) -> float:
        if self.last_time is None:
            self.last_time = now
            return 0.0
        dt = now - self.last_time
        self.last_time = now
        return max(dt, 0.0)


__all__ = ["FrameTimer", "monotonic_now"]
