from __future__ import annotations

import pytest

from orrery.core.config import OrbitCfg
from orrery.core.model import Body, SimState
from orrery.core.orbit import OrbitModel
from orrery.render.camera import Camera


class RecordingRenderer:
    """Renderer double that records every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def set_view(self, zoom, pan) -> None:
        self.calls.append(("set_view", zoom, tuple(pan)))

    def draw_filled_disc(self, center, radius, color) -> None:
        self.calls.append(("disc", tuple(center), radius, tuple(color)))

    def draw_line_loop(self, points, color) -> None:
        self.calls.append(("loop", len(points), tuple(color)))

    def present(self) -> None:
        self.calls.append(("present",))

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeHost:
    """Host double with a scripted clock and queued input events."""

    def __init__(self, times=(), close_after=None) -> None:
        self._times = list(times)
        self._last = 0.0
        self.handlers = []
        self.pending: list[tuple] = []
        self.polls = 0
        self.close_after = close_after
        self.closed = False

    def now(self) -> float:
        if self._times:
            self._last = self._times.pop(0)
        return self._last

    def register(self, handler) -> None:
        self.handlers.append(handler)

    def queue_scroll(self, dy: float) -> None:
        self.pending.append(("scroll", dy))

    def queue_key(self, key: str, pressed: bool = True) -> None:
        self.pending.append(("key", key, pressed))

    def poll_events(self) -> None:
        self.polls += 1
        for event in self.pending:
            for handler in self.handlers:
                if event[0] == "scroll":
                    handler.on_scroll(event[1])
                else:
                    handler.on_key(event[1], event[2])
        self.pending.clear()

    def should_close(self) -> bool:
        return self.close_after is not None and self.polls >= self.close_after

    def close(self) -> None:
        self.closed = True


def make_body(a=1.0, e=0.0, period=1.0, name="test") -> Body:
    return Body(
        semi_major_axis=a,
        eccentricity=e,
        orbital_period=period,
        visual_radius=0.02,
        color=(0.5, 0.5, 0.5),
        name=name,
    )


def make_model(bodies, cfg: OrbitCfg | None = None, **kwargs) -> OrbitModel:
    state = SimState(bodies=list(bodies), camera=Camera())
    return OrbitModel(state, cfg or OrbitCfg(time_scale=1.0, randomize_phase=False), **kwargs)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def unit_cfg() -> OrbitCfg:
    return OrbitCfg(time_scale=1.0, randomize_phase=False)
