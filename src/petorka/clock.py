from __future__ import annotations

from dataclasses import dataclass

from .tuning import MAX_FRAME_DT


def cap_frame_dt(dt: float, *, max_dt: float = MAX_FRAME_DT) -> float:
    """Clamp a raw frame delta into `[0, max_dt]`; NaN counts as no time."""
    dt = float(dt)
    if not (dt > 0.0):
        return 0.0
    if dt > float(max_dt):
        return float(max_dt)
    return dt


@dataclass(slots=True)
class FrameClock:
    """Turns wall-clock timestamps (seconds) into capped frame deltas.

    The first tick, and any tick whose timestamp goes backwards, yields 0.
    """

    max_dt: float = MAX_FRAME_DT
    last: float | None = None
    frames: int = 0

    def __post_init__(self) -> None:
        max_dt = float(self.max_dt)
        if not (max_dt > 0.0):
            raise ValueError(f"max_dt must be positive, got {max_dt}")
        self.max_dt = max_dt

    def reset(self) -> None:
        self.last = None
        self.frames = 0

    def tick(self, now: float) -> float:
        now = float(now)
        last = self.last
        self.last = now
        self.frames += 1
        if last is None:
            return 0.0
        return cap_frame_dt(now - last, max_dt=self.max_dt)
