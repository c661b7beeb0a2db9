from __future__ import annotations


class SimClock:
    """Fixed-step simulation clock. Advances by `step` per tick, independent of real frame timing.

    Time is derived from an integer tick count so it never accumulates rounding drift.
    """

    def __init__(self, step:float = 0.02):
        if step <= 0:
            raise ValueError(f"clock step must be positive, got {step}")
        self.step = step
        self.ticks = 0

    @property
    def time(self) -> float:
        return self.ticks * self.step

    def tick(self) -> float:
        self.ticks += 1
        return self.time

    def reset(self):
        self.ticks = 0

    def __repr__(self): return f"SimClock(t={self.time:.3f}, step={self.step})"
