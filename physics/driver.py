from typing import Optional

import physics as P
from physics.engine import (
    ClockTick, PointerDown, PointerMove, SimulationConfig, SimulationState, transition,
)
from physics.integrator import Vector


class FrameDriver:
    """
    Headless stand-in for the UI shell.

    Feeds animation-frame timestamps and pointer events into the engine, one
    call at a time, and exposes the position to draw. A frame only becomes a
    ClockTick once more than min_interval_ms has passed since the last
    dispatched frame; earlier frames are ignored.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 min_interval_ms: float = P.STEP_MS,
                 state: Optional[SimulationState] = None):
        self.config = config or SimulationConfig()
        self.min_interval_ms = min_interval_ms
        self.state = state if state is not None else self.config.initial_state()
        self.last_frame: float = 0.0
        self.n_dispatched = 0
        self.n_skipped = 0

    @property
    def position(self) -> float:
        return self.state.body.position

    def on_frame(self, timestamp: float) -> bool:
        """Returns True if the frame was dispatched as a tick."""
        if timestamp - self.last_frame > self.min_interval_ms:
            self.state = transition(self.state, ClockTick(timestamp))
            self.last_frame = timestamp
            self.n_dispatched += 1
            return True
        self.n_skipped += 1
        return False

    def on_pointer_down(self):
        self.state = transition(self.state, PointerDown(True))

    def on_pointer_up(self):
        self.state = transition(self.state, PointerDown(False))

    def on_pointer_move(self, x: float, y: float = 0.0):
        self.state = transition(self.state, PointerMove(Vector(x, y)))
