"""
1D Spring Engine — fixed-timestep simulation driven by an irregular clock.

- One scalar body pulled toward a rest point by a damped spring
- Fixed logical step (STEP_MS of wall clock per step)
- Wall-clock ticks are reconciled against the step count, catching up at
  most MAX_CATCHUP_STEPS per tick; larger lag is accepted as drift
- Holding the body suspends integration; the pointer x drives the position
"""

import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union

import numpy as np

import physics as P
from physics.integrator import (
    Body, InvalidConfiguration, NonFiniteState, SpringForce, Vector, spring_step,
)


@dataclass(frozen=True)
class SimulationConfig:
    stiffness: float = P.STIFFNESS
    damping: float = P.DAMPING
    rest_position: float = P.REST_POSITION
    initial_position: float = P.INITIAL_POSITION
    inverse_mass: float = P.INVERSE_MASS
    step_ms: float = P.STEP_MS
    max_catchup_steps: int = P.MAX_CATCHUP_STEPS

    def __post_init__(self):
        if not math.isfinite(self.step_ms) or self.step_ms <= 0:
            raise InvalidConfiguration(f"step_ms must be > 0, got {self.step_ms}")
        if (not math.isfinite(self.max_catchup_steps)
                or int(self.max_catchup_steps) != self.max_catchup_steps
                or self.max_catchup_steps < 1):
            raise InvalidConfiguration(
                f"max_catchup_steps must be a positive integer, got {self.max_catchup_steps}")
        if not math.isfinite(self.initial_position):
            raise InvalidConfiguration(
                f"initial_position must be finite, got {self.initial_position!r}")
        # Spring/body checks live on the records themselves
        self.spring()
        self.body()

    def spring(self) -> SpringForce:
        return SpringForce(damping=self.damping, stiffness=self.stiffness,
                           rest_position=self.rest_position)

    def body(self) -> Body:
        return Body(position=self.initial_position, velocity=0.0,
                    pending_force=0.0, inverse_mass=self.inverse_mass)

    def initial_state(self) -> 'SimulationState':
        return SimulationState(spring=self.spring(), body=self.body(),
                               step_ms=self.step_ms,
                               max_catchup_steps=int(self.max_catchup_steps))


@dataclass(frozen=True)
class SimulationState:
    """Authoritative state record. Replaced, never mutated, on every event."""
    wall_clock: float = 0.0
    step_count: int = 0
    spring: SpringForce = field(default_factory=SpringForce)
    body: Body = field(default_factory=Body)
    is_held: bool = False
    pointer: Vector = field(default_factory=Vector)
    step_ms: float = P.STEP_MS
    max_catchup_steps: int = P.MAX_CATCHUP_STEPS

    @property
    def position(self) -> float:
        return self.body.position


# Events

@dataclass(frozen=True)
class ClockTick:
    timestamp: float  # ms


@dataclass(frozen=True)
class PointerDown:
    held: bool


@dataclass(frozen=True)
class PointerMove:
    position: Vector


Event = Union[ClockTick, PointerDown, PointerMove]


def transition(state: SimulationState, event: Event) -> SimulationState:
    """Fold one event into the state and return the new state."""
    if isinstance(event, ClockTick):
        return _tick(state, event.timestamp)
    elif isinstance(event, PointerDown):
        return replace(state, is_held=bool(event.held))
    elif isinstance(event, PointerMove):
        body = state.body
        if state.is_held:
            body = replace(body, position=event.position.x)
        return replace(state, pointer=event.position, body=body)
    raise TypeError(f"Unknown event: {event!r}")


def _tick(state: SimulationState, timestamp: float) -> SimulationState:
    """
    Step until the step count has caught up with timestamp / step_ms.

    The lag test uses the step count from before each step, so a tick that
    is not behind still applies exactly one step. A lag above
    max_catchup_steps gets a single step and the rest is dropped; no call
    applies more than max_catchup_steps steps, so a lag of exactly
    max_catchup_steps ends at max_catchup_steps steps, not one past it.
    """
    if not math.isfinite(timestamp):
        raise ValueError(f"timestamp must be finite, got {timestamp!r}")
    if state.is_held:
        return replace(state, wall_clock=timestamp)

    expected = timestamp / state.step_ms
    current = state
    steps = 0
    while True:
        before = current.step_count
        body = spring_step(current.body, current.spring)
        if not body.is_finite:
            raise NonFiniteState(before + 1, body.position, body.velocity)
        current = replace(current, wall_clock=timestamp,
                          step_count=before + 1, body=body)
        steps += 1

        lag = expected - before
        if lag <= 0:
            break
        if lag > state.max_catchup_steps:
            break
        if steps >= state.max_catchup_steps:
            break
    return current


# Trajectories

def frame_timestamps(n_frames: int = P.N_FRAMES, frame_ms: float = P.FRAME_MS,
                     jitter_ms: float = P.FRAME_JITTER_MS,
                     stall_at: Optional[int] = None, stall_ms: float = 0.0,
                     seed: Optional[int] = None) -> np.ndarray:
    """Irregular animation-frame times (ms), non-decreasing, one frame_ms ± jitter apart."""
    rng = np.random.RandomState(seed)
    intervals = frame_ms + rng.uniform(-jitter_ms, jitter_ms, size=n_frames)
    intervals = np.clip(intervals, 0.0, None)
    if stall_at is not None:
        intervals[stall_at] += stall_ms
    return np.cumsum(intervals)


def generate_trajectory(config: SimulationConfig, timestamps,
                        events: Optional[Dict[int, List[Event]]] = None) -> Dict:
    """Returns dict with wall_clock, step_count, position, velocity, held, final_state.

    events[i] are folded in before the tick of frame i.
    """
    events = events or {}
    state = config.initial_state()

    wall_clock = [state.wall_clock]
    step_count = [state.step_count]
    position = [state.body.position]
    velocity = [state.body.velocity]
    held = [state.is_held]

    for i, t in enumerate(timestamps):
        for ev in events.get(i, []):
            state = transition(state, ev)
        state = transition(state, ClockTick(float(t)))
        wall_clock.append(state.wall_clock)
        step_count.append(state.step_count)
        position.append(state.body.position)
        velocity.append(state.body.velocity)
        held.append(state.is_held)

    return {
        'wall_clock': np.array(wall_clock),
        'step_count': np.array(step_count),
        'position': np.array(position),
        'velocity': np.array(velocity),
        'held': np.array(held),
        'config': config,
        'final_state': state,
    }
