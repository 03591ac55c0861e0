"""
1D spring integrator — pure, stateless step functions.

- One fixed step = one unit of simulated time (STEP_MS of wall clock)
- Forces are accumulated into pending_force, then consumed by a single step
- Body state: (position, velocity, pending_force, inverse_mass)
"""

import math
from dataclasses import dataclass, replace

import physics as P


class InvalidConfiguration(ValueError):
    """Rejected parameter: non-positive inverse mass, negative coefficients, non-finite values."""


class NonFiniteState(ArithmeticError):
    """A step produced NaN/inf position or velocity."""

    def __init__(self, step_count: int, position: float, velocity: float):
        super().__init__(
            f"non-finite body after step {step_count}: "
            f"position={position!r}, velocity={velocity!r}")
        self.step_count = step_count
        self.position = position
        self.velocity = velocity


def _require_finite(name: str, value: float):
    if not math.isfinite(value):
        raise InvalidConfiguration(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class SpringForce:
    """Damped spring pulling toward rest_position."""
    damping: float = P.DAMPING
    stiffness: float = P.STIFFNESS
    rest_position: float = P.REST_POSITION

    def __post_init__(self):
        for name in ('damping', 'stiffness', 'rest_position'):
            _require_finite(name, getattr(self, name))
        if self.damping < 0:
            raise InvalidConfiguration(f"damping must be >= 0, got {self.damping}")
        if self.stiffness < 0:
            raise InvalidConfiguration(f"stiffness must be >= 0, got {self.stiffness}")


@dataclass(frozen=True)
class Body:
    """Kinematic state of the animated scalar."""
    position: float = P.INITIAL_POSITION
    velocity: float = 0.0
    pending_force: float = 0.0
    inverse_mass: float = P.INVERSE_MASS

    def __post_init__(self):
        _require_finite('inverse_mass', self.inverse_mass)
        if self.inverse_mass <= 0:
            raise InvalidConfiguration(
                f"inverse_mass must be > 0, got {self.inverse_mass}")

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.position) and math.isfinite(self.velocity)


def compute_spring_force(body: Body, spring: SpringForce) -> float:
    """Restoring force toward rest_position minus velocity-proportional friction."""
    distance = spring.rest_position - body.position
    friction = -1.0 * body.velocity * spring.damping
    return spring.stiffness * distance + friction


def apply_force(body: Body, force: float) -> Body:
    """Add a force contribution; several sources may be summed before a step."""
    return replace(body, pending_force=body.pending_force + force)


def advance_one_step(body: Body) -> Body:
    """Integrate one fixed step and consume the pending force."""
    acc = body.pending_force * body.inverse_mass
    return replace(
        body,
        position=body.position + body.velocity + 0.5 * acc,
        velocity=body.velocity + acc,
        pending_force=0.0,
    )


def spring_step(body: Body, spring: SpringForce) -> Body:
    """Force → integrate, using the current position/velocity."""
    return advance_one_step(apply_force(body, compute_spring_force(body, spring)))
