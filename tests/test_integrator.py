from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from physics.integrator import (
    Body,
    InvalidConfiguration,
    SpringForce,
    advance_one_step,
    apply_force,
    compute_spring_force,
    spring_step,
)


def test_advance_one_step_consumes_force() -> None:
    body = Body(position=10.0, velocity=2.0, pending_force=4.0, inverse_mass=0.5)
    out = advance_one_step(body)
    assert out.position == 13.0
    assert out.velocity == 4.0
    assert out.pending_force == 0.0
    assert out.inverse_mass == 0.5
    # Input record is untouched.
    assert body.pending_force == 4.0


def test_spring_force_attraction_and_friction() -> None:
    spring = SpringForce(damping=0.7, stiffness=0.3, rest_position=200.0)
    assert compute_spring_force(Body(position=100.0, velocity=10.0), spring) == pytest.approx(23.0)
    assert compute_spring_force(Body(position=300.0, velocity=0.0), spring) == pytest.approx(-30.0)


def test_forces_accumulate_before_one_step() -> None:
    body = apply_force(apply_force(Body(inverse_mass=1.0), 2.0), 3.0)
    assert body.pending_force == 5.0
    assert advance_one_step(body).velocity == 5.0


def test_spring_step_is_zero_at_rest() -> None:
    spring = SpringForce(rest_position=200.0)
    body = Body(position=200.0, velocity=0.0)
    for _ in range(100):
        body = spring_step(body, spring)
    assert body.position == 200.0
    assert body.velocity == 0.0


def test_spring_step_is_deterministic() -> None:
    spring = SpringForce()
    body = Body(position=37.5, velocity=-1.25)
    assert spring_step(body, spring) == spring_step(body, spring)


@pytest.mark.parametrize("kwargs", [
    dict(inverse_mass=0.0),
    dict(inverse_mass=-1.0),
    dict(inverse_mass=math.inf),
    dict(inverse_mass=math.nan),
])
def test_body_rejects_bad_inverse_mass(kwargs) -> None:
    with pytest.raises(InvalidConfiguration):
        Body(**kwargs)


@pytest.mark.parametrize("kwargs", [
    dict(damping=-0.1),
    dict(stiffness=-1.0),
    dict(rest_position=math.nan),
])
def test_spring_rejects_bad_coefficients(kwargs) -> None:
    with pytest.raises(InvalidConfiguration):
        SpringForce(**kwargs)


def test_invalid_configuration_is_value_error() -> None:
    with pytest.raises(ValueError):
        Body(inverse_mass=0.0)
