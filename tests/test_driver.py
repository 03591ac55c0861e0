from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import physics as P
from physics.driver import FrameDriver
from physics.engine import SimulationConfig


def test_frames_closer_than_one_step_are_skipped() -> None:
    driver = FrameDriver()
    assert not driver.on_frame(5.0)
    assert driver.on_frame(11.0)
    assert not driver.on_frame(20.0)
    assert driver.on_frame(22.0)
    assert driver.n_dispatched == 2
    assert driver.n_skipped == 2
    assert driver.state.wall_clock == 22.0


def test_drag_overrides_position_until_release() -> None:
    driver = FrameDriver(SimulationConfig())
    driver.on_frame(16.0)
    driver.on_pointer_down()
    driver.on_pointer_move(75.0, 10.0)
    steps = driver.state.step_count
    driver.on_frame(40.0)
    assert driver.position == 75.0
    assert driver.state.step_count == steps

    driver.on_pointer_up()
    driver.on_frame(60.0)
    assert driver.state.step_count > steps
    assert driver.position != 75.0


def test_driver_settles_at_rest() -> None:
    driver = FrameDriver()
    t = 0.0
    for _ in range(600):
        t += 16.7
        driver.on_frame(t)
    assert abs(driver.position - P.REST_POSITION) < 0.01
