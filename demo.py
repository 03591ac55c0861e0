"""
Quick demo — drive the spring ball with irregular frames and a drag.
Run: venv/bin/python demo.py
"""
from physics.driver import FrameDriver
from physics.engine import SimulationConfig, frame_timestamps
import physics as P

# Irregular frames using centralized defaults, with one long stall
config = SimulationConfig()
times = frame_timestamps(P.N_FRAMES, seed=P.SEED, stall_at=P.N_FRAMES // 2, stall_ms=2000.0)
driver = FrameDriver(config)

for i, t in enumerate(times):
    if i == 100:
        driver.on_pointer_down()
    if 100 <= i < 140:
        driver.on_pointer_move(30.0 + 4.0 * (i - 100), 0.0)
    if i == 140:
        driver.on_pointer_up()
    driver.on_frame(float(t))

state = driver.state
print(f"Frames dispatched: {driver.n_dispatched}  skipped: {driver.n_skipped}")
print(f"Steps applied: {state.step_count}  expected: {state.wall_clock / config.step_ms:.0f}")
print(f"Final position: {driver.position:.4f}  (rest {config.rest_position})")
