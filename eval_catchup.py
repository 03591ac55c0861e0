"""
Catch-up evaluation: how the fixed-step clock tracks an irregular wall clock.

  1. Steady frames      → lag stays near zero, spring settles at rest
  2. Stall within bound → lag is chased back down inside one tick
  3. Stall beyond bound → one step only, the lag becomes permanent drift
  4. Drag and release   → integration resumes from the pre-hold velocity
"""
import os

import numpy as np
import matplotlib.pyplot as plt

import physics as P
from physics.engine import (
    SimulationConfig, PointerDown, PointerMove, frame_timestamps, generate_trajectory,
)
from physics.integrator import Vector
from physics.metrics import displacement, settling_index, spring_energy, step_lag


SCENARIOS = {
    'steady': dict(),
    'stall_short': dict(stall_at=200, stall_ms=300.0),
    'stall_long': dict(stall_at=200, stall_ms=5000.0),
}

COLORS = {
    'steady': '#1f77b4',
    'stall_short': '#ff7f0e',
    'stall_long': '#d62728',
    'drag': '#2ca02c',
}


def drag_events(start=150, stop=190, x0=30.0, dx=5.0):
    events = {start: [PointerDown(True)]}
    for i in range(start, stop):
        events.setdefault(i, []).append(PointerMove(Vector(x0 + dx * (i - start), 0.0)))
    events.setdefault(stop, []).append(PointerDown(False))
    return events


def evaluate():
    config = SimulationConfig()
    trajs = {}
    for name, kw in SCENARIOS.items():
        times = frame_timestamps(P.N_FRAMES, seed=P.SEED, **kw)
        trajs[name] = generate_trajectory(config, times)
    times = frame_timestamps(P.N_FRAMES, seed=P.SEED)
    trajs['drag'] = generate_trajectory(config, times, events=drag_events())

    print("\n" + "=" * 70)
    print("CATCH-UP RESULTS")
    print("=" * 70)
    print(f"\n{'Scenario':<15} {'Steps':>8} {'Lag_final':>10} {'|d|_final':>10} {'Settle@':>8}")
    print("-" * 55)
    for name, traj in trajs.items():
        lag = step_lag(traj['wall_clock'], traj['step_count'], config.step_ms)
        d = displacement(traj['position'], config.rest_position)
        settle = settling_index(traj['position'], config.rest_position, tol=0.5)
        print(f"{name:<15} {traj['step_count'][-1]:>8d} {lag[-1]:>10.2f} "
              f"{d[-1]:>10.4f} {settle:>8d}")

    os.makedirs('results/plots', exist_ok=True)
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))

    ax = axes[0]
    for name, traj in trajs.items():
        ax.plot(traj['wall_clock'], traj['position'], label=name,
                color=COLORS[name], linewidth=1.2)
    ax.axhline(config.rest_position, color='gray', linestyle=':', alpha=0.6)
    ax.set_xlabel('Wall clock (ms)')
    ax.set_ylabel('Position')
    ax.set_title('Position')
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    for name, traj in trajs.items():
        lag = step_lag(traj['wall_clock'], traj['step_count'], config.step_ms)
        ax.plot(traj['wall_clock'], lag, label=name, color=COLORS[name], linewidth=1.2)
    ax.axhline(config.max_catchup_steps, color='gray', linestyle='--', alpha=0.6)
    ax.set_xlabel('Wall clock (ms)')
    ax.set_ylabel('Expected − applied steps')
    ax.set_title('Step lag')
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)

    ax = axes[2]
    for name, traj in trajs.items():
        e = spring_energy(traj['position'], traj['velocity'], config.stiffness,
                          config.inverse_mass, config.rest_position)
        ax.semilogy(np.arange(len(e)), e + 1e-12, label=name,
                    color=COLORS[name], linewidth=1.2)
    ax.set_xlabel('Frame')
    ax.set_ylabel('Spring energy')
    ax.set_title('Energy decay')
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig('results/plots/catchup.png', dpi=150)
    plt.close()

    print(f"\nPlots saved:")
    print(f"  results/plots/catchup.png")


if __name__ == "__main__":
    evaluate()
