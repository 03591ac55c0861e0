import numpy as np


def displacement(positions, rest_position):
    return np.abs(np.asarray(positions) - rest_position)


def spring_energy(positions, velocities, stiffness, inverse_mass, rest_position):
    """Potential 0.5*k*d² plus kinetic 0.5*v²/inverse_mass, per sample."""
    d = np.asarray(positions) - rest_position
    v = np.asarray(velocities)
    return 0.5 * stiffness * d ** 2 + 0.5 * v ** 2 / inverse_mass


def step_lag(wall_clock, step_count, step_ms):
    """Expected steps (wall_clock / step_ms) minus applied steps."""
    return np.asarray(wall_clock) / step_ms - np.asarray(step_count)


def settling_index(positions, rest_position, tol):
    """First index after which displacement stays within tol, or -1."""
    outside = np.nonzero(displacement(positions, rest_position) > tol)[0]
    if len(outside) == 0:
        return 0
    last = int(outside[-1]) + 1
    return last if last < len(positions) else -1
