"""
universe/dynamics_ising.py - Mean-Field Ising Spins

Continuous spins relax toward tanh(beta * (J * m + h)). Every component feels
the global magnetization m, not just its neighbours.
"""

from typing import Optional

import numpy as np

from .constants import ISING_BETA, ISING_H, ISING_J, ISING_NOISE_SCALE, SystemType
from .vector_ops import Vector


def magnetization(spins: Vector) -> float:
    """Mean spin; 0.0 for an empty vector."""
    spins = np.asarray(spins, dtype=np.float64)
    if spins.size == 0:
        return 0.0
    return float(np.mean(spins))


def evolve_ising(
    prev: Vector,
    memory: Vector,
    level: int,
    system_type: SystemType = SystemType.ISOLATED,
    rng: Optional[np.random.Generator] = None,
) -> Vector:
    """
    One mean-field update. memory and level are ignored.

    OPEN systems add independent uniform noise in [-0.15, 0.15] to each
    component's local field before the hyperbolic tangent.
    """
    prev = np.asarray(prev, dtype=np.float64)
    field = np.full(prev.size, ISING_J * magnetization(prev) + ISING_H)

    if system_type is SystemType.OPEN:
        if rng is None:
            rng = np.random.default_rng()
        field = field + rng.uniform(-1.0, 1.0, prev.size) * ISING_NOISE_SCALE

    return np.tanh(ISING_BETA * field)


def ising_energy(state: Vector) -> float:
    """Mean-field energy -0.5 * J * dim * m^2."""
    state = np.asarray(state, dtype=np.float64)
    if state.size == 0:
        return 0.0
    m = magnetization(state)
    return float(-0.5 * ISING_J * state.size * m * m)
