"""
universe/dynamics_oscillators.py - Coupled Oscillator Chain

The state vector is read as floor(dim/2) interleaved (x_i, v_i) pairs forming a
1-D spring chain with reflective boundaries. Semi-implicit Euler integration.
"""

from typing import Optional

import numpy as np

from .constants import (
    OSC_COUPLING,
    OSC_DAMPING,
    OSC_DT,
    OSC_NOISE_SCALE,
    OSC_SPRING_K,
    SystemType,
)
from .vector_ops import Vector


def damping_for(system_type: SystemType) -> float:
    return OSC_DAMPING[system_type]


def evolve_oscillators(
    prev: Vector,
    memory: Vector,
    level: int,
    system_type: SystemType = SystemType.ISOLATED,
    rng: Optional[np.random.Generator] = None,
) -> Vector:
    """
    Advance the chain by one timestep.

    Args:
        prev: Current state, pairs (x_0, v_0, x_1, v_1, ...)
        memory: Ignored by this model
        level: Ignored by this model
        system_type: OPEN damps by 5% and adds velocity noise,
            CLOSED damps by 1%, ISOLATED is undamped
        rng: Generator for the open-system noise

    Returns:
        New state vector. A trailing unpaired component is carried unchanged.

    Noise is added to the velocity after the position update, so the
    position integrates the damped, noise-free velocity.
    """
    prev = np.asarray(prev, dtype=np.float64)
    nxt = prev.copy()
    n = prev.size // 2
    if n == 0:
        return nxt

    x = prev[0:2 * n:2]
    v = prev[1:2 * n:2]

    # Reflective boundary: a missing neighbour is the oscillator itself
    left = np.concatenate(([x[0]], x[:-1]))
    right = np.concatenate((x[1:], [x[-1]]))

    force = -OSC_SPRING_K * x - OSC_COUPLING * ((x - left) + (x - right))
    v_next = (v + OSC_DT * force) * (1.0 - damping_for(system_type))
    x_next = x + OSC_DT * v_next

    if system_type is SystemType.OPEN:
        if rng is None:
            rng = np.random.default_rng()
        v_next = v_next + rng.uniform(-1.0, 1.0, n) * OSC_NOISE_SCALE

    nxt[0:2 * n:2] = x_next
    nxt[1:2 * n:2] = v_next
    return nxt


def oscillator_energy(state: Vector) -> float:
    """
    Sum of 0.5 * (x_i^2 + v_i^2) over complete pairs.

    Always >= 0. A trailing unpaired component does not contribute.
    """
    state = np.asarray(state, dtype=np.float64)
    n = state.size // 2
    paired = state[:2 * n]
    return float(0.5 * np.dot(paired, paired))
