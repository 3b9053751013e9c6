"""
universe/dynamics_nonlinear.py - Nonlinear Retrocausal Map

The default model. Each level reads the layer below as its own memory:
next = blend(sin(prev), cos(memory), 1 / (1 + level)).
"""

from typing import Optional

import numpy as np

from .constants import SystemType
from .vector_ops import Vector, blend, cos_vec, sin_vec


def level_alpha(level: int) -> float:
    """Blend weight toward memory; 1 at level 0, shrinking with depth."""
    return 1.0 / (1.0 + level)


def evolve_nonlinear(
    prev: Vector,
    memory: Vector,
    level: int,
    system_type: SystemType = SystemType.ISOLATED,
    rng: Optional[np.random.Generator] = None,
) -> Vector:
    """
    One step of the retrocausal map.

    Deterministic: system_type and rng are accepted for signature parity
    with the other models and ignored.
    """
    return blend(sin_vec(prev), cos_vec(memory), level_alpha(level))


def pseudo_energy(state: Vector) -> float:
    """Squared norm, the energy reported for the nonlinear model."""
    state = np.asarray(state, dtype=np.float64)
    return float(np.dot(state, state))
