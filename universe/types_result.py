"""
universe/types_result.py - RunReport and EnsembleResult Dataclasses

Immutable result containers handed to presentation code.
Frozen dataclasses.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .types_config import UniverseConfig


@dataclass(frozen=True)
class RunReport:
    """Outcome of one universe: run, perturb, observe."""
    config: UniverseConfig
    state_before: np.ndarray
    state_after: np.ndarray
    norm_before: float
    norm_after: float
    delta_norm: float           # norm_after - norm_before, signed
    energy_before: float
    energy_after: float
    delta_energy: float
    infinite_norm: float
    observer_norm: float
    norm_timeline: Tuple[float, ...]
    alert: bool                 # plausible time-travel event
    receipts: Tuple[dict, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EnsembleResult:
    """Aggregate statistics over independent universes."""
    config: UniverseConfig
    count: int
    mean_infinite: float
    mean_delta: float
    var_infinite: float         # E[X^2] - E[X]^2, clamped at 0
    infinite_norms: Tuple[float, ...]
    delta_norms: Tuple[float, ...]
    receipt: dict = field(default_factory=dict)
