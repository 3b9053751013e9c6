"""
universe/dynamics.py - Model Dispatch

Closed mapping from ModelType to step and energy functions. Tags are parsed
once, at construction, so an unknown model never reaches the step loop.
"""

from typing import Callable, Dict, Optional, Union

import numpy as np

from .constants import DEFAULT_MODEL, DEFAULT_SYSTEM, ModelType, SystemType
from .dynamics_ising import evolve_ising, ising_energy
from .dynamics_nonlinear import evolve_nonlinear, pseudo_energy
from .dynamics_oscillators import evolve_oscillators, oscillator_energy
from .errors import UnknownModelType, UnknownSystemType
from .vector_ops import Vector

StepFunction = Callable[
    [Vector, Vector, int, SystemType, Optional[np.random.Generator]], Vector
]

STEP_FUNCTIONS: Dict[ModelType, StepFunction] = {
    ModelType.NONLINEAR: evolve_nonlinear,
    ModelType.OSCILLATORS: evolve_oscillators,
    ModelType.ISING: evolve_ising,
}

ENERGY_FUNCTIONS: Dict[ModelType, Callable[[Vector], float]] = {
    ModelType.NONLINEAR: pseudo_energy,
    ModelType.OSCILLATORS: oscillator_energy,
    ModelType.ISING: ising_energy,
}


def parse_model_type(tag: Union[str, ModelType, None]) -> ModelType:
    """
    Resolve a model tag. None selects the default (nonlinear).

    Raises:
        UnknownModelType: Tag outside nonlinear / oscillators / ising
    """
    if tag is None:
        return DEFAULT_MODEL
    if isinstance(tag, ModelType):
        return tag
    try:
        return ModelType(str(tag).strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in ModelType)
        raise UnknownModelType(
            f"Unknown model type {tag!r}; expected one of: {valid}"
        ) from None


def parse_system_type(tag: Union[str, SystemType, None]) -> SystemType:
    """
    Resolve a system tag. None selects the default (isolated).

    Raises:
        UnknownSystemType: Tag outside isolated / open / closed
    """
    if tag is None:
        return DEFAULT_SYSTEM
    if isinstance(tag, SystemType):
        return tag
    try:
        return SystemType(str(tag).strip().lower())
    except ValueError:
        valid = ", ".join(s.value for s in SystemType)
        raise UnknownSystemType(
            f"Unknown system type {tag!r}; expected one of: {valid}"
        ) from None


def step_function(model_type: ModelType) -> StepFunction:
    return STEP_FUNCTIONS[model_type]


def model_energy(model_type: Union[str, ModelType], state: Vector) -> float:
    """
    Diagnostic energy of a state under the given model.

    Oscillators: chain energy. Ising: mean-field energy.
    Nonlinear: squared norm.
    """
    return ENERGY_FUNCTIONS[parse_model_type(model_type)](state)


__all__ = [
    "STEP_FUNCTIONS",
    "ENERGY_FUNCTIONS",
    "parse_model_type",
    "parse_system_type",
    "step_function",
    "model_energy",
]
