"""
universe - Living Universe Simulation Package

Public API for layered time evolution, retrocausal perturbation and
multiverse ensembles. Flat, focused files. One file = one responsibility.
"""

# =============================================================================
# TYPES (Dataclasses)
# =============================================================================
from .types_config import (
    UniverseConfig,
    SCENARIO_BASELINE,
    SCENARIO_OSCILLATOR_OPEN,
    SCENARIO_ISING_CLOSED,
    SCENARIO_MULTIVERSE,
    SCENARIOS,
)
from .types_result import RunReport, EnsembleResult

# =============================================================================
# CONSTANTS
# =============================================================================
from .constants import (
    ModelType,
    SystemType,
    DEFAULT_DIM,
    DEFAULT_LEVELS,
    DEFAULT_STEPS,
    DEFAULT_RETRO_STRENGTH,
    RECEIPT_TYPES,
)

# =============================================================================
# ERRORS
# =============================================================================
from .errors import (
    UniverseError,
    InvalidDimension,
    OutOfRangeIndex,
    EnsembleParameterError,
    UnknownModelType,
    UnknownSystemType,
)

# =============================================================================
# VECTOR ALGEBRA
# =============================================================================
from .vector_ops import (
    add,
    sub,
    scale,
    blend,
    sin_vec,
    cos_vec,
    norm,
    zeros,
    rand_vec,
)

# =============================================================================
# DYNAMICS
# =============================================================================
from .dynamics_nonlinear import evolve_nonlinear, pseudo_energy
from .dynamics_oscillators import evolve_oscillators, oscillator_energy
from .dynamics_ising import evolve_ising, ising_energy, magnetization
from .dynamics import model_energy, parse_model_type, parse_system_type

# =============================================================================
# CORE
# =============================================================================
from .living_universe import LivingUniverse
from .retro import retro_influence
from .observer import Observer
from .run import run_universe, build_universe, is_time_travel_event
from .ensemble import run_ensemble, ensemble_statistics

# =============================================================================
# CONFIG AND EXPORT
# =============================================================================
from .config_loader import load, from_dict, heal_parameters, read_parameters
from .export import snapshot_text, write_snapshot, export_json, generate_report

# =============================================================================
# PUBLIC API
# =============================================================================
__all__ = [
    # Types
    "UniverseConfig",
    "RunReport",
    "EnsembleResult",
    # Scenario presets
    "SCENARIO_BASELINE",
    "SCENARIO_OSCILLATOR_OPEN",
    "SCENARIO_ISING_CLOSED",
    "SCENARIO_MULTIVERSE",
    "SCENARIOS",
    # Constants
    "ModelType",
    "SystemType",
    "DEFAULT_DIM",
    "DEFAULT_LEVELS",
    "DEFAULT_STEPS",
    "DEFAULT_RETRO_STRENGTH",
    "RECEIPT_TYPES",
    # Errors
    "UniverseError",
    "InvalidDimension",
    "OutOfRangeIndex",
    "EnsembleParameterError",
    "UnknownModelType",
    "UnknownSystemType",
    # Vector algebra
    "add",
    "sub",
    "scale",
    "blend",
    "sin_vec",
    "cos_vec",
    "norm",
    "zeros",
    "rand_vec",
    # Dynamics
    "evolve_nonlinear",
    "evolve_oscillators",
    "evolve_ising",
    "pseudo_energy",
    "oscillator_energy",
    "ising_energy",
    "magnetization",
    "model_energy",
    "parse_model_type",
    "parse_system_type",
    # Core
    "LivingUniverse",
    "retro_influence",
    "Observer",
    "run_universe",
    "build_universe",
    "is_time_travel_event",
    "run_ensemble",
    "ensemble_statistics",
    # Config and export
    "load",
    "from_dict",
    "heal_parameters",
    "read_parameters",
    "snapshot_text",
    "write_snapshot",
    "export_json",
    "generate_report",
]
