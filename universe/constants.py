"""
universe/constants.py - Model Tags and Dynamics Constants

Closed model/system tags plus every constant of the three dynamics models.
Centralized for tuning. Pure data, no behavior beyond tag parsing.
"""

from enum import Enum

from receipts import DEFAULT_TENANT


# =============================================================================
# MODEL AND SYSTEM TAGS
# =============================================================================

class ModelType(Enum):
    """Per-step update rule of a universe."""
    NONLINEAR = "nonlinear"
    OSCILLATORS = "oscillators"
    ISING = "ising"


class SystemType(Enum):
    """Coupling of a universe to its surroundings (damping/noise)."""
    ISOLATED = "isolated"
    OPEN = "open"
    CLOSED = "closed"


# =============================================================================
# ENGINE DEFAULTS
# =============================================================================

DEFAULT_DIM = 10
DEFAULT_LEVELS = 50
DEFAULT_STEPS = 100
DEFAULT_MODEL = ModelType.NONLINEAR
DEFAULT_SYSTEM = SystemType.ISOLATED
DEFAULT_RETRO_STRENGTH = 0.01

# =============================================================================
# OSCILLATOR CHAIN CONSTANTS
# =============================================================================

OSC_DT = 0.05            # Fixed integration timestep
OSC_SPRING_K = 1.0       # On-site spring constant
OSC_COUPLING = 0.1       # Nearest-neighbour coupling
OSC_NOISE_SCALE = 0.02   # Velocity noise amplitude, open systems only

# Velocity damping per system type
OSC_DAMPING = {
    SystemType.OPEN: 0.05,
    SystemType.CLOSED: 0.01,
    SystemType.ISOLATED: 0.0,
}

# =============================================================================
# MEAN-FIELD ISING CONSTANTS
# =============================================================================

ISING_J = 1.0
ISING_H = 0.0
ISING_BETA = 1.0
ISING_NOISE_SCALE = 0.15  # Local field noise amplitude, open systems only

# =============================================================================
# RUN REPORT CONSTANTS
# =============================================================================

DEFAULT_ALERT_THRESHOLD = 0.3  # |delta norm| that counts as a time-travel event
SNAPSHOT_PRECISION = 4

# =============================================================================
# RECEIPT TYPES
# =============================================================================

TENANT_ID = DEFAULT_TENANT

RECEIPT_TYPES = [
    "universe_genesis",
    "universe_run",
    "retro_influence",
    "time_travel_alert",
    "ensemble_summary",
    "universe_snapshot",
]
