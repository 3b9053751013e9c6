"""
universe/types_config.py - UniverseConfig Dataclass and Scenario Presets

Immutable parameter set for single runs and ensembles.
Frozen dataclass, no behavior beyond serialization.
"""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class UniverseConfig:
    """Run parameters (immutable). Defaults match the interactive front-end."""
    dim: int = 10
    model_type: str = "nonlinear"
    system_type: str = "isolated"
    steps: int = 120
    max_levels: int = 60
    t0: int = 30                 # Observation / perturbation target time
    t1: int = 90                 # Retro source time, t1 > t0
    strength: float = 0.02       # Retro perturbation scale
    obs_level: int = 10          # Observer level, 0..max_levels-1
    count: int = 10              # Ensemble size
    alert_threshold: float = 0.3  # |delta norm| flagged as a time-travel event; 0 disables
    random_seed: Optional[int] = None
    scenario_name: str = "BASELINE"

    def to_dict(self) -> dict:
        return asdict(self)


# =============================================================================
# SCENARIO PRESETS
# =============================================================================

SCENARIO_BASELINE = UniverseConfig(
    scenario_name="BASELINE",
)

SCENARIO_OSCILLATOR_OPEN = UniverseConfig(
    dim=12,
    model_type="oscillators",
    system_type="open",
    steps=200,
    max_levels=20,
    t0=50,
    t1=150,
    strength=0.05,
    obs_level=5,
    random_seed=7,
    scenario_name="OSCILLATOR_OPEN",
)

SCENARIO_ISING_CLOSED = UniverseConfig(
    dim=16,
    model_type="ising",
    system_type="closed",
    steps=100,
    max_levels=10,
    t0=20,
    t1=80,
    strength=0.1,
    obs_level=3,
    scenario_name="ISING_CLOSED",
)

SCENARIO_MULTIVERSE = UniverseConfig(
    dim=10,
    steps=60,
    max_levels=20,
    t0=10,
    t1=40,
    strength=0.05,
    obs_level=5,
    count=25,
    random_seed=42,
    scenario_name="MULTIVERSE",
)

SCENARIOS = {
    config.scenario_name: config
    for config in (
        SCENARIO_BASELINE,
        SCENARIO_OSCILLATOR_OPEN,
        SCENARIO_ISING_CLOSED,
        SCENARIO_MULTIVERSE,
    )
}
