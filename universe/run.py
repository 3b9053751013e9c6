"""
universe/run.py - Single Universe Run

Construct, evolve, perturb and observe one universe; collect every scalar
the presentation layer renders. Parameters are expected to be validated by
the caller (see config_loader.heal_parameters).
"""

from typing import Optional

import numpy as np

from receipts import emit_receipt

from .constants import DEFAULT_ALERT_THRESHOLD, TENANT_ID
from .dynamics import model_energy
from .living_universe import LivingUniverse
from .observer import Observer
from .retro import retro_influence
from .types_config import UniverseConfig
from .types_result import RunReport
from .vector_ops import VectorLike, norm


def make_rng(config: UniverseConfig) -> np.random.Generator:
    """Generator seeded from config.random_seed (fresh entropy when None)."""
    return np.random.default_rng(config.random_seed)


def is_time_travel_event(delta_norm: float, threshold: float = DEFAULT_ALERT_THRESHOLD) -> bool:
    """A perturbation whose |delta norm| reaches a positive threshold."""
    return threshold > 0 and abs(delta_norm) >= threshold


def build_universe(
    config: UniverseConfig,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[VectorLike] = None,
) -> LivingUniverse:
    """Construct and run a universe for the config; no perturbation yet."""
    if rng is None:
        rng = make_rng(config)
    universe = LivingUniverse(
        config.dim, config.model_type, config.system_type, seed=seed, rng=rng
    )
    universe.run(config.steps, config.max_levels)
    return universe


def run_universe(
    config: UniverseConfig,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[VectorLike] = None,
) -> RunReport:
    """
    Full single run.

    Steps:
        1. Build and run a universe (steps, max_levels)
        2. Read state(t0), apply retro_influence(t1 -> t0, strength)
        3. Compare norms and model energies before/after
        4. Read the infinite-level aggregate and the observer at obs_level
        5. Flag a time-travel event when |delta norm| >= alert_threshold

    Args:
        config: Run parameters
        rng: Generator for the random seed and open-system noise;
            derived from config.random_seed when omitted
        seed: Explicit initial state (random when omitted)

    Returns:
        RunReport with all scalars, the norm timeline and the universe receipts

    Raises:
        OutOfRangeIndex: t0 or obs_level outside the computed range
    """
    universe = build_universe(config, rng=rng, seed=seed)

    state_before = universe.get_state(config.t0)
    norm_before = norm(state_before)

    retro_influence(universe, config.t1, config.t0, config.strength)

    state_after = universe.get_state(config.t0)
    norm_after = norm(state_after)
    delta_norm = norm_after - norm_before

    energy_before = model_energy(universe.model_type, state_before)
    energy_after = model_energy(universe.model_type, state_after)

    infinite_norm = norm(universe.infinite_state(config.t0))
    observer_norm = Observer(universe, config.obs_level).perceive_norm(config.t0)

    alert = is_time_travel_event(delta_norm, config.alert_threshold)
    if alert:
        universe.receipt_ledger.append(emit_receipt("time_travel_alert", {
            "tenant_id": TENANT_ID,
            "dim": config.dim,
            "t0": config.t0,
            "t1": config.t1,
            "delta_norm": delta_norm,
            "threshold": config.alert_threshold,
        }))

    return RunReport(
        config=config,
        state_before=state_before,
        state_after=state_after,
        norm_before=norm_before,
        norm_after=norm_after,
        delta_norm=delta_norm,
        energy_before=energy_before,
        energy_after=energy_after,
        delta_energy=energy_after - energy_before,
        infinite_norm=infinite_norm,
        observer_norm=observer_norm,
        norm_timeline=tuple(universe.norm_timeline()),
        alert=alert,
        receipts=tuple(universe.receipt_ledger),
    )
