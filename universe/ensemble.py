"""
universe/ensemble.py - Multiverse Ensemble Runner

Runs independent, identically parameterized universes, perturbs each once and
aggregates norm statistics. Members share no state beyond the generator the
runner draws their seeds and noise from.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from receipts import emit_receipt, merkle

from .constants import TENANT_ID
from .errors import EnsembleParameterError
from .retro import retro_influence
from .run import build_universe, make_rng
from .types_config import UniverseConfig
from .types_result import EnsembleResult
from .vector_ops import norm


def ensemble_statistics(
    infinite_norms: Sequence[float],
    deltas: Sequence[float],
) -> Tuple[float, float, float]:
    """
    Aggregate member samples.

    Returns:
        (mean_infinite, mean_delta, var_infinite) where
        var_infinite = max(0, E[X^2] - E[X]^2)

    Raises:
        EnsembleParameterError: no samples
    """
    if len(infinite_norms) == 0 or len(infinite_norms) != len(deltas):
        raise EnsembleParameterError(
            f"Need matching, non-empty samples; got {len(infinite_norms)} "
            f"infinite norms and {len(deltas)} deltas"
        )
    inf = np.asarray(infinite_norms, dtype=np.float64)
    dlt = np.asarray(deltas, dtype=np.float64)

    mean_inf = float(np.mean(inf))
    mean_delta = float(np.mean(dlt))
    # Floating-point cancellation can leave a tiny negative variance
    var_inf = max(0.0, float(np.mean(inf * inf)) - mean_inf * mean_inf)
    return mean_inf, mean_delta, var_inf


def run_ensemble(
    config: UniverseConfig,
    rng: Optional[np.random.Generator] = None,
) -> EnsembleResult:
    """
    Multiverse mode.

    For each of config.count members: fresh random seed, run, norm of state(t0),
    retro_influence(t1 -> t0, strength), norm again (delta = after - before),
    and the norm of infinite_state(t0).

    Args:
        config: Shared parameters; count is the number of universes
        rng: Generator for seeds and noise; derived from config.random_seed
            when omitted

    Returns:
        EnsembleResult with means, clamped variance and per-member samples

    Raises:
        EnsembleParameterError: config.count < 1
    """
    if config.count < 1:
        raise EnsembleParameterError(f"Ensemble count must be >= 1, got {config.count}")
    if rng is None:
        rng = make_rng(config)

    infinite_norms: List[float] = []
    deltas: List[float] = []
    member_receipts: List[dict] = []

    for _ in range(config.count):
        universe = build_universe(config, rng=rng)

        norm_before = norm(universe.get_state(config.t0))
        retro_influence(universe, config.t1, config.t0, config.strength)
        norm_after = norm(universe.get_state(config.t0))

        deltas.append(norm_after - norm_before)
        infinite_norms.append(norm(universe.infinite_state(config.t0)))
        member_receipts.extend(universe.receipt_ledger)

    mean_inf, mean_delta, var_inf = ensemble_statistics(infinite_norms, deltas)

    receipt = emit_receipt("ensemble_summary", {
        "tenant_id": TENANT_ID,
        "scenario_name": config.scenario_name,
        "count": config.count,
        "model_type": config.model_type,
        "system_type": config.system_type,
        "steps": config.steps,
        "max_levels": config.max_levels,
        "mean_infinite": mean_inf,
        "mean_delta": mean_delta,
        "var_infinite": var_inf,
        "member_ledger_root": merkle(member_receipts),
    })

    return EnsembleResult(
        config=config,
        count=config.count,
        mean_infinite=mean_inf,
        mean_delta=mean_delta,
        var_infinite=var_inf,
        infinite_norms=tuple(infinite_norms),
        delta_norms=tuple(deltas),
        receipt=receipt,
    )
