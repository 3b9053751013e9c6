"""
universe/retro.py - Retrocausal Influence Operator

One-shot additive perturbation of a past level-0 state by a delta derived
from a later state. Levels are never recomputed afterwards.
"""

from typing import Optional

from receipts import emit_receipt

from .constants import DEFAULT_RETRO_STRENGTH, TENANT_ID
from .living_universe import LivingUniverse
from .vector_ops import Vector, add, norm, scale, sub


def retro_influence(
    universe: LivingUniverse,
    t_future: int,
    t_past: int,
    strength: float = DEFAULT_RETRO_STRENGTH,
) -> Optional[Vector]:
    """
    Pull history[t_past] toward the state at t_future.

    delta = (state(t_future) - history[t_past]) * strength
    history[t_past] <- history[t_past] + delta

    Either index at or beyond the history length makes this a silent no-op:
    history is left untouched and None is returned.

    Args:
        universe: Universe to perturb (mutated in place)
        t_future: Source time index
        t_past: Target time index
        strength: Blend factor; 0 leaves the state unchanged

    Returns:
        The applied delta, or None when skipped. A retro_influence receipt
        is appended to the universe's ledger either way.
    """
    length = len(universe)
    if t_future >= length or t_past >= length:
        universe.receipt_ledger.append(emit_receipt("retro_influence", {
            "tenant_id": TENANT_ID,
            "t_future": t_future,
            "t_past": t_past,
            "strength": strength,
            "applied": False,
            "history_length": length,
        }))
        return None

    future_state = universe.get_state(t_future)
    past_state = universe.get_state(t_past)
    delta = scale(sub(future_state, past_state), strength)
    universe._rewrite_past(t_past, add(past_state, delta))

    universe.receipt_ledger.append(emit_receipt("retro_influence", {
        "tenant_id": TENANT_ID,
        "t_future": t_future,
        "t_past": t_past,
        "strength": strength,
        "applied": True,
        "history_length": length,
        "delta_norm": norm(delta),
    }))
    return delta
