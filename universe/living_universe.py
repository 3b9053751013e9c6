"""
universe/living_universe.py - LivingUniverse

Owns the level-0 timeline (history) and the table of derived levels.
Level l at time t is evolved from level l-1 at time t, with level l-1 at
time t-1 as its memory: each level reinterprets the trajectory of the level
below as its own history.

Storage:
    history[t]      level 0, the only slot the retrocausal operator rewrites
    levels[t][l]    derived levels, l >= 1 only, written once and never mutated

Every stored vector is a read-only array, so callers can read slots but can
never hold a mutable alias to one.
"""

from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from receipts import emit_receipt

from .constants import (
    DEFAULT_DIM,
    DEFAULT_LEVELS,
    DEFAULT_STEPS,
    TENANT_ID,
    ModelType,
    SystemType,
)
from .dynamics import parse_model_type, parse_system_type, step_function
from .errors import InvalidDimension, OutOfRangeIndex
from .vector_ops import Vector, VectorLike, as_vector, norm, rand_vec, zeros


def _frozen(vec: Vector) -> Vector:
    vec = np.array(vec, dtype=np.float64)
    vec.flags.writeable = False
    return vec


def _validate_dim(dim) -> int:
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)):
        raise InvalidDimension(f"dim must be a positive integer, got {dim!r}")
    if dim < 1:
        raise InvalidDimension(f"dim must be >= 1, got {dim}")
    return int(dim)


class LivingUniverse:
    """
    A vector-valued universe evolved under one dynamics model.

    Args:
        dim: State dimension, fixed for the lifetime of the universe
        model_type: "nonlinear" (default), "oscillators" or "ising"
        system_type: "isolated" (default), "open" or "closed"
        seed: Initial state history[0]; uniform [0, 1) random when omitted
        rng: Generator for the random seed and the open-system noise.
            Seed it to make open-system runs reproducible.

    Raises:
        InvalidDimension: dim < 1 or a seed of the wrong length
        UnknownModelType / UnknownSystemType: invalid tags
    """

    def __init__(
        self,
        dim: int = DEFAULT_DIM,
        model_type: Union[str, ModelType, None] = None,
        system_type: Union[str, SystemType, None] = None,
        seed: Optional[VectorLike] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self._dim = _validate_dim(dim)
        self._model_type = parse_model_type(model_type)
        self._system_type = parse_system_type(system_type)
        self._evolve = step_function(self._model_type)
        self._rng = rng if rng is not None else np.random.default_rng()

        seed_supplied = seed is not None
        if seed_supplied:
            seed = as_vector(seed)
            if seed.size != self._dim:
                raise InvalidDimension(
                    f"Seed has {seed.size} components, universe dim is {self._dim}"
                )
        else:
            seed = rand_vec(self._dim, self._rng)

        self._history: List[Vector] = [_frozen(seed)]
        self._levels: Dict[int, Dict[int, Vector]] = {}
        self.receipt_ledger: List[dict] = []

        self.receipt_ledger.append(emit_receipt("universe_genesis", {
            "tenant_id": TENANT_ID,
            "dim": self._dim,
            "model_type": self._model_type.value,
            "system_type": self._system_type.value,
            "seed_supplied": seed_supplied,
            "seed_norm": norm(seed),
        }))

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def model_type(self) -> ModelType:
        return self._model_type

    @property
    def system_type(self) -> SystemType:
        return self._system_type

    @property
    def history(self) -> Tuple[Vector, ...]:
        """Level-0 timeline as a tuple of read-only arrays."""
        return tuple(self._history)

    @property
    def levels(self) -> Dict[int, Dict[int, Vector]]:
        """Shallow copy of the derived level table (l >= 1 only)."""
        return {t: dict(by_level) for t, by_level in self._levels.items()}

    def __len__(self) -> int:
        return len(self._history)

    def __repr__(self) -> str:
        return (
            f"LivingUniverse(dim={self._dim}, model_type={self._model_type.value!r}, "
            f"system_type={self._system_type.value!r}, steps={len(self._history)})"
        )

    # ------------------------------------------------------------------
    # Evolution
    # ------------------------------------------------------------------

    def _layer(self, t: int, level: int) -> Optional[Vector]:
        """Level `level` at time t, or None when it was never computed."""
        if level == 0:
            return self._history[t] if 0 <= t < len(self._history) else None
        return self._levels.get(t, {}).get(level)

    def step(self, t: int, max_level: int = DEFAULT_LEVELS) -> None:
        """
        Advance time from t-1 to t and build levels 1..max_level-1 at t.

        No-op for t == 0. Steps must be taken in order: t must equal the
        current history length.

        Raises:
            OutOfRangeIndex: t < 0, or history[t-1] missing, or t already computed
        """
        if t == 0:
            return
        if t < 0 or t != len(self._history):
            raise OutOfRangeIndex(
                f"step({t}) out of order: history holds t = 0..{len(self._history) - 1}"
            )

        prev = self._history[t - 1]
        memory = self._history[t - 2] if t > 1 else prev
        base_now = _frozen(self._evolve(prev, memory, 0, self._system_type, self._rng))
        self._history.append(base_now)

        by_level: Dict[int, Vector] = {}
        self._levels[t] = by_level
        below = base_now
        for level in range(1, max_level):
            memory_layer = self._layer(t - 1, level - 1) if t > 1 else None
            if memory_layer is None:
                memory_layer = below
            state = _frozen(
                self._evolve(below, memory_layer, level, self._system_type, self._rng)
            )
            by_level[level] = state
            below = state

    def run(self, steps: int = DEFAULT_STEPS, max_level: int = DEFAULT_LEVELS) -> dict:
        """
        Step t = 1 .. steps-1 in order (resuming after the last computed step).

        Returns:
            universe_run receipt, also appended to the receipt ledger
        """
        start = len(self._history)
        for t in range(start, steps):
            self.step(t, max_level)

        receipt = emit_receipt("universe_run", {
            "tenant_id": TENANT_ID,
            "model_type": self._model_type.value,
            "system_type": self._system_type.value,
            "steps_requested": steps,
            "max_level": max_level,
            "steps_computed": max(0, len(self._history) - start),
            "history_length": len(self._history),
            "final_norm": norm(self._history[-1]),
        })
        self.receipt_ledger.append(receipt)
        return receipt

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_state(self, t: int, level: int = 0) -> Vector:
        """
        State at (t, level); level 0 is history[t].

        Raises:
            OutOfRangeIndex: the pair was never computed
        """
        state = None
        if t >= 0 and level >= 0:
            state = self._layer(t, level)
        if state is None:
            raise OutOfRangeIndex(
                f"No state recorded at t={t}, level={level} "
                f"(history length {len(self._history)}, "
                f"max level at t: {self.max_level_at(t)})"
            )
        return state

    def max_level_at(self, t: int) -> int:
        """Deepest level recorded at t; 0 when only history exists, -1 when t is unknown."""
        if not 0 <= t < len(self._history):
            return -1
        by_level = self._levels.get(t)
        return max(by_level) if by_level else 0

    def infinite_state(self, t: int) -> Vector:
        """
        Weighted sum over derived levels at t: sum of levels[t][l] / (l + 1), l >= 1.

        Level 0 (history[t]) is excluded. Returns zeros when no derived level
        exists at t, e.g. at t == 0.

        Raises:
            OutOfRangeIndex: t outside the computed timeline
        """
        if not 0 <= t < len(self._history):
            raise OutOfRangeIndex(
                f"infinite_state({t}) outside history t = 0..{len(self._history) - 1}"
            )
        acc = zeros(self._dim)
        by_level = self._levels.get(t, {})
        for level in sorted(by_level):
            acc += by_level[level] * (1.0 / (level + 1))
        return acc

    def norm_timeline(self) -> List[float]:
        """Norm of every history entry, for plotting."""
        return [norm(v) for v in self._history]

    # ------------------------------------------------------------------
    # Mutation path for the retrocausal operator
    # ------------------------------------------------------------------

    def _rewrite_past(self, t_past: int, new_state: VectorLike) -> None:
        """Replace history[t_past]. Only retro_influence calls this."""
        new_state = as_vector(new_state)
        if new_state.size != self._dim:
            raise InvalidDimension(
                f"Rewrite has {new_state.size} components, universe dim is {self._dim}"
            )
        self._history[t_past] = _frozen(new_state)
