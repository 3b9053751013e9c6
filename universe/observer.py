"""
universe/observer.py - Fixed-Level Observer

Read-only view bound to one level of one universe. The universe is shared,
not owned.
"""

from .living_universe import LivingUniverse
from .vector_ops import Vector, norm


class Observer:
    """Perceives a universe at a fixed level."""

    def __init__(self, universe: LivingUniverse, level: int = 0):
        self.universe = universe
        self.level = level

    def perceive(self, t: int) -> Vector:
        return self.universe.get_state(t, self.level)

    def perceive_norm(self, t: int) -> float:
        return norm(self.perceive(t))

    def __repr__(self) -> str:
        return f"Observer(level={self.level}, universe={self.universe!r})"
