"""
universe/errors.py - Engine Error Taxonomy

Local precondition violations, surfaced immediately to the caller.
All derive from StopRule so a single handler can halt on any of them.
"""

from receipts import StopRule


class UniverseError(StopRule):
    """Base class for living universe precondition failures."""
    pass


class InvalidDimension(UniverseError, ValueError):
    """dim < 1, a non-integer dim, or a seed whose length differs from dim."""
    pass


class OutOfRangeIndex(UniverseError, IndexError):
    """A (t, level) pair that was never computed, or a step taken out of order."""
    pass


class EnsembleParameterError(UniverseError, ValueError):
    """Ensemble asked for fewer than one member."""
    pass


class UnknownModelType(UniverseError, ValueError):
    """Model tag outside nonlinear / oscillators / ising."""
    pass


class UnknownSystemType(UniverseError, ValueError):
    """System tag outside isolated / open / closed."""
    pass


__all__ = [
    "UniverseError",
    "InvalidDimension",
    "OutOfRangeIndex",
    "EnsembleParameterError",
    "UnknownModelType",
    "UnknownSystemType",
]
