"""
universe/config_loader.py - Self-Healing Parameter Loading

Turns caller-supplied parameters (CLI flags, JSON or YAML files, plain dicts)
into a frozen UniverseConfig.

Design Principles:
- Self-healing: out-of-range value -> clamp to valid range + warning
- Strict mode: any out-of-range value raises instead
- Tags are never healed: an unknown model or system type always raises
- Immutable: the result is a frozen UniverseConfig
"""

import json
import math
import warnings
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .dynamics import parse_model_type, parse_system_type
from .types_config import SCENARIO_BASELINE, UniverseConfig

__all__ = [
    "PARAMETER_RANGES",
    "heal_parameters",
    "from_dict",
    "read_parameters",
    "load",
]


# =============================================================================
# PARAMETER RANGES (interactive front-end limits)
# =============================================================================

# name -> (minimum, maximum); None maximum = unbounded
PARAMETER_RANGES: Dict[str, Tuple[float, Optional[float]]] = {
    "steps": (10, 500),
    "max_levels": (5, 100),
    "dim": (2, 40),
    "count": (2, 40),
    "strength": (0.0, None),
    "alert_threshold": (0.0, None),
}

_INT_FIELDS = ("steps", "max_levels", "t0", "t1", "obs_level", "dim", "count")
_FLOAT_FIELDS = ("strength", "alert_threshold")
_KNOWN_FIELDS = {f.name for f in fields(UniverseConfig)}


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number)


def _coerce_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _clamp(name: str, value: float, lo: float, hi: Optional[float], warns: List[str]) -> float:
    if value < lo:
        warns.append(f"Clamped {name} from {value} to {lo}")
        return lo
    if hi is not None and value > hi:
        warns.append(f"Clamped {name} from {value} to {hi}")
        return hi
    return value


def heal_parameters(data: Dict[str, Any], warns: List[str]) -> Dict[str, Any]:
    """
    Apply self-healing to raw parameters.

    Self-healing behavior:
    - Missing field -> default from SCENARIO_BASELINE
    - Unparseable number -> default, add warning
    - Out-of-range value -> clamp to valid range, add warning
    - t0 clamped to 0..steps-2, t1 to 1..steps-1, and t1 <= t0 moved to t0 + 1
    - obs_level clamped to 0..max_levels-1
    - Unknown field -> ignore, add warning

    Args:
        data: Raw parameter mapping
        warns: Collector for warning messages (mutated)

    Returns:
        Healed parameter dict with every UniverseConfig field present
    """
    defaults = SCENARIO_BASELINE.to_dict()
    healed: Dict[str, Any] = {}

    for key in data:
        if key not in _KNOWN_FIELDS:
            warns.append(f"Ignoring unknown field: {key}")

    for name in _KNOWN_FIELDS:
        healed[name] = data.get(name, defaults[name])

    for name in _INT_FIELDS:
        value = _coerce_int(healed[name])
        if value is None:
            warns.append(f"Invalid {name} {healed[name]!r}, using default: {defaults[name]}")
            value = defaults[name]
        healed[name] = value

    for name in _FLOAT_FIELDS:
        value = _coerce_float(healed[name])
        if value is None:
            warns.append(f"Invalid {name} {healed[name]!r}, using default: {defaults[name]}")
            value = defaults[name]
        healed[name] = value

    for name, (lo, hi) in PARAMETER_RANGES.items():
        healed[name] = _clamp(name, healed[name], lo, hi, warns)

    steps = healed["steps"]
    healed["t0"] = _clamp("t0", healed["t0"], 0, steps - 2, warns)
    healed["t1"] = _clamp("t1", healed["t1"], 1, steps - 1, warns)
    if healed["t1"] <= healed["t0"]:
        moved = healed["t0"] + 1
        warns.append(f"Moved t1 from {healed['t1']} to {moved} (t1 must follow t0)")
        healed["t1"] = moved
    healed["obs_level"] = _clamp(
        "obs_level", healed["obs_level"], 0, healed["max_levels"] - 1, warns
    )

    healed["model_type"] = parse_model_type(healed["model_type"]).value
    healed["system_type"] = parse_system_type(healed["system_type"]).value
    if healed["random_seed"] is not None:
        seed = _coerce_int(healed["random_seed"])
        if seed is None:
            warns.append(f"Invalid random_seed {healed['random_seed']!r}, using fresh entropy")
        healed["random_seed"] = seed
    healed["scenario_name"] = str(healed["scenario_name"])
    return healed


def from_dict(data: Dict[str, Any], strict: bool = False) -> UniverseConfig:
    """
    Build a UniverseConfig from a parameter mapping.

    Args:
        data: Raw parameters (missing fields take baseline defaults)
        strict: If True, raise on any value that needed healing;
            if False, self-heal with warnings

    Returns:
        Frozen UniverseConfig

    Raises:
        ValueError: strict=True and a value was out of range or unparseable
        UnknownModelType / UnknownSystemType: invalid tags, in either mode
    """
    warns: List[str] = []
    healed = heal_parameters(dict(data), warns)

    if warns and strict:
        raise ValueError("Config validation failed:\n" + "\n".join(f"  - {w}" for w in warns))

    for w in warns:
        warnings.warn(f"UniverseConfig: {w}", UserWarning, stacklevel=2)

    return UniverseConfig(**healed)


def read_parameters(path: str) -> Dict[str, Any]:
    """
    Read raw parameters from a JSON or YAML file, without healing.

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: File content is not valid JSON/YAML, or not a mapping
    """
    path_obj = Path(path)

    if not path_obj.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    content = path_obj.read_text()

    if path_obj.suffix in ('.yaml', '.yml'):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML: {exc}") from exc
    else:
        data = json.loads(content)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    return data


def load(path: str, strict: bool = False) -> UniverseConfig:
    """
    Load config from a JSON or YAML file.

    Args:
        path: Path to config file (.json, .yaml or .yml)
        strict: Passed to from_dict

    Returns:
        Frozen UniverseConfig

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: File content is not a mapping, or strict validation failed
    """
    return from_dict(read_parameters(path), strict=strict)
