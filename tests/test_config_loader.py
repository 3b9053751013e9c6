"""
tests/test_config_loader.py - Self-Healing Config Tests

Validates clamping, strict mode and JSON/YAML loading.
"""

import json
from dataclasses import FrozenInstanceError

import pytest
import yaml

from universe import UniverseConfig, from_dict, load, read_parameters
from universe.config_loader import PARAMETER_RANGES, heal_parameters
from universe.errors import UnknownModelType, UnknownSystemType


class TestHealParameters:
    """Test heal_parameters."""

    def test_empty_gives_baseline(self):
        """Missing fields take baseline defaults without warnings."""
        warns = []
        healed = heal_parameters({}, warns)
        assert warns == [], f"Unexpected warnings: {warns}"
        assert UniverseConfig(**healed) == UniverseConfig()

    @pytest.mark.parametrize("name,raw,expected", [
        ("steps", 3, 10),
        ("steps", 9000, 500),
        ("max_levels", 1, 5),
        ("max_levels", 500, 100),
        ("dim", 0, 2),
        ("dim", 99, 40),
        ("count", 1, 2),
        ("count", 100, 40),
    ])
    def test_clamps_ranges(self, name, raw, expected):
        """Out-of-range values are clamped with a warning."""
        warns = []
        healed = heal_parameters({name: raw}, warns)
        assert healed[name] == expected, f"{name}: expected {expected}, got {healed[name]}"
        assert any(name in w for w in warns), f"No warning for {name}: {warns}"

    def test_negative_strength(self):
        """Strength has no upper bound but cannot be negative."""
        warns = []
        assert heal_parameters({"strength": -1.0}, warns)["strength"] == 0.0
        assert heal_parameters({"strength": 7.5}, [])["strength"] == 7.5

    def test_times_clamped_to_steps(self):
        """t0 and t1 stay inside the timeline."""
        healed = heal_parameters({"steps": 50, "t0": 80, "t1": 200}, [])
        assert healed["t0"] == 48
        assert healed["t1"] == 49

    def test_t1_moved_after_t0(self):
        """t1 <= t0 moves t1 to t0 + 1."""
        warns = []
        healed = heal_parameters({"t0": 40, "t1": 20}, warns)
        assert healed["t1"] == 41
        assert any("t1" in w for w in warns)

    def test_obs_level_clamped(self):
        """obs_level stays below max_levels."""
        healed = heal_parameters({"max_levels": 8, "obs_level": 20}, [])
        assert healed["obs_level"] == 7

    def test_unparseable_number_defaults(self):
        """Garbage numbers fall back to defaults."""
        warns = []
        healed = heal_parameters({"steps": "lots", "strength": float("nan")}, warns)
        assert healed["steps"] == 120
        assert healed["strength"] == 0.02
        assert len(warns) == 2, f"Expected 2 warnings, got {warns}"

    def test_numeric_strings_coerced(self):
        """Numeric strings from files or flags are accepted."""
        healed = heal_parameters({"steps": "80", "strength": "0.5"}, [])
        assert healed["steps"] == 80
        assert healed["strength"] == 0.5

    def test_unknown_field_warns(self):
        """Unknown keys are ignored with a warning."""
        warns = []
        heal_parameters({"colour": "blue"}, warns)
        assert any("colour" in w for w in warns)

    def test_tags_normalized(self):
        """Tags are stored in canonical lower case."""
        healed = heal_parameters({"model_type": "ISING", "system_type": " Open "}, [])
        assert healed["model_type"] == "ising"
        assert healed["system_type"] == "open"

    def test_invalid_seed_warns(self):
        """An unparseable random_seed falls back to fresh entropy with a warning."""
        warns = []
        healed = heal_parameters({"random_seed": "abc"}, warns)
        assert healed["random_seed"] is None
        assert any("random_seed" in w for w in warns), f"No warning: {warns}"

    def test_invalid_seed_strict(self):
        """Strict mode rejects an unparseable random_seed."""
        with pytest.raises(ValueError, match="random_seed"):
            from_dict({"random_seed": "abc"}, strict=True)

    def test_numeric_seed_kept(self):
        """A numeric random_seed passes without warnings."""
        warns = []
        assert heal_parameters({"random_seed": "17"}, warns)["random_seed"] == 17
        assert warns == []

    def test_unknown_tags_raise(self):
        """Tags are never healed."""
        with pytest.raises(UnknownModelType):
            heal_parameters({"model_type": "fluid"}, [])
        with pytest.raises(UnknownSystemType):
            heal_parameters({"system_type": "semi"}, [])

    def test_ranges_table(self):
        """Every ranged field is a UniverseConfig field."""
        for name in PARAMETER_RANGES:
            assert hasattr(UniverseConfig(), name)


class TestFromDict:
    """Test from_dict."""

    def test_warns_when_healing(self):
        """Healing emits UserWarning."""
        with pytest.warns(UserWarning, match="UniverseConfig"):
            config = from_dict({"dim": 1000})
        assert config.dim == 40

    def test_strict_raises(self):
        """Strict mode refuses to heal."""
        with pytest.raises(ValueError, match="Config validation failed"):
            from_dict({"dim": 1000}, strict=True)

    def test_strict_accepts_valid(self):
        """Strict mode passes valid parameters through."""
        config = from_dict({"dim": 12, "model_type": "oscillators"}, strict=True)
        assert config.dim == 12
        assert config.model_type == "oscillators"

    def test_result_frozen(self):
        """The config is immutable."""
        config = from_dict({})
        with pytest.raises(FrozenInstanceError):
            config.dim = 3


class TestLoad:
    """Test read_parameters and load."""

    def test_json(self, tmp_path):
        """JSON files load."""
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"dim": 6, "steps": 40, "t0": 5, "t1": 30}))
        config = load(str(path))
        assert (config.dim, config.steps, config.t0, config.t1) == (6, 40, 5, 30)

    def test_yaml(self, tmp_path):
        """YAML files load."""
        path = tmp_path / "params.yaml"
        path.write_text(yaml.safe_dump({"model_type": "ising", "system_type": "closed"}))
        config = load(str(path))
        assert config.model_type == "ising"
        assert config.system_type == "closed"

    def test_read_parameters_raw(self, tmp_path):
        """read_parameters returns the file content without healing."""
        path = tmp_path / "params.yml"
        path.write_text("dim: 1000\n")
        assert read_parameters(str(path)) == {"dim": 1000}

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load(str(tmp_path / "absent.json"))

    def test_malformed_yaml(self, tmp_path):
        """Unparseable YAML surfaces as ValueError."""
        path = tmp_path / "broken.yaml"
        path.write_text("steps: [1, 2\n")
        with pytest.raises(ValueError, match="not valid YAML"):
            read_parameters(str(path))

    def test_malformed_json(self, tmp_path):
        """Unparseable JSON surfaces as ValueError."""
        path = tmp_path / "broken.json"
        path.write_text("{\"steps\": ")
        with pytest.raises(ValueError):
            load(str(path))

    def test_non_mapping(self, tmp_path):
        """Files must hold a mapping."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            load(str(path))

    def test_strict_file(self, tmp_path):
        """Strict loading rejects out-of-range files."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"steps": 2}))
        with pytest.raises(ValueError):
            load(str(path), strict=True)
