"""
tests/test_run.py - Single Run Tests

Validates run_universe end to end: perturbation, energies, observer and alerts.
"""

from dataclasses import replace

import numpy as np
import pytest

from universe import (
    SCENARIO_BASELINE,
    SCENARIO_ISING_CLOSED,
    SCENARIO_OSCILLATOR_OPEN,
    UniverseConfig,
    build_universe,
    is_time_travel_event,
    run_universe,
)
from universe.constants import RECEIPT_TYPES
from universe.errors import OutOfRangeIndex


SMALL = UniverseConfig(
    dim=4, steps=20, max_levels=6, t0=5, t1=15, strength=0.1, obs_level=3,
    random_seed=123, scenario_name="SMALL",
)


class TestTimeTravelEvent:
    """Test is_time_travel_event."""

    def test_threshold_inclusive(self):
        """|delta| equal to the threshold counts."""
        assert is_time_travel_event(0.3, 0.3)
        assert is_time_travel_event(-0.5, 0.3)

    def test_below_threshold(self):
        """Small deltas are not events."""
        assert not is_time_travel_event(0.29, 0.3)

    def test_zero_threshold_disables(self):
        """A zero threshold never fires."""
        assert not is_time_travel_event(10.0, 0.0)


class TestBuildUniverse:
    """Test build_universe."""

    def test_runs_requested_steps(self):
        """The universe holds config.steps history entries."""
        u = build_universe(SMALL)
        assert len(u) == SMALL.steps
        assert u.max_level_at(SMALL.t0) == SMALL.max_levels - 1

    def test_explicit_seed(self):
        """An explicit seed becomes history[0]."""
        u = build_universe(SMALL, seed=[0.0] * 4)
        assert np.array_equal(u.get_state(0), np.zeros(4))


class TestRunUniverse:
    """Test run_universe."""

    def test_report_consistency(self):
        """Report scalars agree with each other."""
        report = run_universe(SMALL)
        assert report.delta_norm == pytest.approx(report.norm_after - report.norm_before)
        assert report.delta_energy == pytest.approx(report.energy_after - report.energy_before)
        assert report.norm_before == pytest.approx(np.linalg.norm(report.state_before))
        assert report.norm_after == pytest.approx(np.linalg.norm(report.state_after))
        assert len(report.norm_timeline) == SMALL.steps

    def test_nonlinear_energy_is_squared_norm(self):
        """Nonlinear energy falls back to the squared norm."""
        report = run_universe(SMALL)
        assert report.energy_before == pytest.approx(report.norm_before ** 2)

    def test_seeded_reproducible(self):
        """Same config seed, same report."""
        a = run_universe(SMALL)
        b = run_universe(SMALL)
        assert a.delta_norm == b.delta_norm
        assert a.infinite_norm == b.infinite_norm
        assert a.norm_timeline == b.norm_timeline

    def test_strength_zero_no_change(self):
        """strength 0 leaves state(t0) unchanged."""
        report = run_universe(replace(SMALL, strength=0.0))
        assert report.delta_norm == 0.0
        assert np.array_equal(report.state_before, report.state_after)
        assert report.alert is False

    def test_alert_receipt(self):
        """A delta above the threshold raises an alert and a receipt."""
        config = replace(SMALL, strength=1.0, alert_threshold=1e-12)
        report = run_universe(config)
        assert report.alert is True, f"delta {report.delta_norm} should alert"
        types = [r["receipt_type"] for r in report.receipts]
        assert "time_travel_alert" in types, f"Receipt types: {types}"

    def test_no_alert_receipt_when_disabled(self):
        """alert_threshold 0 never alerts."""
        report = run_universe(replace(SMALL, strength=1.0, alert_threshold=0.0))
        assert report.alert is False
        assert all(r["receipt_type"] != "time_travel_alert" for r in report.receipts)

    def test_receipt_types_declared(self):
        """Every emitted receipt type is in the declared catalog."""
        report = run_universe(replace(SMALL, strength=1.0, alert_threshold=1e-12))
        for receipt in report.receipts:
            assert receipt["receipt_type"] in RECEIPT_TYPES, (
                f"Undeclared receipt type {receipt['receipt_type']}"
            )
        assert all(r["tenant_id"] == "universe" for r in report.receipts)

    def test_receipt_sequence(self):
        """Receipts start with genesis, run, retro_influence."""
        report = run_universe(SMALL)
        types = [r["receipt_type"] for r in report.receipts]
        assert types[:3] == ["universe_genesis", "universe_run", "retro_influence"]

    def test_observer_level_zero_sees_perturbed_state(self):
        """Observing level 0 reads the rewritten history."""
        report = run_universe(replace(SMALL, obs_level=0))
        assert report.observer_norm == pytest.approx(report.norm_after)

    def test_obs_level_beyond_levels_raises(self):
        """An observer level that was never built raises."""
        with pytest.raises(OutOfRangeIndex):
            run_universe(replace(SMALL, obs_level=SMALL.max_levels))

    @pytest.mark.parametrize("scenario", [
        SCENARIO_BASELINE, SCENARIO_OSCILLATOR_OPEN, SCENARIO_ISING_CLOSED,
    ])
    def test_presets_run(self, scenario):
        """Every preset runs to completion with finite results."""
        report = run_universe(replace(scenario, random_seed=1))
        assert np.isfinite(report.infinite_norm)
        assert np.isfinite(report.observer_norm)
        assert report.config.scenario_name == scenario.scenario_name
