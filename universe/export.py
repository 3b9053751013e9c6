"""
universe/export.py - Snapshot and Report Export

Plain-text snapshots, JSON export and human-readable reports of run results.
Pure functions, except write_snapshot which writes one file.
"""

import json
from pathlib import Path
from typing import Optional

from receipts import emit_receipt, merkle, to_jsonable

from .constants import SNAPSHOT_PRECISION, TENANT_ID
from .types_result import EnsembleResult, RunReport


def fmt(x: float) -> str:
    """Fixed four-decimal formatting used by every text export."""
    return f"{x:.{SNAPSHOT_PRECISION}f}"


def snapshot_text(report: RunReport) -> str:
    """
    Plain-text snapshot of one run.

    Args:
        report: RunReport to summarize

    Returns:
        str: Snapshot text, newline separated
    """
    lines = [
        "Living Universe Snapshot",
        "------------------------",
        f"t0 = {report.config.t0}",
        f"t1 = {report.config.t1}",
        f"||U_inf(t0)|| = {fmt(report.infinite_norm)}",
        f"Delta ||U(t0)|| = {fmt(report.delta_norm)}",
        f"||Observer_k(t0)|| = {fmt(report.observer_norm)}",
        "",
        "Recreate by using the same parameters.",
    ]
    return "\n".join(lines)


def write_snapshot(report: RunReport, path: str) -> dict:
    """
    Write snapshot_text(report) to path.

    Returns:
        dict: universe_snapshot receipt
    """
    text = snapshot_text(report)
    Path(path).write_text(text + "\n", encoding="utf-8")
    return emit_receipt("universe_snapshot", {
        "tenant_id": TENANT_ID,
        "path": str(path),
        "t0": report.config.t0,
        "t1": report.config.t1,
        "infinite_norm": report.infinite_norm,
        "delta_norm": report.delta_norm,
        "observer_norm": report.observer_norm,
    })


def export_json(report: RunReport, ensemble: Optional[EnsembleResult] = None) -> str:
    """
    Format a run (and optionally an ensemble) as JSON.

    Args:
        report: RunReport to export
        ensemble: Optional EnsembleResult run with the same parameters

    Returns:
        str: JSON formatted output
    """
    export_data = {
        "config": report.config.to_dict(),
        "scalars": {
            "norm_before": report.norm_before,
            "norm_after": report.norm_after,
            "delta_norm": report.delta_norm,
            "energy_before": report.energy_before,
            "energy_after": report.energy_after,
            "delta_energy": report.delta_energy,
            "infinite_norm": report.infinite_norm,
            "observer_norm": report.observer_norm,
        },
        "alert": report.alert,
        "state_after": report.state_after,
        "norm_timeline": list(report.norm_timeline),
        "timeline_root": merkle(list(report.norm_timeline)),
    }
    if ensemble is not None:
        export_data["ensemble"] = {
            "count": ensemble.count,
            "mean_infinite": ensemble.mean_infinite,
            "mean_delta": ensemble.mean_delta,
            "var_infinite": ensemble.var_infinite,
        }

    return json.dumps(to_jsonable(export_data), indent=2)


def generate_report(report: RunReport, ensemble: Optional[EnsembleResult] = None) -> str:
    """
    Generate human-readable summary.

    Args:
        report: RunReport to summarize
        ensemble: Optional EnsembleResult to append

    Returns:
        str: Report text
    """
    config = report.config
    lines = [
        "=== LIVING UNIVERSE REPORT ===",
        f"Model: {config.model_type}  System: {config.system_type}  Dim: {config.dim}",
        f"Steps: {config.steps}  Levels: {config.max_levels}",
        f"t0 = {config.t0}, t1 = {config.t1}, strength = {config.strength}",
        f"||U(t0)|| before: {fmt(report.norm_before)}",
        f"||U(t0)|| after:  {fmt(report.norm_after)}",
        f"Delta ||U(t0)||:  {fmt(report.delta_norm)}",
        f"Energy before/after: {fmt(report.energy_before)} / {fmt(report.energy_after)}",
        f"||U_inf(t0)||: {fmt(report.infinite_norm)}",
        f"||Observer_{config.obs_level}(t0)||: {fmt(report.observer_norm)}",
    ]
    if report.alert:
        lines.append(
            f"ALERT: plausible time-travel event "
            f"(|Delta| >= {fmt(config.alert_threshold)})"
        )
    if ensemble is not None:
        lines.extend([
            "",
            f"=== MULTIVERSE ({ensemble.count} universes) ===",
            f"Mean ||U_inf(t0)||: {fmt(ensemble.mean_infinite)}",
            f"Mean Delta ||U(t0)||: {fmt(ensemble.mean_delta)}",
            f"Var ||U_inf(t0)||: {fmt(ensemble.var_infinite)}",
        ])

    return "\n".join(lines)
