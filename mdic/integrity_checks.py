"""Arithmetic identity checks on decision results."""

from __future__ import annotations

import math
from typing import Any

from mdic.decisions import DecisionResult


def _finding(check: str, lhs_name: str, rhs_name: str, lhs: float, rhs: float) -> dict[str, Any]:
    return {
        "Check": check,
        "Abs Delta": abs(float(lhs) - float(rhs)) if math.isfinite(lhs) and math.isfinite(rhs) else math.nan,
        "LHS": lhs_name,
        "RHS": rhs_name,
    }


def _check_identity(
    findings: list[dict[str, Any]],
    check: str,
    lhs_name: str,
    rhs_name: str,
    lhs: float,
    rhs: float,
    tol: float,
) -> None:
    # Relative tolerance so large capex amounts are not flagged for float noise.
    scale = max(1.0, abs(lhs), abs(rhs))
    if not (math.isfinite(lhs) and math.isfinite(rhs)) or abs(lhs - rhs) > tol * scale:
        findings.append(_finding(check, lhs_name, rhs_name, lhs, rhs))


def _overtime_checks(v: dict[str, float], horizon: float, findings: list[dict[str, Any]], tol: float) -> None:
    _check_identity(
        findings,
        "Good units identity",
        "delta_good_units",
        "perf - scrap - downtime",
        v["delta_good_units"],
        v["perf_delta_units"] - v["scrap_delta_units"] - v["downtime_delta_units"],
        tol,
    )
    _check_identity(
        findings,
        "Weekly impact identity",
        "net_impact_per_week",
        "profit_from_units - ot_labor_cost",
        v["net_impact_per_week"],
        v["profit_from_units"] - v["ot_labor_cost"],
        tol,
    )
    _check_identity(
        findings,
        "Horizon total identity",
        "total_impact",
        "net_impact_per_week * horizon_weeks",
        v["total_impact"],
        v["net_impact_per_week"] * horizon,
        tol,
    )


def _capex_checks(v: dict[str, float], findings: list[dict[str, Any]], tol: float) -> None:
    horizon = v["horizon_weeks"]
    _check_identity(
        findings,
        "Lost savings total",
        "total_impact",
        "-lost_savings_within_horizon",
        v["total_impact"],
        -v["lost_savings_within_horizon"],
        tol,
    )
    if horizon > 0:
        _check_identity(
            findings,
            "Horizon total identity",
            "net_impact_per_week * horizon_weeks",
            "total_impact",
            v["net_impact_per_week"] * horizon,
            v["total_impact"],
            tol,
        )
    _check_identity(
        findings,
        "Missed benefit weeks",
        "missed_benefit_weeks",
        "max(0, horizon_weeks - capex_deployment_lead_weeks)",
        v["missed_benefit_weeks"],
        max(0.0, horizon - v["capex_deployment_lead_weeks"]),
        tol,
    )


def run_integrity_checks(result: DecisionResult, horizon_weeks: float, tol: float = 1e-9) -> list[dict[str, Any]]:
    """Return integrity findings (empty list means all checks passed or there is nothing to check)."""
    if result is None or not result.has_result:
        return []
    v = result.values
    findings: list[dict[str, Any]] = []

    for key, value in v.items():
        if not math.isfinite(float(value)):
            findings.append(_finding("Finite result", key, "finite number", float(value), 0.0))
    if findings:
        return findings

    if result.decision_id == "overtime":
        _overtime_checks(v, float(horizon_weeks), findings, tol)
    elif result.decision_id == "capex":
        _capex_checks(v, findings, tol)
    return findings
