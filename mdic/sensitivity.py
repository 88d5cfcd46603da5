"""One-way sensitivity analysis helpers."""

from __future__ import annotations

import pandas as pd

from mdic.decisions import get_decision, run_model
from mdic.schema import COMMON_INPUT_KEYS, coerce_inputs


TARGET_OPTIONS = {
    "Net Impact / Week": "net_impact_per_week",
    "Total Impact": "total_impact",
}

# Drivers that do not feed a given decision's formula.
_UNUSED_COMMON_DRIVERS = {
    "overtime": set(),
    "capex": {
        "runtime_hours_per_week",
        "baseline_units_per_hour",
        "labor_rate_per_hour",
        "overhead_pct",
        "sell_price_per_unit",
        "contribution_margin_pct",
    },
}


def available_sensitivity_drivers(decision_id: str) -> list[str]:
    decision = get_decision(decision_id)
    if not decision.implemented:
        return []
    unused = _UNUSED_COMMON_DRIVERS.get(decision.id, set())
    return [k for k in COMMON_INPUT_KEYS if k not in unused] + list(decision.input_keys)


def evaluate_outputs(inputs: dict, decision_id: str) -> dict | None:
    result = run_model(inputs, decision_id)
    if not result.has_result:
        return None
    return {label: float(result.values[key]) for label, key in TARGET_OPTIONS.items()}


def run_one_way_sensitivity(
    base_inputs: dict,
    decision_id: str,
    delta_pct: float,
    drivers: list[str] | None = None,
) -> pd.DataFrame:
    """Flex each driver down and up by ``delta_pct`` and report the impact against the base case."""
    base_values = coerce_inputs(base_inputs)
    base = evaluate_outputs(base_values, decision_id)
    if base is None:
        return pd.DataFrame()

    candidates = available_sensitivity_drivers(decision_id)
    if not drivers:
        drivers = candidates

    rows = []
    for driver in drivers:
        if driver not in candidates:
            continue
        for case, mult in [("Low", 1 - delta_pct), ("High", 1 + delta_pct)]:
            scenario = dict(base_values)
            scenario[driver] = base_values[driver] * mult
            out = evaluate_outputs(scenario, decision_id)
            if out is None:
                continue
            rows.append(
                {
                    "Driver": driver,
                    "Case": case,
                    "Input Value": scenario[driver],
                    **out,
                    **{f"Delta {k}": out[k] - base[k] for k in base},
                }
            )
    return pd.DataFrame(rows)


def tornado_frame(sens_df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Pivot sensitivity rows into Low/High deltas per driver, widest swing first."""
    delta_col = f"Delta {target}"
    if sens_df.empty or delta_col not in sens_df.columns:
        return pd.DataFrame(columns=["Driver", "Low", "High", "Swing"])
    pivot = sens_df.pivot_table(index="Driver", columns="Case", values=delta_col, aggfunc="sum").reset_index()
    for case in ("Low", "High"):
        if case not in pivot.columns:
            pivot[case] = 0.0
    pivot["Swing"] = (pivot["High"] - pivot["Low"]).abs()
    pivot.columns.name = None
    return pivot[["Driver", "Low", "High", "Swing"]].sort_values("Swing", ascending=False).reset_index(drop=True)
