"""Decision impact formulas.

Each formula takes a mapping of already-coerced inputs (see
``mdic.schema.coerce_inputs``) and returns a flat dict of named results.
Every result record carries ``net_impact_per_week`` and ``total_impact``;
negative values mean the decision costs money.
"""

from __future__ import annotations

from mdic.schema import REQUIRED_INPUT_KEYS, coerce_inputs


WEEKS_PER_YEAR = 52

OVERTIME_RESULT_KEYS = (
    "baseline_units",
    "ot_labor_cost",
    "perf_delta_units",
    "scrap_delta_units",
    "downtime_delta_units",
    "delta_good_units",
    "profit_from_units",
    "net_impact_per_week",
    "total_impact",
)

CAPEX_RESULT_KEYS = (
    "horizon_weeks",
    "capex_amount",
    "capex_annual_savings",
    "capex_deployment_lead_weeks",
    "capex_cost_of_capital_pct",
    "savings_per_week",
    "missed_benefit_weeks",
    "lost_savings_within_horizon",
    "cost_of_capital_per_week",
    "carrying_cost_within_horizon",
    "net_impact_per_week",
    "total_impact",
)


def is_ready(inputs: dict) -> bool:
    """True when horizon, runtime, baseline rate and labor rate are all positive."""
    values = coerce_inputs(inputs)
    return all(values[key] > 0 for key in REQUIRED_INPUT_KEYS)


def compute_overtime_impact(inputs: dict) -> dict[str, float]:
    v = coerce_inputs(inputs)

    baseline_units = v["baseline_units_per_hour"] * v["runtime_hours_per_week"]
    cm = v["contribution_margin_pct"] / 100
    overhead_multiplier = 1 + v["overhead_pct"] / 100

    ot_labor_cost = v["ot_hours_per_week"] * v["labor_rate_per_hour"] * v["ot_premium_multiplier"] * overhead_multiplier

    # Fatigue side-effects. Scrap and downtime always remove good units.
    perf_delta_units = baseline_units * (v["fatigue_productivity_delta_pct"] / 100)
    scrap_delta_units = baseline_units * (v["fatigue_scrap_delta_pp"] / 100)
    downtime_delta_units = v["fatigue_downtime_delta_hours"] * v["baseline_units_per_hour"]
    delta_good_units = perf_delta_units - scrap_delta_units - downtime_delta_units

    # Without a selling price the unit effect cannot be valued: cost-only mode.
    sell_price = v["sell_price_per_unit"]
    profit_from_units = delta_good_units * sell_price * cm if sell_price > 0 else 0.0

    net_impact_per_week = profit_from_units - ot_labor_cost
    total_impact = net_impact_per_week * v["horizon_weeks"]

    return {
        "baseline_units": baseline_units,
        "ot_labor_cost": ot_labor_cost,
        "perf_delta_units": perf_delta_units,
        "scrap_delta_units": scrap_delta_units,
        "downtime_delta_units": downtime_delta_units,
        "delta_good_units": delta_good_units,
        "profit_from_units": profit_from_units,
        "net_impact_per_week": net_impact_per_week,
        "total_impact": total_impact,
    }


def compute_capex_delay_impact(inputs: dict) -> dict[str, float]:
    v = coerce_inputs(inputs)
    horizon = v["horizon_weeks"]

    savings_per_week = v["capex_annual_savings"] / WEEKS_PER_YEAR
    # Savings only start once the asset is deployed; nothing is missed when
    # the lead time already covers the whole horizon.
    missed_benefit_weeks = max(0.0, horizon - v["capex_deployment_lead_weeks"])
    lost_savings_within_horizon = savings_per_week * missed_benefit_weeks

    cost_of_capital_per_week = (v["capex_cost_of_capital_pct"] / 100) / WEEKS_PER_YEAR
    # Reported alongside, not included in the headline impact.
    carrying_cost_within_horizon = v["capex_amount"] * cost_of_capital_per_week * horizon

    net_impact_per_week = -(lost_savings_within_horizon / horizon) if horizon > 0 else 0.0
    total_impact = -lost_savings_within_horizon

    return {
        "horizon_weeks": horizon,
        "capex_amount": v["capex_amount"],
        "capex_annual_savings": v["capex_annual_savings"],
        "capex_deployment_lead_weeks": v["capex_deployment_lead_weeks"],
        "capex_cost_of_capital_pct": v["capex_cost_of_capital_pct"],
        "savings_per_week": savings_per_week,
        "missed_benefit_weeks": missed_benefit_weeks,
        "lost_savings_within_horizon": lost_savings_within_horizon,
        "cost_of_capital_per_week": cost_of_capital_per_week,
        "carrying_cost_within_horizon": carrying_cost_within_horizon,
        "net_impact_per_week": net_impact_per_week,
        "total_impact": total_impact,
    }
