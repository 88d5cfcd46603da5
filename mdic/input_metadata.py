"""Input labels, step sizes, guidance metadata and advisory range checks."""

from __future__ import annotations

from typing import Any

from mdic.formatting import coerce_number, is_finite_number
from mdic.schema import REQUIRED_INPUT_KEYS


INPUT_FIELDS: dict[str, dict[str, Any]] = {
    "horizon_weeks": {
        "label": "Time horizon (weeks)",
        "step": 1.0,
        "decimals": 0,
        "help": "Number of weeks the decision stays in effect. Total impact is the weekly impact over this horizon.",
    },
    "runtime_hours_per_week": {
        "label": "Planned runtime per week (hrs)",
        "step": 1.0,
        "decimals": 1,
        "help": "Scheduled production hours per week before the decision.",
    },
    "baseline_units_per_hour": {
        "label": "Baseline output rate (units/hr)",
        "step": 1.0,
        "decimals": 1,
        "help": "Good units produced per runtime hour today.",
    },
    "labor_rate_per_hour": {
        "label": "Fully burdened labor cost ($/hr)",
        "step": 1.0,
        "decimals": 2,
        "help": "Hourly labor cost including wages, taxes and benefits.",
    },
    "overhead_pct": {
        "label": "Overhead add-on (%)",
        "step": 1.0,
        "decimals": 1,
        "help": "Extra overhead applied on top of labor cost, as a percent.",
    },
    "sell_price_per_unit": {
        "label": "Selling price ($/unit, optional)",
        "step": 1.0,
        "decimals": 2,
        "help": "Leave at 0 to see cost-only impact. Unit volume changes are only valued when a price is entered.",
    },
    "contribution_margin_pct": {
        "label": "Contribution margin (%)",
        "step": 1.0,
        "decimals": 1,
        "help": "Share of selling price kept as contribution before fixed costs.",
    },
    "ot_hours_per_week": {
        "label": "Overtime hours per week",
        "step": 1.0,
        "decimals": 1,
        "help": "Paid overtime hours added each week.",
    },
    "ot_premium_multiplier": {
        "label": "OT premium (multiplier)",
        "step": 0.1,
        "decimals": 2,
        "help": "Overtime pay multiplier on the labor rate, for example 1.5 for time-and-a-half.",
    },
    "fatigue_productivity_delta_pct": {
        "label": "Fatigue productivity delta (%)",
        "step": 0.5,
        "decimals": 1,
        "help": "Change in baseline throughput from fatigue. Negative values are a productivity loss.",
    },
    "fatigue_scrap_delta_pp": {
        "label": "Fatigue scrap delta (pp)",
        "step": 0.1,
        "decimals": 2,
        "help": "Extra scrap rate in percentage points of baseline units. Always counted as lost units.",
    },
    "fatigue_downtime_delta_hours": {
        "label": "Fatigue downtime delta (hr/wk)",
        "step": 0.1,
        "decimals": 2,
        "help": "Extra downtime hours per week. Lost at the baseline output rate.",
    },
    "capex_amount": {
        "label": "Purchase amount ($)",
        "step": 1000.0,
        "decimals": 0,
        "help": "Capital cost of the equipment being delayed.",
    },
    "capex_annual_savings": {
        "label": "Expected annual savings ($/yr)",
        "step": 1000.0,
        "decimals": 0,
        "help": "Savings the equipment returns per year once deployed.",
    },
    "capex_deployment_lead_weeks": {
        "label": "Deployment lead time (weeks)",
        "step": 1.0,
        "decimals": 0,
        "help": "Weeks from purchase until the equipment starts returning savings.",
    },
    "capex_cost_of_capital_pct": {
        "label": "Cost of capital (%/yr, optional)",
        "step": 0.5,
        "decimals": 1,
        "help": "Annual cost of capital used for the carrying-cost breakdown. Not included in the headline impact.",
    },
}


INPUT_GUIDANCE: dict[str, dict[str, Any]] = {
    "horizon_weeks": {"min": 1, "max": 52, "note": "Most operational decisions are reviewed within a quarter."},
    "runtime_hours_per_week": {"min": 8, "max": 168, "note": "A week has at most 168 hours."},
    "labor_rate_per_hour": {"min": 15.0, "max": 120.0, "note": "Typical fully burdened manufacturing labor cost."},
    "overhead_pct": {"min": 0.0, "max": 100.0, "note": "Overhead add-ons are usually quoted as a share of labor."},
    "contribution_margin_pct": {"min": 0.0, "max": 100.0, "note": "Contribution margin cannot exceed the selling price."},
    "ot_hours_per_week": {"min": 0.0, "max": 40.0, "note": "Sustained overtime above 20 hours per week drives fatigue."},
    "ot_premium_multiplier": {"min": 1.0, "max": 3.0, "note": "Time-and-a-half (1.5) and double time (2.0) are common."},
    "fatigue_productivity_delta_pct": {"min": -25.0, "max": 5.0, "note": "Fatigue usually reduces throughput."},
    "fatigue_scrap_delta_pp": {"min": 0.0, "max": 10.0, "note": "Scrap increases are typically a few percentage points."},
    "fatigue_downtime_delta_hours": {"min": 0.0, "max": 10.0, "note": "Extra downtime hours per week attributed to fatigue."},
    "capex_deployment_lead_weeks": {"min": 0, "max": 104, "note": "Lead time from purchase order to productive use."},
    "capex_cost_of_capital_pct": {"min": 0.0, "max": 25.0, "note": "Typical weighted cost of capital range."},
}

REQUIRED_FIELD_PROMPT_NAMES = {
    "horizon_weeks": "horizon",
    "runtime_hours_per_week": "runtime/week",
    "baseline_units_per_hour": "baseline units/hr",
    "labor_rate_per_hour": "labor $/hr",
}


def _fmt(v: float) -> str:
    if abs(v - round(v)) < 1e-9:
        return f"{int(round(v))}"
    return f"{v:.3f}".rstrip("0").rstrip(".")


def field_label(key: str) -> str:
    return INPUT_FIELDS.get(key, {}).get("label", key)


def help_with_guidance(key: str, base_help: str | None = None) -> str:
    base = base_help if base_help is not None else INPUT_FIELDS.get(key, {}).get("help", "")
    g = INPUT_GUIDANCE.get(key)
    if not g:
        return base
    return f"{base} Reasonable range: {_fmt(g['min'])} to {_fmt(g['max'])}. {g['note']}".strip()


def advisory_warnings(inputs: dict) -> list[str]:
    """Soft warnings for inputs outside the usual range. Unset fields are skipped."""
    warnings: list[str] = []
    for key, g in INPUT_GUIDANCE.items():
        if key not in inputs or not is_finite_number(inputs[key]):
            continue
        v = coerce_number(inputs[key])
        if v < g["min"] or v > g["max"]:
            warnings.append(
                f"{field_label(key)} = {_fmt(v)} is outside the usual range [{_fmt(g['min'])}, {_fmt(g['max'])}]."
            )
    return warnings


def missing_required_fields(inputs: dict) -> list[str]:
    return [key for key in REQUIRED_INPUT_KEYS if coerce_number(inputs.get(key)) <= 0]


def missing_required_message(inputs: dict) -> str:
    if not missing_required_fields(inputs):
        return ""
    names = [REQUIRED_FIELD_PROMPT_NAMES[key] for key in REQUIRED_INPUT_KEYS]
    return f"Please enter: {', '.join(names[:-1])}, and {names[-1]}."
