"""Default assumptions for the decision impact calculator."""

from __future__ import annotations


DEFAULTS = {
    # Common inputs
    "horizon_weeks": 6,
    "runtime_hours_per_week": 40.0,
    "baseline_units_per_hour": 50.0,
    "labor_rate_per_hour": 35.0,
    "overhead_pct": 0.0,
    "sell_price_per_unit": 0.0,
    "contribution_margin_pct": 35.0,
    # Add Overtime
    "ot_hours_per_week": 10.0,
    "ot_premium_multiplier": 1.5,
    "fatigue_productivity_delta_pct": -3.0,
    "fatigue_scrap_delta_pp": 0.5,
    "fatigue_downtime_delta_hours": 0.2,
    # Delay CAPEX Purchase
    "capex_amount": 100000.0,
    "capex_annual_savings": 40000.0,
    "capex_deployment_lead_weeks": 8,
    "capex_cost_of_capital_pct": 10.0,
}

DEFAULT_DECISION = "overtime"
