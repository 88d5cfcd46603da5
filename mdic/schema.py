"""Input field groups and coercion of raw calculator inputs."""

from __future__ import annotations

from typing import Any

from mdic.formatting import coerce_number, is_finite_number


COMMON_INPUT_KEYS = (
    "horizon_weeks",
    "runtime_hours_per_week",
    "baseline_units_per_hour",
    "labor_rate_per_hour",
    "overhead_pct",
    "sell_price_per_unit",
    "contribution_margin_pct",
)

OVERTIME_INPUT_KEYS = (
    "ot_hours_per_week",
    "ot_premium_multiplier",
    "fatigue_productivity_delta_pct",
    "fatigue_scrap_delta_pp",
    "fatigue_downtime_delta_hours",
)

CAPEX_INPUT_KEYS = (
    "capex_amount",
    "capex_annual_savings",
    "capex_deployment_lead_weeks",
    "capex_cost_of_capital_pct",
)

INPUT_KEYS = COMMON_INPUT_KEYS + OVERTIME_INPUT_KEYS + CAPEX_INPUT_KEYS

# Inputs that must be strictly positive before any result is shown.
REQUIRED_INPUT_KEYS = (
    "horizon_weeks",
    "runtime_hours_per_week",
    "baseline_units_per_hour",
    "labor_rate_per_hour",
)


def coerce_inputs(raw: dict[str, Any] | None, fallback: float = 0.0) -> dict[str, float]:
    """Return every known input as a finite float; missing or invalid entries become ``fallback``."""
    raw = raw or {}
    return {key: coerce_number(raw.get(key), fallback) for key in INPUT_KEYS}


def invalid_input_keys(raw: dict[str, Any] | None, keys: tuple[str, ...] = INPUT_KEYS) -> list[str]:
    """Keys whose current value is unset or not a finite number."""
    raw = raw or {}
    return [key for key in keys if not is_finite_number(raw.get(key))]

