"""Week-by-week view of a decision result over the horizon."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from mdic.decisions import DecisionResult


TIMELINE_BASE_COLUMNS = ["Week", "Week Weight", "Net Impact", "Cumulative Impact"]


def _week_weights(horizon_weeks: float) -> np.ndarray:
    # A fractional horizon ends with a partial week.
    n = max(int(math.ceil(horizon_weeks)), 0)
    starts = np.arange(n, dtype=float)
    return np.clip(horizon_weeks - starts, 0.0, 1.0)


def weekly_impact_frame(result: DecisionResult, horizon_weeks: float) -> pd.DataFrame:
    """Return one row per horizon week. Column totals match the headline figures."""
    if result is None or not result.has_result or horizon_weeks <= 0:
        return pd.DataFrame(columns=TIMELINE_BASE_COLUMNS)

    values = result.values
    weights = _week_weights(float(horizon_weeks))
    weeks = np.arange(1, len(weights) + 1)
    net = values["net_impact_per_week"] * weights

    df = pd.DataFrame({"Week": weeks, "Week Weight": weights, "Net Impact": net})
    df["Cumulative Impact"] = df["Net Impact"].cumsum()

    if result.decision_id == "overtime":
        df["OT Labor Cost"] = values["ot_labor_cost"] * weights
        df["Profit from Units"] = values["profit_from_units"] * weights
        df["Delta Good Units"] = values["delta_good_units"] * weights
    elif result.decision_id == "capex":
        lead = values["capex_deployment_lead_weeks"]
        week_start = weeks - 1.0
        week_end = np.minimum(weeks.astype(float), float(horizon_weeks))
        missed = np.clip(week_end - np.maximum(week_start, lead), 0.0, None)
        # A negative lead misses more weeks than the horizon holds; spread the excess evenly.
        excess = values["missed_benefit_weeks"] - float(missed.sum())
        if excess > 1e-12:
            missed = missed + excess * weights / float(weights.sum())
        df["Missed Benefit Weeks"] = missed
        df["Lost Savings"] = values["savings_per_week"] * missed
        df["Carrying Cost"] = values["capex_amount"] * values["cost_of_capital_per_week"] * weights
    return df
