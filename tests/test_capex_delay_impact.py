from __future__ import annotations

from copy import deepcopy

import pytest

from mdic.model import compute_capex_delay_impact


def test_lead_time_beyond_horizon_misses_nothing(capex_inputs):
    out = compute_capex_delay_impact(capex_inputs)

    assert out["missed_benefit_weeks"] == 0
    assert out["lost_savings_within_horizon"] == 0
    assert out["net_impact_per_week"] == 0
    assert out["total_impact"] == 0


def test_short_lead_time_loses_savings_within_horizon(capex_inputs):
    inputs = deepcopy(capex_inputs)
    inputs["capex_deployment_lead_weeks"] = 2

    out = compute_capex_delay_impact(inputs)

    assert out["savings_per_week"] == pytest.approx(769.23, abs=0.01)
    assert out["missed_benefit_weeks"] == 4
    assert out["lost_savings_within_horizon"] == pytest.approx(3076.92, abs=0.01)
    assert out["net_impact_per_week"] == pytest.approx(-512.82, abs=0.01)
    assert out["total_impact"] == pytest.approx(-3076.92, abs=0.01)


def test_negative_lead_time_is_not_clamped(capex_inputs):
    inputs = deepcopy(capex_inputs)
    inputs["capex_deployment_lead_weeks"] = -2

    out = compute_capex_delay_impact(inputs)

    assert out["missed_benefit_weeks"] == 8
    assert out["lost_savings_within_horizon"] == pytest.approx(6153.85, abs=0.01)
    assert out["net_impact_per_week"] == pytest.approx(-1025.64, abs=0.01)


def test_carrying_cost_is_reported_but_not_in_headline(capex_inputs):
    inputs = deepcopy(capex_inputs)
    inputs["capex_deployment_lead_weeks"] = 2

    out = compute_capex_delay_impact(inputs)

    assert out["carrying_cost_within_horizon"] == pytest.approx(100000 * 0.10 / 52 * 6)
    assert out["total_impact"] == pytest.approx(-out["lost_savings_within_horizon"])


def test_zero_horizon_gives_zero_weekly_impact(capex_inputs):
    inputs = deepcopy(capex_inputs)
    inputs["horizon_weeks"] = 0
    inputs["capex_deployment_lead_weeks"] = 0

    out = compute_capex_delay_impact(inputs)

    assert out["net_impact_per_week"] == 0
    assert out["total_impact"] == 0


def test_missing_cost_of_capital_means_no_carrying_cost(capex_inputs):
    inputs = deepcopy(capex_inputs)
    inputs["capex_cost_of_capital_pct"] = ""

    out = compute_capex_delay_impact(inputs)

    assert out["carrying_cost_within_horizon"] == 0


def test_echoes_inputs(capex_inputs):
    out = compute_capex_delay_impact(capex_inputs)

    assert out["capex_amount"] == 100000
    assert out["capex_annual_savings"] == 40000
    assert out["capex_deployment_lead_weeks"] == 8
    assert out["capex_cost_of_capital_pct"] == 10
    assert out["horizon_weeks"] == 6
