from __future__ import annotations

import pytest

from mdic.calculator import CalculatorSession
from mdic.decisions import STATUS_MISSING_INPUTS, STATUS_NOT_IMPLEMENTED, STATUS_READY


def test_new_session_starts_with_defaults_and_a_result():
    calc = CalculatorSession()
    assert calc.decision_id == "overtime"
    assert calc.result.status == STATUS_READY
    assert calc.result.values["total_impact"] == pytest.approx(-3150)


def test_every_input_change_recomputes():
    calc = CalculatorSession()
    calc.set_input("sell_price_per_unit", 10)
    assert calc.result.values["net_impact_per_week"] == pytest.approx(-805)

    calc.set_input("sell_price_per_unit", 0)
    assert calc.result.values["net_impact_per_week"] == pytest.approx(-525)


def test_empty_field_is_kept_raw_and_blocks_results():
    calc = CalculatorSession()
    calc.set_input("horizon_weeks", "")
    assert calc.inputs["horizon_weeks"] == ""
    assert calc.result.status == STATUS_MISSING_INPUTS
    assert calc.result.values is None

    calc.set_input("horizon_weeks", 4)
    assert calc.result.values["total_impact"] == pytest.approx(-2100)


def test_switching_decision_replaces_result():
    calc = CalculatorSession()
    calc.update({"capex_deployment_lead_weeks": 2})
    result = calc.select_decision("capex")
    assert result.decision_id == "capex"
    assert result.values["missed_benefit_weeks"] == 4

    assert calc.select_decision("temp").status == STATUS_NOT_IMPLEMENTED
    assert calc.result.values is None


def test_subscribers_are_notified_until_unsubscribed():
    calc = CalculatorSession()
    seen = []
    unsubscribe = calc.subscribe(seen.append)

    calc.set_input("ot_hours_per_week", 5)
    calc.select_decision("capex")
    assert [r.decision_id for r in seen] == ["overtime", "capex"]

    unsubscribe()
    calc.set_input("ot_hours_per_week", 6)
    assert len(seen) == 2


def test_unknown_keys_and_decisions_are_rejected():
    calc = CalculatorSession()
    with pytest.raises(KeyError):
        calc.set_input("not_an_input", 1)
    with pytest.raises(KeyError):
        CalculatorSession(inputs={"bogus": 1})
    with pytest.raises(ValueError):
        calc.select_decision("outsource")
