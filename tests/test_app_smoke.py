from __future__ import annotations

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import mdic.runtime_logging as runtime_logging

APP_PATH = str(Path(__file__).resolve().parents[1] / "app.py")


@pytest.fixture(autouse=True)
def _isolated_log_root(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", Path(tmp_path) / "runtime_events.jsonl")


def _run_app() -> AppTest:
    at = AppTest.from_file(APP_PATH)
    at.run(timeout=60)
    assert len(at.exception) == 0
    return at


def _metric_value(at: AppTest, label: str) -> str:
    matches = [m for m in at.metric if m.label == label]
    assert matches, f"Metric not found: {label}"
    return matches[0].value


def _info_texts(at: AppTest) -> list[str]:
    return [str(i.value) for i in at.info]


def test_app_initial_run_shows_overtime_results():
    at = _run_app()

    assert _metric_value(at, "Net impact / week") == "-$525.00"
    assert _metric_value(at, "Total impact (horizon)") == "-$3,150.00"
    assert _metric_value(at, "OT labor cost / week") == "$525.00"
    assert _metric_value(at, "Δ Good units / week") == "-80"
    assert any("cost $525.00 per week" in t for t in _info_texts(at))


def test_selling_price_changes_results():
    at = _run_app()
    at.number_input(key="sell_price_per_unit").set_value(10.0)
    at.run(timeout=60)

    assert len(at.exception) == 0
    assert _metric_value(at, "Net impact / week") == "-$805.00"
    assert _metric_value(at, "Total impact (horizon)") == "-$4,830.00"


def test_clearing_required_field_shows_prompt_instead_of_results():
    at = _run_app()
    at.number_input(key="horizon_weeks").set_value(None)
    at.run(timeout=60)

    assert len(at.exception) == 0
    assert len(at.metric) == 0
    assert any("Please enter" in str(e.value) for e in at.error)
    assert "Enter required inputs to see results." in _info_texts(at)


def test_delay_capex_decision_shows_lost_savings():
    at = _run_app()
    at.selectbox(key="decision").set_value("capex")
    at.run(timeout=60)
    at.number_input(key="capex_deployment_lead_weeks").set_value(2.0)
    at.run(timeout=60)

    assert len(at.exception) == 0
    assert _metric_value(at, "Net impact / week") == "-$512.82"
    assert _metric_value(at, "Total impact (horizon)") == "-$3,076.92"
    assert _metric_value(at, "Missed benefit weeks") == "4.0"


@pytest.mark.parametrize("decision_id", ["temp", "headcount", "deferpm", "rate"])
def test_inert_decisions_show_prompt(decision_id):
    at = _run_app()
    at.selectbox(key="decision").set_value(decision_id)
    at.run(timeout=60)

    assert len(at.exception) == 0
    assert len(at.metric) == 0
    assert "Enter required inputs to see results." in _info_texts(at)


def test_break_even_solver_flow():
    at = _run_app()
    at.number_input(key="fatigue_productivity_delta_pct").set_value(10.0)
    at.number_input(key="fatigue_scrap_delta_pp").set_value(0.0)
    at.number_input(key="fatigue_downtime_delta_hours").set_value(0.0)
    at.run(timeout=60)

    at.selectbox(key="goal_input_key").set_value("sell_price_per_unit")
    at.number_input(key="goal_upper_bound").set_value(100.0)
    at.run(timeout=60)
    [b for b in at.button if b.label == "Solve Break-even"][0].click()
    at.run(timeout=60)

    assert len(at.exception) == 0
    goal = at.session_state["goal_seek_result"]
    assert goal["status"] == "solved"
    assert goal["value"] == pytest.approx(7.5, abs=1e-4)
