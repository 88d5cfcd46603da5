import json
from pathlib import Path

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from mdic.calculator import CalculatorSession
from mdic.decisions import DECISION_IDS, STATUS_NOT_IMPLEMENTED, decision_label, get_decision
from mdic.defaults import DEFAULT_DECISION, DEFAULTS
from mdic.formatting import coerce_number, decision_summary, format_money, format_units
from mdic.goal_seek import solve_break_even
from mdic.input_metadata import (
    INPUT_FIELDS,
    advisory_warnings,
    field_label,
    help_with_guidance,
    missing_required_message,
)
from mdic.integrity_checks import run_integrity_checks
from mdic.runtime_logging import (
    append_runtime_event,
    clear_runtime_events,
    install_global_exception_logging,
    read_runtime_events,
    runtime_log_path,
)
from mdic.schema import CAPEX_INPUT_KEYS, COMMON_INPUT_KEYS, INPUT_KEYS, OVERTIME_INPUT_KEYS, invalid_input_keys
from mdic.sensitivity import TARGET_OPTIONS, available_sensitivity_drivers, run_one_way_sensitivity, tornado_frame
from mdic.timeline import weekly_impact_frame


install_global_exception_logging()


UI_DEFAULTS = {
    "decision": DEFAULT_DECISION,
    "runtime_log_limit": 100,
    "sensitivity_delta": 0.1,
    "sensitivity_target": "Net Impact / Week",
    "goal_input_key": "sell_price_per_unit",
    "goal_lower_bound": 0.0,
    "goal_upper_bound": 1000.0,
    "goal_target_value": 0.0,
    "goal_seek_result": None,
    "_input_warning_log_signature": "",
    "_integrity_log_signature": "",
}

UNIT_COLUMNS = {"Units", "Delta Good Units", "Missed Benefit Weeks", "Week", "Week Weight", "Input Value"}

REQUIRED_INPUTS_PROMPT = "Enter required inputs to see results."


def _number_field(container, key: str) -> None:
    meta = INPUT_FIELDS[key]
    container.number_input(
        meta["label"],
        value=None,
        step=float(meta["step"]),
        format=f"%.{int(meta['decimals'])}f",
        key=key,
        help=help_with_guidance(key),
    )


def _input_grid(keys: tuple[str, ...], columns: int = 4) -> None:
    cols = st.columns(columns)
    for idx, key in enumerate(keys):
        _number_field(cols[idx % columns], key)


def _inputs_from_state() -> dict:
    return {key: st.session_state.get(key) for key in INPUT_KEYS}


def _calculator() -> CalculatorSession:
    calc = st.session_state.get("calculator")
    if not isinstance(calc, CalculatorSession):
        calc = CalculatorSession()
        st.session_state["calculator"] = calc
    return calc


def _format_dataframe_for_display(df: pd.DataFrame) -> pd.DataFrame:
    if not isinstance(df, pd.DataFrame) or df.empty:
        return df
    out = df.copy()
    for col in out.columns:
        if not pd.api.types.is_numeric_dtype(out[col]):
            continue
        if col == "Week Weight":
            out[col] = out[col].map(lambda v: f"{float(v):.2f}")
        elif col in UNIT_COLUMNS:
            out[col] = out[col].map(lambda v: "" if pd.isna(v) else format_units(v))
        else:
            out[col] = out[col].map(lambda v: "" if pd.isna(v) else format_money(v))
    return out


def _overtime_breakdown(values: dict) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Line Item": "Performance delta (units)", "Value": format_units(values["perf_delta_units"])},
            {"Line Item": "Scrap delta (units)", "Value": format_units(values["scrap_delta_units"])},
            {"Line Item": "Downtime delta (units)", "Value": format_units(values["downtime_delta_units"])},
            {"Line Item": "Profit from unit delta (if price provided)", "Value": format_money(values["profit_from_units"])},
        ]
    )


def _capex_breakdown(values: dict) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Line Item": "Savings per week", "Value": format_money(values["savings_per_week"])},
            {"Line Item": "Missed benefit weeks", "Value": f"{values['missed_benefit_weeks']:,.1f}"},
            {"Line Item": "Lost savings within horizon", "Value": format_money(values["lost_savings_within_horizon"])},
            {
                "Line Item": "Carrying cost within horizon (not in headline)",
                "Value": format_money(values["carrying_cost_within_horizon"]),
            },
        ]
    )


def _log_once(signature_key: str, signature: str, level: str, event: str, message: str, context: dict) -> None:
    if st.session_state.get(signature_key) == signature:
        return
    st.session_state[signature_key] = signature
    append_runtime_event(level=level, event=event, message=message, context=context)


st.set_page_config(page_title="MDIC - Manufacturing Decision Impact Calculator", layout="wide")
st.title("MDIC — Manufacturing Decision Impact Calculator")
st.caption("Quantify the weekly + total business impact of common plant decisions (cost, throughput, and risk).")

for k, v in DEFAULTS.items():
    st.session_state.setdefault(k, float(v))
for k, v in UI_DEFAULTS.items():
    st.session_state.setdefault(k, v)

with st.sidebar:
    st.header("Runtime Diagnostics")
    log_path = Path(runtime_log_path())
    st.caption(f"Runtime log file: `{log_path}`")
    st.number_input(
        "Recent runtime log rows",
        min_value=10,
        max_value=2000,
        step=10,
        key="runtime_log_limit",
        help="Use this log to diagnose user-reported errors after deployment.",
    )
    runtime_events = read_runtime_events(limit=int(st.session_state["runtime_log_limit"]))
    if runtime_events:
        runtime_df = pd.DataFrame(runtime_events)
        if "context" in runtime_df.columns:
            runtime_df["context"] = runtime_df["context"].map(lambda c: json.dumps(c, default=str))
        st.dataframe(runtime_df.astype(str), width="stretch", hide_index=True)
    else:
        st.caption("No runtime events logged yet.")
    if log_path.exists():
        st.download_button(
            "Download Runtime Log (JSONL)",
            log_path.read_text(encoding="utf-8"),
            file_name="mdic_runtime_events.jsonl",
            mime="application/x-ndjson",
            help="Share this log file for post-release debugging.",
        )
        if st.button("Clear Runtime Log", help="Delete the runtime log file."):
            clear_runtime_events()
            st.rerun()

st.subheader("Decision type")
st.selectbox(
    "Decision type",
    options=DECISION_IDS,
    format_func=decision_label,
    key="decision",
    help="Choose the plant decision to evaluate.",
)
st.caption("Start with estimates. This tool is designed to be directionally correct and easy to explain to leadership.")

st.subheader("Common inputs")
_input_grid(COMMON_INPUT_KEYS)

inputs = _inputs_from_state()
required_message = missing_required_message(inputs)
if required_message:
    st.error(required_message)

decision = get_decision(st.session_state["decision"])
if decision.id == "overtime":
    st.subheader("Overtime inputs")
    _input_grid(OVERTIME_INPUT_KEYS, columns=5)
    st.caption("Tip: If you don't have good estimates, leave the fatigue deltas at 0 to view pure labor cost impact.")
elif decision.id == "capex":
    st.subheader("Delay CAPEX inputs")
    _input_grid(CAPEX_INPUT_KEYS)
    st.caption("Carrying cost is shown for reference. Headline impact counts lost savings only.")

inputs = _inputs_from_state()
visible_keys = COMMON_INPUT_KEYS + decision.input_keys
blank_keys = invalid_input_keys(inputs, visible_keys)
if blank_keys:
    st.caption(f"Empty fields are treated as 0: {', '.join(field_label(k) for k in blank_keys)}.")

calc = _calculator()
calc.update(inputs)
result = calc.select_decision(decision.id)
horizon_weeks = coerce_number(inputs["horizon_weeks"])

warnings = advisory_warnings(inputs)
if warnings:
    with st.expander(f"Input advisories ({len(warnings)})", expanded=False):
        for w in warnings:
            st.warning(w)
    _log_once(
        "_input_warning_log_signature",
        json.dumps(warnings),
        "WARNING",
        "input_advisories",
        "Inputs outside the usual range.",
        {"warnings": warnings},
    )

findings = run_integrity_checks(result, horizon_weeks)
if findings:
    st.error("Result integrity checks failed. See runtime diagnostics.")
    _log_once(
        "_integrity_log_signature",
        json.dumps(findings, default=str),
        "ERROR",
        "integrity_check_failed",
        "Decision result failed arithmetic identity checks.",
        {"decision": result.decision_id, "findings": findings},
    )

st.header("Results")
if not result.has_result:
    st.info(REQUIRED_INPUTS_PROMPT)
    if result.status == STATUS_NOT_IMPLEMENTED:
        st.caption(f"{result.label} does not have an impact model yet.")
else:
    values = result.values
    summary_tab, timeline_tab, sens_tab, goal_tab = st.tabs(["Summary", "Weekly Timeline", "Sensitivity", "Break-even"])

    with summary_tab:
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Net impact / week", format_money(values["net_impact_per_week"]))
        c2.metric("Total impact (horizon)", format_money(values["total_impact"]))
        if result.decision_id == "overtime":
            c3.metric("OT labor cost / week", format_money(values["ot_labor_cost"]))
            c4.metric("Δ Good units / week", format_units(values["delta_good_units"]))
            st.subheader("Breakdown (Overtime)")
            breakdown = _overtime_breakdown(values)
        else:
            c3.metric("Missed benefit weeks", f"{values['missed_benefit_weeks']:,.1f}")
            c4.metric("Carrying cost (horizon)", format_money(values["carrying_cost_within_horizon"]))
            st.subheader("Breakdown (Delay CAPEX)")
            breakdown = _capex_breakdown(values)
        st.dataframe(breakdown, width="stretch", hide_index=True)
        st.info(f"**Decision summary:** {decision_summary(values['net_impact_per_week'])}")
        st.download_button(
            "Download Breakdown CSV",
            pd.DataFrame([values]).to_csv(index=False),
            file_name=f"mdic_{result.decision_id}_result.csv",
            mime="text/csv",
            help="Raw result values for the active decision.",
        )

    with timeline_tab:
        timeline_df = weekly_impact_frame(result, horizon_weeks)
        if timeline_df.empty:
            st.caption("No weekly timeline for the current inputs.")
        else:
            fig = go.Figure()
            fig.add_trace(go.Bar(x=timeline_df["Week"], y=timeline_df["Net Impact"], name="Net Impact"))
            fig.add_trace(go.Scatter(x=timeline_df["Week"], y=timeline_df["Cumulative Impact"], name="Cumulative Impact"))
            fig.update_layout(title="Weekly and Cumulative Impact", xaxis_title="Week", yaxis_title="USD")
            st.plotly_chart(fig, width="stretch")
            st.dataframe(_format_dataframe_for_display(timeline_df), width="stretch", hide_index=True)
            st.download_button(
                "Download Weekly Timeline CSV",
                timeline_df.to_csv(index=False),
                file_name=f"mdic_{result.decision_id}_timeline.csv",
                mime="text/csv",
                help="Week-by-week impact over the horizon.",
            )

    with sens_tab:
        st.slider(
            "Sensitivity Delta Percent",
            min_value=0.01,
            max_value=0.5,
            step=0.01,
            key="sensitivity_delta",
            help="Each driver is flexed down and up by this share of its current value.",
        )
        st.selectbox(
            "Target metric",
            list(TARGET_OPTIONS.keys()),
            key="sensitivity_target",
            help="Result used to rank the drivers.",
        )
        sens_df = run_one_way_sensitivity(inputs, result.decision_id, float(st.session_state["sensitivity_delta"]))
        tornado = tornado_frame(sens_df, st.session_state["sensitivity_target"])
        if tornado.empty:
            st.caption("No sensitivity drivers for the current inputs.")
        else:
            tornado["Driver"] = tornado["Driver"].map(field_label)
            melt = tornado.melt(id_vars=["Driver"], value_vars=["Low", "High"], var_name="Case", value_name="Delta")
            st.plotly_chart(
                px.bar(
                    melt,
                    x="Delta",
                    y="Driver",
                    color="Case",
                    orientation="h",
                    barmode="overlay",
                    title=f"Sensitivity of {st.session_state['sensitivity_target']}",
                ),
                width="stretch",
            )
            st.dataframe(_format_dataframe_for_display(tornado), width="stretch", hide_index=True)

    with goal_tab:
        goal_keys = available_sensitivity_drivers(result.decision_id)
        if st.session_state["goal_input_key"] not in goal_keys:
            st.session_state["goal_input_key"] = goal_keys[0]
        st.selectbox(
            "Adjustable input",
            goal_keys,
            format_func=field_label,
            key="goal_input_key",
            help="Input that is varied to reach the target weekly impact.",
        )
        g1, g2, g3 = st.columns(3)
        g1.number_input("Search lower bound", step=1.0, key="goal_lower_bound", help="Smallest value to try.")
        g2.number_input("Search upper bound", step=1.0, key="goal_upper_bound", help="Largest value to try.")
        g3.number_input("Target net impact / week", step=100.0, key="goal_target_value", help="Weekly impact to reach. 0 is break-even.")
        if st.button("Solve Break-even", help="Bisection search for the input value that reaches the target."):
            goal = solve_break_even(
                inputs,
                result.decision_id,
                st.session_state["goal_input_key"],
                lower_bound=float(st.session_state["goal_lower_bound"]),
                upper_bound=float(st.session_state["goal_upper_bound"]),
                target=float(st.session_state["goal_target_value"]),
            )
            st.session_state["goal_seek_result"] = {
                "decision": result.decision_id,
                "input_key": st.session_state["goal_input_key"],
                "status": goal.status,
                "value": goal.value,
                "achieved": goal.achieved,
                "iterations": goal.iterations,
                "message": goal.message,
            }
            if goal.status != "solved":
                append_runtime_event(
                    level="INFO",
                    event="goal_seek_failed",
                    message=goal.message,
                    context=st.session_state["goal_seek_result"],
                )
        goal_result = st.session_state.get("goal_seek_result")
        if goal_result and goal_result.get("decision") == result.decision_id:
            if goal_result["status"] == "solved":
                st.success(
                    f"{field_label(goal_result['input_key'])} = {goal_result['value']:,.4g} "
                    f"gives {format_money(goal_result['achieved'])} per week."
                )
            else:
                st.warning(goal_result["message"])

st.caption("MfgCalc — A calculated approach to manufacturing.")
