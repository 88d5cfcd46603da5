"""Decision registry and dispatch to the impact formulas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from mdic.model import compute_capex_delay_impact, compute_overtime_impact, is_ready
from mdic.schema import CAPEX_INPUT_KEYS, OVERTIME_INPUT_KEYS, coerce_inputs


STATUS_READY = "ready"
STATUS_MISSING_INPUTS = "missing_inputs"
STATUS_NOT_IMPLEMENTED = "not_implemented"


@dataclass(frozen=True)
class DecisionType:
    """A selectable decision. ``formula`` is None for decisions that are listed but not yet modelled."""

    id: str
    label: str
    formula: Callable[[dict], dict[str, float]] | None = None
    input_keys: tuple[str, ...] = ()

    @property
    def implemented(self) -> bool:
        return self.formula is not None


@dataclass
class DecisionResult:
    decision_id: str
    label: str
    status: str
    ready: bool
    values: dict[str, float] | None = field(default=None)

    @property
    def has_result(self) -> bool:
        return self.values is not None


DECISIONS: tuple[DecisionType, ...] = (
    DecisionType("overtime", "Add Overtime", compute_overtime_impact, OVERTIME_INPUT_KEYS),
    DecisionType("temp", "Add Temp Labor"),
    DecisionType("headcount", "Reduce Headcount"),
    DecisionType("deferpm", "Defer Preventive Maintenance"),
    DecisionType("rate", "Increase Production Rate"),
    DecisionType("capex", "Delay CAPEX Purchase", compute_capex_delay_impact, CAPEX_INPUT_KEYS),
)

DECISIONS_BY_ID = {d.id: d for d in DECISIONS}
DECISION_IDS = [d.id for d in DECISIONS]

DECISION_ALIASES = {
    "temp-labor": "temp",
    "reduce-headcount": "headcount",
    "defer-preventive-maintenance": "deferpm",
    "increase-rate": "rate",
    "delay-capex": "capex",
}


def normalize_decision_id(decision_id: str) -> str:
    key = str(decision_id).strip().lower()
    key = DECISION_ALIASES.get(key, key)
    if key not in DECISIONS_BY_ID:
        raise ValueError(f"Unknown decision: {decision_id}")
    return key


def get_decision(decision_id: str) -> DecisionType:
    return DECISIONS_BY_ID[normalize_decision_id(decision_id)]


def decision_label(decision_id: str) -> str:
    return get_decision(decision_id).label


def implemented_decision_ids() -> list[str]:
    return [d.id for d in DECISIONS if d.implemented]


def compute_all(inputs: dict) -> dict[str, dict[str, float]]:
    """Result records for every decision that has a formula."""
    values = coerce_inputs(inputs)
    return {d.id: d.formula(values) for d in DECISIONS if d.implemented}


def select_active_result(decision_id: str, results: dict[str, dict[str, float]]) -> dict[str, float] | None:
    """Return the record for the active decision, or None for decisions without a formula."""
    decision = get_decision(decision_id)
    if not decision.implemented:
        return None
    return results.get(decision.id)


def run_model(inputs: dict, decision_id: str) -> DecisionResult:
    decision = get_decision(decision_id)
    ready = is_ready(inputs)
    if not decision.implemented:
        return DecisionResult(decision.id, decision.label, STATUS_NOT_IMPLEMENTED, ready)
    if not ready:
        return DecisionResult(decision.id, decision.label, STATUS_MISSING_INPUTS, ready)
    values = decision.formula(coerce_inputs(inputs))
    return DecisionResult(decision.id, decision.label, STATUS_READY, ready, values)
