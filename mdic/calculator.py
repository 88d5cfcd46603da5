"""Mutable calculator state with synchronous recompute on every change."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable

from mdic.decisions import DecisionResult, normalize_decision_id, run_model
from mdic.defaults import DEFAULT_DECISION, DEFAULTS
from mdic.schema import INPUT_KEYS


class CalculatorSession:
    """Holds the raw inputs and the active decision, and keeps ``result`` current.

    Raw values are stored exactly as entered so that an empty field stays
    distinct from zero; coercion only happens inside the formulas.
    """

    def __init__(self, inputs: dict[str, Any] | None = None, decision_id: str = DEFAULT_DECISION):
        self._inputs: dict[str, Any] = {key: deepcopy(DEFAULTS[key]) for key in INPUT_KEYS}
        self._decision_id = normalize_decision_id(decision_id)
        self._subscribers: list[Callable[[DecisionResult], None]] = []
        self.recompute_count = 0
        if inputs:
            self._check_keys(inputs)
            self._inputs.update(inputs)
        self.result = self._recompute()

    @property
    def inputs(self) -> dict[str, Any]:
        return dict(self._inputs)

    @property
    def decision_id(self) -> str:
        return self._decision_id

    def _check_keys(self, values: dict[str, Any]) -> None:
        unknown = [k for k in values if k not in self._inputs]
        if unknown:
            raise KeyError(f"Unknown input(s): {', '.join(sorted(unknown))}")

    def _recompute(self) -> DecisionResult:
        self.recompute_count += 1
        return run_model(self._inputs, self._decision_id)

    def _commit(self) -> DecisionResult:
        self.result = self._recompute()
        for callback in list(self._subscribers):
            callback(self.result)
        return self.result

    def set_input(self, key: str, value: Any) -> DecisionResult:
        self._check_keys({key: value})
        self._inputs[key] = value
        return self._commit()

    def update(self, values: dict[str, Any]) -> DecisionResult:
        self._check_keys(values)
        self._inputs.update(values)
        return self._commit()

    def select_decision(self, decision_id: str) -> DecisionResult:
        self._decision_id = normalize_decision_id(decision_id)
        return self._commit()

    def subscribe(self, callback: Callable[[DecisionResult], None]) -> Callable[[], None]:
        """Register ``callback`` for every recompute. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe
