"""Bounded scalar goal-seek and break-even helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from mdic.decisions import get_decision, run_model
from mdic.schema import coerce_inputs


@dataclass
class GoalSeekResult:
    status: str
    value: float | None
    achieved: float | None
    iterations: int
    message: str


def solve_bounded_scalar(
    evaluator: Callable[[float], float],
    target: float,
    lower_bound: float,
    upper_bound: float,
    tol: float = 1e-6,
    max_iter: int = 80,
) -> GoalSeekResult:
    """Solve evaluator(x)=target for x within [lower_bound, upper_bound] via bisection."""
    lo = float(lower_bound)
    hi = float(upper_bound)
    if hi <= lo:
        return GoalSeekResult("failed", None, None, 0, "Upper bound must be greater than lower bound.")

    f_lo = float(evaluator(lo)) - target
    f_hi = float(evaluator(hi)) - target
    if not (math.isfinite(f_lo) and math.isfinite(f_hi)):
        return GoalSeekResult("failed", None, None, 0, "Result is undefined at a search bound. Narrow the search range.")
    if f_lo == 0:
        return GoalSeekResult("solved", lo, target, 0, "Solved at lower bound.")
    if f_hi == 0:
        return GoalSeekResult("solved", hi, target, 0, "Solved at upper bound.")
    if f_lo * f_hi > 0:
        return GoalSeekResult("failed", None, None, 0, "Target is not bracketed by the bounds. Widen the search range.")

    mid, y_mid = lo, f_lo + target
    for i in range(1, max_iter + 1):
        mid = 0.5 * (lo + hi)
        y_mid = float(evaluator(mid))
        f_mid = y_mid - target
        if not math.isfinite(f_mid):
            return GoalSeekResult("failed", None, None, i, "Result is undefined inside the search range.")
        if abs(f_mid) <= tol:
            return GoalSeekResult("solved", mid, y_mid, i, "Converged.")
        if f_lo * f_mid < 0:
            hi = mid
        else:
            lo = mid
            f_lo = f_mid

    return GoalSeekResult("failed", mid, y_mid, max_iter, "Reached max iterations before tolerance was met.")


def solve_break_even(
    inputs: dict,
    decision_id: str,
    input_key: str,
    lower_bound: float,
    upper_bound: float,
    target: float = 0.0,
    metric: str = "net_impact_per_week",
    tol: float = 1e-6,
) -> GoalSeekResult:
    """Find the value of ``input_key`` at which ``metric`` reaches ``target`` for the given decision."""
    decision = get_decision(decision_id)
    if not decision.implemented:
        return GoalSeekResult("failed", None, None, 0, f"{decision.label} has no impact formula yet.")
    base = coerce_inputs(inputs)
    if input_key not in base:
        raise KeyError(f"Unknown input: {input_key}")

    def _evaluate(x: float) -> float:
        scenario = dict(base)
        scenario[input_key] = x
        result = run_model(scenario, decision.id)
        if not result.has_result:
            return math.nan
        return float(result.values[metric])

    if not run_model(base, decision.id).has_result:
        return GoalSeekResult("failed", None, None, 0, "Required inputs are missing.")
    return solve_bounded_scalar(_evaluate, target, lower_bound, upper_bound, tol=tol)
