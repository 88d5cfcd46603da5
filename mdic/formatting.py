"""Number coercion and display formatting helpers."""

from __future__ import annotations

import math
from typing import Any


CURRENCY_CODE = "USD"
CURRENCY_SYMBOL = "$"


def coerce_number(value: Any, fallback: float = 0.0) -> float:
    """Return ``value`` as a finite float, or ``fallback`` when it is unset or invalid.

    Empty strings and ``None`` are the "still typing" state of a numeric field
    and resolve to the fallback, as do NaN, infinities and unparseable text.
    Only plain numeric text parses: "1,200" and "$35" are not numbers.
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        txt = value.strip()
        if txt == "" or "_" in txt:
            return fallback
        try:
            value = float(txt)
        except ValueError:
            return fallback
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(num):
        return fallback
    return num


def is_finite_number(value: Any) -> bool:
    sentinel = object()
    return coerce_number(value, fallback=sentinel) is not sentinel


def format_money(amount: Any) -> str:
    v = coerce_number(amount, fallback=0.0)
    if v < 0 and round(v, 2) != 0:
        return f"-{CURRENCY_SYMBOL}{abs(v):,.2f}"
    return f"{CURRENCY_SYMBOL}{abs(v):,.2f}"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_units(value: Any) -> str:
    return f"{round_half_up(coerce_number(value)):,}"


def decision_summary(net_impact_per_week: Any) -> str:
    net = coerce_number(net_impact_per_week)
    if net >= 0:
        return f"This decision is estimated to improve results by {format_money(net)} per week."
    return f"This decision is estimated to cost {format_money(abs(net))} per week."
