from __future__ import annotations

import math

import numpy as np
import pytest

from mdic.formatting import coerce_number, decision_summary, format_money, format_units, is_finite_number


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "abc", "1,200", "$35", "15%", "1_000", "nan", "inf", math.nan, math.inf, -math.inf, True, [], {}],
)
def test_coerce_returns_fallback_for_unset_or_non_finite(value):
    assert coerce_number(value) == 0.0
    assert coerce_number(value, fallback=7.5) == 7.5


@pytest.mark.parametrize("value", [0, 1, -3, 0.5, -0.2, 1e12, np.float64(2.25), np.int64(4)])
def test_coerce_keeps_finite_numbers(value):
    assert coerce_number(value) == value


def test_coerce_parses_numeric_text():
    assert coerce_number("12.5") == 12.5
    assert coerce_number(" 7 ") == 7.0
    assert coerce_number("-1e3") == -1000.0


def test_coerce_never_raises_on_overflow():
    assert coerce_number(10**400, fallback=-1.0) == -1.0


def test_is_finite_number():
    assert is_finite_number(0)
    assert not is_finite_number("")
    assert not is_finite_number(None)


def test_format_money_groups_and_signs():
    assert format_money(1234.5) == "$1,234.50"
    assert format_money(-525) == "-$525.00"
    assert format_money(0) == "$0.00"
    assert format_money(-0.0) == "$0.00"


@pytest.mark.parametrize("value", [None, "", math.nan, math.inf, "not a number"])
def test_format_money_never_fails(value):
    assert format_money(value) == "$0.00"


def test_format_units_rounds_half_up_with_grouping():
    assert format_units(-80) == "-80"
    assert format_units(1234.5) == "1,235"
    assert format_units(-0.4) == "0"
    assert format_units(None) == "0"


def test_decision_summary_wording():
    assert decision_summary(120) == "This decision is estimated to improve results by $120.00 per week."
    assert decision_summary(0) == "This decision is estimated to improve results by $0.00 per week."
    assert decision_summary(-525) == "This decision is estimated to cost $525.00 per week."
