from __future__ import annotations

from copy import deepcopy

import pytest

from mdic.defaults import DEFAULTS


@pytest.fixture
def base_inputs() -> dict:
    return deepcopy(DEFAULTS)


@pytest.fixture
def capex_inputs(base_inputs) -> dict:
    inputs = deepcopy(base_inputs)
    inputs.update(
        {
            "horizon_weeks": 6,
            "capex_amount": 100000,
            "capex_annual_savings": 40000,
            "capex_deployment_lead_weeks": 8,
            "capex_cost_of_capital_pct": 10,
        }
    )
    return inputs
