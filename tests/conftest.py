"""Shared test fixtures for execpay."""

import pytest

from execpay.engines.brackets import get_regime
from execpay.models.regime import TaxRegime
from execpay.models.simulation import SimulationInput


@pytest.fixture
def regime_2024() -> TaxRegime:
    return get_regime(2024)


@pytest.fixture
def regime_2025() -> TaxRegime:
    return get_regime(2025)


@pytest.fixture
def scenario_a() -> SimulationInput:
    """Profitable company, owner aged 40, no bonus or dependents."""
    return SimulationInput(
        company_profit_before_compensation=20_000_000,
        base_monthly_compensation=1_000_000,
        annual_bonus=0,
        age=40,
        dependents=0,
        increment_amount=100_000,
    )
