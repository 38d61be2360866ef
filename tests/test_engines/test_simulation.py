"""Tests for the compensation sweep driver and row selection.

Scenario A values are hand-computed with the 2024 regime; see
tests/test_engines/test_personal_tax.py and test_contributions.py for the
individual steps.
"""

import pytest

from execpay.engines.brackets import get_regime
from execpay.engines.selection import find_base_row, find_optimal_row
from execpay.engines.simulation import CompensationSimulator, run_simulation
from execpay.models.simulation import SimulationInput


def _input(**overrides) -> SimulationInput:
    values = dict(
        company_profit_before_compensation=20_000_000,
        base_monthly_compensation=1_000_000,
        annual_bonus=0,
        age=40,
        dependents=0,
        increment_amount=100_000,
    )
    values.update(overrides)
    return SimulationInput(**values)


class TestScenarioA:
    @pytest.fixture
    def row(self, scenario_a, regime_2024):
        rows = run_simulation(scenario_a, regime_2024)
        return find_base_row(rows, 1_000_000)

    def test_eleven_rows(self, scenario_a, regime_2024):
        rows = run_simulation(scenario_a, regime_2024)
        assert [r.monthly_compensation for r in rows] == list(range(500_000, 1_500_001, 100_000))

    def test_social_insurance(self, row):
        assert row.monthly_health_base == 1_000_000
        assert row.monthly_pension_base == 650_000
        assert row.employer_levy == 28_080
        assert row.individual_social_insurance == 1_421_700
        assert row.company_social_insurance == 1_449_780

    def test_individual(self, row):
        assert row.annual_compensation == 12_000_000
        assert row.taxable_income == 8_148_300
        assert row.income_tax == 1_264_109
        assert row.residence_tax == 814_830
        assert row.total_individual_taxes == 2_078_939
        assert row.individual_take_home_pay == 8_499_361

    def test_company(self, row):
        assert row.total_company_cost == 13_449_780
        assert row.company_profit_after_compensation == 6_550_220
        assert row.corporate_tax == 1_965_066
        assert row.company_net_profit == 4_585_154

    def test_combined(self, row):
        assert row.total_cash_remaining == 13_084_515
        assert row.total_taxes == 4_044_005
        assert row.total_social_insurance == 2_871_480

    def test_default_regime_used(self, scenario_a):
        assert run_simulation(scenario_a) == run_simulation(scenario_a, get_regime())


class TestSweep:
    def test_non_positive_candidates_skipped(self, regime_2024):
        rows = run_simulation(
            _input(base_monthly_compensation=100_000, increment_amount=100_000), regime_2024
        )
        assert [r.monthly_compensation for r in rows] == [
            100_000, 200_000, 300_000, 400_000, 500_000, 600_000,
        ]

    def test_large_increment(self, regime_2024):
        rows = run_simulation(
            _input(base_monthly_compensation=100_000, increment_amount=1_000_000), regime_2024
        )
        assert rows[0].monthly_compensation == 100_000
        assert len(rows) == 6

    def test_empty_sweep(self, regime_2024):
        rows = run_simulation(
            _input(base_monthly_compensation=0, increment_amount=0), regime_2024
        )
        assert rows == []
        assert find_optimal_row(rows) is None
        assert find_base_row(rows, 0) is None

    def test_strictly_ascending(self, regime_2024):
        for base, step in [(300_000, 50_000), (1_000_000, 250_000), (200_000, 75_000)]:
            rows = run_simulation(
                _input(base_monthly_compensation=base, increment_amount=step), regime_2024
            )
            levels = [r.monthly_compensation for r in rows]
            assert len(levels) <= 11
            assert levels == sorted(set(levels))

    def test_idempotent(self, scenario_a, regime_2024):
        assert run_simulation(scenario_a, regime_2024) == run_simulation(scenario_a, regime_2024)

    def test_capped_bases_equal(self, regime_2024):
        rows = run_simulation(
            _input(base_monthly_compensation=2_000_000, increment_amount=100_000), regime_2024
        )
        capped = [r for r in rows if r.monthly_compensation >= 1_390_000]
        assert len(capped) > 1
        assert {(r.monthly_health_base, r.monthly_pension_base) for r in capped} == {
            (1_390_000, 650_000)
        }
        assert len({r.individual_social_insurance for r in capped}) == 1

    def test_zero_taxable_rows(self, regime_2024):
        rows = run_simulation(
            _input(base_monthly_compensation=50_000, increment_amount=10_000), regime_2024
        )
        zero = [r for r in rows if r.taxable_income == 0]
        assert zero
        for r in zero:
            assert r.income_tax == 0
            assert r.residence_tax == 0

    def test_loss_making_company(self, regime_2024):
        rows = run_simulation(_input(company_profit_before_compensation=1_000_000), regime_2024)
        for r in rows:
            assert r.company_profit_after_compensation <= 0
            assert r.corporate_tax == 0
            assert r.company_net_profit == r.company_profit_after_compensation


class TestBonus:
    def test_bonus_pension_base_capped_per_payment(self, regime_2024):
        sim = CompensationSimulator(regime_2024)
        row = sim.evaluate(_input(base_monthly_compensation=800_000, annual_bonus=3_000_000), 800_000)
        assert row.monthly_pension_base == 650_000
        assert row.bonus_pension_base == 1_500_000
        assert row.bonus_health_base == 3_000_000
        assert row.employer_levy == 33_480
        assert row.individual_social_insurance == 1_280_100 + 314_250
        assert row.company_social_insurance == 1_280_100 + 314_250 + 33_480
        assert row.annual_compensation == 12_600_000

    def test_bonus_echoed_on_every_row(self, regime_2024):
        rows = run_simulation(_input(annual_bonus=1_000_000), regime_2024)
        assert {r.annual_bonus for r in rows} == {1_000_000}


class TestSelection:
    def test_optimal_minimises_total_taxes(self, scenario_a, regime_2024):
        rows = run_simulation(scenario_a, regime_2024)
        optimal = find_optimal_row(rows)
        assert optimal.total_taxes == min(r.total_taxes for r in rows)

    def test_first_minimum_wins_ties(self, scenario_a, regime_2024):
        rows = run_simulation(scenario_a, regime_2024)
        lowest = min(r.total_taxes for r in rows)
        tied = [
            r.model_copy(update={"total_individual_taxes": lowest, "corporate_tax": 0})
            for r in rows
        ]
        assert find_optimal_row(tied) is tied[0]

    def test_base_row_absent_when_skipped(self, regime_2024):
        rows = run_simulation(
            _input(base_monthly_compensation=-100_000, increment_amount=100_000), regime_2024
        )
        assert [r.monthly_compensation for r in rows] == [100_000, 200_000, 300_000, 400_000]
        assert find_base_row(rows, -100_000) is None
