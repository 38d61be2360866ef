"""Compensation sweep driver.

Evaluates eleven candidate monthly compensation levels (base +/- up to five
increments) and assembles one result row per positive candidate.
"""

import logging

from execpay.engines.brackets import get_regime
from execpay.engines.contributions import ContributionCalculator
from execpay.engines.corporate_tax import CorporateTaxCalculator
from execpay.engines.personal_tax import PersonalTaxCalculator
from execpay.models.regime import TaxRegime
from execpay.models.simulation import SimulationInput, SimulationResultRow

logger = logging.getLogger(__name__)

SWEEP_STEPS = 5


class CompensationSimulator:
    """Runs the compensation sweep against a single tax regime."""

    def __init__(self, regime: TaxRegime) -> None:
        self.regime = regime
        self.contributions = ContributionCalculator(regime)
        self.personal = PersonalTaxCalculator(regime)
        self.corporate = CorporateTaxCalculator(regime)

    def candidates(self, sim_input: SimulationInput) -> list[int]:
        """Positive candidate monthly compensation levels, in sweep order."""
        levels = []
        for offset in range(-SWEEP_STEPS, SWEEP_STEPS + 1):
            level = sim_input.base_monthly_compensation + offset * sim_input.increment_amount
            if level <= 0:
                logger.debug("Skipping non-positive candidate %d (offset %d)", level, offset)
                continue
            levels.append(level)
        return levels

    def run(self, sim_input: SimulationInput) -> list[SimulationResultRow]:
        rows = [self.evaluate(sim_input, level) for level in self.candidates(sim_input)]
        logger.debug(
            "Simulated %d of %d candidates under regime %d",
            len(rows), 2 * SWEEP_STEPS + 1, self.regime.year,
        )
        return rows

    def evaluate(self, sim_input: SimulationInput, monthly_compensation: int) -> SimulationResultRow:
        """Compute the full row for one monthly compensation level."""
        age = sim_input.age
        bonus = sim_input.annual_bonus

        # --- Social insurance ---
        monthly = self.contributions.monthly_contribution(monthly_compensation, age)
        bonus_share = self.contributions.bonus_contribution(bonus, age)
        levy = self.contributions.employer_levy(monthly.pension_base, bonus_share.pension_base)
        individual_si = monthly.individual * 12 + bonus_share.individual
        company_si = monthly.company * 12 + bonus_share.company + levy

        # --- Individual ---
        personal = self.personal.compute(
            monthly_compensation=monthly_compensation,
            annual_bonus=bonus,
            individual_social_insurance=individual_si,
            dependents=sim_input.dependents,
            other_deductions=sim_input.other_deductions,
        )

        # --- Company ---
        corporate = self.corporate.compute(
            company_profit_before_compensation=sim_input.company_profit_before_compensation,
            annual_compensation=personal.annual_compensation,
            company_social_insurance=company_si,
        )

        return SimulationResultRow(
            monthly_compensation=monthly_compensation,
            annual_bonus=bonus,
            annual_compensation=personal.annual_compensation,
            monthly_health_base=monthly.health_base,
            monthly_pension_base=monthly.pension_base,
            bonus_health_base=bonus_share.health_base,
            bonus_pension_base=bonus_share.pension_base,
            employer_levy=levy,
            individual_social_insurance=individual_si,
            company_social_insurance=company_si,
            salary_income_deduction=personal.salary_income_deduction,
            total_income=personal.total_income,
            basic_deduction=personal.basic_deduction,
            dependent_deduction=personal.dependent_deduction,
            other_deductions=personal.other_deductions,
            taxable_income=personal.taxable_income,
            income_tax_rate=personal.income_tax_rate,
            income_tax_deduction=personal.income_tax_deduction,
            income_tax=personal.income_tax,
            residence_tax=personal.residence_tax,
            total_individual_taxes=personal.total_taxes,
            individual_take_home_pay=personal.individual_take_home_pay,
            total_company_cost=corporate.total_company_cost,
            company_profit_after_compensation=corporate.company_profit_after_compensation,
            corporate_tax=corporate.corporate_tax,
            company_net_profit=corporate.company_net_profit,
            total_cash_remaining=personal.individual_take_home_pay + corporate.company_net_profit,
        )


def run_simulation(
    sim_input: SimulationInput, regime: TaxRegime | None = None
) -> list[SimulationResultRow]:
    """Run the compensation sweep; uses the default bundled regime when none is given."""
    return CompensationSimulator(regime or get_regime()).run(sim_input)
