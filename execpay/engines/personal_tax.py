"""Personal income tax and resident tax engine.

Chain of computation for one year of executive compensation:
  1. Salary-income deduction (tiered by annual compensation)
  2. Total income = compensation - salary-income deduction
  3. Basic deduction (tiered by total income, phases out above 24M)
  4. Dependent and other deductions, social insurance deduction
  5. Progressive income tax plus the reconstruction surtax, floored
  6. Flat resident tax on the same taxable income, floored
"""

import math

from execpay.engines.brackets import find_tier
from execpay.models.regime import BracketTier, TaxRegime
from execpay.models.simulation import PersonalTaxResult


class PersonalTaxCalculator:
    """Computes taxable income and personal taxes for one compensation level."""

    def __init__(self, regime: TaxRegime) -> None:
        self.regime = regime

    def salary_income_deduction(self, annual_compensation: int) -> int:
        tier = find_tier(
            self.regime.salary_income_deduction, annual_compensation, "salary_income_deduction"
        )
        return tier.floored_amount(annual_compensation)

    def basic_deduction(self, total_income: int) -> int:
        tier = find_tier(self.regime.basic_deduction, total_income, "basic_deduction")
        return tier.floored_amount(total_income)

    def income_tax(self, taxable_income: int) -> tuple[int, BracketTier]:
        """Return (tax including surtax, matched bracket)."""
        tier = find_tier(self.regime.income_tax, taxable_income, "income_tax")
        if taxable_income <= 0:
            return 0, tier
        base_tax = tier.amount(taxable_income)
        return math.floor(base_tax * (1 + self.regime.surtax_rate)), tier

    def residence_tax(self, taxable_income: int) -> int:
        return math.floor(max(taxable_income, 0) * self.regime.resident_tax_rate)

    def compute(
        self,
        monthly_compensation: int,
        annual_bonus: int,
        individual_social_insurance: int,
        dependents: int = 0,
        other_deductions: int = 0,
    ) -> PersonalTaxResult:
        annual_compensation = monthly_compensation * 12 + annual_bonus

        salary_deduction = self.salary_income_deduction(annual_compensation)
        total_income = max(annual_compensation - salary_deduction, 0)

        basic = self.basic_deduction(total_income)
        dependent = dependents * self.regime.dependent_deduction

        taxable_income = max(
            total_income - individual_social_insurance - basic - dependent - other_deductions,
            0,
        )

        income_tax, tier = self.income_tax(taxable_income)
        residence_tax = self.residence_tax(taxable_income)

        take_home = annual_compensation - individual_social_insurance - (income_tax + residence_tax)

        return PersonalTaxResult(
            annual_compensation=annual_compensation,
            salary_income_deduction=salary_deduction,
            total_income=total_income,
            basic_deduction=basic,
            dependent_deduction=dependent,
            other_deductions=other_deductions,
            taxable_income=taxable_income,
            income_tax_rate=tier.rate,
            income_tax_deduction=-tier.adjustment,
            income_tax=income_tax,
            residence_tax=residence_tax,
            individual_take_home_pay=take_home,
        )
