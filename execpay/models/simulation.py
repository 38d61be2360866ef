"""Simulation input, intermediate, and result models.

All monetary amounts are integer yen.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from execpay.models.enums import AgeCategory


class SimulationInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    company_profit_before_compensation: int
    base_monthly_compensation: int
    annual_bonus: int = Field(default=0, ge=0)
    age: int = Field(default=40, ge=0)
    dependents: int = Field(default=0, ge=0)
    increment_amount: int = 100_000
    other_deductions: int = Field(default=0, ge=0)

    @property
    def age_category(self) -> AgeCategory:
        return AgeCategory.from_age(self.age)


class ContributionShare(BaseModel):
    """Premium split for one payment basis (monthly pay or the annual bonus)."""

    model_config = ConfigDict(frozen=True)

    individual: int
    company: int
    health_base: int
    pension_base: int


class PersonalTaxResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    annual_compensation: int
    salary_income_deduction: int
    total_income: int
    basic_deduction: int
    dependent_deduction: int
    other_deductions: int
    taxable_income: int
    income_tax_rate: Decimal
    income_tax_deduction: int
    income_tax: int
    residence_tax: int
    individual_take_home_pay: int

    @property
    def total_taxes(self) -> int:
        return self.income_tax + self.residence_tax


class CorporateTaxResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_company_cost: int
    company_profit_after_compensation: int
    corporate_tax: int
    company_net_profit: int


class SimulationResultRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Compensation
    monthly_compensation: int
    annual_bonus: int
    annual_compensation: int
    # Social insurance
    monthly_health_base: int
    monthly_pension_base: int
    bonus_health_base: int
    bonus_pension_base: int
    employer_levy: int
    individual_social_insurance: int
    company_social_insurance: int
    # Individual
    salary_income_deduction: int
    total_income: int
    basic_deduction: int
    dependent_deduction: int
    other_deductions: int
    taxable_income: int
    income_tax_rate: Decimal
    income_tax_deduction: int
    income_tax: int
    residence_tax: int
    total_individual_taxes: int
    individual_take_home_pay: int
    # Company
    total_company_cost: int
    company_profit_after_compensation: int
    corporate_tax: int
    company_net_profit: int
    # Combined
    total_cash_remaining: int

    @property
    def total_taxes(self) -> int:
        """Individual income and resident tax plus corporate tax."""
        return self.total_individual_taxes + self.corporate_tax

    @property
    def total_social_insurance(self) -> int:
        return self.individual_social_insurance + self.company_social_insurance
