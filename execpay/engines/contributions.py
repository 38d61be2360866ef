"""Social-insurance contribution engine.

Health insurance (with the nursing-care increment for ages 40-64) and
employees' pension are computed on capped standard remuneration. The total
premium is split in half between individual and company, each half rounded
independently, so the two shares may differ from the unrounded total by one
yen. The child and childcare support levy is charged to the company only.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from execpay.models.enums import AgeCategory
from execpay.models.regime import TaxRegime
from execpay.models.simulation import ContributionShare


class ContributionCalculator:
    """Computes capped premium bases and the individual/company split."""

    def __init__(self, regime: TaxRegime) -> None:
        self.rates = regime.social_insurance

    def health_rate(self, age: int) -> Decimal:
        rate = self.rates.health_rate
        if AgeCategory.from_age(age).pays_nursing_care:
            rate += self.rates.nursing_care_rate
        return rate

    def monthly_contribution(self, monthly_compensation: int, age: int) -> ContributionShare:
        """Premiums on one month of compensation."""
        health_base = min(monthly_compensation, self.rates.health_monthly_cap)
        pension_base = min(monthly_compensation, self.rates.pension_monthly_cap)
        return self._split(health_base, pension_base, age)

    def bonus_contribution(self, annual_bonus: int, age: int) -> ContributionShare:
        """Premiums on the annual bonus, paid as a single payment.

        The standard bonus amount drops fractions below 1,000 yen. Health is
        capped by the cumulative annual limit, pension by the per-payment limit;
        neither cap considers the monthly base.
        """
        if annual_bonus <= 0:
            return ContributionShare(individual=0, company=0, health_base=0, pension_base=0)
        unit = self.rates.bonus_rounding_unit
        bonus_base = annual_bonus // unit * unit
        health_base = min(bonus_base, self.rates.health_bonus_annual_cap)
        pension_base = min(bonus_base, self.rates.pension_bonus_payment_cap)
        return self._split(health_base, pension_base, age)

    def employer_levy(self, monthly_pension_base: int, bonus_pension_base: int) -> int:
        """Company-only levy on the year's total pension base."""
        annual_pension_base = monthly_pension_base * 12 + bonus_pension_base
        return math.floor(annual_pension_base * self.rates.employer_levy_rate)

    def _split(self, health_base: int, pension_base: int, age: int) -> ContributionShare:
        total = health_base * self.health_rate(age) + pension_base * self.rates.pension_rate
        half = total / 2
        individual = int(half.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        company = int(half.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return ContributionShare(
            individual=individual,
            company=company,
            health_base=health_base,
            pension_base=pension_base,
        )
