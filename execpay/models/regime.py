"""Tax regime configuration models.

A regime bundles every statutory constant the engine needs for one tax year:
bracket tables, flat rates, and social-insurance rates and caps. Regimes are
immutable so a calculation can never alter the configuration it was given.
"""

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BracketTier(BaseModel):
    """One tier of a bracket table.

    ``cap`` is the inclusive upper bound of the tier; ``None`` marks the
    unbounded final tier. A tier's amount for a lookup value is
    ``value * rate + adjustment``, so a statutory "30% + 80,000" is stored as
    ``rate=0.3, adjustment=80000`` and "23% - 636,000" as
    ``rate=0.23, adjustment=-636000``. Flat tiers use ``rate=0``.
    """

    model_config = ConfigDict(frozen=True)

    cap: int | None
    rate: Decimal = Decimal("0")
    adjustment: int = 0

    def amount(self, value: int) -> Decimal:
        return value * self.rate + self.adjustment

    def floored_amount(self, value: int) -> int:
        """Floor the rate product before applying the integer adjustment."""
        return math.floor(value * self.rate) + self.adjustment


def tier_table_problem(tiers: tuple[BracketTier, ...] | list[BracketTier]) -> str | None:
    """Describe what is wrong with a bracket table, or None if it is well formed."""
    if not tiers:
        return "table is empty"
    if tiers[-1].cap is not None:
        return "final tier must be unbounded"
    prev: int | None = None
    for i, tier in enumerate(tiers[:-1]):
        if tier.cap is None:
            return f"tier {i} is unbounded but is not the final tier"
        if prev is not None and tier.cap <= prev:
            return f"caps not ascending at tier {i}: {tier.cap} <= {prev}"
        prev = tier.cap
    return None


class SocialInsuranceRates(BaseModel):
    """Premium rates and standard remuneration caps.

    Rates are totals before the individual/employer split.
    """

    model_config = ConfigDict(frozen=True)

    health_rate: Decimal
    nursing_care_rate: Decimal
    pension_rate: Decimal
    employer_levy_rate: Decimal
    health_monthly_cap: int = Field(gt=0)
    pension_monthly_cap: int = Field(gt=0)
    health_bonus_annual_cap: int = Field(gt=0)
    pension_bonus_payment_cap: int = Field(gt=0)
    bonus_rounding_unit: int = Field(default=1000, gt=0)


class TaxRegime(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    name: str
    salary_income_deduction: tuple[BracketTier, ...]
    income_tax: tuple[BracketTier, ...]
    basic_deduction: tuple[BracketTier, ...]
    surtax_rate: Decimal
    resident_tax_rate: Decimal
    dependent_deduction: int = Field(ge=0)
    corporate_tax_rate: Decimal
    social_insurance: SocialInsuranceRates

    @field_validator("salary_income_deduction", "income_tax", "basic_deduction")
    @classmethod
    def _check_table(cls, tiers: tuple[BracketTier, ...]) -> tuple[BracketTier, ...]:
        problem = tier_table_problem(tiers)
        if problem is not None:
            raise ValueError(problem)
        return tiers
