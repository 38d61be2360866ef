"""Tax regime configuration.

Salary-income deduction, income tax, and basic deduction tables plus the flat
rates and social-insurance caps, keyed by tax year. Never hardcode brackets in
computation functions; pass a TaxRegime instead.

Sources:
  - Salary-income deduction: NTA Tax Answer No.1410
  - Income tax rates: NTA Tax Answer No.2260
  - Basic deduction: NTA Tax Answer No.1199 (2025 figures per the 2025 reform)
  - Health / nursing-care rates: Japan Health Insurance Association, Tokyo branch
  - Employer levy: child and childcare support contribution (0.36%)
"""

import logging
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from execpay.exceptions import RegimeConfigError
from execpay.models.regime import (
    BracketTier,
    SocialInsuranceRates,
    TaxRegime,
    tier_table_problem,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared tables
# ---------------------------------------------------------------------------
INCOME_TAX_TIERS: tuple[BracketTier, ...] = (
    BracketTier(cap=1_949_999, rate=Decimal("0.05"), adjustment=0),
    BracketTier(cap=3_299_999, rate=Decimal("0.10"), adjustment=-97_500),
    BracketTier(cap=6_949_999, rate=Decimal("0.20"), adjustment=-427_500),
    BracketTier(cap=8_999_999, rate=Decimal("0.23"), adjustment=-636_000),
    BracketTier(cap=17_999_999, rate=Decimal("0.33"), adjustment=-1_536_000),
    BracketTier(cap=39_999_999, rate=Decimal("0.40"), adjustment=-2_796_000),
    BracketTier(cap=None, rate=Decimal("0.45"), adjustment=-4_796_000),
)

RECONSTRUCTION_SURTAX_RATE = Decimal("0.021")
RESIDENT_TAX_RATE = Decimal("0.10")
DEPENDENT_DEDUCTION = 380_000
CORPORATE_TAX_RATE = Decimal("0.30")

# ---------------------------------------------------------------------------
# 2024
# ---------------------------------------------------------------------------
SALARY_INCOME_DEDUCTION_2024: tuple[BracketTier, ...] = (
    BracketTier(cap=1_625_000, rate=Decimal("0"), adjustment=550_000),
    BracketTier(cap=1_800_000, rate=Decimal("0.4"), adjustment=-100_000),
    BracketTier(cap=3_600_000, rate=Decimal("0.3"), adjustment=80_000),
    BracketTier(cap=6_600_000, rate=Decimal("0.2"), adjustment=440_000),
    BracketTier(cap=8_500_000, rate=Decimal("0.1"), adjustment=1_100_000),
    BracketTier(cap=None, rate=Decimal("0"), adjustment=1_950_000),
)

BASIC_DEDUCTION_2024: tuple[BracketTier, ...] = (
    BracketTier(cap=24_000_000, adjustment=480_000),
    BracketTier(cap=24_500_000, adjustment=320_000),
    BracketTier(cap=25_000_000, adjustment=160_000),
    BracketTier(cap=None, adjustment=0),
)

SOCIAL_INSURANCE_2024 = SocialInsuranceRates(
    health_rate=Decimal("0.0998"),
    nursing_care_rate=Decimal("0.0182"),
    pension_rate=Decimal("0.183"),
    employer_levy_rate=Decimal("0.0036"),
    health_monthly_cap=1_390_000,
    pension_monthly_cap=650_000,
    health_bonus_annual_cap=5_730_000,
    pension_bonus_payment_cap=1_500_000,
)

# ---------------------------------------------------------------------------
# 2025: minimum salary-income deduction raised to 650,000 and the basic
# deduction extended with low-income tiers.
# ---------------------------------------------------------------------------
SALARY_INCOME_DEDUCTION_2025: tuple[BracketTier, ...] = (
    BracketTier(cap=1_900_000, rate=Decimal("0"), adjustment=650_000),
    BracketTier(cap=3_600_000, rate=Decimal("0.3"), adjustment=80_000),
    BracketTier(cap=6_600_000, rate=Decimal("0.2"), adjustment=440_000),
    BracketTier(cap=8_500_000, rate=Decimal("0.1"), adjustment=1_100_000),
    BracketTier(cap=None, rate=Decimal("0"), adjustment=1_950_000),
)

BASIC_DEDUCTION_2025: tuple[BracketTier, ...] = (
    BracketTier(cap=1_320_000, adjustment=950_000),
    BracketTier(cap=3_360_000, adjustment=880_000),
    BracketTier(cap=4_890_000, adjustment=680_000),
    BracketTier(cap=6_550_000, adjustment=630_000),
    BracketTier(cap=23_500_000, adjustment=580_000),
    BracketTier(cap=24_000_000, adjustment=480_000),
    BracketTier(cap=24_500_000, adjustment=320_000),
    BracketTier(cap=25_000_000, adjustment=160_000),
    BracketTier(cap=None, adjustment=0),
)

SOCIAL_INSURANCE_2025 = SocialInsuranceRates(
    health_rate=Decimal("0.0991"),
    nursing_care_rate=Decimal("0.0159"),
    pension_rate=Decimal("0.183"),
    employer_levy_rate=Decimal("0.0036"),
    health_monthly_cap=1_390_000,
    pension_monthly_cap=650_000,
    health_bonus_annual_cap=5_730_000,
    pension_bonus_payment_cap=1_500_000,
)

REGIMES: dict[int, TaxRegime] = {
    2024: TaxRegime(
        year=2024,
        name="2024 (Tokyo, Kyokai Kenpo)",
        salary_income_deduction=SALARY_INCOME_DEDUCTION_2024,
        income_tax=INCOME_TAX_TIERS,
        basic_deduction=BASIC_DEDUCTION_2024,
        surtax_rate=RECONSTRUCTION_SURTAX_RATE,
        resident_tax_rate=RESIDENT_TAX_RATE,
        dependent_deduction=DEPENDENT_DEDUCTION,
        corporate_tax_rate=CORPORATE_TAX_RATE,
        social_insurance=SOCIAL_INSURANCE_2024,
    ),
    2025: TaxRegime(
        year=2025,
        name="2025 (Tokyo, Kyokai Kenpo)",
        salary_income_deduction=SALARY_INCOME_DEDUCTION_2025,
        income_tax=INCOME_TAX_TIERS,
        basic_deduction=BASIC_DEDUCTION_2025,
        surtax_rate=RECONSTRUCTION_SURTAX_RATE,
        resident_tax_rate=RESIDENT_TAX_RATE,
        dependent_deduction=DEPENDENT_DEDUCTION,
        corporate_tax_rate=CORPORATE_TAX_RATE,
        social_insurance=SOCIAL_INSURANCE_2025,
    ),
}

DEFAULT_REGIME_YEAR = 2024


def get_regime(year: int = DEFAULT_REGIME_YEAR) -> TaxRegime:
    regime = REGIMES.get(year)
    if regime is None:
        available = ", ".join(str(y) for y in sorted(REGIMES))
        raise RegimeConfigError(str(year), f"no bundled regime (available: {available})")
    return regime


def load_regime_file(path: Path) -> TaxRegime:
    """Load and validate a TaxRegime from a JSON file."""
    logger.debug("Loading tax regime from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RegimeConfigError(str(path), f"cannot read file ({exc})") from exc
    try:
        regime = TaxRegime.model_validate_json(text)
    except ValidationError as exc:
        raise RegimeConfigError(str(path), str(exc)) from exc
    logger.info("Loaded tax regime %s (%d) from %s", regime.name, regime.year, path)
    return regime


def find_tier(tiers: tuple[BracketTier, ...], value: int, table: str = "bracket table") -> BracketTier:
    """Return the first tier whose cap is at or above ``value``.

    Raises RegimeConfigError if the table is malformed.
    """
    problem = tier_table_problem(tiers)
    if problem is not None:
        raise RegimeConfigError(table, problem)
    for tier in tiers:
        if tier.cap is None or value <= tier.cap:
            return tier
    # unreachable for a well-formed table: the final tier is unbounded
    raise RegimeConfigError(table, f"no tier matches {value}")
