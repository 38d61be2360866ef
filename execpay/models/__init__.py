"""Data models for execpay."""

from execpay.models.enums import AgeCategory
from execpay.models.regime import BracketTier, SocialInsuranceRates, TaxRegime
from execpay.models.simulation import (
    ContributionShare,
    CorporateTaxResult,
    PersonalTaxResult,
    SimulationInput,
    SimulationResultRow,
)

__all__ = [
    "AgeCategory",
    "BracketTier",
    "ContributionShare",
    "CorporateTaxResult",
    "PersonalTaxResult",
    "SimulationInput",
    "SimulationResultRow",
    "SocialInsuranceRates",
    "TaxRegime",
]
