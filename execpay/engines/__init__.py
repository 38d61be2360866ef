"""Tax and social-insurance computation engines."""

from execpay.engines.contributions import ContributionCalculator
from execpay.engines.corporate_tax import CorporateTaxCalculator
from execpay.engines.personal_tax import PersonalTaxCalculator
from execpay.engines.simulation import CompensationSimulator, run_simulation

__all__ = [
    "CompensationSimulator",
    "ContributionCalculator",
    "CorporateTaxCalculator",
    "PersonalTaxCalculator",
    "run_simulation",
]
