"""Corporate tax engine."""

import math

from execpay.models.regime import TaxRegime
from execpay.models.simulation import CorporateTaxResult


class CorporateTaxCalculator:
    """Applies the flat corporate rate to profit left after owner pay."""

    def __init__(self, regime: TaxRegime) -> None:
        self.rate = regime.corporate_tax_rate

    def compute(
        self,
        company_profit_before_compensation: int,
        annual_compensation: int,
        company_social_insurance: int,
    ) -> CorporateTaxResult:
        """No tax is charged on a loss; the loss itself is carried through unclamped."""
        total_cost = annual_compensation + company_social_insurance
        profit_after = company_profit_before_compensation - total_cost
        corporate_tax = math.floor(max(profit_after, 0) * self.rate)
        return CorporateTaxResult(
            total_company_cost=total_cost,
            company_profit_after_compensation=profit_after,
            corporate_tax=corporate_tax,
            company_net_profit=profit_after - corporate_tax,
        )
