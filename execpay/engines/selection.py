"""Row selection shared by the CLI table and the report generators."""

from execpay.models.simulation import SimulationResultRow


def find_optimal_row(rows: list[SimulationResultRow]) -> SimulationResultRow | None:
    """Row with the lowest individual plus corporate tax; the first one wins ties."""
    optimal: SimulationResultRow | None = None
    for row in rows:
        if optimal is None or row.total_taxes < optimal.total_taxes:
            optimal = row
    return optimal


def find_base_row(
    rows: list[SimulationResultRow], base_monthly_compensation: int
) -> SimulationResultRow | None:
    """Row at the base compensation level, or None if it was skipped."""
    for row in rows:
        if row.monthly_compensation == base_monthly_compensation:
            return row
    return None
