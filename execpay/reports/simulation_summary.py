"""Simulation summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from execpay.engines.selection import find_base_row, find_optimal_row
from execpay.models.regime import TaxRegime
from execpay.models.simulation import SimulationInput, SimulationResultRow
from execpay.reports.formatting import percent, yen

TEMPLATE_DIR = Path(__file__).parent / "templates"


class SimulationSummaryGenerator:
    """Generates a human-readable summary of one compensation sweep."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), trim_blocks=True)
        self.env.filters["yen"] = yen
        self.env.filters["percent"] = percent

    def render(
        self,
        sim_input: SimulationInput,
        rows: list[SimulationResultRow],
        regime: TaxRegime,
    ) -> str:
        """Render simulation summary report."""
        template = self.env.get_template("simulation_summary.txt")
        return template.render(
            inp=sim_input,
            rows=rows,
            regime=regime,
            optimal=find_optimal_row(rows),
            base=find_base_row(rows, sim_input.base_monthly_compensation),
        )
