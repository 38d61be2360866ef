"""Report generation for execpay."""

from execpay.reports.pdf_report import SimulationPdfExporter
from execpay.reports.simulation_summary import SimulationSummaryGenerator

__all__ = [
    "SimulationPdfExporter",
    "SimulationSummaryGenerator",
]
