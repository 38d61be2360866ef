"""Tests for the text summary and PDF report generators.

Tests cover:
- Summary rendering with optimal and base sections
- Omitted sections when the base level was skipped or no rows exist
- PDF generation, text content checked with pdfplumber
"""

from datetime import date
from pathlib import Path

import pdfplumber
import pytest

from execpay.engines.simulation import run_simulation
from execpay.exceptions import ReportRenderError
from execpay.models.simulation import SimulationInput
from execpay.reports import SimulationPdfExporter, SimulationSummaryGenerator
from execpay.reports.formatting import percent, yen
from execpay.reports.pdf_report import AMBER, TEAL


def _pdf_text(path: Path) -> str:
    with pdfplumber.open(path) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


@pytest.fixture
def rows(scenario_a, regime_2024):
    return run_simulation(scenario_a, regime_2024)


@pytest.fixture
def empty_input() -> SimulationInput:
    return SimulationInput(
        company_profit_before_compensation=5_000_000,
        base_monthly_compensation=0,
        increment_amount=0,
    )


class TestFormatting:
    def test_yen(self):
        assert yen(1_234_567) == "1,234,567 JPY"
        assert yen(-5_000) == "-5,000 JPY"

    def test_percent(self, regime_2024):
        assert percent(regime_2024.income_tax[3].rate) == "23%"


class TestSimulationSummary:
    def test_sections(self, scenario_a, rows, regime_2024):
        content = SimulationSummaryGenerator().render(scenario_a, rows, regime_2024)
        assert "Executive Compensation Simulation" in content
        assert "OPTIMAL COMPENSATION" in content
        assert "BASE BREAKDOWN (monthly 1,000,000 JPY)" in content
        assert "8,148,300 JPY" in content
        assert "40 to 64" in content

    def test_optimal_marked_in_detail(self, scenario_a, rows, regime_2024):
        from execpay.engines.selection import find_optimal_row

        content = SimulationSummaryGenerator().render(scenario_a, rows, regime_2024)
        optimal = find_optimal_row(rows)
        marked = [line for line in content.splitlines() if line.startswith("* ")]
        assert len(marked) == 1
        assert yen(optimal.monthly_compensation) in marked[0]

    def test_no_rows(self, empty_input, regime_2024):
        content = SimulationSummaryGenerator().render(empty_input, [], regime_2024)
        assert "No candidate compensation levels were positive." in content
        assert "BASE BREAKDOWN" not in content


class TestPdfReport:
    def test_writes_pdf(self, tmp_path: Path, scenario_a, rows, regime_2024):
        path = SimulationPdfExporter().export(
            scenario_a, rows, regime_2024, tmp_path / "out" / "report.pdf",
            generated_on=date(2025, 4, 1),
        )
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

        text = _pdf_text(path)
        assert "Executive Compensation Simulation Report" in text
        assert "Generated 2025-04-01" in text
        assert "Optimal monthly compensation" in text
        assert "Base Breakdown" in text
        assert "Cash Remaining by Compensation Level" in text
        assert "Page 1 of" in text

    def test_empty_rows(self, tmp_path: Path, empty_input, regime_2024):
        path = SimulationPdfExporter().export(
            empty_input, [], regime_2024, tmp_path / "empty.pdf"
        )
        text = _pdf_text(path)
        assert "Optimal monthly compensation" not in text
        assert "No positive compensation levels" in text

    def test_chart_shows_all_cash_series(self, tmp_path: Path, scenario_a, rows, regime_2024):
        path = SimulationPdfExporter().export(scenario_a, rows, regime_2024, tmp_path / "chart.pdf")
        text = _pdf_text(path)
        assert "Total cash" in text

        def filled_with(color):
            expected = tuple(c / 255 for c in color)
            with pdfplumber.open(path) as pdf:
                return [
                    rect for page in pdf.pages for rect in page.rects
                    if rect.get("non_stroking_color") is not None
                    and len(rect["non_stroking_color"]) == 3
                    and all(abs(a - b) < 0.01 for a, b in zip(rect["non_stroking_color"], expected))
                ]

        # one legend swatch plus one bar per level
        assert len(filled_with(TEAL)) == len(rows) + 1
        assert len(filled_with(AMBER)) == len(rows) + 1

    def test_non_latin_regime_name_needs_unicode_font(
        self, tmp_path: Path, scenario_a, rows, regime_2025
    ):
        regime = regime_2025.model_copy(update={"name": "令和7年度 東京"})
        path = tmp_path / "report.pdf"
        with pytest.raises(ReportRenderError, match="Unicode TTF"):
            SimulationPdfExporter().export(scenario_a, rows, regime, path)
        assert not path.exists()
