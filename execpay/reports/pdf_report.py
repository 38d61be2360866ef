"""PDF report for a compensation sweep.

Layout: conditions, optimal compensation, base-level breakdown, a bar chart of
cash per level, and the detail table with the optimal row shaded. Core PDF
fonts are Latin-1 only; pass a Unicode TrueType font to render other scripts,
such as a Japanese regime name.
"""

import logging
from datetime import date
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFUnicodeEncodingException

from execpay.engines.selection import find_base_row, find_optimal_row
from execpay.exceptions import ReportRenderError
from execpay.models.regime import TaxRegime
from execpay.models.simulation import SimulationInput, SimulationResultRow
from execpay.reports.formatting import percent, yen

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Executive Compensation Optimizer"
FONT = "Helvetica"
UNICODE_FONT = "ReportUnicode"

INDIGO = (79, 70, 229)
INDIGO_DARK = (30, 27, 75)
INDIGO_LIGHT = (239, 246, 255)
INDIGO_HIGHLIGHT = (224, 231, 255)
GRAY = (107, 114, 128)
GRAY_LIGHT = (156, 163, 175)
TEAL = (13, 148, 136)
AMBER = (217, 119, 6)
BLACK = (28, 25, 23)


class _ReportPDF(FPDF):
    report_font = FONT

    def footer(self) -> None:
        self.set_y(-30)
        self.set_font(self.report_font, "", 8)
        self.set_text_color(*GRAY_LIGHT)
        self.cell(0, 10, PRODUCT_NAME, align="L")
        self.set_x(self.l_margin)
        self.cell(0, 10, f"Page {self.page_no()} of {{nb}}", align="R")


class SimulationPdfExporter:
    """Writes a paginated A4 report of one simulation run."""

    margin = 40

    def __init__(self, font_path: Path | None = None) -> None:
        self.font_path = font_path
        self.font = UNICODE_FONT if font_path is not None else FONT

    def export(
        self,
        sim_input: SimulationInput,
        rows: list[SimulationResultRow],
        regime: TaxRegime,
        path: Path,
        generated_on: date | None = None,
    ) -> Path:
        """Render the report and write it to ``path``.

        Nothing is written if rendering fails. Raises ReportRenderError when
        text cannot be encoded in the selected font.
        """
        pdf = _ReportPDF(orientation="P", unit="pt", format="A4")
        if self.font_path is not None:
            pdf.add_font(UNICODE_FONT, "", str(self.font_path))
            pdf.add_font(UNICODE_FONT, "B", str(self.font_path))
        pdf.report_font = self.font
        pdf.set_margins(self.margin, self.margin)
        pdf.set_auto_page_break(True, margin=self.margin + 10)

        try:
            pdf.add_page()
            self._header(pdf, regime, generated_on or date.today())
            self._conditions(pdf, sim_input)

            optimal = find_optimal_row(rows)
            if optimal is not None:
                self._optimal(pdf, optimal)

            base = find_base_row(rows, sim_input.base_monthly_compensation)
            if base is not None:
                self._breakdown(pdf, sim_input, base)

            if rows:
                self._chart(pdf, rows, optimal)
            self._detail(pdf, rows, optimal)
        except FPDFUnicodeEncodingException as exc:
            raise ReportRenderError(
                str(path), f"text not encodable in font {self.font!r}; pass a Unicode TTF font ({exc})"
            ) from exc

        path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(path))
        logger.info("Wrote PDF report with %d row(s) to %s", len(rows), path)
        return path

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _header(self, pdf: FPDF, regime: TaxRegime, generated_on: date) -> None:
        pdf.set_font(self.font, "B", 18)
        pdf.set_text_color(*BLACK)
        pdf.cell(0, 24, "Executive Compensation Simulation Report", align="C",
                 new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(self.font, "", 10)
        pdf.set_text_color(*GRAY)
        pdf.cell(0, 16, f"Generated {generated_on.isoformat()} - regime {regime.name}",
                 align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(20)

    def _section_title(self, pdf: FPDF, title: str, space_after: float = 8) -> None:
        self._ensure_space(pdf, 60)
        pdf.set_font(self.font, "B", 14)
        pdf.set_text_color(23, 37, 84)
        pdf.cell(0, 20, title, new_x="LMARGIN", new_y="NEXT")
        pdf.ln(space_after)

    def _conditions(self, pdf: FPDF, sim_input: SimulationInput) -> None:
        self._section_title(pdf, "Simulation Conditions")
        self._key_value_table(pdf, ("Item", "Value"), [
            ("Profit before compensation", yen(sim_input.company_profit_before_compensation)),
            ("Base monthly compensation", yen(sim_input.base_monthly_compensation)),
            ("Annual bonus", yen(sim_input.annual_bonus)),
            ("Increment", yen(sim_input.increment_amount)),
            ("Age", sim_input.age_category.label),
            ("Dependents", str(sim_input.dependents)),
            ("Other deductions", yen(sim_input.other_deductions)),
        ])
        pdf.ln(20)

    def _optimal(self, pdf: FPDF, optimal: SimulationResultRow) -> None:
        self._section_title(pdf, "Optimal Result")
        self._ensure_space(pdf, 80)
        x, y = pdf.get_x(), pdf.get_y()
        pdf.set_fill_color(*INDIGO_LIGHT)
        pdf.rect(x, y, pdf.epw, 70, style="F")
        pdf.set_xy(x, y + 10)
        pdf.set_font(self.font, "", 10)
        pdf.set_text_color(67, 56, 202)
        pdf.cell(0, 14, "Optimal monthly compensation", align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(self.font, "B", 18)
        pdf.set_text_color(*INDIGO_DARK)
        pdf.cell(0, 26, yen(optimal.monthly_compensation), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_y(y + 90)

    def _breakdown(self, pdf: FPDF, sim_input: SimulationInput, base: SimulationResultRow) -> None:
        self._section_title(pdf, f"Base Breakdown (monthly {yen(base.monthly_compensation)})")
        self._key_value_table(pdf, ("Individual", ""), [
            ("Annual compensation", yen(base.annual_compensation)),
            ("(-) Salary-income deduction", yen(base.salary_income_deduction)),
            ("(-) Social insurance", yen(base.individual_social_insurance)),
            ("(-) Basic deduction", yen(base.basic_deduction)),
            ("(-) Dependent deduction", yen(base.dependent_deduction)),
            ("(-) Other deductions", yen(base.other_deductions)),
            ("(=) Taxable income", yen(base.taxable_income)),
            (f"(-) Income tax ({percent(base.income_tax_rate)} bracket)", yen(base.income_tax)),
            ("(-) Resident tax", yen(base.residence_tax)),
            ("Take-home pay", yen(base.individual_take_home_pay)),
        ])
        pdf.ln(14)
        self._key_value_table(pdf, ("Company", ""), [
            ("Profit before compensation", yen(sim_input.company_profit_before_compensation)),
            ("(-) Annual compensation", yen(base.annual_compensation)),
            ("(-) Social insurance", yen(base.company_social_insurance)),
            ("(=) Profit before tax", yen(base.company_profit_after_compensation)),
            ("(-) Corporate tax", yen(base.corporate_tax)),
            ("Net profit", yen(base.company_net_profit)),
        ])
        pdf.ln(20)

    def _chart(
        self, pdf: FPDF, rows: list[SimulationResultRow], optimal: SimulationResultRow | None
    ) -> None:
        """Grouped horizontal bars per compensation level.

        Each level shows total cash remaining, individual take-home pay and
        company net profit on one shared scale. The optimal level's total bar
        is drawn in indigo.
        """
        bar_height = 8
        group_gap = 6
        label_width = 100
        value_width = 100
        series = (
            ("Total cash", None, lambda row: row.total_cash_remaining),
            ("Take-home", TEAL, lambda row: row.individual_take_home_pay),
            ("Company net", AMBER, lambda row: row.company_net_profit),
        )
        group_height = bar_height * len(series) + group_gap

        self._section_title(pdf, "Cash Remaining by Compensation Level")
        self._legend(pdf, [(name, color or GRAY_LIGHT) for name, color, _ in series])

        scale_width = pdf.epw - label_width - value_width
        peak = max(max(value(row) for _, _, value in series for row in rows), 1)
        pdf.set_font(self.font, "", 7)
        for row in rows:
            self._ensure_space(pdf, group_height)
            x, y = pdf.l_margin, pdf.get_y()
            is_optimal = optimal is not None and row.monthly_compensation == optimal.monthly_compensation
            pdf.set_text_color(*BLACK)
            pdf.set_xy(x, y)
            pdf.cell(label_width, bar_height * len(series), yen(row.monthly_compensation))
            for index, (_, color, value) in enumerate(series):
                bar_y = y + index * bar_height
                if color is None:
                    color = INDIGO if is_optimal else GRAY_LIGHT
                width = scale_width * max(value(row), 0) / peak
                if width > 0:
                    pdf.set_fill_color(*color)
                    pdf.rect(x + label_width, bar_y + 1, width, bar_height - 2, style="F")
                pdf.set_xy(x + label_width + scale_width, bar_y)
                pdf.cell(value_width, bar_height, yen(value(row)), align="R")
            pdf.set_xy(x, y + group_height)
        pdf.ln(20)

    def _legend(self, pdf: FPDF, entries: list[tuple[str, tuple[int, int, int]]]) -> None:
        swatch = 8
        entry_width = 110
        x, y = pdf.l_margin, pdf.get_y()
        pdf.set_font(self.font, "", 8)
        pdf.set_text_color(*GRAY)
        for index, (name, color) in enumerate(entries):
            left = x + index * entry_width
            pdf.set_fill_color(*color)
            pdf.rect(left, y + 3, swatch, swatch, style="F")
            pdf.set_xy(left + swatch + 4, y)
            pdf.cell(entry_width - swatch - 4, 14, name)
        pdf.set_xy(x, y + 22)

    def _detail(
        self, pdf: FPDF, rows: list[SimulationResultRow], optimal: SimulationResultRow | None
    ) -> None:
        self._section_title(pdf, "Detail")
        headers = ("Monthly", "Total taxes", "Cash remaining", "Take-home", "Company net",
                   "Social insurance")
        width = pdf.epw / len(headers)
        pdf.set_font(self.font, "B", 8)
        pdf.set_fill_color(*INDIGO)
        pdf.set_text_color(255, 255, 255)
        for header in headers:
            pdf.cell(width, 16, header, border=1, align="C", fill=True)
        pdf.ln(16)

        pdf.set_font(self.font, "", 8)
        if not rows:
            pdf.set_text_color(*GRAY)
            pdf.cell(0, 16, "No positive compensation levels in the sweep.",
                     new_x="LMARGIN", new_y="NEXT")
            return
        for row in rows:
            is_optimal = optimal is not None and row.monthly_compensation == optimal.monthly_compensation
            pdf.set_fill_color(*INDIGO_HIGHLIGHT)
            pdf.set_text_color(*(INDIGO_DARK if is_optimal else BLACK))
            values = (
                row.monthly_compensation,
                row.total_taxes,
                row.total_cash_remaining,
                row.individual_take_home_pay,
                row.company_net_profit,
                row.total_social_insurance,
            )
            for value in values:
                pdf.cell(width, 14, yen(value), border=1, align="R", fill=is_optimal)
            pdf.ln(14)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _key_value_table(
        self, pdf: FPDF, head: tuple[str, str], body: list[tuple[str, str]]
    ) -> None:
        label_width = pdf.epw * 0.6
        value_width = pdf.epw - label_width
        self._ensure_space(pdf, 16 * (len(body) + 1))
        pdf.set_font(self.font, "B", 9)
        pdf.set_fill_color(*GRAY)
        pdf.set_text_color(255, 255, 255)
        pdf.cell(label_width, 16, head[0], border=1, fill=True)
        pdf.cell(value_width, 16, head[1], border=1, fill=True, new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(self.font, "", 9)
        pdf.set_text_color(*BLACK)
        for label, value in body:
            pdf.cell(label_width, 16, label, border=1)
            pdf.cell(value_width, 16, value, border=1, align="R", new_x="LMARGIN", new_y="NEXT")

    @staticmethod
    def _ensure_space(pdf: FPDF, height: float) -> None:
        if pdf.get_y() + height > pdf.h - pdf.b_margin:
            pdf.add_page()
