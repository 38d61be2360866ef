"""Typer CLI interface for execpay."""

import json
import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from execpay.engines.brackets import DEFAULT_REGIME_YEAR
from execpay.exceptions import DataValidationError, SimulationError

BANNER = r"""
   ___  __ _____ ___ ___  __ ___ __
  / -_) \ \ / -_) __| '_ \/ _` | || |
  \___|/_\_\\___\___| .__/\__,_|\_, |
                    |_|         |__/
  Executive Compensation Optimizer
"""


def show_banner() -> None:
    typer.echo(BANNER)


app = typer.Typer(
    name="execpay",
    help="execpay - find the executive compensation that keeps the most cash.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """execpay - find the executive compensation that keeps the most cash."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if ctx.invoked_subcommand is None:
        show_banner()
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Shared option handling
# ---------------------------------------------------------------------------

def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _resolve_regime(year: int, regime_file: Path | None) -> Any:
    from execpay.engines.brackets import get_regime, load_regime_file

    try:
        if regime_file is not None:
            return load_regime_file(regime_file)
        return get_regime(year)
    except SimulationError as exc:
        _fail(str(exc))


def _build_input(
    profit: int,
    base: int,
    bonus: int,
    age: int,
    dependents: int,
    increment: int,
    other_deductions: int,
) -> Any:
    from execpay.models.simulation import SimulationInput

    try:
        return SimulationInput(
            company_profit_before_compensation=profit,
            base_monthly_compensation=base,
            annual_bonus=bonus,
            age=age,
            dependents=dependents,
            increment_amount=increment,
            other_deductions=other_deductions,
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        _fail(str(DataValidationError(field, first["msg"])))


PROFIT_OPTION = typer.Option(20_000_000, "--profit", "-p", help="Company profit before owner pay and employer social costs")
BASE_OPTION = typer.Option(1_000_000, "--base", "-b", help="Base monthly compensation (centre of the sweep)")
BONUS_OPTION = typer.Option(0, "--bonus", help="Annual bonus paid once a year", min=0)
AGE_OPTION = typer.Option(40, "--age", help="Age (40-64 adds nursing-care premiums)", min=0)
DEPENDENTS_OPTION = typer.Option(0, "--dependents", "-d", help="Number of general dependents", min=0)
INCREMENT_OPTION = typer.Option(100_000, "--increment", "-i", help="Step between candidate monthly amounts")
OTHER_OPTION = typer.Option(0, "--other-deductions", help="Other personal income deductions", min=0)
YEAR_OPTION = typer.Option(DEFAULT_REGIME_YEAR, "--year", "-y", help="Tax regime year")
REGIME_FILE_OPTION = typer.Option(None, "--regime-file", help="JSON tax regime overriding --year")
FONT_OPTION = typer.Option(
    None, "--font", exists=True, dir_okay=False,
    help="TrueType font for the PDF (needed for non-Latin regime names)",
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def simulate(
    profit: int = PROFIT_OPTION,
    base: int = BASE_OPTION,
    bonus: int = BONUS_OPTION,
    age: int = AGE_OPTION,
    dependents: int = DEPENDENTS_OPTION,
    increment: int = INCREMENT_OPTION,
    other_deductions: int = OTHER_OPTION,
    year: int = YEAR_OPTION,
    regime_file: Path | None = REGIME_FILE_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print result rows as JSON"),
) -> None:
    """Compare taxes and cash remaining across eleven compensation levels."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from execpay.engines.selection import find_optimal_row
    from execpay.engines.simulation import run_simulation
    from execpay.reports.formatting import yen

    regime = _resolve_regime(year, regime_file)
    sim_input = _build_input(profit, base, bonus, age, dependents, increment, other_deductions)
    rows = run_simulation(sim_input, regime)

    if as_json:
        payload = [
            {**row.model_dump(mode="json"), "total_taxes": row.total_taxes}
            for row in rows
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    console = Console()
    if not rows:
        console.print("No candidates: every compensation level in the sweep was zero or negative.")
        return

    optimal = find_optimal_row(rows)
    table = Table(title=f"Compensation sweep ({escape(regime.name)})")
    table.add_column("Monthly", justify="right")
    table.add_column("Total taxes", justify="right")
    table.add_column("Cash remaining", justify="right")
    table.add_column("Take-home", justify="right")
    table.add_column("Company net", justify="right")
    table.add_column("Social insurance", justify="right")
    for row in rows:
        table.add_row(
            yen(row.monthly_compensation),
            yen(row.total_taxes),
            yen(row.total_cash_remaining),
            yen(row.individual_take_home_pay),
            yen(row.company_net_profit),
            yen(row.total_social_insurance),
            style="bold magenta" if row is optimal else None,
        )
    console.print(table)
    console.print(
        f"Optimal monthly compensation: [bold]{yen(optimal.monthly_compensation)}[/bold] "
        f"(total taxes {yen(optimal.total_taxes)}, "
        f"cash remaining {yen(optimal.total_cash_remaining)})"
    )


@app.command()
def breakdown(
    profit: int = PROFIT_OPTION,
    base: int = BASE_OPTION,
    bonus: int = BONUS_OPTION,
    age: int = AGE_OPTION,
    dependents: int = DEPENDENTS_OPTION,
    increment: int = INCREMENT_OPTION,
    other_deductions: int = OTHER_OPTION,
    year: int = YEAR_OPTION,
    regime_file: Path | None = REGIME_FILE_OPTION,
    level: int | None = typer.Option(None, "--level", "-l", help="Monthly compensation to break down (default: base)"),
) -> None:
    """Show the full deduction and tax chain for one compensation level."""
    from execpay.engines.simulation import CompensationSimulator
    from execpay.reports.formatting import percent, yen

    regime = _resolve_regime(year, regime_file)
    sim_input = _build_input(profit, base, bonus, age, dependents, increment, other_deductions)
    monthly = base if level is None else level
    if monthly <= 0:
        _fail(f"Monthly compensation must be positive, got {monthly}")

    row = CompensationSimulator(regime).evaluate(sim_input, monthly)

    typer.echo("")
    typer.echo(f"=== Breakdown: monthly {yen(monthly)} ({regime.name}) ===")
    typer.echo("")
    typer.echo("SOCIAL INSURANCE")
    typer.echo(f"  Health base (monthly):     {row.monthly_health_base:>14,}")
    typer.echo(f"  Pension base (monthly):    {row.monthly_pension_base:>14,}")
    if row.annual_bonus > 0:
        typer.echo(f"  Health base (bonus):       {row.bonus_health_base:>14,}")
        typer.echo(f"  Pension base (bonus):      {row.bonus_pension_base:>14,}")
    typer.echo(f"  Individual share:          {row.individual_social_insurance:>14,}")
    typer.echo(f"  Company share:             {row.company_social_insurance:>14,}")
    typer.echo(f"    (incl. employer levy:    {row.employer_levy:>14,})")
    typer.echo("")
    typer.echo("INDIVIDUAL")
    typer.echo(f"  Annual compensation:       {row.annual_compensation:>14,}")
    typer.echo(f"  Salary-income deduction:  -{row.salary_income_deduction:>14,}")
    typer.echo(f"  Total income:              {row.total_income:>14,}")
    typer.echo(f"  Social insurance:         -{row.individual_social_insurance:>14,}")
    typer.echo(f"  Basic deduction:          -{row.basic_deduction:>14,}")
    typer.echo(f"  Dependent deduction:      -{row.dependent_deduction:>14,}")
    typer.echo(f"  Other deductions:         -{row.other_deductions:>14,}")
    typer.echo("  ──────────────────────────────────────────")
    typer.echo(f"  Taxable income:            {row.taxable_income:>14,}")
    typer.echo(
        f"  Income tax:                {row.income_tax:>14,}"
        f"  ({percent(row.income_tax_rate)}, deduction {row.income_tax_deduction:,})"
    )
    typer.echo(f"  Resident tax:              {row.residence_tax:>14,}")
    typer.echo(f"  Take-home pay:             {row.individual_take_home_pay:>14,}")
    typer.echo("")
    typer.echo("COMPANY")
    typer.echo(f"  Profit before compensation:{sim_input.company_profit_before_compensation:>14,}")
    typer.echo(f"  Total company cost:       -{row.total_company_cost:>14,}")
    typer.echo(f"  Profit before tax:         {row.company_profit_after_compensation:>14,}")
    typer.echo(f"  Corporate tax:            -{row.corporate_tax:>14,}")
    typer.echo(f"  Net profit:                {row.company_net_profit:>14,}")
    typer.echo("  ══════════════════════════════════════════")
    typer.echo(f"  TOTAL CASH REMAINING:      {row.total_cash_remaining:>14,}")


@app.command()
def report(
    profit: int = PROFIT_OPTION,
    base: int = BASE_OPTION,
    bonus: int = BONUS_OPTION,
    age: int = AGE_OPTION,
    dependents: int = DEPENDENTS_OPTION,
    increment: int = INCREMENT_OPTION,
    other_deductions: int = OTHER_OPTION,
    year: int = YEAR_OPTION,
    regime_file: Path | None = REGIME_FILE_OPTION,
    output: Path = typer.Option(Path("reports"), "--output", "-o", help="Output directory for reports"),
    font: Path | None = FONT_OPTION,
) -> None:
    """Write the text summary and PDF report for a simulation run."""
    from execpay.engines.simulation import run_simulation
    from execpay.reports import SimulationPdfExporter, SimulationSummaryGenerator

    regime = _resolve_regime(year, regime_file)
    sim_input = _build_input(profit, base, bonus, age, dependents, increment, other_deductions)
    rows = run_simulation(sim_input, regime)

    output.mkdir(parents=True, exist_ok=True)
    typer.echo(f"Generating reports for {len(rows)} compensation level(s) to {output}...")

    try:
        pdf_path = SimulationPdfExporter(font).export(
            sim_input, rows, regime, output / "simulation_report.pdf"
        )
    except SimulationError as exc:
        _fail(str(exc))
    typer.echo(f"  [+] PDF:      {pdf_path}")

    summary_path = output / "simulation_summary.txt"
    summary_path.write_text(
        SimulationSummaryGenerator().render(sim_input, rows, regime), encoding="utf-8"
    )
    typer.echo(f"  [+] Summary:  {summary_path}")

    if not rows:
        typer.echo("  [-] No positive compensation levels; optimal and base sections omitted.")


@app.command()
def regimes(
    dump: int | None = typer.Option(None, "--dump", help="Print the regime for this year as JSON"),
) -> None:
    """List bundled tax regimes, or dump one as a --regime-file template."""
    from execpay.engines.brackets import REGIMES, get_regime

    if dump is not None:
        try:
            regime = get_regime(dump)
        except SimulationError as exc:
            _fail(str(exc))
        typer.echo(regime.model_dump_json(indent=2))
        return

    for regime_year in sorted(REGIMES):
        typer.echo(f"  {regime_year}  {REGIMES[regime_year].name}")


if __name__ == "__main__":
    app()
