"""
Command-Line Interface for TakeHome.

Purpose
-------
Exposes the calculation core from the shell: period breakdowns, deduction
annualization, life-event impact projections, onboarding step lists and
household splits, without writing Python code.

Commands
--------
- timeframes: Break an amount down into every pay period
- deduction: Annualize a payroll deduction and check its IRS limit
- templates: List the built-in life-event templates
- impact: Project a template or saved scenario onto a salary
- compare: Compare every template side by side
- steps: Show the onboarding steps for a household setup
- split: Split shared expenses between two earners
- scenario: Create and inspect scenario files
- profile: Validate household profile files
- info: Show version and dependency information

Example Usage
-------------
    # Monthly, bi-weekly, hourly... for an annual salary
    $ takehome timeframes 104000

    # HSA at $500 per paycheck, bi-weekly
    $ takehome deduction hsa 500 --frequency per_paycheck

    # What does a first child do to a $100k salary?
    $ takehome impact --template first_child --salary 100000 --net-monthly 5000

    # Save a template for editing
    $ takehome scenario create job_loss job_loss.json
"""

from __future__ import annotations

import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click

from .exceptions import TakeHomeError

# Version
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _get_console():
    """Lazy import Rich for better startup time."""
    from rich.console import Console
    return Console()


def configure_logging(level: str) -> None:
    """Route library log records to stderr at *level*."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _money(value: Decimal) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _signed_money(value: Decimal) -> str:
    return f"+{_money(value)}" if value > 0 else _money(value)


class DecimalParamType(click.ParamType):
    """Click parameter that parses exact Decimals."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value).replace(",", "").lstrip("$"))
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid amount", param, ctx)


AMOUNT = DecimalParamType()


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="takehome")
@click.option("--quiet", "-q", is_flag=True, help="Plain output without tables")
@click.pass_context
def main(ctx: click.Context, quiet: bool) -> None:
    """
    TakeHome - Household take-home pay and life-event modeling.

    Normalizes pay, deductions and hypothetical life changes into
    comparable monthly and annual figures.

    Use 'takehome COMMAND --help' for command-specific help.
    """
    from pydantic import ValidationError

    from .config import AppSettings

    try:
        settings = AppSettings()
    except ValidationError as e:
        problems = "; ".join(
            f"TAKEHOME_{'_'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        raise click.UsageError(f"Invalid environment settings: {problems}", ctx=ctx)
    configure_logging(settings.effective_log_level)
    logger.debug("Settings: %s", settings.model_dump())

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = _get_console()


# ---------------------------------------------------------------------------
# Period conversion
# ---------------------------------------------------------------------------

@main.command()
@click.argument("amount", type=AMOUNT)
@click.option(
    "--from", "source",
    type=click.Choice(["annual", "monthly", "bi_weekly", "semi_monthly", "weekly", "daily", "hourly"]),
    default="annual",
    help="Period AMOUNT is expressed in (default: annual)"
)
@click.pass_context
def timeframes(ctx: click.Context, amount: Decimal, source: str) -> None:
    """
    Break an amount down into every pay period.

    Example:
        takehome timeframes 50 --from hourly
    """
    from .timeframe import Timeframe, TimeframeIncome, timeframe_to_annual

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    annual = timeframe_to_annual(amount, Timeframe(source))
    breakdown = TimeframeIncome.from_annual(annual).to_dict()

    if console and not quiet:
        from rich.table import Table

        table = Table(title="Timeframe Breakdown", show_header=True)
        table.add_column("Period", style="cyan")
        table.add_column("Amount", style="green", justify="right")
        for period, value in breakdown.items():
            table.add_row(Timeframe(period).display_name, _money(value))
        console.print(table)
    else:
        for period, value in breakdown.items():
            click.echo(f"{period}: {_money(value)}")


# ---------------------------------------------------------------------------
# Deductions
# ---------------------------------------------------------------------------

@main.command()
@click.argument("deduction_type")
@click.argument("amount", type=AMOUNT)
@click.option(
    "--mode", "-m",
    type=click.Choice(["dollar", "percent"]),
    default="dollar",
    help="AMOUNT is dollars or percent of salary (default: dollar)"
)
@click.option(
    "--frequency", "-f",
    type=click.Choice(["annual", "monthly", "per_paycheck"]),
    default="annual",
    help="Frequency of a dollar AMOUNT (default: annual)"
)
@click.option("--salary", "-s", type=AMOUNT, default=Decimal("0"), help="Annual gross salary")
@click.option(
    "--pay-frequency", "-p",
    type=click.Choice(["weekly", "bi_weekly", "semi_monthly", "monthly"]),
    default=None,
    help="Paycheck frequency (default: from settings, bi_weekly)"
)
@click.pass_context
def deduction(
    ctx: click.Context,
    deduction_type: str,
    amount: Decimal,
    mode: str,
    frequency: str,
    salary: Decimal,
    pay_frequency: Optional[str],
) -> None:
    """
    Annualize a payroll deduction and check its limit.

    DEDUCTION_TYPE is one of the deduction kinds, e.g. traditional_401k,
    hsa, fsa, health_insurance.

    Example:
        takehome deduction traditional_401k 6 --mode percent --salary 120000
    """
    from .deductions import DeductionEntry, DeductionInputType, DeductionType
    from .timeframe import DeductionFrequency, PayFrequency
    from .utils import parse_enum

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    settings = ctx.obj["settings"]

    try:
        kind = parse_enum(DeductionType, deduction_type, name="deduction type")
    except TakeHomeError as e:
        _fail(str(e))

    pay = PayFrequency(pay_frequency) if pay_frequency else settings.default_pay_frequency
    entry = DeductionEntry(
        type=kind,
        amount=amount,
        frequency=DeductionFrequency(frequency),
        input_type=(
            DeductionInputType.PERCENTAGE_OF_SALARY if mode == "percent"
            else DeductionInputType.DOLLAR_AMOUNT
        ),
        enabled=True,
    )
    if mode == "percent" and salary <= 0:
        _fail("--salary is required for percent deductions")

    capped = entry.annual_amount(salary, pay)
    uncapped = entry.annual_amount(salary, pay, respect_limit=False)
    limit = kind.annual_limit

    rows = [
        ("Deduction", kind.display_name),
        ("Tax treatment", "Pre-tax" if kind.is_pre_tax else "Post-tax"),
        ("Annual amount", _money(capped)),
        ("Per paycheck", _money(capped / pay.periods_per_year)),
        ("Annual limit", _money(limit) if limit is not None else "None"),
    ]
    if kind.catch_up_limit is not None:
        rows.append(("Catch-up (50+)", _money(kind.catch_up_limit)))
    if entry.exceeds_limit(salary, pay):
        rows.append(("Over limit by", _money(uncapped - limit)))

    if console and not quiet:
        from rich.table import Table

        table = Table(title="Deduction", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green", justify="right")
        for label, value in rows:
            table.add_row(label, value)
        console.print(table)
    else:
        for label, value in rows:
            click.echo(f"{label}: {value}")


# ---------------------------------------------------------------------------
# Life events
# ---------------------------------------------------------------------------

@main.command("templates")
@click.pass_context
def list_templates(ctx: click.Context) -> None:
    """
    List the built-in life-event templates.

    Example:
        takehome templates
    """
    from .templates import TEMPLATES

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    scenarios = [(key, factory()) for key, factory in TEMPLATES.items()]

    if console and not quiet:
        from rich.table import Table

        table = Table(title="Life-Event Templates", show_header=True)
        table.add_column("Key", style="cyan")
        table.add_column("Name")
        table.add_column("Category")
        table.add_column("Duration", justify="right")
        for key, scenario in scenarios:
            duration = scenario.duration.display_name if scenario.duration else "-"
            table.add_row(key, scenario.name, scenario.category.display_name, duration)
        console.print(table)
    else:
        for key, scenario in scenarios:
            click.echo(f"{key}: {scenario.name}")


@main.command()
@click.option("--template", "-t", "template_key", default=None, help="Built-in template key")
@click.option(
    "--scenario", "scenario_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Scenario JSON file"
)
@click.option("--salary", "-s", type=AMOUNT, required=True, help="Annual gross salary")
@click.option("--net-monthly", "-n", type=AMOUNT, required=True, help="Current monthly take-home")
@click.pass_context
def impact(
    ctx: click.Context,
    template_key: Optional[str],
    scenario_file: Optional[Path],
    salary: Decimal,
    net_monthly: Decimal,
) -> None:
    """
    Project a life event onto a salary.

    Example:
        takehome impact --template first_child --salary 100000 --net-monthly 5000
    """
    from .scenario import calculate_impact
    from .serialization import load_scenario
    from .templates import get_template

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    if (template_key is None) == (scenario_file is None):
        _fail("Specify exactly one of --template or --scenario")

    try:
        if template_key is not None:
            scenario = get_template(template_key)
        else:
            scenario = load_scenario(scenario_file)
    except TakeHomeError as e:
        _fail(str(e))

    result = calculate_impact(scenario, salary, net_monthly)

    rows = [
        ("Monthly income change", _signed_money(result.monthly_income_change)),
        ("Monthly expense change", _signed_money(result.monthly_expense_change)),
        ("Annual tax change", _signed_money(result.annual_tax_change)),
        ("One-time costs", _money(result.one_time_expenses)),
        ("Net monthly impact", _signed_money(result.net_monthly_impact)),
        ("Net annual impact", _signed_money(result.net_annual_impact)),
        ("Projected net monthly", _money(result.projected_net_monthly)),
    ]

    if console and not quiet:
        from rich.table import Table

        style = "green" if result.is_positive else "red"
        table = Table(title=scenario.name, show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style=style, justify="right")
        for label, value in rows:
            table.add_row(label, value)
        for change in result.savings_changes:
            table.add_row(f"Savings: {change.type.value}", _money(change.amount))
        console.print(table)
    else:
        click.echo(scenario.name)
        for label, value in rows:
            click.echo(f"{label}: {value}")


@main.command()
@click.option("--salary", "-s", type=AMOUNT, required=True, help="Annual gross salary")
@click.option("--net-monthly", "-n", type=AMOUNT, required=True, help="Current monthly take-home")
@click.pass_context
def compare(ctx: click.Context, salary: Decimal, net_monthly: Decimal) -> None:
    """
    Compare every built-in template side by side.

    Example:
        takehome compare --salary 100000 --net-monthly 5000
    """
    from .scenario import impact_table
    from .templates import all_templates

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    table_df = impact_table(all_templates(), salary, net_monthly)
    ranked = table_df.sort_values("net_monthly_impact", ascending=False)

    if console and not quiet:
        from rich.table import Table

        table = Table(title="Life-Event Comparison", show_header=True)
        table.add_column("Scenario", style="cyan")
        table.add_column("Net Monthly", justify="right")
        table.add_column("Net Annual", justify="right")
        table.add_column("One-time", justify="right")
        for name, row in ranked.iterrows():
            style = "green" if row["is_positive"] else "red"
            table.add_row(
                name,
                f"[{style}]{_signed_money(Decimal(str(row['net_monthly_impact'])))}[/{style}]",
                _signed_money(Decimal(str(row["net_annual_impact"]))),
                _money(Decimal(str(row["one_time_expenses"]))),
            )
        console.print(table)
    else:
        for name, row in ranked.iterrows():
            click.echo(f"{name}: {_signed_money(Decimal(str(row['net_monthly_impact'])))}/mo")


# ---------------------------------------------------------------------------
# Onboarding and household
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--household",
    type=click.Choice(["single", "two_incomes"]),
    default="single",
    help="Household type (default: single)"
)
@click.option(
    "--mode",
    type=click.Choice(["quick", "detailed"]),
    default="quick",
    help="Deduction setup mode (default: quick)"
)
@click.pass_context
def steps(ctx: click.Context, household: str, mode: str) -> None:
    """
    Show the onboarding steps for a household setup.

    Example:
        takehome steps --household two_incomes --mode detailed
    """
    from .onboarding import (
        DeductionSetupMode,
        HouseholdType,
        OnboardingContext,
        progress,
        visible_steps,
    )

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    context = OnboardingContext(
        household_type=HouseholdType(household),
        deduction_setup_mode=DeductionSetupMode(mode),
    )
    shown = visible_steps(context)

    if console and not quiet:
        from rich.table import Table

        table = Table(title=f"Onboarding ({len(shown)} steps)", show_header=True)
        table.add_column("#", justify="right")
        table.add_column("Step", style="cyan")
        table.add_column("Title")
        table.add_column("Progress", justify="right")
        for i, step in enumerate(shown, start=1):
            table.add_row(str(i), step.value, step.title, f"{progress(step, context):.0%}")
        console.print(table)
    else:
        for step in shown:
            click.echo(step.value)


@main.command()
@click.argument("primary_net", type=AMOUNT)
@click.argument("partner_net", type=AMOUNT)
@click.argument("shared_expense", type=AMOUNT)
@click.option(
    "--method",
    default="proportional",
    help="proportional, equal or custom:RATIO (e.g. custom:0.7)"
)
@click.pass_context
def split(
    ctx: click.Context,
    primary_net: Decimal,
    partner_net: Decimal,
    shared_expense: Decimal,
    method: str,
) -> None:
    """
    Split a monthly shared expense between two earners.

    Example:
        takehome split 8000 2000 1000 --method equal
    """
    from .household import calculate_split, parse_split_method

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    try:
        split_method, ratio = parse_split_method(method)
    except TakeHomeError as e:
        _fail(str(e))

    result = calculate_split(primary_net, partner_net, shared_expense, split_method, ratio)
    rows = [
        ("You", f"{result.primary_percent:.1f}%", _money(result.primary_monthly_amount)),
        ("Partner", f"{result.partner_percent:.1f}%", _money(result.partner_monthly_amount)),
    ]

    if console and not quiet:
        from rich.table import Table

        table = Table(title=f"Shared Expenses ({split_method.value})", show_header=True)
        table.add_column("Who", style="cyan")
        table.add_column("Share", justify="right")
        table.add_column("Monthly", style="green", justify="right")
        for row in rows:
            table.add_row(*row)
        console.print(table)
    else:
        for who, share, amount in rows:
            click.echo(f"{who}: {share} {amount}")


# ---------------------------------------------------------------------------
# Scenario files
# ---------------------------------------------------------------------------

@main.group()
def scenario() -> None:
    """
    Scenario file commands.

    Create scenario files from templates and inspect saved ones.
    """
    pass


@scenario.command("create")
@click.argument("template_key")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.pass_context
def scenario_create(ctx: click.Context, template_key: str, output_file: Path) -> None:
    """
    Write a template to a scenario file for editing.

    Example:
        takehome scenario create first_child baby.json
    """
    from .serialization import save_scenario
    from .templates import get_template

    quiet = ctx.obj.get("quiet", False)

    try:
        template = get_template(template_key)
    except TakeHomeError as e:
        _fail(str(e))

    save_scenario(template, output_file)
    if not quiet:
        click.echo(f"Scenario '{template.name}' saved to {output_file}")


@scenario.command("show")
@click.argument("scenario_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def scenario_show(ctx: click.Context, scenario_file: Path, format: str) -> None:
    """
    Display a scenario file.

    Example:
        takehome scenario show baby.json --format table
    """
    from .serialization import load_scenario, scenario_to_dict

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    try:
        loaded = load_scenario(scenario_file)
    except TakeHomeError as e:
        _fail(str(e))

    if format == "json":
        click.echo(json.dumps(scenario_to_dict(loaded), indent=2))
        return

    if console and not quiet:
        from rich.table import Table

        table = Table(title=loaded.name, show_header=True)
        table.add_column("Kind", style="cyan")
        table.add_column("Item")
        table.add_column("Amount", justify="right")
        table.add_column("Frequency")
        for change in loaded.income_changes:
            amount = f"{change.amount}%" if change.is_percentage else _money(change.amount)
            table.add_row("income", change.reason or change.type.value, amount, change.frequency.display_name)
        for change in loaded.expense_changes:
            frequency = "One-time" if change.is_one_time else change.frequency.display_name
            table.add_row("expense", change.name, _money(change.amount), frequency)
        for change in loaded.tax_changes:
            table.add_row(f"tax {change.type.value}", change.name, _money(change.amount), "Annual")
        for change in loaded.savings_changes:
            table.add_row("savings", change.reason or change.type.value, _money(change.amount), "")
        console.print(table)
    else:
        click.echo(loaded.name)
        click.echo(
            f"{len(loaded.income_changes)} income, {len(loaded.expense_changes)} expense, "
            f"{len(loaded.tax_changes)} tax, {len(loaded.savings_changes)} savings changes"
        )


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

@main.group()
def profile() -> None:
    """
    Household profile commands.
    """
    pass


@profile.command("validate")
@click.argument("profile_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def profile_validate(ctx: click.Context, profile_file: Path) -> None:
    """
    Validate a profile and show the tax engine request it produces.

    Example:
        takehome profile validate me.json
    """
    from .serialization import load_profile

    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    try:
        loaded = load_profile(profile_file)
    except TakeHomeError as e:
        click.echo(f"Profile validation failed: {e}", err=True)
        sys.exit(1)

    request = loaded.tax_request()

    if console and not quiet:
        from rich.panel import Panel

        info = (
            f"[bold]{loaded.name}[/bold]\n\n"
            f"[cyan]Gross salary:[/cyan] {_money(request.gross_income)}\n"
            f"[cyan]Filing status:[/cyan] {request.filing_status.display_name}\n"
            f"[cyan]State:[/cyan] {request.state}\n"
            f"[cyan]Setup mode:[/cyan] {loaded.deduction_setup_mode.value}\n\n"
            f"[cyan]Pre-tax deductions:[/cyan] {_money(request.pre_tax_deductions)}\n"
            f"[cyan]Post-tax deductions:[/cyan] {_money(request.post_tax_deductions)}\n"
            f"[cyan]Traditional 401(k):[/cyan] {_money(request.traditional_401k)}\n"
            f"[cyan]Roth 401(k):[/cyan] {_money(request.roth_401k)}"
        )
        console.print(Panel(info, title="Profile Valid", border_style="green"))
    else:
        click.echo("Profile is valid")
        click.echo(json.dumps(request.to_request_dict(), indent=2))


# ---------------------------------------------------------------------------
# Info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency information.
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    settings = ctx.obj["settings"]

    info_lines = [
        f"TakeHome Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
        f"Log level: {settings.effective_log_level}",
        f"Default pay frequency: {settings.default_pay_frequency.value}",
        f"Default state: {settings.default_state}",
    ]

    for name in ("pandas", "pydantic", "pydantic_settings", "click", "rich"):
        try:
            mod = __import__(name)
            version = getattr(mod, "__version__", "installed")
            info_lines.append(f"{name}: {version}")
        except ImportError:
            info_lines.append(f"{name}: not installed")

    if console and not quiet:
        from rich.panel import Panel
        console.print(Panel("\n".join(info_lines), title="System Information"))
    else:
        for line in info_lines:
            click.echo(line)


if __name__ == "__main__":
    main()
