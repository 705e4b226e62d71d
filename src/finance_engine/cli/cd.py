#!/usr/bin/env python3
"""
CD CLI - Certificate of Deposit Valuation

Values every CD in a snapshot file at a given date.
"""

from pathlib import Path

import click

from ..core.currency import format_amount, format_percent
from ..core.errors import FinanceEngineError
from ..core.models import CDRecord
from ..investments import CDValuationCalculator, generate_cd_summary
from .common import load_snapshot_or_fail, parse_date_option

SNAPSHOT_ARGUMENT = click.argument("snapshot_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))


def _label(cd: CDRecord) -> str:
    return cd.name or cd.id or "Unnamed CD"


@click.group()
def cd() -> None:
    """Certificate of Deposit commands."""
    pass


@cd.command()
@SNAPSHOT_ARGUMENT
@click.option("--as-of", "as_of_str", help="Valuation date (YYYY-MM-DD, default: today)")
def value(snapshot_file: Path, as_of_str: str | None) -> None:
    """
    Show current value, accrued interest and after-tax figures.

    Example:
      finance-engine cd value snapshot.yaml --as-of 2024-07-31
    """
    as_of = parse_date_option(as_of_str)
    snapshot = load_snapshot_or_fail(snapshot_file)

    if not snapshot.cds:
        click.echo("No CDs found in snapshot.")
        return

    calculator = CDValuationCalculator()
    click.echo(f"CD Valuation as of {as_of.date().isoformat()}:")
    click.echo("=" * 60)

    for record in snapshot.cds:
        try:
            result = calculator.calculate_current_value(record, as_of)
        except FinanceEngineError as e:
            raise click.ClickException(f"{_label(record)}: {e}") from e

        currency = record.currency
        click.echo(f"\n{_label(record)}")
        click.echo(f"  Principal: {format_amount(record.principal, currency)}")
        click.echo(f"  Current Value: {format_amount(result.current_value, currency)}")
        click.echo(f"  Accrued Interest: {format_amount(result.accrued_interest, currency)}")
        click.echo(f"  Interest at Maturity: {format_amount(result.total_interest_at_maturity, currency)}")
        click.echo(f"  Effective Yield: {format_percent(result.effective_yield_percent)}")
        if result.withholding_tax:
            click.echo(f"  Withholding Tax: {format_amount(result.withholding_tax, currency)}")
            click.echo(f"  Net Current Value: {format_amount(result.net_current_value, currency)}")
        if result.is_matured:
            click.echo("  Status: Matured")
        else:
            click.echo(f"  Days to Maturity: {result.days_to_maturity}")


@cd.command()
@SNAPSHOT_ARGUMENT
@click.option("--as-of", "as_of_str", help="Valuation date (YYYY-MM-DD, default: today)")
@click.option("--threshold", type=int, help="Near-maturity threshold in days (default: from config)")
@click.pass_context
def summary(ctx: click.Context, snapshot_file: Path, as_of_str: str | None, threshold: int | None) -> None:
    """
    Show status and returns for each CD.

    Example:
      finance-engine cd summary snapshot.yaml --threshold 45
    """
    config = ctx.obj["config"]
    as_of = parse_date_option(as_of_str)
    near_maturity_days = threshold if threshold is not None else config.investments.near_maturity_days
    snapshot = load_snapshot_or_fail(snapshot_file)

    if not snapshot.cds:
        click.echo("No CDs found in snapshot.")
        return

    click.echo(f"CD Summary as of {as_of.date().isoformat()}:")
    click.echo("=" * 60)

    for record in snapshot.cds:
        try:
            result = generate_cd_summary(record, as_of, near_maturity_days)
        except FinanceEngineError as e:
            raise click.ClickException(f"{_label(record)}: {e}") from e

        currency = record.currency
        click.echo(f"\n{_label(record)} [{result.status.value}]")
        click.echo(
            f"  Return: {format_amount(result.total_return, currency)} "
            f"({format_percent(result.return_percentage)})"
        )
        click.echo(
            f"  Net Return: {format_amount(result.net_return, currency)} "
            f"({format_percent(result.net_return_percentage)})"
        )
        click.echo(f"  Monthly Rate: {format_percent(result.monthly_interest_rate, places=3)}")
        click.echo(f"  Days to Maturity: {result.days_to_maturity}")


@cd.command()
@SNAPSHOT_ARGUMENT
@click.option("--date", "date_str", help="Withdrawal date (YYYY-MM-DD, default: today)")
def withdraw(snapshot_file: Path, date_str: str | None) -> None:
    """
    Show early withdrawal penalty and payout for each CD.

    Example:
      finance-engine cd withdraw snapshot.yaml --date 2024-09-01
    """
    withdrawal = parse_date_option(date_str)
    snapshot = load_snapshot_or_fail(snapshot_file)

    if not snapshot.cds:
        click.echo("No CDs found in snapshot.")
        return

    calculator = CDValuationCalculator()
    click.echo(f"Early Withdrawal on {withdrawal.date().isoformat()}:")
    click.echo("=" * 60)

    for record in snapshot.cds:
        try:
            penalty = calculator.calculate_early_withdrawal_penalty(record, withdrawal)
            payout = calculator.calculate_early_withdrawal_amount(record, withdrawal)
        except FinanceEngineError as e:
            raise click.ClickException(f"{_label(record)}: {e}") from e

        currency = record.currency
        click.echo(f"\n{_label(record)}")
        click.echo(f"  Penalty: {format_amount(penalty, currency)}")
        click.echo(f"  Payout: {format_amount(payout, currency)}")
