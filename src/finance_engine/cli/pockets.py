#!/usr/bin/env python3
"""
Pockets CLI - Balances and Fixed-Expense Planning

Aggregates pocket balances and sub-pocket contributions from a snapshot file.
"""

from collections import defaultdict
from pathlib import Path

import click

from ..core.currency import format_amount
from ..core.errors import FinanceEngineError
from ..core.models import SubPocket
from ..pockets import (
    calculate_amount_due,
    calculate_aporte_mensual,
    calculate_progress,
    calculate_total_balance_by_currency,
    calculate_total_fijos_mes,
    classify_progress,
    progress_percentage,
    update_pocket_balance,
)
from .common import load_snapshot_or_fail

SNAPSHOT_ARGUMENT = click.argument("snapshot_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))


@click.group()
def pockets() -> None:
    """Pocket balance and contribution commands."""
    pass


@pockets.command()
@SNAPSHOT_ARGUMENT
def balance(snapshot_file: Path) -> None:
    """
    Recompute pocket balances from movements and sub-pockets.

    Example:
      finance-engine pockets balance snapshot.yaml
    """
    snapshot = load_snapshot_or_fail(snapshot_file)

    if not snapshot.pockets:
        click.echo("No pockets found in snapshot.")
        return

    click.echo("Pocket Balances:")
    click.echo("=" * 60)

    for pocket in snapshot.pockets:
        try:
            if pocket.is_fixed():
                update_pocket_balance(pocket, sub_pockets=snapshot.sub_pockets_for(pocket.id))
            else:
                update_pocket_balance(pocket, movements=snapshot.movements_for(pocket.id))
        except FinanceEngineError as e:
            raise click.ClickException(str(e)) from e

        label = pocket.name or pocket.id
        click.echo(f"  {label} ({pocket.type.value}): {format_amount(pocket.balance, pocket.currency.value)}")

    click.echo(f"\n{'-' * 60}")
    for currency, total in calculate_total_balance_by_currency(snapshot.pockets).items():
        click.echo(f"Total {currency}: {format_amount(total, currency)}")


@pockets.command()
@SNAPSHOT_ARGUMENT
@click.pass_context
def plan(ctx: click.Context, snapshot_file: Path) -> None:
    """
    Show monthly contributions and progress for every sub-pocket.

    Amounts use the owning pocket's currency, or DEFAULT_CURRENCY for
    sub-pockets whose pocket is not in the snapshot. Totals are per currency.

    Example:
      finance-engine pockets plan snapshot.yaml
    """
    default_currency = ctx.obj["config"].display.default_currency
    snapshot = load_snapshot_or_fail(snapshot_file)

    if not snapshot.sub_pockets:
        click.echo("No sub-pockets found in snapshot.")
        return

    # Sub-pockets use their owning pocket's currency; orphans use the configured default
    pocket_currencies = {pocket.id: pocket.currency.value for pocket in snapshot.pockets}
    by_currency: dict[str, list[SubPocket]] = defaultdict(list)

    click.echo("Fixed Expenses Plan:")
    click.echo("=" * 60)

    for sub_pocket in snapshot.sub_pockets:
        currency = pocket_currencies.get(sub_pocket.pocket_id, default_currency)
        by_currency[currency].append(sub_pocket)

        aporte = calculate_aporte_mensual(
            sub_pocket.value_total, sub_pocket.periodicity_months, sub_pocket.balance
        )
        progress = calculate_progress(sub_pocket.balance, sub_pocket.value_total)

        label = sub_pocket.name or sub_pocket.id
        state = "" if sub_pocket.enabled else " (disabled)"
        click.echo(f"\n{label}{state}")
        click.echo(
            f"  Saved: {format_amount(sub_pocket.balance, currency)} of "
            f"{format_amount(sub_pocket.value_total, currency)} "
            f"({progress_percentage(progress):.0f}%, {classify_progress(progress).value})"
        )
        click.echo(f"  Monthly Contribution: {format_amount(aporte, currency)}")
        if sub_pocket.balance < 0:
            amount_due = calculate_amount_due(sub_pocket)
            click.echo(f"  Amount Due (with catch-up): {format_amount(amount_due, currency)}")

    click.echo(f"\n{'-' * 60}")
    for currency, sub_pockets in by_currency.items():
        total = calculate_total_fijos_mes(sub_pockets)
        click.echo(f"Total Fixed Expenses This Month: {format_amount(total, currency)}")
