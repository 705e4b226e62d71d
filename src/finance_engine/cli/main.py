#!/usr/bin/env python3
"""
Main CLI Entry Point for the Finance Engine

Runs the calculators over snapshot files exported from the finance tracker.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Finance Engine - CD valuation and pocket planning

    Values certificates of deposit and aggregates pocket balances and
    monthly contributions from snapshot files.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["FINANCE_ENGINE_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("finance_engine").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = reload_config() if config_env else get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from finance_engine import __author__, __version__

    click.echo(f"Finance Engine v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Near Maturity Threshold: {config_obj.investments.near_maturity_days} days")
    click.echo(f"  Default Currency: {config_obj.display.default_currency}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


# Register command groups
from .cd import cd  # noqa: E402
from .pockets import pockets  # noqa: E402

main.add_command(cd)
main.add_command(pockets)


if __name__ == "__main__":
    main()
