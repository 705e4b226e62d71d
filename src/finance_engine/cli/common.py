#!/usr/bin/env python3
"""Shared helpers for CLI commands."""

from datetime import datetime
from pathlib import Path

import click

from ..core.dates import parse_instant, utc_now
from ..core.errors import FinanceEngineError
from ..snapshots import Snapshot, load_snapshot


def parse_date_option(value: str | None) -> datetime:
    """
    Parse a --date/--as-of option, defaulting to now.

    The CLI is the only layer that reads the wall clock; calculators get
    the resulting instant explicitly.
    """
    if not value:
        return utc_now()
    instant = parse_instant(value)
    if instant is None:
        raise click.ClickException(f"Invalid date format: {value}. Use YYYY-MM-DD")
    return instant


def load_snapshot_or_fail(path: Path) -> Snapshot:
    """Load a snapshot file, converting engine errors into CLI errors."""
    try:
        return load_snapshot(path)
    except FinanceEngineError as e:
        raise click.ClickException(str(e)) from e
