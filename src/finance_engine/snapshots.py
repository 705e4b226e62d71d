#!/usr/bin/env python3
"""
Snapshot Loader

Reads YAML snapshot files exported from the finance tracker's storage so the
CLI can run the calculators offline. Read-only: the engine never writes
storage.

Snapshot format (camelCase record keys, every section optional):

    cds:
      - id: cd-1
        principal: 10000
        interestRate: 4.5
        maturityDate: 2025-01-01
        cdCreatedAt: 2024-01-01
        compoundingFrequency: monthly
    pockets:
      - {id: p-1, type: normal, currency: USD}
    movements:
      - {id: m-1, pocketId: p-1, amount: 500, type: IngresoNormal}
    subPockets:
      - {id: sp-1, pocketId: p-2, valueTotal: 1200, periodicityMonths: 12, balance: 100}
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.errors import ValidationError
from .core.models import CDRecord, Movement, Pocket, SubPocket

logger = logging.getLogger(__name__)

SECTIONS = ("cds", "pockets", "movements", "subPockets")


@dataclass
class Snapshot:
    """Records loaded from a snapshot file."""

    cds: list[CDRecord] = field(default_factory=list)
    pockets: list[Pocket] = field(default_factory=list)
    movements: list[Movement] = field(default_factory=list)
    sub_pockets: list[SubPocket] = field(default_factory=list)

    def movements_for(self, pocket_id: str) -> list[Movement]:
        """Movements owned by a pocket."""
        return [movement for movement in self.movements if movement.pocket_id == pocket_id]

    def sub_pockets_for(self, pocket_id: str) -> list[SubPocket]:
        """Sub-pockets owned by a fixed pocket."""
        return [sub_pocket for sub_pocket in self.sub_pockets if sub_pocket.pocket_id == pocket_id]


def _records(data: dict[str, Any], section: str) -> list[dict[str, Any]]:
    records = data.get(section) or []
    if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
        raise ValidationError(section, "must be a list of records")
    return records


def parse_snapshot(data: dict[str, Any] | None) -> Snapshot:
    """
    Build a Snapshot from parsed YAML.

    Raises:
        ValidationError: If a section is malformed or a record is invalid
    """
    if data is None:
        return Snapshot()
    if not isinstance(data, dict):
        raise ValidationError("snapshot", "top level must be a mapping")

    unknown = sorted(set(data) - set(SECTIONS))
    if unknown:
        logger.warning(f"Ignoring unknown snapshot sections: {', '.join(unknown)}")

    return Snapshot(
        cds=[CDRecord.from_dict(record) for record in _records(data, "cds")],
        pockets=[Pocket.from_dict(record) for record in _records(data, "pockets")],
        movements=[Movement.from_dict(record) for record in _records(data, "movements")],
        sub_pockets=[SubPocket.from_dict(record) for record in _records(data, "subPockets")],
    )


def load_snapshot(path: Path) -> Snapshot:
    """
    Load a snapshot file.

    Args:
        path: YAML snapshot file

    Returns:
        Snapshot

    Raises:
        ValidationError: If the file is not valid YAML or holds invalid records
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError("snapshot", f"invalid YAML in {path}: {e}") from e

    snapshot = parse_snapshot(data)
    logger.debug(
        f"Loaded {path}: {len(snapshot.cds)} CDs, {len(snapshot.pockets)} pockets, "
        f"{len(snapshot.movements)} movements, {len(snapshot.sub_pockets)} sub-pockets"
    )
    return snapshot
