"""
Test Suite for the Finance Engine

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Workflows across snapshots, CDs and pockets

Test Categories:
- Core utilities (currency, dates, models, config)
- CD valuation and summaries
- Pocket balances and contributions
- CLI commands

Shared fixtures (pinned clock, sample CDs, snapshot file) live in conftest.py.
"""
