"""
Command Line Interface Package

Thin front-end that runs the calculators over YAML snapshot files.

Command Structure:
- finance-engine: Main entry point with utility commands (version, config)
- finance-engine cd: CD valuation, summary and early withdrawal
- finance-engine pockets: Pocket balances and fixed-expense planning

The CLI reads the wall clock when no date is given and passes the instant
to the calculators explicitly.
"""
