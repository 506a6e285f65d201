"""Worklog - command-line time ledger for consultant hours."""

__version__ = "0.3.0"
