"""Payroll Ledger command-line interface."""
