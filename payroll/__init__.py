"""Payroll Ledger - employees, leave requests and monthly salary processing."""

__version__ = "0.1.0"
