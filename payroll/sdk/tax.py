"""Tax calculation.

Pure function - no config or records access. The whole gross is taxed at
the rate of the first bracket whose inclusive upper bound it does not
exceed. No rounding; rounding to cents is a presentation concern.
"""

from typing import Optional

from .rules import DEFAULT_RULES, PayrollRules


def calc_tax(gross: float, rules: Optional[PayrollRules] = None) -> float:
    """Calculate tax owed on a gross salary.

    Args:
        gross: Gross salary for the period (may be negative after leave deductions)
        rules: Optional rules override (defaults to built-in brackets)

    Returns:
        Tax amount

    Example:
        calc_tax(20000.0)   # -> 1000.0 (5%)
        calc_tax(20000.01)  # -> 2000.001 (10%)
        calc_tax(56250.0)   # -> 8437.5 (15%)
    """
    rules = rules or DEFAULT_RULES

    for bracket in rules.tax_brackets:
        if bracket.up_to is None or gross <= bracket.up_to:
            return gross * bracket.rate

    # Unreachable for validated rules (last bracket is open-ended)
    return gross * rules.tax_brackets[-1].rate
