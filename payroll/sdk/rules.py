"""Payroll rules: tax brackets, allowance rates and leave defaults.

The built-in defaults are the organization's standing policy. A rules.yaml
in the config directory may override any of them; it is validated by the
PayrollRules schema so a typo fails loudly instead of silently changing pay.

Example rules.yaml:

    tax_brackets:
      - up_to: 20000
        rate: 0.05
      - up_to: 50000
        rate: 0.10
      - rate: 0.15
    allowances:
      tech: 0.15
      experience_bonus: 0.02
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import get_rules_path


# Tax rates (flat rate on the whole gross, bracket picked by upper bound)
TAX_RATE_LOW = 0.05  # gross <= 20000
TAX_RATE_MEDIUM = 0.10  # gross <= 50000
TAX_RATE_HIGH = 0.15  # gross > 50000
TAX_THRESHOLD_LOW = 20000.0
TAX_THRESHOLD_MEDIUM = 50000.0

# Allowance rates
TECH_ALLOWANCE = 0.15  # developers, fraction of basic
EXPERIENCE_BONUS = 0.02  # developers, per year of experience
MANAGEMENT_ALLOWANCE = 0.10  # managers, per management level
TEAM_SIZE_ALLOWANCE = 0.005  # managers, per team member

DEFAULT_LEAVE_DAYS = 20


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid")

    up_to: Optional[float] = Field(default=None, description="Inclusive upper bound (None for top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")


class AllowanceRates(BaseModel):
    """Role-specific allowance rates applied to basic salary."""
    model_config = ConfigDict(extra="forbid")

    tech: float = TECH_ALLOWANCE
    experience_bonus: float = EXPERIENCE_BONUS
    management: float = MANAGEMENT_ALLOWANCE
    team_size: float = TEAM_SIZE_ALLOWANCE


def _default_brackets() -> List[TaxBracket]:
    return [
        TaxBracket(up_to=TAX_THRESHOLD_LOW, rate=TAX_RATE_LOW),
        TaxBracket(up_to=TAX_THRESHOLD_MEDIUM, rate=TAX_RATE_MEDIUM),
        TaxBracket(up_to=None, rate=TAX_RATE_HIGH),
    ]


class PayrollRules(BaseModel):
    """Complete payroll rules."""
    model_config = ConfigDict(extra="forbid")

    tax_brackets: List[TaxBracket] = Field(default_factory=_default_brackets)
    allowances: AllowanceRates = Field(default_factory=AllowanceRates)
    default_leave_days: int = Field(default=DEFAULT_LEAVE_DAYS, ge=0)

    @model_validator(mode="after")
    def check_brackets(self) -> "PayrollRules":
        """Brackets must ascend and end with an open-ended top bracket."""
        errors = []
        if not self.tax_brackets:
            errors.append("tax_brackets must not be empty")
        else:
            if self.tax_brackets[-1].up_to is not None:
                errors.append("last tax bracket must omit up_to")
            bounds = [b.up_to for b in self.tax_brackets[:-1]]
            if any(b is None for b in bounds):
                errors.append("only the last tax bracket may omit up_to")
            elif bounds != sorted(bounds):
                errors.append("tax bracket bounds must ascend")

        if errors:
            raise ValueError("; ".join(errors))

        return self


DEFAULT_RULES = PayrollRules()


def load_rules(path: Optional[Path] = None) -> PayrollRules:
    """Load payroll rules from rules.yaml.

    Args:
        path: Optional explicit path (defaults to rules.yaml in config dir)

    Returns:
        PayrollRules from the file, or the built-in defaults if it doesn't exist

    Raises:
        pydantic.ValidationError: If the file exists but doesn't match the schema
    """
    rules_file = path or get_rules_path()
    if not rules_file.exists():
        return DEFAULT_RULES

    with open(rules_file, "r") as f:
        data = yaml.safe_load(f) or {}

    return PayrollRules.model_validate(data)
