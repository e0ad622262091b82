"""Shared helpers for CLI command groups."""

import json
from datetime import date, datetime
from typing import Iterable, Mapping

import click
from pydantic import BaseModel
from rich.console import Console

from payroll.sdk import PayrollSystem


def make_console() -> Console:
    return Console(width=140)


def parse_date(ctx, param, value) -> date:
    """click callback: parse YYYY-MM-DD."""
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date format '{value}'. Use YYYY-MM-DD.")


def get_system(ctx: click.Context) -> PayrollSystem:
    """Load the payroll system once per invocation.

    Strict mode comes from the top-level --strict flag, else settings.json.
    """
    obj = ctx.ensure_object(dict)
    if "system" not in obj:
        obj["system"] = PayrollSystem.load(strict=obj.get("strict"))
    return obj["system"]


def echo_json(items) -> None:
    """Print a model, a list of models, or a plain dict as JSON."""
    if isinstance(items, BaseModel):
        data = items.model_dump(mode="json")
    elif isinstance(items, Mapping):
        data = dict(items)
    elif isinstance(items, Iterable):
        data = [item.model_dump(mode="json") for item in items]
    else:
        data = items
    click.echo(json.dumps(data, indent=2))
