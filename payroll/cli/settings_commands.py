"""Settings CLI commands: where payroll data lives and how it is validated."""

from pathlib import Path

import click
from pydantic import ValidationError

from payroll.sdk import (
    StoreConfig,
    get_rules_path,
    get_settings_path,
    is_strict,
    load_rules,
    load_settings,
    save_settings,
    set_setting,
)

ON_OFF = click.Choice(["on", "off"])


def _on_off(value: bool) -> str:
    return "on" if value else "off"


@click.group()
def settings():
    """Manage settings.json.

    \b
    Keys:
      data_dir           directory holding employees/leaves/salaries CSV files
      strict_validation  reject inverted leave dates and negative fields
      backup_on_save     keep a .bak copy of each CSV file on save
    """
    pass


@settings.command("show")
def settings_show():
    """Show effective settings, the rules file and the data files."""
    settings_path = get_settings_path()
    current = load_settings()
    config = StoreConfig.from_settings()
    rules_path = get_rules_path()

    click.echo(f"Settings file: {settings_path}{'' if settings_path.exists() else ' (not created)'}")
    click.echo(f"  strict_validation: {_on_off(is_strict())}")
    click.echo(f"  backup_on_save: {_on_off(config.backup)}")
    click.echo(f"  data_dir: {config.data_dir}{'' if 'data_dir' in current else ' (default)'}")

    click.echo()
    try:
        rules = load_rules(rules_path)
    except ValidationError as e:
        raise click.ClickException(f"Invalid rules file {rules_path}:\n{e}")
    click.echo(f"Rules file: {rules_path}{'' if rules_path.exists() else ' (not found, using built-in rules)'}")
    brackets = ", ".join(
        f"{b.rate:.0%} up to {b.up_to:,.0f}" if b.up_to is not None else f"{b.rate:.0%} above"
        for b in rules.tax_brackets
    )
    click.echo(f"  tax brackets: {brackets}")
    click.echo(f"  default_leave_days: {rules.default_leave_days}")

    click.echo()
    click.echo("Data files:")
    for label, path in (
        ("employees", config.employees_path),
        ("leaves", config.leaves_path),
        ("salaries", config.salaries_path),
    ):
        click.echo(f"  {label}: {path}{'' if path.exists() else ' (missing)'}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--clear", is_flag=True, help="Go back to the default XDG data directory.")
def settings_data_dir(path, clear):
    """Point payroll at a different data directory.

    Existing CSV files are not moved. With no PATH, prints the current
    data directory.

    \b
    Examples:
      payroll settings data-dir ~/payroll/data
      payroll settings data-dir --clear
    """
    if clear:
        current = load_settings()
        current.pop("data_dir", None)
        save_settings(current)
        click.echo(f"Cleared data_dir. Using {StoreConfig.from_settings().data_dir}")
        return

    if path is None:
        click.echo(str(StoreConfig.from_settings().data_dir))
        return

    data_path = path.expanduser().resolve()
    try:
        data_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise click.ClickException(f"Cannot use {data_path} as data directory: {e}")

    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")


@settings.command("strict")
@click.argument("state", type=ON_OFF)
def settings_strict(state):
    """Turn strict validation on or off."""
    set_setting("strict_validation", state == "on")
    click.echo(f"strict_validation: {state}")


@settings.command("backup")
@click.argument("state", type=ON_OFF)
def settings_backup(state):
    """Turn .bak copies on save on or off."""
    set_setting("backup_on_save", state == "on")
    click.echo(f"backup_on_save: {state}")
