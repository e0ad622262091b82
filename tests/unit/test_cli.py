"""Tests for the payroll CLI.

Uses isolated directories via tmp_path and PAYROLL_CONFIG_PATH
to avoid touching real data. Assertions use --json output where possible.
"""

import json
from datetime import date

import pytest
from click.testing import CliRunner

from payroll.cli.__main__ import cli
from payroll.cli.common import echo_json
from payroll.sdk import Leave


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config and data directories."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"

    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("PAYROLL_CONFIG_PATH", str(config_dir))

    settings = {"data_dir": str(data_dir)}
    (config_dir / "settings.json").write_text(json.dumps(settings))

    return {
        "config_dir": config_dir,
        "data_dir": data_dir,
    }


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(cli, list(args))


def add_developer(runner, employee_id="D001", basic="31000", experience="0"):
    return invoke(
        runner, "employee", "add-developer",
        "--id", employee_id, "--name", "Jane Developer", "--department", "Engineering",
        "--joining-date", "2023-02-01", "--basic-salary", basic,
        "--language", "Python", "--experience", experience,
    )


def add_manager(runner, employee_id="M001"):
    return invoke(
        runner, "employee", "add-manager",
        "--id", employee_id, "--name", "John Manager", "--joining-date", "2022-01-10",
        "--basic-salary", "50000", "--team-size", "5", "--management-level", "2",
    )


class TestEmployeeCommands:

    def test_add_and_list(self, isolated_env, runner):
        assert add_developer(runner).exit_code == 0
        assert add_manager(runner).exit_code == 0

        result = invoke(runner, "employee", "list", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [e["id"] for e in data] == ["D001", "M001"]
        assert data[1]["employee_type"] == "Manager"

        assert (isolated_env["data_dir"] / "employees.csv").read_text().count("\n") == 2

    def test_duplicate_id_fails(self, isolated_env, runner):
        add_developer(runner)
        result = add_developer(runner)
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_show_includes_pay(self, isolated_env, runner):
        add_developer(runner, basic="45000", experience="5")
        result = invoke(runner, "employee", "show", "D001", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["gross_salary"] == pytest.approx(56250.0)
        assert data["net_salary"] == pytest.approx(47812.5)
        assert data["available_leave_days"] == 20

    def test_show_table(self, isolated_env, runner):
        add_manager(runner)
        result = invoke(runner, "employee", "show", "M001")
        assert result.exit_code == 0
        assert "John Manager" in result.output
        assert "$61,250.00" in result.output

    def test_show_missing(self, isolated_env, runner):
        result = invoke(runner, "employee", "show", "NOPE")
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_update(self, isolated_env, runner):
        add_developer(runner)
        result = invoke(runner, "employee", "update", "D001", "--department", "Platform", "--basic-salary", "33000")
        assert result.exit_code == 0

        data = json.loads(invoke(runner, "employee", "show", "D001", "--json").output)
        assert data["department"] == "Platform"
        assert data["basic_salary"] == 33000.0

    def test_update_requires_a_field(self, isolated_env, runner):
        add_developer(runner)
        result = invoke(runner, "employee", "update", "D001")
        assert result.exit_code == 2

    def test_strict_flag_rejects_bad_level(self, isolated_env, runner):
        result = invoke(
            runner, "--strict", "employee", "add-manager", "--id", "M9", "--name", "Bad",
            "--basic-salary", "1000", "--management-level", "5",
        )
        assert result.exit_code != 0
        assert "management_level" in result.output

    def test_lenient_by_default(self, isolated_env, runner):
        result = invoke(
            runner, "employee", "add-manager", "--id", "M9", "--name", "Odd",
            "--basic-salary", "-1000", "--management-level", "5",
        )
        assert result.exit_code == 0

    def test_no_strict_overrides_setting(self, isolated_env, runner):
        invoke(runner, "settings", "strict", "on")
        args = ["employee", "add-manager", "--id", "M9", "--name", "Odd",
                "--basic-salary", "1000", "--management-level", "5"]
        assert invoke(runner, *args).exit_code != 0
        assert invoke(runner, "--no-strict", *args).exit_code == 0

    def test_deduct_leave(self, isolated_env, runner):
        add_developer(runner)
        result = invoke(runner, "employee", "deduct-leave", "D001", "5")
        assert result.exit_code == 0
        assert "15 remaining" in result.output

        data = json.loads(invoke(runner, "employee", "show", "D001", "--json").output)
        assert data["available_leave_days"] == 15

        result = invoke(runner, "employee", "deduct-leave", "D001", "16")
        assert result.exit_code != 0
        assert "Insufficient leave balance" in result.output

        result = invoke(runner, "employee", "deduct-leave", "NOPE", "1")
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_bad_date(self, isolated_env, runner):
        result = invoke(runner, "employee", "add-manager", "--id", "M9", "--name", "X",
                        "--basic-salary", "1", "--joining-date", "10/01/2022")
        assert result.exit_code == 2
        assert "YYYY-MM-DD" in result.output


class TestLeaveCommands:

    def test_apply_approve_list(self, isolated_env, runner):
        add_developer(runner)
        result = invoke(runner, "leave", "apply", "D001", "2024-01-30", "2024-02-02",
                        "--type", "SICK", "--reason", "flu, fever")
        assert result.exit_code == 0
        assert "4 days" in result.output

        assert invoke(runner, "leave", "approve", "D001", "2024-01-30").exit_code == 0

        data = json.loads(invoke(runner, "leave", "list", "D001", "--json").output)
        assert len(data) == 1
        assert data[0]["status"] == "APPROVED"
        assert data[0]["reason"] == "flu, fever"

    def test_approve_missing_fails(self, isolated_env, runner):
        result = invoke(runner, "leave", "approve", "D001", "2024-01-30")
        assert result.exit_code != 0
        assert "No pending leave" in result.output

    def test_reject(self, isolated_env, runner):
        invoke(runner, "leave", "apply", "D001", "2024-03-01", "2024-03-02")
        assert invoke(runner, "leave", "reject", "D001", "2024-03-01").exit_code == 0
        # Already rejected: nothing pending to approve
        assert invoke(runner, "leave", "approve", "D001", "2024-03-01").exit_code != 0

    def test_apply_warns_for_unknown_employee(self, isolated_env, runner):
        result = invoke(runner, "leave", "apply", "GHOST", "2024-03-01", "2024-03-02")
        assert result.exit_code == 0
        assert "Warning" in result.output

    def test_recent_and_undo_approved(self, isolated_env, runner):
        invoke(runner, "leave", "apply", "D001", "2024-01-10", "2024-01-11")
        invoke(runner, "leave", "apply", "D001", "2024-02-10", "2024-02-11")
        invoke(runner, "leave", "approve", "D001", "2024-02-10")

        recent = json.loads(invoke(runner, "leave", "recent", "--json").output)
        assert recent["start_date"] == "2024-02-10"

        result = invoke(runner, "leave", "undo")
        assert result.exit_code == 0
        assert "APPROVED" in result.output

        data = json.loads(invoke(runner, "leave", "list", "--json").output)
        assert [l["start_date"] for l in data] == ["2024-01-10"]

        assert invoke(runner, "leave", "undo").exit_code == 0
        result = invoke(runner, "leave", "undo")
        assert result.exit_code != 0
        assert "No leave applications" in result.output

    def test_invalid_type(self, isolated_env, runner):
        result = invoke(runner, "leave", "apply", "D001", "2024-01-10", "2024-01-11", "--type", "HOLIDAY")
        assert result.exit_code == 2

    def test_strict_setting_rejects_inverted_dates(self, isolated_env, runner):
        assert invoke(runner, "settings", "strict", "on").exit_code == 0
        result = invoke(runner, "leave", "apply", "D001", "2024-01-10", "2024-01-01")
        assert result.exit_code != 0
        assert "before start_date" in result.output


class TestSalaryCommands:

    def test_process_and_show(self, isolated_env, runner):
        add_developer(runner)
        add_manager(runner)
        invoke(runner, "leave", "apply", "D001", "2024-01-30", "2024-02-02")
        invoke(runner, "leave", "approve", "D001", "2024-01-30")

        result = invoke(runner, "salary", "process", "1", "2024", "--json")
        assert result.exit_code == 0
        processed = json.loads(result.output)
        assert len(processed) == 2

        shown = json.loads(invoke(runner, "salary", "show", "D001", "1", "2024", "--json").output)
        assert shown["leave_days"] == 2
        assert shown["gross_salary"] == pytest.approx(33650.0)
        assert shown["net_salary"] == pytest.approx(30285.0)

    def test_process_table_output(self, isolated_env, runner):
        add_manager(runner)
        result = invoke(runner, "salary", "process", "2", "2024")
        assert result.exit_code == 0
        assert "Processed 1 salary record(s) for 2/2024." in result.output
        assert "M001" in result.output

    def test_reprocess_keeps_first(self, isolated_env, runner):
        add_developer(runner)
        invoke(runner, "salary", "process", "1", "2024")
        invoke(runner, "employee", "update", "D001", "--basic-salary", "40000")
        invoke(runner, "salary", "process", "1", "2024")

        history = json.loads(invoke(runner, "salary", "history", "D001", "--json").output)
        assert [h["basic_salary"] for h in history] == [31000.0, 40000.0]

        shown = json.loads(invoke(runner, "salary", "show", "D001", "1", "2024", "--json").output)
        assert shown["basic_salary"] == 31000.0

    def test_show_missing(self, isolated_env, runner):
        result = invoke(runner, "salary", "show", "D001", "1", "2024")
        assert result.exit_code != 0
        assert "No salary record found" in result.output

    def test_month_out_of_range(self, isolated_env, runner):
        result = invoke(runner, "salary", "process", "13", "2024")
        assert result.exit_code == 2

    def test_pending_and_next(self, isolated_env, runner):
        add_developer(runner)
        invoke(runner, "salary", "process", "2", "2024")
        invoke(runner, "salary", "process", "1", "2024")

        pending = json.loads(invoke(runner, "salary", "pending", "D001", "--json").output)
        assert [p["month"] for p in pending] == [2, 1]

        nxt = json.loads(invoke(runner, "salary", "next", "D001", "--json").output)
        assert nxt["month"] == 2

        result = invoke(runner, "salary", "next", "NOPE")
        assert result.exit_code != 0


class TestSettingsCommands:

    def test_show(self, isolated_env, runner):
        result = invoke(runner, "settings", "show")
        assert result.exit_code == 0
        assert str(isolated_env["data_dir"]) in result.output
        assert "strict_validation: off" in result.output
        assert "backup_on_save: off" in result.output
        assert "using built-in rules" in result.output
        assert "5% up to 20,000, 10% up to 50,000, 15% above" in result.output
        assert str(isolated_env["data_dir"] / "salaries.csv") in result.output

    def test_show_reflects_toggles_and_rules(self, isolated_env, runner):
        invoke(runner, "settings", "strict", "on")
        invoke(runner, "settings", "backup", "on")
        (isolated_env["config_dir"] / "rules.yaml").write_text("default_leave_days: 25\n")

        result = invoke(runner, "settings", "show")
        assert "strict_validation: on" in result.output
        assert "backup_on_save: on" in result.output
        assert "default_leave_days: 25" in result.output
        assert "using built-in rules" not in result.output

    def test_show_invalid_rules(self, isolated_env, runner):
        (isolated_env["config_dir"] / "rules.yaml").write_text("allowances:\n  tehc: 0.2\n")
        result = invoke(runner, "settings", "show")
        assert result.exit_code != 0
        assert "Invalid rules file" in result.output

    def test_data_dir_set_and_clear(self, isolated_env, runner, tmp_path):
        target = tmp_path / "elsewhere"
        result = invoke(runner, "settings", "data-dir", str(target))
        assert result.exit_code == 0
        assert target.is_dir()

        add_manager(runner)
        assert (target / "employees.csv").exists()

        result = invoke(runner, "settings", "data-dir", "--clear")
        assert "Cleared data_dir" in result.output

    def test_backup_toggle(self, isolated_env, runner):
        assert invoke(runner, "settings", "backup", "on").exit_code == 0
        add_manager(runner)
        add_developer(runner)
        assert (isolated_env["data_dir"] / "employees.csv.bak").exists()


class TestEchoJson:

    def test_dict_printed_as_object(self, capsys):
        echo_json({"id": "D001", "gross_salary": 56250.0})
        assert json.loads(capsys.readouterr().out) == {"id": "D001", "gross_salary": 56250.0}

    def test_models_and_lists(self, capsys):
        leave = Leave(employee_id="D001", start_date=date(2024, 1, 1), end_date=date(2024, 1, 2))
        echo_json(leave)
        assert json.loads(capsys.readouterr().out)["status"] == "PENDING"

        echo_json([leave, leave])
        assert len(json.loads(capsys.readouterr().out)) == 2
