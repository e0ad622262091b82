"""Tests for employee, leave and salary schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from payroll.sdk.schemas import (
    Developer,
    Employee,
    Leave,
    LeaveStatus,
    Manager,
    Salary,
    parse_employee,
    validate_employee,
    validate_leave,
)


def make_manager(**overrides):
    fields = dict(
        id="M001", name="John Manager", email="john@company.com", phone="555-1234",
        department="Operations", joining_date=date(2022, 1, 10), basic_salary=50000.0,
        team_size=5, management_level=2,
    )
    fields.update(overrides)
    return Manager(**fields)


class TestEmployee:

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            Employee(id="E001", name="Nobody", joining_date=date(2024, 1, 1), basic_salary=1.0)

    def test_defaults(self):
        mgr = make_manager()
        assert mgr.employee_type == "Manager"
        assert mgr.available_leave_days == 20

    def test_id_is_frozen(self):
        mgr = make_manager()
        with pytest.raises(ValidationError):
            mgr.id = "M002"
        assert mgr.id == "M001"

    def test_other_fields_mutable(self):
        mgr = make_manager()
        mgr.department = "Finance"
        mgr.basic_salary = 60000
        assert mgr.department == "Finance"
        assert mgr.basic_salary == 60000.0

    def test_assignment_is_type_checked(self):
        mgr = make_manager()
        with pytest.raises(ValidationError):
            mgr.team_size = "lots"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            make_manager(programming_language="Go")

    def test_parse_employee_dispatches_on_tag(self):
        dev = parse_employee({
            "employee_type": "Developer", "id": "D001", "name": "Jane",
            "joining_date": "2023-02-01", "basic_salary": "45000.0",
            "programming_language": "Python", "experience_years": "5",
        })
        assert isinstance(dev, Developer)
        assert dev.experience_years == 5
        assert dev.joining_date == date(2023, 2, 1)

    def test_parse_employee_unknown_tag(self):
        with pytest.raises(ValidationError):
            parse_employee({"employee_type": "Intern", "id": "I1", "name": "X",
                            "joining_date": "2023-01-01", "basic_salary": 1})


class TestStrictChecks:

    def test_valid_employee_has_no_errors(self):
        assert validate_employee(make_manager()) == []

    def test_collects_all_problems(self):
        errors = validate_employee(make_manager(basic_salary=-1, team_size=-2, management_level=4))
        assert len(errors) == 3
        assert any("management_level" in e for e in errors)

    def test_developer_negative_experience(self):
        dev = Developer(id="D1", name="Jane", joining_date=date(2023, 1, 1), basic_salary=1000,
                        experience_years=-1)
        assert validate_employee(dev) == ["experience_years is negative: -1"]

    def test_inverted_leave(self):
        leave = Leave(employee_id="D1", start_date=date(2024, 3, 5), end_date=date(2024, 3, 1))
        assert len(validate_leave(leave)) == 1


class TestLeave:

    def test_defaults_to_pending(self):
        leave = Leave(employee_id="D1", start_date=date(2024, 1, 1), end_date=date(2024, 1, 3))
        assert leave.status == LeaveStatus.PENDING

    def test_duration_inclusive(self):
        leave = Leave(employee_id="D1", start_date=date(2024, 1, 30), end_date=date(2024, 2, 2))
        assert leave.duration() == 4

    def test_single_day(self):
        leave = Leave(employee_id="D1", start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))
        assert leave.duration() == 1

    def test_inverted_range_accepted(self):
        leave = Leave(employee_id="D1", start_date=date(2024, 1, 5), end_date=date(2024, 1, 1))
        assert leave.duration() == -3

    def test_invalid_status_rejected(self):
        leave = Leave(employee_id="D1", start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))
        with pytest.raises(ValidationError):
            leave.status = "MAYBE"


class TestSalary:

    def make(self, **overrides):
        fields = dict(
            employee_id="D001", basic_salary=45000.0, gross_salary=56250.0,
            tax_amount=8437.5, net_salary=47812.5, month=1, year=2024, leave_days=0,
        )
        fields.update(overrides)
        return Salary(**fields)

    def test_frozen(self):
        salary = self.make()
        with pytest.raises(ValidationError):
            salary.net_salary = 1.0

    def test_process_date_defaults_to_today(self):
        assert self.make().process_date == date.today()

    def test_net_must_match_gross_minus_tax(self):
        with pytest.raises(ValidationError, match="net_salary"):
            self.make(net_salary=50000.0)

    def test_month_range(self):
        with pytest.raises(ValidationError):
            self.make(month=13)
