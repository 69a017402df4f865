import pytest
from datetime import date

from compliance.rules import FR_CHR_RULES
from compliance.types import (
    ComplianceRules,
    DailyStatus,
    Employee,
    EmployeeWeekContext,
    Shift,
)
from compliance.workdays import build_workdays


@pytest.fixture
def week_start():
    """Monday 27 January 2025."""
    return date(2025, 1, 27)


@pytest.fixture
def rules():
    return FR_CHR_RULES


@pytest.fixture
def employee():
    return Employee(
        id="emp-1",
        first_name="Camille",
        last_name="Martin",
        start_date=date(2024, 1, 1),
        end_date=None,
        weekly_hours=35.0,
    )


@pytest.fixture
def make_employee():
    """Factory to create Employee objects."""
    def _make_employee(
        employee_id: str = "emp-1",
        start_date: date = date(2024, 1, 1),
        end_date: date = None,
        weekly_hours: float = 35.0,
        first_name: str = "Camille",
        last_name: str = "Martin",
    ) -> Employee:
        return Employee(
            id=employee_id,
            first_name=first_name,
            last_name=last_name,
            start_date=start_date,
            end_date=end_date,
            weekly_hours=weekly_hours,
        )
    return _make_employee


@pytest.fixture
def make_shift():
    """Factory to create Shift objects. Ids are generated when omitted."""
    counter = {"n": 0}

    def _make_shift(
        day: int,
        start: str = None,
        end: str = None,
        status: DailyStatus = None,
        employee_id: str = "emp-1",
        shift_id: str = None,
    ) -> Shift:
        counter["n"] += 1
        return Shift(
            id=shift_id or f"s{counter['n']}",
            employee_id=employee_id,
            day=day,
            start=start,
            end=end,
            status=status,
        )
    return _make_shift


@pytest.fixture
def make_context(employee, week_start, rules):
    """Factory to create an EmployeeWeekContext with workdays already built."""
    def _make_context(
        shifts: list[Shift],
        emp: Employee = None,
        rules_override: ComplianceRules = None,
    ) -> EmployeeWeekContext:
        active_rules = rules_override or rules
        return EmployeeWeekContext(
            employee=emp or employee,
            shifts=shifts,
            workdays=build_workdays(shifts, week_start, active_rules),
            week_start=week_start,
            rules=active_rules,
        )
    return _make_context


@pytest.fixture
def full_week(make_shift):
    """Factory for one shift per listed day with the same hours."""
    def _full_week(days, start="10:00", end="15:00", employee_id="emp-1"):
        return [make_shift(day, start, end, employee_id=employee_id) for day in days]
    return _full_week
