"""Compliance validation engine that orchestrates all validators."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as date_parser

from .notifications import ViolationSink
from .rules import get_ruleset
from .suggestions import generate_suggestions
from .types import (
    ComplianceContext,
    ComplianceRules,
    DailyStatus,
    Employee,
    EmployeeWeekContext,
    LaborLawViolation,
    OvertimeBreakdown,
    RestPeriodAnalysis,
    Shift,
    ViolationSeverity,
    ViolationType,
)
from .validators import (
    BaseValidator,
    ContractPeriodValidator,
    DailyRestValidator,
    CoupureValidator,
    WeeklyRestValidator,
    MaxDailyHoursValidator,
    MaxWeeklyHoursValidator,
    ConsecutiveDaysValidator,
)
from .workdays import build_workdays, longest_consecutive_run, weekly_working_hours, working_days

logger = logging.getLogger(__name__)

DEFAULT_WEEKLY_HOURS = 35.0


class InvalidWeekStartError(ValueError):
    """Raised when the week start is not a Monday."""


@dataclass
class ScheduleValidation:
    """Result of validating a whole weekly schedule."""
    week_start: date
    rules: ComplianceRules
    analyses: list[RestPeriodAnalysis] = field(default_factory=list)

    def get_all_violations(self) -> list[LaborLawViolation]:
        return [v for analysis in self.analyses for v in analysis.violations]

    def get_violations_by_severity(self, severity: ViolationSeverity | str) -> list[LaborLawViolation]:
        severity = ViolationSeverity(severity)
        return [v for v in self.get_all_violations() if v.severity == severity]

    def is_schedule_compliant(self) -> bool:
        """
        Compliant means no critical violation; warnings and infos do not count.

        A schedule with an employee that could not be evaluated is never compliant.
        """
        if not all(a.evaluated for a in self.analyses):
            return False
        return not self.get_violations_by_severity(ViolationSeverity.CRITICAL)

    @property
    def severity_counts(self) -> dict[str, int]:
        counts = {s.value: 0 for s in ViolationSeverity}
        for v in self.get_all_violations():
            counts[v.severity.value] += 1
        counts["total"] = sum(counts.values())
        return counts

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "week_start_date": self.week_start.isoformat(),
            "ruleset": self.rules.jurisdiction,
            "is_compliant": self.is_schedule_compliant(),
            "counts": self.severity_counts,
            "analyses": [a.to_dict() for a in self.analyses],
            "violations": [v.to_dict() for v in self.get_all_violations()],
        }


class ComplianceEngine:
    """
    Main engine for running labor law validation.

    Runs every validator for each employee independently and aggregates the
    results. Holds no state between calls.
    """

    def __init__(self, rules: Optional[ComplianceRules] = None, sink: Optional[ViolationSink] = None):
        """Initialize with all validators, in evaluation order."""
        self.rules = rules or get_ruleset()
        self.sink = sink
        self.validators: list[BaseValidator] = [
            ContractPeriodValidator(),
            DailyRestValidator(),
            CoupureValidator(),
            WeeklyRestValidator(),
            MaxDailyHoursValidator(),
            MaxWeeklyHoursValidator(),
            ConsecutiveDaysValidator(),
        ]

    def validate(self, context: ComplianceContext) -> ScheduleValidation:
        """
        Run all compliance validations for a week.

        Args:
            context: The compliance context with rules, employees, shifts and week start

        Returns:
            ScheduleValidation with one analysis per employee, in input order

        Raises:
            InvalidWeekStartError: If the week start is not a Monday
        """
        week_start = _to_date(context.week_start)
        if week_start.weekday() != 0:
            raise InvalidWeekStartError(f"Week start {week_start.isoformat()} is not a Monday")

        shifts_by_employee: dict[str, list[Shift]] = defaultdict(list)
        for shift in context.shifts:
            shifts_by_employee[shift.employee_id].append(shift)

        result = ScheduleValidation(week_start=week_start, rules=context.rules)
        for employee in context.employees:
            employee_shifts = shifts_by_employee.get(employee.id, [])
            try:
                analysis = self.analyze_employee(employee, employee_shifts, week_start, context.rules)
            except Exception:
                logger.exception(f"Validation failed for employee {employee.id}; skipping")
                analysis = RestPeriodAnalysis(
                    employee_id=employee.id,
                    employee_name=employee.full_name,
                    evaluated=False,
                )
            result.analyses.append(analysis)

        if self.sink is not None:
            for violation in result.get_violations_by_severity(ViolationSeverity.CRITICAL):
                self.sink.notify(violation)

        counts = result.severity_counts
        logger.info(
            f"Labor law validation for week of {week_start.isoformat()}: "
            f"{len(context.employees)} employees, {counts['total']} violations "
            f"({counts['critical']} critical)"
        )
        return result

    def analyze_employee(
        self,
        employee: Employee,
        shifts: list[Shift],
        week_start: date,
        rules: Optional[ComplianceRules] = None,
    ) -> RestPeriodAnalysis:
        """Evaluate every rule for one employee's week."""
        rules = rules or self.rules
        workdays = build_workdays(shifts, week_start, rules)
        context = EmployeeWeekContext(
            employee=employee,
            shifts=shifts,
            workdays=workdays,
            week_start=week_start,
            rules=rules,
        )

        violations: list[LaborLawViolation] = []
        seen_ids: set[str] = set()
        for validator in self.validators:
            for violation in validator.validate(context):
                if violation.id in seen_ids:
                    continue
                seen_ids.add(violation.id)
                violations.append(violation)

        weekly_hours = weekly_working_hours(shifts)
        found_types = {v.type for v in violations}

        return RestPeriodAnalysis(
            employee_id=employee.id,
            employee_name=employee.full_name,
            has_valid_daily_rest=ViolationType.DAILY_REST not in found_types,
            has_valid_weekly_rest=ViolationType.WEEKLY_REST not in found_types,
            consecutive_working_days=longest_consecutive_run(working_days(shifts)),
            weekly_working_hours=weekly_hours,
            violations=violations,
            suggestions=generate_suggestions(violations, rules),
            assimilated_hours=assimilated_hours(employee, shifts, rules),
            overtime=overtime_breakdown(weekly_hours, rules),
        )

    @classmethod
    def build_context(
        cls,
        employees: list[dict],
        shifts: list[dict],
        week_start: date | datetime | str,
        rules: Optional[ComplianceRules] = None,
    ) -> ComplianceContext:
        """
        Build a ComplianceContext from raw data.

        Entry point for library callers holding raw dicts rather than typed
        data (the HTTP layer validates through its own schemas). Keys may be
        camelCase (as sent by the scheduling UI) or snake_case. Malformed
        fields are logged and dropped or defaulted, never raised.

        Args:
            employees: Employee dicts with id, firstName, lastName, startDate, endDate, weeklyHours
            shifts: Shift dicts with id, employeeId, day, start, end, status
            week_start: Monday of the week, as a date or ISO string
            rules: Rule table, defaults to the default ruleset

        Returns:
            ComplianceContext ready for validation
        """
        employee_list = [cls._employee_from_dict(e) for e in employees]
        shift_list = [s for s in (cls._shift_from_dict(raw) for raw in shifts) if s is not None]

        return ComplianceContext(
            rules=rules or get_ruleset(),
            employees=employee_list,
            shifts=shift_list,
            week_start=_to_date(week_start),
        )

    @staticmethod
    def _employee_from_dict(raw: dict) -> Employee:
        employee_id = str(raw.get("id", ""))
        weekly_hours = _get(raw, "weekly_hours", "weeklyHours")
        return Employee(
            id=employee_id,
            first_name=_get(raw, "first_name", "firstName") or "",
            last_name=_get(raw, "last_name", "lastName") or "",
            start_date=_parse_optional_date(_get(raw, "start_date", "startDate"), employee_id),
            end_date=_parse_optional_date(_get(raw, "end_date", "endDate"), employee_id),
            weekly_hours=_parse_weekly_hours(weekly_hours, employee_id),
        )

    @staticmethod
    def _shift_from_dict(raw: dict) -> Optional[Shift]:
        shift_id = str(raw.get("id", ""))
        try:
            day = int(raw.get("day"))
        except (TypeError, ValueError):
            logger.warning(f"Skipping shift {shift_id}: invalid day {raw.get('day')!r}")
            return None

        status = raw.get("status") or None
        if status is not None:
            try:
                status = DailyStatus(status)
            except ValueError:
                logger.warning(f"Shift {shift_id}: unknown status {status!r}, treated as absence")
                status = DailyStatus.ABSENCE

        return Shift(
            id=shift_id,
            employee_id=str(_get(raw, "employee_id", "employeeId")),
            day=day,
            start=raw.get("start") or None,
            end=raw.get("end") or None,
            status=status,
            restaurant_id=_get(raw, "restaurant_id", "restaurantId"),
        )


def validate_weekly_schedule(
    employees: list[Employee],
    shifts: list[Shift],
    week_start: date,
    rules: Optional[ComplianceRules] = None,
    sink: Optional[ViolationSink] = None,
) -> ScheduleValidation:
    """
    Validate a week of shifts against the labor law rule table.

    This is a convenience function for callers holding typed data.
    """
    rules = rules or get_ruleset()
    engine = ComplianceEngine(rules=rules, sink=sink)
    context = ComplianceContext(
        rules=rules,
        employees=list(employees),
        shifts=list(shifts),
        week_start=week_start,
    )
    return engine.validate(context)


def assimilated_hours(employee: Employee, shifts: list[Shift], rules: ComplianceRules) -> float:
    """Paid-leave days count as contracted daily hours toward contract coverage."""
    leave_days = {s.day for s in shifts if s.status == DailyStatus.CP}
    daily_contract_hours = employee.weekly_hours / rules.standard_working_days_per_week
    return len(leave_days) * daily_contract_hours


def overtime_breakdown(weekly_hours: float, rules: ComplianceRules) -> OvertimeBreakdown:
    """Split hours beyond the CHR thresholds into the 110% and 125% pay bands."""
    band_110 = rules.overtime_125_threshold - rules.overtime_110_threshold
    return OvertimeBreakdown(
        hours_at_110=min(max(weekly_hours - rules.overtime_110_threshold, 0.0), band_110),
        hours_at_125=max(weekly_hours - rules.overtime_125_threshold, 0.0),
    )


def _get(raw: dict, snake: str, camel: str) -> Any:
    return raw[snake] if snake in raw else raw.get(camel)


def _to_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value).date()


def _parse_optional_date(value: Any, employee_id: str) -> Optional[date]:
    if value is None or value == "":
        return None
    try:
        return _to_date(value)
    except (TypeError, ValueError):
        logger.warning(f"Employee {employee_id}: unparseable contract date {value!r}, bound ignored")
        return None


def _parse_weekly_hours(value: Any, employee_id: str) -> float:
    if value is None or value == "":
        return DEFAULT_WEEKLY_HOURS
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(
            f"Employee {employee_id}: invalid weekly hours {value!r}, using {DEFAULT_WEEKLY_HOURS}"
        )
        return DEFAULT_WEEKLY_HOURS
