"""Type definitions for the compliance module."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional


class ViolationType(str, Enum):
    """Types of labor law violations."""
    DAILY_REST = "daily_rest"
    WEEKLY_REST = "weekly_rest"
    MAX_DAILY_HOURS = "max_daily_hours"
    MAX_WEEKLY_HOURS = "max_weekly_hours"
    CONSECUTIVE_DAYS = "consecutive_days"
    CONTRACT_PERIOD = "contract_period"
    COUPURE_VIOLATION = "coupure_violation"


class ViolationSeverity(str, Enum):
    """Severity levels for violations."""
    CRITICAL = "critical"  # Makes the schedule non-compliant
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    ViolationSeverity.CRITICAL: 0,
    ViolationSeverity.WARNING: 1,
    ViolationSeverity.INFO: 2,
}


class DailyStatus(str, Enum):
    """Non-working markers a shift slot can carry instead of hours."""
    WEEKLY_REST = "WEEKLY_REST"
    CP = "CP"  # Congés payés
    PUBLIC_HOLIDAY = "PUBLIC_HOLIDAY"
    SICK_LEAVE = "SICK_LEAVE"
    ACCIDENT = "ACCIDENT"
    ABSENCE = "ABSENCE"


@dataclass(frozen=True)
class ComplianceRules:
    """
    Statutory and collective-agreement thresholds for one jurisdiction.

    Every checker reads its limits from here, so swapping the table swaps
    the rule set without touching checker logic.
    """
    jurisdiction: str = "FR_CHR"
    version: str = "2024.1"

    # Rest
    min_daily_rest_hours: float = 11.0  # Art. L3131-1
    min_weekly_rest_hours: float = 35.0  # 24h + 11h daily rest
    sunday_day_index: int = 6

    # Working time
    max_daily_hours: float = 10.0  # Art. L3121-18
    max_weekly_hours: float = 48.0  # Art. L3121-20
    max_consecutive_working_days: int = 6  # Art. L3132-1

    # CHR overtime bands: 35h-39h paid 110%, beyond 39h paid 125%
    overtime_110_threshold: float = 35.0
    overtime_125_threshold: float = 39.0
    standard_working_days_per_week: int = 6

    # Coupures (breaks between services on the same day)
    min_coupure_minutes: int = 60
    max_coupure_minutes: int = 240

    # Policy heuristic, not law: clock times before this hour are read as
    # the night after the shift's day. Tune per deployment.
    overnight_cutoff_hour: int = 6

    def with_overrides(self, **changes) -> "ComplianceRules":
        """Derive a new rule table with some thresholds changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "jurisdiction": self.jurisdiction,
            "version": self.version,
            "min_daily_rest_hours": self.min_daily_rest_hours,
            "min_weekly_rest_hours": self.min_weekly_rest_hours,
            "sunday_day_index": self.sunday_day_index,
            "max_daily_hours": self.max_daily_hours,
            "max_weekly_hours": self.max_weekly_hours,
            "max_consecutive_working_days": self.max_consecutive_working_days,
            "overtime_110_threshold": self.overtime_110_threshold,
            "overtime_125_threshold": self.overtime_125_threshold,
            "standard_working_days_per_week": self.standard_working_days_per_week,
            "min_coupure_minutes": self.min_coupure_minutes,
            "max_coupure_minutes": self.max_coupure_minutes,
            "overnight_cutoff_hour": self.overnight_cutoff_hour,
        }


@dataclass(frozen=True)
class Employee:
    """Contract information the engine needs about an employee."""
    id: str
    first_name: str
    last_name: str
    start_date: Optional[date]
    end_date: Optional[date] = None
    weekly_hours: float = 35.0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Shift:
    """A scheduled slot for one employee on one day of the week."""
    id: str
    employee_id: str
    day: int  # 0 = Monday ... 6 = Sunday
    start: Optional[str] = None  # HH:MM format
    end: Optional[str] = None  # HH:MM format
    status: Optional[DailyStatus] = None
    restaurant_id: Optional[str] = None

    @property
    def is_working(self) -> bool:
        """A shift counts as worked time only with both clocks and no status."""
        return bool(self.start and self.end) and self.status is None


@dataclass
class Workday:
    """All of one employee's working shifts on one calendar day."""
    day: int
    shifts: list[Shift]
    first_shift_start: datetime
    last_shift_end: datetime
    total_hours: float
    has_coupure: bool

    @property
    def shift_ids(self) -> list[str]:
        return [s.id for s in self.shifts]


@dataclass
class ComplianceContext:
    """Context for running compliance validation over one week."""
    rules: ComplianceRules
    employees: list[Employee]
    shifts: list[Shift]  # Shifts of every employee for the week
    week_start: date  # Monday of the evaluated week


@dataclass
class EmployeeWeekContext:
    """Everything the validators need to evaluate one employee's week."""
    employee: Employee
    shifts: list[Shift]  # All of the employee's shifts, status shifts included
    workdays: list[Workday]
    week_start: date
    rules: ComplianceRules


@dataclass(frozen=True)
class LaborLawViolation:
    """A single labor law violation."""
    id: str
    type: ViolationType
    severity: ViolationSeverity
    employee_id: str
    employee_name: str
    message: str
    suggestion: str
    legal_reference: str
    day: Optional[int] = None
    affected_shifts: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": self.id,
            "type": self.type.value,
            "severity": self.severity.value,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "day": self.day,
            "message": self.message,
            "suggestion": self.suggestion,
            "affected_shifts": list(self.affected_shifts),
            "legal_reference": self.legal_reference,
        }


@dataclass
class OvertimeBreakdown:
    """Worked hours falling in each CHR overtime pay band."""
    hours_at_110: float = 0.0
    hours_at_125: float = 0.0

    @property
    def total(self) -> float:
        return self.hours_at_110 + self.hours_at_125

    def to_dict(self) -> dict:
        return {
            "hours_at_110": round(self.hours_at_110, 2),
            "hours_at_125": round(self.hours_at_125, 2),
        }


@dataclass
class RestPeriodAnalysis:
    """Per-employee result of a weekly validation."""
    employee_id: str
    employee_name: str
    has_valid_daily_rest: bool = True
    has_valid_weekly_rest: bool = True
    consecutive_working_days: int = 0
    weekly_working_hours: float = 0.0
    violations: list[LaborLawViolation] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    assimilated_hours: float = 0.0
    overtime: OvertimeBreakdown = field(default_factory=OvertimeBreakdown)
    evaluated: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "has_valid_daily_rest": self.has_valid_daily_rest,
            "has_valid_weekly_rest": self.has_valid_weekly_rest,
            "consecutive_working_days": self.consecutive_working_days,
            "weekly_working_hours": round(self.weekly_working_hours, 2),
            "violations": [v.to_dict() for v in self.violations],
            "suggestions": list(self.suggestions),
            "assimilated_hours": round(self.assimilated_hours, 2),
            "overtime": self.overtime.to_dict(),
            "evaluated": self.evaluated,
        }
