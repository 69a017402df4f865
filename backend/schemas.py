from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from compliance.types import DailyStatus, Employee, Shift

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class CamelModel(BaseModel):
    """Accepts both camelCase (scheduling UI) and snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeSchema(CamelModel):
    id: str
    first_name: str
    last_name: str
    start_date: date
    end_date: date | None = None
    weekly_hours: float = Field(default=35.0, ge=0)

    def to_domain(self) -> Employee:
        return Employee(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            start_date=self.start_date,
            end_date=self.end_date,
            weekly_hours=self.weekly_hours,
        )


class ShiftSchema(CamelModel):
    id: str
    employee_id: str
    restaurant_id: str | None = None
    day: int = Field(ge=0, le=6)  # 0 = Monday
    start: str | None = Field(default=None, pattern=HHMM_PATTERN)
    end: str | None = Field(default=None, pattern=HHMM_PATTERN)
    status: DailyStatus | None = None

    def to_domain(self) -> Shift:
        return Shift(
            id=self.id,
            employee_id=self.employee_id,
            day=self.day,
            start=self.start,
            end=self.end,
            status=self.status,
            restaurant_id=self.restaurant_id,
        )


class ValidateScheduleRequest(CamelModel):
    employees: list[EmployeeSchema]
    shifts: list[ShiftSchema] = []
    week_start_date: date  # Monday of the week: "2025-01-27"
    ruleset: str | None = None


class LaborLawViolationSchema(BaseModel):
    """Labor law violation detected in a weekly schedule."""
    id: str
    type: str  # "daily_rest", "weekly_rest", "coupure_violation", etc.
    severity: str  # "critical", "warning", "info"
    employee_id: str
    employee_name: str
    day: int | None = None
    message: str
    suggestion: str
    affected_shifts: list[str] = []
    legal_reference: str


class OvertimeSchema(BaseModel):
    hours_at_110: float = 0
    hours_at_125: float = 0


class RestPeriodAnalysisSchema(BaseModel):
    employee_id: str
    employee_name: str
    has_valid_daily_rest: bool
    has_valid_weekly_rest: bool
    consecutive_working_days: int
    weekly_working_hours: float
    violations: list[LaborLawViolationSchema] = []
    suggestions: list[str] = []
    assimilated_hours: float = 0
    overtime: OvertimeSchema
    evaluated: bool = True


class ViolationCounts(BaseModel):
    critical: int = 0
    warning: int = 0
    info: int = 0
    total: int = 0


class ValidateScheduleResponse(BaseModel):
    week_start_date: str  # ISO date string: "2025-01-27"
    ruleset: str
    generated_at: str
    is_compliant: bool
    counts: ViolationCounts
    analyses: list[RestPeriodAnalysisSchema]
    violations: list[LaborLawViolationSchema]


class ComplianceRulesSchema(BaseModel):
    jurisdiction: str
    version: str
    min_daily_rest_hours: float
    min_weekly_rest_hours: float
    sunday_day_index: int
    max_daily_hours: float
    max_weekly_hours: float
    max_consecutive_working_days: int
    overtime_110_threshold: float
    overtime_125_threshold: float
    standard_working_days_per_week: int
    min_coupure_minutes: int
    max_coupure_minutes: int
    overnight_cutoff_hour: int
