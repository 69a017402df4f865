"""French labor law compliance module for weekly restaurant schedules."""

from .types import (
    ComplianceContext,
    ComplianceRules,
    DailyStatus,
    Employee,
    LaborLawViolation,
    RestPeriodAnalysis,
    Shift,
    ViolationType,
    ViolationSeverity,
    Workday,
)
from .engine import (
    ComplianceEngine,
    InvalidWeekStartError,
    ScheduleValidation,
    validate_weekly_schedule,
)
from .notifications import CollectingSink, LoggingViolationSink, ViolationSink
from .rules import DEFAULT_RULESET, UnknownRulesetError, get_ruleset, register_ruleset
from .suggestions import generate_suggestions
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
from .workdays import build_workdays

__all__ = [
    "ComplianceContext",
    "ComplianceRules",
    "DailyStatus",
    "Employee",
    "LaborLawViolation",
    "RestPeriodAnalysis",
    "Shift",
    "ViolationType",
    "ViolationSeverity",
    "Workday",
    "ComplianceEngine",
    "InvalidWeekStartError",
    "ScheduleValidation",
    "validate_weekly_schedule",
    "CollectingSink",
    "LoggingViolationSink",
    "ViolationSink",
    "DEFAULT_RULESET",
    "UnknownRulesetError",
    "get_ruleset",
    "register_ruleset",
    "generate_suggestions",
    "BaseValidator",
    "ContractPeriodValidator",
    "DailyRestValidator",
    "CoupureValidator",
    "WeeklyRestValidator",
    "MaxDailyHoursValidator",
    "MaxWeeklyHoursValidator",
    "ConsecutiveDaysValidator",
    "build_workdays",
]
