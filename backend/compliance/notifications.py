"""Violation sinks: how the engine hands violations to a notification layer."""

import logging
from typing import Protocol

from .types import LaborLawViolation, ViolationSeverity

logger = logging.getLogger(__name__)


class ViolationSink(Protocol):
    """Receives violations found during a validation run."""

    def notify(self, violation: LaborLawViolation) -> None:
        ...


class LoggingViolationSink:
    """
    Logs violations at or above a severity threshold.

    Each (type, employee) pair is reported once per sink until reset() is
    called. Keys carry no week, so use one sink per validation run or reset
    it between weeks.
    """

    _LEVELS = {
        ViolationSeverity.CRITICAL: logging.ERROR,
        ViolationSeverity.WARNING: logging.WARNING,
        ViolationSeverity.INFO: logging.INFO,
    }

    def __init__(self, min_severity: ViolationSeverity = ViolationSeverity.CRITICAL):
        self.min_severity = min_severity
        self._seen: set[tuple[str, str]] = set()

    def notify(self, violation: LaborLawViolation) -> None:
        if violation.severity.rank > self.min_severity.rank:
            return

        key = (violation.type.value, violation.employee_id)
        if key in self._seen:
            return
        self._seen.add(key)

        logger.log(
            self._LEVELS[violation.severity],
            f"Code du travail: {violation.employee_name}: {violation.message}",
        )

    def reset(self) -> None:
        self._seen.clear()


class CollectingSink:
    """Keeps every notified violation, in order."""

    def __init__(self):
        self.violations: list[LaborLawViolation] = []

    def notify(self, violation: LaborLawViolation) -> None:
        self.violations.append(violation)
