"""Compliance validators for French labor law (Code du travail + CHR convention)."""

import logging
from abc import ABC, abstractmethod
from datetime import timedelta

from utils.time import day_name, format_hours, hours_between, minutes_between, anchor_shift, anchor_time

from .types import (
    DailyStatus,
    EmployeeWeekContext,
    LaborLawViolation,
    ViolationSeverity,
    ViolationType,
)
from .workdays import longest_consecutive_run, working_days, DAYS_IN_WEEK

logger = logging.getLogger(__name__)


class BaseValidator(ABC):
    """Base class for compliance validators."""

    @abstractmethod
    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        """Return the violations found for one employee's week."""
        pass


class ContractPeriodValidator(BaseValidator):
    """Flags shifts dated outside the employee's contract window."""

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        violations = []

        for shift in context.shifts:
            if not isinstance(shift.day, int) or not 0 <= shift.day < DAYS_IN_WEEK:
                logger.warning(f"Contract check skipped for shift {shift.id}: day {shift.day!r} outside 0-6")
                continue

            shift_date = context.week_start + timedelta(days=shift.day)

            if employee.start_date and shift_date < employee.start_date:
                violations.append(LaborLawViolation(
                    id=f"contract-start-{employee.id}-{shift.id}",
                    type=ViolationType.CONTRACT_PERIOD,
                    severity=ViolationSeverity.CRITICAL,
                    employee_id=employee.id,
                    employee_name=employee.full_name,
                    day=shift.day,
                    message=f"Service planifié le {shift_date:%d/%m/%Y}, avant le début du contrat ({employee.start_date:%d/%m/%Y})",
                    suggestion="Supprimer ce service ou modifier la date de début du contrat",
                    affected_shifts=(shift.id,),
                    legal_reference="Code du travail - Période contractuelle",
                ))

            if employee.end_date and shift_date > employee.end_date:
                violations.append(LaborLawViolation(
                    id=f"contract-end-{employee.id}-{shift.id}",
                    type=ViolationType.CONTRACT_PERIOD,
                    severity=ViolationSeverity.CRITICAL,
                    employee_id=employee.id,
                    employee_name=employee.full_name,
                    day=shift.day,
                    message=f"Service planifié le {shift_date:%d/%m/%Y}, après la fin du contrat ({employee.end_date:%d/%m/%Y})",
                    suggestion="Supprimer ce service ou prolonger le contrat",
                    affected_shifts=(shift.id,),
                    legal_reference="Code du travail - Période contractuelle",
                ))

        return violations


class DailyRestValidator(BaseValidator):
    """
    Validates the 11h daily rest between workdays.

    Rest is measured between the last activity of one workday and the first
    activity of the next. Breaks between shifts of the same day are coupures
    and are handled by CoupureValidator.
    """

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        rules = context.rules
        violations = []

        for current, following in zip(context.workdays, context.workdays[1:]):
            rest_hours = hours_between(current.last_shift_end, following.first_shift_start)

            logger.debug(
                f"{employee.full_name}: rest between day {current.day} and day {following.day} "
                f"is {rest_hours:.2f}h"
            )

            if rest_hours < rules.min_daily_rest_hours:
                earliest_start = current.last_shift_end + timedelta(hours=rules.min_daily_rest_hours)
                violations.append(LaborLawViolation(
                    id=f"daily-rest-{employee.id}-{current.day}-{following.day}",
                    type=ViolationType.DAILY_REST,
                    severity=ViolationSeverity.CRITICAL,
                    employee_id=employee.id,
                    employee_name=employee.full_name,
                    day=following.day,
                    message=(
                        f"Repos quotidien insuffisant : {format_hours(rest_hours)} au lieu de "
                        f"{rules.min_daily_rest_hours:g}h minimum entre la fin du {day_name(current.day)} "
                        f"({current.last_shift_end:%H:%M}) et le début du {day_name(following.day)} "
                        f"({following.first_shift_start:%H:%M})"
                    ),
                    suggestion=(
                        f"Décaler le premier service du {day_name(following.day)} à "
                        f"{earliest_start:%H:%M} ou terminer plus tôt le {day_name(current.day)}"
                    ),
                    affected_shifts=tuple(current.shift_ids + following.shift_ids),
                    legal_reference="Article L3131-1 Code du travail - Repos quotidien entre journées de travail",
                ))

        return violations


class CoupureValidator(BaseValidator):
    """Validates breaks between services within the same workday (CHR)."""

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        rules = context.rules
        cutoff = rules.overnight_cutoff_hour
        violations = []

        for workday in context.workdays:
            if not workday.has_coupure:
                continue

            for i, (current, following) in enumerate(zip(workday.shifts, workday.shifts[1:])):
                _, current_end = anchor_shift(context.week_start, workday.day, current.start, current.end, cutoff)
                next_start = anchor_time(context.week_start, workday.day, following.start, cutoff)
                break_minutes = minutes_between(current_end, next_start)
                services = f"{current.start}-{current.end} et {following.start}-{following.end}"

                if break_minutes < 0:
                    logger.warning(
                        f"{employee.full_name}: overlapping shifts on day {workday.day} ({services})"
                    )

                if break_minutes < rules.min_coupure_minutes:
                    violations.append(LaborLawViolation(
                        id=f"coupure-min-{employee.id}-{workday.day}-{i}",
                        type=ViolationType.COUPURE_VIOLATION,
                        severity=ViolationSeverity.WARNING,
                        employee_id=employee.id,
                        employee_name=employee.full_name,
                        day=workday.day,
                        message=(
                            f"Coupure trop courte le {day_name(workday.day)} : {break_minutes:.0f}min au lieu de "
                            f"{rules.min_coupure_minutes}min minimum entre {services}"
                        ),
                        suggestion=f"Allonger la coupure à au moins {rules.min_coupure_minutes}min ou grouper les services",
                        affected_shifts=(current.id, following.id),
                        legal_reference="Convention collective CHR - Durée minimale des coupures",
                    ))

                if break_minutes > rules.max_coupure_minutes:
                    violations.append(LaborLawViolation(
                        id=f"coupure-max-{employee.id}-{workday.day}-{i}",
                        type=ViolationType.COUPURE_VIOLATION,
                        severity=ViolationSeverity.INFO,
                        employee_id=employee.id,
                        employee_name=employee.full_name,
                        day=workday.day,
                        message=(
                            f"Coupure très longue le {day_name(workday.day)} : "
                            f"{format_hours(break_minutes / 60)} entre {services}"
                        ),
                        suggestion="Vérifier si cette longue coupure est justifiée ou considérer comme deux journées de travail distinctes",
                        affected_shifts=(current.id, following.id),
                        legal_reference="Convention collective CHR - Gestion des coupures prolongées",
                    ))

        return violations


class WeeklyRestValidator(BaseValidator):
    """Validates the 35h weekly rest and the CHR Sunday rest preference."""

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        rules = context.rules
        violations = []

        worked = set(working_days(context.shifts))
        rest_days = {s.day for s in context.shifts if s.status == DailyStatus.WEEKLY_REST}

        if len(worked) >= rules.standard_working_days_per_week and not rest_days:
            violations.append(LaborLawViolation(
                id=f"weekly-rest-{employee.id}",
                type=ViolationType.WEEKLY_REST,
                severity=ViolationSeverity.CRITICAL,
                employee_id=employee.id,
                employee_name=employee.full_name,
                message=(
                    f"Repos hebdomadaire manquant : {len(worked)} jours de travail sans repos de "
                    f"{rules.min_weekly_rest_hours:g}h consécutives"
                ),
                suggestion=(
                    f"Planifier un repos hebdomadaire de {rules.min_weekly_rest_hours:g}h consécutives, "
                    "de préférence incluant le dimanche"
                ),
                affected_shifts=tuple(s.id for s in context.shifts),
                legal_reference="Article L3132-2 Code du travail + Convention CHR",
            ))

        sunday = rules.sunday_day_index
        if sunday in worked and sunday not in rest_days:
            violations.append(LaborLawViolation(
                id=f"sunday-rest-{employee.id}",
                type=ViolationType.WEEKLY_REST,
                severity=ViolationSeverity.WARNING,
                employee_id=employee.id,
                employee_name=employee.full_name,
                day=sunday,
                message="Travail le dimanche sans repos compensateur désigné",
                suggestion="Prévoir un repos compensateur ou justifier le travail dominical selon la convention CHR",
                affected_shifts=tuple(s.id for s in context.shifts if s.day == sunday),
                legal_reference="Convention collective CHR - Repos dominical",
            ))

        return violations


class MaxDailyHoursValidator(BaseValidator):
    """Validates the 10h daily working time ceiling."""

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        rules = context.rules

        return [
            LaborLawViolation(
                id=f"daily-hours-{employee.id}-{workday.day}",
                type=ViolationType.MAX_DAILY_HOURS,
                severity=ViolationSeverity.CRITICAL,
                employee_id=employee.id,
                employee_name=employee.full_name,
                day=workday.day,
                message=(
                    f"Dépassement du temps de travail quotidien : {format_hours(workday.total_hours)} au lieu de "
                    f"{rules.max_daily_hours:g}h maximum le {day_name(workday.day)}"
                ),
                suggestion=f"Réduire les heures du {day_name(workday.day)} ou répartir sur plusieurs jours",
                affected_shifts=tuple(workday.shift_ids),
                legal_reference="Article L3121-18 Code du travail",
            )
            for workday in context.workdays
            if workday.total_hours > rules.max_daily_hours
        ]


class MaxWeeklyHoursValidator(BaseValidator):
    """Validates the 48h weekly working time ceiling."""

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        rules = context.rules
        weekly_hours = sum(w.total_hours for w in context.workdays)

        if weekly_hours <= rules.max_weekly_hours:
            return []

        return [LaborLawViolation(
            id=f"weekly-hours-{employee.id}",
            type=ViolationType.MAX_WEEKLY_HOURS,
            severity=ViolationSeverity.CRITICAL,
            employee_id=employee.id,
            employee_name=employee.full_name,
            message=(
                f"Dépassement du temps de travail hebdomadaire : {format_hours(weekly_hours)} au lieu de "
                f"{rules.max_weekly_hours:g}h maximum"
            ),
            suggestion="Réduire les heures de travail ou répartir sur plusieurs semaines",
            affected_shifts=tuple(s.id for w in context.workdays for s in w.shifts),
            legal_reference="Article L3121-20 Code du travail",
        )]


class ConsecutiveDaysValidator(BaseValidator):
    """Validates the maximum run of consecutive working days within the week."""

    def validate(self, context: EmployeeWeekContext) -> list[LaborLawViolation]:
        employee = context.employee
        rules = context.rules
        consecutive = longest_consecutive_run(working_days(context.shifts))

        if consecutive <= rules.max_consecutive_working_days:
            return []

        return [LaborLawViolation(
            id=f"consecutive-days-{employee.id}",
            type=ViolationType.CONSECUTIVE_DAYS,
            severity=ViolationSeverity.CRITICAL,
            employee_id=employee.id,
            employee_name=employee.full_name,
            message=(
                f"Trop de jours consécutifs : {consecutive} jours au lieu de "
                f"{rules.max_consecutive_working_days} maximum"
            ),
            suggestion=(
                f"Insérer un jour de repos après {rules.max_consecutive_working_days} "
                "jours de travail consécutifs"
            ),
            affected_shifts=tuple(s.id for w in context.workdays for s in w.shifts),
            legal_reference="Article L3132-1 Code du travail",
        )]
