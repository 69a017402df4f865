"""Reconstruct workdays from a week's shifts."""

import logging
from collections import defaultdict
from datetime import date

from utils.time import anchor_shift, anchor_time, parse_hhmm, shift_duration_hours

from .types import ComplianceRules, Shift, Workday

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7


def is_usable_working_shift(shift: Shift) -> bool:
    """A working shift whose day and clocks can be interpreted."""
    return (
        shift.is_working
        and isinstance(shift.day, int)
        and 0 <= shift.day < DAYS_IN_WEEK
        and parse_hhmm(shift.start) is not None
        and parse_hhmm(shift.end) is not None
    )


def working_shifts(shifts: list[Shift]) -> list[Shift]:
    """Filter to shifts that represent interpretable worked time."""
    return [s for s in shifts if is_usable_working_shift(s)]


def weekly_working_hours(shifts: list[Shift]) -> float:
    """Sum of worked shift durations, straight from the shifts."""
    return sum(shift_duration_hours(s.start, s.end) for s in working_shifts(shifts))


def working_days(shifts: list[Shift]) -> list[int]:
    """Sorted distinct day indices carrying worked time."""
    return sorted({s.day for s in working_shifts(shifts)})


def longest_consecutive_run(days: list[int]) -> int:
    """Length of the longest run of day indices increasing by exactly 1."""
    ordered = sorted(set(days))
    if not ordered:
        return 0

    longest = current = 1
    for prev, day in zip(ordered, ordered[1:]):
        current = current + 1 if day == prev + 1 else 1
        longest = max(longest, current)
    return longest


def build_workdays(shifts: list[Shift], week_start: date, rules: ComplianceRules) -> list[Workday]:
    """
    Group a week's working shifts into one Workday per calendar day.

    Args:
        shifts: Shifts of a single employee (status shifts are ignored)
        week_start: Monday of the evaluated week
        rules: Rule table providing the overnight cutoff hour

    Returns:
        Workdays sorted by day index. Days without worked time are absent.
    """
    shifts_by_day: dict[int, list[Shift]] = defaultdict(list)
    for shift in shifts:
        if is_usable_working_shift(shift):
            shifts_by_day[shift.day].append(shift)
        elif shift.is_working:
            logger.warning(
                f"Skipping shift {shift.id}: day {shift.day!r} / times "
                f"{shift.start!r}-{shift.end!r} cannot be interpreted"
            )

    cutoff = rules.overnight_cutoff_hour
    workdays = []
    for day, day_shifts in shifts_by_day.items():
        sorted_shifts = sorted(day_shifts, key=lambda s: parse_hhmm(s.start))

        first_start = anchor_time(week_start, day, sorted_shifts[0].start, cutoff)
        last = sorted_shifts[-1]
        _, last_end = anchor_shift(week_start, day, last.start, last.end, cutoff)
        total_hours = sum(shift_duration_hours(s.start, s.end) for s in sorted_shifts)

        workdays.append(Workday(
            day=day,
            shifts=sorted_shifts,
            first_shift_start=first_start,
            last_shift_end=last_end,
            total_hours=total_hours,
            has_coupure=len(sorted_shifts) > 1,
        ))

        logger.debug(
            f"Workday {day}: {len(sorted_shifts)} shift(s), "
            f"{first_start:%H:%M}-{last_end:%H:%M}, {total_hours:.1f}h"
        )

    return sorted(workdays, key=lambda w: w.day)
