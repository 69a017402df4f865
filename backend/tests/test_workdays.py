"""Tests for workday construction from shifts."""

import pytest
from datetime import datetime

from compliance.types import DailyStatus, Shift
from compliance.workdays import (
    build_workdays,
    longest_consecutive_run,
    weekly_working_hours,
    working_days,
)


class TestBuildWorkdays:

    def test_single_shift_workday(self, make_shift, week_start, rules):
        workdays = build_workdays([make_shift(0, "09:00", "17:00")], week_start, rules)

        assert len(workdays) == 1
        workday = workdays[0]
        assert workday.day == 0
        assert workday.first_shift_start == datetime(2025, 1, 27, 9, 0)
        assert workday.last_shift_end == datetime(2025, 1, 27, 17, 0)
        assert workday.total_hours == 8.0
        assert workday.has_coupure is False

    def test_same_day_shifts_merge_into_one_workday(self, make_shift, week_start, rules):
        lunch = make_shift(1, "10:00", "14:30")
        dinner = make_shift(1, "18:00", "23:00")

        workdays = build_workdays([dinner, lunch], week_start, rules)

        assert len(workdays) == 1
        workday = workdays[0]
        assert [s.id for s in workday.shifts] == [lunch.id, dinner.id]
        assert workday.first_shift_start == datetime(2025, 1, 28, 10, 0)
        assert workday.last_shift_end == datetime(2025, 1, 28, 23, 0)
        assert workday.total_hours == 9.5
        assert workday.has_coupure is True

    def test_shifts_sorted_by_clock_not_text(self, make_shift, week_start, rules):
        late = make_shift(0, "10:00", "12:00")
        early = make_shift(0, "9:00", "9:30")

        workdays = build_workdays([late, early], week_start, rules)

        # As text "10:00" < "9:00"; as clock times 09:00 comes first
        assert [s.id for s in workdays[0].shifts] == [early.id, late.id]

    def test_overnight_shift_ends_next_calendar_day(self, make_shift, week_start, rules):
        workdays = build_workdays([make_shift(2, "22:00", "02:00")], week_start, rules)

        workday = workdays[0]
        assert workday.first_shift_start == datetime(2025, 1, 29, 22, 0)
        assert workday.last_shift_end == datetime(2025, 1, 30, 2, 0)
        assert workday.total_hours == 4.0

    def test_end_before_start_after_cutoff_rolls_forward(self, make_shift, week_start, rules):
        workdays = build_workdays([make_shift(0, "23:00", "07:00")], week_start, rules)

        workday = workdays[0]
        assert workday.first_shift_start == datetime(2025, 1, 27, 23, 0)
        assert workday.last_shift_end == datetime(2025, 1, 28, 7, 0)
        assert workday.total_hours == 8.0

    def test_status_shifts_are_ignored(self, make_shift, week_start, rules):
        shifts = [
            make_shift(0, status=DailyStatus.WEEKLY_REST),
            make_shift(1, "09:00", "12:00", status=DailyStatus.PUBLIC_HOLIDAY),
            make_shift(2, "09:00", "12:00"),
        ]

        workdays = build_workdays(shifts, week_start, rules)

        assert [w.day for w in workdays] == [2]

    def test_shifts_missing_clock_are_ignored(self, make_shift, week_start, rules):
        shifts = [make_shift(0, "09:00", None), make_shift(1, None, "12:00")]

        assert build_workdays(shifts, week_start, rules) == []

    def test_unparseable_and_out_of_range_shifts_are_skipped(self, make_shift, week_start, rules):
        shifts = [
            make_shift(0, "25:00", "26:00"),
            make_shift(9, "09:00", "12:00"),
            make_shift(-1, "09:00", "12:00"),
            make_shift(3, "09:00", "12:00"),
        ]

        workdays = build_workdays(shifts, week_start, rules)

        assert [w.day for w in workdays] == [3]

    def test_output_sorted_by_day(self, make_shift, week_start, rules):
        shifts = [make_shift(d, "09:00", "12:00") for d in (5, 0, 3)]

        workdays = build_workdays(shifts, week_start, rules)

        assert [w.day for w in workdays] == [0, 3, 5]

    def test_no_shifts_no_workdays(self, week_start, rules):
        assert build_workdays([], week_start, rules) == []


class TestWeeklyHours:

    def test_weekly_hours_match_workday_totals(self, make_shift, week_start, rules):
        shifts = [
            make_shift(0, "10:00", "14:00"),
            make_shift(0, "18:00", "23:30"),
            make_shift(2, "22:00", "02:00"),
            make_shift(3, status=DailyStatus.CP),
            make_shift(4, "11:15", "15:45"),
            make_shift(5, "bad", "15:00"),
        ]

        workdays = build_workdays(shifts, week_start, rules)

        assert sum(w.total_hours for w in workdays) == pytest.approx(weekly_working_hours(shifts))
        assert weekly_working_hours(shifts) == pytest.approx(4 + 5.5 + 4 + 4.5)

    def test_working_days_are_distinct_and_sorted(self, make_shift):
        shifts = [
            make_shift(4, "10:00", "14:00"),
            make_shift(1, "10:00", "14:00"),
            make_shift(1, "18:00", "22:00"),
            make_shift(2, status=DailyStatus.WEEKLY_REST),
        ]

        assert working_days(shifts) == [1, 4]


class TestLongestConsecutiveRun:

    def test_empty(self):
        assert longest_consecutive_run([]) == 0

    def test_single_day(self):
        assert longest_consecutive_run([3]) == 1

    def test_run_with_gap(self):
        assert longest_consecutive_run([0, 1, 2, 4, 5]) == 3

    def test_duplicates_do_not_break_run(self):
        assert longest_consecutive_run([0, 1, 1, 2]) == 3

    def test_full_week(self):
        assert longest_consecutive_run(list(range(7))) == 7
