"""
Tests for week and working-day calculations.
"""

from datetime import date

import pendulum
import pytest

from parkslot.domain.calendar import (
    is_working_day,
    week_dates,
    week_range_label,
    working_days_between,
)


class TestWeekDates:
    """Tests for week_dates."""

    @pytest.mark.parametrize(
        "today",
        [
            "2024-11-25",  # Monday
            "2024-11-27",  # Wednesday
            "2024-11-29",  # Friday
            "2024-11-30",  # Saturday
            "2024-12-01",  # Sunday
        ],
    )
    def test_current_week_starts_on_monday(self, today):
        """Any day of the week maps to the Monday that started it."""
        dates = week_dates(0, pendulum.parse(today).date())

        assert dates[0] == pendulum.date(2024, 11, 25)
        assert dates[0].weekday() == 0

    def test_returns_monday_to_friday(self):
        dates = week_dates(0, pendulum.date(2024, 11, 27))

        assert dates == [pendulum.date(2024, 11, 25 + i) for i in range(5)]
        assert [d.weekday() for d in dates] == [0, 1, 2, 3, 4]

    def test_sunday_belongs_to_previous_monday(self):
        """Sunday must not jump forward to the next week."""
        dates = week_dates(0, pendulum.date(2024, 11, 24))

        assert dates[0] == pendulum.date(2024, 11, 18)

    def test_offsets(self):
        today = pendulum.date(2024, 11, 27)

        assert week_dates(1, today)[0] == pendulum.date(2024, 12, 2)
        assert week_dates(-1, today)[0] == pendulum.date(2024, 11, 18)
        assert week_dates(5, today)[0] == pendulum.date(2024, 12, 30)

    @pytest.mark.parametrize("offset", range(-6, 7))
    def test_week_spans_four_days(self, offset):
        dates = week_dates(offset, pendulum.date(2024, 11, 30))

        assert dates[0].add(days=4) == dates[4]
        assert dates[0].weekday() == 0

    def test_accepts_stdlib_date_and_datetime(self):
        assert week_dates(0, date(2024, 11, 28))[0] == pendulum.date(2024, 11, 25)
        late_evening = pendulum.datetime(2024, 11, 28, 23, 30, tz="Europe/Prague")
        assert week_dates(0, late_evening)[0] == pendulum.date(2024, 11, 25)


class TestWorkingDaysBetween:
    """Tests for working_days_between."""

    def test_friday_to_monday_is_one(self):
        assert working_days_between(pendulum.date(2024, 11, 22), pendulum.date(2024, 11, 25)) == 1

    def test_same_day_is_zero(self):
        monday = pendulum.date(2024, 11, 25)
        assert working_days_between(monday, monday) == 0

    def test_monday_to_wednesday_is_two(self):
        assert working_days_between(pendulum.date(2024, 11, 25), pendulum.date(2024, 11, 27)) == 2

    def test_past_target_is_zero(self):
        assert working_days_between(pendulum.date(2024, 11, 27), pendulum.date(2024, 11, 25)) == 0

    def test_weekend_start(self):
        """Saturday and Sunday to Monday both count one working day."""
        monday = pendulum.date(2024, 11, 25)
        assert working_days_between(pendulum.date(2024, 11, 23), monday) == 1
        assert working_days_between(pendulum.date(2024, 11, 24), monday) == 1

    def test_full_week(self):
        assert working_days_between(pendulum.date(2024, 11, 22), pendulum.date(2024, 11, 29)) == 5

    def test_time_of_day_is_ignored(self):
        start = pendulum.parse("2024-11-25 23:00", tz="Europe/Prague")
        end = pendulum.parse("2024-11-26 01:00", tz="Europe/Prague")

        assert working_days_between(start, end) == 1

    def test_whole_weeks_plus_remainder(self):
        friday = pendulum.date(2024, 11, 22)

        assert working_days_between(friday, pendulum.date(2024, 12, 9)) == 11
        assert working_days_between(pendulum.date(2024, 11, 27), pendulum.date(2024, 12, 3)) == 4
        assert working_days_between(pendulum.date(2024, 11, 25), pendulum.date(2025, 11, 24)) == 260

    def test_matches_day_by_day_count(self):
        """Every start and end over three weeks agrees with walking the days."""
        first = pendulum.date(2024, 11, 18)
        days = [first.add(days=i) for i in range(21)]

        for start in days:
            for end in days:
                expected = sum(
                    1 for day in days if start < day <= end and is_working_day(day)
                )
                assert working_days_between(start, end) == expected

    def test_far_future_date(self):
        monday = pendulum.date(2024, 11, 25)

        assert working_days_between(monday, monday.add(weeks=1000)) == 5000
        assert working_days_between(monday, pendulum.date(9999, 12, 31)) > 2


class TestHelpers:
    """Tests for the smaller calendar helpers."""

    def test_is_working_day(self):
        assert is_working_day(pendulum.date(2024, 11, 29))
        assert not is_working_day(pendulum.date(2024, 11, 30))
        assert not is_working_day(pendulum.date(2024, 12, 1))

    def test_week_range_label(self):
        label = week_range_label(0, pendulum.date(2024, 11, 27))

        assert label == "25. 11. 2024 - 29. 11. 2024"

    def test_week_range_label_across_months(self):
        assert week_range_label(1, pendulum.date(2024, 11, 27)) == "2. 12. 2024 - 6. 12. 2024"
