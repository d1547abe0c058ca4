"""Tests for the calendar month period."""

import pytest
from datetime import date, datetime, timezone

from ssv_rewards.rewards.models.period import Period
from ssv_rewards.utils.error_handling import ConfigurationError


class TestParse:
    """Tests for Period.parse."""

    def test_parses_year_month(self):
        assert Period.parse('2023-06') == Period(2023, 6)

    def test_string_form_round_trips(self):
        assert str(Period.parse('2024-01')) == '2024-01'

    @pytest.mark.parametrize('value', ['2023-13', '2023-00', '2023-6', '2023-06-01', 'june', '', 202306])
    def test_rejects_invalid_values(self, value):
        with pytest.raises(ConfigurationError):
            Period.parse(value)


class TestCalendar:
    """Tests for first/last day and day counts."""

    def test_first_and_last_day(self):
        period = Period(2023, 6)

        assert period.first_day() == date(2023, 6, 1)
        assert period.last_day() == date(2023, 6, 30)

    @pytest.mark.parametrize('year,month,days', [
        (2023, 1, 31),
        (2023, 2, 28),
        (2024, 2, 29),
        (2023, 4, 30),
        (2023, 12, 31),
    ])
    def test_days(self, year, month, days):
        assert Period(year, month).days() == days

    def test_at_timestamp(self):
        moment = datetime(2023, 7, 15, 12, 30, tzinfo=timezone.utc)

        assert Period.at(moment) == Period(2023, 7)

    def test_at_date(self):
        assert Period.at(date(2023, 12, 31)) == Period(2023, 12)


class TestOrdering:
    """Periods order chronologically."""

    def test_orders_across_years(self):
        assert Period(2023, 12) < Period(2024, 1)

    def test_orders_within_year(self):
        assert Period(2023, 2) < Period(2023, 10)

    def test_equal_periods(self):
        assert Period(2023, 6) == Period.parse('2023-06')
        assert not Period(2023, 6) < Period(2023, 6)

    def test_sorted(self):
        periods = [Period(2024, 1), Period(2023, 6), Period(2023, 12)]

        assert sorted(periods) == [Period(2023, 6), Period(2023, 12), Period(2024, 1)]
