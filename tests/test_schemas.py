"""Tests for the pydantic data models."""

from datetime import date

import pytest
from pydantic import ValidationError

from business_calendar.data.schemas import AddBusinessDaysRequest, CalendarDefinition, Config


class TestCalendarDefinition:
    """Tests for CalendarDefinition."""

    def test_defaults(self):
        """Test that all lists default to empty."""
        definition = CalendarDefinition()
        assert definition.working_days == []
        assert definition.holidays == []
        assert definition.extra_working_dates == []

    def test_null_values_are_empty(self):
        """Test null values are empty."""
        definition = CalendarDefinition(working_days=None, holidays=None)
        assert definition.working_days == []
        assert definition.holidays == []

    def test_normalises_values(self):
        """Test normalises values."""
        definition = CalendarDefinition(
            working_days=["Monday", "TUE"],
            holidays=["2023-12-25", date(2023, 12, 26)],
        )
        assert definition.working_days == ["mon", "tue"]
        assert definition.holidays == [date(2023, 12, 25), date(2023, 12, 26)]

    def test_rejects_unknown_keys(self):
        """Test rejects unknown keys."""
        with pytest.raises(ValidationError):
            CalendarDefinition(holidays=[], regions=["uk"])

    def test_rejects_loose_date_formats(self):
        """Test rejects loose date formats."""
        with pytest.raises(ValidationError):
            CalendarDefinition(holidays=["25.12.2023"])

    def test_rejects_unknown_weekday(self):
        """Test rejects unknown weekday."""
        with pytest.raises(ValidationError):
            CalendarDefinition(working_days=["mon", "holiday"])


class TestRequests:
    """Tests for request models."""

    def test_add_request_allows_negative_delta(self):
        """Test add request allows negative delta."""
        request = AddBusinessDaysRequest(date="2023-07-10", delta=-3, calendar="weekdays")
        assert request.delta == -3
        assert request.holidays is None


class TestConfig:
    """Tests for the settings model."""

    def test_single_directory(self):
        """Test that a single directory string becomes a list."""
        assert Config(calendar_directories="/srv/calendars").calendar_directories == ["/srv/calendars"]

    def test_log_level_is_upper_cased(self):
        """Test log level is upper cased."""
        assert Config(log_level="warning").log_level == "WARNING"

    def test_port_range(self):
        """Test that port 0 is rejected."""
        with pytest.raises(ValidationError):
            Config(api_port=0)
