"""Tests for the MCP server tools."""

import pytest

from business_calendar.mcp_server import create_mcp_server


@pytest.fixture
def tools():
    """Create the MCP server and map tool names to their functions."""
    mcp = create_mcp_server()
    return {tool.name: tool.fn for tool in mcp._tool_manager.list_tools()}


class TestTools:
    """Tests for tool registration."""

    def test_registered_tools(self, tools):
        """Test that every calendar tool is registered."""
        assert set(tools) == {
            "is_business_day",
            "roll_forward",
            "add_business_days",
            "business_days_between",
            "list_calendars",
        }

    def test_list_calendars(self, tools):
        """Test that the built-in weekdays calendar is listed."""
        result = tools["list_calendars"]()

        assert "weekdays" in result["calendars"]
        assert result["count"] == len(result["calendars"])


class TestIsBusinessDay:
    """Tests for the is_business_day tool."""

    def test_weekend(self, tools):
        """Test that a Saturday is not a business day."""
        assert tools["is_business_day"]("2023-07-08") == {
            "date": "2023-07-08",
            "is_business_day": False,
        }

    def test_extra_working_date_overrides_holiday(self, tools):
        """Test that an extra working date wins over a holiday on the same day."""
        result = tools["is_business_day"](
            "2023-12-25", holidays=["2023-12-25"], extra_working_dates=["2023-12-25"]
        )
        assert result["is_business_day"] is True

    def test_malformed_date(self, tools):
        """Test that a malformed date is reported as an error."""
        result = tools["is_business_day"]("2023-02-30")

        assert "error" in result
        assert "Invalid date" in result["error"]

    def test_name_and_inline_definition(self, tools):
        """Test that a calendar name combined with inline settings is rejected."""
        result = tools["is_business_day"]("2023-07-10", calendar="weekdays", holidays=["2023-12-25"])
        assert "not both" in result["error"]

    def test_unknown_calendar(self, tools):
        """Test that an unknown calendar name is reported as an error."""
        result = tools["is_business_day"]("2023-07-10", calendar="nope")
        assert "No such calendar" in result["error"]


class TestDateArithmetic:
    """Tests for the roll_forward, add_business_days and business_days_between tools."""

    def test_roll_forward(self, tools):
        """Test rolling a Saturday forward to Monday."""
        assert tools["roll_forward"]("2023-07-08") == {"input": "2023-07-08", "result": "2023-07-10"}

    def test_add_from_sunday(self, tools):
        """Test that Sunday + 1 counts from Monday and lands on Tuesday."""
        result = tools["add_business_days"]("2023-07-09", 1)

        assert result == {"input": "2023-07-09", "delta": 1, "result": "2023-07-11"}

    def test_add_negative_delta(self, tools):
        """Test that a negative delta counts backward."""
        assert tools["add_business_days"]("2023-07-10", -1)["result"] == "2023-07-07"
        assert tools["add_business_days"]("2023-07-09", -1)["result"] == "2023-07-06"

    def test_add_with_named_calendar(self, tools):
        """Test adding business days on a calendar selected by name."""
        result = tools["add_business_days"]("2023-07-07", 1, calendar="weekdays")
        assert result["result"] == "2023-07-10"

    def test_add_malformed_date(self, tools):
        """Test that a padded date string is reported as an error."""
        assert "error" in tools["add_business_days"](" 2023-07-10", 1)

    def test_between(self, tools):
        """Test counting business days with a holiday in the range."""
        result = tools["business_days_between"](
            "2023-07-03", "2023-07-17", holidays=["2023-07-04"]
        )
        assert result["business_days"] == 9

    def test_between_unknown_weekday(self, tools):
        """Test that an unknown weekday is reported as an error."""
        result = tools["business_days_between"](
            "2023-07-03", "2023-07-17", working_days=["someday"]
        )
        assert "Invalid day" in result["error"]
