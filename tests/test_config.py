"""
Tests for schedule configuration loading.
"""

from datetime import date, timedelta

import pendulum
import pytest
from pydantic import ValidationError

from dailymoment.config import AppConfig, EventConfig, PointConfig
from dailymoment.domain import Point


SCHEDULE_YAML = """
timezone: Europe/Berlin
events:
  - name: standup
    start: {hour: 9, minute: 30}
    duration_minutes: 15
    weekdays: [0, 1, 2, 3, 4, 4]
  - name: night-shift
    start: {hour: 22}
    duration_minutes: 240
    timezone: UTC
"""


class TestPointConfig:
    """Tests for PointConfig."""

    def test_defaults_to_midnight(self):
        """Test that every field defaults to zero."""
        config = PointConfig()
        assert (config.hour, config.minute, config.second, config.nanosecond) == (0, 0, 0, 0)

    @pytest.mark.parametrize(
        "fields, message",
        [
            ({"hour": 24}, "Hour must be between 0 and 23"),
            ({"minute": 60}, "Minute must be between 0 and 59"),
            ({"second": -1}, "Second must be between 0 and 59"),
            ({"nanosecond": 1_000_000_000}, "Nanosecond must be between"),
        ],
    )
    def test_out_of_range_fields_raise(self, fields, message):
        """Test that config values are validated explicitly."""
        with pytest.raises(ValidationError, match=message):
            PointConfig(**fields)

    def test_to_point(self):
        """Test conversion to a domain point."""
        point = PointConfig(hour=9, minute=30, second=5).to_point("UTC")
        assert point == Point(9, 30, 5, tz="UTC")


class TestEventConfig:
    """Tests for EventConfig."""

    def test_weekdays_are_deduplicated(self):
        """Test that repeated weekdays are dropped in order."""
        event = EventConfig(name="gym", weekdays=[2, 0, 2])
        assert event.weekdays == [2, 0]

    def test_invalid_weekday_raises(self):
        """Test that weekdays outside 0-6 are rejected."""
        with pytest.raises(ValidationError, match="weekdays must be between 0 and 6"):
            EventConfig(name="gym", weekdays=[7])

    def test_blank_name_raises(self):
        """Test that the event name is required."""
        with pytest.raises(ValidationError, match="must not be empty"):
            EventConfig(name="   ")

    def test_unknown_timezone_raises(self):
        """Test that unknown zone names are rejected."""
        with pytest.raises(ValidationError, match="Unknown time zone"):
            EventConfig(name="gym", timezone="Nowhere/Special")

    def test_negative_duration_is_allowed(self):
        """Test that lengths are not validated."""
        event = EventConfig(name="rewind", duration_minutes=-30)
        assert event.get_length() == timedelta(minutes=-30)

    def test_to_span_uses_event_timezone_first(self):
        """Test time zone precedence when building spans."""
        event = EventConfig(name="call", start={"hour": 8}, duration_minutes=30, timezone="UTC")

        span = event.to_span("Europe/Berlin")

        assert span.begin.timezone == pendulum.timezone("UTC")
        assert span.length == timedelta(minutes=30)

    def test_to_span_falls_back_to_default_timezone(self):
        """Test that the schedule zone applies when the event has none."""
        event = EventConfig(name="call", start={"hour": 8})

        span = event.to_span("Europe/Berlin")

        assert span.start(date(2024, 6, 3)) == pendulum.datetime(2024, 6, 3, 8, tz="Europe/Berlin")

    def test_to_span_falls_back_to_local_timezone(self):
        """Test that the host zone applies when nothing is configured."""
        span = EventConfig(name="call").to_span()
        assert span.begin.timezone == pendulum.local_timezone()


class TestAppConfig:
    """Tests for AppConfig."""

    def test_load_from_yaml(self, tmp_path):
        """Test loading a schedule file."""
        config_path = tmp_path / "schedule.yaml"
        config_path.write_text(SCHEDULE_YAML, encoding="utf-8")

        config = AppConfig.load_from_yaml(config_path)

        assert config.timezone == "Europe/Berlin"
        assert [event.name for event in config.events] == ["standup", "night-shift"]
        assert config.events[0].weekdays == [0, 1, 2, 3, 4]
        assert config.events[1].start.hour == 22

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises(self, tmp_path):
        """Test that broken YAML becomes a ValueError."""
        config_path = tmp_path / "schedule.yaml"
        config_path.write_text("events: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_non_mapping_root_raises(self, tmp_path):
        """Test that the root must be a mapping."""
        config_path = tmp_path / "schedule.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping at the root level"):
            AppConfig.load_from_yaml(config_path)

    def test_empty_file_gives_empty_schedule(self, tmp_path):
        """Test that an empty file is a valid, empty schedule."""
        config_path = tmp_path / "schedule.yaml"
        config_path.write_text("", encoding="utf-8")

        config = AppConfig.load_from_yaml(config_path)

        assert config.events == []
        assert config.timezone is None

    def test_duplicate_event_names_raise(self):
        """Test that event names must be unique."""
        with pytest.raises(ValidationError, match="Duplicate event name"):
            AppConfig(events=[{"name": "Lunch"}, {"name": "lunch"}])
