"""
Configuration management using Pydantic.

A schedule file lists named daily events, each anchored to a time of day:

    timezone: Europe/Berlin
    events:
      - name: standup
        start: {hour: 9, minute: 30}
        duration_minutes: 15
        weekdays: [0, 1, 2, 3, 4]
"""

from datetime import timedelta
from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .domain.moment import (
    HOURS_PER_DAY,
    LOCAL,
    MINUTES_PER_HOUR,
    NANOSECONDS_PER_SECOND,
    SECONDS_PER_MINUTE,
    Point,
    Span,
)

ALL_WEEKDAYS = [0, 1, 2, 3, 4, 5, 6]


def _validate_timezone_name(value: Optional[str]) -> Optional[str]:
    if value is None or value == LOCAL:
        return value
    try:
        pendulum.timezone(value)
    except (ValueError, KeyError) as exc:
        raise ValueError(f"Unknown time zone: '{value}'") from exc
    return value


class PointConfig(BaseModel):
    """Time of day of an event, given field by field."""
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0

    @field_validator("hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v < HOURS_PER_DAY:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("minute", "second")
    @classmethod
    def validate_minute_second(cls, v: int, info: ValidationInfo) -> int:
        """Validate minute and second are between 0 and 59."""
        limit = MINUTES_PER_HOUR if info.field_name == "minute" else SECONDS_PER_MINUTE
        if not 0 <= v < limit:
            raise ValueError(f"{info.field_name.capitalize()} must be between 0 and {limit - 1}, got {v}")
        return v

    @field_validator("nanosecond")
    @classmethod
    def validate_nanosecond(cls, v: int) -> int:
        """Validate nanosecond fits in one second."""
        if not 0 <= v < NANOSECONDS_PER_SECOND:
            raise ValueError(f"Nanosecond must be between 0 and 999999999, got {v}")
        return v

    def to_point(self, tz: Optional[str] = LOCAL) -> Point:
        """Build the domain point in the given time zone."""
        return Point.of(
            hour=self.hour,
            minute=self.minute,
            second=self.second,
            nanosecond=self.nanosecond,
            tz=tz,
        )


class EventConfig(BaseModel):
    """A named recurring daily event."""
    name: str
    start: PointConfig = Field(default_factory=PointConfig)
    duration_minutes: int = 0  # May be negative
    timezone: Optional[str] = None  # Falls back to the schedule's time zone
    weekdays: List[int] = Field(default_factory=lambda: list(ALL_WEEKDAYS))  # 0=Monday

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the event has a non-blank name."""
        value = value.strip()
        if not value:
            raise ValueError("Event name must not be empty")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Ensure the time zone name is known."""
        return _validate_timezone_name(value)

    @field_validator("weekdays")
    @classmethod
    def validate_weekdays(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"weekdays must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    def get_length(self) -> timedelta:
        """Get the event length as a timedelta."""
        return timedelta(minutes=self.duration_minutes)

    def to_span(self, default_timezone: Optional[str] = None) -> Span:
        """
        Build the domain span for this event.

        Args:
            default_timezone: Zone used when the event names none; ``None``
                means the host's local time zone.
        """
        tz = self.timezone or default_timezone or LOCAL
        return Span(self.start.to_point(tz), self.get_length())


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: Optional[str] = None  # None = host local time zone
    events: List[EventConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Ensure the time zone name is known."""
        return _validate_timezone_name(value)

    @field_validator("events")
    @classmethod
    def validate_events(cls, value: List[EventConfig]) -> List[EventConfig]:
        """Ensure event names are unique."""
        seen_names: set[str] = set()
        for event in value:
            name_key = event.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate event name detected: {event.name}")
            seen_names.add(name_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a schedule.yaml file. See schedule.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for schedule.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "schedule.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "schedule.yaml"

    return config_path
