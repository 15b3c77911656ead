"""
Service layer helpers that combine configuration and domain logic.
"""

from .daily_schedule import DailyScheduleService, Occurrence, ScheduledEvent

__all__ = ["DailyScheduleService", "Occurrence", "ScheduledEvent"]
