"""
dailymoment - recurring time-of-day events resolved against calendar dates.
"""

__version__ = "0.1.0"
