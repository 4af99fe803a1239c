"""Cron schedules, an HTTP alert sender, ASCII helpers and option, key and payload helpers for daily music-service tasks."""

__version__ = "0.1.0"