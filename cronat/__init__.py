"""Manage cron and at jobs with a local task log kept in sync with the system."""

__version__ = "0.1.0"