"""Domain layer for timetracker application."""
