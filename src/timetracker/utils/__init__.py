"""Utility functions for timetracker."""

from timetracker.utils.time_parser import parse_timestamp, format_timestamp
from timetracker.utils.rate_parser import parse_rate
from timetracker.utils.text_wrap import wrap_text

__all__ = ["parse_timestamp", "format_timestamp", "parse_rate", "wrap_text"]
