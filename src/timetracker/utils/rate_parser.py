"""Hourly rate parsing utilities."""

import re


def parse_rate(rate_str: str) -> float:
    """Parse an hourly rate string into a float.

    Handles various formats:
    - "50"
    - "50.5"
    - "50€" / "€50" / "$50"
    - "1,250.00"

    Args:
        rate_str: Rate string

    Returns:
        Rate as float

    Raises:
        ValueError: If rate string cannot be parsed or is negative
    """
    if not rate_str or not rate_str.strip():
        raise ValueError("Empty rate string")

    # Remove currency symbols and thousands separators
    cleaned = re.sub(r"[$€£¥]", "", rate_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        rate = float(cleaned)
    except ValueError:
        raise ValueError(f"Could not parse rate '{rate_str}': must be convertible to a number")

    if rate != rate or rate in (float("inf"), float("-inf")):
        raise ValueError(f"Could not parse rate '{rate_str}': must be a finite number")
    if rate < 0:
        raise ValueError(f"Hourly rate must not be negative, got {rate_str}")
    return rate
