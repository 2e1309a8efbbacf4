"""Helpers for optional date query parameters."""

from datetime import date
from typing import Optional

from fastapi import HTTPException


def optional_date(value: Optional[str] = None) -> Optional[date]:
    """
    Parse an optional ``YYYY-MM-DD`` query value.

    Date inputs left blank in a form arrive as empty strings; those are
    treated the same as a missing parameter.

    Raises:
        ValueError: If the value is not an ISO date
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def date_range(date_from: Optional[str], date_to: Optional[str]) -> tuple[Optional[date], Optional[date]]:
    """Parse a ``dateFrom``/``dateTo`` pair, answering 400 on bad input."""
    try:
        start = optional_date(date_from)
        end = optional_date(date_to)
    except ValueError:
        raise HTTPException(status_code=400, detail="Dates must be in YYYY-MM-DD format")

    if start and end and start > end:
        raise HTTPException(status_code=400, detail="dateFrom must not be after dateTo")
    return start, end
