"""Age and retirement-date helpers driven by the date-of-birth field."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Final

from .clock import Clock, ensure_clock
from .enums import RETIREMENT_AGE

INVALID_DATE_ERROR: Final[str] = "Invalid date; expected an ISO calendar date (YYYY-MM-DD)."

_ISO_DATE_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?P<date>\d{4}-\d{2}-\d{2})(?P<time>[T ].+)?", re.ASCII)


def parse_date(value: date | str) -> date:
    """Coerce a :class:`date` or ISO text into a calendar date.

    Text must be extended-format ``YYYY-MM-DD``, optionally followed by a
    ``T``- or space-separated time; only the date part is kept. Basic
    (``19850503``), week (``1985-W18-5``) and ordinal dates are rejected.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(INVALID_DATE_ERROR)
    match = _ISO_DATE_PATTERN.fullmatch(value.strip())
    if match is None:
        raise ValueError(INVALID_DATE_ERROR)
    try:
        if match["time"] is None:
            return date.fromisoformat(match["date"])
        return datetime.fromisoformat(match.group(0)).date()
    except ValueError as exc:
        raise ValueError(INVALID_DATE_ERROR) from exc


def age_from_birth_date(
    date_of_birth: date | str,
    *,
    clock: Clock | None = None,
    today: date | None = None,
) -> int:
    """Return whole years elapsed since *date_of_birth*.

    The year difference is decremented when today's month/day precedes the
    birth month/day, so the result is the floor of the exact age. Future birth
    dates are not rejected and produce a negative age.
    """

    birth = parse_date(date_of_birth)
    current = today if today is not None else ensure_clock(clock).today()

    age = current.year - birth.year
    if (current.month, current.day) < (birth.month, birth.day):
        age -= 1
    return age


def retirement_date(date_of_birth: date | str) -> date:
    """Return the date the holder reaches :data:`RETIREMENT_AGE`.

    Same month and day-of-month as the birth date. A 29 February birth whose
    retirement year has no leap day rolls over to 1 March.
    """

    birth = parse_date(date_of_birth)
    year = birth.year + RETIREMENT_AGE
    try:
        return birth.replace(year=year)
    except ValueError:
        return date(year, 3, 1)


def retirement_date_iso(date_of_birth: date | str) -> str:
    """Return :func:`retirement_date` formatted as ``YYYY-MM-DD``."""

    return retirement_date(date_of_birth).isoformat()


__all__ = [
    "INVALID_DATE_ERROR",
    "age_from_birth_date",
    "parse_date",
    "retirement_date",
    "retirement_date_iso",
]
