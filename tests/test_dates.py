from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from freezegun import freeze_time

from staff_records.core.clock import FrozenClock
from staff_records.core.dates import (
    INVALID_DATE_ERROR,
    age_from_birth_date,
    parse_date,
    retirement_date,
    retirement_date_iso,
)

TODAY = date(2026, 10, 18)


@pytest.mark.parametrize(
    ("birth", "expected"),
    [
        (date(1996, 10, 18), 30),
        (date(1996, 10, 19), 29),
        (date(1996, 10, 17), 30),
        (date(1996, 11, 1), 29),
        (date(1996, 1, 31), 30),
        (date(2026, 10, 18), 0),
    ],
)
def test_age_is_floor_of_exact_age(birth: date, expected: int) -> None:
    assert age_from_birth_date(birth, today=TODAY) == expected


def test_age_accepts_iso_text() -> None:
    assert age_from_birth_date("1985-05-03", today=TODAY) == 41


def test_age_of_future_birth_is_negative() -> None:
    assert age_from_birth_date("2027-10-19", today=TODAY) == -2


def test_age_uses_clock_timezone(frozen_clock: FrozenClock) -> None:
    # 20:00 UTC on the 17th is already the 18th in Colombo.
    frozen_clock.set(datetime(2026, 10, 17, 20, 0, tzinfo=timezone.utc))

    assert age_from_birth_date("1990-10-18", clock=frozen_clock) == 36


def test_age_leap_day_birth(frozen_clock: FrozenClock) -> None:
    assert age_from_birth_date(date(2000, 2, 29), today=date(2026, 2, 28)) == 25
    assert age_from_birth_date(date(2000, 2, 29), today=date(2026, 3, 1)) == 26


def test_age_default_clock_reads_wall_time() -> None:
    with freeze_time("2026-10-18 12:00:00"):
        assert age_from_birth_date("2000-10-18") == 26
        assert age_from_birth_date("2000-10-19") == 25


def test_retirement_date_reference_value() -> None:
    assert retirement_date("1970-05-15") == date(2030, 5, 15)
    assert retirement_date_iso(date(1970, 5, 15)) == "2030-05-15"


def test_retirement_date_keeps_leap_day_in_leap_year() -> None:
    assert retirement_date(date(1964, 2, 29)) == date(2024, 2, 29)


@pytest.mark.parametrize(
    ("birth", "expected"),
    [
        (date(2040, 2, 29), date(2100, 3, 1)),
        (date(1840, 2, 29), date(1900, 3, 1)),
    ],
)
def test_retirement_date_leap_day_rolls_over(birth: date, expected: date) -> None:
    assert retirement_date(birth) == expected


def test_parse_date_accepts_datetime_text_and_objects() -> None:
    assert parse_date("1985-05-03T10:30:00") == date(1985, 5, 3)
    assert parse_date(datetime(1985, 5, 3, 10, 30)) == date(1985, 5, 3)
    assert parse_date(" 1985-05-03 ") == date(1985, 5, 3)
    assert parse_date("1985-05-03 10:30") == date(1985, 5, 3)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "03-05-1985",
        "1985-02-30",
        "not a date",
        "19850503",
        "1985-W18-5",
        "1985-123",
        "1985-05-03X",
        "1985-05-03T",
        19850503,
        None,
    ],
)
def test_parse_date_rejects_garbage(value: object) -> None:
    with pytest.raises(ValueError) as exc:
        parse_date(value)  # type: ignore[arg-type]
    assert str(exc.value) == INVALID_DATE_ERROR
