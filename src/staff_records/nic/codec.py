# -*- coding: utf-8 -*-
r"""Identity number (NIC) codec.

Two textual forms of the same identity are supported:

* legacy: ``YY DDD SSS C L`` -- nine digits and a letter ``V``/``X``;
* modern: ``YYYY DDD SSSS C`` -- twelve digits.

``DDD`` is the day of the year, offset by 500 for female holders. The modern
serial carries one extra leading digit, always ``0`` for numbers issued in
the legacy era.

Every function here is pure. Only :func:`normalize` raises; the rest report
problems through their return value.
"""
from __future__ import annotations

import re
from typing import Final, Optional, Tuple

from staff_records.core.enums import (
    CENTURY_PIVOT,
    FEMALE_DAY_OFFSET,
    RECONSTRUCTED_LEGACY_LETTER,
    Sex,
)
from staff_records.core.logging_utils import log_norm_error

from .errors import InvalidIdentityNumberError
from .types import IdentityFormat, IdentityInfo, NormalizedIdentity, ValidationResult

LEGACY_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<year>\d{2})(?P<day>\d{3})(?P<serial>\d{3})(?P<check>\d)(?P<letter>[VX])",
    re.ASCII,
)
MODERN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<year>\d{4})(?P<day>\d{3})(?P<serial>\d{4})(?P<check>\d)",
    re.ASCII,
)


# Whitespace trimmed around form input: Unicode space separators, line
# terminators and the byte order mark. Control characters \x1c-\x1f and
# \x85 are not whitespace here even though str.isspace() says they are.
_TRIM_CHARS: Final[str] = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def clean_identity_text(raw: object) -> Optional[str]:
    """Trim surrounding whitespace and uppercase; ``None`` for non-text input."""

    if not isinstance(raw, str):
        return None
    return raw.strip(_TRIM_CHARS).upper()


def _full_year(year2: str) -> int:
    year = int(year2)
    return 2000 + year if year <= CENTURY_PIVOT else 1900 + year


def _decode_day(day_field: str) -> Tuple[int, Sex]:
    """Split the encoded day-of-year into the true day and the holder's sex."""

    encoded = int(day_field)
    if encoded > FEMALE_DAY_OFFSET:
        return encoded - FEMALE_DAY_OFFSET, Sex.FEMALE
    return encoded, Sex.MALE


def validate(raw: object) -> ValidationResult:
    """Classify *raw* as a legacy, modern or invalid identity number.

    Surrounding whitespace and letter case are ignored. Never raises.
    """

    text = clean_identity_text(raw)
    if text is None:
        return ValidationResult(IdentityFormat.INVALID)
    if LEGACY_PATTERN.fullmatch(text):
        return ValidationResult(IdentityFormat.LEGACY)
    if MODERN_PATTERN.fullmatch(text):
        return ValidationResult(IdentityFormat.MODERN)
    return ValidationResult(IdentityFormat.INVALID)


def convert_legacy_to_modern(raw: object) -> Optional[str]:
    """Return the 12-digit modern form of a legacy number, or ``None``.

    The day-of-year field, including any female offset, is carried through
    unchanged and the serial gains a leading ``0``.
    """

    text = clean_identity_text(raw)
    match = LEGACY_PATTERN.fullmatch(text) if text is not None else None
    if match is None:
        return None
    full_year = _full_year(match["year"])
    return f"{full_year:04d}{match['day']}0{match['serial']}{match['check']}"


def _legacy_from_modern(match: re.Match[str]) -> str:
    # Assumes the dropped serial digit is "0"; the original letter is lost.
    return (
        f"{match['year'][2:]}{match['day']}{match['serial'][1:]}"
        f"{match['check']}{RECONSTRUCTED_LEGACY_LETTER}"
    )


def extract_info(raw: object) -> IdentityInfo:
    """Decode birth year, day-of-year, sex, serial and check digit.

    Invalid input yields :meth:`IdentityInfo.invalid`; no exception escapes.
    """

    text = clean_identity_text(raw)
    if text is None:
        return IdentityInfo.invalid()

    legacy = LEGACY_PATTERN.fullmatch(text)
    if legacy is not None:
        day_of_year, sex = _decode_day(legacy["day"])
        return IdentityInfo(
            format=IdentityFormat.LEGACY,
            modern_form=convert_legacy_to_modern(text),
            legacy_form=text,
            birth_year=_full_year(legacy["year"]),
            day_of_year=day_of_year,
            sex=sex,
            serial=legacy["serial"],
            check_digit=legacy["check"],
        )

    modern = MODERN_PATTERN.fullmatch(text)
    if modern is not None:
        day_of_year, sex = _decode_day(modern["day"])
        return IdentityInfo(
            format=IdentityFormat.MODERN,
            modern_form=text,
            legacy_form=_legacy_from_modern(modern),
            birth_year=int(modern["year"]),
            day_of_year=day_of_year,
            sex=sex,
            serial=modern["serial"],
            check_digit=modern["check"],
        )

    return IdentityInfo.invalid()


def normalize(raw: object) -> NormalizedIdentity:
    """Return the canonical modern form plus the legacy form when known.

    Raises:
        InvalidIdentityNumberError: *raw* is neither a legacy nor a modern number.
    """

    info = extract_info(raw)
    if not info.is_valid or info.modern_form is None:
        log_norm_error("nic", raw, "not a legacy or modern identity number", "nic.invalid")
        raise InvalidIdentityNumberError("input matches neither the legacy nor the modern pattern")
    return NormalizedIdentity(modern_form=info.modern_form, legacy_form=info.legacy_form)


__all__ = [
    "LEGACY_PATTERN",
    "clean_identity_text",
    "MODERN_PATTERN",
    "convert_legacy_to_modern",
    "extract_info",
    "normalize",
    "validate",
]
