"""Domain enumerations and fixed policy constants for staff records."""
from __future__ import annotations

from enum import Enum
from typing import Final


class Sex(str, Enum):
    """Sex encoded in the day-of-year field of an identity number."""

    MALE = "Male"
    FEMALE = "Female"


CENTURY_PIVOT: Final[int] = 30
"""Two-digit years ``0..30`` belong to the 2000s, everything else to the 1900s."""

FEMALE_DAY_OFFSET: Final[int] = 500
"""Offset added to the true day-of-year to encode female holders."""

RETIREMENT_AGE: Final[int] = 60

RECONSTRUCTED_LEGACY_LETTER: Final[str] = "V"
"""Letter appended when a legacy form is rebuilt from a modern number.

The original letter is not recoverable from the modern format.
"""

GENDER_NORMALIZATION_MAP: Final[dict[str, Sex]] = {
    "male": Sex.MALE,
    "m": Sex.MALE,
    "female": Sex.FEMALE,
    "f": Sex.FEMALE,
}
"""Normalized mappings for gender values keyed by stripped lowercase text."""


__all__ = [
    "CENTURY_PIVOT",
    "FEMALE_DAY_OFFSET",
    "GENDER_NORMALIZATION_MAP",
    "RECONSTRUCTED_LEGACY_LETTER",
    "RETIREMENT_AGE",
    "Sex",
]
