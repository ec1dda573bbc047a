# -*- coding: utf-8 -*-
"""Value types produced by the identity number codec."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from staff_records.core.enums import Sex


class IdentityFormat(str, Enum):
    """Three-way classification of identity number text."""

    LEGACY = "legacy"
    MODERN = "modern"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    """Structured error payload returned to callers.

    Attributes
    ----------
    code:
        Machine-readable error code.
    message:
        Fixed human-facing message.
    details:
        Additional diagnostic details for operators.
    """

    code: str
    message: str
    details: str = ""


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of :func:`staff_records.nic.codec.validate`."""

    format: IdentityFormat

    @property
    def is_valid(self) -> bool:
        return self.format is not IdentityFormat.INVALID

    @property
    def is_legacy_format(self) -> bool:
        return self.format is IdentityFormat.LEGACY


@dataclass(frozen=True, slots=True)
class IdentityInfo:
    """Fields decoded from a valid identity number.

    ``day_of_year`` has the female offset removed. ``serial`` keeps the width of
    the input representation: three digits for legacy input, four for modern.
    Every field except ``format`` is ``None`` for invalid input.
    """

    format: IdentityFormat
    modern_form: Optional[str] = None
    legacy_form: Optional[str] = None
    birth_year: Optional[int] = None
    day_of_year: Optional[int] = None
    sex: Optional[Sex] = None
    serial: Optional[str] = None
    check_digit: Optional[str] = None

    @classmethod
    def invalid(cls) -> "IdentityInfo":
        return cls(IdentityFormat.INVALID)

    @property
    def is_valid(self) -> bool:
        return self.format is not IdentityFormat.INVALID

    @property
    def is_legacy_format(self) -> bool:
        return self.format is IdentityFormat.LEGACY


@dataclass(frozen=True, slots=True)
class NormalizedIdentity:
    """Canonical pair persisted on a staff record."""

    modern_form: str
    legacy_form: Optional[str] = None


__all__ = [
    "ErrorDetail",
    "IdentityFormat",
    "IdentityInfo",
    "NormalizedIdentity",
    "ValidationResult",
]
