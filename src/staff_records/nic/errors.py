# -*- coding: utf-8 -*-
"""Domain errors raised at the save boundary."""
from __future__ import annotations

from typing import Final

from .types import ErrorDetail

INVALID_NIC_CODE: Final[str] = "E_INVALID_NIC"
INVALID_NIC_MESSAGE: Final[str] = "Invalid identity number"


class InvalidIdentityNumberError(ValueError):
    """Raised by :func:`staff_records.nic.codec.normalize` for unusable input."""

    def __init__(self, details: str = "") -> None:
        self.detail = ErrorDetail(INVALID_NIC_CODE, INVALID_NIC_MESSAGE, details)
        super().__init__(INVALID_NIC_MESSAGE)

    def __str__(self) -> str:
        return self.detail.message


__all__ = ["INVALID_NIC_CODE", "INVALID_NIC_MESSAGE", "InvalidIdentityNumberError"]
