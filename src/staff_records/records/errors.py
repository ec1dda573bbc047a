# -*- coding: utf-8 -*-
"""Errors raised while preparing staff records for persistence."""
from __future__ import annotations

from typing import Final, Sequence

from staff_records.nic.errors import INVALID_NIC_CODE, INVALID_NIC_MESSAGE
from staff_records.nic.types import ErrorDetail

INVALID_RECORD_CODE: Final[str] = "E_INVALID_STAFF_RECORD"
INVALID_RECORD_MESSAGE: Final[str] = "Staff record is invalid."


class StaffRecordError(ValueError):
    """Domain error carrying a structured :class:`ErrorDetail`."""

    def __init__(self, detail: ErrorDetail, fields: Sequence[str] = ()) -> None:
        self.detail = detail
        self.fields = tuple(fields)
        super().__init__(detail.message)

    def __str__(self) -> str:
        return f"{self.detail.code}: {self.detail.message}"


def invalid_nic(details: str) -> StaffRecordError:
    return StaffRecordError(ErrorDetail(INVALID_NIC_CODE, INVALID_NIC_MESSAGE, details), ("nic_number",))


def invalid_record(details: str, fields: Sequence[str]) -> StaffRecordError:
    return StaffRecordError(ErrorDetail(INVALID_RECORD_CODE, INVALID_RECORD_MESSAGE, details), fields)


__all__ = [
    "INVALID_RECORD_CODE",
    "INVALID_RECORD_MESSAGE",
    "StaffRecordError",
    "invalid_nic",
    "invalid_record",
]
