"""Staff record preparation and search built on the identity codec."""
from __future__ import annotations

from .errors import StaffRecordError
from .metrics import RecordMeters
from .models import StaffRecord, StaffRecordInput, to_staff_record
from .search import StaffSearchParams, filter_staff
from .service import StaffRecordService

__all__ = [
    "RecordMeters",
    "StaffRecord",
    "StaffRecordError",
    "StaffRecordInput",
    "StaffSearchParams",
    "StaffRecordService",
    "filter_staff",
    "to_staff_record",
]
