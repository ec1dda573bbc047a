# -*- coding: utf-8 -*-
"""Record preparation service sitting in front of persistence."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping

from prometheus_client import CollectorRegistry
from pydantic import ValidationError

from staff_records.config import AppSettings, get_settings
from staff_records.core.clock import Clock, ensure_clock
from staff_records.nic.codec import validate

from .errors import StaffRecordError, invalid_nic, invalid_record
from .metrics import RecordMeters
from .models import StaffRecord, to_staff_record
from .search import StaffSearchParams, filter_staff


def _failed_fields(exc: ValidationError) -> list[str]:
    fields: list[str] = []
    for error in exc.errors():
        name = ".".join(str(part) for part in error["loc"]) or "__root__"
        if name not in fields:
            fields.append(name)
    return fields


@dataclass(slots=True)
class StaffRecordService:
    """Validates submitted records, derives stored fields and filters lists."""

    meters: RecordMeters
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("staff_records.records"))
    clock: Clock = field(default_factory=lambda: ensure_clock(None))

    @classmethod
    def from_settings(
        cls, registry: CollectorRegistry, settings: AppSettings | None = None
    ) -> "StaffRecordService":
        """Build the service with meters and clock taken from :class:`AppSettings`."""

        active = settings or get_settings()
        return cls(
            meters=RecordMeters(registry, namespace=active.metrics_namespace),
            clock=Clock.for_timezone(active.timezone),
        )

    def prepare(self, payload: Mapping[str, Any]) -> StaffRecord:
        """Return the persisted shape of *payload*.

        Raises:
            StaffRecordError: the payload fails validation. The code is
                ``E_INVALID_NIC`` when the identity number is among the failures.
        """

        try:
            record = to_staff_record(payload, clock=self.clock)
        except ValidationError as exc:
            fields = _failed_fields(exc)
            details = "; ".join(f"{error['loc']}: {error['msg']}" for error in exc.errors())
            err = invalid_nic(details) if "nic_number" in fields else invalid_record(details, fields)
            self.meters.record_validation_error(err.detail.code)
            self.logger.warning(
                "staff_record_invalid",
                extra={"code": err.detail.code, "fields": fields},
            )
            raise err from exc

        identity_format = validate(payload.get("nic_number")).format
        self.meters.record_prepared(identity_format)
        self.logger.info(
            "staff_record_prepared",
            extra={"appointment_number": record.appointment_number, "format": identity_format.value},
        )
        return record

    def search(self, records: Iterable[StaffRecord], params: StaffSearchParams | Mapping[str, Any]) -> List[StaffRecord]:
        if not isinstance(params, StaffSearchParams):
            params = StaffSearchParams.model_validate(dict(params))
        return filter_staff(records, params)


__all__ = ["StaffRecordError", "StaffRecordService"]
