from __future__ import annotations

import logging
from typing import Any, Callable, Dict
from zoneinfo import ZoneInfo

import pytest
from prometheus_client import CollectorRegistry

from staff_records.config import AppSettings
from staff_records.core.clock import FrozenClock
from staff_records.records import RecordMeters, StaffRecordError, StaffRecordService

PayloadFactory = Callable[..., Dict[str, Any]]


@pytest.fixture()
def service(metrics_registry: CollectorRegistry, frozen_clock: FrozenClock) -> StaffRecordService:
    return StaffRecordService(RecordMeters(metrics_registry), clock=frozen_clock)


def _prepared(registry: CollectorRegistry, identity_format: str) -> float | None:
    return registry.get_sample_value("staff_records_prepared_total", {"format": identity_format})


def _errors(registry: CollectorRegistry, code: str) -> float | None:
    return registry.get_sample_value("staff_records_validation_errors_total", {"code": code})


def test_prepare_counts_input_format(
    service: StaffRecordService, staff_payload: PayloadFactory, metrics_registry: CollectorRegistry
) -> None:
    legacy = service.prepare(staff_payload())
    modern = service.prepare(staff_payload(nic_number="198552401234"))

    assert legacy.nic_number == modern.nic_number == "198552401234"
    assert _prepared(metrics_registry, "legacy") == 1.0
    assert _prepared(metrics_registry, "modern") == 1.0


def test_prepare_invalid_nic(
    service: StaffRecordService,
    staff_payload: PayloadFactory,
    metrics_registry: CollectorRegistry,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="staff_records.records"):
        with pytest.raises(StaffRecordError) as exc:
            service.prepare(staff_payload(nic_number="not-a-nic", email="bad"))

    assert exc.value.detail.code == "E_INVALID_NIC"
    assert exc.value.detail.message == "Invalid identity number"
    assert set(exc.value.fields) == {"nic_number"}
    assert _errors(metrics_registry, "E_INVALID_NIC") == 1.0
    assert any(record.getMessage() == "staff_record_invalid" for record in caplog.records)


def test_prepare_invalid_other_field(
    service: StaffRecordService, staff_payload: PayloadFactory, metrics_registry: CollectorRegistry
) -> None:
    with pytest.raises(StaffRecordError) as exc:
        service.prepare(staff_payload(email="bad", salary_code="Z9"))

    assert exc.value.detail.code == "E_INVALID_STAFF_RECORD"
    assert exc.value.fields == ("email", "salary_code")
    assert str(exc.value) == "E_INVALID_STAFF_RECORD: Staff record is invalid."
    assert _errors(metrics_registry, "E_INVALID_STAFF_RECORD") == 1.0
    assert _prepared(metrics_registry, "legacy") is None


def test_search_accepts_raw_mapping(service: StaffRecordService, staff_payload: PayloadFactory) -> None:
    records = [
        service.prepare(staff_payload()),
        service.prepare(staff_payload(full_name="Nimal Silva", gender="Male", nic_number="701351234V")),
    ]

    assert [r.full_name for r in service.search(records, {"gender": "Male"})] == ["Nimal Silva"]
    assert service.search(records, {"search_term": ""}) == records


def test_meters_use_namespace(metrics_registry: CollectorRegistry) -> None:
    meters = RecordMeters(metrics_registry, namespace="forest_office")
    meters.record_validation_error("E_INVALID_NIC")

    assert metrics_registry.get_sample_value(
        "forest_office_validation_errors_total", {"code": "E_INVALID_NIC"}
    ) == 1.0


@pytest.mark.usefixtures("isolated_env")
def test_from_settings_reads_namespace_from_environment(
    monkeypatch: pytest.MonkeyPatch, staff_payload: PayloadFactory, metrics_registry: CollectorRegistry
) -> None:
    monkeypatch.setenv("STAFF_RECORDS_METRICS_NAMESPACE", "forest")

    service = StaffRecordService.from_settings(metrics_registry)
    service.prepare(staff_payload())

    assert metrics_registry.get_sample_value("forest_prepared_total", {"format": "legacy"}) == 1.0
    assert _prepared(metrics_registry, "legacy") is None


@pytest.mark.usefixtures("isolated_env")
def test_from_settings_uses_explicit_settings(metrics_registry: CollectorRegistry) -> None:
    settings = AppSettings(metrics_namespace="wildlife", timezone="UTC")

    service = StaffRecordService.from_settings(metrics_registry, settings)
    service.meters.record_validation_error("E_INVALID_NIC")

    assert service.clock.timezone == ZoneInfo("UTC")
    assert metrics_registry.get_sample_value(
        "wildlife_validation_errors_total", {"code": "E_INVALID_NIC"}
    ) == 1.0


def test_meters_require_registry() -> None:
    with pytest.raises(TypeError):
        RecordMeters()  # type: ignore[call-arg]


def test_meters_reject_second_registration(metrics_registry: CollectorRegistry) -> None:
    RecordMeters(metrics_registry)

    with pytest.raises(ValueError, match="Duplicated timeseries"):
        RecordMeters(metrics_registry)
