from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Iterator
from zoneinfo import ZoneInfo

import pytest
from prometheus_client import CollectorRegistry

from staff_records.config import get_settings
from staff_records.core.clock import FrozenClock

COLOMBO = ZoneInfo("Asia/Colombo")
FREEZE_INSTANT = datetime(2026, 10, 18, 12, 0, tzinfo=COLOMBO)


@pytest.fixture()
def frozen_clock() -> FrozenClock:
    clock = FrozenClock(timezone=COLOMBO)
    clock.set(FREEZE_INSTANT)
    return clock


@pytest.fixture()
def metrics_registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture()
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> Iterator[None]:
    """Keep stray ``.env`` files, salts and cached settings from leaking into tests."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NIC_HASH_SALT", raising=False)
    for name in ("TIMEZONE", "LOG_LEVEL", "LOG_FILE", "NIC_HASH_SALT", "METRICS_NAMESPACE"):
        monkeypatch.delenv(f"STAFF_RECORDS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def staff_payload() -> Callable[..., Dict[str, Any]]:
    """Factory for a valid add-staff form submission."""

    def _build(**overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "appointment_number": "dfo/2010-15",
            "full_name": "  Kumari   Perera ",
            "gender": "female",
            "date_of_birth": "1985-05-03",
            "nic_number": "855241234v",
            "marital_status": "Married",
            "designation": "Development Officer",
            "date_of_first_appointment": "2010-01-04",
            "salary_code": "D1",
            "basic_salary": 45000,
            "increment_amount": 1200,
        }
        payload.update(overrides)
        return payload

    return _build
