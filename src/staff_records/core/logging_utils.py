"""Structured, PII-safe warnings for normalization failures."""

from __future__ import annotations

import hashlib
import json
import logging
import re
import unicodedata
from typing import Any, Final

from staff_records.config import get_settings

LOGGER: Final[logging.Logger] = logging.getLogger("staff_records.normalization")

_DIGIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"\d")

_NIC_FIELDS: Final[frozenset[str]] = frozenset({"nic", "nic_number", "nic_number_old"})


def _current_salt() -> str:
    """Return the salt configured through ``STAFF_RECORDS_NIC_HASH_SALT``."""

    return get_settings().nic_hash_salt


def _hash_value(value: object) -> str:
    """Return a deterministic hash digest suitable for logging samples."""

    normalized = unicodedata.normalize("NFKC", str(value)).strip().upper()
    salted = f"{_current_salt()}::{normalized}"
    digest = hashlib.sha256(salted.encode("utf-8")).hexdigest()
    return digest[:12]


def _sanitize_value(value: object) -> str | None:
    """Return a PII-safe representation of ``value`` for logging."""

    if value is None:
        return None
    normalized = unicodedata.normalize("NFKC", str(value))
    redacted = _DIGIT_PATTERN.sub("*", normalized)
    return redacted[:64]


def _derive_nic_hash(field: str, value: object) -> str | None:
    if value is None or field not in _NIC_FIELDS:
        return None
    return _hash_value(value)


def log_norm_error(field: str, old: object, reason: str, code: str) -> None:
    """Emit a structured warning for normalization failures.

    Args:
        field: Name of the field that failed normalization.
        old: Original value received.
        reason: Human-readable reason for failure.
        code: Stable machine-readable code.
    """

    payload: dict[str, Any] = {
        "event": "normalization_failure",
        "field": field,
        "reason": reason,
        "code": code,
        "sample": _sanitize_value(old),
        "nic_hash": _derive_nic_hash(field, old),
    }
    LOGGER.warning(json.dumps(payload, ensure_ascii=False))


__all__ = ["LOGGER", "log_norm_error"]
