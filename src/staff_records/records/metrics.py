# -*- coding: utf-8 -*-
"""Prometheus metrics for staff record preparation."""
from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter

from staff_records.nic.types import IdentityFormat


class RecordMeters:
    """Wraps Prometheus primitives behind a friendly interface.

    The registry is explicit: metric names are unique per registry, so the
    process composition root builds one set of meters for the global
    ``prometheus_client.REGISTRY`` and tests pass a fresh one.
    """

    def __init__(self, registry: CollectorRegistry, *, namespace: str = "staff_records") -> None:
        self._registry = registry
        self._prepared = Counter(
            "prepared_total",
            "Staff records prepared for persistence, by input identity format",
            ("format",),
            namespace=namespace,
            registry=self._registry,
        )
        self._validation = Counter(
            "validation_errors_total",
            "Staff record validation errors",
            ("code",),
            namespace=namespace,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_prepared(self, identity_format: IdentityFormat) -> None:
        self._prepared.labels(format=identity_format.value).inc()

    def record_validation_error(self, code: str) -> None:
        self._validation.labels(code=code).inc()


__all__ = ["RecordMeters"]
