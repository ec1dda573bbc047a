"""Deterministic clock abstractions centred around ``Asia/Colombo``.

Runtime code that needs "today" must depend on :class:`Clock` (or one of its
implementations) instead of calling ``datetime.now`` or ``date.today``
directly. Tests should use :class:`FrozenClock` for deterministic behaviour.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Callable, Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "Asia/Colombo"
_MAX_TZ_LENGTH = 255


def _system_now() -> datetime:
    """Return an aware UTC datetime using the system wall clock."""

    return datetime.now(UTC)


@runtime_checkable
class SupportsNow(Protocol):
    """Protocol implemented by objects exposing a ``now`` method."""

    def now(self) -> datetime:  # pragma: no cover - structural typing
        ...


def _coerce_aware(value: datetime, *, timezone: ZoneInfo) -> datetime:
    """Ensure *value* is timezone-aware and normalised to *timezone*."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(timezone)


def validate_timezone(tz_name: str | None) -> ZoneInfo:
    """Validate *tz_name* and return an instantiated :class:`ZoneInfo`."""

    if tz_name is None:
        raise ValueError("CONFIG_TZ_INVALID: timezone value is empty.")
    candidate = str(tz_name).strip()
    if not candidate:
        raise ValueError("CONFIG_TZ_INVALID: timezone value is empty.")
    if len(candidate) > _MAX_TZ_LENGTH:
        raise ValueError("CONFIG_TZ_INVALID: timezone value is too long.")
    try:
        return ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"CONFIG_TZ_INVALID: unknown timezone {candidate!r}.") from exc


class Clock(ABC):
    """Abstract deterministic clock interface."""

    timezone: ZoneInfo

    @abstractmethod
    def now(self) -> datetime:
        """Return the current datetime in :attr:`timezone`."""

    def today(self) -> date:
        """Return the calendar date of :meth:`now` in :attr:`timezone`."""

        return self.now().date()

    def isoformat(self) -> str:
        return self.now().isoformat()

    @classmethod
    def for_timezone(
        cls, tz_name: str, *, now_factory: Callable[[], datetime] | None = None
    ) -> "SystemClock":
        """Instantiate a :class:`SystemClock` for *tz_name*."""

        return SystemClock(timezone=validate_timezone(tz_name), now_factory=now_factory or _system_now)


@dataclass(slots=True)
class SystemClock(Clock):
    """Clock backed by the process wall clock."""

    timezone: ZoneInfo
    now_factory: Callable[[], datetime] = field(default=_system_now, repr=False)

    def now(self) -> datetime:  # pragma: no branch - simple call
        return _coerce_aware(self.now_factory(), timezone=self.timezone)


@dataclass(slots=True)
class FrozenClock(Clock):
    """Clock returning a pre-defined deterministic instant."""

    timezone: ZoneInfo
    _current: datetime | None = field(default=None, repr=False)

    def now(self) -> datetime:
        if self._current is None:
            raise RuntimeError("Frozen clock not initialised; call set() first")
        return _coerce_aware(self._current, timezone=self.timezone)

    def set(self, value: datetime) -> None:
        if value.tzinfo is None:
            raise ValueError("CONFIG_CLOCK_FROZEN: value must be timezone-aware.")
        self._current = value

    def tick(self, seconds: float) -> None:
        if self._current is None:
            raise RuntimeError("Frozen clock not initialised; call set() first")
        self._current = self._current + timedelta(seconds=seconds)


@dataclass(slots=True)
class CallableClock(Clock):
    """Adapter turning a callable into a :class:`Clock`."""

    func: Callable[[], datetime]
    timezone: ZoneInfo

    def now(self) -> datetime:
        return _coerce_aware(self.func(), timezone=self.timezone)


def ensure_clock(
    candidate: Clock | SupportsNow | Callable[[], datetime] | None,
    *,
    default: Clock | None = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> Clock:
    """Normalise *candidate* into a :class:`Clock` instance.

    ``None`` resolves to *default* or a Colombo :class:`SystemClock`. A callable
    will be wrapped so that returned values are coerced to the configured
    timezone.
    """

    if candidate is None:
        return default or Clock.for_timezone(timezone)

    if isinstance(candidate, Clock):
        return candidate

    if isinstance(candidate, SupportsNow):
        return CallableClock(candidate.now, validate_timezone(timezone))

    if callable(candidate):
        return CallableClock(candidate, validate_timezone(timezone))

    raise TypeError("CONFIG_CLOCK_INVALID: expected a Clock or a callable returning datetime.")


def colombo_clock(*, now_factory: Callable[[], datetime] | None = None) -> SystemClock:
    """Return the default :class:`SystemClock` for ``Asia/Colombo``."""

    return Clock.for_timezone(DEFAULT_TIMEZONE, now_factory=now_factory)


__all__ = [
    "CallableClock",
    "Clock",
    "DEFAULT_TIMEZONE",
    "FrozenClock",
    "SupportsNow",
    "SystemClock",
    "colombo_clock",
    "ensure_clock",
    "validate_timezone",
]
