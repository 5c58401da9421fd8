from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo

UTC = timezone.utc


@runtime_checkable
class TimestampProvider(Protocol):
    def now(self) -> datetime: ...


@dataclass(frozen=True, slots=True)
class SystemTimestampProvider:
    """
    Wall clock rendered in a fixed timezone.
    """

    tz: tzinfo = UTC

    def now(self) -> datetime:
        return datetime.now(self.tz)


@dataclass(frozen=True, slots=True)
class FixedTimestampProvider:
    """
    Always returns the same instant. Meant for deterministic output in tests.
    """

    ts: datetime = field(default_factory=lambda: datetime.fromtimestamp(0, UTC))

    def now(self) -> datetime:
        return self.ts


def resolve_timezone(tz: str | tzinfo) -> tzinfo:
    if isinstance(tz, tzinfo):
        return tz
    if tz.upper() in ("UTC", "Z"):
        return UTC
    return ZoneInfo(tz)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)
