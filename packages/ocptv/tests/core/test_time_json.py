from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from ocptv.core import (
    UTC,
    FixedTimestampProvider,
    SystemTimestampProvider,
    TimestampProvider,
    json_line,
    monotonic_ms,
    resolve_timezone,
    stable_json_dumps,
)


def test_timestamp_providers():
    fixed = FixedTimestampProvider()
    assert fixed.now() == datetime(1970, 1, 1, tzinfo=UTC)
    assert isinstance(fixed, TimestampProvider)

    plus_two = timezone(timedelta(hours=2))
    now = SystemTimestampProvider(plus_two).now()
    assert now.utcoffset() == timedelta(hours=2)


def test_resolve_timezone():
    assert resolve_timezone("utc") is UTC
    assert resolve_timezone("Z") is UTC
    tz = timezone(timedelta(hours=-3))
    assert resolve_timezone(tz) is tz


def test_clock_helpers():
    a = monotonic_ms()
    assert monotonic_ms() >= a


def test_json_helpers():
    obj = {"b": 1, "a": "é"}
    assert json_line(obj) == '{"a":"é","b":1}'
    assert stable_json_dumps(obj) == '{\n  "a": "é",\n  "b": 1\n}'

    with pytest.raises(ValueError):
        json_line({"x": float("nan")})
