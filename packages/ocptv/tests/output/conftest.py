from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable

import pytest

import ocptv.output as tv
from ocptv.core import FixedTimestampProvider

TS = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture
def writer() -> tv.BufferWriter:
    return tv.BufferWriter()


@pytest.fixture
def config(writer: tv.BufferWriter) -> tv.Config:
    return (
        tv.Config.builder()
        .timezone("UTC")
        .with_timestamp_provider(FixedTimestampProvider(TS))
        .with_writer(writer)
        .build()
    )


@pytest.fixture
def run(config: tv.Config) -> tv.TestRun:
    return (
        tv.TestRun.builder("r", tv.DutInfo(id="d"), "1.0")
        .command_line("")
        .config(config)
        .build()
    )


@pytest.fixture
def records(writer: tv.BufferWriter) -> Callable[[], list[dict[str, Any]]]:
    def _records() -> list[dict[str, Any]]:
        return [json.loads(line) for line in writer.buffer]

    return _records
