from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Optional

from ocptv.core import (
    SystemTimestampProvider,
    TimestampProvider,
    load_settings,
    resolve_timezone,
)

from .writers import BufferWriter, FileWriter, StdoutWriter, Writer


@dataclass(frozen=True, slots=True)
class Config:
    """
    Output configuration of a test run. Fixed for the lifetime of the run.
    """

    timezone: tzinfo
    writer: Writer
    timestamp_provider: TimestampProvider

    @staticmethod
    def builder() -> "ConfigBuilder":
        return ConfigBuilder()


class ConfigBuilder:
    def __init__(self) -> None:
        self._timezone: Optional[tzinfo] = None
        self._writer: Optional[Writer] = None
        self._timestamp_provider: Optional[TimestampProvider] = None

    def timezone(self, tz: str | tzinfo) -> "ConfigBuilder":
        self._timezone = resolve_timezone(tz)
        return self

    def with_timestamp_provider(self, provider: TimestampProvider) -> "ConfigBuilder":
        self._timestamp_provider = provider
        return self

    def with_buffer_output(self, buffer: list[str]) -> "ConfigBuilder":
        self._writer = BufferWriter(buffer)
        return self

    def with_file_output(self, path: Path | str) -> "ConfigBuilder":
        # a new run starts a new file
        self._writer = FileWriter(Path(path), truncate=True)
        return self

    def with_writer(self, writer: Writer) -> "ConfigBuilder":
        self._writer = writer
        return self

    def build(self) -> Config:
        tz = self._timezone or resolve_timezone(load_settings().timezone)
        return Config(
            timezone=tz,
            writer=self._writer or StdoutWriter(),
            timestamp_provider=self._timestamp_provider or SystemTimestampProvider(tz),
        )
