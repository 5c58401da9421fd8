from .config import Settings, load_settings
from .errors import (
    EmitError,
    LifecycleError,
    OcptvError,
    SerializationFailure,
    SinkWriteFailure,
)
from .json import json_line, stable_json_dumps
from .logging import ILogger, bind, configure_logging, get_logger
from .time import (
    UTC,
    FixedTimestampProvider,
    SystemTimestampProvider,
    TimestampProvider,
    monotonic_ms,
    resolve_timezone,
)

JsonPrimitive = str | int | float | bool | None
JsonValue = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]

__all__ = [
    "Settings",
    "load_settings",
    "OcptvError",
    "EmitError",
    "SerializationFailure",
    "SinkWriteFailure",
    "LifecycleError",
    "json_line",
    "stable_json_dumps",
    "ILogger",
    "bind",
    "configure_logging",
    "get_logger",
    "UTC",
    "TimestampProvider",
    "SystemTimestampProvider",
    "FixedTimestampProvider",
    "resolve_timezone",
    "monotonic_ms",
    "JsonPrimitive",
    "JsonValue",
]
