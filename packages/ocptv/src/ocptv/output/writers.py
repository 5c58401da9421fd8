"""
Line sinks for emitted records.

A writer receives one already-encoded JSON document per call and appends it
as a single line. Writers never reorder or batch; ordering is decided by the
emitter before ``write`` is called.
"""

from __future__ import annotations

import asyncio
import sys
import threading
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class Writer(Protocol):
    async def write(self, line: str) -> None: ...


class BufferWriter:
    """
    In-memory sink. The list is shared with the caller so output can be
    inspected while the run is still going.
    """

    def __init__(self, buffer: list[str] | None = None) -> None:
        self.buffer: list[str] = buffer if buffer is not None else []
        self._closed = False

    async def write(self, line: str) -> None:
        if self._closed:
            raise ValueError("write to closed buffer")
        self.buffer.append(line)

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed


class FileWriter:
    """
    Appends one line per record to a file, creating parent directories.
    """

    def __init__(self, path: Path, *, truncate: bool = False) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if truncate:
            self.path.write_text("", encoding="utf-8")
        self._lock = threading.Lock()

    async def write(self, line: str) -> None:
        await asyncio.to_thread(self._append, line)

    def _append(self, line: str) -> None:
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line)
                f.write("\n")


class StdoutWriter:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    async def write(self, line: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()
