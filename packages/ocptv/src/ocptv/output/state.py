from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from ocptv_contracts import Root, RootArtifact

from .emitter import JsonEmitter


class RunState:
    """
    Shared, lock-protected state of one test run.

    The run and every step and series derived from it hold the same instance.
    All output goes through ``acquire`` so that envelope assignment and the
    sink write of one call never interleave with another call.
    """

    def __init__(self, emitter: JsonEmitter) -> None:
        self.emitter = emitter
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[JsonEmitter]:
        async with self._lock:
            yield self.emitter

    async def emit(self, artifact: RootArtifact) -> Root:
        async with self.acquire() as emitter:
            return await emitter.emit(artifact)
