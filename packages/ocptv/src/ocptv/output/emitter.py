from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Callable, Protocol, TypeVar

from ocptv_contracts import Root, RootArtifact

from ocptv.core import (
    ILogger,
    SerializationFailure,
    SinkWriteFailure,
    TimestampProvider,
    get_logger,
    json_line,
)

from .writers import Writer


class SupportsArtifact(Protocol):
    def to_artifact(self) -> Any: ...


T = TypeVar("T")


def build_artifact(factory: Callable[[], T], what: str) -> T:
    """
    Run a wire model constructor, reporting shape problems as
    SerializationFailure.
    """
    try:
        return factory()
    except (ValueError, TypeError) as e:
        # pydantic.ValidationError is a ValueError
        raise SerializationFailure(f"{what} cannot be encoded: {e}") from e


def artifact_of(obj: SupportsArtifact) -> Any:
    return build_artifact(obj.to_artifact, type(obj).__name__)


class JsonEmitter:
    """
    Envelopes artifacts with a sequence number and a timestamp and writes
    them as one JSON line each.

    Not safe for concurrent use on its own; callers serialize access through
    the run state lock.
    """

    def __init__(
        self,
        *,
        timezone: tzinfo,
        writer: Writer,
        timestamp_provider: TimestampProvider,
        logger: ILogger | None = None,
    ) -> None:
        self.timezone = timezone
        self.writer = writer
        self.timestamp_provider = timestamp_provider
        self.log: ILogger = logger or get_logger("ocptv.output.emitter")
        self._seqno = 0

    @property
    def seqno(self) -> int:
        """Sequence number the next successful emit will carry."""
        return self._seqno

    def now(self) -> datetime:
        return self.timestamp_provider.now().astimezone(self.timezone)

    def envelope(self, artifact: RootArtifact) -> Root:
        return Root(artifact=artifact, timestamp=self.now(), seqno=self._seqno)

    def encode(self, root: Root) -> str:
        try:
            return json_line(root.to_wire())
        except (ValueError, TypeError) as e:
            raise SerializationFailure(
                f"Cannot encode record seq={root.seqno}: {e}"
            ) from e

    async def emit(self, artifact: RootArtifact) -> Root:
        """
        Write one artifact. The sequence number is consumed only when the
        sink accepted the line.
        """
        try:
            root = self.envelope(artifact)
            line = self.encode(root)
        except SerializationFailure as e:
            self.log.error("Serialization failed", seqno=self._seqno, error=str(e))
            raise
        except (ValueError, TypeError) as e:
            self.log.error("Serialization failed", seqno=self._seqno, error=str(e))
            raise SerializationFailure(
                f"Cannot build record seq={self._seqno}: {e}"
            ) from e

        try:
            await self.writer.write(line)
        except Exception as e:
            self.log.error(
                "Sink write failed",
                seqno=root.seqno,
                kind=root.kind,
                exc_type=type(e).__name__,
                error=str(e),
            )
            raise SinkWriteFailure(
                f"Sink rejected record seq={root.seqno} ({root.kind}): {e}"
            ) from e

        self._seqno += 1
        self.log.debug("Record emitted", seqno=root.seqno, kind=root.kind)
        return root
