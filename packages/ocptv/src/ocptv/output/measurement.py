from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Awaitable, Callable, Optional

from ocptv_contracts import models

from ocptv.core import ILogger, JsonValue, LifecycleError, get_logger

from .emitter import artifact_of, build_artifact
from .objects import MeasurementSeriesStart
from .state import RunState


class MeasurementSeries:
    """
    A measurement series that has not been started yet.

    The series id is fixed at creation; ``start`` emits ``measurementSeriesStart``.
    """

    def __init__(
        self, step_id: str, start: MeasurementSeriesStart, state: RunState
    ) -> None:
        self.step_id = step_id
        self.start_info = start
        self._state = state
        self._started = False
        self.log: ILogger = get_logger("ocptv.output.series").bind(
            step_id=step_id, series_id=start.series_id
        )

    @property
    def series_id(self) -> str:
        return self.start_info.series_id

    async def start(self) -> "StartedMeasurementSeries":
        body = artifact_of(self.start_info)
        async with self._state.acquire() as emitter:
            if self._started:
                raise LifecycleError(
                    f"Measurement series {self.series_id} already started"
                )
            await emitter.emit(models.TestStepArtifact(id=self.step_id, artifact=body))
            self._started = True
        self.log.info("Measurement series started", name=self.start_info.name)
        return StartedMeasurementSeries(self)

    async def scope(
        self, fn: Callable[["StartedMeasurementSeries"], Awaitable[Any]]
    ) -> Any:
        """
        Start the series, run ``fn`` with it and end it afterwards.
        """
        series = await self.start()
        out = await fn(series)
        await series.end()
        return out


class StartedMeasurementSeries:
    def __init__(self, series: MeasurementSeries) -> None:
        self.series = series
        self._index = 0
        self._ended = False

    @property
    def series_id(self) -> str:
        return self.series.series_id

    @property
    def total_count(self) -> int:
        """Number of elements emitted so far."""
        return self._index

    @property
    def ended(self) -> bool:
        return self._ended

    def _check_open(self, action: str) -> None:
        if self._ended:
            raise LifecycleError(
                f"Cannot {action}: measurement series {self.series_id} already ended"
            )

    async def add_measurement(self, value: JsonValue) -> None:
        await self._add_element(value, None)

    async def add_measurement_with_metadata(
        self,
        value: JsonValue,
        metadata: Mapping[str, JsonValue] | Iterable[tuple[str, JsonValue]],
    ) -> None:
        await self._add_element(value, dict(metadata) or None)

    async def _add_element(
        self, value: JsonValue, metadata: Optional[dict[str, JsonValue]]
    ) -> None:
        step_id = self.series.step_id
        # the ended flag, index and sequence number are all read under the
        # same lock, so element order on the wire always matches index order
        async with self.series._state.acquire() as emitter:
            self._check_open("add a measurement")
            element = build_artifact(
                lambda: models.MeasurementSeriesElement(
                    index=self._index,
                    value=value,
                    timestamp=emitter.now(),
                    series_id=self.series_id,
                    metadata=metadata,
                ),
                "MeasurementSeriesElement",
            )
            await emitter.emit(models.TestStepArtifact(id=step_id, artifact=element))
            self._index += 1

    async def end(self) -> None:
        async with self.series._state.acquire() as emitter:
            self._check_open("end")
            await emitter.emit(
                models.TestStepArtifact(
                    id=self.series.step_id,
                    artifact=models.MeasurementSeriesEnd(
                        series_id=self.series_id, total_count=self._index
                    ),
                )
            )
            self._ended = True
        self.series.log.info("Measurement series ended", total_count=self._index)
