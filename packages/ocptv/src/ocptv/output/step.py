from __future__ import annotations

import itertools
from typing import Any, Awaitable, Callable, Optional

from ocptv_contracts import (
    DiagnosisType,
    ExtensionContent,
    LogSeverity,
    TestStatus,
    models,
)

from ocptv.core import ILogger, JsonValue, LifecycleError, get_logger

from .emitter import SupportsArtifact, artifact_of, build_artifact
from .measurement import MeasurementSeries
from .objects import (
    Diagnosis,
    Error,
    Extension,
    File,
    Log,
    Measurement,
    MeasurementSeriesStart,
)
from .state import RunState


class TestStep:
    """
    A step of a test run that has not been started yet.

    The step id is assigned when the step is created, so ids follow creation
    order even when steps are started in a different order.
    """

    def __init__(self, step_id: str, name: str, state: RunState) -> None:
        self.id = step_id
        self.name = name
        self._state = state
        self._started = False
        self.log: ILogger = get_logger("ocptv.output.step").bind(step_id=step_id)

    async def start(self) -> "StartedTestStep":
        async with self._state.acquire() as emitter:
            if self._started:
                raise LifecycleError(f"Test step {self.id} already started")
            await emitter.emit(
                models.TestStepArtifact(
                    id=self.id, artifact=models.TestStepStart(name=self.name)
                )
            )
            self._started = True
        self.log.info("Test step started", name=self.name)
        return StartedTestStep(self)

    async def scope(
        self, fn: Callable[["StartedTestStep"], Awaitable[TestStatus]]
    ) -> TestStatus:
        """
        Start the step, run ``fn`` with it and end the step with the status
        ``fn`` returns.
        """
        step = await self.start()
        status = await fn(step)
        await step.end(status)
        return status


class StartedTestStep:
    def __init__(self, step: TestStep) -> None:
        self.step = step
        self._series_ids = itertools.count()
        self._ended = False

    @property
    def id(self) -> str:
        return self.step.id

    @property
    def ended(self) -> bool:
        return self._ended

    def _check_open(self, action: str) -> None:
        if self._ended:
            raise LifecycleError(f"Cannot {action}: test step {self.id} already ended")

    async def _emit(self, action: str, body: Any) -> None:
        async with self.step._state.acquire() as emitter:
            self._check_open(action)
            await emitter.emit(models.TestStepArtifact(id=self.id, artifact=body))

    async def _emit_object(self, action: str, obj: SupportsArtifact) -> None:
        self._check_open(action)
        await self._emit(action, artifact_of(obj))

    async def end(self, status: TestStatus) -> None:
        self._check_open("end")
        body = build_artifact(
            lambda: models.TestStepEnd(status=TestStatus(status)), "TestStepEnd"
        )
        async with self.step._state.acquire() as emitter:
            self._check_open("end")
            await emitter.emit(models.TestStepArtifact(id=self.id, artifact=body))
            self._ended = True
        self.step.log.info("Test step ended", status=str(status))

    # ---------- logs and errors ----------
    async def log(self, severity: LogSeverity, msg: str) -> None:
        await self.log_with_details(Log.builder(msg).severity(severity).build())

    async def log_with_details(self, log: Log) -> None:
        await self._emit_object("log", log)

    async def error(self, symptom: str, msg: Optional[str] = None) -> None:
        builder = Error.builder(symptom)
        if msg is not None:
            builder = builder.message(msg)
        await self.error_with_details(builder.build())

    async def error_with_details(self, error: Error) -> None:
        await self._emit_object("emit an error", error)

    # ---------- measurements ----------
    async def add_measurement(self, name: str, value: JsonValue) -> None:
        await self.add_measurement_with_details(Measurement.builder(name, value).build())

    async def add_measurement_with_details(self, measurement: Measurement) -> None:
        await self._emit_object("add a measurement", measurement)

    def measurement_series(self, name: str) -> MeasurementSeries:
        """
        Create a series with the next step-scoped id (``series_0``, ``series_1``...).
        """
        self._check_open("create a measurement series")
        series_id = f"series_{next(self._series_ids)}"
        return MeasurementSeries(
            self.id, MeasurementSeriesStart(name=name, series_id=series_id), self.step._state
        )

    def measurement_series_with_details(
        self, start: MeasurementSeriesStart
    ) -> MeasurementSeries:
        """Create a series with a caller-chosen id; no step-scoped id is used up."""
        self._check_open("create a measurement series")
        return MeasurementSeries(self.id, start, self.step._state)

    # ---------- diagnosis, files, extensions ----------
    async def diagnosis(self, verdict: str, diagnosis_type: DiagnosisType) -> None:
        await self.diagnosis_with_details(Diagnosis.builder(verdict, diagnosis_type).build())

    async def diagnosis_with_details(self, diagnosis: Diagnosis) -> None:
        await self._emit_object("add a diagnosis", diagnosis)

    async def add_file(self, name: str, uri: str) -> None:
        await self.add_file_with_details(File.builder(name, uri).build())

    async def add_file_with_details(self, file: File) -> None:
        await self._emit_object("add a file", file)

    async def add_extension(self, name: str, content: ExtensionContent) -> None:
        await self._emit_object("add an extension", Extension(name=name, content=content))
