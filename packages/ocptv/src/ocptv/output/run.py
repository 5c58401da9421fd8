from __future__ import annotations

import itertools
import sys
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from ocptv_contracts import LogSeverity, TestResult, TestStatus, models

from ocptv.core import ILogger, JsonValue, LifecycleError, get_logger

from .config import Config
from .emitter import JsonEmitter, SupportsArtifact, artifact_of, build_artifact
from .objects import DutInfo, Error, Log, SchemaVersion
from .state import RunState
from .step import TestStep

Metadata = dict[str, JsonValue]


def default_command_line() -> str:
    return " ".join(sys.argv[1:])


@dataclass(frozen=True, slots=True)
class TestRunOutcome:
    """What a ``TestRun.scope`` body reports back to end the run with."""

    status: TestStatus
    result: TestResult


class TestRun:
    """
    A test run that has not been started yet.

    Construction fixes the output configuration; the run state (sequence
    counter and sink) is created here and shared with every step and series
    derived from the run.
    """

    def __init__(
        self,
        *,
        name: str,
        version: str,
        dut: DutInfo,
        parameters: Optional[Metadata] = None,
        command_line: Optional[str] = None,
        metadata: Optional[Metadata] = None,
        config: Optional[Config] = None,
        logger: Optional[ILogger] = None,
    ) -> None:
        self.name = name
        self.version = version
        self.dut = dut
        self.parameters: Metadata = dict(parameters or {})
        self.command_line = (
            command_line if command_line is not None else default_command_line()
        )
        self.metadata: Metadata = dict(metadata or {})

        cfg = config or Config.builder().build()
        self.state = RunState(
            JsonEmitter(
                timezone=cfg.timezone,
                writer=cfg.writer,
                timestamp_provider=cfg.timestamp_provider,
            )
        )
        self.log: ILogger = logger or get_logger("ocptv.output.run").bind(run=name)
        self._started = False

    @staticmethod
    def builder(name: str, dut: DutInfo, version: str) -> "TestRunBuilder":
        return TestRunBuilder(name, dut, version)

    @classmethod
    def for_dut(cls, name: str, dut_id: str, version: str) -> "TestRun":
        """Shortcut for a run over a DUT described by its id only."""
        return cls(name=name, version=version, dut=DutInfo(id=dut_id))

    def _start_artifact(self) -> models.TestRunStart:
        return build_artifact(
            lambda: models.TestRunStart(
                name=self.name,
                version=self.version,
                command_line=self.command_line,
                parameters=dict(self.parameters),
                dut_info=self.dut.to_artifact(),
                metadata=dict(self.metadata) or None,
            ),
            "TestRunStart",
        )

    async def start(self) -> "StartedTestRun":
        """
        Emit the schema version marker followed by ``testRunStart``.
        """
        if self._started:
            raise LifecycleError(f"Test run {self.name!r} already started")

        schema = artifact_of(SchemaVersion.current())
        start = models.TestRunArtifact(artifact=self._start_artifact())
        async with self.state.acquire() as emitter:
            if self._started:
                raise LifecycleError(f"Test run {self.name!r} already started")
            # the marker is emitted only once even if the start line fails
            if emitter.seqno == 0:
                await emitter.emit(schema)
            await emitter.emit(start)
            self._started = True

        self.log.info(
            "Test run started",
            version=self.version,
            dut=self.dut.id,
            parameters=len(self.parameters),
        )
        return StartedTestRun(self)

    async def scope(
        self, fn: Callable[["StartedTestRun"], Awaitable[TestRunOutcome]]
    ) -> TestRunOutcome:
        """
        Start the run, hand it to ``fn`` and end it with the returned outcome.

        If ``fn`` raises, the exception propagates and no ``testRunEnd`` is
        written.
        """
        run = await self.start()
        outcome = await fn(run)
        await run.end(outcome.status, outcome.result)
        return outcome


class TestRunBuilder:
    def __init__(self, name: str, dut: DutInfo, version: str) -> None:
        self._name = name
        self._dut = dut
        self._version = version
        self._parameters: Metadata = {}
        self._command_line: Optional[str] = None
        self._metadata: Metadata = {}
        self._config: Optional[Config] = None

    def add_parameter(self, key: str, value: JsonValue) -> "TestRunBuilder":
        self._parameters[key] = value
        return self

    def command_line(self, value: str) -> "TestRunBuilder":
        self._command_line = value
        return self

    def config(self, value: Config) -> "TestRunBuilder":
        self._config = value
        return self

    def add_metadata(self, key: str, value: JsonValue) -> "TestRunBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> TestRun:
        return TestRun(
            name=self._name,
            version=self._version,
            dut=self._dut,
            parameters=dict(self._parameters),
            command_line=self._command_line,
            metadata=dict(self._metadata),
            config=self._config,
        )


class StartedTestRun:
    def __init__(self, run: TestRun) -> None:
        self.run = run
        self._step_ids = itertools.count()
        self._ended = False

    @property
    def ended(self) -> bool:
        return self._ended

    def _check_open(self, action: str) -> None:
        if self._ended:
            raise LifecycleError(
                f"Cannot {action}: test run {self.run.name!r} already ended"
            )

    async def _emit(self, action: str, body: models.TestRunArtifactBody) -> None:
        async with self.run.state.acquire() as emitter:
            self._check_open(action)
            await emitter.emit(models.TestRunArtifact(artifact=body))

    async def _emit_object(self, action: str, obj: SupportsArtifact) -> None:
        self._check_open(action)
        await self._emit(action, artifact_of(obj))

    async def end(self, status: TestStatus, result: TestResult) -> None:
        self._check_open("end")
        body = build_artifact(
            lambda: models.TestRunEnd(
                status=TestStatus(status), result=TestResult(result)
            ),
            "TestRunEnd",
        )
        async with self.run.state.acquire() as emitter:
            self._check_open("end")
            await emitter.emit(models.TestRunArtifact(artifact=body))
            self._ended = True
        self.run.log.info(
            "Test run ended",
            status=str(status),
            result=str(result),
            records=self.run.state.emitter.seqno,
        )

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

    def step(self, name: str) -> TestStep:
        """
        Create an unstarted step. Ids are handed out in creation order
        (``step_0``, ``step_1``...), independent of when steps start.
        """
        self._check_open("create a step")
        return TestStep(f"step_{next(self._step_ids)}", name, self.run.state)
