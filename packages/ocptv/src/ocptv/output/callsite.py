"""
Helpers that attach the caller's file and line to logs, errors and
diagnoses before emitting them.
"""

from __future__ import annotations

import inspect
from typing import Optional, Union

from ocptv_contracts import DiagnosisType, LogSeverity

from .objects import Diagnosis, Error, Log, SourceLocation
from .run import StartedTestRun
from .step import StartedTestStep

Target = Union[StartedTestRun, StartedTestStep]


def source_location(depth: int = 1) -> SourceLocation:
    """
    File and line of the frame ``depth`` levels above the caller.

    ``depth=1`` is whoever called the function calling ``source_location``.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None or frame.f_back is None:
                break
            frame = frame.f_back
        if frame is None:
            return SourceLocation(file="<unknown>", line=0)
        return SourceLocation(file=frame.f_code.co_filename, line=frame.f_lineno)
    finally:
        del frame


async def _log(target: Target, severity: LogSeverity, msg: str, loc: SourceLocation) -> None:
    log = Log.builder(msg).severity(severity).source(loc.file, loc.line).build()
    await target.log_with_details(log)


async def log_debug(target: Target, msg: str) -> None:
    await _log(target, LogSeverity.DEBUG, msg, source_location())


async def log_info(target: Target, msg: str) -> None:
    await _log(target, LogSeverity.INFO, msg, source_location())


async def log_warning(target: Target, msg: str) -> None:
    await _log(target, LogSeverity.WARNING, msg, source_location())


async def log_error(target: Target, msg: str) -> None:
    await _log(target, LogSeverity.ERROR, msg, source_location())


async def log_fatal(target: Target, msg: str) -> None:
    await _log(target, LogSeverity.FATAL, msg, source_location())


async def error(target: Target, symptom: str, msg: Optional[str] = None) -> None:
    loc = source_location()
    builder = Error.builder(symptom).source(loc.file, loc.line)
    if msg is not None:
        builder = builder.message(msg)
    await target.error_with_details(builder.build())


async def _diagnosis(
    step: StartedTestStep, verdict: str, diagnosis_type: DiagnosisType, loc: SourceLocation
) -> None:
    diag = Diagnosis.builder(verdict, diagnosis_type).source(loc.file, loc.line).build()
    await step.diagnosis_with_details(diag)


async def diagnosis_pass(step: StartedTestStep, verdict: str) -> None:
    await _diagnosis(step, verdict, DiagnosisType.PASS, source_location())


async def diagnosis_fail(step: StartedTestStep, verdict: str) -> None:
    await _diagnosis(step, verdict, DiagnosisType.FAIL, source_location())


async def diagnosis_unknown(step: StartedTestStep, verdict: str) -> None:
    await _diagnosis(step, verdict, DiagnosisType.UNKNOWN, source_location())
