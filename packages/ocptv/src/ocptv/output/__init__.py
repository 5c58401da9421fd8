from ocptv_contracts import (
    DiagnosisType,
    LogSeverity,
    SoftwareType,
    SubcomponentType,
    TestResult,
    TestStatus,
    ValidatorType,
)

from .config import Config, ConfigBuilder
from .emitter import JsonEmitter
from .measurement import MeasurementSeries, StartedMeasurementSeries
from .objects import (
    Diagnosis,
    DiagnosisBuilder,
    DutInfo,
    DutInfoBuilder,
    Error,
    ErrorBuilder,
    Extension,
    File,
    FileBuilder,
    HardwareInfo,
    HardwareInfoBuilder,
    Log,
    LogBuilder,
    Measurement,
    MeasurementBuilder,
    MeasurementSeriesStart,
    MeasurementSeriesStartBuilder,
    PlatformInfo,
    SchemaVersion,
    SoftwareInfo,
    SoftwareInfoBuilder,
    SourceLocation,
    Subcomponent,
    SubcomponentBuilder,
    Validator,
    ValidatorBuilder,
)
from .run import StartedTestRun, TestRun, TestRunBuilder, TestRunOutcome
from .state import RunState
from .step import StartedTestStep, TestStep
from .writers import BufferWriter, FileWriter, StdoutWriter, Writer

__all__ = [
    "DiagnosisType",
    "LogSeverity",
    "SoftwareType",
    "SubcomponentType",
    "TestResult",
    "TestStatus",
    "ValidatorType",
    "Config",
    "ConfigBuilder",
    "JsonEmitter",
    "RunState",
    "TestRun",
    "TestRunBuilder",
    "TestRunOutcome",
    "StartedTestRun",
    "TestStep",
    "StartedTestStep",
    "MeasurementSeries",
    "StartedMeasurementSeries",
    "Diagnosis",
    "DiagnosisBuilder",
    "DutInfo",
    "DutInfoBuilder",
    "Error",
    "ErrorBuilder",
    "Extension",
    "File",
    "FileBuilder",
    "HardwareInfo",
    "HardwareInfoBuilder",
    "Log",
    "LogBuilder",
    "Measurement",
    "MeasurementBuilder",
    "MeasurementSeriesStart",
    "MeasurementSeriesStartBuilder",
    "PlatformInfo",
    "SchemaVersion",
    "SoftwareInfo",
    "SoftwareInfoBuilder",
    "SourceLocation",
    "Subcomponent",
    "SubcomponentBuilder",
    "Validator",
    "ValidatorBuilder",
    "Writer",
    "BufferWriter",
    "FileWriter",
    "StdoutWriter",
]
