from __future__ import annotations

from .enums import (
    DiagnosisType,
    LogSeverity,
    SoftwareType,
    SubcomponentType,
    TestResult,
    TestStatus,
    ValidatorType,
)
from .errors import ContractsError, ContractsResourceError, RecordValidationError
from .models import (
    Diagnosis,
    DutInfo,
    Error,
    Extension,
    ExtensionContent,
    File,
    HardwareInfo,
    Log,
    Measurement,
    MeasurementSeriesElement,
    MeasurementSeriesEnd,
    MeasurementSeriesStart,
    Metadata,
    PlatformInfo,
    Root,
    RootArtifact,
    SchemaVersion,
    SoftwareInfo,
    SourceLocation,
    Subcomponent,
    TestRunArtifact,
    TestRunEnd,
    TestRunStart,
    TestStepArtifact,
    TestStepEnd,
    TestStepStart,
    Validator,
    format_rfc3339,
)
from .resources import (
    OUTPUT_SCHEMA_REL,
    SCHEMA_VERSION_REL,
    output_schema,
    parse_schema_version,
    read_json,
    read_text,
    schema_version_text,
)
from .validation import validate_record_dict, validate_record_json
from .version import (
    OCPTV_DIST_VERSION,
    ContractVersionInfo,
    get_contract_version_info,
    spec_version,
)

__all__ = [
    "ContractsError",
    "ContractsResourceError",
    "RecordValidationError",
    "DiagnosisType",
    "LogSeverity",
    "SoftwareType",
    "SubcomponentType",
    "TestResult",
    "TestStatus",
    "ValidatorType",
    "Diagnosis",
    "DutInfo",
    "Error",
    "Extension",
    "ExtensionContent",
    "File",
    "HardwareInfo",
    "Log",
    "Measurement",
    "MeasurementSeriesElement",
    "MeasurementSeriesEnd",
    "MeasurementSeriesStart",
    "Metadata",
    "PlatformInfo",
    "Root",
    "RootArtifact",
    "SchemaVersion",
    "SoftwareInfo",
    "SourceLocation",
    "Subcomponent",
    "TestRunArtifact",
    "TestRunEnd",
    "TestRunStart",
    "TestStepArtifact",
    "TestStepEnd",
    "TestStepStart",
    "Validator",
    "format_rfc3339",
    "read_text",
    "read_json",
    "output_schema",
    "schema_version_text",
    "parse_schema_version",
    "OUTPUT_SCHEMA_REL",
    "SCHEMA_VERSION_REL",
    "validate_record_dict",
    "validate_record_json",
    "OCPTV_DIST_VERSION",
    "ContractVersionInfo",
    "get_contract_version_info",
    "spec_version",
]
