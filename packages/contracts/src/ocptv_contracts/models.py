"""
Wire models for the OCP test & validation output format.

Every model serializes with its camelCase wire names. Optional fields are
always present in the output and render as ``null`` when unset.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, ClassVar, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    SerializerFunctionWrapHandler,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_serializer,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel

from .enums import (
    DiagnosisType,
    LogSeverity,
    SoftwareType,
    SubcomponentType,
    TestResult,
    TestStatus,
    ValidatorType,
)

Metadata = dict[str, JsonValue]
ExtensionContent = Union[StrictBool, StrictInt, StrictFloat, StrictStr]


def format_rfc3339(ts: datetime) -> str:
    """
    RFC 3339 with millisecond precision.

    UTC renders with a trailing ``Z``; any other offset renders numerically.
    Naive datetimes are taken to be UTC.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    s = ts.isoformat(timespec="milliseconds")
    if s.endswith("+00:00"):
        return s[: -len("+00:00")] + "Z"
    return s


def extension_content_tag(value: ExtensionContent) -> str:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    return "str"


class WireModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------- DUT description ----------
class PlatformInfo(WireModel):
    info: str


class SoftwareInfo(WireModel):
    id: str = Field(alias="softwareInfoId")
    name: str
    version: Optional[str] = None
    revision: Optional[str] = None
    software_type: Optional[SoftwareType] = None
    computer_system: Optional[str] = None


class HardwareInfo(WireModel):
    id: str = Field(alias="hardwareInfoId")
    name: str
    version: Optional[str] = None
    revision: Optional[str] = None
    location: Optional[str] = None
    serial_no: Optional[str] = Field(default=None, alias="serialNumber")
    part_no: Optional[str] = Field(default=None, alias="partNumber")
    manufacturer: Optional[str] = None
    manufacturer_part_no: Optional[str] = Field(
        default=None, alias="manufacturerPartNumber"
    )
    odata_id: Optional[str] = None
    computer_system: Optional[str] = None
    manager: Optional[str] = None


class DutInfo(WireModel):
    id: str = Field(alias="dutInfoId")
    name: Optional[str] = None
    platform_infos: Optional[list[PlatformInfo]] = None
    software_infos: Optional[list[SoftwareInfo]] = None
    hardware_infos: Optional[list[HardwareInfo]] = None
    metadata: Optional[Metadata] = None


class Subcomponent(WireModel):
    subcomponent_type: Optional[SubcomponentType] = Field(default=None, alias="type")
    name: str
    location: Optional[str] = None
    version: Optional[str] = None
    revision: Optional[str] = None


class SourceLocation(WireModel):
    file: str
    line: int


class Validator(WireModel):
    name: Optional[str] = None
    validator_type: ValidatorType = Field(alias="type")
    value: JsonValue
    metadata: Optional[Metadata] = None


# ---------- Artifact bodies ----------
class SchemaVersion(WireModel):
    WIRE_KEY: ClassVar[str] = "schemaVersion"

    major: int
    minor: int


class TestRunStart(WireModel):
    WIRE_KEY: ClassVar[str] = "testRunStart"

    name: str
    version: str
    command_line: str
    parameters: Metadata = Field(default_factory=dict)
    dut_info: DutInfo
    metadata: Optional[Metadata] = None


class TestRunEnd(WireModel):
    WIRE_KEY: ClassVar[str] = "testRunEnd"

    status: TestStatus
    result: TestResult


class Log(WireModel):
    WIRE_KEY: ClassVar[str] = "log"

    severity: LogSeverity
    message: str
    source_location: Optional[SourceLocation] = None


class Error(WireModel):
    WIRE_KEY: ClassVar[str] = "error"

    symptom: str
    message: Optional[str] = None
    software_infos: Optional[list[SoftwareInfo]] = Field(default=None, alias="softwareInfoIds")
    source_location: Optional[SourceLocation] = None


class TestStepStart(WireModel):
    WIRE_KEY: ClassVar[str] = "testStepStart"

    name: str


class TestStepEnd(WireModel):
    WIRE_KEY: ClassVar[str] = "testStepEnd"

    status: TestStatus


class Measurement(WireModel):
    WIRE_KEY: ClassVar[str] = "measurement"

    name: str
    value: JsonValue
    unit: Optional[str] = None
    validators: Optional[list[Validator]] = None
    hardware_info_id: Optional[str] = None
    subcomponent: Optional[Subcomponent] = None
    metadata: Optional[Metadata] = None


class MeasurementSeriesStart(WireModel):
    WIRE_KEY: ClassVar[str] = "measurementSeriesStart"

    name: str
    unit: Optional[str] = None
    series_id: str = Field(alias="measurementSeriesId")
    validators: Optional[list[Validator]] = None
    hardware_info: Optional[HardwareInfo] = Field(default=None, alias="hardwareInfoId")
    subcomponent: Optional[Subcomponent] = None
    metadata: Optional[Metadata] = None


class MeasurementSeriesEnd(WireModel):
    WIRE_KEY: ClassVar[str] = "measurementSeriesEnd"

    series_id: str = Field(alias="measurementSeriesId")
    total_count: int = Field(ge=0)


class MeasurementSeriesElement(WireModel):
    WIRE_KEY: ClassVar[str] = "measurementSeriesElement"

    index: int = Field(ge=0)
    value: JsonValue
    timestamp: datetime
    series_id: str = Field(alias="measurementSeriesId")
    metadata: Optional[Metadata] = None

    @field_validator("timestamp")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_serializer("timestamp")
    def _render_timestamp(self, v: datetime) -> str:
        return format_rfc3339(v)

    @classmethod
    def from_wire(cls, obj: dict[str, Any] | str | bytes) -> "MeasurementSeriesElement":
        if isinstance(obj, (str, bytes)):
            obj = json.loads(obj)
        return cls.model_validate(obj)


class Diagnosis(WireModel):
    WIRE_KEY: ClassVar[str] = "diagnosis"

    verdict: str
    diagnosis_type: DiagnosisType = Field(alias="type")
    message: Optional[str] = None
    hardware_info_id: Optional[str] = None
    subcomponent: Optional[Subcomponent] = None
    source_location: Optional[SourceLocation] = None


class File(WireModel):
    WIRE_KEY: ClassVar[str] = "file"

    name: str
    uri: str
    is_snapshot: bool = False
    description: Optional[str] = None
    content_type: Optional[str] = None
    metadata: Optional[Metadata] = None


class Extension(WireModel):
    WIRE_KEY: ClassVar[str] = "extension"

    name: str
    content: ExtensionContent

    @field_serializer("content")
    def _tag_content(self, v: ExtensionContent) -> dict[str, Any]:
        return {extension_content_tag(v): v}


TestRunArtifactBody = Union[TestRunStart, TestRunEnd, Log, Error]
TestStepArtifactBody = Union[
    TestStepStart,
    TestStepEnd,
    Measurement,
    MeasurementSeriesStart,
    MeasurementSeriesEnd,
    MeasurementSeriesElement,
    Diagnosis,
    Log,
    Error,
    File,
    Extension,
]


# ---------- Containers ----------
class TestRunArtifact(WireModel):
    WIRE_KEY: ClassVar[str] = "testRunArtifact"

    artifact: TestRunArtifactBody

    @model_serializer(mode="wrap")
    def _flatten(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {self.artifact.WIRE_KEY: data["artifact"]}


class TestStepArtifact(WireModel):
    WIRE_KEY: ClassVar[str] = "testStepArtifact"

    id: str = Field(alias="testStepId")
    artifact: TestStepArtifactBody

    @model_serializer(mode="wrap")
    def _flatten(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {"testStepId": self.id, self.artifact.WIRE_KEY: data["artifact"]}


RootArtifact = Union[SchemaVersion, TestRunArtifact, TestStepArtifact]


class Root(WireModel):
    """
    One output line: an artifact plus its sequence number and timestamp.
    """

    artifact: RootArtifact
    timestamp: datetime
    seqno: int = Field(alias="sequenceNumber", ge=0)

    @field_serializer("timestamp")
    def _render_timestamp(self, v: datetime) -> str:
        return format_rfc3339(v)

    @model_serializer(mode="wrap")
    def _flatten(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {
            self.artifact.WIRE_KEY: data["artifact"],
            "sequenceNumber": self.seqno,
            "timestamp": data["timestamp"],
        }

    @property
    def kind(self) -> str:
        """Innermost artifact kind, e.g. ``testStepStart``."""
        inner = getattr(self.artifact, "artifact", self.artifact)
        return inner.WIRE_KEY
