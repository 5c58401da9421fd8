"""
Value objects handed to the lifecycle API.

Each object is immutable once built and converts to its wire model with
``to_artifact()``. Builders capture required fields in ``builder(...)`` and
expose chainable setters for everything optional; unset fields end up as
``null`` in the output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ocptv_contracts import (
    DiagnosisType,
    ExtensionContent,
    LogSeverity,
    SoftwareType,
    SubcomponentType,
    ValidatorType,
    models,
    spec_version,
)

from ocptv.core import JsonValue

Metadata = dict[str, JsonValue]


def _opt_metadata(metadata: Metadata) -> Optional[Metadata]:
    return dict(metadata) if metadata else None


# ---------- Schema version ----------
@dataclass(frozen=True, slots=True)
class SchemaVersion:
    major: int
    minor: int

    @classmethod
    def current(cls) -> "SchemaVersion":
        major, minor = spec_version()
        return cls(major=major, minor=minor)

    def to_artifact(self) -> models.SchemaVersion:
        return models.SchemaVersion(major=self.major, minor=self.minor)


# ---------- Source location ----------
@dataclass(frozen=True, slots=True)
class SourceLocation:
    file: str
    line: int

    def to_artifact(self) -> models.SourceLocation:
        return models.SourceLocation(file=self.file, line=self.line)


def _opt_source(source: Optional[SourceLocation]) -> Optional[models.SourceLocation]:
    return source.to_artifact() if source is not None else None


# ---------- DUT description ----------
@dataclass(frozen=True, slots=True)
class PlatformInfo:
    info: str

    def to_artifact(self) -> models.PlatformInfo:
        return models.PlatformInfo(info=self.info)


@dataclass(frozen=True, slots=True)
class SoftwareInfo:
    id: str
    name: str
    version: Optional[str] = None
    revision: Optional[str] = None
    software_type: Optional[SoftwareType] = None
    computer_system: Optional[str] = None

    @staticmethod
    def builder(id: str, name: str) -> "SoftwareInfoBuilder":
        return SoftwareInfoBuilder(id, name)

    def to_artifact(self) -> models.SoftwareInfo:
        return models.SoftwareInfo(
            id=self.id,
            name=self.name,
            version=self.version,
            revision=self.revision,
            software_type=self.software_type,
            computer_system=self.computer_system,
        )


class SoftwareInfoBuilder:
    def __init__(self, id: str, name: str) -> None:
        self._id = id
        self._name = name
        self._version: Optional[str] = None
        self._revision: Optional[str] = None
        self._software_type: Optional[SoftwareType] = None
        self._computer_system: Optional[str] = None

    def version(self, value: str) -> "SoftwareInfoBuilder":
        self._version = value
        return self

    def revision(self, value: str) -> "SoftwareInfoBuilder":
        self._revision = value
        return self

    def software_type(self, value: SoftwareType) -> "SoftwareInfoBuilder":
        self._software_type = SoftwareType(value)
        return self

    def computer_system(self, value: str) -> "SoftwareInfoBuilder":
        self._computer_system = value
        return self

    def build(self) -> SoftwareInfo:
        return SoftwareInfo(
            id=self._id,
            name=self._name,
            version=self._version,
            revision=self._revision,
            software_type=self._software_type,
            computer_system=self._computer_system,
        )


@dataclass(frozen=True, slots=True)
class HardwareInfo:
    id: str
    name: str
    version: Optional[str] = None
    revision: Optional[str] = None
    location: Optional[str] = None
    serial_no: Optional[str] = None
    part_no: Optional[str] = None
    manufacturer: Optional[str] = None
    manufacturer_part_no: Optional[str] = None
    odata_id: Optional[str] = None
    computer_system: Optional[str] = None
    manager: Optional[str] = None

    @staticmethod
    def builder(id: str, name: str) -> "HardwareInfoBuilder":
        return HardwareInfoBuilder(id, name)

    def to_artifact(self) -> models.HardwareInfo:
        return models.HardwareInfo(
            id=self.id,
            name=self.name,
            version=self.version,
            revision=self.revision,
            location=self.location,
            serial_no=self.serial_no,
            part_no=self.part_no,
            manufacturer=self.manufacturer,
            manufacturer_part_no=self.manufacturer_part_no,
            odata_id=self.odata_id,
            computer_system=self.computer_system,
            manager=self.manager,
        )


class HardwareInfoBuilder:
    _OPTIONAL = (
        "version",
        "revision",
        "location",
        "serial_no",
        "part_no",
        "manufacturer",
        "manufacturer_part_no",
        "odata_id",
        "computer_system",
        "manager",
    )

    def __init__(self, id: str, name: str) -> None:
        self._id = id
        self._name = name
        self._fields: dict[str, Optional[str]] = {k: None for k in self._OPTIONAL}

    def _set(self, key: str, value: str) -> "HardwareInfoBuilder":
        self._fields[key] = value
        return self

    def version(self, value: str) -> "HardwareInfoBuilder":
        return self._set("version", value)

    def revision(self, value: str) -> "HardwareInfoBuilder":
        return self._set("revision", value)

    def location(self, value: str) -> "HardwareInfoBuilder":
        return self._set("location", value)

    def serial_no(self, value: str) -> "HardwareInfoBuilder":
        return self._set("serial_no", value)

    def part_no(self, value: str) -> "HardwareInfoBuilder":
        return self._set("part_no", value)

    def manufacturer(self, value: str) -> "HardwareInfoBuilder":
        return self._set("manufacturer", value)

    def manufacturer_part_no(self, value: str) -> "HardwareInfoBuilder":
        return self._set("manufacturer_part_no", value)

    def odata_id(self, value: str) -> "HardwareInfoBuilder":
        return self._set("odata_id", value)

    def computer_system(self, value: str) -> "HardwareInfoBuilder":
        return self._set("computer_system", value)

    def manager(self, value: str) -> "HardwareInfoBuilder":
        return self._set("manager", value)

    def build(self) -> HardwareInfo:
        return HardwareInfo(id=self._id, name=self._name, **self._fields)


@dataclass(frozen=True, slots=True)
class DutInfo:
    id: str
    name: Optional[str] = None
    platform_infos: tuple[PlatformInfo, ...] = ()
    software_infos: tuple[SoftwareInfo, ...] = ()
    hardware_infos: tuple[HardwareInfo, ...] = ()
    metadata: Metadata = field(default_factory=dict)

    @staticmethod
    def builder(id: str) -> "DutInfoBuilder":
        return DutInfoBuilder(id)

    def to_artifact(self) -> models.DutInfo:
        return models.DutInfo(
            id=self.id,
            name=self.name,
            platform_infos=[p.to_artifact() for p in self.platform_infos] or None,
            software_infos=[s.to_artifact() for s in self.software_infos] or None,
            hardware_infos=[h.to_artifact() for h in self.hardware_infos] or None,
            metadata=_opt_metadata(self.metadata),
        )


class DutInfoBuilder:
    def __init__(self, id: str) -> None:
        self._id = id
        self._name: Optional[str] = None
        self._platform_infos: list[PlatformInfo] = []
        self._software_infos: list[SoftwareInfo] = []
        self._hardware_infos: list[HardwareInfo] = []
        self._metadata: Metadata = {}

    def name(self, value: str) -> "DutInfoBuilder":
        self._name = value
        return self

    def add_platform_info(self, info: PlatformInfo) -> "DutInfoBuilder":
        self._platform_infos.append(info)
        return self

    def add_software_info(self, info: SoftwareInfo) -> "DutInfoBuilder":
        self._software_infos.append(info)
        return self

    def add_hardware_info(self, info: HardwareInfo) -> "DutInfoBuilder":
        self._hardware_infos.append(info)
        return self

    def add_metadata(self, key: str, value: JsonValue) -> "DutInfoBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> DutInfo:
        return DutInfo(
            id=self._id,
            name=self._name,
            platform_infos=tuple(self._platform_infos),
            software_infos=tuple(self._software_infos),
            hardware_infos=tuple(self._hardware_infos),
            metadata=dict(self._metadata),
        )


@dataclass(frozen=True, slots=True)
class Subcomponent:
    name: str
    subcomponent_type: Optional[SubcomponentType] = None
    location: Optional[str] = None
    version: Optional[str] = None
    revision: Optional[str] = None

    @staticmethod
    def builder(name: str) -> "SubcomponentBuilder":
        return SubcomponentBuilder(name)

    def to_artifact(self) -> models.Subcomponent:
        return models.Subcomponent(
            subcomponent_type=self.subcomponent_type,
            name=self.name,
            location=self.location,
            version=self.version,
            revision=self.revision,
        )


class SubcomponentBuilder:
    def __init__(self, name: str) -> None:
        self._name = name
        self._type: Optional[SubcomponentType] = None
        self._location: Optional[str] = None
        self._version: Optional[str] = None
        self._revision: Optional[str] = None

    def subcomponent_type(self, value: SubcomponentType) -> "SubcomponentBuilder":
        self._type = SubcomponentType(value)
        return self

    def location(self, value: str) -> "SubcomponentBuilder":
        self._location = value
        return self

    def version(self, value: str) -> "SubcomponentBuilder":
        self._version = value
        return self

    def revision(self, value: str) -> "SubcomponentBuilder":
        self._revision = value
        return self

    def build(self) -> Subcomponent:
        return Subcomponent(
            name=self._name,
            subcomponent_type=self._type,
            location=self._location,
            version=self._version,
            revision=self._revision,
        )


def _opt_subcomponent(sub: Optional[Subcomponent]) -> Optional[models.Subcomponent]:
    return sub.to_artifact() if sub is not None else None


# ---------- Validators ----------
@dataclass(frozen=True, slots=True)
class Validator:
    validator_type: ValidatorType
    value: JsonValue
    name: Optional[str] = None
    metadata: Metadata = field(default_factory=dict)

    @staticmethod
    def builder(validator_type: ValidatorType, value: JsonValue) -> "ValidatorBuilder":
        return ValidatorBuilder(validator_type, value)

    def to_artifact(self) -> models.Validator:
        return models.Validator(
            name=self.name,
            validator_type=self.validator_type,
            value=self.value,
            metadata=_opt_metadata(self.metadata),
        )


class ValidatorBuilder:
    def __init__(self, validator_type: ValidatorType, value: JsonValue) -> None:
        self._type = ValidatorType(validator_type)
        self._value = value
        self._name: Optional[str] = None
        self._metadata: Metadata = {}

    def name(self, value: str) -> "ValidatorBuilder":
        self._name = value
        return self

    def add_metadata(self, key: str, value: JsonValue) -> "ValidatorBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> Validator:
        return Validator(
            validator_type=self._type,
            value=self._value,
            name=self._name,
            metadata=dict(self._metadata),
        )


def _opt_validators(validators: tuple[Validator, ...]) -> Optional[list[models.Validator]]:
    return [v.to_artifact() for v in validators] or None


# ---------- Log / Error ----------
@dataclass(frozen=True, slots=True)
class Log:
    message: str
    severity: LogSeverity = LogSeverity.INFO
    source_location: Optional[SourceLocation] = None

    @staticmethod
    def builder(message: str) -> "LogBuilder":
        return LogBuilder(message)

    def to_artifact(self) -> models.Log:
        return models.Log(
            severity=self.severity,
            message=self.message,
            source_location=_opt_source(self.source_location),
        )


class LogBuilder:
    def __init__(self, message: str) -> None:
        self._message = message
        self._severity = LogSeverity.INFO
        self._source: Optional[SourceLocation] = None

    def severity(self, value: LogSeverity) -> "LogBuilder":
        self._severity = LogSeverity(value)
        return self

    def source(self, file: str, line: int) -> "LogBuilder":
        self._source = SourceLocation(file=file, line=line)
        return self

    def build(self) -> Log:
        return Log(
            message=self._message,
            severity=self._severity,
            source_location=self._source,
        )


@dataclass(frozen=True, slots=True)
class Error:
    symptom: str
    message: Optional[str] = None
    software_infos: tuple[SoftwareInfo, ...] = ()
    source_location: Optional[SourceLocation] = None

    @staticmethod
    def builder(symptom: str) -> "ErrorBuilder":
        return ErrorBuilder(symptom)

    def to_artifact(self) -> models.Error:
        return models.Error(
            symptom=self.symptom,
            message=self.message,
            software_infos=[s.to_artifact() for s in self.software_infos] or None,
            source_location=_opt_source(self.source_location),
        )


class ErrorBuilder:
    def __init__(self, symptom: str) -> None:
        self._symptom = symptom
        self._message: Optional[str] = None
        self._software_infos: list[SoftwareInfo] = []
        self._source: Optional[SourceLocation] = None

    def message(self, value: str) -> "ErrorBuilder":
        self._message = value
        return self

    def add_software_info(self, info: SoftwareInfo) -> "ErrorBuilder":
        self._software_infos.append(info)
        return self

    def source(self, file: str, line: int) -> "ErrorBuilder":
        self._source = SourceLocation(file=file, line=line)
        return self

    def build(self) -> Error:
        return Error(
            symptom=self._symptom,
            message=self._message,
            software_infos=tuple(self._software_infos),
            source_location=self._source,
        )


# ---------- Measurements ----------
@dataclass(frozen=True, slots=True)
class Measurement:
    name: str
    value: JsonValue
    unit: Optional[str] = None
    validators: tuple[Validator, ...] = ()
    hardware_info: Optional[HardwareInfo] = None
    subcomponent: Optional[Subcomponent] = None
    metadata: Metadata = field(default_factory=dict)

    @staticmethod
    def builder(name: str, value: JsonValue) -> "MeasurementBuilder":
        return MeasurementBuilder(name, value)

    def to_artifact(self) -> models.Measurement:
        return models.Measurement(
            name=self.name,
            value=self.value,
            unit=self.unit,
            validators=_opt_validators(self.validators),
            hardware_info_id=self.hardware_info.id if self.hardware_info else None,
            subcomponent=_opt_subcomponent(self.subcomponent),
            metadata=_opt_metadata(self.metadata),
        )


class MeasurementBuilder:
    def __init__(self, name: str, value: JsonValue) -> None:
        self._name = name
        self._value = value
        self._unit: Optional[str] = None
        self._validators: list[Validator] = []
        self._hardware_info: Optional[HardwareInfo] = None
        self._subcomponent: Optional[Subcomponent] = None
        self._metadata: Metadata = {}

    def unit(self, value: str) -> "MeasurementBuilder":
        self._unit = value
        return self

    def add_validator(self, validator: Validator) -> "MeasurementBuilder":
        self._validators.append(validator)
        return self

    def hardware_info(self, info: HardwareInfo) -> "MeasurementBuilder":
        self._hardware_info = info
        return self

    def subcomponent(self, sub: Subcomponent) -> "MeasurementBuilder":
        self._subcomponent = sub
        return self

    def add_metadata(self, key: str, value: JsonValue) -> "MeasurementBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> Measurement:
        return Measurement(
            name=self._name,
            value=self._value,
            unit=self._unit,
            validators=tuple(self._validators),
            hardware_info=self._hardware_info,
            subcomponent=self._subcomponent,
            metadata=dict(self._metadata),
        )


@dataclass(frozen=True, slots=True)
class MeasurementSeriesStart:
    name: str
    series_id: str
    unit: Optional[str] = None
    validators: tuple[Validator, ...] = ()
    hardware_info: Optional[HardwareInfo] = None
    subcomponent: Optional[Subcomponent] = None
    metadata: Metadata = field(default_factory=dict)

    @staticmethod
    def builder(name: str, series_id: str) -> "MeasurementSeriesStartBuilder":
        return MeasurementSeriesStartBuilder(name, series_id)

    def to_artifact(self) -> models.MeasurementSeriesStart:
        return models.MeasurementSeriesStart(
            name=self.name,
            unit=self.unit,
            series_id=self.series_id,
            validators=_opt_validators(self.validators),
            hardware_info=self.hardware_info.to_artifact() if self.hardware_info else None,
            subcomponent=_opt_subcomponent(self.subcomponent),
            metadata=_opt_metadata(self.metadata),
        )


class MeasurementSeriesStartBuilder:
    def __init__(self, name: str, series_id: str) -> None:
        self._name = name
        self._series_id = series_id
        self._unit: Optional[str] = None
        self._validators: list[Validator] = []
        self._hardware_info: Optional[HardwareInfo] = None
        self._subcomponent: Optional[Subcomponent] = None
        self._metadata: Metadata = {}

    def unit(self, value: str) -> "MeasurementSeriesStartBuilder":
        self._unit = value
        return self

    def add_validator(self, validator: Validator) -> "MeasurementSeriesStartBuilder":
        self._validators.append(validator)
        return self

    def hardware_info(self, info: HardwareInfo) -> "MeasurementSeriesStartBuilder":
        self._hardware_info = info
        return self

    def subcomponent(self, sub: Subcomponent) -> "MeasurementSeriesStartBuilder":
        self._subcomponent = sub
        return self

    def add_metadata(self, key: str, value: JsonValue) -> "MeasurementSeriesStartBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> MeasurementSeriesStart:
        return MeasurementSeriesStart(
            name=self._name,
            series_id=self._series_id,
            unit=self._unit,
            validators=tuple(self._validators),
            hardware_info=self._hardware_info,
            subcomponent=self._subcomponent,
            metadata=dict(self._metadata),
        )


# ---------- Diagnosis / File / Extension ----------
@dataclass(frozen=True, slots=True)
class Diagnosis:
    verdict: str
    diagnosis_type: DiagnosisType
    message: Optional[str] = None
    hardware_info: Optional[HardwareInfo] = None
    subcomponent: Optional[Subcomponent] = None
    source_location: Optional[SourceLocation] = None

    @staticmethod
    def builder(verdict: str, diagnosis_type: DiagnosisType) -> "DiagnosisBuilder":
        return DiagnosisBuilder(verdict, diagnosis_type)

    def to_artifact(self) -> models.Diagnosis:
        return models.Diagnosis(
            verdict=self.verdict,
            diagnosis_type=self.diagnosis_type,
            message=self.message,
            hardware_info_id=self.hardware_info.id if self.hardware_info else None,
            subcomponent=_opt_subcomponent(self.subcomponent),
            source_location=_opt_source(self.source_location),
        )


class DiagnosisBuilder:
    def __init__(self, verdict: str, diagnosis_type: DiagnosisType) -> None:
        self._verdict = verdict
        self._type = DiagnosisType(diagnosis_type)
        self._message: Optional[str] = None
        self._hardware_info: Optional[HardwareInfo] = None
        self._subcomponent: Optional[Subcomponent] = None
        self._source: Optional[SourceLocation] = None

    def message(self, value: str) -> "DiagnosisBuilder":
        self._message = value
        return self

    def hardware_info(self, info: HardwareInfo) -> "DiagnosisBuilder":
        self._hardware_info = info
        return self

    def subcomponent(self, sub: Subcomponent) -> "DiagnosisBuilder":
        self._subcomponent = sub
        return self

    def source(self, file: str, line: int) -> "DiagnosisBuilder":
        self._source = SourceLocation(file=file, line=line)
        return self

    def build(self) -> Diagnosis:
        return Diagnosis(
            verdict=self._verdict,
            diagnosis_type=self._type,
            message=self._message,
            hardware_info=self._hardware_info,
            subcomponent=self._subcomponent,
            source_location=self._source,
        )


@dataclass(frozen=True, slots=True)
class File:
    name: str
    uri: str
    is_snapshot: bool = False
    description: Optional[str] = None
    content_type: Optional[str] = None
    metadata: Metadata = field(default_factory=dict)

    @staticmethod
    def builder(name: str, uri: str) -> "FileBuilder":
        return FileBuilder(name, uri)

    def to_artifact(self) -> models.File:
        return models.File(
            name=self.name,
            uri=self.uri,
            is_snapshot=self.is_snapshot,
            description=self.description,
            content_type=self.content_type,
            metadata=_opt_metadata(self.metadata),
        )


class FileBuilder:
    def __init__(self, name: str, uri: str) -> None:
        self._name = name
        self._uri = uri
        self._is_snapshot = False
        self._description: Optional[str] = None
        self._content_type: Optional[str] = None
        self._metadata: Metadata = {}

    def is_snapshot(self, value: bool) -> "FileBuilder":
        self._is_snapshot = bool(value)
        return self

    def description(self, value: str) -> "FileBuilder":
        self._description = value
        return self

    def content_type(self, value: str) -> "FileBuilder":
        self._content_type = value
        return self

    def add_metadata(self, key: str, value: JsonValue) -> "FileBuilder":
        self._metadata[key] = value
        return self

    def build(self) -> File:
        return File(
            name=self._name,
            uri=self._uri,
            is_snapshot=self._is_snapshot,
            description=self._description,
            content_type=self._content_type,
            metadata=dict(self._metadata),
        )


@dataclass(frozen=True, slots=True)
class Extension:
    """Named free-form payload; content is a single float, int, bool or str."""

    name: str
    content: ExtensionContent

    def to_artifact(self) -> models.Extension:
        return models.Extension(name=self.name, content=self.content)
