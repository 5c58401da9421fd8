from __future__ import annotations

from enum import StrEnum


class TestStatus(StrEnum):
    """Final execution status of a test run or step."""

    COMPLETE = "COMPLETE"
    ERROR = "ERROR"
    SKIP = "SKIP"


class TestResult(StrEnum):
    """Final outcome of a test run."""

    PASS = "PASS"
    FAIL = "FAIL"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class LogSeverity(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"


class DiagnosisType(StrEnum):
    PASS = "PASS"
    FAIL = "FAIL"
    UNKNOWN = "UNKNOWN"


class ValidatorType(StrEnum):
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    REGEX_MATCH = "REGEX_MATCH"
    REGEX_NO_MATCH = "REGEX_NO_MATCH"
    IN_SET = "IN_SET"
    NOT_IN_SET = "NOT_IN_SET"


class SubcomponentType(StrEnum):
    UNSPECIFIED = "UNSPECIFIED"
    ASIC = "ASIC"
    ASIC_SUBSYSTEM = "ASIC-SUBSYSTEM"
    BUS = "BUS"
    FUNCTION = "FUNCTION"
    CONNECTOR = "CONNECTOR"


class SoftwareType(StrEnum):
    UNSPECIFIED = "UNSPECIFIED"
    FIRMWARE = "FIRMWARE"
    SYSTEM = "SYSTEM"
    APPLICATION = "APPLICATION"
