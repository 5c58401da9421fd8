from __future__ import annotations

import json

import pytest

from ocptv_contracts import RecordValidationError, validate_record_dict, validate_record_json


def _step_line(body: dict) -> dict:
    return {
        "testStepArtifact": {"testStepId": "step_0", **body},
        "sequenceNumber": 3,
        "timestamp": "2024-01-02T03:04:05.678Z",
    }


def test_valid_schema_version_line():
    obj = validate_record_json(
        '{"schemaVersion":{"major":2,"minor":0},"sequenceNumber":0,'
        '"timestamp":"2024-01-02T03:04:05.678+05:30"}'
    )
    assert obj["sequenceNumber"] == 0


def test_valid_step_log():
    validate_record_dict(
        _step_line(
            {"log": {"severity": "INFO", "message": "m", "sourceLocation": None}}
        )
    )


def test_rejects_missing_null_field():
    # optional fields are always present, even when null
    with pytest.raises(RecordValidationError):
        validate_record_dict(_step_line({"log": {"severity": "INFO", "message": "m"}}))


def test_rejects_unknown_severity():
    with pytest.raises(RecordValidationError) as ei:
        validate_record_dict(
            _step_line(
                {"log": {"severity": "LOUD", "message": "m", "sourceLocation": None}}
            )
        )
    assert "severity" in str(ei.value)


def test_rejects_two_root_kinds():
    line = _step_line({"testStepStart": {"name": "s"}})
    line["schemaVersion"] = {"major": 2, "minor": 0}
    with pytest.raises(RecordValidationError):
        validate_record_dict(line)


def test_rejects_timestamp_without_millis():
    line = _step_line({"testStepStart": {"name": "s"}})
    line["timestamp"] = "2024-01-02T03:04:05Z"
    with pytest.raises(RecordValidationError):
        validate_record_dict(line)


@pytest.mark.parametrize("raw", ["not json", "[]", json.dumps("x")])
def test_rejects_non_object_lines(raw: str):
    with pytest.raises(RecordValidationError):
        validate_record_json(raw)


def test_error_software_infos_are_objects():
    sw = {
        "softwareInfoId": "sw0",
        "name": "bios",
        "version": None,
        "revision": None,
        "softwareType": "FIRMWARE",
        "computerSystem": None,
    }
    error = {"symptom": "bad", "message": None, "sourceLocation": None}
    validate_record_dict(_step_line({"error": {**error, "softwareInfoIds": [sw]}}))
    with pytest.raises(RecordValidationError):
        validate_record_dict(_step_line({"error": {**error, "softwareInfoIds": ["sw0"]}}))


def test_series_start_hardware_info_is_an_object_or_null():
    start = {
        "name": "temp",
        "unit": None,
        "measurementSeriesId": "series_0",
        "validators": None,
        "subcomponent": None,
        "metadata": None,
    }
    validate_record_dict(
        _step_line({"measurementSeriesStart": {**start, "hardwareInfoId": None}})
    )
    with pytest.raises(RecordValidationError):
        validate_record_dict(
            _step_line({"measurementSeriesStart": {**start, "hardwareInfoId": "psu0"}})
        )
