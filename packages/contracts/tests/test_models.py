from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from ocptv_contracts import (
    DutInfo,
    Error,
    Extension,
    HardwareInfo,
    Log,
    LogSeverity,
    Measurement,
    MeasurementSeriesElement,
    MeasurementSeriesStart,
    Root,
    SchemaVersion,
    SoftwareInfo,
    Subcomponent,
    SubcomponentType,
    format_rfc3339,
    models,
)

TS = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)


def test_format_rfc3339_millis_and_zulu():
    assert format_rfc3339(TS) == "2024-01-02T03:04:05.678Z"
    assert format_rfc3339(TS.replace(tzinfo=None)) == "2024-01-02T03:04:05.678Z"

    ist = timezone(timedelta(hours=5, minutes=30))
    assert format_rfc3339(TS.astimezone(ist)) == "2024-01-02T08:34:05.678+05:30"


def test_schema_version_root():
    root = Root(artifact=SchemaVersion(major=2, minor=0), timestamp=TS, seqno=0)
    assert root.kind == "schemaVersion"
    assert root.to_wire() == {
        "schemaVersion": {"major": 2, "minor": 0},
        "sequenceNumber": 0,
        "timestamp": "2024-01-02T03:04:05.678Z",
    }


def test_run_start_renders_unset_fields_as_null():
    start = models.TestRunStart(
        name="r",
        version="1.0",
        command_line="",
        dut_info=DutInfo(id="d"),
    )
    root = Root(artifact=models.TestRunArtifact(artifact=start), timestamp=TS, seqno=1)
    assert root.kind == "testRunStart"
    assert root.to_wire()["testRunArtifact"] == {
        "testRunStart": {
            "name": "r",
            "version": "1.0",
            "commandLine": "",
            "parameters": {},
            "dutInfo": {
                "dutInfoId": "d",
                "name": None,
                "platformInfos": None,
                "softwareInfos": None,
                "hardwareInfos": None,
                "metadata": None,
            },
            "metadata": None,
        }
    }


def test_step_artifact_carries_step_id():
    art = models.TestStepArtifact(
        id="step_0", artifact=Log(severity=LogSeverity.INFO, message="m")
    )
    assert art.to_wire() == {
        "testStepId": "step_0",
        "log": {"severity": "INFO", "message": "m", "sourceLocation": None},
    }


def test_error_and_series_start_carry_full_info_objects():
    err = Error(symptom="bad", software_infos=[SoftwareInfo(id="sw0", name="bios")])
    assert err.to_wire() == {
        "symptom": "bad",
        "message": None,
        "softwareInfoIds": [
            {
                "softwareInfoId": "sw0",
                "name": "bios",
                "version": None,
                "revision": None,
                "softwareType": None,
                "computerSystem": None,
            }
        ],
        "sourceLocation": None,
    }

    start = MeasurementSeriesStart(
        name="temp", series_id="s0", hardware_info=HardwareInfo(id="hw0", name="psu")
    )
    hw = start.to_wire()["hardwareInfoId"]
    assert hw["hardwareInfoId"] == "hw0"
    assert hw["name"] == "psu"
    assert hw["serialNumber"] is None


def test_measurement_references_hardware_by_id():
    m = Measurement(
        name="fan",
        value=1200,
        hardware_info_id="hw0",
        subcomponent=Subcomponent(
            name="fan0", subcomponent_type=SubcomponentType.ASIC_SUBSYSTEM
        ),
    )
    wire = m.to_wire()
    assert wire["hardwareInfoId"] == "hw0"
    assert wire["subcomponent"]["type"] == "ASIC-SUBSYSTEM"
    assert wire["validators"] is None


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        (5, {"int": 5}),
        (1.5, {"float": 1.5}),
        (True, {"bool": True}),
        ("on", {"str": "on"}),
    ],
)
def test_extension_content_is_tagged(content, expected):
    ext = Extension(name="x", content=content)
    assert ext.to_wire() == {"name": "x", "content": expected}


def test_extension_rejects_structured_content():
    with pytest.raises(ValidationError):
        Extension(name="x", content=[1, 2])


def test_series_element_round_trip_keeps_millis():
    ts = TS.replace(microsecond=678000)
    elem = MeasurementSeriesElement(
        index=3, value=42.5, timestamp=ts, series_id="series_0", metadata={"k": "v"}
    )
    wire = elem.to_wire()
    assert wire["timestamp"] == "2024-01-02T03:04:05.678Z"
    assert wire["measurementSeriesId"] == "series_0"

    assert MeasurementSeriesElement.from_wire(wire) == elem
    assert MeasurementSeriesElement.from_wire(json.dumps(wire)) == elem


def test_series_element_keeps_offset():
    cet = timezone(timedelta(hours=1))
    ts = datetime(2024, 1, 2, 4, 4, 5, 1000, tzinfo=cet)
    elem = MeasurementSeriesElement(index=0, value=1, timestamp=ts, series_id="s")
    wire = elem.to_wire()
    assert wire["timestamp"] == "2024-01-02T04:04:05.001+01:00"
    back = MeasurementSeriesElement.from_wire(wire)
    assert back.timestamp == ts


def test_series_element_rejects_unknown_keys():
    with pytest.raises(ValidationError):
        MeasurementSeriesElement.from_wire(
            {
                "index": 0,
                "value": 1,
                "timestamp": "2024-01-02T03:04:05.678Z",
                "measurementSeriesId": "s",
                "metadata": None,
                "extra": 1,
            }
        )
