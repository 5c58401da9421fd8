from __future__ import annotations

import pytest

import ocptv.output as tv
from ocptv.core import LifecycleError

TS_WIRE = "2024-01-02T03:04:05.678Z"


def _kind(record: dict) -> str:
    return next(k for k in record if k not in ("sequenceNumber", "timestamp"))


@pytest.mark.asyncio
async def test_start_end_emits_three_records(run, records, writer):
    started = await run.start()
    await started.end(tv.TestStatus.COMPLETE, tv.TestResult.PASS)

    assert writer.buffer[0] == (
        '{"schemaVersion":{"major":2,"minor":0},'
        f'"sequenceNumber":0,"timestamp":"{TS_WIRE}"}}'
    )

    out = records()
    assert [r["sequenceNumber"] for r in out] == [0, 1, 2]
    assert all(r["timestamp"] == TS_WIRE for r in out)

    start = out[1]["testRunArtifact"]["testRunStart"]
    assert start["name"] == "r"
    assert start["version"] == "1.0"
    assert start["commandLine"] == ""
    assert start["parameters"] == {}
    assert start["metadata"] is None
    assert start["dutInfo"]["dutInfoId"] == "d"

    assert out[2]["testRunArtifact"] == {
        "testRunEnd": {"status": "COMPLETE", "result": "PASS"}
    }


@pytest.mark.asyncio
async def test_builder_parameters_and_metadata(config, records):
    dut = (
        tv.DutInfo.builder("dut0")
        .name("host")
        .add_platform_info(tv.PlatformInfo(info="x86"))
        .add_software_info(tv.SoftwareInfo.builder("sw0", "bios").version("1.2").build())
        .build()
    )
    run = (
        tv.TestRun.builder("r", dut, "2.0")
        .add_parameter("iterations", 3)
        .add_parameter("mode", "fast")
        .add_metadata("owner", "lab")
        .command_line("--fast")
        .config(config)
        .build()
    )
    await run.start()

    start = records()[1]["testRunArtifact"]["testRunStart"]
    assert start["parameters"] == {"iterations": 3, "mode": "fast"}
    assert start["metadata"] == {"owner": "lab"}
    assert start["commandLine"] == "--fast"
    assert start["dutInfo"]["name"] == "host"
    assert start["dutInfo"]["platformInfos"] == [{"info": "x86"}]
    assert start["dutInfo"]["softwareInfos"][0]["softwareInfoId"] == "sw0"
    assert start["dutInfo"]["hardwareInfos"] is None


@pytest.mark.asyncio
async def test_run_end_follows_children(run, records):
    started = await run.start()
    k = 4
    for i in range(k):
        await started.log(tv.LogSeverity.DEBUG, f"child {i}")
    await started.end(tv.TestStatus.COMPLETE, tv.TestResult.PASS)

    out = records()
    assert out[-1]["sequenceNumber"] == k + 2
    assert "testRunEnd" in out[-1]["testRunArtifact"]


@pytest.mark.asyncio
async def test_run_log_and_error(run, records):
    started = await run.start()
    await started.log(tv.LogSeverity.WARNING, "hot")
    await started.error("no-fan", "fan missing")
    await started.error_with_details(
        tv.Error.builder("fw")
        .add_software_info(tv.SoftwareInfo(id="sw0", name="bmc"))
        .build()
    )

    out = records()
    assert out[2]["testRunArtifact"]["log"] == {
        "severity": "WARNING",
        "message": "hot",
        "sourceLocation": None,
    }
    assert out[3]["testRunArtifact"]["error"] == {
        "symptom": "no-fan",
        "message": "fan missing",
        "softwareInfoIds": None,
        "sourceLocation": None,
    }
    assert out[4]["testRunArtifact"]["error"]["softwareInfoIds"] == [
        {
            "softwareInfoId": "sw0",
            "name": "bmc",
            "version": None,
            "revision": None,
            "softwareType": None,
            "computerSystem": None,
        }
    ]


@pytest.mark.asyncio
async def test_second_start_is_rejected(run, records):
    await run.start()
    with pytest.raises(LifecycleError):
        await run.start()
    assert [_kind(r) for r in records()] == ["schemaVersion", "testRunArtifact"]


@pytest.mark.asyncio
async def test_ended_run_rejects_further_output(run, records):
    started = await run.start()
    await started.end(tv.TestStatus.COMPLETE, tv.TestResult.FAIL)
    assert started.ended

    with pytest.raises(LifecycleError):
        await started.log(tv.LogSeverity.INFO, "late")
    with pytest.raises(LifecycleError):
        await started.end(tv.TestStatus.COMPLETE, tv.TestResult.PASS)
    with pytest.raises(LifecycleError):
        started.step("late")
    assert len(records()) == 3


@pytest.mark.asyncio
async def test_scope_ends_with_returned_outcome(run, records):
    async def body(r: tv.StartedTestRun) -> tv.TestRunOutcome:
        await r.log(tv.LogSeverity.INFO, "inside")
        return tv.TestRunOutcome(tv.TestStatus.ERROR, tv.TestResult.NOT_APPLICABLE)

    outcome = await run.scope(body)
    assert outcome.result == tv.TestResult.NOT_APPLICABLE
    assert records()[-1]["testRunArtifact"]["testRunEnd"] == {
        "status": "ERROR",
        "result": "NOT_APPLICABLE",
    }


@pytest.mark.asyncio
async def test_scope_propagates_and_skips_end(run, records):
    async def body(r: tv.StartedTestRun) -> tv.TestRunOutcome:
        raise KeyError("boom")

    with pytest.raises(KeyError):
        await run.scope(body)
    assert len(records()) == 2


@pytest.mark.asyncio
async def test_for_dut_uses_id_only(config, records, monkeypatch):
    monkeypatch.setattr("sys.argv", ["prog", "--quick", "-v"])
    run = tv.TestRun(
        name="r", version="1.0", dut=tv.DutInfo(id="d"), config=config
    )
    await run.start()
    assert records()[1]["testRunArtifact"]["testRunStart"]["commandLine"] == "--quick -v"

    other = tv.TestRun.for_dut("r2", "d2", "0.1")
    assert other.dut.id == "d2"
    assert other.name == "r2"
