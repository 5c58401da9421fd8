from __future__ import annotations

import json
from pathlib import Path

from ocptv.cli import check_lines, main


def test_demo_writes_a_checkable_file(tmp_path: Path):
    out = tmp_path / "demo.jsonl"
    assert main(["demo", "--output", str(out), "--timezone", "UTC"]) == 0

    lines = out.read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert "schemaVersion" in records[0]
    assert records[-1]["testRunArtifact"]["testRunEnd"] == {
        "status": "COMPLETE",
        "result": "PASS",
    }
    kinds = {k for r in records for k in r.get("testStepArtifact", {}) if k != "testStepId"}
    assert {"measurement", "measurementSeriesElement", "diagnosis", "log"} <= kinds

    assert main(["check", str(out)]) == 0


def test_check_reports_gaps_and_bad_first_record(tmp_path: Path):
    ts = "2024-01-02T03:04:05.678Z"
    start = {"testStepArtifact": {"testStepId": "step_0", "testStepStart": {"name": "s"}}}
    lines = [
        json.dumps({**start, "sequenceNumber": 0, "timestamp": ts}),
        json.dumps({**start, "sequenceNumber": 2, "timestamp": ts}),
    ]
    report = check_lines(lines)
    assert report.records == 2
    assert not report.ok
    assert any("not schemaVersion" in p for p in report.problems)
    assert any("expected 1" in p for p in report.problems)

    bad = tmp_path / "bad.jsonl"
    bad.write_text("\n".join(lines) + "\n", encoding="utf-8")
    assert main(["check", str(bad)]) == 1


def test_check_rejects_invalid_records():
    report = check_lines(['{"sequenceNumber": 0}', ""])
    assert report.records == 0
    assert report.problems and report.problems[0].startswith("line 1:")


def test_check_empty_file(tmp_path: Path):
    empty = tmp_path / "empty.jsonl"
    empty.write_text("", encoding="utf-8")
    assert main(["check", str(empty)]) == 1
    assert main(["check", str(tmp_path / "missing.jsonl")]) == 2
