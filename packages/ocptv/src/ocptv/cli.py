from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from ocptv_contracts import (
    RecordValidationError,
    get_contract_version_info,
    validate_record_json,
)
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

import ocptv.output as tv
from ocptv.core import bind, configure_logging, get_logger, load_settings, monotonic_ms
from ocptv.output import callsite

# stdout is the default record sink, everything for humans goes to stderr
console = Console(stderr=True)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ocptv")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Run a small sample diagnostic and emit its records")
    demo.add_argument(
        "--output",
        default=None,
        help="Write records to this file. If omitted: OCPTV_OUTPUT_PATH, else stdout.",
    )
    demo.add_argument(
        "--timezone",
        default=None,
        help="Timezone for record timestamps (IANA name). If omitted: OCPTV_TIMEZONE.",
    )

    check = sub.add_parser("check", help="Validate an NDJSON output file")
    check.add_argument("path", help="Output file to check")

    return p


# ---------- demo ----------
async def _demo_step(step: tv.StartedTestStep) -> tv.TestStatus:
    await callsite.log_info(step, "checking fan speed")
    await step.add_measurement_with_details(
        tv.Measurement.builder("fan_speed", 1200)
        .unit("rpm")
        .add_validator(tv.Validator.builder(tv.ValidatorType.GREATER_THAN, 1000).build())
        .build()
    )

    async def _temps(series: tv.StartedMeasurementSeries) -> None:
        for value in (41.5, 42.0, 42.25):
            await series.add_measurement(value)

    await step.measurement_series("cpu_temperature").scope(_temps)
    await callsite.diagnosis_pass(step, "fan-ok")
    return tv.TestStatus.COMPLETE


async def _demo_run(run: tv.StartedTestRun) -> tv.TestRunOutcome:
    await run.step("fan check").scope(_demo_step)
    return tv.TestRunOutcome(status=tv.TestStatus.COMPLETE, result=tv.TestResult.PASS)


def _demo_config(output: str | None, timezone: str | None) -> tv.Config:
    s = load_settings()
    builder = tv.Config.builder().timezone(timezone or s.timezone)
    out = output or (str(s.output_path) if s.output_path else None)
    if out:
        builder = builder.with_file_output(out)
    return builder.build()


async def run_demo(config: tv.Config) -> tv.TestRunOutcome:
    dut = (
        tv.DutInfo.builder("dut0")
        .name("demo dut")
        .add_platform_info(tv.PlatformInfo(info="demo platform"))
        .build()
    )
    run = (
        tv.TestRun.builder("demo", dut, "1.0")
        .add_parameter("fan_min_rpm", 1000)
        .command_line("ocptv demo")
        .config(config)
        .build()
    )
    return await run.scope(_demo_run)


# ---------- check ----------
@dataclass(slots=True)
class CheckReport:
    records: int = 0
    kinds: dict[str, int] = field(default_factory=dict)
    problems: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


def check_lines(lines: Iterable[str]) -> CheckReport:
    """
    Validate records against the output schema and the sequence rules:
    the first record is ``schemaVersion`` with sequence number 0 and every
    following record carries the previous number plus one.
    """
    report = CheckReport()
    expected = 0
    for lineno, raw in enumerate(lines, start=1):
        if not raw.strip():
            continue
        try:
            obj: dict[str, Any] = validate_record_json(raw)
        except RecordValidationError as e:
            report.problems.append(f"line {lineno}: {e}")
            continue

        report.records += 1
        kind = next(k for k in obj if k not in ("sequenceNumber", "timestamp"))
        report.kinds[kind] = report.kinds.get(kind, 0) + 1

        seq = obj["sequenceNumber"]
        if report.records == 1 and kind != "schemaVersion":
            report.problems.append(f"line {lineno}: first record is {kind}, not schemaVersion")
        if seq != expected:
            report.problems.append(
                f"line {lineno}: sequenceNumber {seq}, expected {expected}"
            )
        expected = seq + 1

    if report.records == 0 and not report.problems:
        report.problems.append("no records")
    return report


def _print_check(path: Path, report: CheckReport) -> None:
    tbl = Table(title=str(path), show_header=True, box=None)
    tbl.add_column("kind")
    tbl.add_column("count", justify="right")
    for kind, n in sorted(report.kinds.items()):
        tbl.add_row(kind, str(n))
    console.print(tbl)

    for problem in report.problems:
        console.print(Text(problem, style="red"))
    console.print(
        "[green]ok[/green]" if report.ok else f"[red]{len(report.problems)} problem(s)[/red]"
    )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    s = load_settings()
    configure_logging(level=s.log_level, fmt=s.log_format)
    log = get_logger("ocptv.cli")
    bind(command=args.cmd)

    if args.cmd == "demo":
        config = _demo_config(args.output, args.timezone)
        info = get_contract_version_info()
        console.print(
            Panel.fit(
                Text(f"ocptv demo\nspec={info.spec_version}", style="bold"),
                title="Run",
            )
        )
        t0 = monotonic_ms()
        outcome = asyncio.run(run_demo(config))
        log.info(
            "Demo finished",
            status=str(outcome.status),
            result=str(outcome.result),
            elapsed_ms=monotonic_ms() - t0,
        )
        return 0

    path = Path(args.path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]cannot read {path}: {e}[/red]")
        return 2

    report = check_lines(text.splitlines())
    _print_check(path, report)
    log.info("Check finished", path=str(path), records=report.records, problems=len(report.problems))
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
