from __future__ import annotations

import asyncio
from pathlib import Path
from textwrap import dedent

import pytest
from typer.testing import CliRunner

from jsonassured import __version__, assert_data
from jsonassured.cli import app, apply_check, interpolate_source, interpolate_value, run_suite_async
from jsonassured.reporting import CheckStatus, RunStatus
from jsonassured.schema_parsing import (
    AuthConfig,
    AuthType,
    Check,
    CheckOp,
    Predicate,
    SourceConfig,
    SourceType,
    load_suite,
)

runner = CliRunner()

PASSING_CHECKS = """
  - id: name
    op: string_path
    path: $.stringVal
    expect:
      - is_equal_to_ignoring_case: STR
      - has_length: 3
  - id: ints
    op: int_array_path
    path: $.intArray
    expect:
      - has_size: 3
      - contains_any: [2]
  - id: flag
    op: is_true
    path: $.booleanTrue
"""

FAILING_CHECKS = """
  - id: name
    op: string_path
    path: $.stringVal
    expect: [{is_equal_to: str}]
  - id: absent
    op: is_null
    path: $.nope
  - id: ok
    op: is_equal
    path: $.intAsStringVal
    value: "1234"
"""


def _write_suite(directory: Path, checks: str, source: str = "payload.json") -> Path:
    suite_file = directory / "suite.yaml"
    suite_file.write_text(
        dedent(f"""\
            version: 1
            name: cli suite
            source:
              type: file
              path: {source}
            checks:
        """) + checks,
        encoding="utf-8",
    )
    return suite_file


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_run_passing_suite(payload_file: Path) -> None:
    suite_file = _write_suite(payload_file.parent, PASSING_CHECKS)
    result = runner.invoke(app, ["run", str(suite_file), "--no-report"])
    assert result.exit_code == 0, result.stdout
    assert "PASSED" in result.stdout


def test_run_failing_suite_exits_nonzero(payload_file: Path) -> None:
    suite_file = _write_suite(payload_file.parent, FAILING_CHECKS)
    result = runner.invoke(app, ["run", str(suite_file), "--no-report", "--quiet"])
    assert result.exit_code == 1


def test_run_writes_report(payload_file: Path, tmp_path: Path) -> None:
    suite_file = _write_suite(payload_file.parent, PASSING_CHECKS)
    report_dir = tmp_path / "reports"
    result = runner.invoke(app, ["run", str(suite_file), "-q", "--report-dir", str(report_dir)])
    assert result.exit_code == 0
    assert len(list(report_dir.glob("*.json"))) == 1


def test_run_json_output(payload_file: Path) -> None:
    suite_file = _write_suite(payload_file.parent, PASSING_CHECKS)
    result = runner.invoke(app, ["run", str(suite_file), "--no-report", "--output", "json"])
    assert result.exit_code == 0
    assert '"status": "passed"' in result.stdout


def test_run_rejects_unknown_output(payload_file: Path) -> None:
    suite_file = _write_suite(payload_file.parent, PASSING_CHECKS)
    result = runner.invoke(app, ["run", str(suite_file), "--output", "xml"])
    assert result.exit_code == 2


def test_run_invalid_suite(tmp_path: Path) -> None:
    suite_file = tmp_path / "bad.yaml"
    suite_file.write_text("version: 1\nname: bad\n", encoding="utf-8")
    result = runner.invoke(app, ["run", str(suite_file), "--no-report"])
    assert result.exit_code == 1
    assert "Validation failed" in result.stdout


def test_validate_lists_checks(payload_file: Path) -> None:
    suite_file = _write_suite(payload_file.parent, PASSING_CHECKS)
    result = runner.invoke(app, ["validate", str(suite_file)])
    assert result.exit_code == 0
    assert "Valid suite" in result.stdout
    assert "ints" in result.stdout


def test_run_suite_records_outcomes(payload_file: Path) -> None:
    suite, _ = load_suite(_write_suite(payload_file.parent, FAILING_CHECKS))
    reporter = asyncio.run(run_suite_async(suite, verbose=False, quiet=True))
    report = reporter.report
    statuses = {c.check_id: c.status for c in report.checks}
    assert statuses == {
        "name": CheckStatus.FAILED,
        "absent": CheckStatus.ERROR,
        "ok": CheckStatus.PASSED,
    }
    assert report.checks[1].error_type == "PathNotFoundError"
    assert report.status is RunStatus.ERROR


def test_run_suite_missing_document(tmp_path: Path) -> None:
    suite, _ = load_suite(_write_suite(tmp_path, PASSING_CHECKS, source="missing.json"))
    reporter = asyncio.run(run_suite_async(suite, verbose=False, quiet=True))
    report = reporter.report
    assert report.status is RunStatus.ERROR
    assert report.error_message.startswith("SourceError")
    assert all(c.status is CheckStatus.SKIPPED for c in report.checks)


def test_run_suite_malformed_document(tmp_path: Path) -> None:
    (tmp_path / "payload.json").write_text("{not json", encoding="utf-8")
    suite, _ = load_suite(_write_suite(tmp_path, PASSING_CHECKS))
    reporter = asyncio.run(run_suite_async(suite, verbose=False, quiet=True))
    assert reporter.report.status is RunStatus.ERROR
    assert reporter.report.error_message.startswith("JSONDecodeError")


def test_apply_check_dispatch() -> None:
    root = assert_data({"n": 5, "tags": ["a"]})
    apply_check(root, Check(
        id="n", op=CheckOp.INT_PATH, path="$.n",
        expect=[Predicate("is_in_range", [1, 9]), Predicate("is_in", [[5, 6]])],
    ))
    apply_check(root, Check(id="gone", op=CheckOp.DOES_NOT_EXIST, path="$.x"))
    apply_check(root, Check(
        id="tags", op=CheckOp.STRING_ARRAY_PATH, path="$.tags",
        expect=[Predicate("contains_all", [["a"]])],
    ))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Bearer {{env.TOKEN}}", "Bearer t0k"),
        ("{{env.MISSING}}", "{{env.MISSING}}"),
        ({"h": ["{{env.TOKEN}}", 1]}, {"h": ["t0k", 1]}),
        (None, None),
    ],
)
def test_interpolate_value(value, expected) -> None:
    assert interpolate_value(value, {"TOKEN": "t0k"}) == expected


def test_interpolate_source_auth() -> None:
    source = SourceConfig(
        type=SourceType.HTTP,
        url="{{env.HOST}}/users",
        auth=AuthConfig(type=AuthType.BEARER, token="{{env.TOKEN}}"),
    )
    resolved = interpolate_source(source, {"HOST": "https://h", "TOKEN": "t"})
    assert resolved.url == "https://h/users"
    assert resolved.auth.token == "t"
    assert source.auth.token == "{{env.TOKEN}}"
