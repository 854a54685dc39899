from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent

import pytest

from jsonassured.reporting import CheckStatus, Reporter, RunStatus
from jsonassured.schema_parsing import Suite, validate_suite_yaml


@pytest.fixture
def suite() -> Suite:
    parsed, result = validate_suite_yaml(dedent("""
        version: 2
        name: reporting
        source:
          type: http
          url: https://api.example.com/users/1
          auth:
            type: bearer
            token: secret-token
        checks:
          - id: first
            op: int_path
            path: $.n
            expect: [is_positive, {is_lte: 10}]
          - id: second
            op: is_equal
            path: $.s
            value: "x"
          - id: third
            op: is_null
            path: $.z
    """))
    assert result.is_valid, str(result)
    return parsed


def test_reporter_seeds_pending_records(suite: Suite) -> None:
    reporter = Reporter.from_suite(suite, run_id="run-1")
    report = reporter.report
    assert report.run_id == "run-1"
    assert report.suite_version == 2
    assert report.source_type == "http"
    assert report.source == "https://api.example.com/users/1"
    assert [c.check_id for c in report.checks] == ["first", "second", "third"]
    assert all(c.status is CheckStatus.PENDING for c in report.checks)
    assert report.checks[0].predicates == ["is_positive", "is_lte(10)"]
    assert report.checks[1].expected_value == "x"


def test_suite_hash_ignores_secrets(suite: Suite) -> None:
    first = Reporter.from_suite(suite).report.suite_hash
    suite.source.auth.token = "rotated"
    assert Reporter.from_suite(suite).report.suite_hash == first
    assert len(first) == 12


def test_mixed_outcomes(suite: Suite) -> None:
    reporter = Reporter.from_suite(suite)
    reporter.start_run()
    reporter.start_check("first")
    reporter.complete_check_success("first")
    reporter.start_check("second")
    reporter.complete_check_failure("second", "not equal")
    reporter.skip_check("third", "not needed")
    report = reporter.finish_run()

    assert report.status is RunStatus.FAILED
    assert (report.passed_checks, report.failed_checks, report.skipped_checks) == (1, 1, 1)
    assert report.checks[0].duration_ms is not None
    assert report.checks[2].failure_message == "Skipped: not needed"


def test_check_error_makes_run_error(suite: Suite) -> None:
    reporter = Reporter.from_suite(suite)
    reporter.start_run()
    for check_id in ("first", "second"):
        reporter.start_check(check_id)
        reporter.complete_check_success(check_id)
    reporter.start_check("third")
    reporter.complete_check_error("third", 'No results for path "$.z"', "PathNotFoundError")
    report = reporter.finish_run()

    assert report.status is RunStatus.ERROR
    assert report.error_checks == 1
    assert report.checks[2].error_type == "PathNotFoundError"


def test_fail_run_skips_remaining_checks(suite: Suite) -> None:
    reporter = Reporter.from_suite(suite)
    reporter.start_run()
    reporter.fail_run("SourceError: HTTP 503: Service Unavailable")
    report = reporter.finish_run()

    assert report.status is RunStatus.ERROR
    assert report.skipped_checks == 3
    assert "HTTP 503" in report.summary()


def test_all_passed(suite: Suite) -> None:
    reporter = Reporter.from_suite(suite)
    reporter.start_run()
    for check in suite.checks:
        reporter.start_check(check.id)
        reporter.complete_check_success(check.id)
    report = reporter.finish_run()
    assert report.status is RunStatus.PASSED
    assert "PASSED" in reporter.get_summary()


def test_unknown_check_id_is_ignored(suite: Suite) -> None:
    reporter = Reporter.from_suite(suite)
    assert reporter.start_check("nope") is None
    assert reporter.complete_check_failure("nope", "x") is None


def test_to_dict_and_save_json(suite: Suite, tmp_path: Path) -> None:
    reporter = Reporter.from_suite(suite, run_id="abc")
    reporter.start_run()
    reporter.start_check("first")
    reporter.complete_check_failure("first", "Expected Int number ...")
    reporter.finish_run()

    data = reporter.report.to_dict()
    assert data["summary"] == {"total": 3, "passed": 0, "failed": 1, "errors": 0, "skipped": 0}
    assert data["checks"][0]["status"] == "failed"

    target = tmp_path / "nested" / "abc.json"
    reporter.save_json(target)
    saved = json.loads(target.read_text(encoding="utf-8"))
    assert saved["run_id"] == "abc"
    assert saved["checks"][0]["failure_message"] == "Expected Int number ..."
