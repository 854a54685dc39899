"""
Reporter for building run reports from suite executions.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from .models import CheckRecord, CheckStatus, RunReport, compute_suite_hash

if TYPE_CHECKING:
    from ..schema_parsing import Suite


class Reporter:
    """
    Builds and manages run reports.

    Example:
        suite, _ = load_suite("checks/user.yaml")
        reporter = Reporter.from_suite(suite)

        reporter.start_run()
        reporter.start_check("name")
        reporter.complete_check_success("name")
        reporter.start_check("age")
        reporter.complete_check_failure("age", "Expected Int number at path ...")

        report = reporter.finish_run()
        print(report.summary())
    """

    def __init__(self, report: RunReport):
        self.report = report

    @classmethod
    def from_suite(
        cls,
        suite: Suite,
        run_id: str | None = None,
        source: str | None = None,
    ) -> Reporter:
        """
        Create a Reporter with one pending record per suite check.

        Args:
            suite: The parsed suite to create a report for
            run_id: Optional custom run ID (auto-generated if not provided)
            source: Description of the resolved source; defaults to the
                configured path or URL
        """
        report = RunReport(
            suite_name=suite.name,
            suite_version=suite.version,
            suite_hash=compute_suite_hash(_suite_to_dict(suite)),
            source_type=suite.source.type.value,
            source=source or suite.source.path or suite.source.url,
        )
        if run_id:
            report.run_id = run_id

        for check in suite.checks:
            report.add_check(CheckRecord(
                check_id=check.id,
                op=check.op.value,
                path=check.path,
                expected_value=check.value,
                predicates=[p.describe() for p in check.expect],
            ))

        return cls(report)

    def start_run(self) -> None:
        self.report.start()

    def finish_run(self) -> RunReport:
        """Mark the run as completed and return the final report."""
        self.report.complete()
        return self.report

    def fail_run(self, error_message: str) -> None:
        """Record a run-level error and skip every check that has not run."""
        self.report.error_message = error_message
        for check in self.report.checks:
            if check.status in (CheckStatus.PENDING, CheckStatus.RUNNING):
                check.complete(CheckStatus.SKIPPED)

    def start_check(self, check_id: str) -> CheckRecord | None:
        check = self.report.get_check(check_id)
        if check:
            check.start()
        return check

    def complete_check_success(self, check_id: str) -> CheckRecord | None:
        check = self.report.get_check(check_id)
        if check:
            check.complete(CheckStatus.PASSED)
        return check

    def complete_check_failure(self, check_id: str, failure_message: str) -> CheckRecord | None:
        """
        Mark a check as failed.

        Args:
            check_id: The ID of the check
            failure_message: The assertion failure message

        Returns:
            The CheckRecord, or None if check not found
        """
        check = self.report.get_check(check_id)
        if check:
            check.failure_message = failure_message
            check.complete(CheckStatus.FAILED)
        return check

    def complete_check_error(
        self,
        check_id: str,
        error_message: str,
        error_type: str | None = None,
    ) -> CheckRecord | None:
        """
        Mark a check as errored (not a test failure, but an evaluation error).

        Args:
            check_id: The ID of the check
            error_message: Error description
            error_type: Exception class name, e.g. "PathNotFoundError"

        Returns:
            The CheckRecord, or None if check not found
        """
        check = self.report.get_check(check_id)
        if check:
            check.error_message = error_message
            check.error_type = error_type
            check.complete(CheckStatus.ERROR)
        return check

    def skip_check(self, check_id: str, reason: str | None = None) -> CheckRecord | None:
        check = self.report.get_check(check_id)
        if check:
            if reason:
                check.failure_message = f"Skipped: {reason}"
            check.complete(CheckStatus.SKIPPED)
        return check

    def save_json(self, path: str | Path) -> None:
        """Save the report to a JSON file, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report.to_json(), encoding="utf-8")

    def get_summary(self) -> str:
        return self.report.summary()


def _suite_to_dict(suite: Suite) -> dict[str, Any]:
    """Convert a Suite to a dict for hashing. Auth secrets and env values are left out."""
    return {
        "version": suite.version,
        "name": suite.name,
        "source": {
            "type": suite.source.type.value,
            "path": suite.source.path,
            "url": suite.source.url,
        },
        "defaults": {"timeout_ms": suite.defaults.timeout_ms},
        "checks": [
            {
                "id": check.id,
                "op": check.op.value,
                "path": check.path,
                "value": check.value,
                "expect": [{"name": p.name, "args": p.args} for p in check.expect],
            }
            for check in suite.checks
        ],
    }
