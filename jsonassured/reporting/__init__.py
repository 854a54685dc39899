"""
Reporting for Check Suite Runs

This package provides reporting capabilities for capturing complete
records of check suite runs.

Features:
    - Run metadata (ID, timestamp, suite and source info)
    - Check-by-check records with timing
    - Failure messages and error types
    - JSON serialization
    - Human-readable summaries

Usage:
    from jsonassured.schema_parsing import load_suite
    from jsonassured.reporting import Reporter

    suite, _ = load_suite("checks/user.yaml")
    reporter = Reporter.from_suite(suite)

    reporter.start_run()
    reporter.start_check("name")
    reporter.complete_check_success("name")

    report = reporter.finish_run()
    print(report.summary())
    reporter.save_json("reports/user.json")
"""

# Models
from .models import (
    CheckRecord,
    CheckStatus,
    RunReport,
    RunStatus,
    compute_suite_hash,
)

# Reporter
from .reporter import Reporter

__all__ = [
    # Models
    "RunReport",
    "RunStatus",
    "CheckRecord",
    "CheckStatus",
    "compute_suite_hash",
    # Reporter
    "Reporter",
]
