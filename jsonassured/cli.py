#!/usr/bin/env python3
"""
jsonassured CLI - run declarative JSON check suites

Usage:
    jsonassured run <suite.yaml> [OPTIONS]
    jsonassured validate <suite.yaml>
    jsonassured info
    jsonassured --version
"""

import asyncio
import json
import re
from dataclasses import replace
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .assertions import PathAssertions, assert_data
from .document import JsonDocument
from .errors import AssertionFailure, JsonAssuredError
from .reporting import Reporter, RunStatus
from .schema_parsing import AuthConfig, Check, CheckOp, SourceConfig, Suite, load_suite
from .transport import create_source

app = typer.Typer(
    name="jsonassured",
    help="Fluent JSONPath assertions and declarative JSON check suites",
    add_completion=False,
)
console = Console()

ENV_PATTERN = re.compile(r"\{\{env\.(\w+)\}\}")


def version_callback(value: bool):
    if value:
        console.print(f"jsonassured v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    jsonassured - assert on JSON documents by path.

    Check JSON files and HTTP endpoints with declarative YAML suites.
    """


def interpolate_value(value, env: dict):
    """Replace {{env.KEY}} placeholders in strings, dicts and lists. Unknown keys are left as is."""
    if isinstance(value, str):
        def replace_env(match):
            return str(env.get(match.group(1), match.group(0)))
        return ENV_PATTERN.sub(replace_env, value)
    elif isinstance(value, dict):
        return {k: interpolate_value(v, env) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_value(v, env) for v in value]
    return value


def interpolate_source(source: SourceConfig, env: dict) -> SourceConfig:
    """Interpolate environment variables in a source config, auth included."""
    auth = source.auth
    if auth is not None:
        auth = AuthConfig(
            type=auth.type,
            token=interpolate_value(auth.token, env),
            header=auth.header,
            key=interpolate_value(auth.key, env),
            username=interpolate_value(auth.username, env),
            password=interpolate_value(auth.password, env),
        )
    return replace(
        source,
        path=interpolate_value(source.path, env),
        url=interpolate_value(source.url, env),
        headers=interpolate_value(source.headers, env),
        auth=auth,
    )


def apply_check(root: PathAssertions, check: Check) -> None:
    """
    Run one suite check against a PathAssertions root.

    Raises whatever the underlying assertion raises.
    """
    if check.op is CheckOp.IS_EQUAL:
        root.is_equal(check.path, check.value)
    elif not check.op.is_typed:
        getattr(root, check.op.value)(check.path)
    else:
        def apply_predicates(assertions):
            for predicate in check.expect:
                getattr(assertions, predicate.name)(*predicate.args)
        getattr(root, check.op.value)(check.path, apply_predicates)


async def run_suite_async(
    suite: Suite,
    verbose: bool = True,
    quiet: bool = False,
) -> Reporter:
    """Load the suite's document, run every check and return the reporter with results."""
    source_config = interpolate_source(suite.source, suite.env)
    source = create_source(source_config, suite.base_dir, suite.defaults.timeout_ms)

    reporter = Reporter.from_suite(suite, source=source.describe())
    reporter.start_run()

    if verbose and not quiet:
        console.print(f"\n{'='*60}")
        console.print(f"  [bold]Running:[/bold] {suite.name}")
        console.print(f"  [bold]Source:[/bold] {source.describe()}")
        console.print(f"  [bold]Checks:[/bold] {len(suite.checks)}")
        console.print(f"{'='*60}\n")

    try:
        async with source:
            body = await source.load()
        document = JsonDocument.parse(body)
    except (JsonAssuredError, json.JSONDecodeError) as e:
        reporter.fail_run(f"{type(e).__name__}: {e}")
        if not quiet:
            console.print(f"[red]❌ Could not load document:[/red] {escape(str(e))}")
        reporter.finish_run()
        return reporter

    root = assert_data(document.data)

    for check in suite.checks:
        if verbose and not quiet:
            console.print(f"▶ [bold]{escape(check.id)}[/bold] {check.op.value} {escape(check.path)}")

        reporter.start_check(check.id)
        try:
            apply_check(root, check)
        except AssertionFailure as e:
            reporter.complete_check_failure(check.id, str(e))
            if not quiet:
                console.print(f"  [red]❌ Failed:[/red] {escape(str(e))}")
        except Exception as e:
            reporter.complete_check_error(check.id, str(e), type(e).__name__)
            if not quiet:
                console.print(f"  [yellow]⚠️ Error:[/yellow] {type(e).__name__}: {escape(str(e))}")
        else:
            reporter.complete_check_success(check.id)
            if verbose and not quiet:
                console.print("  [green]✅ Passed[/green]")

    reporter.finish_run()
    return reporter


@app.command()
def run(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
    verbose: bool = typer.Option(
        True, "--verbose/--no-verbose", "-V",
        help="Show each check as it runs"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show errors and final status"
    ),
    output: str = typer.Option(
        "text", "--output", "-o",
        help="Output format: text or json"
    ),
    report_dir: Path = typer.Option(
        Path("reports"), "--report-dir", "-r",
        help="Directory to save JSON reports"
    ),
    no_report: bool = typer.Option(
        False, "--no-report",
        help="Don't save a JSON report file"
    ),
):
    """
    Run a check suite.

    Load the suite's JSON document, evaluate every check and
    generate a run report.
    """
    if output not in ("text", "json"):
        console.print(f"[red]❌ Unknown output format:[/red] {output} (use text or json)")
        raise typer.Exit(code=2)

    if not quiet and output == "text":
        console.print(f"\n📄 Loading suite: {suite_file}")

    suite, validation = load_suite(suite_file)
    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    text_output = output == "text"
    reporter = asyncio.run(run_suite_async(suite, verbose and text_output, quiet or not text_output))
    report = reporter.report

    if output == "json":
        console.print_json(data=report.to_dict())
    elif not quiet:
        console.print("\n" + report.summary(), markup=False)

    if not no_report:
        report_path = report_dir / f"{report.run_id}.json"
        reporter.save_json(report_path)
        if not quiet and text_output:
            console.print(f"\n📁 Report saved: {report_path}")

    raise typer.Exit(code=0 if report.status == RunStatus.PASSED else 1)


@app.command()
def validate(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a suite YAML file.

    Check the schema and report any errors without loading the document.
    """
    console.print(f"\n📄 Validating: {suite_file}")

    suite, validation = load_suite(suite_file)

    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    console.print(f"\n[green]✅ Valid suite:[/green] {suite.name}")
    console.print(f"   Source: {suite.source.type.value} {suite.source.path or suite.source.url}")
    console.print(f"   Checks: {len(suite.checks)}")

    table = Table(title="Checks")
    table.add_column("ID", style="cyan")
    table.add_column("Op", style="magenta")
    table.add_column("Path")
    table.add_column("Details")

    for check in suite.checks:
        if check.op is CheckOp.IS_EQUAL:
            details = f"value: {check.value!r}"
        else:
            details = ", ".join(p.describe() for p in check.expect)
        table.add_row(escape(check.id), check.op.value, escape(check.path), escape(details))

    console.print()
    console.print(table)


@app.command()
def info():
    """
    Show information about jsonassured.
    """
    console.print(f"""
[bold]jsonassured[/bold] v{__version__}

Fluent JSONPath assertions for JSON documents

[bold]Features:[/bold]
  • Typed path checks for strings, 32/64-bit integers and decimals
  • Array checks: size, containment, per-element conditions
  • Declarative YAML check suites over files or HTTP endpoints
  • Authentication support (Bearer, API Key, Basic)
  • Detailed JSON run reports

[bold]Quick Start:[/bold]
  jsonassured validate checks/user.yaml
  jsonassured run checks/user.yaml
""")


if __name__ == "__main__":
    app()
