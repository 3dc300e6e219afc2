"""CLI entry point for casekit."""
from __future__ import annotations

import logging
import sys
from typing import Optional, Tuple

import click

from casekit import __version__
from casekit.config import RunSettings, load_settings
from casekit.core.registry import CaseRegistry
from casekit.core.results import RunSummary
from casekit.core.runner import TestRunner
from casekit.errors import RunnerError
from casekit.loader import load_registries
from casekit.reporting import JsonReporter, Reporter, TerminalReporter


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

RUNNER_ERROR_EXIT_CODE = 2


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"casekit {__version__}")
    raise click.exceptions.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the casekit version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for casekit."""

    _configure_logging(verbose)
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file (defaults to ./casekit.yaml when present).",
)
@click.option("--include", "include_filters", type=str, help="Comma-separated label globs to run.")
@click.option("--exclude", "exclude_filters", type=str, help="Comma-separated label globs to skip entirely.")
@click.option("--fail-fast", is_flag=True, help="Stop after the first failing case.")
@click.option("--concurrent", is_flag=True, help="Interleave asynchronous cases.")
@click.option("--timeout", type=float, help="Per-case timeout in seconds for awaited work.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    targets: Tuple[str, ...],
    config_path: Optional[str],
    include_filters: Optional[str],
    exclude_filters: Optional[str],
    fail_fast: bool,
    concurrent: bool,
    timeout: Optional[float],
    report_format: Optional[str],
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Run the cases registered by TARGETS (files, directories or modules)."""

    try:
        settings = load_settings(config_path).merged(
            include=_split_csv(include_filters) or None,
            exclude=_split_csv(exclude_filters) or None,
            fail_fast=fail_fast or None,
            concurrent=concurrent or None,
            timeout=timeout,
            report=report_format,
            report_path=report_path,
            color=False if no_color else None,
        )
        registry = _load_selected(targets, settings)
        exit_code = _run_registry(registry, settings)
    except RunnerError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise click.exceptions.Exit(RUNNER_ERROR_EXIT_CODE) from exc
    raise click.exceptions.Exit(exit_code)


@cli.command(name="list")
@click.argument("targets", nargs=-1, required=True)
@click.option("--include", "include_filters", type=str, help="Comma-separated label globs to list.")
@click.option("--exclude", "exclude_filters", type=str, help="Comma-separated label globs to hide.")
def list_cases(targets: Tuple[str, ...], include_filters: Optional[str], exclude_filters: Optional[str]) -> None:
    """List the labels registered by TARGETS without running them."""

    settings = RunSettings(include=_split_csv(include_filters), exclude=_split_csv(exclude_filters))
    try:
        registry = _load_selected(targets, settings)
    except RunnerError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise click.exceptions.Exit(RUNNER_ERROR_EXIT_CODE) from exc
    for case in registry:
        marker = " (placeholder)" if case.is_placeholder else ""
        click.echo(f"{case.index}: {case.label}{marker}")


def _load_selected(targets: Tuple[str, ...], settings: RunSettings) -> CaseRegistry:
    registry = load_registries(targets)
    if settings.include or settings.exclude:
        registry = registry.select(settings.include, settings.exclude)
    return registry


def _run_registry(registry: CaseRegistry, settings: RunSettings) -> int:
    if len(registry) == 0:
        click.echo("No cases matched the provided filters.")
        return RunSummary.from_results([]).exit_code
    reporter: Reporter
    if settings.report == "json":
        reporter = JsonReporter(path=settings.report_path)
    else:
        reporter = TerminalReporter(use_color=settings.color)
    runner = TestRunner(
        timeout=settings.timeout,
        fail_fast=settings.fail_fast,
        concurrent=settings.concurrent,
    )
    cases = registry.cases()
    reporter.on_start(cases)
    results = runner.run(cases, on_result=reporter.on_case_result)
    return reporter.on_complete(results).exit_code


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="casekit", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return tuple()
    parts = [part.strip() for part in value.split(",") if part.strip()]
    return tuple(parts)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
