"""Main CLI entry point - clean subcommand architecture."""

import logging
import os
import sys
from dataclasses import asdict
from typing import Optional

import typer

from tldrhooks import api
from tldrhooks.core.configs import AdapterSettings, get_adapter_settings
from tldrhooks.core.query import Result

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="tldrhooks - fast tldr code analysis for editor and agent hooks.",
)

logger = logging.getLogger(__name__)

PROJECT_OPTION = typer.Option(".", "--project", "-p", help="Project directory")
LANGUAGE_OPTION = typer.Option(None, "--language", "-l", help="Source language")
FULL_OPTION = typer.Option(False, "--full", help="Print the whole output, not the summary")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr")


# ============================================================================
# Shared Setup - called on every invocation
# ============================================================================

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _setup(verbose: bool) -> AdapterSettings:
    """Load settings and configure logging. Exits on bad configuration."""
    try:
        settings = get_adapter_settings()
    except ValueError as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        typer.echo("Check ~/.config/tldrhooks/config.cfg or TLDRHOOKS_* variables", err=True)
        raise typer.Exit(1)

    _configure_logging("DEBUG" if verbose else settings.log_level)
    return settings


def _emit(result: Result, full: bool) -> None:
    """Print a result, or its error on stderr with exit code 1."""
    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)
    typer.echo(result.output if full else result.summary)


def _run(call, verbose: bool, full: bool) -> None:
    settings = _setup(verbose)
    try:
        result = call(settings)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    _emit(result, full)


# ============================================================================
# Query commands - setup → dispatch → print
# ============================================================================

@app.command()
def warm(
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Build or refresh the project's indexes.

    Example: tldrhooks warm --project ~/my-app
    """
    _run(lambda s: api.warm(project, language, settings=s), verbose, full)


@app.command()
def context(
    symbol: str = typer.Argument(..., help="Function or class name"),
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Get code context around a symbol.

    Example: tldrhooks context parseConfig
    """
    _run(lambda s: api.get_context(project, symbol, language, settings=s), verbose, full)


@app.command()
def semantic(
    query: str = typer.Argument(..., help="What the code does, in plain words"),
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Search code by meaning.

    Example: tldrhooks semantic "retry failed uploads"
    """
    _run(lambda s: api.semantic_search(project, query, language, settings=s), verbose, full)


@app.command()
def impact(
    symbol: str = typer.Argument(..., help="Function name"),
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Find all callers of a function."""
    _run(lambda s: api.get_impact(project, symbol, language, settings=s), verbose, full)


@app.command()
def dead(
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Find unreachable code."""
    _run(lambda s: api.detect_dead_code(project, language, settings=s), verbose, full)


@app.command()
def cfg(
    file: str = typer.Argument(..., help="Source file"),
    function: str = typer.Argument(..., help="Function name"),
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the control flow graph of a function."""
    _run(lambda s: api.get_cfg(project, file, function, language, settings=s), verbose, full)


@app.command("slice")
def slice_(
    file: str = typer.Argument(..., help="Source file"),
    function: str = typer.Argument(..., help="Function name"),
    line: int = typer.Argument(..., help="Line to slice from"),
    project: str = PROJECT_OPTION,
    language: Optional[str] = LANGUAGE_OPTION,
    full: bool = FULL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the lines that affect a given line."""
    _run(
        lambda s: api.get_slice(project, file, function, line, language, settings=s),
        verbose,
        full,
    )


# ============================================================================
# Daemon, hooks, install
# ============================================================================

@app.command()
def status(
    project: str = PROJECT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the daemon socket for a project and whether it answers."""
    from rich.console import Console
    from rich.table import Table

    from tldrhooks.daemon.client import daemon_status

    settings = _setup(verbose)
    info = daemon_status(os.path.abspath(project), settings)

    table = Table(title="tldr daemon", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Project", info["project"])
    table.add_row("Socket", info["socket"])
    table.add_row("Socket file", "present" if info["socket_exists"] else "missing")
    table.add_row(
        "Daemon", "[green]running[/green]" if info["running"] else "[red]not running[/red]"
    )
    Console().print(table)


@app.command()
def hook(
    name: str = typer.Argument(..., help="Hook to run: session-start or context-inject"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Run a host hook: JSON payload on stdin, JSON output on stdout.

    Always exits 0 once the hook ran, so a failed lookup never blocks the host.
    """
    from tldrhooks.hooks import HOOKS, run_hook

    if name not in HOOKS:
        typer.echo(f"Unknown hook: {name}. Available: {', '.join(HOOKS)}", err=True)
        raise typer.Exit(1)

    try:
        settings = get_adapter_settings()
    except ValueError as e:
        settings = AdapterSettings()
        _configure_logging("DEBUG" if verbose else settings.log_level)
        logger.warning("Invalid configuration, using defaults: %s", e)
    else:
        _configure_logging("DEBUG" if verbose else settings.log_level)

    run_hook(name, sys.stdin, sys.stdout, settings=settings)


@app.command()
def install(
    global_install: bool = typer.Option(False, "--global", "-g", help="Install to ~/.claude"),
    project: Optional[str] = typer.Option(
        None, "--project", "-p", help="Install to <path>/.claude"
    ),
    skill_only: bool = typer.Option(False, "--skill-only", help="Install only the skill"),
    hooks_only: bool = typer.Option(False, "--hooks-only", help="Install only the hooks"),
) -> None:
    """
    Install the tldr skill and hook settings.

    Examples:
        tldrhooks install --global
        tldrhooks install --project ~/my-app --hooks-only
    """
    from tldrhooks.installer import InstallError, install as run_install, print_report, resolve_target

    try:
        target = resolve_target(global_install, project)
        report = run_install(target, skill=not hooks_only, hooks=not skill_only)
    except InstallError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    print_report(report)


@app.command()
def settings(
    action: str = typer.Argument("show", help="Action: show"),
) -> None:
    """Show the effective configuration."""
    from rich.console import Console
    from rich.table import Table

    if action != "show":
        typer.echo(f"Unknown action: {action}. Available actions: show", err=True)
        raise typer.Exit(1)

    current = _setup(False)
    table = Table(title="tldrhooks settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in asdict(current).items():
        table.add_row(key, "" if value is None else str(value))
    Console().print(table)


def run() -> None:
    """Entry point for console script mapping."""
    app()


if __name__ == "__main__":
    run()
