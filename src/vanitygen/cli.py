"""
Command line interface for the Go vanity import site generator.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import VanityConfig, get_settings, load_config
from .errors import VanityError
from .pipeline import GenerateOptions, GenerationResult, execute
from .web import DEFAULT_OUTPUT_DIR, SiteReport

PROG_NAME = "vanitygen"

console = Console()
app = typer.Typer(help="Generate static Go vanity import pages from templates.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = get_settings().log_level
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_input_dir(value: Optional[Path]) -> Path:
    """Fall back to VANITYGEN_IN and ensure the input directory exists."""
    candidate = value or get_settings().input_dir
    if candidate is None:
        raise typer.BadParameter("Provide --in or set VANITYGEN_IN.")
    resolved = Path(candidate).expanduser().resolve()
    if not resolved.is_dir():
        raise typer.BadParameter(f"Input directory not found: {resolved}")
    return resolved


def _resolve_config_path(value: Path) -> Path:
    """Ensure config path exists and return absolute path."""
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _print_site_report(report: SiteReport) -> None:
    table = Table(title="Site Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


def _print_paths(config: VanityConfig) -> None:
    table = Table(title=f"Vanity Paths for {config.host or '<no host>'}")
    table.add_column("Import")
    table.add_column("VCS")
    table.add_column("Repo", overflow="fold")
    table.add_column("Display", overflow="fold")
    table.add_column("Packages", overflow="fold")
    for entry in config.paths:
        table.add_row(
            config.host + entry.path,
            entry.vcs,
            entry.repo,
            entry.display or "-",
            ", ".join(entry.packages) or "-",
        )
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show vanitygen version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]{PROG_NAME}[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            f"[bold yellow]{PROG_NAME}[/] is ready. Run [cyan]{PROG_NAME} generate --in path/to/templates[/] "
            "to build the site.",
        )


@app.command()
def generate(
    input_dir: Optional[Path] = typer.Option(
        None,
        "--in",
        "-i",
        help="Directory with input files. Must contain index.tmpl, project.tmpl and vanity.yml.",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory where output files are generated. Default is ./gen.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Resolve and render everything without writing files.",
    ),
) -> None:
    """
    Render the index and every project page into the output directory.
    """
    options = GenerateOptions(
        input_dir=_resolve_input_dir(input_dir),
        output_dir=output_dir or get_settings().output_dir or DEFAULT_OUTPUT_DIR,
        dry_run=dry_run,
    )
    try:
        result: GenerationResult = execute(options)
    except VanityError as exc:
        console.print(f"[bold red]Generation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _print_paths(result.config)
    if result.report is None:
        console.print("[bold blue]Dry run complete.[/] No filesystem changes made.")
        return
    _print_site_report(result.report)
    console.print("[bold green]Site generated.[/]")


@app.command()
def paths(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to vanity.yml.",
        callback=_resolve_config_path,
    ),
) -> None:
    """
    Resolve a vanity.yml and show the inferred VCS and display templates.
    """
    try:
        vanity_config = load_config(config)
    except VanityError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _print_paths(vanity_config)


@app.command("version")
def version_command() -> None:
    """
    Display version information.
    """
    console.print(PROG_NAME)
    console.print("----------------")
    console.print(f"Version: {__version__}")
    console.print(f"Python version: {platform.python_version()}")
    console.print(f"OS/Arch: {platform.system().lower()}/{platform.machine()}")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
