"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from iptv_filter import __version__
from iptv_filter.api.client import PlaylistClient
from iptv_filter.core.pipeline import FilterPipeline
from iptv_filter.core.validator import StreamValidator
from iptv_filter.exceptions import IptvFilterError
from iptv_filter.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_summary_panel,
    print_verdict,
)
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("iptv_filter")

app = typer.Typer(
    name="iptv-filter",
    help=(
        "Checks every stream of a remote M3U playlist and writes a playlist with"
        " only the reachable HLS entries."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "iptv-filter"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _fail(error: IptvFilterError) -> typer.Exit:
    console.print(format_error_with_suggestions(error))
    return typer.Exit(code=1)


def _cancelled() -> typer.Exit:
    console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
    return typer.Exit(code=0)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for per-stream debug output).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration."
    ),
):
    """IPTV playlist filter"""
    if version:
        console.print(f"[bold]iptv-filter[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("iptv_filter").setLevel(log_level)

    if show_config:
        try:
            config = ConfigManager(CONFIG_FILE).load_config()
        except IptvFilterError as e:
            raise _fail(e) from e
        print_config(CONFIG_FILE, config)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file without asking."
    ),
):
    """Write a configuration file with the default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config()
    except IptvFilterError as e:
        raise _fail(e) from e
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command(name="run")
def run_command(
    master_url: str | None = typer.Option(
        None, "--master-url", "-m", help="URL of the master M3U playlist."
    ),
    output_path: str | None = typer.Option(
        None, "--output", "-o", help="Where to write the filtered playlist."
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of simultaneous probes (default and maximum 12).",
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Per-stream probe budget in seconds."
    ),
    range_bytes: int | None = typer.Option(
        None, "--range-bytes", help="Last byte offset requested from each stream."
    ),
    completion_order: bool | None = typer.Option(
        None,
        "--completion-order/--input-order",
        help="Write kept entries in probe completion order instead of input order.",
    ),
    no_progress: bool = typer.Option(
        False, "--no-progress", help="Disable the progress bar."
    ),
):
    """Download the master playlist, check every stream, write the survivors."""
    cli_options = {
        key: value
        for key, value in {
            "master_url": master_url,
            "output_path": output_path,
            "max_concurrent": workers,
            "timeout": timeout,
            "range_bytes": range_bytes,
            "preserve_completion_order": completion_order,
        }.items()
        if value is not None
    }

    async def _run_async():
        config = ConfigManager(CONFIG_FILE).load_config(cli_options)
        pipeline = FilterPipeline(config)
        async with ProgressManager(
            console=console, enabled=not no_progress
        ) as progress_manager:
            return await pipeline.run(
                on_start=progress_manager.start,
                on_progress=progress_manager.advance,
            )

    try:
        result = asyncio.run(_run_async())
    except IptvFilterError as e:
        raise _fail(e) from e
    except (KeyboardInterrupt, asyncio.CancelledError) as e:
        raise _cancelled() from e

    print_summary_panel(result)


@app.command()
def check(
    url: str = typer.Argument(..., help="A single stream URL to probe."),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Probe budget in seconds."
    ),
):
    """Probe one stream URL and report the verdict (exit code 1 when dropped)."""
    cli_options = {"timeout": timeout} if timeout is not None else {}

    async def _check_async():
        config = ConfigManager(CONFIG_FILE).load_config(cli_options)
        async with PlaylistClient(config.user_agent, max_workers=1) as client:
            validator = StreamValidator(
                client.session, timeout=config.timeout, range_bytes=config.range_bytes
            )
            return await validator.probe_url(url)

    try:
        verdict = asyncio.run(_check_async())
    except IptvFilterError as e:
        raise _fail(e) from e
    except (KeyboardInterrupt, asyncio.CancelledError) as e:
        raise _cancelled() from e

    print_verdict(verdict)
    if not verdict.keep:
        raise typer.Exit(code=1)
