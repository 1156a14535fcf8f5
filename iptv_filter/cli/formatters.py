"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from iptv_filter.core.pipeline import FilterResult
from iptv_filter.models.config import FilterConfig
from iptv_filter.models.entry import ValidationVerdict
from iptv_filter.utils.formatting import format_counts, format_duration


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "MasterPlaylistError": [
            "• Check that the master playlist URL is correct and reachable.",
            "• Check your internet connection.",
            "• Increase `master_timeout` in the config file for slow mirrors.",
        ],
        "ConfigurationError": [
            "• Review the values in your configuration file.",
            "• Run `iptv-filter init --force` to write a fresh default config.",
        ],
        "OutputWriteError": [
            "• Make sure the output directory is writable.",
            "• Choose another location with `--output`.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config: FilterConfig):
    """Displays the effective configuration."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Master URL:", config.master_url)
    table.add_row("Output Path:", f"[dim]{config.output_path}[/dim]")
    table.add_row("Max Concurrent:", str(config.max_concurrent))
    table.add_row("Probe Timeout:", f"{config.timeout:g}s")
    table.add_row("Range Bytes:", f"0-{config.range_bytes}")
    table.add_row("Master Timeout:", f"{config.master_timeout:g}s")
    table.add_row("User-Agent:", f"[dim]{config.user_agent}[/dim]")
    table.add_row(
        "Output Order:",
        "completion" if config.preserve_completion_order else "input",
    )

    source = config_path if config_path.is_file() else "built-in defaults"
    console.print(
        Panel(
            table,
            title=f"Configuration ([dim]{source}[/dim])",
            border_style="cyan",
        )
    )


def print_verdict(verdict: ValidationVerdict):
    """Displays the outcome of a single probe."""
    console = Console()
    if verdict.keep:
        headline = f"[bold green]✓ KEEP[/bold green] ({verdict.reason.value})"
    else:
        headline = f"[bold red]✗ DROP[/bold red] ({verdict.reason.value})"

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("URL:", verdict.url)
    if verdict.status is not None:
        table.add_row("Status:", str(verdict.status))
    if verdict.detail:
        table.add_row("Detail:", f"[dim]{verdict.detail}[/dim]")

    console.print(headline)
    console.print(table)


def print_summary_panel(result: FilterResult):
    """Displays the final summary of a filtering run."""
    console = Console()
    stats = result.stats

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Entries Parsed:", str(stats.entries_parsed))
    stats_table.add_row("✓ Kept:", f"[bold green]{stats.kept}[/bold green]")
    stats_table.add_row("✗ Dropped:", f"[bold red]{stats.dropped}[/bold red]")
    if stats.skipped > 0:
        stats_table.add_row(
            "○ Skipped:",
            f"[yellow]{stats.skipped}[/yellow] "
            f"[dim]({format_counts(stats.gate_rejections)})[/dim]",
        )

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row("Reasons:", f"[dim]{format_counts(stats.reasons)}[/dim]")
    stats_table.add_row("Peak Concurrent:", f"[green]{stats.peak_concurrent}[/green]")
    stats_table.add_row(
        "Time Elapsed:", f"[blue]{format_duration(result.duration_s)}[/blue]"
    )
    stats_table.add_row("Output:", f"[dim]{result.output_path}[/dim]")

    console.print()
    console.print(
        Panel(
            stats_table,
            title="📺 [bold]Filtering Complete[/bold]",
            border_style="green",
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
