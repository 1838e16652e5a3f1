"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from f1tv_dl.exceptions import AuthError, UpstreamError
from f1tv_dl.models.content import ContentInfo

TOKEN_HINT = (
    "• The token may be invalid or expired. Copy a fresh entitlement token from "
    "your browser and pass it with --token or F1TV_TOKEN."
)


def is_unauthorized(error: Exception) -> bool:
    """Checks whether an error looks like a rejected or expired token."""
    if isinstance(error, AuthError):
        return True
    return isinstance(error, UpstreamError) and error.status in (401, 403)


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "InvalidUrlError": [
            "• Use the URL of a video page, e.g. https://f1tv.formula1.com/detail/<id>/<name>.",
        ],
        "NotFoundError": [
            "• Check that the video is still available on F1 TV.",
            "• Run the 'channels' command to list the alternate channels of a race.",
        ],
        "RenditionNotFoundError": [
            "• Try --video-size best, or a resolution offered by this stream.",
            "• Check the audio language passed with --audio-stream.",
        ],
        "ParseError": [
            "• The stream manifest could not be read; the stream may be unavailable.",
        ],
        "UpstreamError": [
            "• The F1 TV API might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
        "FFmpegError": [
            "• Make sure ffmpeg is installed and on your PATH.",
            "• Set 'ffmpeg_path' in the configuration file to point at ffmpeg.",
        ],
        "ConfigurationError": [
            "• Run 'f1tv-dl init --force' to write a fresh configuration file.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )
    if is_unauthorized(error):
        suggestions = [TOKEN_HINT]

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in sorted(config_data.items()):
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip() or "[dim](empty)[/dim]",
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_channel_table(content: ContentInfo):
    """Displays the alternate channels of a race."""
    console = Console()
    if not content.is_race:
        console.print("[yellow]This URL does not have additional streams.[/yellow]")
        return

    table = Table(
        title=content.title or None,
        box=box.SIMPLE_HEAVY,
        header_style="bold cyan",
    )
    table.add_column("Name")
    table.add_column("Number", justify="right")
    table.add_column("TLA / Title")

    for channel in content.channels:
        if channel.is_onboard:
            table.add_row(
                f"[green]{channel.driver_full_name}[/green]",
                f"[green]{channel.racing_number}[/green]",
                f"[green]{channel.title}[/green]",
            )
        else:
            table.add_row(f"[green]{channel.title}[/green]", "", "")

    console.print(table)
