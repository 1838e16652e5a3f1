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

from f1tv_dl import __version__
from f1tv_dl.api.client import F1TVAPIClient
from f1tv_dl.core.download_manager import DownloadManager
from f1tv_dl.exceptions import F1TVError
from f1tv_dl.models.config import INTERNATIONAL_LANGUAGES, OUTPUT_FORMATS, AppConfig
from f1tv_dl.storage.config_manager import ConfigManager
from f1tv_dl.utils.url import is_service_url

from .formatters import format_error_with_suggestions, print_channel_table, print_config

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
log = logging.getLogger("f1tv_dl")

app = typer.Typer(
    name="f1tv-dl",
    help=(
        "Download videos from F1 TV. Use 'f1tv-dl <command> --help' for more info."
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
    return base_dir.expanduser() / "f1tv-dl"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _validate_url(url: str) -> str:
    if not is_service_url(url):
        raise typer.BadParameter("Not a valid F1 TV video page URL.")
    return url


URL_ARGUMENT = typer.Argument(
    ..., help="The F1 TV video page URL.", callback=_validate_url
)
TOKEN_OPTION = typer.Option(
    None,
    "--token",
    "-T",
    envvar="F1TV_TOKEN",
    help="F1 TV entitlement token (or set F1TV_TOKEN).",
    show_default=False,
)
CHANNEL_OPTION = typer.Option(
    None,
    "--channel",
    "-c",
    help='Choose an alternate channel (e.g., "Lewis Hamilton").',
)


def _load_config(cli_options: dict) -> AppConfig:
    return ConfigManager(CONFIG_FILE).load_config(cli_options)


def _run(coro_factory) -> None:
    """Runs an async command body, rendering application errors as a panel."""
    try:
        asyncio.run(coro_factory())
    except F1TVError as e:
        console.print(format_error_with_suggestions(e))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """F1 TV Downloader CLI"""
    if version:
        console.print(f"[bold]f1tv-dl[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("f1tv_dl").setLevel(log_level)

    if show_config:
        if not CONFIG_FILE.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]f1tv-dl init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        print_config(CONFIG_FILE, ConfigManager(CONFIG_FILE).get_config_as_dict())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
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
    except F1TVError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command(name="download")
def download_command(
    url: str = URL_ARGUMENT,
    token: str | None = TOKEN_OPTION,
    channel: str | None = CHANNEL_OPTION,
    audio_only: bool = typer.Option(
        False, "--audio-only", help="Download only the audio stream."
    ),
    remove_vocals: bool = typer.Option(
        False,
        "--remove-vocals",
        help="After downloading, create a second audio file with vocals removed.",
    ),
    international_audio: str | None = typer.Option(
        None,
        "--international-audio",
        "-i",
        help=(
            "Include a secondary audio track from the INTERNATIONAL feed "
            f"({', '.join(INTERNATIONAL_LANGUAGES)})."
        ),
    ),
    itsoffset: str | None = typer.Option(
        None,
        "--itsoffset",
        "-t",
        help="Time offset to sync secondary audio as '(-)hh:mm:ss.SSS'.",
    ),
    audio_stream: str | None = typer.Option(
        None, "--audio-stream", "-a", help="Primary audio stream language."
    ),
    video_size: str | None = typer.Option(
        None,
        "--video-size",
        "-s",
        help="Video resolution (e.g., 1920x1080, best). Ignored with --audio-only.",
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Video output format ({', '.join(OUTPUT_FORMATS)}).",
    ),
    output_directory: str | None = typer.Option(
        None,
        "--output-directory",
        "-o",
        help="Directory to save the downloaded file (or set F1TV_OUTDIR).",
    ),
):
    """Download a video from F1 TV."""
    cli_options = {
        "token": token,
        "channel": channel,
        "audio_only": audio_only,
        "remove_vocals": remove_vocals,
        "international_audio": international_audio,
        "itsoffset": itsoffset,
        "audio_stream": audio_stream,
        "video_size": video_size,
        "format": output_format,
        "output_directory": output_directory,
    }

    async def _download_async():
        config = _load_config(cli_options)
        if config.token:
            log.info("Using provided authentication token.")
        async with F1TVAPIClient(config) as api_client:
            await DownloadManager(config, api_client).download(url)

    _run(_download_async)


@app.command(name="channels")
def channels_command(
    url: str = URL_ARGUMENT,
):
    """List the alternate channels of a race and exit."""

    async def _channels_async():
        config = _load_config({})
        async with F1TVAPIClient(config) as api_client:
            content = await api_client.fetch_content_info(url)
        print_channel_table(content)

    _run(_channels_async)


@app.command(name="stream-url")
def stream_url_command(
    url: str = URL_ARGUMENT,
    token: str | None = TOKEN_OPTION,
    channel: str | None = CHANNEL_OPTION,
):
    """Print the tokenized stream URL and exit."""

    async def _stream_url_async():
        config = _load_config({"token": token, "channel": channel})
        async with F1TVAPIClient(config) as api_client:
            manager = DownloadManager(config, api_client)
            content = await api_client.fetch_content_info(url)
            manifest = await manager.resolve_manifest(content, config.channel)
        console.print(f"[bold]Stream URL:[/bold] {manifest.url}", soft_wrap=True)

    _run(_stream_url_async)
