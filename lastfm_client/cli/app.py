"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from lastfm_client import __version__
from lastfm_client.api.client import LastFmClient
from lastfm_client.models.config import AppSettings, create_config
from lastfm_client.models.requests import Period
from lastfm_client.storage.config_manager import ConfigManager

from .formatters import (
    print_config,
    print_now_playing,
    print_scrobble_result,
    print_top_artists,
    print_top_tracks,
)

console = Console()

logging.basicConfig(
    level="WARNING",
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
log = logging.getLogger("lastfm_client")

app = typer.Typer(
    name="lastfm-client",
    help=(
        "Scrobble tracks and query listening statistics on Last.fm. Use"
        " 'lastfm-client <command> --help' for more info."
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
    return base_dir.expanduser() / "lastfm-client"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_settings() -> AppSettings:
    return ConfigManager(CONFIG_FILE).load_settings()


def _make_client(settings: AppSettings) -> LastFmClient:
    return LastFmClient(settings.to_client_config())


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
    """Last.fm client CLI"""
    if version:
        console.print(f"[bold]lastfm-client[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("lastfm_client").setLevel(log_level)

    if show_config:
        if not CONFIG_FILE.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]lastfm-client init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        print_config(CONFIG_FILE, _load_settings())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    api_key: str = typer.Argument(..., help="Your Last.fm API key."),
    shared_secret: str = typer.Argument(..., help="Your Last.fm shared secret."),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the Last.fm REST endpoint."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing credentials without asking."
    ),
):
    """Store your Last.fm API credentials."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm(
            "Configuration file already exists. Overwrite the credentials?"
        )
    ):
        raise typer.Abort()

    # Validates the credentials before anything is written.
    config = create_config(api_key, shared_secret, base_url)
    settings = AppSettings(
        api_key=config.api_key,
        shared_secret=config.shared_secret,
        base_url=config.base_url,
    )
    ConfigManager(CONFIG_FILE).save_settings(settings)
    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print(
        "Next: authorize the application with [cyan]lastfm-client auth-url[/cyan]"
    )


@app.command(name="auth-url")
def auth_url(
    token: Optional[str] = typer.Option(
        None, "--token", help="Token from auth.getToken (desktop applications)."
    ),
    callback_url: Optional[str] = typer.Option(
        None, "--callback", help="Callback URL (web applications)."
    ),
):
    """Print the page where a user authorizes this application."""
    client = _make_client(_load_settings())
    url = client.authenticator.authorize_url(token=token, callback_url=callback_url)
    console.print(url, soft_wrap=True)


@app.command()
def session(
    token: str = typer.Argument(..., help="The token the user authorized."),
):
    """Exchange an authorized token for a session key and store it."""
    settings = _load_settings()

    async def _session_async():
        async with _make_client(settings) as client:
            return await client.get_session(token)

    response = asyncio.run(_session_async())
    ConfigManager(CONFIG_FILE).update_settings(
        session_key=response.session.key, username=response.session.name
    )
    subscriber = " (subscriber)" if response.session.subscriber else ""
    console.print(
        f"[green]✓ Session stored for [bold]{response.session.name}[/bold]"
        f"{subscriber}.[/green]"
    )


@app.command()
def scrobble(
    artist: str = typer.Argument(..., help="The artist name."),
    track: str = typer.Argument(..., help="The track name."),
    album: Optional[str] = typer.Option(None, "--album", "-a", help="Album name."),
    timestamp: Optional[datetime] = typer.Option(
        None,
        "--timestamp",
        "-t",
        help="When the track started playing, in UTC (default: now).",
    ),
):
    """Scrobble a track to your profile."""
    settings = _load_settings()
    session_key = settings.require_session_key()
    played_at = timestamp or datetime.now(timezone.utc)

    async def _scrobble_async():
        async with _make_client(settings) as client:
            return await client.scrobble(
                artist=artist,
                track=track,
                timestamp=played_at,
                session_key=session_key,
                album=album,
            )

    print_scrobble_result(asyncio.run(_scrobble_async()))


@app.command(name="now-playing")
def now_playing(
    artist: str = typer.Argument(..., help="The artist name."),
    track: str = typer.Argument(..., help="The track name."),
    album: Optional[str] = typer.Option(None, "--album", "-a", help="Album name."),
):
    """Tell Last.fm which track you are listening to right now."""
    settings = _load_settings()
    session_key = settings.require_session_key()

    async def _now_playing_async():
        async with _make_client(settings) as client:
            return await client.update_now_playing(
                artist=artist, track=track, session_key=session_key, album=album
            )

    print_now_playing(asyncio.run(_now_playing_async()))


def _resolve_user(user: Optional[str], settings: AppSettings) -> str:
    resolved = user or settings.username
    if not resolved:
        console.print(
            "[red]✗ No user given and no session user stored.[/red] "
            "Use: [cyan]lastfm-client top-artists <USER>[/cyan]"
        )
        raise typer.Exit(code=1)
    return resolved


@app.command(name="top-artists")
def top_artists(
    user: Optional[str] = typer.Argument(
        None, help="Last.fm username (default: the stored session user)."
    ),
    period: Optional[Period] = typer.Option(None, "--period", "-p"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=1, max=1000, help="Results per page."
    ),
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page number."),
):
    """Show a user's most played artists."""
    settings = _load_settings()
    username = _resolve_user(user, settings)

    async def _top_artists_async():
        async with _make_client(settings) as client:
            return await client.get_top_artists(
                username, period=period, limit=limit, page=page
            )

    print_top_artists(asyncio.run(_top_artists_async()))


@app.command(name="top-tracks")
def top_tracks(
    user: Optional[str] = typer.Argument(
        None, help="Last.fm username (default: the stored session user)."
    ),
    period: Optional[Period] = typer.Option(None, "--period", "-p"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=1, max=1000, help="Results per page."
    ),
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page number."),
):
    """Show a user's most played tracks."""
    settings = _load_settings()
    username = _resolve_user(user, settings)

    async def _top_tracks_async():
        async with _make_client(settings) as client:
            return await client.get_top_tracks(
                username, period=period, limit=limit, page=page
            )

    print_top_tracks(asyncio.run(_top_tracks_async()))
