"""
Functions for formatting and displaying API results in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lastfm_client.exceptions import describe_error
from lastfm_client.models.config import AppSettings
from lastfm_client.models.responses import (
    CorrectedText,
    GetTopArtistsResponse,
    GetTopTracksResponse,
    PageInfo,
    ScrobbleResponse,
    UpdateNowPlayingResponse,
)

_HIDDEN_KEYS = ("shared_secret", "session_key")


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Run `lastfm-client init <API_KEY> <SHARED_SECRET>` to store credentials.",
            "• Write operations need a session key: run `lastfm-client session`.",
        ],
        "TransportError": [
            "• A network connection issue occurred or Last.fm rejected the request.",
            "• Check your API key and shared secret.",
            "• Please try again in a few minutes.",
        ],
        "LastFmApiError": [
            "• Last.fm refused the call. Error 9 means the session key is invalid.",
            "• Error 4 or 14 means the token was not authorized yet.",
        ],
        "DecodeError": [
            "• Last.fm returned a response in an unexpected shape.",
            "• Run the command with -vv for detailed logs.",
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

    details = {**describe_error(error), **(context or {})}
    if details:
        content.add_row()
        content.add_row(Text(f"Context: {details}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, settings: AppSettings):
    """Displays the current configuration, hiding sensitive data."""
    console = Console()
    content = ""
    for key, value in settings.model_dump().items():
        if key in _HIDDEN_KEYS:
            value = "(hidden)" if value else "(not set)"
        content += f"{key} = {escape(str(value))}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
        )
    )


def _page_caption(page_info: PageInfo) -> str:
    return (
        f"Page {page_info.page} of {page_info.total_pages} "
        f"({page_info.total} items, {page_info.per_page} per page)"
    )


def print_top_artists(response: GetTopArtistsResponse):
    """Displays a page of a user's top artists."""
    top = response.topartists
    first_rank = (top.page_info.page - 1) * top.page_info.per_page + 1

    table = Table(
        title=f"Top artists of [bold]{escape(top.page_info.user)}[/bold]",
        caption=_page_caption(top.page_info),
        box=box.ROUNDED,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Artist", style="bold cyan")
    table.add_column("URL", overflow="fold")

    for index, artist in enumerate(top.artists, start=first_rank):
        table.add_row(str(index), escape(artist.name), artist.url)
    Console().print(table)


def print_top_tracks(response: GetTopTracksResponse):
    """Displays a page of a user's top tracks."""
    top = response.toptracks

    table = Table(
        title=f"Top tracks of [bold]{escape(top.page_info.user)}[/bold]",
        caption=_page_caption(top.page_info),
        box=box.ROUNDED,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Track", style="bold cyan")
    table.add_column("Artist")
    table.add_column("Plays", justify="right", style="green")

    for track in top.tracks:
        table.add_row(
            str(track.rank.rank),
            escape(track.name),
            escape(track.artist.name),
            str(track.playcount),
        )
    Console().print(table)


def _corrected(value: CorrectedText) -> str:
    if value.was_corrected:
        return f"{escape(value.text)} [yellow](corrected)[/yellow]"
    return escape(value.text) or "[dim]-[/dim]"


def print_scrobble_result(response: ScrobbleResponse):
    """Displays whether a scrobble was accepted and how it was recorded."""
    scrobbles = response.scrobbles
    result = scrobbles.scrobble

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Artist:", _corrected(result.artist))
    table.add_row("Track:", _corrected(result.track))
    table.add_row("Album:", _corrected(result.album))
    table.add_row("Timestamp:", str(result.timestamp))
    if result.ignored_message.is_ignored:
        table.add_row(
            "Ignored:",
            f"[red]{escape(result.ignored_message.text)} "
            f"(code {result.ignored_message.code})[/red]",
        )

    accepted = scrobbles.counts.accepted
    border_style = "green" if accepted else "red"
    Console().print(
        Panel(
            table,
            title=(
                f"Scrobble: {accepted} accepted, {scrobbles.counts.ignored} ignored"
            ),
            border_style=border_style,
            expand=False,
        )
    )


def print_now_playing(response: UpdateNowPlayingResponse):
    """Displays the now-playing notification as recorded by Last.fm."""
    nowplaying = response.nowplaying
    console = Console()
    console.print(
        f"[green]✓ Now playing:[/green] {_corrected(nowplaying.track)} "
        f"by {_corrected(nowplaying.artist)}"
    )
    if nowplaying.ignored_message.is_ignored:
        console.print(
            f"[yellow]⚠️  Ignored: {escape(nowplaying.ignored_message.text)} "
            f"(code {nowplaying.ignored_message.code})[/yellow]"
        )
