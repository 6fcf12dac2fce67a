"""Command-line interface for the media scanner."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config.database import MediaDatabase
from .config.settings import Settings
from .models.song import Song
from .service import MediaLibraryService
from .utils.platform import get_config_dir

app = typer.Typer(help="Media library song and playlist scanner")
console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file"
)
JSON_OPTION = typer.Option(
    False,
    "--json",
    "-j",
    help="Print records as JSON"
)


def get_service(config_path: Optional[Path], json_output: bool = False) -> MediaLibraryService:
    """Create the library service for a command."""
    return MediaLibraryService(config_path=config_path, console_logging=not json_output)


def format_duration(milliseconds: int) -> str:
    """Format a duration as m:ss."""
    seconds = milliseconds // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


def songs_table(title: str, songs: List[Song]) -> Table:
    """Build a rich table listing songs."""
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("#", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Year")
    table.add_column("Length", justify="right")

    for song in songs:
        table.add_row(
            str(song.id),
            str(song.track) if song.track else "",
            song.title,
            song.artist,
            song.album,
            song.year or "",
            format_duration(song.duration)
        )

    return table


@app.command()
def songs(
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION
):
    """List every song in the library."""
    try:
        service = get_service(config, json_output)
        found = service.songs()

        if json_output:
            typer.echo(service.serialize_all(found))
            return

        if not found:
            console.print("[yellow]No songs found[/yellow]")
            return

        console.print(songs_table("Songs", found))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def playlists(
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION
):
    """List every playlist and its song count."""
    try:
        service = get_service(config, json_output)
        found = service.playlists()

        if json_output:
            typer.echo(service.serialize_all(found))
            return

        if not found:
            console.print("[yellow]No playlists found[/yellow]")
            return

        table = Table(title="Playlists")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name", style="green")
        table.add_column("Songs", justify="right")
        table.add_column("Length", justify="right")

        for playlist in found:
            table.add_row(
                str(playlist.id),
                playlist.name,
                str(len(playlist.songs)),
                format_duration(sum(song.duration for song in playlist.songs))
            )

        console.print(table)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command(name="playlist-songs")
def playlist_songs(
    playlist_id: int = typer.Argument(..., help="Playlist ID"),
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION
):
    """List the songs of one playlist in playlist order."""
    try:
        service = get_service(config, json_output)
        found = service.playlist_songs(playlist_id)

        if json_output:
            typer.echo(service.serialize_all(found))
            return

        if not found:
            console.print(f"[yellow]No songs found in playlist {playlist_id}[/yellow]")
            return

        console.print(songs_table(f"Playlist {playlist_id}", found))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def export(
    output: Path = typer.Argument(..., help="Output JSON file"),
    config: Optional[Path] = CONFIG_OPTION
):
    """Export every song and playlist to a JSON file."""
    try:
        service = get_service(config)
        counts = service.export(output)

        console.print(
            f"[green]Exported {counts['songs']} song(s) and "
            f"{counts['playlists']} playlist(s) to {output}[/green]"
        )

    except Exception as e:
        console.print(f"[red]Export failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def status(config: Optional[Path] = CONFIG_OPTION):
    """Show configuration and library statistics."""
    try:
        service = get_service(config)
        settings = service.settings

        console.print("[cyan]Media Scanner Status[/cyan]\n")

        console.print(f"Config directory: {get_config_dir()}")
        console.print(f"Database: {settings.database.path}")
        console.print(f"Log file: {settings.logging.path}\n")

        if not settings.database.path.exists():
            console.print("[yellow]Database not found, run 'init-db' to create it[/yellow]")
            return

        found = service.playlists()
        console.print("[bold]Library:[/bold]")
        console.print(f"  Songs: {len(service.songs())}")
        console.print(f"  Playlists: {len(found)}")
        console.print(f"  Playlist entries: {sum(len(p.songs) for p in found)}")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command(name="init-config")
def init_config(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file"
    )
):
    """Initialize a configuration file with defaults."""
    if output is None:
        output = get_config_dir() / 'config.yaml'

    if output.exists():
        overwrite = typer.confirm(
            f"Config file already exists at {output}. Overwrite?",
            default=False
        )
        if not overwrite:
            console.print("[yellow]Cancelled[/yellow]")
            return

    settings = Settings()
    settings.save(output)

    console.print(f"[green]Configuration file created: {output}[/green]")
    console.print("\nEdit this file to customize your settings")


@app.command(name="init-db")
def init_db(config: Optional[Path] = CONFIG_OPTION):
    """Create the media database schema if it is missing."""
    settings = Settings.from_file_or_default(config)

    try:
        MediaDatabase(settings.database.path).ensure_schema()
        console.print(f"[green]Media database ready: {settings.database.path}[/green]")
    except Exception as e:
        console.print(f"[red]Failed to create database: {e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
