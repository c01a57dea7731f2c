"""Main CLI entry point."""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import click

from .. import __version__
from ..config import Config, ConfigManager
from ..core.interfaces import IFileScanner, IMovieStore, IProgressCallback
from ..core.models import UNIDENTIFIED_ID, BatchSummary, FileDescriptor
from ..infrastructure import Container, setup_logging
from ..utils import ConfigurationError, MovieIdentifierError


class EchoProgress(IProgressCallback):
    """Prints one line per processed file."""

    def __init__(self, total: int):
        self._total = total

    def on_movie_added(
        self, title: str, movie_id: int, count: int, error: Optional[str] = None
    ) -> None:
        prefix = f"[{count}/{self._total}]"
        if error:
            click.echo(f"{prefix} ✗ {error}")
        elif movie_id == UNIDENTIFIED_ID:
            click.echo(f"{prefix} ? unidentified")
        else:
            click.echo(f"{prefix} ✓ {title} ({movie_id})")


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="movie-identifier")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Movie Identifier - Map local movie files to TMDb entries."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--language", "-l", help="Two-letter language code for fetched metadata")
@click.pass_context
def identify(ctx: click.Context, directory: Path, language: Optional[str]) -> None:
    """Scan DIRECTORY and identify every movie file automatically."""
    container = ctx.obj["container"]

    try:
        summary = asyncio.run(_run_identify(container, directory, language))
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except MovieIdentifierError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _echo_summary(summary)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--movie-id", "-m", type=int, required=True, help="TMDb id to assign")
@click.option("--language", "-l", help="Two-letter language code for fetched metadata")
@click.pass_context
def reidentify(
    ctx: click.Context, filepath: Path, movie_id: int, language: Optional[str]
) -> None:
    """Assign FILEPATH to a specific TMDb movie id."""
    container = ctx.obj["container"]

    if movie_id <= 0:
        click.echo("Movie id must be a positive integer", err=True)
        sys.exit(1)

    try:
        summary = asyncio.run(_run_reidentify(container, filepath, movie_id, language))
    except MovieIdentifierError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _echo_summary(summary)
    if summary.failed:
        sys.exit(1)


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration and prerequisites."""
    config = ctx.obj["config"]

    errors = _validate_setup(config)
    if errors:
        for error in errors:
            click.echo(f"✗ {error}", err=True)
        click.echo("Validation failed", err=True)
        sys.exit(1)

    click.echo("All prerequisites validated successfully")


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Set TMDB_API_KEY or edit the configuration file before identifying.")

    except OSError as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration and library status."""
    config = ctx.obj["config"]
    container = ctx.obj["container"]

    click.echo("Movie Identifier Status")
    click.echo("=" * 40)

    click.echo(f"TMDb Configured: {'✓' if _has_api_key(config) else '✗'}")
    click.echo(f"Language: {config.preferences.get('language_preference', 'en')}")
    click.echo(f"Database: {config.storage.database_path}")
    click.echo(f"Artifacts: {config.storage.artifact_dir}")

    try:
        store = container.get(IMovieStore)
        click.echo(f"Mapped files: {store.count_mappings()}")
        click.echo(f"Movies: {store.count_movies()}")
        store.close()
    except MovieIdentifierError as e:
        click.echo(f"Library check failed: {e}")


async def _run_identify(
    container: Container, directory: Path, language: Optional[str]
) -> BatchSummary:
    """Scan a directory and run an automatic identification batch."""
    try:
        scanner = container.get(IFileScanner)  # type: ignore
        descriptors = await scanner.scan_descriptors(directory)
        if not descriptors:
            click.echo("No movie files found")
            return BatchSummary()

        click.echo(f"Identifying {len(descriptors)} file(s) in {directory}")
        identification = container.create_identification(
            descriptors, callback=EchoProgress(len(descriptors))
        )
        if language:
            identification.set_language(language)
        return await identification.start()
    finally:
        await container.aclose()


async def _run_reidentify(
    container: Container, filepath: Path, movie_id: int, language: Optional[str]
) -> BatchSummary:
    """Run a manual identification of a single file."""
    try:
        descriptor = FileDescriptor.from_path(filepath)
        store = container.get(IMovieStore)  # type: ignore
        previous_id = store.get_filepath_mapping(descriptor.filepath)

        identification = container.create_identification(
            [descriptor], callback=EchoProgress(1)
        )
        identification.set_movie_id(movie_id)
        if previous_id is not None:
            identification.set_current_movie_id(previous_id)
        if language:
            identification.set_language(language)
        return await identification.start()
    finally:
        await container.aclose()


def _has_api_key(config: Config) -> bool:
    api_key = config.tmdb.api_key
    return bool(api_key) and not api_key.startswith("${")


def _validate_setup(config: Config) -> List[str]:
    """Check prerequisites for running an identification.

    Returns:
        List of problems; empty when everything is in place.
    """
    errors = []
    if not _has_api_key(config):
        errors.append("TMDb API key is not configured")

    for label, location in (
        ("Database directory", Path(config.storage.database_path).parent),
        ("Artifact directory", Path(config.storage.artifact_dir)),
    ):
        try:
            location.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            errors.append(f"{label} {location} is not usable: {e}")

    return errors


def _echo_summary(summary: BatchSummary) -> None:
    click.echo("")
    click.echo(
        f"Processed {summary.total_processed}: {summary.identified} identified, "
        f"{summary.unidentified} unidentified, {summary.failed} failed "
        f"in {summary.total_processing_time_seconds:.1f}s"
    )
    if summary.cancelled:
        click.echo("Identification was cancelled before all files were processed")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
