"""Command-line interface for activity-ratings."""

import csv
import logging
import tarfile
import time
from pathlib import Path

import httpx
import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .aggregate import STRATEGIES, Ratings, compute_ratings
from .archive import download_archive, extract_local_archive, locate_tables, temporary_workspace
from .config import STRATEGY_BOTH, Config, load_config
from .errors import RatingsError
from .report import generate_markdown_report, render_ratings
from .tables import DataTables

app = typer.Typer(help="Rank users and repositories from a repository activity archive")
console = Console()


def main():
    """Entry point for the CLI application."""
    app()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load(config_file: Path | None) -> Config:
    if config_file is None:
        return Config()
    return load_config(config_file)


def _prepare_data(config: Config, workspace: Path, progress: Progress) -> Path:
    """Make the CSV tables available on disk and return their directory."""
    if config.data_dir:
        return locate_tables(config.data_dir)

    if config.archive:
        task = progress.add_task(f"Extracting {config.archive}...", total=None)
        extract_local_archive(config.archive, workspace)
    else:
        task = progress.add_task(f"Downloading {config.tar_link}...", total=None)
        download_archive(config.tar_link, workspace)
    progress.remove_task(task)

    return locate_tables(workspace)


def _print_comparison(results: dict[str, Ratings]) -> None:
    if len(results) < 2:
        return

    rendered = {name: render_ratings(result) for name, result in results.items()}
    if len(set(rendered.values())) == 1:
        console.print(f"[green]Strategies agree:[/green] {', '.join(rendered)}")
    else:
        console.print(
            f"[yellow]Warning: strategies produced different ratings:[/yellow] {', '.join(rendered)}"
        )


def _print_timings(timings: dict[str, float]) -> None:
    table = Table(title="Timings")
    table.add_column("Strategy")
    table.add_column("Seconds", justify="right")
    for strategy, seconds in timings.items():
        table.add_row(strategy, f"{seconds:.3f}")
    console.print(table)


@app.command()
def generate(
    config_file: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    tar_link: str = typer.Option(
        None,
        "--tar-link",
        help="URL to download the data archive from (overrides config file setting)",
    ),
    archive: Path = typer.Option(
        None,
        "--archive",
        "-a",
        help="Local tar.gz archive to read instead of downloading",
    ),
    data_dir: Path = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Directory with already extracted CSV tables",
    ),
    strategy: str = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Aggregation strategy: performance, space or both",
    ),
    size: int = typer.Option(
        None,
        "--size",
        "-n",
        help="Number of entries in every leaderboard",
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write a Markdown report to this path",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log progress for every user, repository and event",
    ),
):
    """Download the activity archive and print the top users and repositories.

    The archive is extracted into a temporary directory that is removed when
    the command finishes, whether it succeeds or not.
    """
    try:
        config = _load(config_file)
        if tar_link:
            config.tar_link = tar_link
        if archive:
            config.archive = str(archive)
        if data_dir:
            config.data_dir = str(data_dir)
        if strategy:
            config.strategy = strategy.lower()
        if size is not None:
            config.size = size
        if output:
            config.output = str(output)
        config.validate()
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(1)

    _configure_logging(verbose)

    if config.strategy == STRATEGY_BOTH:
        strategies = list(STRATEGIES)
    else:
        strategies = [config.strategy]

    results = {}
    timings = {}

    try:
        with temporary_workspace() as workspace:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                tables = DataTables(_prepare_data(config, workspace, progress))

                for name in strategies:
                    task = progress.add_task(f"Computing {name} optimized ratings...", total=None)
                    started = time.perf_counter()
                    result = compute_ratings(tables, strategy=name, size=config.size)
                    timings[name] = time.perf_counter() - started
                    progress.remove_task(task)
                    results[name] = result
    except (
        RatingsError,
        OSError,
        httpx.HTTPError,
        tarfile.TarError,
        UnicodeDecodeError,
        csv.Error,
    ) as e:
        console.print(f"[red]Error computing ratings:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    ratings = results[strategies[0]]

    console.print("\n[bold blue]Ratings[/bold blue]")
    console.print(render_ratings(ratings), markup=False, highlight=False, soft_wrap=True)
    _print_timings(timings)
    _print_comparison(results)

    if config.output:
        try:
            generate_markdown_report(ratings, config.output, timings)
        except OSError as e:
            console.print(f"[red]Error generating report:[/red] {e}")
            raise typer.Exit(1)
        console.print(f"\n[bold green]Report generated:[/bold green] {config.output}")


@app.command()
def validate(
    config_file: Path = typer.Option(
        "config.yaml",
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """Validate the configuration file without computing ratings."""
    try:
        config = load_config(config_file)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration is invalid:[/red] {e}")
        raise typer.Exit(1)

    console.print("[green]Configuration is valid[/green]")
    if config.data_dir:
        console.print(f"\nData directory: {config.data_dir}")
    elif config.archive:
        console.print(f"\nArchive: {config.archive}")
    else:
        console.print(f"\nTar link: {config.tar_link}")
    console.print(f"Strategy: {config.strategy}")
    console.print(f"Leaderboard size: {config.size}")
    console.print(f"Output: {config.output or '-'}")


if __name__ == "__main__":
    main()
