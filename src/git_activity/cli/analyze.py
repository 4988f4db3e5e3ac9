"""Analyze command: walk repositories and write activity charts."""

from pathlib import Path
from typing import List, Optional

import typer

from ..activity.aliases import AliasResolver
from ..activity.combiner import analyze_all
from ..charts.render import generate_charts
from ..exceptions import GitActivityError
from ..logging_config import apply_verbosity, setup_logging
from . import app
from ._common import console, resolve_config, summary_table


@app.command()
def analyze(
    repos: List[Path] = typer.Argument(
        ...,
        help="Paths of the git repositories to analyze",
    ),
    start: Optional[str] = typer.Option(
        None,
        "--start",
        "-s",
        help="Start date for analysis (YYYY-MM-DD)",
    ),
    end: Optional[str] = typer.Option(
        None,
        "--end",
        "-e",
        help="End date for analysis (YYYY-MM-DD)",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: png (default) or svg",
    ),
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Measure 'commits' (default) or 'lines' of code changed",
    ),
    bars: Optional[str] = typer.Option(
        None,
        "--bars",
        "-b",
        help="Series split: flat (default), repo, or dev",
    ),
    grouped: Optional[bool] = typer.Option(
        None,
        "--grouped/--stacked",
        "-g",
        help="Side-by-side normalized bars instead of stacked totals",
    ),
    people: Optional[Path] = typer.Option(
        None,
        "--people",
        "-p",
        help="Alias file: one 'Name|alias|alias' line per developer",
        dir_okay=False,
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for chart files (default: current directory)",
        file_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Analyze commit activity of one or more git repositories.

    Writes four charts (by weekday, hour, month, and week) named
    [cyan]{repos}_by_{dimension}.{format}[/cyan].

    [bold]Examples:[/bold]

      git-activity analyze ~/src/api ~/src/web

      git-activity analyze . --mode lines --bars dev --people people.txt

      git-activity analyze . -s 2024-01-01 -e 2024-06-30 -f svg
    """
    logger = setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    try:
        settings = resolve_config(
            config,
            start=start,
            end=end,
            output_format=fmt,
            mode=mode,
            group_by=bars,
            grouped=grouped,
            people_file=str(people) if people else None,
            output_dir=str(output_dir) if output_dir else None,
            verbose=verbose,
            quiet=quiet,
        )
        apply_verbosity(settings.verbosity)

        if settings.people_file:
            resolver = AliasResolver.from_file(settings.people_file)
        else:
            resolver = AliasResolver.empty()

        Path(settings.output_dir).mkdir(parents=True, exist_ok=True)

        label, combined = analyze_all(
            repos,
            settings.mode,
            settings.date_range,
            resolver,
            git_timeout=settings.git_timeout_seconds,
        )

        written = generate_charts(
            combined,
            settings.mode,
            settings.group_by,
            label,
            settings.output_format,
            grouped=settings.grouped,
            output_dir=settings.output_dir,
        )

        if settings.verbosity != "quiet":
            console.print(summary_table(combined, settings.mode))
            for path in written:
                console.print(f"Saved [blue]{path}[/blue]")
            console.print()
            console.print("[bold green]Repository analysis complete.[/bold green]")

    except GitActivityError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code)

    except OSError as e:
        logger.error(f"Cannot prepare output directory: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
