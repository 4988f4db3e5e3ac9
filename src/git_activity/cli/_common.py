"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..activity.models import CombinedCommitActivity, Mode
from ..config import ActivityConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    **options,
) -> ActivityConfig:
    """Build a validated config from CLI options; unset options are None."""
    return load_config(config_file=config, **options)


def summary_table(combined: CombinedCommitActivity, mode: Mode) -> Table:
    """Per-repository developer and event totals, plus an overall row."""
    unit = Mode.parse(mode).unit_label
    table = Table(title="Activity Summary", show_lines=False)
    table.add_column("Repository", style="cyan")
    table.add_column("Developers", justify="right")
    table.add_column(unit, justify="right", style="green")

    for repo in combined:
        table.add_row(
            repo.repo_name,
            str(len(repo.activity)),
            f"{repo.activity.totals().total:,}",
        )

    if len(combined) > 1:
        overall = combined.overall()
        table.add_row(
            "[bold]All[/bold]",
            f"[bold]{len(overall)}[/bold]",
            f"[bold]{overall.totals().total:,}[/bold]",
        )
    return table
