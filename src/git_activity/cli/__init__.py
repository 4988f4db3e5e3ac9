"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="git-activity",
    help="git-activity - commit activity by weekday, hour, month and week",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .version import version as _version  # noqa: F401, E402
