"""Version command."""

from .. import __version__
from . import app
from ._common import console


@app.command()
def version():
    """Show the installed git-activity version."""
    console.print(f"git-activity [cyan]{__version__}[/cyan]")
