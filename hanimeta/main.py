"""
Point d'entree CLI de Hanimeta.

Configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer

from . import __version__
from .adapters.cli.commands import fetch, search, serve, url
from .config import PluginSettings
from .logging_config import configure_logging

app = typer.Typer(
    name="hanimeta",
    help="Client et passerelle de metadonnees Hanime / DLsite",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs detailles (DEBUG)"),
    ] = False,
) -> None:
    """Hanimeta - metadonnees Hanime et DLsite pour le serveur multimedia."""
    settings = PluginSettings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        plugin_logging=settings.enable_logging or verbose,
    )


app.command()(fetch)
app.command()(search)
app.command()(url)
app.command()(serve)


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Hanimeta v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
