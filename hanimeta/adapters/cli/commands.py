"""
Commandes CLI : interrogation du backend et lancement de la passerelle.

- fetch : metadonnees d'une oeuvre par ID
- search : recherche par titre
- url : URL publique d'une oeuvre
- serve : lance la passerelle backend (uvicorn)
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from hanimeta.adapters.api.errors import MetadataFetchError
from hanimeta.adapters.cli.helpers import (
    console,
    load_scrapers,
    resolve_plugin,
    suppress_loguru,
    with_container,
)
from hanimeta.container import Container
from hanimeta.core.ports import CatalogMetadata
from hanimeta.logging_config import configure_logging

CatalogArg = Annotated[str, typer.Argument(help="Catalogue (hanime, dlsite)")]


def fetch(
    catalog: CatalogArg,
    external_id: Annotated[str, typer.Argument(help="ID ou URL de l'oeuvre")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Affiche la reponse brute en JSON")
    ] = False,
) -> None:
    """Recupere les metadonnees d'une oeuvre aupres du backend."""
    asyncio.run(_fetch_async(catalog, external_id, as_json))


@with_container
async def _fetch_async(container, catalog: str, external_id: str, as_json: bool) -> None:
    plugin = resolve_plugin(container, catalog)
    parsed_id = plugin.descriptor.extract_id(external_id) or external_id.strip()

    try:
        with suppress_loguru():
            async with plugin.create_client() as client:
                metadata = await client.get_metadata(parsed_id)
    except MetadataFetchError as exc:
        console.print(f"[red]Echec:[/red] {exc}")
        raise typer.Exit(code=1)

    if metadata is None:
        console.print(f"[yellow]Aucune metadonnee pour {parsed_id}.[/yellow]")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(data=metadata.to_dict())
        return
    console.print(_metadata_table(metadata))


def search(
    catalog: CatalogArg,
    title: Annotated[str, typer.Argument(help="Titre ou mots-cles")],
    max_results: Annotated[
        Optional[int],
        typer.Option("--max", "-m", help="Nombre maximum de resultats"),
    ] = None,
) -> None:
    """Recherche des oeuvres par titre."""
    asyncio.run(_search_async(catalog, title, max_results))


@with_container
async def _search_async(container, catalog: str, title: str, max_results: Optional[int]) -> None:
    plugin = resolve_plugin(container, catalog)
    limit = max_results or plugin.settings.max_search_results

    try:
        with suppress_loguru():
            async with plugin.create_client() as client:
                results = await client.search(title, limit)
    except MetadataFetchError as exc:
        console.print(f"[red]Echec:[/red] {exc}")
        raise typer.Exit(code=1)

    if not results:
        console.print("[yellow]Aucun resultat.[/yellow]")
        return

    table = Table(title=f"{plugin.descriptor.provider_name} : {title}")
    table.add_column("ID", style="cyan")
    table.add_column("Titre")
    table.add_column("Annee", justify="right")
    for result in results:
        table.add_row(result.id, result.title, str(result.year or ""))
    console.print(table)


def url(
    catalog: CatalogArg,
    external_id: Annotated[str, typer.Argument(help="ID ou URL de l'oeuvre")],
) -> None:
    """Affiche l'URL publique d'une oeuvre."""
    plugin = resolve_plugin(Container(), catalog)
    parsed_id = plugin.descriptor.extract_id(external_id)
    if not parsed_id:
        console.print(f"[red]ID invalide pour {plugin.descriptor.provider_name}:[/red] {external_id}")
        raise typer.Exit(code=2)
    typer.echo(plugin.descriptor.build_url(parsed_id))


def serve(
    host: Annotated[Optional[str], typer.Option(help="Adresse d'ecoute")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port d'ecoute")] = None,
) -> None:
    """Lance la passerelle backend."""
    import uvicorn

    container = Container()
    settings = container.service_config()
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(log_level=settings.log_level, log_file=settings.log_file)
    app = container.web_app(settings=settings, scrapers=load_scrapers())

    typer.echo(f"Demarrage de la passerelle sur {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


def _metadata_table(metadata: CatalogMetadata) -> Table:
    table = Table(show_header=False, title=metadata.title)
    table.add_column("Champ", style="bold")
    table.add_column("Valeur")

    rows = [
        ("ID", metadata.id),
        ("Titre original", metadata.original_title),
        ("Annee", metadata.year),
        ("Note", metadata.rating),
        ("Sortie", metadata.release_date.isoformat() if metadata.release_date else None),
        ("Studios", ", ".join(metadata.studios)),
        ("Genres", ", ".join(metadata.genres)),
        ("Tags", ", ".join(metadata.tags)),
        ("Series", ", ".join(metadata.series)),
        ("Image", metadata.primary),
        ("Description", metadata.description),
    ]
    for label, value in rows:
        if value not in (None, ""):
            table.add_row(label, str(value))
    return table
