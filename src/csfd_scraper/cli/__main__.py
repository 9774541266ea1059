from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from pydantic import BaseModel

from csfd_scraper import __version__
from csfd_scraper.clients.csfd import CsfdClient
from csfd_scraper.config import Settings, SettingsError, load_settings
from csfd_scraper.errors import CsfdError
from csfd_scraper.models import Episode, Page, SearchHit, ShowDetail
from csfd_scraper.services import CsfdScraper

T = TypeVar("T")

app = typer.Typer(
    add_completion=False,
    help="Search ČSFD.cz for TV series and list their seasons and episodes.",
)


@app.callback()
def _cli_entry(ctx: typer.Context) -> None:
    """Entrypoint for the csfd-scraper CLI."""
    ctx.obj = {} if ctx.obj is None else ctx.obj


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


@app.command()
def search(
    query: str = typer.Argument(..., help="Series name to search for."),
    page: int = typer.Option(1, min=1, help="Result page to fetch."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a listing."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """Search series by name."""
    if debug:
        _setup_logging(logging.DEBUG)

    result = _run(lambda scraper: scraper.search_page(query, page))
    if as_json:
        _echo_json(result)
        return
    _render_search_results(result)


@app.command()
def show(
    show_id: int = typer.Argument(..., help="ČSFD id of the series."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a listing."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """Show series metadata and its seasons."""
    if debug:
        _setup_logging(logging.DEBUG)

    detail = _run(lambda scraper: scraper.get_show(show_id))
    if as_json:
        _echo_json(detail)
        return
    _render_show(detail)


@app.command()
def episodes(
    show_id: int = typer.Argument(..., help="ČSFD id of the series."),
    season: int | None = typer.Option(None, "--season", help="Limit to one season (season id)."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a listing."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """List the episodes of a series or of one of its seasons."""
    if debug:
        _setup_logging(logging.DEBUG)

    if season is None:
        items = _run(lambda scraper: scraper.get_episodes(show_id))
    else:
        items = _run(lambda scraper: scraper.get_season_episodes(show_id, season))

    if as_json:
        typer.echo(json.dumps([episode.model_dump(mode="json") for episode in items], ensure_ascii=False, indent=2))
        return
    _render_episodes(items)


def _run(operation: Callable[[CsfdScraper], Awaitable[T]]) -> T:
    settings = _safe_load_settings()
    if settings is None:
        raise typer.Exit(code=1)

    async def _call() -> T:
        async with CsfdScraper(CsfdClient(**settings.client_options())) as scraper:
            return await operation(scraper)

    try:
        return asyncio.run(_call())
    except CsfdError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc


def _safe_load_settings() -> Settings | None:
    try:
        return load_settings()
    except SettingsError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        return None


def _setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for debug mode."""
    logging.basicConfig(
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        level=level,
        force=True,
    )


def _echo_json(model: BaseModel) -> None:
    typer.echo(model.model_dump_json(indent=2))


def _render_search_results(result: Page[SearchHit]) -> None:
    if not result.items:
        typer.secho("No series found.", fg=typer.colors.YELLOW)
        return

    typer.secho(f"Page {result.current_page}", fg=typer.colors.CYAN)
    for idx, hit in enumerate(result.items, start=1):
        year = f" ({hit.year})" if hit.year else ""
        typer.echo(f"{idx}. {hit.name}{year} [{hit.kind.value}] id={hit.id}")
        if hit.original_name:
            typer.echo(f"   original: {hit.original_name}")
    if result.has_next_page:
        typer.echo(f"More results: --page {result.current_page + 1}")


def _render_show(detail: ShowDetail) -> None:
    typer.secho(detail.name, fg=typer.colors.CYAN)
    if detail.original_name:
        typer.echo(f"Original name: {detail.original_name}")
    if detail.year_range:
        typer.echo(f"Years: {detail.year_range}")
    if detail.genres:
        typer.echo(f"Genres: {', '.join(detail.genres)}")
    if detail.countries:
        typer.echo(f"Countries: {', '.join(detail.countries)}")

    typer.echo(f"Seasons ({len(detail.seasons)}):")
    for season in detail.seasons:
        year = f" ({season.year})" if season.year else ""
        typer.echo(f"  • {season.name}{year} - {season.episode_count} episodes (id={season.id})")


def _render_episodes(items: list[Episode]) -> None:
    if not items:
        typer.secho("No episodes found.", fg=typer.colors.YELLOW)
        return

    for episode in items:
        rating = f"{episode.rating:.0f}%" if episode.rating is not None else "—"
        typer.echo(f"  {episode.code} {episode.name} [{rating}]")
    typer.echo(f"Total: {len(items)} episodes")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
