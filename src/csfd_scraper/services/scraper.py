from __future__ import annotations

import logging
from urllib.parse import quote

from csfd_scraper.clients.csfd import CsfdClient
from csfd_scraper.errors import InvalidIdError, InvalidInputError
from csfd_scraper.models import Episode, Page, SearchHit, ShowDetail
from csfd_scraper.parsers import parse_episodes, parse_search_results, parse_show_detail

logger = logging.getLogger(__name__)

SEARCH_PATH = "/hledat/"
SHOW_OVERVIEW_PATH = "/film/{show_id}/prehled/"
SHOW_EPISODES_PATH = "/film/{show_id}/epizody/"
SEASON_EPISODES_PATH = "/film/{show_id}/{season_id}/epizody/"


class CsfdScraper:
    """Search shows and read show, season and episode data from ČSFD.cz.

    Inputs are validated before any request is made. Retries live in the
    client; nothing is cached and every call is independent.
    """

    def __init__(self, client: CsfdClient | None = None) -> None:
        self._client = client or CsfdClient()

    @property
    def client(self) -> CsfdClient:
        return self._client

    async def search(self, query: str) -> Page[SearchHit]:
        return await self.search_page(query, 1)

    async def search_page(self, query: str, page: int) -> Page[SearchHit]:
        trimmed = query.strip()
        if not trimmed:
            raise InvalidInputError("Search query cannot be empty")
        if page < 1:
            raise InvalidInputError(f"Page must be at least 1, got {page}")

        path = build_search_path(trimmed, page)
        logger.info(f"[SCRAPER] Searching '{trimmed}' (page {page})")
        html = await self._client.fetch(path)
        result = parse_search_results(html, page)
        # The page number detected in the markup is informational only.
        return result.model_copy(update={"current_page": page})

    async def get_show(self, show_id: int) -> ShowDetail:
        _require_id(show_id)
        html = await self._client.fetch(SHOW_OVERVIEW_PATH.format(show_id=show_id))
        return parse_show_detail(html, show_id)

    async def get_episodes(self, show_id: int) -> list[Episode]:
        _require_id(show_id)
        html = await self._client.fetch(SHOW_EPISODES_PATH.format(show_id=show_id))
        return parse_episodes(html)

    async def get_season_episodes(self, show_id: int, season_id: int) -> list[Episode]:
        _require_id(show_id)
        _require_id(season_id)
        html = await self._client.fetch(SEASON_EPISODES_PATH.format(show_id=show_id, season_id=season_id))
        return parse_episodes(html)

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> CsfdScraper:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()


def build_search_path(query: str, page: int = 1) -> str:
    path = f"{SEARCH_PATH}?q={quote(query, safe='')}"
    if page > 1:
        path = f"{path}&page={page}"
    return path


def _require_id(csfd_id: int) -> None:
    if csfd_id <= 0:
        raise InvalidIdError(csfd_id)


__all__ = ["CsfdScraper", "build_search_path"]
