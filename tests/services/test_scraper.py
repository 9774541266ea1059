"""Tests for the CsfdScraper orchestrator."""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from csfd_scraper.clients.csfd import CSFD_BASE_URL, CsfdClient
from csfd_scraper.errors import (
    ElementNotFoundError,
    InvalidIdError,
    InvalidInputError,
    NotFoundError,
    RateLimitedError,
)
from csfd_scraper.services.scraper import CsfdScraper, build_search_path
from tests.fixtures.csfd_pages import (
    EMPTY_PAGE,
    EPISODES_PAGE,
    EPISODES_TABLE_PAGE,
    SEARCH_RESULTS_PAGE,
    SHOW_DETAIL_PAGE,
)


@pytest.fixture
def client():
    """Mock CSFD client."""
    return AsyncMock(spec=CsfdClient)


@pytest.fixture
def scraper(client):
    return CsfdScraper(client)


class TestInputValidation:
    """Invalid input is rejected before anything is fetched."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    async def test_blank_query(self, scraper, client, query):
        with pytest.raises(InvalidInputError) as exc_info:
            await scraper.search(query)

        assert str(exc_info.value).startswith("Invalid input:")
        client.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_page_below_one(self, scraper, client):
        with pytest.raises(InvalidInputError):
            await scraper.search_page("breaking bad", 0)

        client.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_zero_show_id(self, scraper, client):
        with pytest.raises(InvalidIdError) as exc_info:
            await scraper.get_show(0)

        assert exc_info.value.csfd_id == 0
        assert str(exc_info.value) == "Invalid CSFD ID: 0"
        client.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_zero_id_for_episodes(self, scraper, client):
        with pytest.raises(InvalidIdError):
            await scraper.get_episodes(0)

        client.fetch.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("show_id", "season_id"), [(0, 5), (5, 0), (-3, 5)])
    async def test_zero_ids_for_season_episodes(self, scraper, client, show_id, season_id):
        with pytest.raises(InvalidIdError) as exc_info:
            await scraper.get_season_episodes(show_id, season_id)

        assert exc_info.value.csfd_id == min(show_id, season_id)
        client.fetch.assert_not_called()


class TestSearch:
    """Test search and search_page."""

    def test_build_search_path(self):
        """Test the query is percent-encoded and page 1 carries no page parameter."""
        assert build_search_path("breaking bad") == "/hledat/?q=breaking%20bad"
        assert build_search_path("Perníkový táta", 1) == "/hledat/?q=Pern%C3%ADkov%C3%BD%20t%C3%A1ta"
        assert build_search_path("a&b", 3) == "/hledat/?q=a%26b&page=3"

    @pytest.mark.asyncio
    async def test_search_first_page(self, scraper, client):
        """Test search fetches page one of the trimmed query."""
        client.fetch.return_value = SEARCH_RESULTS_PAGE

        result = await scraper.search("  breaking bad ")

        client.fetch.assert_awaited_once_with("/hledat/?q=breaking%20bad")
        assert len(result.items) == 3
        assert result.current_page == 1
        assert result.has_next_page is True

    @pytest.mark.asyncio
    async def test_search_page_forces_requested_page(self, scraper, client):
        """Test the requested page overrides whatever the markup says."""
        client.fetch.return_value = SEARCH_RESULTS_PAGE

        result = await scraper.search_page("breaking bad", 2)

        client.fetch.assert_awaited_once_with("/hledat/?q=breaking%20bad&page=2")
        assert result.current_page == 2

    @pytest.mark.asyncio
    async def test_search_without_results(self, scraper, client):
        client.fetch.return_value = EMPTY_PAGE

        result = await scraper.search("nonexistent")

        assert result.items == []
        assert result.has_next_page is False


class TestShowAndEpisodes:
    """Test the show and episode operations."""

    @pytest.mark.asyncio
    async def test_get_show(self, scraper, client):
        client.fetch.return_value = SHOW_DETAIL_PAGE

        show = await scraper.get_show(69544)

        client.fetch.assert_awaited_once_with("/film/69544/prehled/")
        assert show.id == 69544
        assert show.name == "Perníkový táta"
        assert len(show.seasons) == 3

    @pytest.mark.asyncio
    async def test_get_show_without_name(self, scraper, client):
        client.fetch.return_value = EMPTY_PAGE

        with pytest.raises(ElementNotFoundError):
            await scraper.get_show(69544)

    @pytest.mark.asyncio
    async def test_get_episodes(self, scraper, client):
        client.fetch.return_value = EPISODES_PAGE

        episodes = await scraper.get_episodes(69544)

        client.fetch.assert_awaited_once_with("/film/69544/epizody/")
        assert [episode.code for episode in episodes][:2] == ["S01E01", "S01E02"]

    @pytest.mark.asyncio
    async def test_get_season_episodes(self, scraper, client):
        client.fetch.return_value = EPISODES_TABLE_PAGE

        episodes = await scraper.get_season_episodes(100, 358138)

        client.fetch.assert_awaited_once_with("/film/100/358138/epizody/")
        assert len(episodes) == 3

    @pytest.mark.asyncio
    async def test_fetch_errors_propagate_unchanged(self, scraper, client):
        """Test client errors reach the caller as-is."""
        error = NotFoundError("https://www.csfd.cz/film/1/prehled/")
        client.fetch.side_effect = error

        with pytest.raises(NotFoundError) as exc_info:
            await scraper.get_show(1)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_close_closes_client(self, client):
        async with CsfdScraper(client):
            pass

        client.close.assert_awaited_once()


class TestScraperOverHttp:
    """End-to-end through a real CsfdClient against mocked HTTP."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_over_http(self):
        respx.get(f"{CSFD_BASE_URL}/hledat/", params={"q": "breaking bad"}).mock(
            return_value=httpx.Response(200, text=SEARCH_RESULTS_PAGE)
        )

        async with CsfdScraper(CsfdClient(requests_per_second=1000.0, base_delay=0.0)) as scraper:
            result = await scraper.search("breaking bad")

        assert [hit.name for hit in result.items][0] == "Perníkový táta"

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_error_surfaces(self):
        route = respx.get(f"{CSFD_BASE_URL}/film/69544/epizody/").mock(return_value=httpx.Response(429))

        async with CsfdScraper(
            CsfdClient(requests_per_second=1000.0, max_retries=1, base_delay=0.0)
        ) as scraper:
            with pytest.raises(RateLimitedError):
                await scraper.get_episodes(69544)

        assert route.call_count == 2
