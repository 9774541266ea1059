"""Show overview pages (``/film/{id}/prehled/``) and their season lists."""

from __future__ import annotations

import logging

from bs4.element import Tag

from csfd_scraper.errors import ElementNotFoundError
from csfd_scraper.models import Season, ShowDetail
from csfd_scraper.parsers.cascade import (
    collect_texts,
    element_text,
    first_match,
    make_soup,
    non_empty_text,
    run_cascade,
)
from csfd_scraper.parsers.ids import extract_id, extract_nested_id
from csfd_scraper.parsers.patterns import (
    clean_season_name,
    extract_episode_count,
    extract_episode_count_from_name,
    extract_season_year,
    extract_year_range,
    normalize_whitespace,
)

logger = logging.getLogger(__name__)

NAME_SELECTORS = (
    "h1.film-header-name",
    ".film-header h1",
    "h1[itemprop='name']",
    ".movie-title h1",
    "h1",
)
NAME_LIST_FIRST_ENTRY = "ul.film-names li:first-child"
MORE_MARKER = "(více)"
ORIGINAL_NAME_SELECTORS = (
    ".film-header-name .film-header-origin-name",
    ".origin-name",
    "[itemprop='alternateName']",
)
YEAR_RANGE_SELECTORS = (
    ".film-header-origin .origin span",
    ".origin .year",
    "[itemprop='datePublished']",
    ".film-info .origin",
)
GENRE_SELECTORS = (
    ".film-header-origin .genre a",
    ".genres a",
    "[itemprop='genre']",
    ".film-info .genre a",
)
COUNTRY_SELECTORS = (
    ".film-header-origin .origin a",
    ".origin .country a",
    "[itemprop='countryOfOrigin']",
    ".film-info .origin a",
)
ORIGIN_BLOCK_SELECTOR = "div.origin"

SEASON_BLOCK_SELECTOR = "h3.film-title"
SEASON_LINK_SELECTOR = "a.film-title-name"
SEASON_INFO_SELECTOR = ".film-title-info"
LEGACY_SEASON_CONTAINER_SELECTORS = (
    ".film-episodes-list",
    ".seasons-list",
    ".series-seasons",
    ".box-content ul",
)
LEGACY_SEASON_ITEM_SELECTORS = (
    "li a",
    ".season-item a",
    "a.season-link",
)
SEASON_LINK_FALLBACK_SELECTOR = "a[href*='/film/'][href*='serie']"


def parse_show_detail(html: str, show_id: int) -> ShowDetail:
    """Parse an overview page.

    Only the name is required; every other field is left empty when its
    selectors find nothing.

    Raises:
        ElementNotFoundError: no name could be located
    """
    soup = make_soup(html)

    name = extract_name(soup)
    if name is None:
        raise ElementNotFoundError("show name")

    return ShowDetail(
        id=show_id,
        name=name,
        original_name=extract_original_name(soup),
        year_range=extract_show_year_range(soup),
        genres=extract_genres(soup),
        countries=extract_countries(soup),
        seasons=parse_seasons(soup),
    )


def extract_name(soup: Tag) -> str | None:
    return first_match(soup, NAME_SELECTORS, non_empty_text)


def extract_original_name(soup: Tag) -> str | None:
    return run_cascade((_original_name_from_name_list, _original_name_from_alternates), soup, label="original name")


def extract_show_year_range(soup: Tag) -> str | None:
    return first_match(
        soup,
        YEAR_RANGE_SELECTORS,
        lambda element: extract_year_range(element.get_text()),
        every_element=True,
    )


def extract_genres(soup: Tag) -> list[str]:
    return collect_texts(soup, GENRE_SELECTORS)


def extract_countries(soup: Tag) -> list[str]:
    return run_cascade((_countries_from_links, _country_from_origin_text), soup, label="countries") or []


def parse_seasons(soup: Tag) -> list[Season]:
    """Season list of an overview page.

    Current title blocks win; the legacy list containers and then any
    season-looking link are only consulted when nothing earlier matched.
    """
    return (
        run_cascade(
            (_seasons_from_title_blocks, _seasons_from_legacy_lists, _seasons_from_links),
            soup,
            label="seasons",
        )
        or []
    )


def _original_name_from_name_list(soup: Tag) -> str | None:
    entry = soup.select_one(NAME_LIST_FIRST_ENTRY)
    if entry is None:
        return None
    lines = [line.strip() for line in entry.get_text("\n").splitlines()]
    kept = [line for line in lines if line and MORE_MARKER not in line]
    return normalize_whitespace(" ".join(kept)) or None


def _original_name_from_alternates(soup: Tag) -> str | None:
    return first_match(soup, ORIGINAL_NAME_SELECTORS, non_empty_text)


def _countries_from_links(soup: Tag) -> list[str]:
    return collect_texts(soup, COUNTRY_SELECTORS)


def _country_from_origin_text(soup: Tag) -> list[str]:
    # Origin block reads like "USA, 2007–2019, 279 epizod".
    origin = soup.select_one(ORIGIN_BLOCK_SELECTOR)
    if origin is None:
        return []
    country = origin.get_text().split(",", 1)[0].strip()
    if not country or country.isdigit():
        return []
    return [country]


def _seasons_from_title_blocks(soup: Tag) -> list[Season]:
    seasons: list[Season] = []
    for block in soup.select(SEASON_BLOCK_SELECTOR):
        season = _season_from_title_block(block)
        if season is not None:
            _append_unique(seasons, season)
    return seasons


def _seasons_from_legacy_lists(soup: Tag) -> list[Season]:
    seasons: list[Season] = []
    for container_selector in LEGACY_SEASON_CONTAINER_SELECTORS:
        for container in soup.select(container_selector):
            for item_selector in LEGACY_SEASON_ITEM_SELECTORS:
                for item in container.select(item_selector):
                    season = _season_from_link(item)
                    if season is not None:
                        _append_unique(seasons, season)
                if seasons:
                    return seasons
    return seasons


def _seasons_from_links(soup: Tag) -> list[Season]:
    seasons: list[Season] = []
    for link in soup.select(SEASON_LINK_FALLBACK_SELECTOR):
        season = _season_from_link(link)
        if season is not None:
            _append_unique(seasons, season)
    return seasons


def _season_from_title_block(block: Tag) -> Season | None:
    link = block.select_one(SEASON_LINK_SELECTOR)
    if link is None:
        return None
    url = link.get("href")
    if not isinstance(url, str):
        return None
    season_id = extract_nested_id(url)
    if season_id is None:
        return None
    name = element_text(link)
    if not name:
        return None

    info = block.select_one(SEASON_INFO_SELECTOR)
    info_text = info.get_text() if info is not None else ""

    return Season(
        id=season_id,
        name=name,
        year=extract_season_year(info_text),
        episode_count=extract_episode_count(info_text) or 0,
        url=url,
    )


def _season_from_link(link: Tag) -> Season | None:
    url = link.get("href")
    if not isinstance(url, str):
        return None
    season_id = extract_nested_id(url) or extract_id(url)
    if season_id is None:
        return None
    name = element_text(link)
    if not name:
        return None

    return Season(
        id=season_id,
        name=clean_season_name(name) or name,
        year=extract_season_year(name),
        episode_count=extract_episode_count_from_name(name) or 0,
        url=url,
    )


def _append_unique(seasons: list[Season], season: Season) -> None:
    if all(existing.id != season.id for existing in seasons):
        seasons.append(season)


__all__ = [
    "extract_countries",
    "extract_genres",
    "extract_name",
    "extract_original_name",
    "extract_show_year_range",
    "parse_seasons",
    "parse_show_detail",
]
