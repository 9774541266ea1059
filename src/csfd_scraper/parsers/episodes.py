"""Episode listing pages, for a whole show or a single season."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4.element import Tag

from csfd_scraper.models import Episode
from csfd_scraper.parsers.cascade import element_text, first_match, make_soup, run_cascade
from csfd_scraper.parsers.ids import extract_id, extract_nested_id
from csfd_scraper.parsers.patterns import (
    clean_episode_name,
    extract_season_number,
    mentions_season,
    parse_episode_code,
    parse_episode_number_from_name,
    parse_rating,
)

logger = logging.getLogger(__name__)

EPISODE_BLOCK_SELECTOR = "h3.film-title"
EPISODE_LINK_SELECTOR = "a.film-title-name"
EPISODE_INFO_SELECTOR = ".film-title-info"

EPISODE_TABLE_SELECTORS = (
    ".film-episodes table tbody",
    ".episodes-list",
    "table.episodes tbody",
    ".box-content table tbody",
)
EPISODE_ROW_SELECTOR = "tr, li"
SEASON_HEADER_CELL_SELECTOR = "th[colspan], td.season-header, .season-title"
FILM_LINK_SELECTOR = "a[href*='/film/']"

EPISODE_ELEMENT_SELECTOR = ".episode-item, .film-episodes a[href*='/film/']"

ROW_RATING_SELECTORS = (".rating", ".film-rating", "td:last-child", ".stars")
ELEMENT_RATING_SELECTORS = (".rating", ".film-rating", ".stars")

DEFAULT_SEASON = 1


def parse_episodes(html: str) -> list[Episode]:
    """Parse an episode listing in page order.

    Tries the current title blocks, then episode tables (tracking season
    header rows), then loose episode links. Episodes are not de-duplicated.
    """
    soup = make_soup(html)
    episodes = run_cascade(
        (_episodes_from_title_blocks, _episodes_from_tables, _episodes_from_elements),
        soup,
        label="episodes",
    )
    return episodes or []


def season_from_header_row(row: Tag) -> int | None:
    """Season number announced by a header row, or None for a data row."""
    text = row.get_text()
    if row.select_one(SEASON_HEADER_CELL_SELECTOR) is not None:
        return extract_season_number(text)
    # An episode row mentioning a season ("S01E05 Season finale") is not a header.
    if mentions_season(text) and parse_episode_code(text) is None:
        return extract_season_number(text)
    return None


def extract_rating(node: Tag, selectors: Iterable[str]) -> float | None:
    rating = first_match(node, selectors, lambda element: parse_rating(element.get_text()))
    if rating is None:
        rating = parse_rating(node.get_text())
    return rating


def _episodes_from_title_blocks(soup: Tag) -> list[Episode]:
    episodes: list[Episode] = []
    for block in soup.select(EPISODE_BLOCK_SELECTOR):
        episode = _episode_from_title_block(block)
        if episode is not None:
            episodes.append(episode)
    return episodes


def _episodes_from_tables(soup: Tag) -> list[Episode]:
    episodes: list[Episode] = []
    for container_selector in EPISODE_TABLE_SELECTORS:
        for container in soup.select(container_selector):
            current_season = DEFAULT_SEASON
            for row in container.select(EPISODE_ROW_SELECTOR):
                header_season = season_from_header_row(row)
                if header_season is not None:
                    current_season = header_season
                    continue
                episode = _episode_from_row(row, current_season)
                if episode is not None:
                    episodes.append(episode)
            if episodes:
                return episodes
    return episodes


def _episodes_from_elements(soup: Tag) -> list[Episode]:
    episodes: list[Episode] = []
    current_season = DEFAULT_SEASON
    for element in soup.select(EPISODE_ELEMENT_SELECTOR):
        episode = _episode_from_element(element, current_season)
        if episode is not None:
            current_season = episode.season_number
            episodes.append(episode)
    return episodes


def _episode_from_title_block(block: Tag) -> Episode | None:
    link = block.select_one(EPISODE_LINK_SELECTOR)
    if link is None:
        return None
    url = _href(link)
    if url is None:
        return None
    episode_id = extract_nested_id(url)
    if episode_id is None:
        return None
    name = element_text(link)
    if not name:
        return None

    info = block.select_one(EPISODE_INFO_SELECTOR)
    info_text = info.get_text() if info is not None else ""
    season_number, episode_number = parse_episode_code(info_text) or (DEFAULT_SEASON, 1)

    return _build_episode(
        episode_id=episode_id,
        name=name,
        season_number=season_number,
        episode_number=episode_number,
        rating=extract_rating(block, ELEMENT_RATING_SELECTORS),
        url=url,
    )


def _episode_from_row(row: Tag, default_season: int) -> Episode | None:
    link = row.select_one(FILM_LINK_SELECTOR)
    if link is None:
        return None
    url = _href(link)
    if url is None:
        return None
    episode_id = _episode_id(url)
    if episode_id is None:
        return None
    name = element_text(link)
    if not name:
        return None

    code = parse_episode_code(row.get_text()) or parse_episode_code(name)
    season_number, episode_number = code or (default_season, 0)
    if episode_number == 0:
        episode_number = parse_episode_number_from_name(name) or 1

    return _build_episode(
        episode_id=episode_id,
        name=name,
        season_number=season_number,
        episode_number=episode_number,
        rating=extract_rating(row, ROW_RATING_SELECTORS),
        url=url,
    )


def _episode_from_element(element: Tag, default_season: int) -> Episode | None:
    link = element if element.name == "a" else element.select_one(FILM_LINK_SELECTOR)
    if link is None:
        return None
    url = _href(link)
    if url is None:
        return None
    episode_id = _episode_id(url)
    if episode_id is None:
        return None
    text = element_text(element)
    name = element_text(link) or text
    if not name:
        return None

    code = parse_episode_code(text) or parse_episode_code(name)
    if code is None:
        code = (default_season, parse_episode_number_from_name(name) or 1)
    season_number, episode_number = code

    return _build_episode(
        episode_id=episode_id,
        name=name,
        season_number=season_number,
        episode_number=episode_number,
        rating=extract_rating(element, ELEMENT_RATING_SELECTORS),
        url=url,
    )


def _build_episode(
    *,
    episode_id: int,
    name: str,
    season_number: int,
    episode_number: int,
    rating: float | None,
    url: str,
) -> Episode:
    return Episode(
        id=episode_id,
        name=clean_episode_name(name) or name,
        season_number=season_number,
        episode_number=episode_number,
        rating=rating,
        url=url,
    )


def _episode_id(url: str) -> int | None:
    # Episode links nest under the show (/film/{show}/{episode}/); bare links carry their own id.
    return extract_nested_id(url) or extract_id(url)


def _href(link: Tag) -> str | None:
    href = link.get("href")
    return href if isinstance(href, str) and href else None


__all__ = ["extract_rating", "parse_episodes", "season_from_header_row"]
