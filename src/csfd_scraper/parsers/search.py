"""Search listing pages (``/hledat/?q=...``)."""

from __future__ import annotations

import logging
import re

from bs4.element import Tag

from csfd_scraper.models import Page, SearchHit
from csfd_scraper.parsers.cascade import element_text, first_match, make_soup, non_empty_text
from csfd_scraper.parsers.ids import extract_id
from csfd_scraper.parsers.patterns import classify_kind, extract_year

logger = logging.getLogger(__name__)

# Current poster layout first, then the legacy film list.
RESULT_CONTAINER_SELECTOR = "article.article-poster-50, .ui-film-list .film-item"

TITLE_LINK_SELECTORS = (
    "a.film-title-name",
    "a.name",
    "h3 a",
    ".article-header a",
)
ORIGINAL_NAME_SELECTORS = (
    ".film-title-info .info",
    ".origin-name",
    ".original-name",
    ".info span:first-child",
)
YEAR_SELECTORS = (
    ".film-title-info .info",
    ".year",
    ".info-year",
    "span.year",
)
NEXT_PAGE_SELECTORS = (
    ".pagination .next:not(.disabled)",
    ".paging a.next:not(.disabled)",
    "a[rel='next']:not(.disabled)",
    ".pagination-next:not(.disabled)",
)
CURRENT_PAGE_SELECTORS = (
    ".pagination .active",
    ".paging .current",
    ".pagination-current",
)

_YEAR_ONLY = re.compile(r"\(?\s*\d{4}(?:\s*[-–]\s*\d{4})?\s*\)?")


def parse_search_results(html: str, page: int = 1) -> Page[SearchHit]:
    """Parse a search listing into hits plus pagination state.

    ``page`` is returned as ``current_page`` unless the pagination widget
    names the active page itself.
    """
    soup = make_soup(html)

    items: list[SearchHit] = []
    for container in soup.select(RESULT_CONTAINER_SELECTOR):
        hit = _parse_hit(container)
        if hit is not None:
            items.append(hit)

    has_next_page = detect_next_page(soup)
    current_page = extract_current_page(soup) or page
    logger.debug(f"[PARSER] search: {len(items)} hits, page={current_page}, next={has_next_page}")

    return Page[SearchHit](items=items, current_page=current_page, has_next_page=has_next_page)


def detect_next_page(soup: Tag) -> bool:
    return any(soup.select_one(selector) is not None for selector in NEXT_PAGE_SELECTORS)


def extract_current_page(soup: Tag) -> int | None:
    return first_match(soup, CURRENT_PAGE_SELECTORS, _page_number)


def _parse_hit(container: Tag) -> SearchHit | None:
    link = first_match(container, TITLE_LINK_SELECTORS, lambda element: element)
    if link is None:
        return None

    url = link.get("href")
    if not isinstance(url, str):
        return None
    csfd_id = extract_id(url)
    if csfd_id is None:
        return None

    name = element_text(link)
    if not name:
        return None

    full_text = container.get_text()
    year = first_match(container, YEAR_SELECTORS, lambda element: extract_year(element.get_text()))

    return SearchHit(
        name=name,
        original_name=first_match(container, ORIGINAL_NAME_SELECTORS, _original_name),
        year=year or extract_year(full_text),
        kind=classify_kind(full_text),
        url=url,
        id=csfd_id,
    )


def _original_name(element: Tag) -> str | None:
    text = non_empty_text(element)
    if not text or text == "-":
        return None
    # Year annotations share the info span with the original title.
    if _YEAR_ONLY.fullmatch(text):
        return None
    return text


def _page_number(element: Tag) -> int | None:
    text = element_text(element)
    if text.isascii() and text.isdigit() and int(text) > 0:
        return int(text)
    return None


__all__ = ["detect_next_page", "extract_current_page", "parse_search_results"]
