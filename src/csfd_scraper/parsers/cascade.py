"""Fallback chains: ordered strategies where the first non-empty result wins."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTML_PARSER = "lxml"


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def run_cascade(strategies: Sequence[Callable[..., T]], *args: Any, label: str = "") -> T | None:
    """Call each strategy in order and return the first truthy result.

    Later strategies are never evaluated once one has produced something, and
    results from different strategies are never merged.
    """
    for strategy in strategies:
        result = strategy(*args)
        if result:
            logger.debug(f"[PARSER] {label or 'cascade'}: {strategy.__name__} matched")
            return result
    logger.debug(f"[PARSER] {label or 'cascade'}: no strategy matched")
    return None


def element_text(element: Tag) -> str:
    return element.get_text().strip()


def first_match(
    node: Tag,
    selectors: Iterable[str],
    extract: Callable[[Tag], T | None],
    *,
    every_element: bool = False,
) -> T | None:
    """Try ``selectors`` in order, returning the first non-None value of ``extract``.

    Only the first element of each selector is considered unless
    ``every_element`` is set.
    """
    for selector in selectors:
        if every_element:
            candidates = node.select(selector)
        else:
            found = node.select_one(selector)
            candidates = [found] if found is not None else []
        for element in candidates:
            value = extract(element)
            if value is not None:
                return value
    return None


def collect_texts(node: Tag, selectors: Iterable[str]) -> list[str]:
    """All distinct texts matched by the first selector that yields any, in page order."""
    for selector in selectors:
        texts: list[str] = []
        for element in node.select(selector):
            text = element_text(element)
            if text and text not in texts:
                texts.append(text)
        if texts:
            return texts
    return []


def non_empty_text(element: Tag) -> str | None:
    return element_text(element) or None


__all__ = [
    "collect_texts",
    "element_text",
    "first_match",
    "make_soup",
    "non_empty_text",
    "run_cascade",
]
