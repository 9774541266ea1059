"""Regex heuristics used by the page parsers.

Each helper is a pure function over a text fragment so it can be tested
without any HTML around it. The keyword lists follow the Czech wording of
ČSFD.cz and are best-effort: the site may rephrase at any time.
"""

from __future__ import annotations

import re

from csfd_scraper.models import ShowKind

EPISODE_CODE_PATTERN = re.compile(r"S(\d{1,2})E(\d{1,2})", re.IGNORECASE)
EPISODE_CODE_ALT_PATTERN = re.compile(r"(\d{1,2})x(\d{1,2})")
EPISODE_ORDINAL_PATTERN = re.compile(r"^(\d{1,2})\.\s")
EPISODE_WORD_PATTERN = re.compile(r"(?:episode|epizoda|díl)\s*(\d{1,2})", re.IGNORECASE)
EPISODE_NAME_PREFIX_PATTERN = re.compile(r"^(?:S\d{1,2}E\d{1,2}\s*[-:]\s*|\d{1,2}\.\s*)")

RATING_PATTERN = re.compile(r"(?<![\d.])(\d{1,3}(?:\.\d+)?)\s*%")

YEAR_IN_PARENS_PATTERN = re.compile(r"\((\d{4}(?:-\d{4})?)\)")
BARE_YEAR_PATTERN = re.compile(r"\b((?:19|20)\d{2})\b")
YEAR_RANGE_PATTERN = re.compile(r"(\d{4}(?:\s*[-–]\s*(?:\d{4}|(?=\s*(?:,|$))))?)")
SEASON_YEAR_PATTERN = re.compile(r"\((\d{4})\)")

EPISODE_COUNT_PATTERN = re.compile(r"(\d+)\s*epizod")
EPISODE_COUNT_IN_NAME_PATTERN = re.compile(r"\((\d{1,3})(?:\s*epizod[ay]?)?\)")
PARENTHESISED_PATTERN = re.compile(r"\s*\([^)]*\)\s*")

SEASON_NUMBER_PATTERN = re.compile(r"(?:série|season|řada|s)\s*(\d+)", re.IGNORECASE)
SEASON_HEADER_WORDS = ("série", "season", "řada")

MINI_SERIES_MARKERS = ("minisérie", "miniserie")
SEASON_MARKERS = ("série",)
SERIES_MARKERS = ("seriál",)


def parse_episode_code(text: str) -> tuple[int, int] | None:
    """Return ``(season, episode)`` from ``S01E05`` or ``1x05`` forms.

    >>> parse_episode_code("Episode S02E10 - Title")
    (2, 10)
    >>> parse_episode_code("no code here") is None
    True
    """
    for pattern in (EPISODE_CODE_PATTERN, EPISODE_CODE_ALT_PATTERN):
        match = pattern.search(text)
        if match:
            return int(match.group(1)), int(match.group(2))
    return None


def parse_episode_number_from_name(name: str) -> int | None:
    """Episode number from a leading ``N.`` ordinal or an ``Epizoda N`` phrase."""
    for pattern in (EPISODE_ORDINAL_PATTERN, EPISODE_WORD_PATTERN):
        match = pattern.search(name)
        if match:
            return int(match.group(1))
    return None


def parse_rating(text: str) -> float | None:
    """Percentage rating in ``[0, 100]``; anything outside counts as absent."""
    match = RATING_PATTERN.search(text)
    if not match:
        return None
    rating = float(match.group(1))
    if 0.0 <= rating <= 100.0:
        return rating
    return None


def clean_episode_name(name: str) -> str:
    """Strip a leading ``S01E01 - `` or ``1. `` prefix."""
    return EPISODE_NAME_PREFIX_PATTERN.sub("", name, count=1).strip()


def extract_year(text: str) -> str | None:
    """``(2020)`` / ``(2020-2023)`` first, otherwise a bare 19xx/20xx year."""
    match = YEAR_IN_PARENS_PATTERN.search(text)
    if match:
        return match.group(1)
    match = BARE_YEAR_PATTERN.search(text)
    if match:
        return match.group(1)
    return None


def extract_year_range(text: str) -> str | None:
    """Year or year range with the dash normalised, e.g. ``2007 – 2019`` → ``2007-2019``."""
    match = YEAR_RANGE_PATTERN.search(text)
    if not match:
        return None
    return re.sub(r"\s*[-–]\s*", "-", match.group(1).strip())


def extract_season_year(text: str) -> str | None:
    match = SEASON_YEAR_PATTERN.search(text)
    return match.group(1) if match else None


def extract_episode_count(info: str) -> int | None:
    """Count from an info line such as ``(2007) - 17 epizod``."""
    match = EPISODE_COUNT_PATTERN.search(info)
    return int(match.group(1)) if match else None


def extract_episode_count_from_name(name: str) -> int | None:
    """Count from a legacy season label such as ``Série 1 (10 epizod)`` or ``Série 1 (8)``."""
    match = EPISODE_COUNT_IN_NAME_PATTERN.search(name)
    return int(match.group(1)) if match else None


def clean_season_name(name: str) -> str:
    return PARENTHESISED_PATTERN.sub(" ", name).strip()


def extract_season_number(text: str) -> int | None:
    match = SEASON_NUMBER_PATTERN.search(text)
    return int(match.group(1)) if match else None


def mentions_season(text: str) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in SEASON_HEADER_WORDS)


def classify_kind(text: str) -> ShowKind:
    lowered = text.lower()
    if any(marker in lowered for marker in MINI_SERIES_MARKERS):
        return ShowKind.MINI_SERIES
    if any(marker in lowered for marker in SEASON_MARKERS) and not any(
        marker in lowered for marker in SERIES_MARKERS
    ):
        return ShowKind.SEASON
    return ShowKind.SERIES


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


__all__ = [
    "classify_kind",
    "clean_episode_name",
    "clean_season_name",
    "extract_episode_count",
    "extract_episode_count_from_name",
    "extract_season_number",
    "extract_season_year",
    "extract_year",
    "extract_year_range",
    "mentions_season",
    "normalize_whitespace",
    "parse_episode_code",
    "parse_episode_number_from_name",
    "parse_rating",
]
