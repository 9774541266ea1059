"""Recover CSFD identifiers from ``/film/{id}-{slug}/...`` paths."""

from __future__ import annotations

from urllib.parse import urlsplit

ENTITY_SEGMENT = "film"


def extract_id(url: str) -> int | None:
    """Return the show id of a film path.

    >>> extract_id("/film/12345-breaking-bad/prehled/")
    12345
    >>> extract_id("/film/0-test/") is None
    True
    """
    return _id_after_marker(url, skip=0)


def extract_nested_id(url: str) -> int | None:
    """Return the id one segment deeper, e.g. the season of a show.

    >>> extract_nested_id("/film/12345-breaking-bad/456-season-1/")
    456
    """
    return _id_after_marker(url, skip=1)


def parse_id_segment(segment: str) -> int | None:
    prefix = segment.split("-", 1)[0]
    if not prefix.isascii() or not prefix.isdigit():
        return None
    value = int(prefix)
    return value if value > 0 else None


def _id_after_marker(url: str, *, skip: int) -> int | None:
    if not url:
        return None
    path = urlsplit(url).path if "://" in url else url.split("?", 1)[0]
    segments = path.split("/")
    try:
        marker = segments.index(ENTITY_SEGMENT)
    except ValueError:
        return None
    position = marker + 1 + skip
    if position >= len(segments):
        return None
    return parse_id_segment(segments[position])


__all__ = ["extract_id", "extract_nested_id", "parse_id_segment"]
