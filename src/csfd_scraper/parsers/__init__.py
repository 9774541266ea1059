"""HTML extractors for ČSFD.cz page families."""

from csfd_scraper.parsers.episodes import parse_episodes
from csfd_scraper.parsers.ids import extract_id, extract_nested_id
from csfd_scraper.parsers.patterns import clean_episode_name, parse_episode_code, parse_rating
from csfd_scraper.parsers.search import parse_search_results
from csfd_scraper.parsers.show import parse_seasons, parse_show_detail

__all__ = [
    "clean_episode_name",
    "extract_id",
    "extract_nested_id",
    "parse_episode_code",
    "parse_episodes",
    "parse_rating",
    "parse_search_results",
    "parse_seasons",
    "parse_show_detail",
]
