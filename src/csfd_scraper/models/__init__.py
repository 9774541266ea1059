from .show import Episode, Page, SearchHit, Season, ShowDetail, ShowKind, format_episode_code

__all__ = [
    "Episode",
    "Page",
    "SearchHit",
    "Season",
    "ShowDetail",
    "ShowKind",
    "format_episode_code",
]
