"""Rate-limited scraper for TV series data on ČSFD.cz."""

from csfd_scraper.errors import CsfdError
from csfd_scraper.models import Episode, Page, SearchHit, Season, ShowDetail, ShowKind
from csfd_scraper.services import CsfdScraper

__version__ = "0.1.0"

__all__ = [
    "CsfdError",
    "CsfdScraper",
    "Episode",
    "Page",
    "SearchHit",
    "Season",
    "ShowDetail",
    "ShowKind",
    "__version__",
]
