from .csfd import CSFD_BASE_URL, CsfdClient, csfd_client
from .rate_limit import RateLimiter

__all__ = ["CSFD_BASE_URL", "CsfdClient", "RateLimiter", "csfd_client"]
