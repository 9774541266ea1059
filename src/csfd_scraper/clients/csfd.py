"""Rate-limited, retrying HTTP client for ČSFD.cz."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_exponential

from csfd_scraper.clients.rate_limit import RateLimiter
from csfd_scraper.errors import HttpError, NotFoundError, RateLimitedError

logger = logging.getLogger(__name__)

CSFD_BASE_URL = "https://www.csfd.cz"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "cs-CZ,cs;q=0.9,en;q=0.8"

DEFAULT_REQUESTS_PER_SECOND = 2.0
DEFAULT_TIMEOUT = 30.0
MAX_RETRIES = 3
BASE_RETRY_DELAY = 1.0


class CsfdClient:
    """Asynchronous page fetcher for ČSFD.cz.

    Every attempt waits for the shared rate limiter. 429, 5xx and timeouts
    are retried with exponential backoff (``base_delay * 2**attempt``); 404
    and any other status fail on the first attempt.
    """

    def __init__(
        self,
        *,
        requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        base_delay: float = BASE_RETRY_DELAY,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if base_delay < 0:
            raise ValueError("base_delay must not be negative")

        self._max_retries = max_retries
        self._base_delay = base_delay
        self._timeout = timeout
        self._rate_limiter = RateLimiter(requests_per_second)

        headers = {
            "User-Agent": USER_AGENT,
            "Accept-Language": ACCEPT_LANGUAGE,
        }
        self._client = httpx.AsyncClient(
            base_url=CSFD_BASE_URL,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
        )

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def backoff_delay(self, attempt: int) -> float:
        """Seconds slept after the failed attempt ``attempt`` (0-indexed)."""
        return self._base_delay * 2**attempt

    async def fetch(self, path: str) -> str:
        """Return the body of ``GET {CSFD_BASE_URL}{path}``.

        Raises:
            NotFoundError: the server answered 404
            RateLimitedError: 429 persisted past the retry budget
            HttpError: transport failure, 5xx past the retry budget or any
                other non-success status
        """
        async for attempt in _retry_policy(max_retries=self._max_retries, base_delay=self._base_delay):
            with attempt:
                return await self._fetch_once(path)
        raise RuntimeError(f"Unable to fetch {path} after retries")

    async def _fetch_once(self, path: str) -> str:
        url = f"{CSFD_BASE_URL}{path}"
        await self._rate_limiter.acquire()
        logger.debug(f"[CSFD] GET {url}")

        # Whole-attempt deadline; httpx timeouts only cover single phases.
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.get(path)
        except httpx.TimeoutException as exc:
            raise HttpError(f"timed out: {exc!r}", url=url, transient=True) from exc
        except TimeoutError as exc:
            raise HttpError(f"no response within {self._timeout}s", url=url, transient=True) from exc
        except httpx.HTTPError as exc:
            raise HttpError(str(exc) or repr(exc), url=url) from exc

        status = response.status_code
        if response.is_success:
            return response.text
        if status == httpx.codes.NOT_FOUND:
            raise NotFoundError(url)
        if status == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimitedError(url)
        if response.is_server_error:
            raise HttpError(f"server error {status} for {url}", status_code=status, url=url, transient=True)
        raise HttpError(f"unexpected status {status} for {url}", status_code=status, url=url)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> CsfdClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()


@asynccontextmanager
async def csfd_client(
    *,
    requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND,
    timeout: float = DEFAULT_TIMEOUT,
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_RETRY_DELAY,
):
    client = CsfdClient(
        requests_per_second=requests_per_second,
        timeout=timeout,
        max_retries=max_retries,
        base_delay=base_delay,
    )
    try:
        yield client
    finally:
        await client.close()


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, RateLimitedError):
        return True
    return isinstance(exc, HttpError) and exc.transient


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(f"[CSFD] attempt {retry_state.attempt_number} failed ({exc}); retrying in {delay:.2f}s")


def _retry_policy(*, max_retries: int, base_delay: float) -> AsyncRetrying:
    return AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=base_delay),
        retry=retry_if_exception(_is_transient),
        before_sleep=_log_retry,
        reraise=True,
    )


__all__ = ["CsfdClient", "csfd_client", "CSFD_BASE_URL"]
