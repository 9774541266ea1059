"""Error taxonomy shared by the fetch layer, the parsers and the scraper API."""

from __future__ import annotations


class CsfdError(Exception):
    """Base class for every error raised by csfd-scraper."""


class HttpError(CsfdError):
    """Transport failure or a non-retryable (or exhausted) HTTP status.

    ``transient`` marks failures the fetcher may retry (5xx and timeouts).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
        transient: bool = False,
    ) -> None:
        self.status_code = status_code
        self.url = url
        self.transient = transient
        super().__init__(f"HTTP request failed: {message}")


class RateLimitedError(CsfdError):
    """The server kept answering 429 after the retry budget was spent."""

    def __init__(self, url: str | None = None) -> None:
        self.url = url
        super().__init__("Rate limited - too many requests")


class NotFoundError(CsfdError):
    """The server answered 404. Never retried."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Not found: {url}")


class ParseError(CsfdError):
    """A structural element whose absence is fatal could not be extracted."""

    template = "Failed to parse HTML: {}"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(self.template.format(detail))


class ElementNotFoundError(ParseError):
    """A named required element was missing from the page."""

    template = "Element not found: {}"

    def __init__(self, element: str) -> None:
        self.element = element
        super().__init__(element)


class InvalidInputError(CsfdError):
    """The caller supplied an unusable value, e.g. a blank search query."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid input: {detail}")


InvalidUrlError = InvalidInputError


class InvalidIdError(CsfdError):
    """The caller supplied a zero (or negative) CSFD identifier."""

    def __init__(self, csfd_id: int) -> None:
        self.csfd_id = csfd_id
        super().__init__(f"Invalid CSFD ID: {csfd_id}")


__all__ = [
    "CsfdError",
    "ElementNotFoundError",
    "HttpError",
    "InvalidIdError",
    "InvalidInputError",
    "InvalidUrlError",
    "NotFoundError",
    "ParseError",
    "RateLimitedError",
]
