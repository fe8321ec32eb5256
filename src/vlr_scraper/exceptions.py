"""Custom exception hierarchy for the vlr.gg scraper.

Exception tree:
    VlrScraperError
    +-- TransportError           (page could not be fetched)
    |   +-- FetchError           (network, DNS, TLS or timeout failure)
    |   +-- RateLimited          (HTTP 429)
    |   +-- UnexpectedStatus     (any other non-2xx status)
    |       +-- PageNotFound     (HTTP 404)
    |       +-- ServerError      (HTTP 5xx)
    +-- SelectorError            (malformed selector literal)
    +-- ParseError               (page markup does not match expectations)
        +-- ElementNotFound      (structurally required element missing)
        +-- FieldParseError      (identity-critical id or date unparsable)
"""

from typing import Optional


class VlrScraperError(Exception):
    """Base exception for all vlr.gg scraper errors."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class TransportError(VlrScraperError):
    """The page body could not be obtained.

    Always surfaced to the caller of ``VlrClient.fetch``.
    """

    pass


class FetchError(TransportError):
    """Network-level failure: connection refused, DNS, TLS or timeout.

    Retriable.
    """

    pass


class RateLimited(TransportError):
    """Server returned HTTP 429 Too Many Requests.

    Retriable -- the transport backs off before the next attempt.
    """

    pass


class UnexpectedStatus(TransportError):
    """Server answered with a non-2xx status not covered elsewhere."""

    pass


class PageNotFound(UnexpectedStatus):
    """HTTP 404 -- the requested page does not exist on vlr.gg.

    Distinct from UnexpectedStatus so callers can skip unknown ids
    instead of aborting.
    """

    pass


class ServerError(UnexpectedStatus):
    """HTTP 5xx. Retriable."""

    pass


class SelectorError(VlrScraperError):
    """A selector literal failed to compile.

    This is a programming defect, not data noise, and is never caught
    by the parsers.
    """

    pass


class ParseError(VlrScraperError):
    """Base class for markup that could not be turned into an entity."""

    pass


class ElementNotFound(ParseError):
    """A structurally required element is missing from the document."""

    def __init__(self, context: str, selector: str, **kwargs):
        self.context = context
        self.selector = selector
        super().__init__(f"{context}: required element {selector!r} not found", **kwargs)


class FieldParseError(ParseError):
    """An identity-critical field (numeric id, primary date) is malformed."""

    def __init__(self, field: str, value: str, **kwargs):
        self.field = field
        self.value = value
        super().__init__(f"could not parse {field} from {value!r}", **kwargs)
