"""Exception hierarchy for scraping and serving trending data.

- ValidationError: caller supplied an unusable parameter (HTTP 400)
- RemoteError: GitHub could not be fetched or answered with a non-2xx status (HTTP 500)
- EntryParseError: one trending entry could not be extracted; logged and dropped
- NetworkError: the dashboard could not reach its own backend; becomes slot error state
"""

import time
from typing import Optional


class TrendboardError(Exception):
    """Base exception carrying free-form context."""

    def __init__(self, message: str, **context):
        """Initialize error with context.

        Args:
            message: Error message
            **context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context
        self.timestamp = time.time()


class ValidationError(TrendboardError):
    """A request parameter failed validation before any work was done."""

    def __init__(self, message: str, field: Optional[str] = None, **context):
        super().__init__(message, **context)
        self.field = field


class RemoteError(TrendboardError):
    """The upstream trending page could not be retrieved."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        **context,
    ):
        """Initialize remote error.

        Args:
            message: Error message
            status_code: HTTP status code if the server answered
            url: URL that was requested
            **context: Additional context
        """
        super().__init__(message, **context)
        self.status_code = status_code
        self.url = url


class EntryParseError(TrendboardError):
    """A single trending entry could not be extracted."""

    def __init__(self, message: str, index: Optional[int] = None, **context):
        super().__init__(message, **context)
        self.index = index

    def __str__(self):
        base = super().__str__()
        if self.index is not None:
            return f"entry #{self.index}: {base}"
        return base


class NetworkError(TrendboardError):
    """The dashboard client failed to fetch from the trending API."""

    def __init__(
        self,
        message: str,
        language: Optional[str] = None,
        since: Optional[str] = None,
        **context,
    ):
        super().__init__(message, **context)
        self.language = language
        self.since = since

    def __str__(self):
        base = super().__str__()
        if self.language and self.since:
            return f"[{self.language}/{self.since}] {base}"
        return base
