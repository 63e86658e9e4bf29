"""Errors raised by the resilient fetcher."""

from typing import Optional


class FetchError(Exception):
    """Base class for all fetch failures."""

    def __init__(self, message: str, url: str = "", host: str = ""):
        super().__init__(message)
        self.url = url
        self.host = host


class BlockedError(FetchError):
    """
    The response was an anti-bot or captcha page.

    Terminal: the fetcher never retries a block.
    """

    def __init__(
        self,
        url: str,
        host: str,
        marker: str,
        snippet: Optional[str] = None,
        status: Optional[int] = None,
    ):
        super().__init__(
            f"Blocked by {host} (HTTP {status if status is not None else '?'}, marker={marker})",
            url=url,
            host=host,
        )
        self.marker = marker
        self.snippet = snippet
        self.status = status


class TransportError(FetchError):
    """Network failure or unusable response; retried within the budget."""


class FetchTimeoutError(TransportError):
    """A single attempt exceeded its time budget."""

    def __init__(self, url: str, host: str, timeout_ms: float):
        super().__init__(f"Timed out after {timeout_ms:g} ms: {url}", url=url, host=host)
        self.timeout_ms = timeout_ms


class HttpStatusError(TransportError):
    """The server answered with a non-2xx status."""

    def __init__(
        self,
        url: str,
        host: str,
        status_code: int,
        reason: str = "",
        retry_after: Optional[float] = None,
    ):
        super().__init__(f"HTTP {status_code} {reason}".rstrip() + f": {url}", url=url, host=host)
        self.status_code = status_code
        self.retry_after = retry_after  # seconds, from the Retry-After header


class ExhaustedError(FetchError):
    """All attempts failed; last_error holds the final transport error."""

    def __init__(self, url: str, host: str, attempts: int, last_error: Optional[TransportError]):
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(f"Gave up after {attempts} attempts{detail}", url=url, host=host)
        self.attempts = attempts
        self.last_error = last_error

    @property
    def timed_out(self) -> bool:
        return isinstance(self.last_error, FetchTimeoutError)


class FetchCancelledError(FetchError):
    """The caller's cancel event fired while the fetch was suspended."""

    def __init__(self, url: str, host: str, stage: str):
        super().__init__(f"Fetch cancelled during {stage}: {url}", url=url, host=host)
        self.stage = stage  # 'pace' | 'attempt' | 'backoff'


class DeadlineExceededError(FetchError):
    """The caller's overall deadline passed while the fetch was suspended."""

    def __init__(self, url: str, host: str, stage: str):
        super().__init__(f"Deadline exceeded during {stage}: {url}", url=url, host=host)
        self.stage = stage
