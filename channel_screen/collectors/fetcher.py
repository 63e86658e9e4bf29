"""
Resilient HTTP fetcher for YouTube channel pages.

Every request goes through the same pipeline:

    pace (per host) -> attempt (bounded by timeout) -> content guard
        -> status check -> backoff and retry, or give up

Anti-bot pages are terminal and never retried. Transport failures and
non-2xx answers are retried up to max_retries times with capped exponential
backoff.
"""

import asyncio
import contextlib
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Awaitable, Callable, Optional

import httpx

from channel_screen.collectors.errors import (
    BlockedError,
    DeadlineExceededError,
    ExhaustedError,
    FetchCancelledError,
    FetchTimeoutError,
    HttpStatusError,
    TransportError,
)
from channel_screen.config import config
from channel_screen.utils.content_guard import detect_block
from channel_screen.utils.rate_limiter import HostPacer, HostRule
from channel_screen.utils.url_utils import channel_page_url, host_of

logger = logging.getLogger(__name__)

VIDEO_URL = "https://www.youtube.com/watch?v={video_id}"


@dataclass
class FetchOptions:
    """Tunables for one fetcher (or one fetch call)."""

    min_interval_ms: float = field(default_factory=lambda: config.FETCH_MIN_INTERVAL_MS)
    jitter_ms: float = field(default_factory=lambda: config.FETCH_JITTER_MS)
    max_retries: int = field(default_factory=lambda: config.FETCH_MAX_RETRIES)
    timeout_ms: float = field(default_factory=lambda: config.FETCH_TIMEOUT_MS)
    backoff_base_ms: float = field(default_factory=lambda: config.FETCH_BACKOFF_BASE_MS)
    backoff_cap_ms: float = field(default_factory=lambda: config.FETCH_BACKOFF_CAP_MS)
    guard_enabled: bool = True
    guard_scan_chars: int = field(default_factory=lambda: config.FETCH_GUARD_SCAN_CHARS)
    respect_retry_after: bool = True
    user_agent: str = field(default_factory=lambda: config.FETCH_USER_AGENT)
    accept_language: str = field(default_factory=lambda: config.FETCH_ACCEPT_LANGUAGE)

    @property
    def attempts(self) -> int:
        """Total attempts allowed (first try plus retries)."""
        return max(0, int(self.max_retries)) + 1


def backoff_delay(attempt: int, base_ms: float, cap_ms: float) -> float:
    """
    Wait before the retry that follows a failed attempt.

    Args:
        attempt: Zero-based index of the attempt that failed
        base_ms: Delay after the first failure
        cap_ms: Upper bound

    Returns:
        Delay in seconds: min(cap, base * 2**attempt)

    Examples:
        >>> backoff_delay(0, 500, 30000)
        0.5
        >>> backoff_delay(3, 500, 30000)
        4.0
        >>> backoff_delay(10, 500, 30000)
        30.0
    """
    base_ms = max(0.0, base_ms)
    cap_ms = max(0.0, cap_ms)
    # 2**62 already exceeds any sane cap
    exponent = min(max(0, attempt), 62)
    return min(cap_ms, base_ms * (2 ** exponent)) / 1000.0


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """
    Parse a Retry-After header.

    Accepts delta-seconds ("120") or an HTTP date. Dates in the past give 0.

    Returns:
        Seconds to wait, or None if the header is missing or unparseable
    """
    if not value:
        return None

    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        seconds = None

    if seconds is not None:
        if seconds != seconds or seconds < 0:  # NaN or negative
            return None
        return seconds

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())


class ResilientFetcher:
    """
    Rate-limited, retrying HTTP GET client.

    One instance owns one pacing map; share the instance between callers
    that should be paced together.

    Args:
        options: Default FetchOptions (from config when omitted)
        host_rules: Per-host pacing overrides
        client: Existing httpx.AsyncClient (not closed by aclose)
        transport: httpx transport for the owned client (tests use MockTransport)
        concurrency: Max in-flight fetches (None = unbounded)
        rng: Random source for pacing jitter
        clock: Monotonic time in seconds
        sleep: Coroutine used for pacing and backoff waits
        pacer: Existing HostPacer to share pacing state with (host_rules,
            rng and clock then only come from that pacer)

    Examples:
        >>> async with ResilientFetcher() as fetcher:
        ...     html = await fetcher.fetch("https://www.youtube.com/@kanal/about")
    """

    def __init__(
        self,
        options: Optional[FetchOptions] = None,
        host_rules: Optional[dict[str, HostRule]] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        concurrency: Optional[int] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        pacer: Optional[HostPacer] = None,
    ):
        if concurrency is not None and concurrency < 1:
            raise ValueError("concurrency must be at least 1")

        self.options = options or FetchOptions()
        self._clock = clock
        self._sleep = sleep or asyncio.sleep
        if pacer is None:
            pacer = HostPacer(
                min_interval_ms=self.options.min_interval_ms,
                jitter_ms=self.options.jitter_ms,
                host_rules=host_rules,
                rng=rng,
                clock=clock,
                sleep=self._sleep,
            )
        self.pacer = pacer

        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                transport=transport,
                follow_redirects=True,
                timeout=self.options.timeout_ms / 1000.0,
                headers={
                    "User-Agent": self.options.user_agent,
                    "Accept-Language": self.options.accept_language,
                },
            )
        self.client = client
        self._semaphore = asyncio.Semaphore(concurrency) if concurrency else None

    async def __aenter__(self) -> "ResilientFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.client.aclose()

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return asyncio.get_running_loop().time()

    async def fetch(
        self,
        url: str,
        options: Optional[FetchOptions] = None,
        headers: Optional[dict[str, str]] = None,
        deadline: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Fetch a page body.

        Pacing intervals always come from the fetcher's own options; a per-call
        options object changes retries, timeouts, backoff and the guard.

        Args:
            url: Absolute URL
            options: Per-call options
            headers: Extra request headers
            deadline: Seconds of budget for the whole call, including waits
            cancel_event: Event that aborts the fetch when set

        Returns:
            Response text

        Raises:
            BlockedError: Anti-bot page detected (never retried)
            ExhaustedError: Every attempt failed
            FetchCancelledError: cancel_event was set
            DeadlineExceededError: deadline passed
            ValueError: URL has no host
        """
        opts = options or self.options
        host = host_of(url)
        if not host:
            raise ValueError(f"URL has no host: {url!r}")

        deadline_at = None if deadline is None else self._now() + max(0.0, deadline)
        total = opts.attempts
        last_error: Optional[TransportError] = None

        async with self._semaphore or contextlib.nullcontext():
            for attempt in range(total):
                wait = await self.pacer.reserve(host)
                if wait > 0:
                    logger.debug("Pacing %s: waiting %.2fs", host, wait)
                    await self._bounded(self._sleep(wait), "pace", url, host, cancel_event, deadline_at)
                else:
                    self._check(url, host, "pace", cancel_event, deadline_at)

                try:
                    return await self._bounded(
                        self._attempt(url, host, opts, headers),
                        "attempt",
                        url,
                        host,
                        cancel_event,
                        deadline_at,
                    )
                except BlockedError as e:
                    logger.warning("Blocked by %s (marker=%s, status=%s): %s", host, e.marker, e.status, url)
                    raise
                except TransportError as e:
                    last_error = e

                if attempt + 1 >= total:
                    break

                delay = self._retry_delay(attempt, last_error, opts)
                logger.warning(
                    "Attempt %d/%d for %s failed (%s); retrying in %.2fs",
                    attempt + 1, total, url, last_error, delay,
                )
                if delay > 0:
                    await self._bounded(self._sleep(delay), "backoff", url, host, cancel_event, deadline_at)
                else:
                    self._check(url, host, "backoff", cancel_event, deadline_at)

        logger.warning("Giving up on %s after %d attempts: %s", url, total, last_error)
        raise ExhaustedError(url, host, total, last_error) from last_error

    @staticmethod
    def _retry_delay(attempt: int, error: TransportError, opts: FetchOptions) -> float:
        delay = backoff_delay(attempt, opts.backoff_base_ms, opts.backoff_cap_ms)
        retry_after = getattr(error, "retry_after", None)
        if opts.respect_retry_after and retry_after is not None:
            delay = min(max(0.0, opts.backoff_cap_ms) / 1000.0, retry_after)
        return delay

    async def _attempt(
        self,
        url: str,
        host: str,
        opts: FetchOptions,
        headers: Optional[dict[str, str]],
    ) -> str:
        """One GET: timeout, content guard, then status check."""
        timeout_s = max(0.001, opts.timeout_ms / 1000.0)
        try:
            response = await asyncio.wait_for(
                self.client.get(url, headers=headers, timeout=timeout_s),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise FetchTimeoutError(url, host, opts.timeout_ms) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}", url=url, host=host) from e

        text = response.text

        # Captcha pages often come back as 429 or 200; check before the status
        if opts.guard_enabled:
            hit = detect_block(text, str(response.url), opts.guard_scan_chars)
            if hit is not None:
                raise BlockedError(
                    url=url,
                    host=host,
                    marker=hit.marker,
                    snippet=hit.snippet,
                    status=response.status_code,
                )

        if not response.is_success:
            retry_after = None
            if opts.respect_retry_after:
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
            raise HttpStatusError(
                url,
                host,
                response.status_code,
                reason=response.reason_phrase,
                retry_after=retry_after,
            )

        return text

    def _check(
        self,
        url: str,
        host: str,
        stage: str,
        cancel_event: Optional[asyncio.Event],
        deadline_at: Optional[float],
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise FetchCancelledError(url, host, stage)
        if deadline_at is not None and self._now() >= deadline_at:
            raise DeadlineExceededError(url, host, stage)

    async def _bounded(
        self,
        coro: Awaitable,
        stage: str,
        url: str,
        host: str,
        cancel_event: Optional[asyncio.Event],
        deadline_at: Optional[float],
    ):
        """
        Await coro unless the cancel event fires or the deadline passes first.

        The losing work is cancelled before the corresponding error is raised.
        """
        if cancel_event is None and deadline_at is None:
            return await coro

        try:
            self._check(url, host, stage, cancel_event, deadline_at)
        except (FetchCancelledError, DeadlineExceededError):
            coro.close()
            raise

        task = asyncio.ensure_future(coro)
        waiters = {task}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)
        timeout = None if deadline_at is None else max(0.0, deadline_at - self._now())

        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            if cancel_waiter is not None and not cancel_waiter.done():
                cancel_waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

        if cancel_waiter is not None and cancel_waiter in done:
            logger.debug("Fetch of %s cancelled during %s", url, stage)
            raise FetchCancelledError(url, host, stage)
        logger.debug("Deadline passed for %s during %s", url, stage)
        raise DeadlineExceededError(url, host, stage)


@contextlib.asynccontextmanager
async def _fetcher_or_new(fetcher: Optional[ResilientFetcher]):
    if fetcher is not None:
        yield fetcher
        return
    async with ResilientFetcher() as owned:
        yield owned


async def fetch_channel_about(channel_url: str, fetcher: Optional[ResilientFetcher] = None, **kwargs) -> str:
    """Fetch the /about tab of a channel."""
    async with _fetcher_or_new(fetcher) as f:
        return await f.fetch(channel_page_url(channel_url, "about"), **kwargs)


async def fetch_channel_videos(channel_url: str, fetcher: Optional[ResilientFetcher] = None, **kwargs) -> str:
    """Fetch the /videos tab of a channel."""
    async with _fetcher_or_new(fetcher) as f:
        return await f.fetch(channel_page_url(channel_url, "videos"), **kwargs)


async def fetch_video_page(video: str, fetcher: Optional[ResilientFetcher] = None, **kwargs) -> str:
    """
    Fetch a watch page.

    Args:
        video: Full video URL or bare video id
    """
    url = video if "://" in video else VIDEO_URL.format(video_id=video.strip())
    async with _fetcher_or_new(fetcher) as f:
        return await f.fetch(url, **kwargs)
