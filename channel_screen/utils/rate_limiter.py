"""Per-host request pacing for the fetcher."""

import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from channel_screen.utils.url_utils import get_apex_domain


@dataclass(frozen=True)
class HostRule:
    """Pacing override for one host (or apex domain)."""

    min_interval_ms: float
    jitter_ms: float = 0.0


class HostPacer:
    """
    Minimum spacing between requests dispatched to the same host.

    Before each request the caller waits

        max(0, min_interval - (now - last_request_at[host])) + uniform(0, jitter)

    The slot is reserved under a lock before waiting (last_request_at is set to
    the planned dispatch time), so concurrent callers for one host queue up
    behind each other instead of all seeing the same stale timestamp. Hosts
    are independent of each other.

    Args:
        min_interval_ms: Default minimum spacing per host
        jitter_ms: Default upper bound of the random extra wait
        host_rules: Overrides keyed by host ("www.youtube.com") or apex
            domain ("youtube.com")
        rng: Random source for jitter
        clock: Monotonic time in seconds (defaults to the event loop clock)
        sleep: Coroutine used to wait (defaults to asyncio.sleep)

    Examples:
        >>> pacer = HostPacer(min_interval_ms=1500, jitter_ms=500)
        >>> await pacer.acquire("www.youtube.com")  # first request: jitter only
        >>> await pacer.acquire("www.youtube.com")  # waits ~1.5s + jitter
    """

    def __init__(
        self,
        min_interval_ms: float = 1500,
        jitter_ms: float = 500,
        host_rules: Optional[dict[str, HostRule]] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must not be negative")

        self.min_interval_ms = min_interval_ms
        self.jitter_ms = max(0.0, jitter_ms)
        self.host_rules = {k.lower(): v for k, v in (host_rules or {}).items()}
        self._rng = rng or random.Random()
        self._clock = clock
        self._sleep = sleep or asyncio.sleep
        self._last_request_at: dict[str, float] = {}
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return asyncio.get_running_loop().time()

    def _loop_lock(self) -> asyncio.Lock:
        # One lock per event loop; sync collectors run a new loop per call
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def rule_for(self, host: str) -> HostRule:
        """Resolve pacing for a host: exact host rule, then apex rule, then defaults."""
        rule = None
        if self.host_rules:
            key = host.lower()
            rule = self.host_rules.get(key) or self.host_rules.get(get_apex_domain(key))
        if rule is None:
            rule = HostRule(min_interval_ms=self.min_interval_ms, jitter_ms=self.jitter_ms)
        return rule

    async def reserve(self, host: str) -> float:
        """
        Reserve the next dispatch slot for a host without waiting.

        Returns:
            Seconds the caller must wait before dispatching
        """
        rule = self.rule_for(host)
        interval = max(0.0, rule.min_interval_ms) / 1000.0
        jitter = max(0.0, rule.jitter_ms) / 1000.0

        async with self._loop_lock():
            now = self._now()
            last = self._last_request_at.get(host)
            base_wait = 0.0 if last is None else max(0.0, interval - (now - last))
            extra = self._rng.uniform(0.0, jitter) if jitter > 0 else 0.0
            wait = base_wait + extra
            self._last_request_at[host] = now + wait

        return wait

    async def acquire(self, host: str) -> float:
        """
        Wait until the host may receive the next request.

        Returns:
            Time waited in seconds
        """
        wait = await self.reserve(host)
        if wait > 0:
            await self._sleep(wait)
        return wait

    def last_request_at(self, host: str) -> Optional[float]:
        """Dispatch time of the most recent (or reserved) request to host."""
        return self._last_request_at.get(host)

    def reset(self) -> None:
        """Forget all hosts."""
        self._last_request_at.clear()
