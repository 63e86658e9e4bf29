"""Base collector class for all data collectors."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from channel_screen.collectors.fetcher import FetchOptions, ResilientFetcher
from channel_screen.utils.rate_limiter import HostPacer
from channel_screen.utils.url_utils import channel_page_url


@dataclass
class CollectorResult:
    """
    Standard result object returned by collectors.

    Attributes:
        domain: Normalized channel URL the data belongs to
        success: Whether data collection succeeded
        data: Collected data (structure varies by collector)
        error: Error message if collection failed
    """

    domain: str
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class BaseCollector(ABC):
    """
    Abstract base class for all data collectors.

    Subclasses implement collect_async(); collect() runs it on a fresh
    event loop.
    """

    def __init__(self, name: str):
        self.name = name

    def _normalize(self, channel_url: str) -> str:
        """Channel URL without tab, query or trailing slash."""
        return channel_page_url(channel_url)

    @abstractmethod
    async def collect_async(self, channel_url: str) -> CollectorResult:
        raise NotImplementedError(f"{self.name} must implement collect_async()")

    def collect(self, channel_url: str) -> CollectorResult:
        """Synchronous wrapper around collect_async()."""
        return asyncio.run(self.collect_async(channel_url))

    async def collect_batch_async(self, channel_urls: list[str]) -> dict[str, CollectorResult]:
        """
        Collect data for several channels, one after another.

        Returns:
            Dict mapping normalized channel URL -> CollectorResult
        """
        results = {}
        for channel_url in channel_urls:
            results[self._normalize(channel_url)] = await self.collect_async(channel_url)
        return results

    def collect_batch(self, channel_urls: list[str]) -> dict[str, CollectorResult]:
        return asyncio.run(self.collect_batch_async(channel_urls))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


class RemoteCollector(BaseCollector):
    """
    Base class for collectors that fetch pages over HTTP.

    Without an injected fetcher the collector creates one per event loop
    (collect() and collect_batch() each run their own loop and close its
    HTTP client afterwards). Every fetcher it creates shares one HostPacer,
    so pacing state covers every request the collector makes.

    An injected fetcher is never closed here. Its AsyncClient is bound to
    the loop it was first used on, so only use it from one loop: either
    await collect_async() yourself or call collect() once.
    """

    def __init__(
        self,
        name: str,
        fetcher: Optional[ResilientFetcher] = None,
        options: Optional[FetchOptions] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(name)
        self._fetcher = fetcher
        self._options = options
        self._transport = transport
        self._owns_fetcher = fetcher is None
        self.pacer: Optional[HostPacer] = fetcher.pacer if fetcher is not None else None

    @property
    def fetcher(self) -> ResilientFetcher:
        # Created lazily: the fetcher's client must live on the running loop
        if self._fetcher is None:
            self._fetcher = ResilientFetcher(
                options=self._options,
                transport=self._transport,
                pacer=self.pacer,
            )
            self.pacer = self._fetcher.pacer
        return self._fetcher

    async def aclose(self) -> None:
        """Close the fetcher if this collector created it (its pacer is kept)."""
        if self._owns_fetcher and self._fetcher is not None:
            await self._fetcher.aclose()
            self._fetcher = None

    def collect(self, channel_url: str) -> CollectorResult:
        return asyncio.run(self._collect_and_close(channel_url))

    def collect_batch(self, channel_urls: list[str]) -> dict[str, CollectorResult]:
        return asyncio.run(self._collect_batch_and_close(channel_urls))

    async def _collect_and_close(self, channel_url: str) -> CollectorResult:
        try:
            return await self.collect_async(channel_url)
        finally:
            await self.aclose()

    async def _collect_batch_and_close(self, channel_urls: list[str]) -> dict[str, CollectorResult]:
        try:
            return await self.collect_batch_async(channel_urls)
        finally:
            await self.aclose()
