"""
YouTube channel page collector.

Fetches a channel's /about and /videos tabs through the resilient fetcher.
Parsing the pages into a Document is left to the caller.
"""

import logging
from typing import Optional

import httpx

from channel_screen.collectors.base import CollectorResult, RemoteCollector
from channel_screen.collectors.errors import BlockedError, FetchError
from channel_screen.collectors.fetcher import FetchOptions, ResilientFetcher
from channel_screen.utils.url_utils import channel_page_url, is_youtube_url

logger = logging.getLogger(__name__)


class ChannelPageCollector(RemoteCollector):
    """
    Collector for the raw HTML of a channel's about and videos pages.

    Result data:
        about_ok / videos_ok: Whether each page was fetched
        about_html / videos_html: Page bodies (None when not fetched)
        blocked: An anti-bot page was hit; nothing after it was requested
        errors: Per-page error messages
    """

    def __init__(
        self,
        fetcher: Optional[ResilientFetcher] = None,
        options: Optional[FetchOptions] = None,
        skip_videos: bool = False,
        stop_on_block: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            fetcher: Shared fetcher (one is created on first use otherwise)
            options: Options for the created fetcher
            skip_videos: Only fetch the about page
            stop_on_block: In batch runs, skip remaining channels after a block
            transport: httpx transport for created fetchers
        """
        super().__init__(name="ChannelPages", fetcher=fetcher, options=options, transport=transport)
        self.skip_videos = skip_videos
        self.stop_on_block = stop_on_block

    async def collect_async(self, channel_url: str) -> CollectorResult:
        base_url = self._normalize(channel_url)
        data = {
            "about_ok": False,
            "videos_ok": False,
            "about_html": None,
            "videos_html": None,
            "blocked": False,
            "errors": {},
        }

        if not is_youtube_url(base_url):
            return CollectorResult(
                domain=base_url,
                success=False,
                data=data,
                error=f"Not a YouTube URL: {channel_url}",
            )

        tabs = ["about"] if self.skip_videos else ["about", "videos"]
        for tab in tabs:
            try:
                html = await self.fetcher.fetch(channel_page_url(base_url, tab))
            except BlockedError as e:
                logger.warning("Stopping %s: blocked on /%s (%s)", base_url, tab, e.marker)
                data["blocked"] = True
                data["errors"][tab] = str(e)
                break
            except FetchError as e:
                logger.info("Fetching /%s of %s failed: %s", tab, base_url, e)
                data["errors"][tab] = str(e)
                continue

            data[f"{tab}_ok"] = True
            data[f"{tab}_html"] = html

        error = None
        if data["blocked"]:
            error = "Blocked by anti-bot page"
        elif not data["about_ok"]:
            error = data["errors"].get("about")

        return CollectorResult(
            domain=base_url,
            success=data["about_ok"] and not data["blocked"],
            data=data,
            error=error,
        )

    async def collect_batch_async(self, channel_urls: list[str]) -> dict[str, CollectorResult]:
        results = {}
        for i, channel_url in enumerate(channel_urls):
            result = await self.collect_async(channel_url)
            results[result.domain] = result
            if self.stop_on_block and result.data and result.data.get("blocked"):
                skipped = len(channel_urls) - i - 1
                if skipped:
                    logger.warning("Blocked; skipping %d remaining channels", skipped)
                break
        return results
