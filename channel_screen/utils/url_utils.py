"""URL utilities for host keys, apex domains and YouTube channel pages."""

from typing import Optional
from urllib.parse import urlparse, urlunparse

import tldextract

# Offline extractor: bundled public suffix snapshot, no network fetch, no disk cache
_EXTRACT = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)

YOUTUBE_HOSTS = {"youtube.com", "m.youtube.com", "youtu.be"}

CHANNEL_TABS = ("about", "videos", "featured", "shorts", "streams")


def host_of(url: str) -> str:
    """
    Get the pacing key for a URL: lower-cased host, with port if given.

    Args:
        url: Absolute URL

    Returns:
        Host string, or '' if the URL has no host

    Examples:
        >>> host_of("https://WWW.YouTube.com/@kanal/about")
        'www.youtube.com'
        >>> host_of("http://localhost:8080/x")
        'localhost:8080'
    """
    if not url:
        return ""

    parsed = urlparse(url.strip())
    host = (parsed.hostname or "").rstrip(".")
    if not host:
        return ""
    if parsed.port:
        return f"{host}:{parsed.port}"
    return host


def get_apex_domain(host: str) -> str:
    """
    Get the registered domain of a host (no subdomains, no port).

    Examples:
        >>> get_apex_domain("www.youtube.com")
        'youtube.com'
        >>> get_apex_domain("consent.youtube.co.uk")
        'youtube.co.uk'
    """
    if not host:
        return ""

    bare = host.lower().split(":", 1)[0].rstrip(".")
    result = _EXTRACT(bare)
    if result.domain and result.suffix:
        return f"{result.domain}.{result.suffix}"
    return bare


def is_youtube_url(url: str) -> bool:
    """Check whether a URL points at YouTube."""
    host = host_of(url)
    if host.startswith("www."):
        host = host[4:]
    return host in YOUTUBE_HOSTS


def channel_page_url(channel_url: str, tab: Optional[str] = None) -> str:
    """
    Build the URL of a channel tab.

    Trailing slashes, query strings and an existing tab suffix are dropped
    before the new tab is appended.

    Examples:
        >>> channel_page_url("https://www.youtube.com/@kanal/", "about")
        'https://www.youtube.com/@kanal/about'
        >>> channel_page_url("https://www.youtube.com/@kanal/videos?view=0", "about")
        'https://www.youtube.com/@kanal/about'
    """
    parsed = urlparse(channel_url.strip())
    path = parsed.path.rstrip("/")

    head, _, last = path.rpartition("/")
    if head and last in CHANNEL_TABS:
        path = head

    if tab:
        path = f"{path}/{tab}"

    return urlunparse((parsed.scheme, parsed.netloc, path, "", "", ""))
