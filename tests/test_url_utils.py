"""Tests for URL helpers."""

import pytest

from channel_screen.utils.url_utils import channel_page_url, get_apex_domain, host_of, is_youtube_url


@pytest.mark.parametrize(
    "url, host",
    [
        ("https://WWW.YouTube.com/@kanal/about", "www.youtube.com"),
        ("http://localhost:8080/x", "localhost:8080"),
        ("https://example.org.", "example.org"),
        ("not a url", ""),
        ("", ""),
    ],
)
def test_host_of(url, host):
    assert host_of(url) == host


@pytest.mark.parametrize(
    "host, apex",
    [
        ("www.youtube.com", "youtube.com"),
        ("youtube.com", "youtube.com"),
        ("consent.youtube.co.uk", "youtube.co.uk"),
        ("WWW.Example.ORG:443", "example.org"),
        ("localhost", "localhost"),
        ("", ""),
    ],
)
def test_get_apex_domain(host, apex):
    assert get_apex_domain(host) == apex


def test_is_youtube_url():
    assert is_youtube_url("https://www.youtube.com/@kanal")
    assert is_youtube_url("https://m.youtube.com/channel/UC123")
    assert is_youtube_url("https://youtu.be/abc")
    assert not is_youtube_url("https://notyoutube.com/@kanal")
    assert not is_youtube_url("https://example.org")


@pytest.mark.parametrize(
    "url, tab, expected",
    [
        ("https://www.youtube.com/@kanal/", "about", "https://www.youtube.com/@kanal/about"),
        ("https://www.youtube.com/@kanal/videos?view=0", "about", "https://www.youtube.com/@kanal/about"),
        ("https://www.youtube.com/channel/UC123", "videos", "https://www.youtube.com/channel/UC123/videos"),
        ("https://www.youtube.com/@kanal/about", None, "https://www.youtube.com/@kanal"),
    ],
)
def test_channel_page_url(url, tab, expected):
    assert channel_page_url(url, tab) == expected
