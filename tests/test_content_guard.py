"""Tests for anti-bot page detection."""

import pytest

from channel_screen.utils.content_guard import detect_block


@pytest.mark.parametrize(
    "html, marker",
    [
        ('<div class="g-recaptcha" data-sitekey="x"></div>', "recaptcha"),
        ("<script src='https://hcaptcha.com/1/api.js'></script>", "recaptcha"),
        ("Our systems have detected unusual traffic from your computer network.", "sorry"),
        ("Please confirm: I'm not a robot", "robot_check"),
        ("Sign in to confirm you're not a bot", "verify"),
        ("Verify it's you", "verify"),
    ],
)
def test_detects_markers(html, marker):
    hit = detect_block(html)

    assert hit is not None
    assert hit.marker == marker


def test_clean_page():
    html = "<html><head><title>Kanal - YouTube</title></head><body>Videos</body></html>"

    assert detect_block(html) is None
    assert detect_block("") is None


def test_sorry_redirect_url():
    hit = detect_block("", url="https://www.google.com/sorry/index?continue=x")

    assert hit.marker == "url_sorry"


def test_scan_limited_to_prefix():
    html = "x" * 1000 + "g-recaptcha"

    assert detect_block(html, max_scan_chars=1000) is None
    assert detect_block(html, max_scan_chars=2000).marker == "recaptcha"


def test_snippet_surrounds_marker():
    html = "a" * 100 + "unusual traffic" + "b" * 500

    hit = detect_block(html)

    assert "unusual traffic" in hit.snippet
    assert len(hit.snippet) == 200
