"""
Detection of anti-bot and captcha pages in fetched responses.

A page that matches one of these markers is a block, not a transient
failure: the fetcher aborts instead of retrying.
"""

import re
from dataclasses import dataclass
from typing import Optional

# Marker name -> pattern. Checked in order, first hit wins.
BLOCK_INDICATORS = {
    "recaptcha": r"recaptcha|g-recaptcha|hcaptcha",
    "sorry": r"/sorry/|unusual traffic|traffic from your computer network",
    "robot_check": r"i.?m not a robot|robot check",
    "verify": r"verify it.?s you|confirm you.?re not a bot",
}

BLOCK_PATTERNS = {name: re.compile(p, re.IGNORECASE) for name, p in BLOCK_INDICATORS.items()}

DEFAULT_SCAN_CHARS = 200_000
SNIPPET_BEFORE = 40
SNIPPET_AFTER = 160


@dataclass(frozen=True)
class GuardHit:
    """A detected block marker."""

    marker: str
    snippet: str


def detect_block(text: str, url: str = "", max_scan_chars: int = DEFAULT_SCAN_CHARS) -> Optional[GuardHit]:
    """
    Scan a response for anti-bot markers.

    Only the first max_scan_chars characters of the body are scanned.

    Args:
        text: Response body
        url: Final response URL (after redirects)
        max_scan_chars: Prefix length to scan

    Returns:
        GuardHit for the first marker found, or None

    Examples:
        >>> detect_block("<div class='g-recaptcha'></div>").marker
        'recaptcha'
        >>> detect_block("https://www.google.com/sorry/index", url="").marker
        'sorry'
        >>> detect_block("<html>Kanal</html>") is None
        True
    """
    if url and "/sorry/" in url.lower():
        return GuardHit(marker="url_sorry", snippet=url[:140])

    if not text:
        return None

    body = text[:max(0, max_scan_chars)]
    for name, pattern in BLOCK_PATTERNS.items():
        match = pattern.search(body)
        if match:
            start = max(0, match.start() - SNIPPET_BEFORE)
            return GuardHit(marker=name, snippet=body[start:match.start() + SNIPPET_AFTER])

    return None
