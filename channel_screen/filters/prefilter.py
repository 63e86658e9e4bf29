"""
Combined prefilter for channel documents.

Runs the cheap rule-based checks before any expensive classification and
stops at the first failing rule:

1. location: channel country must be in the DACH region
2. alphabet: no field may use too many distinct non-German characters
3. language: enough distinct German words across the channel
4. topics: enabled negative topic filters (kids, beauty, gaming)
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from channel_screen.config import config
from channel_screen.features.fields import coerce_document
from channel_screen.features.schema import Verdict
from channel_screen.filters.checks import flagged_chars_check, topic_check, word_list_check
from channel_screen.filters.wordlists import ALLOWED_COUNTRIES


@dataclass
class LocationCheck:
    """Result of the location rule."""

    passed: bool
    country: Optional[str] = None
    reason: Optional[str] = None


@dataclass
class TopicFilter:
    """Settings of one negative topic filter."""

    enabled: bool = True
    threshold: int = 3
    keywords: Optional[list[str]] = None  # None = default keyword set


def _default_topic_filters() -> dict[str, TopicFilter]:
    return {
        topic: TopicFilter(threshold=config.TOPIC_THRESHOLD)
        for topic in ("kids", "beauty", "gaming")
    }


@dataclass
class PrefilterOptions:
    """Prefilter settings (defaults from config)."""

    require_dach_location: bool = True
    max_flagged_chars_per_field: int = field(default_factory=lambda: config.MAX_FLAGGED_CHARS_PER_FIELD)
    min_german_words_distinct: int = field(default_factory=lambda: config.MIN_GERMAN_WORDS_DISTINCT)
    topic_filters: dict[str, TopicFilter] = field(default_factory=_default_topic_filters)


@dataclass
class PrefilterResult:
    """Outcome of the prefilter, with the result of every rule that ran."""

    passed: bool
    failed_rule: Optional[str] = None  # 'location' | 'alphabet' | 'language' | 'topic'
    reason: Optional[str] = None
    location: Optional[LocationCheck] = None
    alphabet: Optional[Verdict] = None
    language: Optional[Verdict] = None
    topics: dict[str, Verdict] = field(default_factory=dict)


def check_location(country: Optional[str]) -> LocationCheck:
    """
    Check whether a country string names Germany, Austria or Switzerland.

    Matches the whole string or any whole word of it, so "Deutschland (DE)"
    passes while "Bangladesh" does not.

    Examples:
        >>> check_location("Deutschland (DE)").passed
        True
        >>> check_location("Frankreich").passed
        False
    """
    if not country or not country.strip():
        return LocationCheck(passed=False, country=None, reason="No country specified")

    normalized = country.strip().lower()
    if normalized in ALLOWED_COUNTRIES:
        return LocationCheck(passed=True, country=country)

    words = [w for w in re.split(r"[\s,()\[\]]+", normalized) if w]
    if any(word in ALLOWED_COUNTRIES for word in words):
        return LocationCheck(passed=True, country=country)

    return LocationCheck(
        passed=False,
        country=country,
        reason=f'Country "{country}" not in DACH region',
    )


def run_prefilter(document: Any, options: Optional[PrefilterOptions] = None) -> PrefilterResult:
    """
    Run all prefilter rules on a channel, short-circuiting on the first failure.

    Args:
        document: Channel document (Document or scraped mapping)
        options: Prefilter settings

    Returns:
        PrefilterResult
    """
    options = options or PrefilterOptions()
    doc = coerce_document(document)
    result = PrefilterResult(passed=False)

    if options.require_dach_location:
        result.location = check_location(doc.country)
        if not result.location.passed:
            result.failed_rule = "location"
            result.reason = result.location.reason
            return result

    result.alphabet = flagged_chars_check(doc, max_distinct_per_field=options.max_flagged_chars_per_field)
    if not result.alphabet.ok:
        result.failed_rule = "alphabet"
        result.reason = (
            f"Too many non-German characters in {', '.join(result.alphabet.failing_fields)} "
            f"(max {result.alphabet.threshold} per field)"
        )
        return result

    result.language = word_list_check(doc, min_distinct=options.min_german_words_distinct)
    if not result.language.ok:
        result.failed_rule = "language"
        result.reason = (
            f"Only {result.language.distinct_hit_count} German words found "
            f"(minimum: {result.language.threshold})"
        )
        return result

    for topic, topic_filter in options.topic_filters.items():
        if not topic_filter.enabled:
            continue
        verdict = topic_check(doc, topic, topic_filter.keywords, topic_filter.threshold)
        result.topics[topic] = verdict
        if not verdict.ok:
            result.failed_rule = "topic"
            result.reason = (
                f"Detected as {topic} content ({verdict.total_hit_count} keyword hits, "
                f"threshold: {verdict.threshold})"
            )
            return result

    result.passed = True
    return result
