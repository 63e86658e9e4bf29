"""Tests for the combined prefilter."""

import pytest

from channel_screen.filters.prefilter import (
    PrefilterOptions,
    TopicFilter,
    check_location,
    run_prefilter,
)

GERMAN_DESCRIPTION = (
    "Hallo und willkommen! Hier zeige ich dir jeden Tag, wie man gut und einfach kocht."
)


def options(**overrides):
    base = dict(
        require_dach_location=True,
        max_flagged_chars_per_field=3,
        min_german_words_distinct=5,
        topic_filters={
            "kids": TopicFilter(threshold=3),
            "beauty": TopicFilter(threshold=3),
            "gaming": TopicFilter(threshold=3),
        },
    )
    base.update(overrides)
    return PrefilterOptions(**base)


def channel(title="Kochen mit Oma", description=GERMAN_DESCRIPTION, country="Deutschland", videos=()):
    return {
        "channelInfo": {"title": title, "description": description, "country": country},
        "videos": [{"title": t} for t in videos],
    }


@pytest.mark.parametrize(
    "country, passed",
    [
        ("Deutschland", True),
        ("Germany", True),
        ("  Österreich ", True),
        ("Deutschland (DE)", True),
        ("AT", True),
        ("Schweiz, Zürich", True),
        ("Bangladesh", False),
        ("Frankreich", False),
        ("", False),
        (None, False),
    ],
)
def test_check_location(country, passed):
    assert check_location(country).passed is passed


def test_check_location_reason():
    result = check_location("Frankreich")

    assert result.reason == 'Country "Frankreich" not in DACH region'
    assert check_location(None).reason == "No country specified"


def test_german_channel_passes():
    result = run_prefilter(channel(videos=["Apfelkuchen backen", "Schnelle Suppe"]), options())

    assert result.passed is True
    assert result.failed_rule is None
    assert result.location.passed is True
    assert result.alphabet.ok is True
    assert result.language.ok is True
    assert set(result.topics) == {"kids", "beauty", "gaming"}


def test_location_fails_first():
    result = run_prefilter(channel(country="USA", title="Привет мир"), options())

    assert result.passed is False
    assert result.failed_rule == "location"
    assert result.alphabet is None


def test_location_can_be_disabled():
    result = run_prefilter(channel(country=None), options(require_dach_location=False))

    assert result.passed is True
    assert result.location is None


def test_alphabet_failure_names_fields():
    result = run_prefilter(channel(title="Привет мир"), options())

    assert result.failed_rule == "alphabet"
    assert result.reason == "Too many non-German characters in channelInfo.title (max 3 per field)"
    assert result.language is None


def test_language_failure():
    result = run_prefilter(
        channel(title="Cooking with Grandma", description="Welcome to my channel"),
        options(),
    )

    assert result.failed_rule == "language"
    assert result.reason == "Only 0 German words found (minimum: 5)"


def test_topic_failure():
    result = run_prefilter(
        channel(
            title="Kinder Lieder",
            videos=["Spielzeug für Kinder", "Spaß mit Lego"],
        ),
        options(),
    )

    assert result.failed_rule == "topic"
    assert result.reason.startswith("Detected as kids content (")
    assert result.reason.endswith("threshold: 3)")
    assert result.topics["kids"].ok is False


def test_disabled_topic_filter_is_skipped():
    filters = {"kids": TopicFilter(enabled=False)}
    result = run_prefilter(
        channel(title="Kinder Lieder", videos=["Spielzeug für Kinder", "Spaß mit Lego"]),
        options(topic_filters=filters),
    )

    assert result.passed is True
    assert result.topics == {}


def test_topic_filter_custom_keywords():
    filters = {"cooking": TopicFilter(threshold=1, keywords=["kocht"])}

    result = run_prefilter(channel(), options(topic_filters=filters))

    assert result.failed_rule == "topic"
    assert result.topics["cooking"].total_hit_count == 1
