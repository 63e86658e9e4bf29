"""Tests for the named channel checks."""

import pytest

from channel_screen.features.schema import Document, VideoRecord
from channel_screen.filters.checks import (
    description_not_empty_check,
    flagged_chars_check,
    hard_phrases_check,
    normalize_description,
    taxonomy_check,
    topic_check,
    word_list_check,
)
from channel_screen.filters.wordlists import NON_GERMAN_CHARS


def test_kids_taxonomy_rejects_children_channel():
    document = Document(
        title="Kinderlieder zum Mitsingen",
        description="Die schönsten Lieder für Kinder",
    )

    verdict = taxonomy_check(document, "kids")

    assert verdict.ok is False
    assert "kinderlieder" in verdict.matched_keys
    assert "für kinder" in verdict.matched_keys


def test_addiction_taxonomy_shares_phrase_logic():
    document = {"channelInfo": {"title": "Online Casino Bonus Tricks"}}

    verdict = taxonomy_check(document, "addiction", distinct_threshold=2)

    assert verdict.ok is False
    assert set(verdict.matched_keys) == {"online casino", "casino bonus"}


def test_taxonomy_single_phrase_passes():
    verdict = taxonomy_check(Document(title="Poker Abend mit Freunden"), "addiction")

    assert verdict.ok is True
    assert verdict.distinct_hit_count == 1


def test_unknown_taxonomy():
    with pytest.raises(KeyError):
        taxonomy_check(Document(), "weather")


def test_hard_phrases_custom_list():
    document = Document(videos=[VideoRecord(title="Foo"), VideoRecord(title="bar")])

    verdict = hard_phrases_check(document, ["foo", "bar"], distinct_threshold=3)

    assert verdict.ok is True
    assert verdict.distinct_hit_count == 2


def test_flagged_chars_cyrillic_title():
    verdict = flagged_chars_check(Document(title="Привет мир"), max_distinct_per_field=3)

    assert verdict.ok is False
    assert verdict.failing_fields == ("channelInfo.title",)


def test_flagged_chars_allows_umlauts():
    verdict = flagged_chars_check(Document(title="Grüße aus München, Straße"))

    assert verdict.ok is True
    assert verdict.distinct_hit_count == 0


def test_flagged_chars_few_accents_pass():
    verdict = flagged_chars_check(Document(title="Café crème", description="Señor"))

    assert verdict.ok is True
    assert verdict.distinct_hit_count == 3


def test_default_flagged_set_excludes_german_letters():
    for char in "äöüÄÖÜß":
        assert char not in NON_GERMAN_CHARS
    assert "é" in NON_GERMAN_CHARS
    assert "ж" in NON_GERMAN_CHARS


def test_word_list_german_text():
    document = Document(description="Ich bin hier und das ist gut")

    verdict = word_list_check(document, min_distinct=5)

    assert verdict.ok is True
    assert verdict.distinct_hit_count >= 5


def test_word_list_english_text():
    document = Document(title="Welcome to my channel", description="Weekly cooking videos")

    verdict = word_list_check(document, min_distinct=3)

    assert verdict.ok is False
    assert verdict.distinct_hit_count == 0


def test_topic_check_gaming():
    document = Document(title="Minecraft Let's Play", description="Gaming jeden Tag")

    verdict = topic_check(document, "gaming", threshold=3)

    assert verdict.ok is False
    assert verdict.total_hit_count >= 3
    assert "let play" in verdict.matched_keys


def test_topic_check_custom_keywords():
    document = Document(title="Angeln am See", videos=[VideoRecord(title="Angeln im Winter")])

    verdict = topic_check(document, "fishing", keywords=["angeln"], threshold=2)

    assert verdict.ok is False
    assert verdict.total_hit_count == 2


def test_topic_check_unknown_topic_passes():
    assert topic_check(Document(title="anything"), "weather").ok is True


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ""),
        ("null", ""),
        ("NULL", ""),
        ("   ", ""),
        ("  Hallo   Welt \n", "Hallo Welt"),
    ],
)
def test_normalize_description(raw, expected):
    assert normalize_description(raw) == expected


def test_description_not_empty():
    assert description_not_empty_check(Document(description="")).ok is False
    assert description_not_empty_check({"description": "null"}).ok is False

    result = description_not_empty_check(Document(description="  Hallo  "))
    assert result.ok is True
    assert result.length == 5
    assert result.sample == "Hallo"


def test_description_min_chars():
    result = description_not_empty_check(Document(description="Hallo"), min_chars=10)
    assert result.ok is False
    assert result.min_chars == 10

    # Below 1 is raised to 1
    result = description_not_empty_check(Document(description=""), min_chars=0)
    assert result.min_chars == 1
    assert result.ok is False


def test_description_sample_truncated():
    result = description_not_empty_check(Document(description="x" * 500))

    assert result.length == 500
    assert len(result.sample) == 140
