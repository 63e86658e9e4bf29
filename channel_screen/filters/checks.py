"""
Channel checks built on the classification engine.

Each check is a preset of the engine with a default list. The hard phrase
taxonomies (kids, addiction) share a single code path and differ only in the
phrase list they are given.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from channel_screen.features.fields import coerce_document
from channel_screen.features.schema import Verdict
from channel_screen.filters.engine import (
    CHARSET_STRATEGY,
    PHRASE_STRATEGY,
    TOPIC_STRATEGY,
    WORD_LIST_STRATEGY,
    classify,
    coerce_threshold,
)
from channel_screen.filters.wordlists import (
    GERMAN_WORDS,
    HARD_PHRASE_TAXONOMIES,
    NON_GERMAN_CHARS,
    TOPIC_KEYWORDS,
)

DESCRIPTION_SAMPLE_CHARS = 140


def hard_phrases_check(
    document: Any,
    phrases: Iterable[str],
    distinct_threshold: Any = 2,
    options: Any = None,
) -> Verdict:
    """
    Reject a channel once it uses distinct_threshold or more distinct phrases.

    Args:
        document: Channel document
        phrases: Phrase list (substring, case-insensitive)
        distinct_threshold: Distinct phrase count that rejects the channel
        options: Sample options (max_samples_per_field, sample_window)

    Returns:
        Verdict; ok is True while fewer than distinct_threshold phrases matched
    """
    return classify(document, phrases, distinct_threshold, options, strategy=PHRASE_STRATEGY)


def taxonomy_check(
    document: Any,
    taxonomy: str,
    distinct_threshold: Any = 2,
    options: Any = None,
) -> Verdict:
    """
    Run a named hard phrase taxonomy ('kids', 'addiction').

    Raises:
        KeyError: If the taxonomy is unknown
    """
    phrases = HARD_PHRASE_TAXONOMIES[taxonomy]
    return hard_phrases_check(document, phrases, distinct_threshold, options)


def flagged_chars_check(
    document: Any,
    flagged: Any = NON_GERMAN_CHARS,
    max_distinct_per_field: Any = 3,
    options: Any = None,
) -> Verdict:
    """
    Reject a channel if any single field uses too many distinct flagged characters.

    One appearance and a hundred appearances of the same character count the
    same. Fields are judged independently; every field with at least one
    flagged character is reported.
    """
    return classify(document, flagged, max_distinct_per_field, options, strategy=CHARSET_STRATEGY)


def word_list_check(
    document: Any,
    words: Any = GERMAN_WORDS,
    min_distinct: Any = 3,
    options: Any = None,
) -> Verdict:
    """Require at least min_distinct distinct words from the list across the document."""
    return classify(document, words, min_distinct, options, strategy=WORD_LIST_STRATEGY)


def topic_check(
    document: Any,
    topic: str,
    keywords: Optional[Iterable[str]] = None,
    threshold: Any = 3,
    options: Any = None,
) -> Verdict:
    """
    Negative topic filter: reject once keyword hits reach threshold.

    Keywords default to TOPIC_KEYWORDS[topic]; an unknown topic without
    keywords has nothing to match and passes.
    """
    if keywords is None:
        keywords = TOPIC_KEYWORDS.get(topic, ())
    return classify(document, keywords, threshold, options, strategy=TOPIC_STRATEGY)


@dataclass(frozen=True)
class DescriptionCheck:
    """Result of the description-not-empty check."""

    ok: bool
    min_chars: int
    length: int
    sample: str


def normalize_description(raw: Any) -> str:
    """
    Trim and collapse whitespace; None and the literal 'null' become ''.

    Examples:
        >>> normalize_description("  Hallo   Welt \\n")
        'Hallo Welt'
        >>> normalize_description("NULL")
        ''
    """
    if raw is None:
        return ""
    text = str(raw).strip()
    if not text or text.lower() == "null":
        return ""
    return re.sub(r"\s+", " ", text)


def description_not_empty_check(document: Any, min_chars: Any = 1) -> DescriptionCheck:
    """Fail channels whose description is missing or shorter than min_chars."""
    minimum = max(1, coerce_threshold(min_chars, default=1))
    normalized = normalize_description(coerce_document(document).description)
    return DescriptionCheck(
        ok=len(normalized) >= minimum,
        min_chars=minimum,
        length=len(normalized),
        sample=normalized[:DESCRIPTION_SAMPLE_CHARS],
    )
