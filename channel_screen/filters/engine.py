"""
Multi-field classification engine.

One scan algorithm serves every list-based check on a channel document:

    normalize keys -> per-field scan -> aggregate -> threshold -> sorted evidence

The checks differ only along four explicit axes, bundled in ScanStrategy:

1. matcher: substring, single character, or whole-word sequence
2. counting: every occurrence, or presence (1 per field)
3. aggregation: per key across the document, or per field
4. rule: how counts and threshold turn into ok / not ok

The engine is total: malformed keys, thresholds, options or documents degrade
to neutral values and a Verdict is always returned. It keeps no state between
calls and does not log.
"""

import math
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from channel_screen.features.fields import extract_fields, tokenize
from channel_screen.features.schema import Field, FieldHits, MatchRecord, Verdict

DEFAULT_MAX_SAMPLES_PER_FIELD = 3
DEFAULT_SAMPLE_WINDOW = 40


class MatchMode(Enum):
    """How a key is located in a field."""

    SUBSTRING = "substring"  # case-insensitive substring
    CHARACTER = "character"  # exact single character
    WORD = "word"  # case-insensitive run of whole tokens


class CountMode(Enum):
    """What a hit inside one field is worth."""

    OCCURRENCES = "occurrences"
    PRESENCE = "presence"


class Aggregation(Enum):
    """Unit the evidence is grouped by."""

    DOCUMENT = "document"  # one record per key
    FIELD = "field"  # one record per field


class DecisionRule(Enum):
    """Turns hit counts and a threshold into ok / not ok."""

    DISTINCT_BELOW = "distinct_below"  # ok when distinct < threshold
    FIELD_DISTINCT_AT_MOST = "field_distinct_at_most"  # fail when a field's distinct > threshold
    DISTINCT_AT_LEAST = "distinct_at_least"  # ok when distinct >= threshold
    TOTAL_BELOW = "total_below"  # ok when total < threshold

    def passes(
        self,
        distinct: int,
        total: int,
        field_counts: list[int],
        threshold: int,
    ) -> bool:
        if self is DecisionRule.DISTINCT_BELOW:
            return distinct < threshold
        if self is DecisionRule.DISTINCT_AT_LEAST:
            return distinct >= threshold
        if self is DecisionRule.TOTAL_BELOW:
            return total < threshold
        return all(count <= threshold for count in field_counts)


@dataclass(frozen=True)
class ScanStrategy:
    """A complete parametrization of the engine."""

    matcher: MatchMode
    counting: CountMode
    aggregation: Aggregation
    rule: DecisionRule
    default_threshold: int


# Hard phrase taxonomies: reject at N distinct phrases
PHRASE_STRATEGY = ScanStrategy(
    matcher=MatchMode.SUBSTRING,
    counting=CountMode.OCCURRENCES,
    aggregation=Aggregation.DOCUMENT,
    rule=DecisionRule.DISTINCT_BELOW,
    default_threshold=2,
)

# Flagged alphabet: reject when one field holds more than N distinct characters
CHARSET_STRATEGY = ScanStrategy(
    matcher=MatchMode.CHARACTER,
    counting=CountMode.PRESENCE,
    aggregation=Aggregation.FIELD,
    rule=DecisionRule.FIELD_DISTINCT_AT_MOST,
    default_threshold=3,
)

# Language word list: require at least N distinct words
WORD_LIST_STRATEGY = ScanStrategy(
    matcher=MatchMode.WORD,
    counting=CountMode.PRESENCE,
    aggregation=Aggregation.DOCUMENT,
    rule=DecisionRule.DISTINCT_AT_LEAST,
    default_threshold=3,
)

# Topic keywords: reject at N keyword hits in total
TOPIC_STRATEGY = ScanStrategy(
    matcher=MatchMode.WORD,
    counting=CountMode.OCCURRENCES,
    aggregation=Aggregation.DOCUMENT,
    rule=DecisionRule.TOTAL_BELOW,
    default_threshold=3,
)


def _coerce_non_negative_int(value: Any, default: int) -> int:
    """Floor to int and clamp at 0; unusable values fall back to default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        # Exact, even for ints too large for a float
        return max(0, value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return max(0, math.floor(number))


def coerce_threshold(value: Any, default: int) -> int:
    """
    Coerce a threshold to a non-negative integer.

    Examples:
        >>> coerce_threshold(2.9, default=2)
        2
        >>> coerce_threshold(-4, default=2)
        0
        >>> coerce_threshold("many", default=2)
        2
    """
    return _coerce_non_negative_int(value, default)


@dataclass(frozen=True)
class ClassifyOptions:
    """Evidence collection options."""

    max_samples_per_field: int = DEFAULT_MAX_SAMPLES_PER_FIELD
    sample_window: int = DEFAULT_SAMPLE_WINDOW

    @classmethod
    def coerce(cls, options: Any) -> "ClassifyOptions":
        """Accept ClassifyOptions, a mapping with the same keys, or None."""
        if isinstance(options, ClassifyOptions):
            raw_samples = options.max_samples_per_field
            raw_window = options.sample_window
        elif isinstance(options, Mapping):
            raw_samples = options.get("max_samples_per_field")
            raw_window = options.get("sample_window")
        else:
            return cls()

        return cls(
            max_samples_per_field=_coerce_non_negative_int(
                raw_samples, DEFAULT_MAX_SAMPLES_PER_FIELD
            ),
            sample_window=_coerce_non_negative_int(raw_window, DEFAULT_SAMPLE_WINDOW),
        )


def iter_spans(pattern: re.Pattern, text: str) -> Iterator[tuple[int, int]]:
    """
    Yield non-overlapping (start, end) spans of pattern in text.

    The cursor always moves forward by at least one character, so a
    zero-length match cannot stall the loop; iterations are capped at
    len(text) + 1.
    """
    length = len(text)
    pos = 0
    for _ in range(length + 1):
        if pos > length:
            return
        match = pattern.search(text, pos)
        if match is None:
            return
        start, end = match.span()
        yield start, end
        pos = end if end > start else end + 1


def _iter_entries(key_list: Any, allow_str: bool) -> Iterator[str]:
    """Yield raw list entries as strings; non-list inputs yield nothing."""
    if key_list is None or isinstance(key_list, (bytes, Mapping)):
        return
    if isinstance(key_list, str):
        if allow_str:
            yield key_list
        return
    if not isinstance(key_list, Iterable):
        return
    if isinstance(key_list, (set, frozenset)):
        # Set iteration order varies between processes
        key_list = sorted(key_list, key=str)

    for entry in key_list:
        if entry is None:
            continue
        yield entry if isinstance(entry, str) else str(entry)


class _SubstringMatcher:
    """Case-insensitive, non-overlapping substring matching."""

    group_separator = ", "

    def __init__(self) -> None:
        self._patterns: dict[tuple[str, ...], re.Pattern] = {}

    def normalize_keys(self, key_list: Any) -> list[str]:
        keys = []
        seen = set()
        for entry in _iter_entries(key_list, allow_str=False):
            key = entry.strip()
            if not key or key.lower() in seen:
                continue
            seen.add(key.lower())
            keys.append(key)
        return keys

    def prepare(self, text: str) -> str:
        return text.lower()

    def count(self, key: str, haystack: str) -> int:
        needle = key.lower()
        # Cheap containment check before running the pattern
        if needle not in haystack:
            return 0
        pattern = self._compiled(("count", needle), re.escape(needle), 0)
        return sum(1 for _ in iter_spans(pattern, haystack))

    def sample_pattern(self, keys: list[str]) -> re.Pattern:
        source = "|".join(re.escape(k) for k in keys)
        return self._compiled(("sample", *keys), source, re.IGNORECASE)

    def _compiled(self, cache_key: tuple[str, ...], source: str, flags: int) -> re.Pattern:
        pattern = self._patterns.get(cache_key)
        if pattern is None:
            pattern = self._patterns[cache_key] = re.compile(source, flags)
        return pattern


class _CharacterMatcher(_SubstringMatcher):
    """Exact, case-sensitive single character membership."""

    group_separator = ""

    def normalize_keys(self, key_list: Any) -> list[str]:
        keys = []
        seen = set()
        for entry in _iter_entries(key_list, allow_str=True):
            for char in entry:
                if not char.strip() or char in seen:
                    continue
                seen.add(char)
                keys.append(char)
        return keys

    def prepare(self, text: str) -> tuple[str, frozenset[str]]:
        return text, frozenset(text)

    def count(self, key: str, prepared: tuple[str, frozenset[str]]) -> int:
        text, present = prepared
        if key not in present:
            return 0
        return text.count(key)

    def sample_pattern(self, keys: list[str]) -> re.Pattern:
        source = "|".join(re.escape(k) for k in keys)
        return self._compiled(("sample", *keys), source, 0)


class _WordMatcher(_SubstringMatcher):
    """Case-insensitive whole-token matching; keys may span several tokens."""

    group_separator = ", "

    def normalize_keys(self, key_list: Any) -> list[str]:
        keys = []
        seen = set()
        for entry in _iter_entries(key_list, allow_str=False):
            tokens = tokenize(entry.strip())
            if not tokens:
                continue
            key = " ".join(tokens)
            if key in seen:
                continue
            seen.add(key)
            keys.append(key)
        return keys

    def prepare(self, text: str) -> tuple[list[str], frozenset[str]]:
        tokens = tokenize(text)
        return tokens, frozenset(tokens)

    def count(self, key: str, prepared: tuple[list[str], frozenset[str]]) -> int:
        tokens, present = prepared
        needle = key.split(" ")
        if needle[0] not in present:
            return 0

        width = len(needle)
        count = 0
        i = 0
        while i <= len(tokens) - width:
            if tokens[i:i + width] == needle:
                count += 1
                i += width
            else:
                i += 1
        return count

    def sample_pattern(self, keys: list[str]) -> re.Pattern:
        alternatives = (r"[\W_]+".join(re.escape(t) for t in k.split(" ")) for k in keys)
        source = r"(?<![^\W_])(?:" + "|".join(alternatives) + r")(?![^\W_])"
        return self._compiled(("sample", *keys), source, re.IGNORECASE)


_MATCHERS = {
    MatchMode.SUBSTRING: _SubstringMatcher,
    MatchMode.CHARACTER: _CharacterMatcher,
    MatchMode.WORD: _WordMatcher,
}


def _samples(matcher, keys: list[str], text: str, options: ClassifyOptions) -> tuple[str, ...]:
    """Excerpts of the original text around the first matches of keys."""
    if options.max_samples_per_field == 0 or not text:
        return ()

    window = options.sample_window
    samples = []
    for start, end in iter_spans(matcher.sample_pattern(keys), text):
        if len(samples) >= options.max_samples_per_field:
            break
        samples.append(text[max(0, start - window):min(len(text), end + window)])
    return tuple(samples)


def _first_index(matcher, key: str, text: str) -> int:
    span = next(iter_spans(matcher.sample_pattern([key]), text), None)
    return span[0] if span else len(text)


def _scan(matcher, keys: list[str], fields: list[Field], counting: CountMode) -> dict[str, list[tuple[int, int]]]:
    """Map each key to its [(field_index, count), ...] in field order."""
    prepared = [matcher.prepare(f.text) if f.text else None for f in fields]

    hits: dict[str, list[tuple[int, int]]] = {}
    for key in keys:
        per_field = []
        for index, haystack in enumerate(prepared):
            if haystack is None:
                continue
            count = matcher.count(key, haystack)
            if count <= 0:
                continue
            if counting is CountMode.PRESENCE:
                count = 1
            per_field.append((index, count))
        hits[key] = per_field
    return hits


def _aggregate_by_key(matcher, keys, fields, hits, options):
    records = []
    field_counts = [0] * len(fields)
    for key in keys:
        per_field = hits[key]
        if not per_field:
            continue
        for index, _ in per_field:
            field_counts[index] += 1
        records.append(
            MatchRecord(
                key=key,
                hits_total=sum(count for _, count in per_field),
                per_field=tuple(
                    FieldHits(
                        field=fields[index].name,
                        count=count,
                        samples=_samples(matcher, [key], fields[index].text, options),
                    )
                    for index, count in per_field
                ),
            )
        )
    return records, field_counts


def _aggregate_by_field(matcher, keys, fields, hits, options):
    found: list[list[tuple[str, int]]] = [[] for _ in fields]
    for key in keys:
        for index, count in hits[key]:
            found[index].append((key, count))

    records = []
    field_counts = []
    for index, entries in enumerate(found):
        field_counts.append(len(entries))
        if not entries:
            continue
        text = fields[index].text
        # Report each field's keys in order of first appearance in its text
        ordered = sorted(entries, key=lambda e: _first_index(matcher, e[0], text))
        field_keys = [k for k, _ in ordered]
        hits_total = sum(c for _, c in ordered)
        records.append(
            MatchRecord(
                key=matcher.group_separator.join(field_keys),
                hits_total=hits_total,
                per_field=(
                    FieldHits(
                        field=fields[index].name,
                        count=hits_total,
                        samples=_samples(matcher, field_keys, text, options),
                    ),
                ),
            )
        )
    return records, field_counts


def classify(
    document: Any,
    key_list: Any,
    threshold: Any = None,
    options: Any = None,
    strategy: ScanStrategy = PHRASE_STRATEGY,
) -> Verdict:
    """
    Scan a document for a key list and decide admit/reject.

    Args:
        document: Document, scraped mapping, or None
        key_list: Phrases/words (iterable of str) or flagged characters
            (iterable of single characters, or a str in character mode)
        threshold: Decision threshold; None means the strategy default
        options: ClassifyOptions or mapping (max_samples_per_field, sample_window)
        strategy: Scan parametrization (defaults to hard phrase detection)

    Returns:
        Verdict with matches sorted by descending hits (stable)

    Examples:
        >>> doc = {"channelInfo": {"title": "alpha and beta"}}
        >>> classify(doc, ["alpha", "beta", "gamma"], threshold=2).ok
        False
        >>> classify(doc, ["alpha", "gamma"], threshold=2).ok
        True
    """
    if not isinstance(strategy, ScanStrategy):
        strategy = PHRASE_STRATEGY

    limit = coerce_threshold(threshold, strategy.default_threshold)
    opts = ClassifyOptions.coerce(options)
    matcher = _MATCHERS[strategy.matcher]()
    keys = matcher.normalize_keys(key_list)

    if not keys:
        return Verdict(ok=strategy.rule.passes(0, 0, [], limit), threshold=limit)

    fields = extract_fields(document)
    hits = _scan(matcher, keys, fields, strategy.counting)

    if strategy.aggregation is Aggregation.FIELD:
        records, field_counts = _aggregate_by_field(matcher, keys, fields, hits, opts)
    else:
        records, field_counts = _aggregate_by_key(matcher, keys, fields, hits, opts)

    distinct = sum(1 for key in keys if hits[key])
    total = sum(count for per_field in hits.values() for _, count in per_field)

    failing: tuple[str, ...] = ()
    if strategy.rule is DecisionRule.FIELD_DISTINCT_AT_MOST:
        failing = tuple(
            fields[i].name for i, count in enumerate(field_counts) if count > limit
        )

    # sorted() is stable: ties keep first-encountered order
    records = sorted(records, key=lambda r: -r.hits_total)

    return Verdict(
        ok=strategy.rule.passes(distinct, total, field_counts, limit),
        threshold=limit,
        distinct_hit_count=distinct,
        total_hit_count=total,
        matches=tuple(records),
        failing_fields=failing,
    )


PRESET_STRATEGIES = {
    "phrase": PHRASE_STRATEGY,
    "charset": CHARSET_STRATEGY,
    "word_list": WORD_LIST_STRATEGY,
    "topic": TOPIC_STRATEGY,
}


def strategy_for(name: str) -> Optional[ScanStrategy]:
    """Look up a preset strategy by name ('phrase', 'charset', 'word_list', 'topic')."""
    return PRESET_STRATEGIES.get(name)
