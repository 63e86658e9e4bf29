"""Data schemas for channel documents and classification verdicts."""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class VideoRecord:
    """A single scraped video of a channel."""

    title: str = ""


@dataclass
class Document:
    """
    Channel metadata as produced by the scrape layer.

    Read-only for the classification engine: checks never mutate it.
    """

    title: str = ""
    description: str = ""
    videos: list[VideoRecord] = field(default_factory=list)
    country: Optional[str] = None


@dataclass(frozen=True)
class Field:
    """One named text location within a document."""

    name: str  # e.g. "channelInfo.title", "videos[3].title"
    text: str


@dataclass(frozen=True)
class FieldHits:
    """Hits of one key inside one field, with readable excerpts."""

    field: str
    count: int
    samples: tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchRecord:
    """
    Aggregated hits for one key.

    With document aggregation the key is a phrase, word or character.
    With field aggregation the key is the group of distinct flagged
    characters found in a single field.
    """

    key: str
    hits_total: int
    per_field: tuple[FieldHits, ...] = ()


@dataclass(frozen=True)
class Verdict:
    """
    Admit/reject decision plus supporting evidence.

    Attributes:
        ok: True if the document passes the check
        threshold: Effective (coerced) threshold the decision used
        distinct_hit_count: Number of distinct keys found in the document
        total_hit_count: Sum of all per-key, per-field counts
        matches: Match records, most hits first
        failing_fields: Fields over the limit (per-field rules only)
    """

    ok: bool
    threshold: int
    distinct_hit_count: int = 0
    total_hit_count: int = 0
    matches: tuple[MatchRecord, ...] = ()
    failing_fields: tuple[str, ...] = ()

    @property
    def matched_keys(self) -> list[str]:
        return [m.key for m in self.matches]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for reporting and JSON output."""
        return asdict(self)
