"""
Field extraction for channel documents.

Turns a channel document into the ordered list of named text fields the
classification engine scans: channel title, channel description, then one
field per video title in original order.

All functions are total: missing or malformed data yields empty strings.
"""

import re
from collections.abc import Mapping
from typing import Any

from channel_screen.features.schema import Document, Field, VideoRecord

TITLE_FIELD = "channelInfo.title"
DESCRIPTION_FIELD = "channelInfo.description"

# Runs of Unicode letters/digits (underscore excluded)
TOKEN_PATTERN = re.compile(r"[^\W_]+")


def _text(value: Any) -> str:
    """Normalize a raw value to a string, mapping None to ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def video_field_name(index: int) -> str:
    return f"videos[{index}].title"


def _coerce_videos(raw: Any) -> list[VideoRecord]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        return []

    videos = []
    for entry in raw:
        if isinstance(entry, VideoRecord):
            videos.append(VideoRecord(title=_text(entry.title)))
        elif isinstance(entry, Mapping):
            videos.append(VideoRecord(title=_text(entry.get("title"))))
        else:
            # Keep the position so field names stay aligned with the source list
            videos.append(VideoRecord())
    return videos


def coerce_document(obj: Any) -> Document:
    """
    Build a Document from whatever the caller supplied.

    Accepts:
    - a Document (returned as a normalized copy)
    - the scraped shape {"channelInfo": {...}, "videos": [...]}
    - a flat mapping {"title", "description", "videos", "country"}
    - None or anything else (empty document)

    Examples:
        >>> coerce_document({"channelInfo": {"title": "Kanal"}}).title
        'Kanal'
        >>> coerce_document(None).videos
        []
    """
    if isinstance(obj, Document):
        return Document(
            title=_text(obj.title),
            description=_text(obj.description),
            videos=_coerce_videos(obj.videos),
            country=obj.country if isinstance(obj.country, str) else None,
        )

    if not isinstance(obj, Mapping):
        return Document()

    info = obj.get("channelInfo")
    if not isinstance(info, Mapping):
        info = obj

    country = info.get("country")
    return Document(
        title=_text(info.get("title")),
        description=_text(info.get("description")),
        videos=_coerce_videos(obj.get("videos")),
        country=country if isinstance(country, str) else None,
    )


def extract_fields(document: Any) -> list[Field]:
    """
    Produce the ordered text fields of a document.

    Args:
        document: Document, mapping or None

    Returns:
        [title, description, videos[0].title, videos[1].title, ...]
    """
    doc = coerce_document(document)

    fields = [
        Field(name=TITLE_FIELD, text=doc.title),
        Field(name=DESCRIPTION_FIELD, text=doc.description),
    ]
    fields.extend(
        Field(name=video_field_name(i), text=video.title)
        for i, video in enumerate(doc.videos)
    )
    return fields


def tokenize(text: str) -> list[str]:
    """
    Split text into lower-cased word tokens (Unicode-aware).

    Single-character tokens are dropped.

    Examples:
        >>> tokenize("Hallo, Welt! Grüße_2024")
        ['hallo', 'welt', 'grüße', '2024']
        >>> tokenize("Let's Play Teil 2")
        ['let', 'play', 'teil']
    """
    return [t for t in TOKEN_PATTERN.findall(_text(text).lower()) if len(t) > 1]
