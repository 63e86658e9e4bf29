"""Tests for document coercion and field extraction."""

from channel_screen.features.fields import (
    coerce_document,
    extract_fields,
    tokenize,
)
from channel_screen.features.schema import Document, VideoRecord


def test_extract_fields_order_and_names():
    """Title, description, then one field per video in order."""
    doc = {
        "channelInfo": {"title": "Kanal", "description": "Beschreibung"},
        "videos": [{"title": "Erstes"}, {"title": "Zweites"}],
    }

    fields = extract_fields(doc)

    assert [f.name for f in fields] == [
        "channelInfo.title",
        "channelInfo.description",
        "videos[0].title",
        "videos[1].title",
    ]
    assert [f.text for f in fields] == ["Kanal", "Beschreibung", "Erstes", "Zweites"]


def test_extract_fields_empty_document():
    """Missing data still yields the two channel fields."""
    for doc in (None, {}, "garbage", 42):
        fields = extract_fields(doc)
        assert [f.text for f in fields] == ["", ""]


def test_coerce_document_flat_mapping():
    doc = coerce_document({"title": "Kanal", "description": None, "country": "Deutschland"})

    assert doc.title == "Kanal"
    assert doc.description == ""
    assert doc.country == "Deutschland"
    assert doc.videos == []


def test_coerce_document_keeps_video_positions():
    """Malformed video entries become empty titles so indices stay aligned."""
    doc = coerce_document({"videos": [{"title": "a"}, "broken", None, {"title": 7}]})

    assert [v.title for v in doc.videos] == ["a", "", "", "7"]


def test_coerce_document_from_document():
    original = Document(title="T", description="D", videos=[VideoRecord(title="V")], country=None)

    doc = coerce_document(original)

    assert doc == original
    assert doc is not original


def test_videos_must_be_a_list():
    assert coerce_document({"videos": "not a list"}).videos == []


def test_tokenize_unicode():
    assert tokenize("Hallo, Welt! Grüße_2024") == ["hallo", "welt", "grüße", "2024"]
    assert tokenize("") == []
    assert tokenize(None) == []


def test_tokenize_drops_single_characters():
    assert tokenize("Let's Play Teil 2 a b") == ["let", "play", "teil"]
    assert tokenize("x") == []
