"""Tests for core entities."""

import pytest

from audience_tagger.core import AiProvider, MediaItem, UnknownProviderError


def test_media_item_creation():
    """Test creating a valid item."""
    item = MediaItem(title="Test Movie", year=2020, tags=["family"])
    
    assert item.title == "Test Movie"
    assert item.kind == "movie"
    assert item.tags == ["family"]
    assert item.is_virtual is False


def test_media_item_validation():
    with pytest.raises(ValueError, match="Title cannot be empty"):
        MediaItem(title="")


def test_media_item_to_request():
    item = MediaItem(
        title="Test Movie",
        year=2020,
        overview="A test movie",
        official_rating="PG-13",
        genres=["Comedy"],
        tags=["kids"],
    )
    
    request = item.to_request()
    
    assert request.title == "Test Movie"
    assert request.year == 2020
    assert request.overview == "A test movie"
    assert request.official_rating == "PG-13"
    assert request.genres == ["Comedy"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("gemini", AiProvider.GEMINI),
        ("OpenAI", AiProvider.OPENAI),
        (" LocalAI ", AiProvider.LOCALAI),
        (AiProvider.LOCALAI, AiProvider.LOCALAI),
    ],
)
def test_provider_parse(name, expected):
    assert AiProvider.parse(name) is expected


def test_provider_parse_unknown():
    with pytest.raises(UnknownProviderError, match="Unknown AI provider: claude"):
        AiProvider.parse("claude")
