"""Audience label parsing and tag matching."""

from audience_tagger.core.entities import AudienceLabel

AUDIENCE_TAGS = frozenset(label.value for label in AudienceLabel)


def parse_audience_label(response: str) -> AudienceLabel:
    """
    Coerce free-text model output into an audience label.
    
    Keywords are checked in priority order kids, teens, adults. Text that
    matches none of them (including empty text) maps to adults.
    
    Args:
        response: Raw text returned by the model
        
    Returns:
        One of the three audience labels
    """
    text = (response or "").strip().lower()
    
    if "kids" in text or "children" in text:
        return AudienceLabel.KIDS
    
    if "teens" in text or "teenagers" in text:
        return AudienceLabel.TEENS
    
    if "adults" in text or "mature" in text:
        return AudienceLabel.ADULTS
    
    return AudienceLabel.ADULTS


def is_audience_tag(tag: str) -> bool:
    """Check if tag is one of the audience labels (case-insensitive)."""
    return tag.strip().lower() in AUDIENCE_TAGS


def find_audience_tags(tags: list[str]) -> list[str]:
    """Return the audience tags present in tags, in order."""
    return [tag for tag in tags if is_audience_tag(tag)]


def merge_audience_tag(tags: list[str], label: str, overwrite: bool) -> list[str]:
    """
    Merge a new audience label into a tag list.
    
    With overwrite on, existing audience tags are dropped first. The label is
    appended unless an equal tag (case-insensitive) is already present.
    Non-audience tags keep their order.
    
    Returns:
        New tag list; the input is not modified
    """
    merged = [tag for tag in tags if not is_audience_tag(tag)] if overwrite else list(tags)
    
    if not any(tag.strip().lower() == label.lower() for tag in merged):
        merged.append(label)
    
    return merged
