"""Core domain layer."""

from audience_tagger.core.entities import (
    AiProvider,
    AudienceLabel,
    ClassificationRequest,
    ItemUpdateType,
    MediaItem,
    ProviderConfig,
    TaggingConfig,
    TaggingSummary,
)
from audience_tagger.core.exceptions import (
    AudienceTaggerError,
    LibraryError,
    UnknownProviderError,
)
from audience_tagger.core.interfaces import AudienceClassifier, ItemRepository
from audience_tagger.core.labels import (
    find_audience_tags,
    is_audience_tag,
    merge_audience_tag,
    parse_audience_label,
)
from audience_tagger.core.prompt import SYSTEM_MESSAGE, build_prompt
from audience_tagger.core.sanitize import sanitize_for_log

__all__ = [
    "AiProvider",
    "AudienceLabel",
    "ClassificationRequest",
    "ItemUpdateType",
    "MediaItem",
    "ProviderConfig",
    "TaggingConfig",
    "TaggingSummary",
    "AudienceTaggerError",
    "LibraryError",
    "UnknownProviderError",
    "AudienceClassifier",
    "ItemRepository",
    "find_audience_tags",
    "is_audience_tag",
    "merge_audience_tag",
    "parse_audience_label",
    "SYSTEM_MESSAGE",
    "build_prompt",
    "sanitize_for_log",
]
