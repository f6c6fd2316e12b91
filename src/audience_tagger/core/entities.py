"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from audience_tagger.core.exceptions import UnknownProviderError


class AudienceLabel(str, Enum):
    """Target audience of a media item."""
    
    KIDS = "kids"
    TEENS = "teens"
    ADULTS = "adults"


class AiProvider(str, Enum):
    """Remote classification backend."""
    
    GEMINI = "gemini"
    OPENAI = "openai"
    LOCALAI = "localai"
    
    @classmethod
    def parse(cls, value: "str | AiProvider") -> "AiProvider":
        """Resolve a provider name case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownProviderError(f"Unknown AI provider: {value}") from None


class ItemUpdateType(str, Enum):
    """Kind of change reported when persisting an item."""
    
    METADATA_EDIT = "metadata_edit"


@dataclass
class MediaItem:
    """Media item owned by the library; only its tags are rewritten."""
    
    title: str
    year: Optional[int] = None
    overview: Optional[str] = None
    official_rating: Optional[str] = None
    genres: Optional[list[str]] = None
    tags: list[str] = field(default_factory=list)
    id: str = ""
    kind: str = "movie"
    is_virtual: bool = False
    
    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
    
    def to_request(self) -> "ClassificationRequest":
        """Snapshot the metadata sent to the classifier."""
        return ClassificationRequest(
            title=self.title,
            year=self.year,
            overview=self.overview,
            official_rating=self.official_rating,
            genres=list(self.genres) if self.genres is not None else None,
        )


@dataclass(frozen=True)
class ClassificationRequest:
    """Metadata of one item, consumed by a single classify call."""
    
    title: str
    year: Optional[int] = None
    overview: Optional[str] = None
    official_rating: Optional[str] = None
    genres: Optional[list[str]] = None


@dataclass(frozen=True)
class ProviderConfig:
    """Settings used to build one provider client."""
    
    provider: "AiProvider | str" = AiProvider.GEMINI
    api_key: str = ""
    endpoint: str = "http://localhost:8080"
    model_name: str = ""


@dataclass(frozen=True)
class TaggingConfig:
    """Configuration captured once at the start of a tagging run."""
    
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    enable_auto_tagging: bool = True
    process_on_library_scan: bool = True
    overwrite_existing_tags: bool = False
    processing_delay: float = 1.0
    
    @property
    def api_key(self) -> str:
        return self.provider.api_key


@dataclass
class TaggingSummary:
    """Outcome of a tagging run."""
    
    processed: int = 0
    tagged: int = 0
    skipped: int = 0
    failed: int = 0
    cancelled: bool = False
