"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from audience_tagger.core.entities import (
    AudienceLabel,
    ClassificationRequest,
    ItemUpdateType,
    MediaItem,
)


class AudienceClassifier(ABC):
    """Interface for remote audience classification backends.
    
    Instances own network resources; use them as async context managers
    or call ``aclose`` when done.
    """
    
    @abstractmethod
    def set_api_key(self, api_key: str) -> None:
        """Set the credential sent with each request."""
        pass
    
    @abstractmethod
    def set_endpoint(self, endpoint: str) -> None:
        """Set the endpoint URL (ignored by fixed-endpoint backends)."""
        pass
    
    @abstractmethod
    def set_model_name(self, model_name: str) -> None:
        """Set the model identifier."""
        pass
    
    @abstractmethod
    async def classify(self, request: ClassificationRequest) -> Optional[AudienceLabel]:
        """Classify the item, or return None when no answer was obtained."""
        pass
    
    @abstractmethod
    async def list_models(self) -> list[str]:
        """List model identifiers offered by the backend."""
        pass
    
    async def aclose(self) -> None:
        """Release network resources."""
        pass
    
    async def __aenter__(self) -> "AudienceClassifier":
        return self
    
    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class ItemRepository(ABC):
    """Interface for the library holding media items."""
    
    @abstractmethod
    async def query_items(
        self, kind: str, recursive: bool = True, exclude_virtual: bool = True
    ) -> list[MediaItem]:
        """Return items of the given kind in library order."""
        pass
    
    @abstractmethod
    async def persist(self, item: MediaItem, change: ItemUpdateType) -> None:
        """Save item changes back to the library."""
        pass
