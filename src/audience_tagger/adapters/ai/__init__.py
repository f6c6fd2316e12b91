"""Provider clients for remote language models."""

from audience_tagger.adapters.ai.factory import ClassifierFactory, create_classifier
from audience_tagger.adapters.ai.gemini_client import GeminiClient
from audience_tagger.adapters.ai.openai_client import OpenAIClient, normalize_endpoint

__all__ = [
    "ClassifierFactory",
    "create_classifier",
    "GeminiClient",
    "OpenAIClient",
    "normalize_endpoint",
]
