"""Provider client selection."""

import logging

from audience_tagger.adapters.ai.gemini_client import GeminiClient
from audience_tagger.adapters.ai.openai_client import OPENAI_ENDPOINT, OpenAIClient
from audience_tagger.core import AiProvider, AudienceClassifier, ProviderConfig

logger = logging.getLogger(__name__)


class ClassifierFactory:
    """Build configured provider clients.
    
    The caller owns the returned client and must close it.
    """
    
    def create(self, config: ProviderConfig) -> AudienceClassifier:
        """Create a client for the configured provider.
        
        Raises:
            UnknownProviderError: If the provider selector is not supported
        """
        provider = AiProvider.parse(config.provider)
        
        client: AudienceClassifier
        if provider is AiProvider.GEMINI:
            client = GeminiClient()
        else:
            client = OpenAIClient()
        
        client.set_api_key(config.api_key)
        
        if provider is AiProvider.LOCALAI:
            client.set_endpoint(config.endpoint)
        elif provider is AiProvider.OPENAI:
            client.set_endpoint(OPENAI_ENDPOINT)
        
        client.set_model_name(config.model_name)
        
        logger.debug("Created %s for provider '%s'", type(client).__name__, provider.value)
        return client


def create_classifier(config: ProviderConfig) -> AudienceClassifier:
    """Create a configured provider client."""
    return ClassifierFactory().create(config)
