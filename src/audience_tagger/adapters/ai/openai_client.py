"""OpenAI-compatible chat completions client (OpenAI, LocalAI, Ollama...)."""

import logging
from typing import Optional

import httpx

from audience_tagger.adapters.ai.base import HttpAudienceClassifier
from audience_tagger.core import (
    SYSTEM_MESSAGE,
    AudienceLabel,
    ClassificationRequest,
    build_prompt,
    parse_audience_label,
    sanitize_for_log,
)

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"
OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"


def normalize_endpoint(endpoint: str) -> str:
    """Strip trailing slashes and append ``/v1/chat/completions`` if missing."""
    normalized = endpoint.strip().rstrip("/")
    if not normalized.lower().endswith(CHAT_COMPLETIONS_PATH):
        normalized += "/v1" + CHAT_COMPLETIONS_PATH
    return normalized


class OpenAIClient(HttpAudienceClassifier):
    """Client for any backend speaking the OpenAI chat completions schema."""
    
    default_model = "gpt-3.5-turbo"
    
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
        temperature: float = 0.3,
        max_tokens: int = 10,
    ) -> None:
        super().__init__(http_client=http_client, timeout=timeout)
        self.endpoint = OPENAI_ENDPOINT
        self.model_name = self.default_model
        self.temperature = temperature
        self.max_tokens = max_tokens
    
    def set_api_key(self, api_key: str) -> None:
        super().set_api_key(api_key)
        if self.api_key:
            logger.debug("OpenAI API key is configured.")
        else:
            logger.debug("OpenAI API key is not configured or is empty.")
    
    def set_endpoint(self, endpoint: str) -> None:
        if endpoint and endpoint.strip():
            self.endpoint = normalize_endpoint(endpoint)
            logger.info("OpenAI endpoint configured: %s", sanitize_for_log(self.endpoint))
    
    def set_model_name(self, model_name: str) -> None:
        if model_name and model_name.strip():
            self.model_name = model_name.strip()
            logger.debug("OpenAI model name set to: %s", sanitize_for_log(self.model_name))
    
    @property
    def models_endpoint(self) -> str:
        return self.endpoint.replace(CHAT_COMPLETIONS_PATH, "/models")
    
    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        # Self-hosted backends often run without auth
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers
    
    async def classify(self, request: ClassificationRequest) -> Optional[AudienceLabel]:
        """Ask the chat completions endpoint for the target audience of one item."""
        title = sanitize_for_log(request.title)
        
        try:
            prompt = build_prompt(request)
            logger.debug("Requesting audience classification for '%s' (%s)", title, request.year)
            
            response = await self._client().post(
                self.endpoint,
                headers=self._headers(),
                json={
                    "model": self.model_name,
                    "messages": [
                        {"role": "system", "content": SYSTEM_MESSAGE},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
            )
            
            if not response.is_success:
                logger.error(
                    "AI API error for '%s': %s - %s",
                    title,
                    response.status_code,
                    response.text[:500],
                )
                return None
            
            choices = response.json().get("choices") or []
            text = choices[0]["message"]["content"] if choices else None
            if not text:
                logger.warning("No valid response from AI API for '%s'", title)
                return None
            
            label = parse_audience_label(text)
            logger.info("Classified '%s' (%s) as '%s'", title, request.year, label.value)
            return label
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error("Error calling AI API for '%s': %s", title, e)
            return None
    
    async def list_models(self) -> list[str]:
        """List model ids from the ``/models`` endpoint next to chat completions."""
        try:
            response = await self._client().get(self.models_endpoint, headers=self._headers())
            
            if not response.is_success:
                logger.error(
                    "Failed to fetch OpenAI models: %s - %s",
                    response.status_code,
                    response.text[:500],
                )
                return []
            
            models = [
                model["id"]
                for model in response.json().get("data") or []
                if isinstance(model, dict) and model.get("id")
            ]
            logger.debug("Found %d OpenAI-compatible models", len(models))
            return models
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as e:
            logger.error("Error fetching OpenAI models: %s", e)
            return []
