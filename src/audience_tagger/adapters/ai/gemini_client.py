"""Google Gemini client for audience classification."""

import logging
from typing import Any, Optional

import httpx

from audience_tagger.adapters.ai.base import HttpAudienceClassifier
from audience_tagger.core import (
    AudienceLabel,
    ClassificationRequest,
    build_prompt,
    parse_audience_label,
    sanitize_for_log,
)

logger = logging.getLogger(__name__)


class GeminiClient(HttpAudienceClassifier):
    """Fixed-endpoint client for the Gemini generateContent API.
    
    The credential travels in the ``x-goog-api-key`` header, never in the
    query string.
    """
    
    base_url = "https://generativelanguage.googleapis.com/v1beta"
    default_model = "gemini-pro"
    
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
    ) -> None:
        super().__init__(http_client=http_client, timeout=timeout)
        self.model_name = self.default_model
    
    def set_endpoint(self, endpoint: str) -> None:
        # Gemini uses a fixed endpoint
        pass
    
    def set_model_name(self, model_name: str) -> None:
        if model_name and model_name.strip():
            self.model_name = model_name.strip()
    
    def _headers(self) -> dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
    
    async def classify(self, request: ClassificationRequest) -> Optional[AudienceLabel]:
        """Ask Gemini for the target audience of one item."""
        title = sanitize_for_log(request.title)
        
        if not self.api_key:
            logger.warning("Gemini API key is not configured")
            return None
        
        try:
            prompt = build_prompt(request)
            logger.debug("Requesting audience classification for '%s' (%s)", title, request.year)
            
            response = await self._client().post(
                f"{self.base_url}/models/{self.model_name}:generateContent",
                headers=self._headers(),
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
            
            if not response.is_success:
                logger.error(
                    "Gemini API error for '%s': %s - %s",
                    title,
                    response.status_code,
                    response.text[:500],
                )
                return None
            
            text = self._extract_text(response.json())
            if not text:
                logger.warning("No valid response from Gemini API for '%s'", title)
                return None
            
            label = parse_audience_label(text)
            logger.info("Classified '%s' (%s) as '%s'", title, request.year, label.value)
            return label
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error("Error calling Gemini API for '%s': %s", title, e)
            return None
    
    def _extract_text(self, data: Any) -> Optional[str]:
        """Pull the first candidate's first text part out of a response."""
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return None
        return parts[0].get("text")
    
    async def list_models(self) -> list[str]:
        """List Gemini model names, without the ``models/`` prefix."""
        if not self.api_key:
            logger.warning("Gemini API key is not configured; cannot list models")
            return []
        
        try:
            response = await self._client().get(
                f"{self.base_url}/models",
                headers=self._headers(),
            )
            
            if not response.is_success:
                logger.error(
                    "Failed to fetch Gemini models: %s - %s",
                    response.status_code,
                    response.text[:500],
                )
                return []
            
            models = []
            for model in response.json().get("models") or []:
                name = model.get("name") or ""
                if name.startswith("models/"):
                    name = name[len("models/"):]
                if name:
                    models.append(name)
            
            logger.debug("Found %d Gemini models", len(models))
            return models
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as e:
            logger.error("Error fetching Gemini models: %s", e)
            return []
