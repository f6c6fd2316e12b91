"""Shared HTTP plumbing for provider clients."""

from typing import Optional

import httpx

from audience_tagger import __version__
from audience_tagger.core import AudienceClassifier

USER_AGENT = f"audience-tagger/{__version__}"


class HttpAudienceClassifier(AudienceClassifier):
    """Classifier that talks to its backend over one lazily opened HTTP client."""
    
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = ""
        self.timeout = timeout
        self._http = http_client
    
    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
        return self._http
    
    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key or ""
    
    async def aclose(self) -> None:
        """Close the HTTP client if one was opened."""
        if self._http is not None:
            http, self._http = self._http, None
            await http.aclose()
