# Client for any OpenAI-compatible HTTP API (Groq by default), via plain requests.
# One attempt per call; no retries.

import logging
from typing import Any, Dict, Optional

import requests

from llm_proxy.errors import InternalError, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)


class HttpModelClient:
    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 60.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = requests.post(url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            logger.error("Upstream timeout after %ss: %s", self.timeout, url)
            raise UpstreamTimeout(self.timeout) from e
        except requests.RequestException as e:
            logger.error("Upstream request failed: %s (%s)", url, e)
            raise InternalError(f"Upstream request failed: {e.__class__.__name__}") from e

        if not resp.ok:
            logger.error("Upstream API failed: %s %s", resp.status_code, resp.text)
            raise UpstreamError(resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise InternalError("Upstream API returned a non-JSON body") from e

    def complete(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/chat/completions", json=payload)

    def transcribe(self, path: str, filename: str, model: str) -> Dict[str, Any]:
        with open(path, "rb") as f:
            return self._post(
                "/audio/transcriptions",
                files={"file": (filename, f)},
                data={"model": model, "response_format": "json"},
            )
