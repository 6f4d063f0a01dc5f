# Client for OpenAI-compatible APIs through the official openai SDK.
# Same interface as HttpModelClient; SDK retries are disabled.

import logging
from typing import Any, Dict, Optional

import openai
from openai import OpenAI

from llm_proxy.errors import InternalError, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)


class OpenAIModelClient:
    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 60.0):
        self.timeout = timeout
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    def _call(self, fn, **kwargs) -> Dict[str, Any]:
        try:
            return fn(**kwargs).model_dump()
        except openai.APITimeoutError as e:
            logger.error("Upstream timeout after %ss", self.timeout)
            raise UpstreamTimeout(self.timeout) from e
        except openai.APIStatusError as e:
            logger.error("Upstream API failed: %s %s", e.status_code, e.response.text)
            raise UpstreamError(e.status_code, e.response.text) from e
        except openai.APIConnectionError as e:
            logger.error("Upstream request failed: %s", e)
            raise InternalError("Upstream request failed: APIConnectionError") from e

    def complete(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._call(self.client.chat.completions.create, **payload)

    def transcribe(self, path: str, filename: str, model: str) -> Dict[str, Any]:
        with open(path, "rb") as f:
            return self._call(self.client.audio.transcriptions.create, model=model, file=(filename, f))
