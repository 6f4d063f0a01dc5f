# llm_proxy/generate/generator.py
# CompletionGenerator: normalize -> one upstream call -> extract.

from __future__ import annotations
import logging
import os
import shutil
import tempfile
from typing import Any, BinaryIO, Dict, Optional

from llm_proxy.errors import InternalError, InvalidRequest, ProxyError
from llm_proxy.settings import Settings
from .extractor import extract_result
from .normalizer import normalize_request
from .policies import EndpointPolicy, load_policies
from .types import GenerationResult

logger = logging.getLogger(__name__)


class CompletionGenerator:
    def __init__(self, model_client, cfg: Settings, policies: Optional[Dict[str, EndpointPolicy]] = None):
        self.model_client = model_client
        self.cfg = cfg
        self.policies = policies if policies is not None else load_policies(cfg.ENDPOINTS_CONFIG)

    def policy(self, endpoint: str) -> EndpointPolicy:
        try:
            return self.policies[endpoint]
        except KeyError:
            raise InternalError(f"No generation policy configured for '{endpoint}'") from None

    def _call(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self.model_client.complete(payload)
        except ProxyError:
            raise
        except Exception as e:
            logger.exception("Model client failed")
            raise InternalError(str(e)) from e

    def complete_raw(self, endpoint: str, body: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Normalize and call upstream, returning the completion JSON untouched."""
        policy = self.policy(endpoint)
        request = normalize_request(body, policy, self.cfg.DEFAULT_MODEL)
        return self._call(request.to_payload())

    def generate(self, endpoint: str, body: Optional[Dict[str, Any]]) -> GenerationResult:
        """Main entry point for generation."""
        policy = self.policy(endpoint)
        request = normalize_request(body, policy, self.cfg.DEFAULT_MODEL)
        logger.info(
            "%s: model=%s turns=%d max_tokens=%d",
            endpoint, request.model, len(request.turns), request.max_output_tokens,
        )
        data = self._call(request.to_payload())
        return extract_result(
            data,
            structured=policy.structured,
            fallback=policy.fallback_text,
            meta={"endpoint": endpoint, "model": request.model},
        )

    def transcribe(self, upload: Optional[BinaryIO], filename: Optional[str]) -> str:
        """Spool the upload to a temp file, transcribe it, always remove the file."""
        if upload is None:
            raise InvalidRequest("audio file required")

        suffix = os.path.splitext(filename or "")[1] or ".wav"
        tmp = tempfile.NamedTemporaryFile(prefix="voice-", suffix=suffix, delete=False)
        try:
            with tmp:
                shutil.copyfileobj(upload, tmp)
            if os.path.getsize(tmp.name) == 0:
                raise InvalidRequest("audio file is empty")
            try:
                data = self.model_client.transcribe(
                    tmp.name, filename or os.path.basename(tmp.name), self.cfg.TRANSCRIPTION_MODEL
                )
            except ProxyError:
                raise
            except Exception as e:
                logger.exception("Transcription failed")
                raise InternalError(str(e)) from e
        finally:
            os.remove(tmp.name)

        text = data.get("text") if isinstance(data, dict) else None
        return text if isinstance(text, str) else ""
