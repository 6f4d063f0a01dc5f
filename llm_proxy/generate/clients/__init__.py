# Model clients. Each one exposes:
#   complete(payload: dict) -> dict            (OpenAI-shaped completion JSON)
#   transcribe(path, filename, model) -> dict  (OpenAI-shaped transcription JSON)

from llm_proxy.settings import Settings
from .echo_dev_client import EchoDevClient
from .http_client import HttpModelClient


def build_model_client(cfg: Settings):
    """Pick a client from settings: explicit UPSTREAM_CLIENT, else http with a key, else echo."""
    kind = cfg.client_kind
    if kind == "openai":
        from .openai_client import OpenAIModelClient
        return OpenAIModelClient(
            api_key=cfg.UPSTREAM_API_KEY,
            base_url=cfg.UPSTREAM_BASE_URL,
            timeout=cfg.UPSTREAM_TIMEOUT,
        )
    if kind == "http":
        return HttpModelClient(
            api_key=cfg.UPSTREAM_API_KEY,
            base_url=cfg.UPSTREAM_BASE_URL,
            timeout=cfg.UPSTREAM_TIMEOUT,
        )
    return EchoDevClient()


__all__ = ["EchoDevClient", "HttpModelClient", "build_model_client"]
