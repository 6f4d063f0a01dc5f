# Shared fixtures: immutable test settings, a scriptable fake model client,
# and a TestClient bound to an app built from both.

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from llm_proxy.app import create_app
from llm_proxy.settings import Settings


class FakeModelClient:
    """Records every outbound payload and replays a canned completion (or error)."""

    def __init__(self):
        self.payloads = []
        self.transcribed = []
        self.reply_text = "Hello from the model"
        self.reply = None
        self.error = None
        self.transcript = {"text": "hello world"}

    def complete(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        if self.reply is not None:
            return self.reply
        return {"choices": [{"message": {"role": "assistant", "content": self.reply_text}}]}

    def transcribe(self, path, filename, model):
        self.transcribed.append({
            "path": path,
            "filename": filename,
            "model": model,
            "exists": os.path.exists(path),
            "bytes": Path(path).read_bytes(),
        })
        if self.error is not None:
            raise self.error
        return self.transcript


def make_settings(**overrides) -> Settings:
    values = {
        "UPSTREAM_API_KEY": None,
        "UPSTREAM_CLIENT": "echo",
        "PROXY_SECRET": None,
        "ENDPOINTS_CONFIG": None,
        "DEFAULT_MODEL": "llama-3.1-8b-instant",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def cfg():
    return make_settings()


@pytest.fixture
def fake_client():
    return FakeModelClient()


@pytest.fixture
def client(cfg, fake_client):
    return TestClient(create_app(cfg, fake_client))
