# ===============================================
# tests/test_policies.py
# Endpoint policy loading from YAML.
# ===============================================

import pytest
from pydantic import ValidationError

from llm_proxy.generate.policies import EndpointPolicy, load_policies, parse_policies


def test_packaged_policies_cover_every_route():
    policies = load_policies()
    assert set(policies) == {"chat", "mcq", "summarize", "video-explainer", "concept-map"}


@pytest.mark.parametrize("name,max_tokens,temperature,structured,key", [
    ("chat", 800, 0.7, False, "answer"),
    ("mcq", 1000, 0.7, True, None),
    ("summarize", 600, 0.3, False, "summary"),
    ("video-explainer", 1000, 0.7, False, "script"),
    ("concept-map", 1000, 0.5, True, None),
])
def test_packaged_defaults(name, max_tokens, temperature, structured, key):
    policy = load_policies()[name]
    assert policy.max_tokens == max_tokens
    assert policy.temperature == temperature
    assert policy.structured is structured
    assert policy.response_key == key


def test_inputs_default_to_their_own_name_as_alias():
    policies = parse_policies({"endpoints": {"s": {"mode": "template", "template": "{text}", "inputs": {"text": {"required": True}}}}})
    assert policies["s"].inputs["text"].aliases == ["text"]


def test_template_mode_requires_template():
    with pytest.raises(ValidationError):
        EndpointPolicy(name="broken", mode="template")


def test_override_file(tmp_path):
    path = tmp_path / "endpoints.yaml"
    path.write_text(
        "endpoints:\n"
        "  chat:\n"
        "    model: llama-3.1-70b-versatile\n"
        "    max_tokens: 256\n"
        "    response_key: reply\n",
        encoding="utf-8",
    )
    policies = load_policies(str(path))
    assert policies["chat"].model == "llama-3.1-70b-versatile"
    assert policies["chat"].max_tokens == 256
    assert policies["chat"].mode == "turns"


def test_missing_override_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_policies(str(tmp_path / "nope.yaml"))
