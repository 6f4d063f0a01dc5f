# llm_proxy/generate/normalizer.py
# Turns a heterogeneous client body into a GenerationRequest.

from __future__ import annotations
from typing import Any, Dict, List, Optional

from llm_proxy.errors import InvalidRequest
from .policies import EndpointPolicy, InputSpec
from .types import ROLES, ChatTurn, GenerationRequest


def _nonempty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _coerce_turns(raw_turns: List[Any]) -> List[ChatTurn]:
    turns = []
    for i, item in enumerate(raw_turns):
        if not isinstance(item, dict):
            raise InvalidRequest(f"messages[{i}] must be an object with role and content")
        role, content = item.get("role"), item.get("content")
        if role not in ROLES:
            raise InvalidRequest(f"messages[{i}].role must be one of {', '.join(ROLES)}")
        if not isinstance(content, str):
            raise InvalidRequest(f"messages[{i}].content must be a string")
        turns.append(ChatTurn(role=role, content=content))
    return turns


def ensure_turns(body: Dict[str, Any]) -> List[ChatTurn]:
    """messages (verbatim) > prompt > text. Returns [] when nothing usable is found."""
    messages = body.get("messages")
    if isinstance(messages, list):
        return _coerce_turns(messages)
    if _nonempty_str(body.get("prompt")):
        return [ChatTurn(role="user", content=body["prompt"])]
    if _nonempty_str(body.get("text")):
        return [ChatTurn(role="user", content=body["text"])]
    return []


def _resolve_input(name: str, spec: InputSpec, body: Dict[str, Any]) -> Any:
    value = None
    for alias in spec.aliases:
        candidate = body.get(alias)
        if candidate not in (None, "", 0, False):
            value = candidate
            break
    if value is None:
        if spec.required:
            raise InvalidRequest(f"{name} required")
        value = spec.default

    if spec.kind == "int":
        if isinstance(value, str) and value.strip().isdecimal():
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidRequest(f"{name} must be a positive integer")
    elif value is not None and not isinstance(value, str):
        raise InvalidRequest(f"{name} must be a string")
    return value


def render_template(policy: EndpointPolicy, body: Dict[str, Any]) -> List[ChatTurn]:
    """Build the single templated user turn for MCQ / summary / concept-map style routes."""
    values = {name: _resolve_input(name, spec, body) for name, spec in policy.inputs.items()}
    return [ChatTurn(role="user", content=policy.template.format(**values))]


def _client_max_tokens(value: Any, default: int) -> int:
    if not value:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidRequest("max_tokens must be a positive integer")
    return value


def _client_temperature(value: Any, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 2:
        raise InvalidRequest("temperature must be a number between 0 and 2")
    return float(value)


def normalize_request(
    body: Optional[Dict[str, Any]],
    policy: EndpointPolicy,
    default_model: str,
) -> GenerationRequest:
    """Apply the endpoint policy to a client body.

    In `turns` mode the client may override model / max_tokens / temperature.
    In `template` mode the policy owns every generation parameter.
    """
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object")

    model = policy.model or default_model
    if policy.mode == "template":
        return GenerationRequest(
            turns=render_template(policy, body),
            model=model,
            max_output_tokens=policy.max_tokens,
            temperature=policy.temperature,
        )

    turns = ensure_turns(body)
    if not turns:
        raise InvalidRequest("No prompt/messages provided")

    client_model = body.get("model")
    if client_model and not isinstance(client_model, str):
        raise InvalidRequest("model must be a string")

    return GenerationRequest(
        turns=turns,
        model=client_model or model,
        max_output_tokens=_client_max_tokens(body.get("max_tokens"), policy.max_tokens),
        temperature=_client_temperature(body.get("temperature"), policy.temperature),
    )
