# llm_proxy/generate/extractor.py
# Pulls the generated text out of an upstream completion and, for
# structured endpoints, tries to read it as JSON.

from __future__ import annotations
import json
from typing import Any, Dict, Optional

from .types import GenerationResult, Raw, Structured, StructuredOrRaw


def extract_text(data: Any, fallback: str = "No response from AI") -> str:
    """choices[0].message.content, then choices[0].text, then `fallback`."""
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return fallback
    first = choices[0]
    message = first.get("message")
    content = message.get("content") if isinstance(message, dict) else None
    if isinstance(content, str) and content:
        return content
    text = first.get("text")
    if isinstance(text, str) and text:
        return text
    return fallback


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_or_raw(text: str) -> StructuredOrRaw:
    """JSON value if `text` is strict JSON (no NaN / Infinity), else the raw text."""
    try:
        return Structured(json.loads(text, parse_constant=_reject_constant))
    except (TypeError, ValueError):
        return Raw(text)


def extract_result(
    data: Dict[str, Any],
    structured: bool = False,
    fallback: str = "No response from AI",
    meta: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    text = extract_text(data, fallback)
    if not structured:
        return GenerationResult.from_text(text, meta)

    parsed = parse_or_raw(text)
    if isinstance(parsed, Structured):
        return GenerationResult.from_structured(parsed.value, meta)
    return GenerationResult.from_structured({"raw": parsed.text}, meta)
