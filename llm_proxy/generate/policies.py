# llm_proxy/generate/policies.py
# Per-endpoint generation policies, loaded from endpoints.yaml.

from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_POLICY_PATH = Path(__file__).with_name("endpoints.yaml")


class InputSpec(BaseModel):
    """One template placeholder and where to find it in the request body."""
    model_config = ConfigDict(frozen=True)

    aliases: List[str] = Field(default_factory=list)
    required: bool = False
    default: Any = None
    kind: Literal["text", "int"] = "text"


class EndpointPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    mode: Literal["turns", "template"] = "turns"
    template: Optional[str] = None
    inputs: Dict[str, InputSpec] = Field(default_factory=dict)
    model: Optional[str] = None
    max_tokens: int = Field(default=800, gt=0)
    temperature: float = Field(default=0.7, ge=0, le=2)
    structured: bool = False
    response_key: Optional[str] = None
    fallback_text: str = "No response from AI"

    @model_validator(mode="after")
    def _template_needs_text(self) -> "EndpointPolicy":
        if self.mode == "template" and not self.template:
            raise ValueError(f"endpoint '{self.name}' uses template mode but has no template")
        return self


def parse_policies(raw: Dict[str, Any]) -> Dict[str, EndpointPolicy]:
    endpoints = (raw or {}).get("endpoints", {}) or {}
    policies = {}
    for name, cfg in endpoints.items():
        cfg = cfg or {}
        inputs = {}
        for key, spec in (cfg.get("inputs") or {}).items():
            spec = dict(spec or {})
            spec.setdefault("aliases", [key])
            inputs[key] = spec
        policies[name] = EndpointPolicy(**{**cfg, "name": name, "inputs": inputs})
    return policies


@lru_cache(maxsize=8)
def load_policies(path: Optional[str] = None) -> Dict[str, EndpointPolicy]:
    """Read endpoint policies from YAML; the packaged file when no path is given."""
    cfg_path = Path(path) if path else DEFAULT_POLICY_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Endpoint config not found: {cfg_path}")
    with open(cfg_path, "r", encoding="utf-8") as f:
        return parse_policies(yaml.safe_load(f) or {})
