# llm_proxy/generate/types.py
# Typed dataclasses shared across the generate package.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class ChatTurn:
    """Single chat turn: system, user, or assistant."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the upstream call needs, already defaulted and validated."""
    turns: List[ChatTurn]
    model: str
    max_output_tokens: int
    temperature: float

    def to_payload(self) -> Dict[str, Any]:
        """OpenAI-compatible chat-completions body."""
        return {
            "model": self.model,
            "messages": [t.to_dict() for t in self.turns],
            "max_tokens": self.max_output_tokens,
            "temperature": self.temperature,
        }


@dataclass(frozen=True)
class Structured:
    value: Any


@dataclass(frozen=True)
class Raw:
    text: str


StructuredOrRaw = Union[Structured, Raw]


@dataclass
class GenerationResult:
    """Exactly one of `text` / `structured` is set."""
    text: Optional[str] = None
    structured: Any = None
    is_structured: bool = False
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, meta: Optional[Dict[str, Any]] = None) -> "GenerationResult":
        return cls(text=text, meta=meta or {})

    @classmethod
    def from_structured(cls, value: Any, meta: Optional[Dict[str, Any]] = None) -> "GenerationResult":
        return cls(structured=value, is_structured=True, meta=meta or {})

    def value(self) -> Any:
        return self.structured if self.is_structured else self.text
