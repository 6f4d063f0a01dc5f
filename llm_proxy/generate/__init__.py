# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import CompletionGenerator
from .types import ChatTurn, GenerationRequest, GenerationResult, Structured, Raw, StructuredOrRaw
from .normalizer import ensure_turns, normalize_request
from .extractor import extract_result, extract_text, parse_or_raw
from .policies import EndpointPolicy, load_policies

__all__ = [
    "CompletionGenerator",
    "ChatTurn",
    "GenerationRequest",
    "GenerationResult",
    "Structured",
    "Raw",
    "StructuredOrRaw",
    "ensure_turns",
    "normalize_request",
    "extract_result",
    "extract_text",
    "parse_or_raw",
    "EndpointPolicy",
    "load_policies",
]
