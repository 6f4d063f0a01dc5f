# llm_proxy/errors.py
# Error taxonomy shared by the generator, the model clients and the HTTP layer.

from __future__ import annotations
from typing import Any, Dict, Optional


class ProxyError(Exception):
    """Base class: every subclass knows its HTTP status and JSON body."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidRequest(ProxyError):
    """Missing or malformed client input."""
    status_code = 400


class UpstreamError(ProxyError):
    """The model API answered with a non-success status."""
    status_code = 500

    def __init__(self, upstream_status: Optional[int], body: str, message: str = "Upstream API error"):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "status": self.upstream_status, "details": self.body}


class UpstreamTimeout(ProxyError):
    """No answer from the model API within the configured timeout."""
    status_code = 504

    def __init__(self, timeout: float):
        super().__init__(f"Upstream API timed out after {timeout:g}s")
        self.timeout = timeout


class InternalError(ProxyError):
    status_code = 500


class Unauthorized(ProxyError):
    """Shared-secret header missing or wrong."""
    status_code = 401
