# Dummy model client for local dev and testing without API calls.

import os
from typing import Any, Dict


class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"

    def complete(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        user_inputs = [m["content"] for m in payload.get("messages", []) if m.get("role") == "user"]
        text = f"[ECHO RESPONSE]\n{user_inputs[-1] if user_inputs else '(no user input)'}"
        return {
            "object": "chat.completion",
            "model": payload.get("model", self.model),
            "choices": [{"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}],
        }

    def transcribe(self, path: str, filename: str, model: str) -> Dict[str, Any]:
        size = os.path.getsize(path)
        return {"text": f"[ECHO TRANSCRIPT] {filename} ({size} bytes)"}
