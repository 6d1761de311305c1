# Offline model client for local dev and tests: replies without any API call.

import json
from typing import List, Tuple, Dict, Any
from ..types import Message, ModelParams


class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"

    def set_model(self, model: str):
        self.model = model

    @staticmethod
    def _last_user_text(messages: List[Message]) -> str:
        for m in reversed(messages):
            if m.role != "user":
                continue
            if isinstance(m.content, str):
                return m.content
            parts = [p.get("text", "") for p in m.content if p.get("type") == "text"]
            return "\n".join(parts)
        return "(no user input)"

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        user_text = self._last_user_text(messages)
        if "Return ONLY valid JSON" in user_text:
            text = json.dumps({
                "extractedText": "",
                "headline": "[ECHO] Draft headline",
                "post": f"[ECHO RESPONSE]\n{user_text.splitlines()[0]}",
                "hashtags": ["#echo"],
            })
        else:
            text = f"[ECHO RESPONSE]\n{user_text}"
        meta = {"engine": "echo", "model": params.model or self.model,
                "temp": params.temperature, "max_tokens": params.max_tokens}
        return text, meta
