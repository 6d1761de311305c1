# ============================================================
# PostGenerator
# ------------------------------------------------------------
# Shapes the three post requests (scratch / rewrite / image) and
# the assistant chat into role/content messages, sends them through
# any model client exposing generate(messages, params), and turns
# the reply into a scored PostResult.
# ============================================================

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from src.log import get_logger
from .errors import InvalidRequestError
from .parsing import interpret_response
from .prompts import (
    ASSISTANT_SYSTEM_PROMPT,
    build_image_prompt,
    build_rewrite_prompt,
    build_scratch_prompt,
)
from .scoring import calculate_engagement_score
from .types import Message, ModelParams, PostRequest, PostResult

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")

VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
CHAT_MODEL = "llama-3.3-70b-versatile"

DEFAULT_OPERATIONS: Dict[str, Dict[str, Any]] = {
    "scratch": {"model": VISION_MODEL, "max_tokens": 512, "temperature": 0.28},
    "rewrite": {"model": VISION_MODEL, "max_tokens": 512, "temperature": 0.3},
    "image": {"model": VISION_MODEL, "max_tokens": 512, "temperature": 0.28},
    "chat": {"model": CHAT_MODEL, "max_tokens": 512, "temperature": 0.6},
}

logger = get_logger("generator")


class PostGenerator:
    def __init__(self, model_client, config_path: Optional[str] = None):
        self.model_client = model_client
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.cfg = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def params_for(self, operation: str) -> ModelParams:
        """Merge config.yaml over the built-in defaults for one operation."""
        merged = dict(DEFAULT_OPERATIONS.get(operation, {}))
        merged.update((self.cfg.get("operations") or {}).get(operation) or {})
        return ModelParams(
            model=merged.get("model"),
            temperature=merged.get("temperature", self.cfg.get("temperature", 0.35)),
            max_tokens=merged.get("max_tokens", self.cfg.get("max_tokens", 1024)),
        )

    def _complete(self, operation: str, messages: List[Message]) -> tuple:
        params = self.params_for(operation)
        logger.info("%s request model=%s", operation, params.model)
        return self.model_client.generate(messages, params)

    def _build_result(self, raw: str, meta: Dict[str, Any]) -> PostResult:
        content = interpret_response(raw)
        result = PostResult(content=content, score=0, raw_text=raw, meta=meta)
        result.score = calculate_engagement_score(result.text)
        if not result.is_structured:
            logger.info("reply had no JSON object; using raw text")
        return result

    # -------------------------
    # Post operations
    # -------------------------
    def generate_from_scratch(self, req: PostRequest) -> PostResult:
        if not req.content.strip():
            raise InvalidRequestError("Please enter content to generate from.")
        prompt = build_scratch_prompt(
            req.content, req.field, req.audience, req.theme, req.word_count, req.optimize
        )
        raw, meta = self._complete("scratch", [Message(role="user", content=prompt)])
        return self._build_result(raw, meta)

    def rewrite(self, req: PostRequest) -> PostResult:
        if not req.content.strip():
            raise InvalidRequestError("Please paste existing content to rewrite.")
        prompt = build_rewrite_prompt(
            req.content, req.field, req.audience, req.theme, req.word_count, req.optimize
        )
        raw, meta = self._complete("rewrite", [Message(role="user", content=prompt)])
        return self._build_result(raw, meta)

    def generate_from_image(self, req: PostRequest) -> PostResult:
        if not req.image:
            raise InvalidRequestError("Please select an image to analyze.")
        if not req.image.startswith("data:image/"):
            raise InvalidRequestError("Please select a valid image file.")
        prompt = build_image_prompt(
            req.field, req.audience, req.theme, req.image_prompt, req.word_count, req.optimize
        )
        message = Message(
            role="user",
            content=[
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": req.image}},
            ],
        )
        raw, meta = self._complete("image", [message])
        return self._build_result(raw, meta)

    def generate(self, req: PostRequest) -> PostResult:
        """Dispatch on req.mode."""
        if req.mode == "scratch":
            return self.generate_from_scratch(req)
        if req.mode == "rewrite":
            return self.rewrite(req)
        if req.mode == "image":
            return self.generate_from_image(req)
        raise InvalidRequestError(f"Unknown content source: {req.mode}")

    # -------------------------
    # Assistant
    # -------------------------
    def chat(self, history: List[Message]) -> str:
        """Reply to a transcript of user/assistant turns."""
        system = self.cfg.get("system_prompt") or ASSISTANT_SYSTEM_PROMPT
        messages = [Message(role="system", content=system), *history]
        text, _meta = self._complete("chat", messages)
        return text
