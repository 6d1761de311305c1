# Client for any OpenAI-compatible Chat Completions API via the official SDK.
# Same interface as GroqClient: generate(messages, params) -> (text, meta).

import os
from typing import List, Tuple, Dict, Any, Optional

import openai
from openai import OpenAI

from src.log import get_logger
from ..errors import MissingCredentialError, ProviderError
from ..types import Message, ModelParams

logger = get_logger("openai")


class OpenAIClient:
    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.model = model
        self.api_key = api_key if api_key is not None else os.getenv("OPENAI_API_KEY")
        self.base_url = base_url
        self.timeout = timeout
        self._client: Optional[OpenAI] = None
        if not self.api_key:
            logger.warning("OPENAI_API_KEY is not set. OpenAI API calls will fail.")

    def set_model(self, model: str):
        self.model = model

    def _get_client(self) -> OpenAI:
        if not self.api_key:
            raise MissingCredentialError(
                "OpenAI API key is not configured. Please add OPENAI_API_KEY to .env.dev"
            )
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout)
        return self._client

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        client = self._get_client()
        model = params.model or self.model
        try:
            resp = client.chat.completions.create(
                model=model,
                messages=[m.to_dict() for m in messages],
                temperature=params.temperature if params.temperature is not None else 0.35,
                max_tokens=params.max_tokens or 1024,
            )
        except openai.APIStatusError as e:
            logger.error("OpenAI API error (status=%s): %s", e.status_code, e.message)
            raise ProviderError(f"OpenAI API Error: {e.message}", status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error("OpenAI request failed: %s", e)
            raise ProviderError(f"OpenAI API Error: {e}") from e

        text = (resp.choices[0].message.content or "") if resp.choices else ""
        meta = {"engine": "openai", "model": model}
        return text, meta
