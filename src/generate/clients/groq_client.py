# Client for Groq's OpenAI-compatible Chat Completions endpoint.
# Talks the wire contract directly: POST {base}/chat/completions with a
# bearer key; errors come back as {"error": {"message": ...}}.

import os
from typing import Any, Dict, List, Optional, Tuple

import requests

from src.log import get_logger
from ..errors import MissingCredentialError, ProviderError
from ..types import Message, ModelParams

GROQ_BASE_URL = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
COMPLETIONS_PATH = "/chat/completions"

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TEMPERATURE = 0.35
DEFAULT_MAX_TOKENS = 1024

logger = get_logger("groq")


class GroqClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: str = GROQ_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else os.getenv("GROQ_API_KEY")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if not self.api_key:
            logger.warning("GROQ_API_KEY is not set. Groq API calls will fail.")

    def set_model(self, model: str):
        self.model = model

    @property
    def url(self) -> str:
        return f"{self.base_url}{COMPLETIONS_PATH}"

    def _payload(self, messages: List[Message], params: ModelParams) -> Dict[str, Any]:
        temperature = params.temperature if isinstance(params.temperature, (int, float)) else DEFAULT_TEMPERATURE
        return {
            "model": params.model or self.model,
            "messages": [m.to_dict() for m in messages],
            "max_tokens": int(params.max_tokens or DEFAULT_MAX_TOKENS),
            "temperature": float(temperature),
        }

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = None
        message = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        return f"Groq API Error: {message or 'Unknown error'}"

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        if not self.api_key:
            raise MissingCredentialError(
                "Groq API key is not configured. Please add GROQ_API_KEY to .env.dev"
            )

        payload = self._payload(messages, params)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        logger.debug("POST %s model=%s", self.url, payload["model"])

        try:
            resp = requests.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Groq request failed: %s", e)
            raise ProviderError(f"Groq API Error: {e}") from e

        if not resp.ok:
            message = self._error_message(resp)
            logger.error("%s (status=%s)", message, resp.status_code)
            raise ProviderError(message, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError("Groq API Error: response was not valid JSON", status_code=resp.status_code) from e

        text = _first_choice_content(data)
        meta = {"engine": "groq", "model": payload["model"]}
        return text, meta


def _first_choice_content(data: Any) -> str:
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices:
        return ""
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return ""
    return message.get("content") or ""
