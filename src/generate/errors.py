# Exceptions raised by the generation layer and the chat session controller.

from __future__ import annotations
from typing import Optional


class PostCraftError(Exception):
    """Base class; every subclass carries a message fit to show the user."""


class MissingCredentialError(PostCraftError):
    """No API key configured; raised before any network call."""


class ProviderError(PostCraftError):
    """Transport failure or non-2xx response from the model provider."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidRequestError(PostCraftError):
    """User input rejected before it reaches the provider."""


class SessionBusyError(PostCraftError):
    """A chat request is already in flight for this session."""
