# ============================================================
# Assistant chat sessions
# ------------------------------------------------------------
# Each session owns its transcript and an in-flight flag. One
# user action = one awaited responder call; a second send while
# the first is outstanding is rejected, not queued.
# ============================================================

from __future__ import annotations
import itertools
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from src.log import get_logger
from src.generate.errors import InvalidRequestError, PostCraftError, SessionBusyError
from src.generate.parsing import interpret_response
from src.generate.prompts import ASSISTANT_GREETING
from src.generate.types import Message, StructuredPost

DEFAULT_MAX_SESSIONS = 256

Responder = Callable[[List[Message]], Awaitable[str]]

logger = get_logger("session")


@dataclass
class ChatMessage:
    id: int
    sender: str  # "user" | "assistant"
    text: str

    def to_dict(self) -> dict:
        """Assistant replies that carry a JSON post also expose its parts."""
        data = {"id": self.id, "sender": self.sender, "text": self.text, "structured": False}
        if self.sender != "assistant":
            return data
        content = interpret_response(self.text)
        if isinstance(content, StructuredPost):
            data.update(
                structured=True,
                headline=content.headline,
                post=content.post,
                hashtags=content.hashtags,
            )
        return data


class CancelToken:
    """Flag checked once the outstanding call returns; the call itself runs to completion."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ChatSession:
    def __init__(self, session_id: str, greeting: Optional[str] = ASSISTANT_GREETING):
        self.id = session_id
        self.messages: List[ChatMessage] = []
        self.in_flight = False
        self.token: Optional[CancelToken] = None
        self._ids = itertools.count(1)
        if greeting:
            self.add("assistant", greeting)

    def add(self, sender: str, text: str) -> ChatMessage:
        msg = ChatMessage(id=next(self._ids), sender=sender, text=text)
        self.messages.append(msg)
        return msg

    def history(self) -> List[Message]:
        """Transcript in provider roles, skipping empty turns."""
        return [
            Message(role="user" if m.sender == "user" else "assistant", content=m.text)
            for m in self.messages
            if m.text
        ]

    def cancel(self) -> bool:
        if self.token is None:
            return False
        self.token.cancel()
        return True

    async def send(self, text: str, responder: Responder,
                   token: Optional[CancelToken] = None) -> Optional[ChatMessage]:
        """
        Append the user turn, await one reply and append it.

        Provider failures become an assistant message instead of an exception.
        Returns None when the token was cancelled before the reply arrived.
        """
        if not text or not text.strip():
            raise InvalidRequestError("Please enter a message.")
        if self.in_flight:
            raise SessionBusyError("A response is already being generated for this chat.")

        self.in_flight = True
        self.token = token or CancelToken()
        try:
            self.add("user", text)
            try:
                reply = await responder(self.history())
            except PostCraftError as e:
                logger.warning("chat %s failed: %s", self.id, e)
                return self.add(
                    "assistant",
                    f"Sorry, I encountered an error: {e}. Please check your Groq API key and try again.",
                )
            if self.token.cancelled:
                logger.info("chat %s: reply discarded after cancel", self.id)
                return None
            return self.add("assistant", reply)
        finally:
            self.in_flight = False
            self.token = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "in_flight": self.in_flight,
            "messages": [m.to_dict() for m in self.messages],
        }


class SessionStore:
    """
    In-memory sessions, capped at ``max_sessions``.

    Creating a session past the cap evicts the oldest idle one (the oldest
    overall if every session has a request in flight).
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, ChatSession]" = OrderedDict()

    def _evict(self) -> None:
        while len(self._sessions) >= self.max_sessions:
            victim = next(
                (sid for sid, s in self._sessions.items() if not s.in_flight),
                next(iter(self._sessions)),
            )
            del self._sessions[victim]
            logger.info("evicted chat session %s", victim)

    def create(self) -> ChatSession:
        self._evict()
        session = ChatSession(uuid.uuid4().hex)
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> ChatSession:
        return self._sessions[session_id]

    def delete(self, session_id: str) -> None:
        del self._sessions[session_id]

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
