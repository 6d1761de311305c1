# Typed dataclasses shared across the generator, the clients and the app.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

MODES = ("scratch", "rewrite", "image")


@dataclass
class Message:
    """Single chat turn: system, user, or assistant.

    ``content`` is plain text, or a list of parts for multi-part messages
    (text + image_url).
    """
    role: str
    content: Union[str, List[Dict[str, Any]]]

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class ModelParams:
    """LLM parameters per request."""
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class PostRequest:
    """Everything the user configured for one generation."""
    mode: str
    content: str = ""
    field: str = "Marketing"
    audience: str = "Professionals"
    theme: str = "Inform"
    word_count: int = 100
    optimize: bool = True
    image: Optional[str] = None
    image_prompt: str = ""


@dataclass
class StructuredPost:
    """Model output that parsed into a JSON object."""
    headline: str
    post: str
    hashtags: List[str] = field(default_factory=list)


@dataclass
class UnstructuredPost:
    """Model output with no usable JSON object; shown as-is."""
    raw_text: str


PostContent = Union[StructuredPost, UnstructuredPost]


def format_hashtag(tag: str) -> str:
    return tag if tag.startswith("#") else f"#{tag}"


@dataclass
class PostResult:
    """Final response from the generator, with its engagement score."""
    content: PostContent
    score: int
    raw_text: str
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_structured(self) -> bool:
        return isinstance(self.content, StructuredPost)

    @property
    def text(self) -> str:
        if isinstance(self.content, StructuredPost):
            return self.content.post
        return self.content.raw_text

    @property
    def headline(self) -> str:
        if isinstance(self.content, StructuredPost):
            return self.content.headline
        return ""

    @property
    def hashtags(self) -> List[str]:
        if isinstance(self.content, StructuredPost):
            return list(self.content.hashtags)
        return []

    def copy_text(self) -> str:
        """Post body plus hashtags, as pasted by "Copy All"."""
        tags = self.hashtags
        suffix = f"\n\n{' '.join(tags)}" if tags else ""
        return f"{self.text}{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "headline": self.headline,
            "hashtags": self.hashtags,
            "display_hashtags": [format_hashtag(t) for t in self.hashtags],
            "score": self.score,
            "structured": self.is_structured,
            "raw_text": self.raw_text,
            "copy_text": self.copy_text(),
        }
