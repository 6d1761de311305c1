# Tolerant extraction of a JSON object from noisy model output.
# Nothing in here raises: failures come back as None / UnstructuredPost.

from __future__ import annotations
import json
import re
from typing import Any, Dict, List, Optional

from .types import PostContent, StructuredPost, UnstructuredPost

SCRATCH_FIELD = "hook"

FENCE_PREFIXES = (
    "```json\n",
    "```json",
    "```javascript",
    "Here is the output:\n```json",
    "```JSON",
    "```Json",
    "```JSON\n",
    "```",
)

_OPENING_FENCE = re.compile(
    r"^```(json|json\n|Json|JSON|answer|ans|txt|text|code|output)?\s*", re.IGNORECASE
)
_CLOSING_FENCE = re.compile(r"```\s*\Z")


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        obj = json.loads(text)
    except ValueError:
        return None
    return obj if isinstance(obj, dict) else None


def _slice_braces(text: str) -> Optional[str]:
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and last > first:
        return text[first:last + 1]
    return None


def remove_scratch_field(obj: Any, key: str = SCRATCH_FIELD) -> None:
    """Delete ``key`` from every dict in the tree, walking lists element-wise."""
    if isinstance(obj, list):
        for item in obj:
            remove_scratch_field(item, key)
    elif isinstance(obj, dict):
        obj.pop(key, None)
        for value in obj.values():
            remove_scratch_field(value, key)


def parse_json_safe(text: Any) -> Optional[Dict[str, Any]]:
    """Strict parse, then retry on the first-{ .. last-} slice."""
    if not text or not isinstance(text, str):
        return None
    obj = _loads_object(text)
    if obj is not None:
        return obj
    sub = _slice_braces(text)
    return _loads_object(sub) if sub is not None else None


def clean_and_parse_json(text: Any) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of model output that may be fenced or prefixed
    with commentary. The scratch field is removed at every nesting level.
    """
    if not text or not isinstance(text, str):
        return None

    clean = text.strip()
    if clean.startswith(FENCE_PREFIXES):
        clean = _OPENING_FENCE.sub("", clean, count=1)
        clean = _CLOSING_FENCE.sub("", clean, count=1)

    sub = _slice_braces(clean)
    if sub is not None:
        clean = sub

    obj = _loads_object(clean)
    if obj is None:
        return None
    remove_scratch_field(obj)
    return obj


def _as_hashtags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v not in (None, "")]


def interpret_response(raw: str) -> PostContent:
    """Decide between structured and plain content for a model reply."""
    parsed = clean_and_parse_json(raw)
    if parsed is None:
        return UnstructuredPost(raw_text=raw or "")
    post = parsed.get("post") or ""
    headline = parsed.get("headline") or ""
    return StructuredPost(
        headline=str(headline),
        post=str(post).strip(),
        hashtags=_as_hashtags(parsed.get("hashtags")),
    )
