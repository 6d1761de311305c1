# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import PostGenerator
from .types import (
    Message,
    ModelParams,
    PostRequest,
    PostResult,
    StructuredPost,
    UnstructuredPost,
)
from .parsing import clean_and_parse_json, parse_json_safe
from .scoring import calculate_engagement_score
from .clients.echo_dev_client import EchoDevClient

__all__ = [
    "PostGenerator",
    "Message",
    "ModelParams",
    "PostRequest",
    "PostResult",
    "StructuredPost",
    "UnstructuredPost",
    "clean_and_parse_json",
    "parse_json_safe",
    "calculate_engagement_score",
    "EchoDevClient",
]
