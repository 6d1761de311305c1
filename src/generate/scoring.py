# Engagement heuristic for LinkedIn-style posts.
# Thresholds and term lists are tuning values; keep them as they are.

from __future__ import annotations
import re

BASE_SCORE = 45
MAX_SCORE = 100

# ECMAScript whitespace; Python's \s differs (adds \x1c-\x1f and \x85, lacks \ufeff)
_WHITESPACE = re.compile(
    "[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)
_CTA = re.compile(
    r"connect|share|comment|discuss|learn|discover|join|reach out|let me know|thoughts",
    re.IGNORECASE | re.ASCII,
)
_EMOJI = re.compile("[\U0001F300-\U0001F9FF]")
_NUMBERS = re.compile(r"\d+%|\d+x|#\d+|\d+,\d+", re.IGNORECASE | re.ASCII)
_STRONG_VERBS = re.compile(
    r"transform|revolutionize|discover|unlock|empower|leverage|accelerate|scale",
    re.IGNORECASE | re.ASCII,
)


def word_count(text: str) -> int:
    # leading/trailing whitespace contributes empty pieces, which are counted
    return len(_WHITESPACE.split(text))


def calculate_engagement_score(text: str) -> int:
    """Return a 0-100 engagement estimate computed from text features only."""
    if not text:
        return 0

    score = BASE_SCORE

    words = word_count(text)
    if 50 <= words <= 150:
        score += 20
    elif 30 <= words <= 200:
        score += 10

    if _CTA.search(text):
        score += 15

    questions = text.count("?")
    if questions > 0:
        score += min(questions * 5, 15)

    if text.count("\n") > 2:
        score += 10

    if _EMOJI.search(text):
        score += 5

    if _NUMBERS.search(text):
        score += 10

    if _STRONG_VERBS.search(text):
        score += 10

    return max(0, min(score, MAX_SCORE))
