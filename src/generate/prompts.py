# Prompt templates for post generation and the strategy assistant,
# plus the option lists offered to the user.

from __future__ import annotations
from typing import Optional

FIELDS = [
    "Money Exchange",
    "Forex Currencies",
    "Travels & Tourism",
    "Marketing",
    "Technology",
    "Business",
    "Motivation",
    "Finance",
]
AUDIENCES = ["Professionals", "Members", "Founders", "Students", "Executives"]
THEMES = ["Inform", "Motivate", "Engage", "Promote", "Inspire"]
WORD_COUNTS = [50, 100, 200]

ASSISTANT_SYSTEM_PROMPT = (
    "You are PostCraft AI Assistant, an expert in LinkedIn content strategy, copywriting, "
    "and social media marketing. Help users refine posts, answer strategy questions, and "
    "optimize content for engagement. Be concise (under 200 words), professional, and "
    "actionable. Provide specific examples when helpful."
)

ASSISTANT_GREETING = (
    "Hello! I'm your PostCraft AI Assistant. I can help you refine your posts, answer "
    "questions about content strategy, and provide engagement insights. "
    "How can I help you today?"
)

QUICK_QUESTIONS = [
    "How can I improve my post?",
    "What's the best time to post?",
    "Can you suggest a catchy headline?",
    "How do I grow my audience?",
]

OUTPUT_RULE = (
    "OUTPUT: Return ONLY valid JSON with these keys: "
    "extractedText, headline, post, hashtags (array)."
)

OPTIMIZE_RULE = (
    "- Optimize for engagement: include a strong call-to-action, use questions to drive "
    "comments, and use line breaks for readability."
)


def _instructions(first_step: str, word_count: int, optimize: bool) -> str:
    return f"""INSTRUCTIONS:
- {first_step}
- Create a professional, engaging LinkedIn post (under {word_count} words)
- Include 2-3 relevant hashtags
- Incorporate user context if provided
- Keep the tone professional yet engaging
{OPTIMIZE_RULE if optimize else ''}
- Metrics: 
  - Target word count: {word_count}
  - Optimize for engagement: {'Yes' if optimize else 'No'}"""


def build_scratch_prompt(content: str, field: str, audience: str, theme: str,
                         word_count: int = 100, optimize: bool = True) -> str:
    return f"""You are an expert at crafting LinkedIn posts from ideas.

{_instructions("Extract the key message from the idea", word_count, optimize)}

INPUT:
- Idea: {content}
- Field: {field}
- Audience: {audience}
- Goal: {theme}

{OUTPUT_RULE}"""


def build_rewrite_prompt(existing: str, field: str, audience: str, theme: str,
                         word_count: int = 100, optimize: bool = True) -> str:
    return f"""You are an expert LinkedIn editor. Rewrite the content below to be more crisp, catchy, and compelling for LinkedIn readers.

{_instructions("Extract the key message from the content", word_count, optimize)}

ORIGINAL CONTENT:
{existing}

CONTEXT:
- Field: {field}
- Audience: {audience}
- Goal: {theme}

{OUTPUT_RULE}"""


def build_image_prompt(field: str, audience: str, theme: str,
                       user_context: Optional[str] = None,
                       word_count: int = 100, optimize: bool = True) -> str:
    context_line = f"- User context: {user_context}" if user_context else ""
    return f"""You are an expert at extracting insights from images and crafting LinkedIn posts.

{_instructions("Extract key insights or message from the image", word_count, optimize)}

INPUT:
- Image (please analyze)
{context_line}
- Field: {field}
- Audience: {audience}
- Goal: {theme}

{OUTPUT_RULE}"""
