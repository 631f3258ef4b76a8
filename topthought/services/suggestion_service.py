import logging
import re
from typing import List

from openai import AsyncOpenAI

from topthought.settings import settings

logger = logging.getLogger(__name__)

_PROMPTS = {
    "title": (
        "Suggest {count} catchy, concise blog post titles for the text below. "
        "Keep each under 80 characters."
    ),
    "description": (
        "Write {count} alternative one-paragraph descriptions (at most 2 sentences "
        "each) for a blog post with the text below."
    ),
    "tags": (
        "Suggest {count} short topical tags (one to three words, lowercase) for "
        "a blog post with the text below."
    ),
}

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


class SuggestionService:
    """Asks a generative-text model for title, description or tag ideas."""

    def __init__(
        self,
        ai_client: AsyncOpenAI | None = None,
        api_key: str | None = None,
        model: str | None = None,
    ):
        if ai_client is None:
            key = api_key or settings.OPENAI_API_KEY
            if not key:
                raise ValueError("OPENAI_API_KEY must be set to use SuggestionService")
            ai_client = AsyncOpenAI(api_key=key)
        self.ai_client = ai_client
        self.model = model or settings.OPENAI_MODEL

    async def suggest(self, kind: str, text: str, count: int = 3) -> List[str]:
        system_prompt = (
            _PROMPTS[kind].format(count=count)
            + " Answer with one suggestion per line and nothing else."
        )
        response = await self.ai_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": text},
            ],
        )
        raw = response.choices[0].message.content or ""
        logger.debug(f"Raw {kind} suggestions: {raw!r}")
        return parse_suggestions(raw, count)


def parse_suggestions(raw: str, count: int) -> List[str]:
    """Split a model answer into clean suggestion lines."""
    suggestions = []
    for line in raw.splitlines():
        cleaned = _LIST_MARKER.sub("", line).strip().strip('"').strip()
        if cleaned and cleaned not in suggestions:
            suggestions.append(cleaned)
    return suggestions[:count]
