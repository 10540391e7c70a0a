"""
MealVibe - LLM Client.

Thin async wrapper around OpenAI chat completions. Both LLM calls
(recommendations and fridge scan) go through call_llm_text so logging and
error handling stay in one place.
"""

import logging

from openai import AsyncOpenAI

from mealvibe.config import settings
from mealvibe.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)

# Singleton client instance
_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """
    Get the async OpenAI client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        _client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.request_timeout_seconds,
        )

    return _client


async def call_llm_text(
    *,
    name: str,
    messages: list[dict],
    model: str,
    max_tokens: int,
    temperature: float,
) -> str:
    """
    Make a chat completion call and return the raw text of the first choice.

    Args:
        name: Label for logs ("recommendations", "fridge_scan")
        messages: OpenAI chat messages
        model: Model name
        max_tokens: Completion token cap
        temperature: Sampling temperature

    Raises whatever the OpenAI client raises; callers decide how to degrade.
    """
    client = get_client()

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        content = response.choices[0].message.content or ""

        log_prompt(name=name, model=model, messages=messages, response=content)
        return content

    except Exception as e:
        logger.error(f"OpenAI API error ({name}): {e}")
        log_prompt(name=name, model=model, messages=messages, error=str(e))
        raise
