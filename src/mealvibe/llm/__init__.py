"""LLM client and prompt logging."""

from .client import call_llm_text, get_client

__all__ = ["call_llm_text", "get_client"]
