"""
Well-known model slugs routed by the gateway.

Plain constants for convenience and typo safety; any other slug string is
accepted wherever a model is expected.
"""
from __future__ import annotations

from enum import Enum


class KnownModel(str, Enum):
    AUTO = "openrouter/auto"
    GPT_4O = "openai/gpt-4o"
    GPT_4O_MINI = "openai/gpt-4o-mini"
    CLAUDE_3_5_SONNET = "anthropic/claude-3.5-sonnet"
    CLAUDE_3_HAIKU = "anthropic/claude-3-haiku"
    GEMINI_PRO_1_5 = "google/gemini-pro-1.5"
    LLAMA_3_1_70B = "meta-llama/llama-3.1-70b-instruct"
    MISTRAL_LARGE = "mistralai/mistral-large"

    def __str__(self) -> str:
        return self.value


__all__ = ["KnownModel"]
