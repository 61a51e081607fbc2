"""OpenRouter executor package.

Exposes :class:`OpenRouterClient`; the mixins stay internal.
"""

from .client import OpenRouterClient

__all__ = ["OpenRouterClient"]
