"""Model adapters."""

from .base import LLM, GenerateResult, LLMCapabilities

__all__ = [
    "LLM",
    "GenerateResult",
    "LLMCapabilities",
]
