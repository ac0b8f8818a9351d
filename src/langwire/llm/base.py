"""LLM protocol: minimal interface shared by model adapters."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from langwire.messages import Message


@dataclass(frozen=True)
class LLMCapabilities:
    """Feature flags exposed by adapters.

    Lets callers branch on what an adapter can do instead of on which
    methods happen to exist.
    """

    streaming: bool = False
    conversation: bool = False
    system_instruction: bool = False
    stop_sequences: bool = False


@dataclass
class GenerateResult:
    """Text produced by one generation call."""

    generation: str = ""
    usage: dict[str, int] = field(default_factory=dict)


@runtime_checkable
class LLM(Protocol):
    """Minimal adapter protocol: generate, invoke, stream."""

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        """Generate a reply to a conversation."""
        ...

    async def invoke(self, prompt: str) -> str:
        """Generate a reply to a single human prompt."""
        ...

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        """Stream a reply chunk by chunk."""
        ...

    @property
    def capabilities(self) -> LLMCapabilities:
        """Feature capabilities for caller-side branching."""
        ...
