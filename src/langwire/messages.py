"""Normalized conversation messages shared by every model adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from langwire.errors import InvalidInput

if TYPE_CHECKING:
    from collections.abc import Iterable

Role = Literal["system", "human", "ai", "tool"]

_ROLES: frozenset[str] = frozenset({"system", "human", "ai", "tool"})


@dataclass(frozen=True)
class Message:
    """A single conversational turn.

    Example:
        history = [Message.system("Be terse."), Message.human("Hi")]
    """

    role: Role
    content: str = ""

    def __post_init__(self) -> None:
        """Reject roles no adapter knows how to map."""
        if self.role not in _ROLES:
            raise InvalidInput(
                f"Unknown message role: {self.role!r}",
                hint="Use one of: ai, human, system, tool.",
            )
        if not isinstance(self.content, str):
            raise InvalidInput(
                f"Message content must be a string, got {type(self.content).__name__}"
            )

    @classmethod
    def system(cls, content: str) -> Message:
        return cls("system", content)

    @classmethod
    def human(cls, content: str) -> Message:
        return cls("human", content)

    @classmethod
    def ai(cls, content: str) -> Message:
        return cls("ai", content)

    @classmethod
    def tool(cls, content: str) -> Message:
        return cls("tool", content)


def messages_to_string(messages: Iterable[Message]) -> str:
    """Flatten a conversation into one prompt, one ``role: content`` line per turn.

    Per-turn structure is lost; single-prompt models only ever see this text.
    """
    return "\n".join(f"{m.role}: {m.content}" for m in messages)
