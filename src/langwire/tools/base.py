"""Tool protocol and a small name-keyed registry for agents."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from langwire.errors import InvalidInput


@runtime_checkable
class Tool(Protocol):
    """A self-describing callable an agent can choose by name."""

    @property
    def name(self) -> str:
        """Unique identifier shown to the model."""
        ...

    @property
    def description(self) -> str:
        """What the tool does and what input it expects."""
        ...

    async def run(self, input: Any) -> str:
        """Execute the tool and return text for the model."""
        ...


class ToolRegistry:
    """Tools keyed by name. Registering a name again replaces the old tool."""

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools or ():
            self.register(tool)

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        """Look up a tool by name."""
        try:
            return self._tools[name]
        except KeyError:
            known = ", ".join(sorted(self._tools)) or "none"
            raise InvalidInput(
                f"Tool not found: {name}", hint=f"Registered tools: {known}."
            ) from None

    def list_tools(self) -> list[dict[str, str]]:
        """Name and description of every tool, sorted by name for stable prompts."""
        return [
            {"name": tool.name, "description": tool.description}
            for _, tool in sorted(self._tools.items())
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
