"""Request shaping for Bedrock's multi-turn ``Converse`` API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from langwire.llm.bedrock.config import BedrockConfig
    from langwire.messages import Message

# Converse has no tool-result turn for plain text, so tool output goes in as user.
_CONVERSE_ROLES: dict[str, str] = {
    "human": "user",
    "ai": "assistant",
    "tool": "user",
}


def to_converse_messages(
    messages: Iterable[Message],
) -> tuple[str | None, list[dict[str, Any]]]:
    """Split *messages* into a system instruction and ordered Converse turns.

    The system instruction travels in its own request field. If several
    system messages are present the last one wins.
    """
    system: str | None = None
    turns: list[dict[str, Any]] = []
    for message in messages:
        if message.role == "system":
            system = message.content
            continue
        turns.append(
            {
                "role": _CONVERSE_ROLES[message.role],
                "content": [{"text": message.content}],
            }
        )
    return system, turns


def build_inference_config(config: BedrockConfig) -> dict[str, Any]:
    """Map tuning parameters onto ``inferenceConfig``.

    Stop sequences are left out: they are model-specific under Converse.
    """
    inference: dict[str, Any] = {}
    if config.max_tokens is not None:
        inference["maxTokens"] = config.max_tokens
    if config.temperature is not None:
        inference["temperature"] = config.temperature
    if config.top_p is not None:
        inference["topP"] = config.top_p
    return inference


def build_converse_kwargs(
    model_id: str, messages: Iterable[Message], config: BedrockConfig
) -> dict[str, Any]:
    """Assemble keyword arguments for ``bedrock-runtime`` ``converse``."""
    system, turns = to_converse_messages(messages)
    kwargs: dict[str, Any] = {
        "modelId": model_id,
        "messages": turns,
        "inferenceConfig": build_inference_config(config),
    }
    if system is not None:
        kwargs["system"] = [{"text": system}]
    if config.model_kwargs:
        kwargs["additionalModelRequestFields"] = dict(config.model_kwargs)
    return kwargs


def extract_converse_text(response: Any) -> str:
    """Return the first text block of a Converse response, or ``""``."""
    if not isinstance(response, dict):
        return ""
    output = response.get("output")
    message = output.get("message") if isinstance(output, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, list) or not content:
        return ""
    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    return text if isinstance(text, str) else ""


def extract_converse_usage(response: Any) -> dict[str, int]:
    """Normalize Converse token usage to input/output/total counts."""
    usage = response.get("usage") if isinstance(response, dict) else None
    if not isinstance(usage, dict):
        return {}
    input_tokens = int(usage.get("inputTokens", 0))
    output_tokens = int(usage.get("outputTokens", 0))
    return {
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": int(usage.get("totalTokens", input_tokens + output_tokens)),
    }
