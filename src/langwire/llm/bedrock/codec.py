"""Request/response codec for single-prompt (``InvokeModel``) Bedrock models.

Every provider family speaks its own JSON dialect. Each one owns a
``ProviderCodec`` entry in ``_CODECS``; supporting another family means
adding an entry, never touching the existing ones.

Defaults below are the values sent when a tuning parameter is unset.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import json
from typing import TYPE_CHECKING, Any

from langwire.errors import InvalidModelConfiguration, SerializationError
from langwire.llm.bedrock.models import ModelProvider

if TYPE_CHECKING:
    from langwire.llm.bedrock.config import BedrockConfig

_DEFAULT_MAX_TOKENS = 512
_DEFAULT_TEMPERATURE = 0.7

_HUMAN_PREFIXES: tuple[str, ...] = ("Human:", "\n\nHuman:")


@dataclass(frozen=True)
class ProviderCodec:
    """Request builder and response parser for one provider family."""

    build: Callable[[str, BedrockConfig], dict[str, Any]]
    parse: Callable[[Any], str]


def format_prompt(provider: ModelProvider | str, prompt: str) -> str:
    """Wrap *prompt* in the turn markers the provider expects.

    Only anthropic text-completion models need markers; an already wrapped
    prompt passes through, so formatting twice is harmless.
    """
    if _coerce_provider(provider) is not ModelProvider.ANTHROPIC:
        return prompt
    if prompt.startswith(_HUMAN_PREFIXES):
        return prompt
    return f"\n\nHuman: {prompt}\n\nAssistant:"


def build_request_body(
    provider: ModelProvider | str, prompt: str, config: BedrockConfig
) -> dict[str, Any]:
    """Build the provider-specific ``InvokeModel`` body for *prompt*.

    ``config.model_kwargs`` is merged over the top level untouched.
    """
    codec = _codec_for(provider)
    body = codec.build(format_prompt(provider, prompt), config)
    body.update(config.model_kwargs)
    return body


def encode_request_body(body: dict[str, Any]) -> bytes:
    """Serialize a request body to the bytes sent on the wire."""
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Could not serialize request body: {e}",
            hint="model_kwargs values must be JSON-serializable.",
        ) from e


def parse_response(provider: ModelProvider | str, raw: bytes | str) -> str:
    """Extract the generated text from a provider response body.

    A missing field yields ``""``; only malformed JSON is an error.
    """
    codec = _codec_for(provider)
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Malformed response body: {e}") from e
    return codec.parse(payload)


def _dig(payload: Any, *path: str | int) -> str:
    """Follow *path* through dicts/lists; anything missing or non-text is ``""``."""
    node = payload
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return ""
        elif not isinstance(node, dict) or key not in node:
            return ""
        node = node[key]
    return node if isinstance(node, str) else ""


def _or(value: Any, default: Any) -> Any:
    return default if value is None else value


# --- Per-provider dialects ---


def _build_anthropic(prompt: str, config: BedrockConfig) -> dict[str, Any]:
    body: dict[str, Any] = {
        "prompt": prompt,
        "max_tokens_to_sample": _or(config.max_tokens, _DEFAULT_MAX_TOKENS),
    }
    if config.temperature is not None:
        body["temperature"] = config.temperature
    if config.top_p is not None:
        body["top_p"] = config.top_p
    if config.top_k is not None:
        body["top_k"] = config.top_k
    if config.stop_sequences:
        body["stop_sequences"] = list(config.stop_sequences)
    return body


def _build_ai21(prompt: str, config: BedrockConfig) -> dict[str, Any]:
    return {
        "prompt": prompt,
        "maxTokens": _or(config.max_tokens, _DEFAULT_MAX_TOKENS),
        "temperature": _or(config.temperature, _DEFAULT_TEMPERATURE),
        "topP": _or(config.top_p, 1.0),
    }


def _build_amazon(prompt: str, config: BedrockConfig) -> dict[str, Any]:
    return {
        "inputText": prompt,
        "textGenerationConfig": {
            "maxTokenCount": _or(config.max_tokens, _DEFAULT_MAX_TOKENS),
            "temperature": _or(config.temperature, _DEFAULT_TEMPERATURE),
            "topP": _or(config.top_p, 1.0),
            "stopSequences": list(config.stop_sequences),
        },
    }


def _build_cohere(prompt: str, config: BedrockConfig) -> dict[str, Any]:
    return {
        "prompt": prompt,
        "max_tokens": _or(config.max_tokens, _DEFAULT_MAX_TOKENS),
        "temperature": _or(config.temperature, _DEFAULT_TEMPERATURE),
        "p": _or(config.top_p, 0.9),
        "k": _or(config.top_k, 0),
        "stop_sequences": list(config.stop_sequences),
    }


def _build_meta(prompt: str, config: BedrockConfig) -> dict[str, Any]:
    return {
        "prompt": prompt,
        "max_gen_len": _or(config.max_tokens, _DEFAULT_MAX_TOKENS),
        "temperature": _or(config.temperature, _DEFAULT_TEMPERATURE),
        "top_p": _or(config.top_p, 0.9),
    }


_CODECS: dict[ModelProvider, ProviderCodec] = {
    ModelProvider.ANTHROPIC: ProviderCodec(
        build=_build_anthropic,
        parse=lambda p: _dig(p, "completion"),
    ),
    ModelProvider.AI21: ProviderCodec(
        build=_build_ai21,
        parse=lambda p: _dig(p, "completions", 0, "data", "text"),
    ),
    ModelProvider.AMAZON: ProviderCodec(
        build=_build_amazon,
        parse=lambda p: _dig(p, "results", 0, "outputText"),
    ),
    ModelProvider.COHERE: ProviderCodec(
        build=_build_cohere,
        parse=lambda p: _dig(p, "generations", 0, "text"),
    ),
    ModelProvider.META: ProviderCodec(
        build=_build_meta,
        parse=lambda p: _dig(p, "generation"),
    ),
}


def _coerce_provider(provider: ModelProvider | str) -> ModelProvider | None:
    if isinstance(provider, ModelProvider):
        return provider
    try:
        return ModelProvider(provider)
    except ValueError:
        return None


def _codec_for(provider: ModelProvider | str) -> ProviderCodec:
    resolved = _coerce_provider(provider)
    codec = _CODECS.get(resolved) if resolved is not None else None
    if codec is None:
        label = provider.value if isinstance(provider, ModelProvider) else provider
        raise InvalidModelConfiguration(
            f"Unsupported model provider: {label}",
            hint="Supported providers: " + ", ".join(p.value for p in _CODECS),
        )
    return codec
