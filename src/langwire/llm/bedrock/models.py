"""Bedrock model registry: wire ids, provider families and invocation protocols."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ModelProvider(Enum):
    """Foundation-model vendor family; each has its own wire JSON schema."""

    ANTHROPIC = "anthropic"
    AI21 = "ai21"
    AMAZON = "amazon"
    COHERE = "cohere"
    META = "meta"


class InvocationProtocol(Enum):
    """How a model is invoked on Bedrock."""

    #: Single prompt in, single text out (``InvokeModel``).
    LEGACY = "legacy"
    #: Role-tagged turns plus a system side channel (``Converse``).
    CONVERSATIONAL = "conversational"


class BedrockModel(Enum):
    """Named Bedrock models. The value is the wire id sent to the service."""

    ANTHROPIC_CLAUDE_V2 = "anthropic.claude-v2"
    ANTHROPIC_CLAUDE_INSTANT_V1 = "anthropic.claude-instant-v1"
    ANTHROPIC_CLAUDE_3_SONNET = "anthropic.claude-3-sonnet-20240229-v1:0"
    ANTHROPIC_CLAUDE_3_HAIKU = "anthropic.claude-3-haiku-20240307-v1:0"
    ANTHROPIC_CLAUDE_3_OPUS = "anthropic.claude-3-opus-20240229-v1:0"
    ANTHROPIC_CLAUDE_3_5_HAIKU = "anthropic.claude-3-5-haiku-20241022-v1:0"
    ANTHROPIC_CLAUDE_4_SONNET = "anthropic.claude-sonnet-4-20250514-v1:0"
    ANTHROPIC_CLAUDE_4_5_HAIKU = "anthropic.claude-haiku-4-5-20251001-v1:0"
    ANTHROPIC_CLAUDE_4_1_OPUS = "anthropic.claude-opus-4-1-20250805-v1:0"
    ANTHROPIC_CLAUDE_4_5_OPUS = "anthropic.claude-opus-4-5-20251101-v1:0"
    ANTHROPIC_CLAUDE_4_5_SONNET = "anthropic.claude-sonnet-4-5-20250929-v1:0"
    AI21_JURASSIC_2_MID = "ai21.j2-mid-v1"
    AI21_JURASSIC_2_ULTRA = "ai21.j2-ultra-v1"
    AMAZON_TITAN_TEXT_EXPRESS = "amazon.titan-text-express-v1"
    AMAZON_TITAN_TEXT_LITE = "amazon.titan-text-lite-v1"
    COHERE_COMMAND = "cohere.command-text-v14"
    COHERE_COMMAND_LIGHT = "cohere.command-light-text-v14"
    META_LLAMA_2_CHAT_13B = "meta.llama2-13b-chat-v1"
    META_LLAMA_2_CHAT_70B = "meta.llama2-70b-chat-v1"


@dataclass(frozen=True)
class CustomModel:
    """A model addressed by a free-form wire id (new releases, ARNs, profiles)."""

    model_id: str


ModelSelector = BedrockModel | CustomModel

DEFAULT_MODEL = BedrockModel.ANTHROPIC_CLAUDE_3_SONNET

# Pure data - the whole registry is these tables.
_NAMED_PROVIDERS: dict[BedrockModel, ModelProvider] = {
    m: ModelProvider(m.value.split(".", 1)[0]) for m in BedrockModel
}

_CONVERSATIONAL_MODELS: frozenset[BedrockModel] = frozenset(
    {
        BedrockModel.ANTHROPIC_CLAUDE_3_SONNET,
        BedrockModel.ANTHROPIC_CLAUDE_3_HAIKU,
        BedrockModel.ANTHROPIC_CLAUDE_3_OPUS,
        BedrockModel.ANTHROPIC_CLAUDE_3_5_HAIKU,
        BedrockModel.ANTHROPIC_CLAUDE_4_SONNET,
        BedrockModel.ANTHROPIC_CLAUDE_4_5_HAIKU,
        BedrockModel.ANTHROPIC_CLAUDE_4_1_OPUS,
        BedrockModel.ANTHROPIC_CLAUDE_4_5_OPUS,
        BedrockModel.ANTHROPIC_CLAUDE_4_5_SONNET,
    }
)

# Checked in order; first match wins.
_PROVIDER_PREFIXES: tuple[tuple[str, ModelProvider], ...] = (
    ("anthropic.", ModelProvider.ANTHROPIC),
    ("ai21.", ModelProvider.AI21),
    ("amazon.", ModelProvider.AMAZON),
    ("cohere.", ModelProvider.COHERE),
    ("meta.", ModelProvider.META),
)

_CONVERSATIONAL_MARKERS: tuple[str, ...] = ("claude-3-", "claude-3-5-", "claude-4-")


def to_selector(model: ModelSelector | str) -> ModelSelector:
    """Coerce a string into a selector, preferring a named model when one matches."""
    if isinstance(model, (BedrockModel, CustomModel)):
        return model
    try:
        return BedrockModel(model)
    except ValueError:
        return CustomModel(model)


def model_id(model: ModelSelector) -> str:
    """Return the wire id the service expects for *model*."""
    if isinstance(model, CustomModel):
        return model.model_id
    return model.value


def provider_for(model: ModelSelector) -> ModelProvider:
    """Return the provider family for *model*.

    Custom ids are inferred from their prefix. Unrecognized ids fall back to
    anthropic rather than failing.
    """
    if isinstance(model, BedrockModel):
        return _NAMED_PROVIDERS[model]
    for prefix, provider in _PROVIDER_PREFIXES:
        if model.model_id.startswith(prefix):
            return provider
    return ModelProvider.ANTHROPIC


def protocol_for(model: ModelSelector) -> InvocationProtocol:
    """Return which invocation protocol *model* requires."""
    if isinstance(model, BedrockModel):
        if model in _CONVERSATIONAL_MODELS:
            return InvocationProtocol.CONVERSATIONAL
        return InvocationProtocol.LEGACY
    if any(marker in model.model_id for marker in _CONVERSATIONAL_MARKERS):
        return InvocationProtocol.CONVERSATIONAL
    return InvocationProtocol.LEGACY


@dataclass(frozen=True)
class ModelDescriptor:
    """Resolved identity of a model: what to send, how to encode, how to call."""

    wire_id: str
    provider: ModelProvider
    protocol: InvocationProtocol

    @classmethod
    def resolve(cls, model: ModelSelector | str) -> ModelDescriptor:
        selector = to_selector(model)
        return cls(
            wire_id=model_id(selector),
            provider=provider_for(selector),
            protocol=protocol_for(selector),
        )
