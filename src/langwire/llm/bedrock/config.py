"""Configuration: frozen per-call tuning for Bedrock invocations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from types import MappingProxyType
from typing import Any

from dotenv import load_dotenv

from langwire.errors import InvalidModelConfiguration
from langwire.llm.bedrock.models import (
    DEFAULT_MODEL,
    ModelDescriptor,
    ModelSelector,
    to_selector,
)

load_dotenv()

DEFAULT_REGION = "us-west-2"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 512

# Checked in order, same precedence as the AWS SDKs.
_REGION_ENV_VARS: tuple[str, ...] = ("AWS_REGION", "AWS_DEFAULT_REGION")


def _default_region() -> str:
    for env_var in _REGION_ENV_VARS:
        value = os.environ.get(env_var, "").strip()
        if value:
            return value
    return DEFAULT_REGION


@dataclass(frozen=True)
class BedrockConfig:
    """Immutable configuration for Bedrock invocations.

    Any field left as *None* is simply not sent (or the provider default
    applies, see ``langwire.llm.bedrock.codec``). Region is auto-resolved
    from ``AWS_REGION`` / ``AWS_DEFAULT_REGION`` when not given.

    Example:
        config = BedrockConfig(model=BedrockModel.AMAZON_TITAN_TEXT_EXPRESS, temperature=0.2)
    """

    region: str | None = field(default_factory=_default_region)
    model: ModelSelector = DEFAULT_MODEL
    temperature: float | None = DEFAULT_TEMPERATURE
    max_tokens: int | None = DEFAULT_MAX_TOKENS
    top_p: float | None = None
    top_k: int | None = None
    #: Order matters: downstream systems truncate on the first match.
    stop_sequences: tuple[str, ...] = ()
    #: Opaque provider parameters merged into the request untouched.
    model_kwargs: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Normalize containers and validate ranges."""
        object.__setattr__(self, "model", to_selector(self.model))
        object.__setattr__(self, "stop_sequences", tuple(self.stop_sequences))

        if not isinstance(self.model_kwargs, Mapping):
            raise InvalidModelConfiguration(
                f"model_kwargs must be a mapping, got {type(self.model_kwargs).__name__}",
                hint="Pass a dict of provider-specific request fields.",
            )
        object.__setattr__(
            self, "model_kwargs", MappingProxyType(dict(self.model_kwargs))
        )

        if self.temperature is not None and not 0.0 <= self.temperature <= 1.0:
            raise InvalidModelConfiguration(
                f"temperature must be within [0, 1], got {self.temperature}",
                hint="Lower values make output more deterministic.",
            )
        if self.max_tokens is not None and self.max_tokens < 1:
            raise InvalidModelConfiguration(
                f"max_tokens must be ≥ 1, got {self.max_tokens}",
                hint="This caps the number of generated tokens per call.",
            )
        if self.top_p is not None and not 0.0 <= self.top_p <= 1.0:
            raise InvalidModelConfiguration(
                f"top_p must be within [0, 1], got {self.top_p}"
            )
        if self.top_k is not None and self.top_k < 0:
            raise InvalidModelConfiguration(f"top_k must be ≥ 0, got {self.top_k}")

    @property
    def descriptor(self) -> ModelDescriptor:
        """Resolved wire id, provider and protocol for the configured model."""
        return ModelDescriptor.resolve(self.model)

    def __str__(self) -> str:
        """Return a compact, developer-friendly representation."""
        return (
            f"BedrockConfig(region={self.region!r}, model={self.descriptor.wire_id!r}, "
            f"temperature={self.temperature}, max_tokens={self.max_tokens})"
        )

    __repr__ = __str__
