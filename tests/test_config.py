"""BedrockConfig defaults, environment resolution and validation."""

from __future__ import annotations

from dataclasses import replace

import pytest

from langwire.errors import InvalidModelConfiguration
from langwire.llm.bedrock.config import BedrockConfig
from langwire.llm.bedrock.models import (
    BedrockModel,
    CustomModel,
    InvocationProtocol,
    ModelProvider,
)

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    config = BedrockConfig()
    assert config.region == "us-west-2"
    assert config.temperature == 0.7
    assert config.max_tokens == 512
    assert config.model is BedrockModel.ANTHROPIC_CLAUDE_3_SONNET
    assert config.top_p is None
    assert config.top_k is None
    assert config.stop_sequences == ()
    assert dict(config.model_kwargs) == {}


def test_region_resolves_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-central-1")
    assert BedrockConfig().region == "eu-central-1"

    monkeypatch.setenv("AWS_REGION", "ap-southeast-2")
    assert BedrockConfig().region == "ap-southeast-2"


def test_explicit_region_wins_over_environment(monkeypatch) -> None:
    monkeypatch.setenv("AWS_REGION", "ap-southeast-2")
    assert BedrockConfig(region="us-east-1").region == "us-east-1"


def test_string_model_is_normalized_to_selector() -> None:
    assert BedrockConfig(model="amazon.titan-text-lite-v1").model is (
        BedrockModel.AMAZON_TITAN_TEXT_LITE
    )
    assert BedrockConfig(model="acme.unknown").model == CustomModel("acme.unknown")


def test_descriptor_follows_model() -> None:
    descriptor = BedrockConfig(model=BedrockModel.COHERE_COMMAND).descriptor
    assert descriptor.wire_id == "cohere.command-text-v14"
    assert descriptor.provider is ModelProvider.COHERE
    assert descriptor.protocol is InvocationProtocol.LEGACY


def test_stop_sequences_keep_order_and_become_a_tuple() -> None:
    config = BedrockConfig(stop_sequences=["b", "a", "b"])  # type: ignore[arg-type]
    assert config.stop_sequences == ("b", "a", "b")


def test_model_kwargs_are_copied_and_read_only() -> None:
    source = {"anthropic_version": "bedrock-2023-05-31"}
    config = BedrockConfig(model_kwargs=source)
    source["anthropic_version"] = "changed"

    assert config.model_kwargs["anthropic_version"] == "bedrock-2023-05-31"
    with pytest.raises(TypeError):
        config.model_kwargs["x"] = 1  # type: ignore[index]


def test_config_is_immutable() -> None:
    config = BedrockConfig()
    with pytest.raises(AttributeError):
        config.temperature = 0.1  # type: ignore[misc]


def test_replace_revalidates() -> None:
    config = BedrockConfig()
    with pytest.raises(InvalidModelConfiguration):
        replace(config, temperature=3.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": -0.1},
        {"temperature": 1.5},
        {"max_tokens": 0},
        {"top_p": 1.1},
        {"top_k": -1},
        {"model_kwargs": ["not", "a", "mapping"]},
    ],
)
def test_invalid_values_raise_with_configuration_error(kwargs) -> None:
    with pytest.raises(InvalidModelConfiguration):
        BedrockConfig(**kwargs)


def test_none_disables_optional_parameters() -> None:
    config = BedrockConfig(temperature=None, max_tokens=None)
    assert config.temperature is None
    assert config.max_tokens is None


def test_repr_is_compact() -> None:
    text = repr(BedrockConfig(region="us-east-1"))
    assert "us-east-1" in text
    assert "anthropic.claude-3-sonnet-20240229-v1:0" in text
