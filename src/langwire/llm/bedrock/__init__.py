"""AWS Bedrock adapter."""

from .client import Bedrock, Connected, Disconnected
from .config import BedrockConfig
from .models import (
    BedrockModel,
    CustomModel,
    InvocationProtocol,
    ModelDescriptor,
    ModelProvider,
    model_id,
    protocol_for,
    provider_for,
)

__all__ = [
    "Bedrock",
    "BedrockConfig",
    "BedrockModel",
    "Connected",
    "CustomModel",
    "Disconnected",
    "InvocationProtocol",
    "ModelDescriptor",
    "ModelProvider",
    "model_id",
    "protocol_for",
    "provider_for",
]
