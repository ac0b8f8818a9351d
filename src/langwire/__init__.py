"""langwire: LLM adapters and agent tools.

Public API:
    - Bedrock: AWS Bedrock chat/completion adapter
    - BedrockConfig, BedrockModel, CustomModel: model selection and tuning
    - Message: normalized conversation turns
    - WikipediaQuery: Wikipedia summary tool for agents
"""

from __future__ import annotations

import logging

from langwire.errors import (
    InvalidInput,
    InvalidModelConfiguration,
    InvalidRegion,
    InvocationError,
    LangwireError,
    SerializationError,
    UnsupportedOperation,
)
from langwire.llm import LLM, GenerateResult, LLMCapabilities
from langwire.llm.bedrock import Bedrock, BedrockConfig, BedrockModel, CustomModel
from langwire.messages import Message, messages_to_string
from langwire.tools import Tool, ToolRegistry, WikipediaQuery, WikipediaQueryOptions

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("langwire")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("langwire").addHandler(logging.NullHandler())

__all__ = [
    "LLM",
    "Bedrock",
    "BedrockConfig",
    "BedrockModel",
    "CustomModel",
    "GenerateResult",
    "InvalidInput",
    "InvalidModelConfiguration",
    "InvalidRegion",
    "InvocationError",
    "LLMCapabilities",
    "LangwireError",
    "Message",
    "SerializationError",
    "Tool",
    "ToolRegistry",
    "UnsupportedOperation",
    "WikipediaQuery",
    "WikipediaQueryOptions",
    "messages_to_string",
]
