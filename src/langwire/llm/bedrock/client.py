"""AWS Bedrock LLM adapter.

Claude 3 and later go through the multi-turn ``Converse`` API; every other
model gets a single flattened prompt through ``InvokeModel`` with the
provider's own JSON body (see ``codec``).

Example:
    llm = (
        Bedrock()
        .with_model(BedrockModel.ANTHROPIC_CLAUDE_V2)
        .with_region("us-east-1")
        .with_temperature(0.7)
    )
    text = await llm.invoke("What is the capital of France?")
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
import logging
from typing import TYPE_CHECKING, Any

from langwire.errors import InvocationError, UnsupportedOperation
from langwire.llm.base import GenerateResult, LLMCapabilities
from langwire.llm.bedrock._errors import wrap_bedrock_error
from langwire.llm.bedrock.codec import (
    build_request_body,
    encode_request_body,
    parse_response,
)
from langwire.llm.bedrock.config import BedrockConfig
from langwire.llm.bedrock.converse import (
    build_converse_kwargs,
    extract_converse_text,
    extract_converse_usage,
)
from langwire.llm.bedrock.models import InvocationProtocol
from langwire.messages import Message, messages_to_string

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from langwire.llm.bedrock.models import ModelDescriptor, ModelSelector

logger = logging.getLogger(__name__)

_SERVICE_NAME = "bedrock-runtime"
_INPUT_TOKENS_HEADER = "x-amzn-bedrock-input-token-count"
_OUTPUT_TOKENS_HEADER = "x-amzn-bedrock-output-token-count"


@dataclass(frozen=True)
class Disconnected:
    """No service client yet; the next call creates one."""


@dataclass(frozen=True)
class Connected:
    """A live ``bedrock-runtime`` client bound to one region."""

    client: Any
    region: str | None


ConnectionState = Disconnected | Connected

_DISCONNECTED = Disconnected()


class Bedrock:
    """AWS Bedrock LLM client.

    Instances are cheap. Builder methods return a new instance that shares
    the configuration values but never the live service client; each
    instance connects on first use.
    """

    def __init__(
        self, config: BedrockConfig | None = None, *, session: Any = None
    ) -> None:
        """Initialize with a config and an optional ``boto3.Session``."""
        self._config = config if config is not None else BedrockConfig()
        self._session = session
        self._connection: ConnectionState = _DISCONNECTED
        # Serializes client creation so concurrent first calls share one client.
        self._connect_lock = asyncio.Lock()

    @property
    def config(self) -> BedrockConfig:
        return self._config

    @property
    def connection(self) -> ConnectionState:
        return self._connection

    @property
    def capabilities(self) -> LLMCapabilities:
        """Return supported feature flags for the configured model."""
        conversational = (
            self._config.descriptor.protocol is InvocationProtocol.CONVERSATIONAL
        )
        return LLMCapabilities(
            streaming=False,
            conversation=conversational,
            system_instruction=conversational,
            stop_sequences=not conversational,
        )

    # --- Builder ---

    def _derive(self, **changes: Any) -> Bedrock:
        return Bedrock(replace(self._config, **changes), session=self._session)

    def with_region(self, region: str) -> Bedrock:
        return self._derive(region=region)

    def with_model(self, model: ModelSelector | str) -> Bedrock:
        return self._derive(model=model)

    def with_temperature(self, temperature: float) -> Bedrock:
        return self._derive(temperature=temperature)

    def with_max_tokens(self, max_tokens: int) -> Bedrock:
        return self._derive(max_tokens=max_tokens)

    def with_top_p(self, top_p: float) -> Bedrock:
        return self._derive(top_p=top_p)

    def with_top_k(self, top_k: int) -> Bedrock:
        return self._derive(top_k=top_k)

    def with_stop_sequence(self, stop: str) -> Bedrock:
        """Append a stop sequence; earlier ones keep precedence."""
        return self._derive(stop_sequences=(*self._config.stop_sequences, stop))

    def with_model_kwargs(self, model_kwargs: Mapping[str, Any]) -> Bedrock:
        return self._derive(model_kwargs=model_kwargs)

    def clone(self) -> Bedrock:
        """Copy the configuration; the copy connects on its own."""
        return Bedrock(self._config, session=self._session)

    # --- Connection ---

    def _create_client(self, region: str | None) -> Any:
        if self._session is not None:
            return self._session.client(_SERVICE_NAME, region_name=region)
        try:
            import boto3
        except ImportError as e:
            raise InvocationError(
                "boto3 package not installed",
                hint="pip install boto3",
            ) from e
        return boto3.session.Session().client(_SERVICE_NAME, region_name=region)

    async def _get_client(self) -> Any:
        """Return the service client, connecting lazily for the configured region."""
        region = self._config.region
        connection = self._connection
        if isinstance(connection, Connected) and connection.region == region:
            return connection.client

        async with self._connect_lock:
            connection = self._connection
            if isinstance(connection, Connected):
                if connection.region == region:
                    return connection.client
                logger.debug(
                    "Region changed from %s to %s; dropping Bedrock client",
                    connection.region,
                    region,
                )
                self._connection = _DISCONNECTED

            try:
                client = await asyncio.to_thread(self._create_client, region)
            except asyncio.CancelledError:
                raise
            except InvocationError:
                raise
            except Exception as e:
                raise wrap_bedrock_error(
                    e, phase="connect", message="Bedrock client setup failed"
                ) from e
            logger.debug("Created %s client for region %s", _SERVICE_NAME, region)
            self._connection = Connected(client=client, region=region)
            return client

    async def aclose(self) -> None:
        """Drop the service client and release its connection pool."""
        connection = self._connection
        if isinstance(connection, Disconnected):
            return
        self._connection = _DISCONNECTED
        close = getattr(connection.client, "close", None)
        if callable(close):
            await asyncio.to_thread(close)

    # --- Generation ---

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        """Generate a reply to *messages* using the model's protocol."""
        descriptor = self._config.descriptor
        client = await self._get_client()
        if descriptor.protocol is InvocationProtocol.CONVERSATIONAL:
            return await self._converse(client, descriptor, messages)
        return await self._invoke_model(client, descriptor, messages)

    async def invoke(self, prompt: str) -> str:
        """Generate a reply to a single human prompt and return its text."""
        result = await self.generate([Message.human(prompt)])
        return result.generation

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        """Raise: streaming is not implemented for Bedrock."""
        _ = messages
        raise UnsupportedOperation(
            "Streaming is not yet implemented for Bedrock",
            hint="Use generate() and check capabilities.streaming before streaming.",
        )

    async def _converse(
        self,
        client: Any,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
    ) -> GenerateResult:
        kwargs = build_converse_kwargs(descriptor.wire_id, messages, self._config)
        try:
            response = await asyncio.to_thread(client.converse, **kwargs)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("Bedrock converse error for %s: %r", descriptor.wire_id, e)
            raise wrap_bedrock_error(
                e, phase="converse", message="Bedrock invocation error"
            ) from e

        return GenerateResult(
            generation=extract_converse_text(response),
            usage=extract_converse_usage(response),
        )

    async def _invoke_model(
        self,
        client: Any,
        descriptor: ModelDescriptor,
        messages: Sequence[Message],
    ) -> GenerateResult:
        prompt = messages_to_string(messages)
        body = build_request_body(descriptor.provider, prompt, self._config)
        payload = encode_request_body(body)

        def _call() -> tuple[bytes, dict[str, Any]]:
            response = client.invoke_model(
                modelId=descriptor.wire_id,
                body=payload,
                contentType="application/json",
                accept="application/json",
            )
            return response["body"].read(), response.get("ResponseMetadata", {})

        try:
            raw, metadata = await asyncio.to_thread(_call)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("Bedrock invoke_model error for %s: %r", descriptor.wire_id, e)
            raise wrap_bedrock_error(
                e, phase="invoke_model", message="Bedrock invocation error"
            ) from e

        return GenerateResult(
            generation=parse_response(descriptor.provider, raw),
            usage=_usage_from_headers(metadata),
        )


def _usage_from_headers(metadata: Any) -> dict[str, int]:
    """Read token counts Bedrock reports in ``InvokeModel`` response headers."""
    headers = metadata.get("HTTPHeaders") if isinstance(metadata, dict) else None
    if not isinstance(headers, dict):
        return {}
    try:
        input_tokens = int(headers[_INPUT_TOKENS_HEADER])
        output_tokens = int(headers[_OUTPUT_TOKENS_HEADER])
    except (KeyError, TypeError, ValueError):
        return {}
    return {
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": input_tokens + output_tokens,
    }
