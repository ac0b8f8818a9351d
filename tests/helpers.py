"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: fakes for the boto3 ``bedrock-runtime``
client and session so adapter tests never touch the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any


class FakeStreamingBody:
    """Stands in for botocore's StreamingBody."""

    def __init__(self, payload: bytes) -> None:
        self._payload = payload

    def read(self) -> bytes:
        return self._payload


def invoke_model_response(
    body: dict[str, Any] | bytes, headers: dict[str, str] | None = None
) -> dict[str, Any]:
    """Build an ``invoke_model`` return value around a JSON body."""
    payload = body if isinstance(body, bytes) else json.dumps(body).encode()
    return {
        "body": FakeStreamingBody(payload),
        "contentType": "application/json",
        "ResponseMetadata": {"HTTPStatusCode": 200, "HTTPHeaders": headers or {}},
    }


def converse_response(text: str, **usage: int) -> dict[str, Any]:
    """Build a ``converse`` return value with a single text block."""
    return {
        "output": {"message": {"role": "assistant", "content": [{"text": text}]}},
        "stopReason": "end_turn",
        "usage": usage,
    }


@dataclass
class FakeBedrockRuntime:
    """Records ``invoke_model``/``converse`` kwargs and replays scripted results.

    Each scripted item is returned in order; exceptions are raised.
    """

    invoke_results: list[Any] = field(default_factory=list)
    converse_results: list[Any] = field(default_factory=list)
    invoke_calls: list[dict[str, Any]] = field(default_factory=list)
    converse_calls: list[dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    def invoke_model(self, **kwargs: Any) -> Any:
        self.invoke_calls.append(kwargs)
        return self._next(self.invoke_results)

    def converse(self, **kwargs: Any) -> Any:
        self.converse_calls.append(kwargs)
        return self._next(self.converse_results)

    def close(self) -> None:
        self.closed = True

    @staticmethod
    def _next(results: list[Any]) -> Any:
        item = results.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@dataclass
class FakeSession:
    """A ``boto3.Session`` double that hands out fake runtime clients."""

    runtime: FakeBedrockRuntime = field(default_factory=FakeBedrockRuntime)
    client_calls: list[tuple[str, str | None]] = field(default_factory=list)
    error: BaseException | None = None

    def client(self, service_name: str, region_name: str | None = None) -> Any:
        self.client_calls.append((service_name, region_name))
        if self.error is not None:
            raise self.error
        return self.runtime
