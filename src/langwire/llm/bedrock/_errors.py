"""Map boto3/botocore failures into InvocationError with stable metadata.

langwire never retries; ``retryable`` is only a label for callers that run
their own retry policy.
"""

from __future__ import annotations

import asyncio
from typing import Any

from botocore.exceptions import (
    BotoCoreError,
    ConnectionError as BotoConnectionError,
    NoCredentialsError,
    NoRegionError,
)

from langwire.errors import InvocationError, _walk_exception_chain

# HTTP statuses a caller-side retry may reasonably retry.
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 409, 429, 500, 502, 503, 504})

_RETRYABLE_ERROR_CODES: frozenset[str] = frozenset(
    {
        "ThrottlingException",
        "ServiceUnavailableException",
        "ModelTimeoutException",
        "InternalServerException",
        "TooManyRequestsException",
        "ModelNotReadyException",
    }
)

_AUTH_ERROR_CODES: frozenset[str] = frozenset(
    {
        "AccessDeniedException",
        "UnrecognizedClientException",
        "ExpiredTokenException",
        "InvalidSignatureException",
    }
)


def _client_error_response(exc: BaseException) -> dict[str, Any] | None:
    response = getattr(exc, "response", None)
    return response if isinstance(response, dict) else None


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        response = _client_error_response(e)
        if response is not None:
            metadata = response.get("ResponseMetadata")
            value = (
                metadata.get("HTTPStatusCode") if isinstance(metadata, dict) else None
            )
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
    return None


def extract_error_code(exc: BaseException) -> str | None:
    """Walk the exception chain to find an AWS error code (``ThrottlingException``...)."""
    for e in _walk_exception_chain(exc):
        response = _client_error_response(e)
        if response is None:
            continue
        error = response.get("Error")
        code = error.get("Code") if isinstance(error, dict) else None
        if isinstance(code, str) and code:
            return code
    return None


def _hint_for(exc: BaseException, error_code: str | None) -> str | None:
    for e in _walk_exception_chain(exc):
        if isinstance(e, NoCredentialsError):
            return (
                "No AWS credentials found (set AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY, "
                "AWS_PROFILE, or use an IAM role)."
            )
        if isinstance(e, NoRegionError):
            return "Set a region with Bedrock.with_region(...) or AWS_REGION."
    if error_code in _AUTH_ERROR_CODES:
        return "Check credentials and that they allow bedrock:InvokeModel."
    if error_code == "ResourceNotFoundException":
        return "Check the model id and that it is enabled in this region."
    return None


def wrap_bedrock_error(
    exc: BaseException,
    *,
    phase: str,
    message: str | None = None,
) -> InvocationError:
    """Map a transport or service exception into InvocationError."""
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    # Already wrapped: fill in missing context only.
    if isinstance(exc, InvocationError):
        if exc.provider is None:
            exc.provider = "bedrock"
        if exc.phase is None:
            exc.phase = phase
        return exc

    status_code = extract_status_code(exc)
    error_code = extract_error_code(exc)

    retryable = False
    if isinstance(status_code, int) and status_code in RETRYABLE_STATUS_CODES:
        retryable = True
    elif error_code in _RETRYABLE_ERROR_CODES:
        retryable = True
    else:
        for e in _walk_exception_chain(exc):
            if isinstance(e, BotoConnectionError):
                retryable = True
                break

    msg = message or f"Bedrock {phase} failed"
    notes = []
    if error_code:
        notes.append(error_code)
    if isinstance(status_code, int):
        notes.append(f"status={status_code}")
    note = f" ({', '.join(notes)})" if notes else ""
    cause = str(exc)
    if not cause and isinstance(exc, BotoCoreError):
        cause = type(exc).__name__
    return InvocationError(
        f"{msg}{note}: {cause}" if cause else f"{msg}{note}",
        hint=_hint_for(exc, error_code),
        retryable=retryable,
        status_code=status_code,
        error_code=error_code,
        provider="bedrock",
        phase=phase,
    )
