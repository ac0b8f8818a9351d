"""Exception hierarchy for langwire."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class LangwireError(Exception):
    """Base exception for all langwire errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class InvalidModelConfiguration(LangwireError):
    """Model selection or tuning parameters are not usable."""


class SerializationError(LangwireError):
    """A request or response payload could not be (de)serialized."""


class InvalidRegion(LangwireError):
    """The configured region is not usable.

    Reserved: regions are not validated locally; the service rejects bad
    regions at call time and that surfaces as :class:`InvocationError`.
    """


class InvalidInput(LangwireError):
    """Caller input has the wrong shape or is empty."""


class UnsupportedOperation(LangwireError):
    """The operation exists on the interface but is not implemented."""


class InvocationError(LangwireError):
    """Remote model invocation failed.

    Carries metadata from the upstream failure so callers that implement
    their own retry policy can decide without substring matching. Nothing
    in langwire retries on its own.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        retryable: bool | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
        provider: str | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.retryable = retryable
        self.status_code = status_code
        self.error_code = error_code
        self.provider = provider
        self.phase = phase


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
