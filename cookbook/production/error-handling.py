#!/usr/bin/env python3
"""🎯 Recipe: Handle Bedrock Failures and Retry Only When It Helps

When you need to: Tell configuration mistakes from transient service errors,
show actionable hints, and retry only failures labelled retryable.

Ingredients:
- AWS credentials (a bad model id or region is used on purpose)

What you'll learn:
- Catch `LangwireError` subclasses: `InvalidModelConfiguration`,
  `SerializationError`, `InvocationError`
- Read `retryable`, `status_code`, `error_code` and `hint`
- Write a small caller-side backoff loop (langwire never retries itself)

Difficulty: ⭐⭐⭐
Time: ~5 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import (
    Bedrock,
    CustomModel,
    InvalidModelConfiguration,
    InvocationError,
    LangwireError,
    SerializationError,
)


def describe(err: LangwireError) -> None:
    kind = type(err).__name__
    print(f"❌ {kind}: {err}")
    if isinstance(err, InvocationError):
        print(
            f"   phase={err.phase} status={err.status_code} "
            f"code={err.error_code} retryable={err.retryable}"
        )
    if err.hint:
        print(f"   hint: {err.hint}")


async def invoke_with_retry(llm: Bedrock, prompt: str, attempts: int) -> str:
    delay = 1.0
    for attempt in range(1, attempts + 1):
        try:
            return await llm.invoke(prompt)
        except InvocationError as e:
            if not e.retryable or attempt == attempts:
                raise
            print(f"Attempt {attempt}/{attempts} failed ({e.error_code}); retrying in {delay:.0f}s")
            await asyncio.sleep(delay)
            delay *= 2
    raise AssertionError("unreachable")


async def main_async(attempts: int) -> None:
    print("--- Invalid tuning is rejected before any call ---")
    try:
        Bedrock().with_temperature(1.7)
    except InvalidModelConfiguration as e:
        describe(e)

    print("\n--- Unknown model id and region ---")
    broken = Bedrock().with_model(CustomModel("invalid-model-id")).with_region(
        "invalid-region"
    )
    try:
        await broken.invoke("Hello")
    except (InvocationError, SerializationError) as e:
        describe(e)
    finally:
        await broken.aclose()

    print("\n--- Retrying transient failures ---")
    llm = Bedrock()
    try:
        reply = await invoke_with_retry(llm, "Say hello in French.", attempts)
        print(f"✅ {reply}")
    except LangwireError as e:
        describe(e)
    finally:
        await llm.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Bedrock error handling")
    parser.add_argument("--attempts", type=int, default=3)
    args = parser.parse_args()
    asyncio.run(main_async(args.attempts))


if __name__ == "__main__":
    main()
