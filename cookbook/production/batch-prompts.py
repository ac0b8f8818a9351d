#!/usr/bin/env python3
"""🎯 Recipe: Answer a Batch of Prompts Concurrently

When you need to: Fan out several independent prompts over one adapter and
collect the answers in order, keeping failures per prompt.

Ingredients:
- AWS credentials with access to a Claude 3 model

What you'll learn:
- Share one `Bedrock` instance across concurrent calls (one boto3 client)
- Bound concurrency with a semaphore
- Use `asyncio.gather(..., return_exceptions=True)` to keep partial results

Difficulty: ⭐⭐
Time: ~5 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import Bedrock, BedrockModel, InvocationError

PROMPTS = [
    "What is the capital of Japan?",
    "What is 15 * 23?",
    "Name three primary colors.",
    "What year did World War II end?",
]


async def main_async(limit: int) -> None:
    llm = (
        Bedrock()
        .with_model(BedrockModel.ANTHROPIC_CLAUDE_3_SONNET)
        .with_temperature(0.5)
        .with_max_tokens(100)
    )
    gate = asyncio.Semaphore(limit)

    async def ask(prompt: str) -> str:
        async with gate:
            return await llm.invoke(prompt)

    print(f"Processing {len(PROMPTS)} prompts...\n")
    try:
        answers = await asyncio.gather(
            *(ask(p) for p in PROMPTS), return_exceptions=True
        )
    finally:
        await llm.aclose()

    for i, (prompt, answer) in enumerate(zip(PROMPTS, answers), start=1):
        print(f"--- Prompt {i}: {prompt} ---")
        if isinstance(answer, InvocationError):
            print(f"❌ {answer} (retryable={answer.retryable})\n")
        elif isinstance(answer, BaseException):
            raise answer
        else:
            print(f"Response: {answer.strip()}\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Batch prompts over Bedrock")
    parser.add_argument("--concurrency", type=int, default=2)
    args = parser.parse_args()
    asyncio.run(main_async(args.concurrency))


if __name__ == "__main__":
    main()
