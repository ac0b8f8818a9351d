#!/usr/bin/env python3
"""🎯 Recipe: Ask Bedrock a Single Question

When you need to: Send one prompt to a Bedrock model and print the reply,
with nothing but AWS credentials configured.

Ingredients:
- AWS credentials (environment, `AWS_PROFILE` or an IAM role)
- Bedrock model access for the chosen model in your region

What you'll learn:
- Build a `Bedrock` adapter with defaults and the builder methods
- Use `invoke()` for one prompt and `generate()` for token usage
- Release the boto3 client with `aclose()`

Difficulty: ⭐
Time: ~2 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import Bedrock, BedrockModel, Message


async def main_async(question: str, region: str | None) -> None:
    llm = Bedrock().with_model(BedrockModel.ANTHROPIC_CLAUDE_3_SONNET)
    if region:
        llm = llm.with_region(region)

    try:
        print(f"Asking: {question}")
        print(f"Response: {await llm.invoke(question)}\n")

        result = await llm.generate(
            [Message.human("Explain quantum computing in simple terms.")]
        )
        print(f"Response:\n{result.generation}\n")
        print(f"📊 Usage: {result.usage or 'not reported'}")
    finally:
        await llm.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Basic Bedrock invocation")
    parser.add_argument(
        "question",
        nargs="?",
        default="What is the capital of France?",
        help="Prompt to send",
    )
    parser.add_argument("--region", default=None, help="AWS region override")
    args = parser.parse_args()
    asyncio.run(main_async(args.question, args.region))


if __name__ == "__main__":
    main()
