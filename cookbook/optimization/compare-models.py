#!/usr/bin/env python3
"""🎯 Recipe: Compare Models Across Providers and Protocols

When you need to: Run the same prompt on legacy InvokeModel models (Claude
v2, Titan), a Converse model (Claude 3) and a custom model id side by side.

Ingredients:
- AWS credentials with access to the listed models in your region

What you'll learn:
- Switch models with `with_model()` (enum, `CustomModel` or raw id)
- Read the resolved provider and protocol from `config.descriptor`
- Keep going when one model is unavailable

Difficulty: ⭐⭐
Time: ~5 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import Bedrock, BedrockModel, CustomModel, InvocationError

MODELS = [
    BedrockModel.ANTHROPIC_CLAUDE_V2,
    BedrockModel.ANTHROPIC_CLAUDE_3_HAIKU,
    BedrockModel.AMAZON_TITAN_TEXT_EXPRESS,
    CustomModel("anthropic.claude-v2:1"),
]


async def main_async(prompt: str) -> None:
    base = Bedrock().with_max_tokens(200)
    for model in MODELS:
        llm = base.with_model(model)
        d = llm.config.descriptor
        print(f"--- {d.wire_id} ({d.provider.value}, {d.protocol.value}) ---")
        try:
            print(f"Response: {(await llm.invoke(prompt)).strip()}\n")
        except InvocationError as e:
            print(f"❌ {e}")
            if e.hint:
                print(f"   hint: {e.hint}")
            print()
        finally:
            await llm.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare Bedrock models")
    parser.add_argument(
        "prompt", nargs="?", default="What is 2+2? Answer with one number."
    )
    args = parser.parse_args()
    asyncio.run(main_async(args.prompt))


if __name__ == "__main__":
    main()
