#!/usr/bin/env python3
"""🎯 Recipe: Tune Sampling and Stop Sequences

When you need to: Control temperature, token budget, top-p and several stop
sequences on a text-completion model, or pass provider-only fields.

Ingredients:
- AWS credentials with access to `anthropic.claude-v2`

What you'll learn:
- Chain `with_temperature/with_max_tokens/with_top_p/with_stop_sequence`
- Stop sequences keep the order you add them
- Send provider-specific fields with `with_model_kwargs()`
- Streaming is not available yet: check `capabilities.streaming`

Difficulty: ⭐⭐
Time: ~5 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import Bedrock, BedrockModel, UnsupportedOperation


async def main_async(region: str) -> None:
    focused = (
        Bedrock()
        .with_model(BedrockModel.ANTHROPIC_CLAUDE_V2)
        .with_region(region)
        .with_temperature(0.3)
        .with_max_tokens(500)
        .with_top_p(0.9)
        .with_stop_sequence("\n\n")
    )
    with_stops = (
        Bedrock()
        .with_model(BedrockModel.ANTHROPIC_CLAUDE_V2)
        .with_region(region)
        .with_stop_sequence("END")
        .with_stop_sequence("DONE")
        .with_stop_sequence("FINISHED")
        .with_model_kwargs({"anthropic_version": "bedrock-2023-05-31"})
    )
    print(f"⚙️  {focused.config}")
    print(f"🛑 Stop sequences: {with_stops.config.stop_sequences}\n")

    try:
        prompt = "Write a haiku about programming."
        print(f"Prompt: {prompt}\nResponse:\n{await focused.invoke(prompt)}\n")

        prompt = "Count from 1 to 10, then write END."
        print(f"Prompt: {prompt}\nResponse:\n{await with_stops.invoke(prompt)}\n")

        if not focused.capabilities.streaming:
            try:
                await focused.stream([])
            except UnsupportedOperation as e:
                print(f"ℹ️  {e} ({e.hint})")
    finally:
        await focused.aclose()
        await with_stops.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Advanced Bedrock tuning")
    parser.add_argument("--region", default="us-west-2")
    args = parser.parse_args()
    asyncio.run(main_async(args.region))


if __name__ == "__main__":
    main()
