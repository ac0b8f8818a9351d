#!/usr/bin/env python3
"""🎯 Recipe: Multi-turn Conversation With a System Instruction

When you need to: Keep a short chat history and steer tone with a system
message on a Claude 3+ model (Converse API).

Ingredients:
- AWS credentials with access to a Claude 3 model

What you'll learn:
- Build a history from `Message.system/human/ai`
- Check `capabilities.conversation` before relying on turn structure
- Append the model's reply and ask a follow-up

Difficulty: ⭐⭐
Time: ~5 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import Bedrock, BedrockModel, Message


async def main_async(model: str) -> None:
    llm = Bedrock().with_model(model).with_max_tokens(300)
    caps = llm.capabilities
    if not caps.conversation:
        print(
            "⚠️  This model takes a single flattened prompt; "
            "turns are sent as 'role: content' lines."
        )

    history = [
        Message.system("You are a concise geography tutor. Answer in two sentences."),
        Message.human("Which river flows through Paris?"),
    ]
    try:
        first = await llm.generate(history)
        print(f"A1: {first.generation}\n")

        history += [
            Message.ai(first.generation),
            Message.human("How long is it?"),
        ]
        second = await llm.generate(history)
        print(f"A2: {second.generation}\n")
        print(f"💬 Turns sent: {len(history)} | usage: {second.usage}")
    finally:
        await llm.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Conversation with system prompt")
    parser.add_argument(
        "--model",
        default=BedrockModel.ANTHROPIC_CLAUDE_3_HAIKU.value,
        help="Bedrock model id",
    )
    args = parser.parse_args()
    asyncio.run(main_async(args.model))


if __name__ == "__main__":
    main()
