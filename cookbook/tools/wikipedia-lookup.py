#!/usr/bin/env python3
"""🎯 Recipe: Look Things Up on Wikipedia for an Agent

When you need to: Give an agent a retrieval tool that returns short page
summaries, in any language edition, without writing HTTP code.

Ingredients:
- Network access to `*.wikipedia.org` (no API key)

What you'll learn:
- Register `WikipediaQuery` in a `ToolRegistry` and run it by name
- Tune `top_k_results`, `max_doc_content_length` and `lang`
- Pass a string or `{"input": ...}`; misses come back as text

Difficulty: ⭐
Time: ~3 minutes
"""

from __future__ import annotations

import argparse
import asyncio

from langwire import ToolRegistry, WikipediaQuery


async def main_async(query: str, top_k: int, max_len: int) -> None:
    wiki = (
        WikipediaQuery()
        .with_top_k_results(top_k)
        .with_max_doc_content_length(max_len)
    )
    spanish = WikipediaQuery.with_lang("es").with_top_k_results(1)
    registry = ToolRegistry([wiki])

    try:
        for tool in registry.list_tools():
            print(f"🔧 {tool['name']}: {tool['description']}\n")

        print(f"--- {query} ---")
        print(await registry.get("wikipedia-api").run(query), "\n")

        print("--- object input ---")
        print(await wiki.run({"input": "Albert Einstein"}), "\n")

        print("--- es.wikipedia.org ---")
        print(await spanish.run("Madrid"), "\n")

        print("--- no hits ---")
        print(await wiki.run("xyzzyqwertyuiopasdfgh"))
    finally:
        await wiki.aclose()
        await spanish.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Wikipedia lookup tool")
    parser.add_argument("query", nargs="?", default="Rust programming language")
    parser.add_argument("--top-k", type=int, default=2)
    parser.add_argument("--max-len", type=int, default=500)
    args = parser.parse_args()
    asyncio.run(main_async(args.query, args.top_k, args.max_len))


if __name__ == "__main__":
    main()
