"""Real API integration tests.

These tests make real AWS Bedrock and Wikipedia calls and are intentionally
compact:
- ENABLE_API_TESTS=1 is required to run any API tests
- AWS credentials (keys, profile or shared credentials file) are required
  for the Bedrock tests
"""

from __future__ import annotations

import pytest

from langwire import Bedrock, BedrockConfig, Message, WikipediaQuery

pytestmark = [pytest.mark.api, pytest.mark.slow]


@pytest.mark.asyncio
async def test_bedrock_converse_round_trip(aws_credentials, bedrock_test_model) -> None:
    llm = Bedrock(BedrockConfig(model=bedrock_test_model, max_tokens=32, temperature=0.0))
    try:
        result = await llm.generate(
            [
                Message.system("Answer with a single word."),
                Message.human("What is the capital of France?"),
            ]
        )
    finally:
        await llm.aclose()

    assert "paris" in result.generation.lower()
    assert result.usage["output_tokens"] > 0


@pytest.mark.asyncio
async def test_wikipedia_lookup() -> None:
    wiki = WikipediaQuery().with_top_k_results(1).with_max_doc_content_length(200)
    try:
        text = await wiki.run("Rust programming language")
    finally:
        await wiki.aclose()

    assert text.startswith("Page: ")
    assert "Summary: " in text
