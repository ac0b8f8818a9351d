"""Wikipedia summary tool backed by the MediaWiki API.

Searches Wikipedia for a query, fetches the introductory extract of each hit
and returns them as one text blob an agent can read::

    wiki = WikipediaQuery().with_top_k_results(2)
    text = await wiki.run("Rust programming language")

Lookup failures come back as text, not exceptions; only malformed input
raises (:class:`~langwire.errors.InvalidInput`).
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, replace
import logging
from typing import Any

import httpx

from langwire.errors import InvalidInput, LangwireError

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_S = 10.0
_USER_AGENT = "langwire-wikipedia-tool/1.0"

NO_CONTENT_MESSAGE = "No page content could be retrieved"


class PageNotFound(LangwireError):
    """The extract endpoint returned no page for a title."""


@dataclass(frozen=True)
class WikipediaQueryOptions:
    """Tuning for Wikipedia lookups."""

    #: Maximum number of search hits to fetch.
    top_k_results: int = 3
    #: Maximum characters kept from each page extract.
    max_doc_content_length: int = 4000
    #: Two-letter language code; selects the ``{lang}.wikipedia.org`` host.
    lang: str = "en"

    def __post_init__(self) -> None:
        """Reject limits that would make slicing misbehave."""
        if self.top_k_results < 1:
            raise InvalidInput(
                f"top_k_results must be ≥ 1, got {self.top_k_results}",
                hint="This is the number of search hits fetched per query.",
            )
        if self.max_doc_content_length < 0:
            raise InvalidInput(
                f"max_doc_content_length must be ≥ 0, got {self.max_doc_content_length}",
                hint="This caps the characters kept from each page extract.",
            )


class WikipediaQuery:
    """A tool for querying Wikipedia articles.

    Pass *client* to control timeouts, proxies or transports; otherwise an
    ``httpx.AsyncClient`` is created on first use and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        options: WikipediaQueryOptions | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.options = options if options is not None else WikipediaQueryOptions()
        self._client = client
        self._owns_client = client is None

    @classmethod
    def with_lang(cls, lang: str) -> WikipediaQuery:
        """Create a tool for the given language edition (``"es"``, ``"fr"``...)."""
        return cls(WikipediaQueryOptions(lang=lang))

    def _derive(self, **changes: Any) -> WikipediaQuery:
        shared = None if self._owns_client else self._client
        return WikipediaQuery(replace(self.options, **changes), client=shared)

    def with_top_k_results(self, top_k: int) -> WikipediaQuery:
        return self._derive(top_k_results=top_k)

    def with_max_doc_content_length(self, max_len: int) -> WikipediaQuery:
        return self._derive(max_doc_content_length=max_len)

    @property
    def name(self) -> str:
        return "wikipedia-api"

    @property
    def description(self) -> str:
        return (
            "A wrapper around Wikipedia. "
            "Useful for when you need to answer general questions about "
            "people, places, companies, facts, historical events, or other subjects. "
            "Input should be a search query."
        )

    @property
    def api_url(self) -> str:
        return f"https://{self.options.lang}.wikipedia.org/w/api.php"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=_DEFAULT_TIMEOUT_S,
                headers={"User-Agent": _USER_AGENT},
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this tool created it."""
        client = self._client
        if client is None or not self._owns_client:
            return
        self._client = None
        await client.aclose()

    async def _get_json(self, params: dict[str, str]) -> Any:
        response = await self._get_client().get(self.api_url, params=params)
        response.raise_for_status()
        return response.json()

    async def search(self, query: str) -> list[str]:
        """Return up to ``top_k_results`` titles in the service's ranking order."""
        payload = await self._get_json(
            {
                "action": "query",
                "list": "search",
                "srsearch": query,
                "format": "json",
                "srlimit": str(self.options.top_k_results),
            }
        )
        query_block = payload.get("query") if isinstance(payload, dict) else None
        hits = query_block.get("search") if isinstance(query_block, dict) else None
        if not isinstance(hits, list):
            return []
        titles = [
            hit["title"]
            for hit in hits
            if isinstance(hit, dict) and isinstance(hit.get("title"), str)
        ]
        return titles[: self.options.top_k_results]

    async def fetch_page(self, title: str) -> str:
        """Fetch the introductory extract for *title*, truncated and labelled."""
        payload = await self._get_json(
            {
                "action": "query",
                "prop": "extracts",
                "titles": title,
                "format": "json",
                "explaintext": "true",
                "exintro": "true",
            }
        )
        query_block = payload.get("query") if isinstance(payload, dict) else None
        pages = query_block.get("pages") if isinstance(query_block, dict) else None
        if not isinstance(pages, dict) or not pages:
            raise PageNotFound(f"Page not found: {title}")
        page = next(iter(pages.values()))
        if not isinstance(page, dict):
            raise PageNotFound(f"Page not found: {title}")
        extract = page.get("extract")
        if not isinstance(extract, str):
            extract = ""
        truncated = extract[: self.options.max_doc_content_length]
        return f"Page: {page.get('title', title)}\nSummary: {truncated}"

    async def run(self, input: Any) -> str:
        """Search Wikipedia and return page summaries separated by blank lines."""
        query = _normalize_query(input)

        try:
            titles = await self.search(query)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Wikipedia search failed for %r: %s", query, e)
            return f"No results found for query: {query} (search request failed)"

        if not titles:
            return f"No results found for query: {query}"

        fetched = await asyncio.gather(
            *(self.fetch_page(title) for title in titles), return_exceptions=True
        )

        results: list[str] = []
        for title, outcome in zip(titles, fetched):
            if isinstance(outcome, str):
                results.append(outcome)
            elif isinstance(outcome, Exception):
                logger.warning("Error fetching page %r: %s", title, outcome)
            else:
                raise outcome

        if not results:
            return NO_CONTENT_MESSAGE
        return "\n\n".join(results)


def _normalize_query(input: Any) -> str:
    """Accept a bare string or a mapping with a string ``input`` field."""
    if isinstance(input, str):
        query = input
    elif isinstance(input, Mapping):
        value = input.get("input")
        if not isinstance(value, str):
            raise InvalidInput(
                "Invalid input format: expected 'input' field",
                hint='Pass a string or {"input": "<query>"}.',
            )
        query = value
    else:
        raise InvalidInput("Input must be a string or object with 'input' field")

    if not query.strip():
        raise InvalidInput("Query cannot be empty")
    return query
