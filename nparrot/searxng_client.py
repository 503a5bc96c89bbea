"""HTTP client for the JSON search interface of a SearXNG instance."""

from __future__ import annotations

from typing import Any

import httpx

from nparrot.searxng_types import (
    SearchResponse,
    SearchResult,
    SearXNGConfig,
    SearXNGWebSearchRequest,
)

USER_AGENT = "Mozilla/5.0 (compatible; SearXNG-MCP/1.0)"


class SearXNGError(Exception):
    """Raised when a search cannot be carried out."""


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _strings(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _parse_result(raw: Any) -> SearchResult | None:
    if not isinstance(raw, dict):
        return None
    title, url = raw.get("title"), raw.get("url")
    if not isinstance(title, str) or not isinstance(url, str):
        return None
    score = raw.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        score = None
    return SearchResult(
        title=title,
        url=url,
        content=_optional_str(raw.get("content")),
        engine=_optional_str(raw.get("engine")),
        score=float(score) if score is not None else None,
        category=_optional_str(raw.get("category")),
    )


class SearXNGClient:
    """Runs web searches against one SearXNG instance."""

    def __init__(self, base_url: str, http_client: httpx.AsyncClient | None = None) -> None:
        self.config = SearXNGConfig(base_url=base_url)
        self._http = http_client

    @classmethod
    def with_config(cls, config: SearXNGConfig) -> "SearXNGClient":
        """A client using the given configuration."""
        client = cls(config.base_url)
        client.config = config
        return client

    async def _get(self, url: str, params: dict[str, str]) -> httpx.Response:
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if self._http is not None:
            return await self._http.get(url, params=params, headers=headers)
        async with httpx.AsyncClient() as http:
            return await http.get(url, params=params, headers=headers)

    async def search(self, request: SearXNGWebSearchRequest) -> SearchResponse:
        """Fetch one page of results; raises SearXNGError on any failure."""
        if not request.query.strip():
            raise SearXNGError("Search query cannot be empty")

        requested = (
            request.count if request.count is not None else self.config.default_count
        )
        count = max(1, min(requested, self.config.max_count))
        offset = request.offset or 0
        page = offset // count + 1

        url = f"{self.config.base_url.rstrip('/')}/search"
        params = {"q": request.query, "format": "json", "pageno": str(page)}
        try:
            response = await self._get(url, params)
        except httpx.HTTPError as exc:
            raise SearXNGError(str(exc)) from exc

        if not response.is_success:
            try:
                body = response.text
            except (UnicodeDecodeError, httpx.HTTPError):
                body = "Unable to read error response"
            raise SearXNGError(
                f"SearXNG API error {response.status_code} {response.reason_phrase}: {body}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise SearXNGError(f"error decoding response body: {exc}") from exc
        if not isinstance(data, dict):
            data = {}

        raw_results = data.get("results")
        if not isinstance(raw_results, list):
            raw_results = []
        start = offset % count
        results = [
            parsed
            for parsed in map(_parse_result, raw_results[start : start + count])
            if parsed is not None
        ]

        total = data.get("number_of_results")
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            total = len(results)

        return SearchResponse(
            query=request.query,
            results=results,
            total_results=total,
            page=page,
            per_page=count,
            answers=_strings(data.get("answers")),
            suggestions=_strings(data.get("suggestions")),
            corrections=_strings(data.get("corrections")),
        )