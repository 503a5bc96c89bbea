"""Tool server that runs web searches and reports the results to the user."""

from __future__ import annotations

from nparrot.searxng_client import SearXNGClient, SearXNGError
from nparrot.searxng_types import SearchResponse, SearXNGWebSearchRequest
from nparrot.tools import Messenger, ToolResult

CONTENT_PREVIEW_BYTES = 150


def _preview(text: str) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= CONTENT_PREVIEW_BYTES:
        return text
    return raw[:CONTENT_PREVIEW_BYTES].decode("utf-8", errors="ignore") + "..."


def format_search_response(response: SearchResponse) -> str:
    """Render a search response as a message for the user."""
    if not response.results:
        return f"🔍 No results found for query: {response.query}"

    parts = [
        f"🔍 Found {response.total_results} results for: {response.query} "
        f"(Page {response.page}, {response.per_page} per page)\n\n"
    ]

    if response.answers:
        parts.append("💡 **Answers:**\n")
        parts.extend(f"• {answer}\n" for answer in response.answers)
        parts.append("\n")

    parts.append("📋 **Results:**\n")
    first_number = (response.page - 1) * response.per_page + 1
    for number, result in enumerate(response.results, start=first_number):
        parts.append(f"{number}. **{result.title}**\n   🔗 {result.url}\n")
        if result.content is not None:
            parts.append(f"   📄 {_preview(result.content)}\n")
        if result.engine is not None:
            parts.append(f"   🔧 {result.engine}\n")
        parts.append("\n")

    if response.total_results > len(response.results):
        remaining = response.total_results - response.page * response.per_page
        if remaining > 0:
            parts.append(f"... {remaining} more results available\n")

    if response.suggestions:
        parts.append("\n💭 **Suggestions:**\n")
        parts.extend(f"• {suggestion}\n" for suggestion in response.suggestions)

    if response.corrections:
        parts.append("\n✏️ **Did you mean:**\n")
        parts.extend(f"• {correction}\n" for correction in response.corrections)

    return "".join(parts)


class SearXNGServer:
    """Web search tool that reports outcomes to the user through a messenger."""

    def __init__(self, client: SearXNGClient, messenger: Messenger) -> None:
        self.client = client
        self.messenger = messenger

    async def _progress(self, message: str) -> None:
        try:
            await self.messenger.progress(message)
        except Exception:  # delivery problems never fail the tool call
            pass

    async def _send(self, message: str) -> None:
        try:
            await self.messenger.send(message)
        except Exception:  # delivery problems never fail the tool call
            pass

    async def searxng_web_search(self, request: SearXNGWebSearchRequest) -> ToolResult:
        """Execute a web search with pagination."""
        await self._progress(f"Searching for: {request.query}")
        try:
            response = await self.client.search(request)
        except SearXNGError as exc:
            message = f"❌ Search failed: {exc}"
            await self._send(message)
            return ToolResult.error(message)

        await self._send(format_search_response(response))
        return ToolResult.success(
            f"Search completed: {response.total_results} results found for "
            f"'{response.query}' (page {response.page})"
        )