import httpx
import pytest
import respx

from nparrot.searxng_client import SearXNGClient
from nparrot.searxng_server import SearXNGServer, format_search_response
from nparrot.searxng_types import SearchResponse, SearchResult, SearXNGWebSearchRequest
from nparrot.tools import Messenger

BASE = "http://searx.example.com"
HOST = "searx.example.com"


def _response(results, **overrides):
    values = dict(
        query="rust",
        results=results,
        total_results=len(results),
        page=1,
        per_page=10,
    )
    values.update(overrides)
    return SearchResponse(**values)


def _recording_messenger():
    sent, progress = [], []

    async def deliver(message):
        sent.append(message)

    async def report(message):
        progress.append(message)

    return Messenger(deliver, report), sent, progress


def test_empty_results_message():
    assert format_search_response(_response([])) == "🔍 No results found for query: rust"


def test_full_message_layout():
    results = [
        SearchResult(
            title="Rust",
            url="https://www.example.com/rust",
            content="systems language",
            engine="bing",
        )
    ]
    message = format_search_response(
        _response(
            results,
            answers=["an answer"],
            suggestions=["rust lang"],
            corrections=["rusty"],
        )
    )
    assert message.startswith("🔍 Found 1 results for: rust (Page 1, 10 per page)\n\n")
    assert "💡 **Answers:**\n• an answer\n\n" in message
    assert (
        "📋 **Results:**\n1. **Rust**\n   🔗 https://www.example.com/rust\n"
        "   📄 systems language\n   🔧 bing\n\n"
    ) in message
    assert message.endswith(
        "\n💭 **Suggestions:**\n• rust lang\n\n✏️ **Did you mean:**\n• rusty\n"
    )
    assert message.index("Answers") < message.index("Results") < message.index("Suggestions")


def test_empty_hint_lists_are_omitted():
    results = [SearchResult(title="T", url="https://www.example.com")]
    message = format_search_response(_response(results, answers=[], suggestions=[]))
    assert "Answers" not in message
    assert "Suggestions" not in message
    assert "Did you mean" not in message


def test_long_content_is_truncated():
    results = [SearchResult(title="T", url="https://www.example.com", content="a" * 200)]
    message = format_search_response(_response(results))
    assert f"   📄 {'a' * 150}...\n" in message
    assert "a" * 151 not in message


def test_truncation_keeps_whole_characters():
    results = [SearchResult(title="T", url="https://www.example.com", content="é" * 100)]
    message = format_search_response(_response(results))
    line = next(l for l in message.splitlines() if "📄" in l)
    preview = line.split("📄 ", 1)[1]
    assert preview.endswith("...")
    assert set(preview[:-3]) == {"é"}
    assert len(preview[:-3].encode("utf-8")) <= 150


def test_numbering_continues_on_later_pages():
    results = [SearchResult(title="T", url="https://www.example.com")]
    message = format_search_response(_response(results, page=2, total_results=11))
    assert "11. **T**" in message


def test_remaining_results_line():
    results = [SearchResult(title=f"t{i}", url="https://www.example.com") for i in range(10)]
    message = format_search_response(_response(results, total_results=50))
    assert "... 40 more results available\n" in message


def test_no_remaining_line_when_all_shown():
    results = [SearchResult(title="T", url="https://www.example.com")]
    assert "more results available" not in format_search_response(_response(results))


@pytest.mark.asyncio
async def test_search_tool_reports_results():
    messenger, sent, progress = _recording_messenger()
    server = SearXNGServer(SearXNGClient(BASE), messenger)
    payload = {"results": [{"title": "Hit", "url": "https://www.example.com/hit"}]}
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json=payload)
        )
        result = await server.searxng_web_search(SearXNGWebSearchRequest(query="nostr"))

    assert progress == ["Searching for: nostr"]
    assert len(sent) == 1
    assert "1. **Hit**\n   🔗 https://www.example.com/hit\n" in sent[0]
    assert not result.is_error
    assert result.text == "Search completed: 1 results found for 'nostr' (page 1)"


@pytest.mark.asyncio
async def test_search_tool_reports_failure():
    messenger, sent, _ = _recording_messenger()
    server = SearXNGServer(SearXNGClient(BASE), messenger)
    result = await server.searxng_web_search(SearXNGWebSearchRequest(query=" "))

    assert result.is_error
    assert result.text == "❌ Search failed: Search query cannot be empty"
    assert sent == [result.text]


@pytest.mark.asyncio
async def test_delivery_failure_does_not_break_tool():
    async def broken(message):
        raise RuntimeError("offline")

    server = SearXNGServer(SearXNGClient(BASE), Messenger(broken))
    result = await server.searxng_web_search(SearXNGWebSearchRequest(query=""))
    assert result.is_error
    assert result.text == "❌ Search failed: Search query cannot be empty"