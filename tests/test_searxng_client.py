import httpx
import pytest
import respx

from nparrot.searxng_client import SearXNGClient, SearXNGError
from nparrot.searxng_types import SearXNGConfig, SearXNGWebSearchRequest

BASE = "http://searx.example.com"
HOST = "searx.example.com"


def _hit(title, url=None, **extra):
    item = {"title": title, "url": url or f"https://www.example.com/{title}"}
    item.update(extra)
    return item


@pytest.mark.asyncio
async def test_empty_query_is_rejected():
    client = SearXNGClient(BASE)
    with pytest.raises(SearXNGError, match="Search query cannot be empty"):
        await client.search(SearXNGWebSearchRequest(query="   "))


@pytest.mark.asyncio
async def test_parses_results_and_hints():
    payload = {
        "results": [
            _hit("a", content="first", engine="bing", score=0.5, category="general"),
            {"title": "no url"},
            _hit("b"),
        ],
        "answers": ["forty-two", 7],
        "suggestions": ["alpha"],
        "number_of_results": 42,
    }
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json=payload)
        )
        response = await SearXNGClient(BASE).search(SearXNGWebSearchRequest(query="rust"))

    assert [r.title for r in response.results] == ["a", "b"]
    first = response.results[0]
    assert (first.content, first.engine, first.score, first.category) == (
        "first",
        "bing",
        0.5,
        "general",
    )
    assert response.total_results == 42
    assert response.answers == ["forty-two"]
    assert response.suggestions == ["alpha"]
    assert response.corrections is None
    assert response.query == "rust"


@pytest.mark.asyncio
async def test_sends_query_parameters_and_headers():
    with respx.mock() as router:
        route = router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json={"results": []})
        )
        response = await SearXNGClient(BASE + "/").search(
            SearXNGWebSearchRequest(query="nostr relays")
        )
        sent = route.calls.last.request

    assert sent.url.params["q"] == "nostr relays"
    assert sent.url.params["format"] == "json"
    assert sent.url.params["pageno"] == str(response.page)
    assert sent.headers["Accept"] == "application/json"
    assert sent.headers["User-Agent"] == "Mozilla/5.0 (compatible; SearXNG-MCP/1.0)"
    assert sent.url.path == "/search"


@pytest.mark.asyncio
async def test_offset_selects_page():
    with respx.mock() as router:
        route = router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json={"results": []})
        )
        response = await SearXNGClient(BASE).search(
            SearXNGWebSearchRequest(query="q", count=20, offset=40)
        )
        pageno = route.calls.last.request.url.params["pageno"]

    assert response.page == 3
    assert pageno == "3"


@pytest.mark.asyncio
async def test_count_is_clamped():
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json={"results": []})
        )
        client = SearXNGClient(BASE)
        large = await client.search(SearXNGWebSearchRequest(query="q", count=500))
        zero = await client.search(SearXNGWebSearchRequest(query="q", count=0))

    assert large.per_page == client.config.max_count
    assert zero.per_page == 1


@pytest.mark.asyncio
async def test_offset_within_page_skips_results():
    payload = {"results": [_hit(name) for name in ("a", "b", "c", "d")]}
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json=payload)
        )
        response = await SearXNGClient(BASE).search(
            SearXNGWebSearchRequest(query="q", count=2, offset=3)
        )

    assert [r.title for r in response.results] == ["b", "c"]
    assert response.total_results == len(response.results)


@pytest.mark.asyncio
async def test_with_config_uses_its_default_count():
    config = SearXNGConfig(base_url=BASE, default_count=5, max_count=50)
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, json={"results": []})
        )
        client = SearXNGClient.with_config(config)
        response = await client.search(SearXNGWebSearchRequest(query="q"))

    assert client.config is config
    assert response.per_page == config.default_count


@pytest.mark.asyncio
async def test_error_status_raises():
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(500, text="boom")
        )
        with pytest.raises(SearXNGError, match="SearXNG API error 500") as info:
            await SearXNGClient(BASE).search(SearXNGWebSearchRequest(query="q"))

    assert str(info.value).endswith(": boom")


@pytest.mark.asyncio
async def test_connection_failure_raises():
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(side_effect=httpx.ConnectError)
        with pytest.raises(SearXNGError):
            await SearXNGClient(BASE).search(SearXNGWebSearchRequest(query="q"))


@pytest.mark.asyncio
async def test_invalid_json_raises():
    with respx.mock() as router:
        router.get(host=HOST, path="/search").mock(
            return_value=httpx.Response(200, text="not json")
        )
        with pytest.raises(SearXNGError, match="error decoding response body"):
            await SearXNGClient(BASE).search(SearXNGWebSearchRequest(query="q"))