# tests/adapters/test_http_fetcher.py
import httpx
import pytest

from interlinear.adapters.http_fetcher import HttpResourceFetcher
from interlinear.core.domain.exceptions import MalformedResourceError, ResourceUnavailableError


def make_fetcher(handler, attempts: int = 3) -> HttpResourceFetcher:
    client = httpx.AsyncClient(base_url="http://resources.test/", transport=httpx.MockTransport(handler))
    return HttpResourceFetcher("http://resources.test", attempts=attempts, client=client)


@pytest.mark.asyncio
class TestHttpResourceFetcher:

    async def test_fetch_success(self):
        """
        Scenario: The server returns the document.
        Expected: Decoded JSON, requested under the base URL.
        """
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"H1": {"Hb_word": "אָב"}})

        fetcher = make_fetcher(handler)

        document = await fetcher.fetch_json("bible/strongs-lexicon.json")

        assert document == {"H1": {"Hb_word": "אָב"}}
        assert seen == ["http://resources.test/bible/strongs-lexicon.json"]
        await fetcher.close()

    async def test_not_found(self):
        fetcher = make_fetcher(lambda request: httpx.Response(404))

        with pytest.raises(ResourceUnavailableError) as exc_info:
            await fetcher.fetch_json("bible/kjv/Xyz.json")

        assert exc_info.value.reason == "HTTP 404"

    async def test_invalid_json(self):
        fetcher = make_fetcher(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(MalformedResourceError):
            await fetcher.fetch_json("bible/kjv/Jhn.json")

    async def test_transport_error_is_retried(self):
        """
        Scenario: The first connection attempt fails, the second succeeds.
        Expected: The document is returned after one retry.
        """
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"ok": True})

        fetcher = make_fetcher(handler)

        assert await fetcher.fetch_json("bible/kjv/Jhn.json") == {"ok": True}
        assert len(attempts) == 2

    async def test_transport_error_after_last_attempt(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = make_fetcher(handler, attempts=1)

        with pytest.raises(ResourceUnavailableError):
            await fetcher.fetch_json("bible/kjv/Jhn.json")

    async def test_trailing_slash_added(self):
        fetcher = HttpResourceFetcher("http://resources.test/static")

        assert fetcher.base_url == "http://resources.test/static/"
        await fetcher.close()
