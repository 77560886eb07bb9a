"""End-to-end tests of the lookup pipeline against a local docs host."""

import asyncio

import pytest
from aiohttp import web

from rust_docs import core
from rust_docs.config import Settings
from rust_docs.core import lookup_crate_docs_impl, resolve_crate_name
from rust_docs.formatter import truncation_notice
from rust_docs.models import ExtractionError

ERROR_PREFIX = "Error: Could not fetch documentation."


class RecordingContext:
    """Stands in for the FastMCP context and keeps what was sent to the client."""

    def __init__(self):
        self.messages = []

    async def info(self, message):
        self.messages.append(("info", message))

    async def error(self, message):
        self.messages.append(("error", message))


def test_resolve_crate_name():
    settings = Settings()

    assert resolve_crate_name("serde", settings) == "serde"
    assert resolve_crate_name(None, settings) == "tokio"
    assert resolve_crate_name("", settings) == "tokio"


async def test_default_crate_short_page(docs_host, make_settings, logger):
    requested = []

    async def handler(request):
        requested.append(request.path)
        return web.Response(text="<p>Hello</p>", content_type="text/html")

    base = await docs_host(handler)

    response = await lookup_crate_docs_impl(None, make_settings(base), logger)

    assert requested == ["/tokio/latest/tokio/index.html"]
    data = response.model_dump(by_alias=True, exclude_none=True)
    assert data["content"] == [{"type": "text", "text": "Hello"}]
    assert data["isError"] is False


async def test_long_page_is_truncated(docs_host, make_settings, logger):
    async def handler(request):
        return web.Response(text="<p>" + "x" * 9000 + "</p>", content_type="text/html")

    base = await docs_host(handler)
    url = f"{base}/serde/latest/serde/index.html"

    response = await lookup_crate_docs_impl("serde", make_settings(base), logger)

    text = response.content[0].text
    assert response.isError is False
    assert len(text) == 8000 + len(truncation_notice(url))
    assert text[:8000] == "x" * 8000
    assert url in text[8000:]


async def test_connection_refused(unused_tcp_port, logger):
    settings = Settings(docs_base_url=f"http://127.0.0.1:{unused_tcp_port}")

    response = await lookup_crate_docs_impl("serde", settings, logger)

    assert response.isError is True
    assert len(response.content) == 1
    assert response.content[0].type == "text"
    assert response.content[0].text.startswith(ERROR_PREFIX + " ")
    assert len(response.content[0].text) > len(ERROR_PREFIX) + 1


async def test_http_error_status(docs_host, make_settings, logger):
    async def handler(request):
        return web.Response(status=500, text="oops")

    base = await docs_host(handler)

    response = await lookup_crate_docs_impl("serde", make_settings(base), logger)

    assert response.isError is True
    assert response.content[0].text == f"{ERROR_PREFIX} Request failed with status code 500"


async def test_timeout_reports_duration(docs_host, make_settings, logger):
    async def handler(request):
        await asyncio.sleep(1)
        return web.Response(text="<p>late</p>")

    base = await docs_host(handler)
    settings = make_settings(base, timeout_ms=200)

    response = await asyncio.wait_for(lookup_crate_docs_impl("slow", settings, logger), timeout=0.9)

    assert response.isError is True
    assert response.content[0].text.startswith(ERROR_PREFIX)
    assert "0.2 seconds" in response.content[0].text


async def test_extraction_failure_becomes_error_response(docs_host, make_settings, logger, hello_handler, monkeypatch):
    def broken(html, wordwrap=None):
        raise ExtractionError("bad markup")

    monkeypatch.setattr(core, "html_to_text", broken)
    base = await docs_host(hello_handler)

    response = await lookup_crate_docs_impl("serde", make_settings(base), logger)

    assert response.isError is True
    assert response.content[0].text == f"{ERROR_PREFIX} bad markup"


async def test_unexpected_failure_becomes_error_response(docs_host, make_settings, logger, hello_handler, monkeypatch):
    def broken(html, wordwrap=None):
        raise RuntimeError("something odd")

    monkeypatch.setattr(core, "html_to_text", broken)
    base = await docs_host(hello_handler)

    response = await lookup_crate_docs_impl("serde", make_settings(base), logger)

    assert response.isError is True
    assert response.content[0].text == f"{ERROR_PREFIX} something odd"


async def test_concurrent_lookups_do_not_mix(docs_host, make_settings, logger):
    async def handler(request):
        crate = request.match_info["crate"]
        # The first request finishes last
        await asyncio.sleep(0.2 if crate == "serde" else 0.0)
        return web.Response(text=f"<p>Docs for {crate}</p>", content_type="text/html")

    base = await docs_host(handler)
    settings = make_settings(base)

    serde, rand = await asyncio.gather(
        lookup_crate_docs_impl("serde", settings, logger),
        lookup_crate_docs_impl("rand", settings, logger),
    )

    assert serde.content[0].text == "Docs for serde"
    assert rand.content[0].text == "Docs for rand"


async def test_cancellation_propagates(docs_host, make_settings, logger):
    arrived = asyncio.Event()

    async def handler(request):
        arrived.set()
        await asyncio.sleep(0.5)
        return web.Response(text="<p>never read</p>")

    base = await docs_host(handler)

    task = asyncio.create_task(lookup_crate_docs_impl("serde", make_settings(base), logger))
    await asyncio.wait_for(arrived.wait(), timeout=2)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


async def test_context_receives_progress(docs_host, make_settings, logger, hello_handler):
    base = await docs_host(hello_handler)
    ctx = RecordingContext()

    await lookup_crate_docs_impl("serde", make_settings(base), logger, ctx)

    levels = [level for level, _ in ctx.messages]
    assert levels == ["info", "info"]
    assert "serde" in ctx.messages[-1][1]


async def test_context_receives_error(unused_tcp_port, logger):
    settings = Settings(docs_base_url=f"http://127.0.0.1:{unused_tcp_port}")
    ctx = RecordingContext()

    await lookup_crate_docs_impl("serde", settings, logger, ctx)

    assert ctx.messages[-1][0] == "error"
