"""Shared fixtures: a local stand-in for docs.rs and settings pointing at it."""

import logging

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from rust_docs.config import Settings

CRATE_ROUTE = "/{crate}/latest/{module}/index.html"


@pytest.fixture
def logger():
    return logging.getLogger("RustDocsServer.tests")


@pytest.fixture
async def docs_host():
    """
    Start a local docs host serving the given handler on the crate route.

    Returns the base URL to put in Settings.docs_base_url.
    """
    servers = []

    async def start(handler, extra_routes=()):
        app = web.Application()
        app.router.add_get(CRATE_ROUTE, handler)
        for path, extra_handler in extra_routes:
            app.router.add_get(path, extra_handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return f"http://{server.host}:{server.port}"

    yield start

    for server in servers:
        await server.close()


@pytest.fixture
def make_settings():
    def make(base_url, **overrides):
        return Settings(docs_base_url=base_url, **overrides)
    return make


@pytest.fixture
def hello_handler():
    async def handler(request):
        return web.Response(text="<html><body><p>Hello</p></body></html>", content_type="text/html")
    return handler
