#!/usr/bin/env python3
"""
HTTP fetching module for Rust crate documentation on docs.rs.

Builds the crate page URL and performs a single bounded GET for it. Every
outcome comes back as a FetchResult value; network problems are classified
here rather than raised to the caller.
"""

import asyncio
from typing import Optional

import aiohttp
from fastmcp import Context

from .config import Settings
from .models import FailureKind, FetchFailure, FetchResult, FetchSuccess

USER_AGENT = 'FastMCP-RustDocs/1.0 (Documentation Lookup)'
CHUNK_SIZE = 64 * 1024


def build_docs_url(crate_name: str, base_url: str = "https://docs.rs") -> str:
    """
    Build the docs.rs page URL for a crate.

    The name is substituted as-is, without validation or escaping.
    """
    return f"{base_url}/{crate_name}/latest/{crate_name}/index.html"


class DocsRsFetcher:
    """Fetcher for crate index pages from docs.rs."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.session = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.settings.timeout_ms / 1000),
            headers={
                'User-Agent': USER_AGENT
            }
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def fetch(self, crate_name: str, logger, ctx: Optional[Context] = None) -> FetchResult:
        """
        Fetch the index page of a crate's latest documentation.

        Args:
            crate_name: Name of the crate, used verbatim in the URL
            logger: Logger instance
            ctx: Optional FastMCP context

        Returns:
            FetchSuccess with the page HTML, or FetchFailure describing what went wrong
        """
        url = build_docs_url(crate_name, self.settings.docs_base_url)
        if ctx:
            await ctx.info(f"Fetching documentation from {url}")
        logger.info("Making request", extra={'extra_data': {'crate': crate_name, 'url': url}})

        try:
            async with self.session.get(url, max_redirects=self.settings.max_redirects) as response:
                logger.info(
                    "Received response",
                    extra={'extra_data': {'url': url, 'status': response.status}}
                )
                if not 200 <= response.status < 300:
                    return FetchFailure(
                        kind=FailureKind.HTTP_ERROR,
                        message=f"Request failed with status code {response.status}",
                        url=url,
                        status_code=response.status,
                    )

                body = await self._read_body(response)
                if body is None:
                    return self._too_large(url)

                return FetchSuccess(
                    html_body=self._decode(body, response.charset),
                    status_code=response.status,
                    url=url,
                )

        except asyncio.TimeoutError:
            seconds = self.settings.timeout_ms / 1000
            return FetchFailure(
                kind=FailureKind.TIMEOUT,
                message=(
                    f"Request timed out after {seconds:g} seconds. "
                    "The documentation may be too large or docs.rs may be unresponsive."
                ),
                url=url,
            )
        except aiohttp.ClientError as e:
            return FetchFailure(
                kind=FailureKind.NETWORK_ERROR,
                message=str(e) or type(e).__name__,
                url=url,
            )

    async def _read_body(self, response: aiohttp.ClientResponse) -> Optional[bytes]:
        """Read the body, or return None once it passes max_body_bytes."""
        limit = self.settings.max_body_bytes
        if response.content_length is not None and response.content_length > limit:
            return None

        body = bytearray()
        async for chunk in response.content.iter_chunked(CHUNK_SIZE):
            body.extend(chunk)
            if len(body) > limit:
                return None
        return bytes(body)

    def _too_large(self, url: str) -> FetchFailure:
        return FetchFailure(
            kind=FailureKind.PAYLOAD_TOO_LARGE,
            message=f"Response body exceeded maximum size of {self.settings.max_body_bytes} bytes",
            url=url,
        )

    @staticmethod
    def _decode(body: bytes, charset: Optional[str]) -> str:
        try:
            return body.decode(charset or 'utf-8', errors='replace')
        except LookupError:
            # Unknown charset label
            return body.decode('utf-8', errors='replace')
