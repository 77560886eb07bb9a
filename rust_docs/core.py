#!/usr/bin/env python3
"""
Core business logic for the Rust documentation MCP server.

This module contains the lookup pipeline behind the lookup_crate_docs tool:
fetch the crate page, convert it to text, and format the tool response.
It registers nothing with MCP, so it can be called and tested directly.
"""

from typing import Optional

from fastmcp import Context

from .config import Settings
from .extractor import html_to_text
from .fetcher import DocsRsFetcher
from .formatter import format_error, format_response
from .models import ExtractionError, FetchFailure, ToolResponse


def resolve_crate_name(crate_name: Optional[str], settings: Settings) -> str:
    """Return the requested crate, or the configured default when none is given."""
    return crate_name or settings.default_crate


async def lookup_crate_docs_impl(crate_name: Optional[str], settings: Settings, logger, ctx: Optional[Context] = None) -> ToolResponse:
    """
    Core implementation for looking up a crate's documentation on docs.rs.

    Always returns exactly one response. Failures of any kind come back as an
    error response; only cancellation propagates.

    Args:
        crate_name: Name of the crate, or None for the default crate
        settings: Server settings
        logger: Logger instance
        ctx: Optional FastMCP context for user feedback

    Returns:
        Tool response with the documentation text or an error message
    """
    crate_name = resolve_crate_name(crate_name, settings)
    logger.info("Fetching documentation for crate", extra={'extra_data': {'crate': crate_name}})

    try:
        async with DocsRsFetcher(settings) as fetcher:
            result = await fetcher.fetch(crate_name, logger, ctx)

        if isinstance(result, FetchFailure):
            logger.error(
                "Failed to fetch documentation",
                extra={'extra_data': {
                    'crate': crate_name,
                    'url': result.url,
                    'kind': result.kind.value,
                    'status': result.status_code,
                    'error': result.message,
                }}
            )
            if ctx:
                await ctx.error(f"Could not fetch documentation for {crate_name}: {result.message}")
            return format_error(result.message)

        text = html_to_text(result.html_body, wordwrap=settings.wordwrap)
        logger.info(
            "Converted HTML to text",
            extra={'extra_data': {'crate': crate_name, 'length': len(text)}}
        )

        response = format_response(text, result.url, settings.max_length)
        if ctx:
            await ctx.info(f"Successfully processed docs for {crate_name}")
        logger.info("Successfully processed docs", extra={'extra_data': {'crate': crate_name}})
        return response

    except ExtractionError as e:
        logger.error(
            "Failed to extract documentation text", exc_info=True,
            extra={'extra_data': {'crate': crate_name, 'kind': 'extraction_error'}}
        )
        return format_error(str(e))
    except Exception as e:
        logger.error(
            "Error looking up documentation", exc_info=True,
            extra={'extra_data': {'crate': crate_name, 'kind': 'unknown_error'}}
        )
        return format_error(str(e) or type(e).__name__)
