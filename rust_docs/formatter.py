#!/usr/bin/env python3
"""
Formatting of extracted documentation into MCP tool responses.
"""

from mcp.types import TextContent

from .models import ToolResponse

MAX_LENGTH = 8000
ERROR_PREFIX = "Error: Could not fetch documentation. "


def truncation_notice(source_url: str) -> str:
    return f"\n\n[Content truncated. Full documentation available at {source_url}]"


def truncate_text(text: str, source_url: str, max_length: int = MAX_LENGTH) -> str:
    """
    Cut text down to max_length characters and point at the full page.

    Slicing is by code point, so multi-byte characters are never split.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + truncation_notice(source_url)


def format_response(text: str, source_url: str, max_length: int = MAX_LENGTH) -> ToolResponse:
    """Wrap extracted text in a successful tool response. Truncation is not an error."""
    return ToolResponse(
        content=[TextContent(type="text", text=truncate_text(text, source_url, max_length))],
        isError=False,
    )


def format_error(message: str) -> ToolResponse:
    """Wrap a failure message in the single error envelope used for every failure kind."""
    return ToolResponse(
        content=[TextContent(type="text", text=f"{ERROR_PREFIX}{message}")],
        isError=True,
    )
