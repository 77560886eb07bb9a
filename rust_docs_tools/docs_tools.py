#!/usr/bin/env python3
"""
MCP tools for documentation lookup operations.

This module provides MCP tool wrappers around the core documentation functionality.
"""

from typing import Annotated, Optional

from fastmcp import FastMCP, Context
from fastmcp.exceptions import ToolError
from pydantic import Field

from rust_docs.config import Settings
from rust_docs.core import lookup_crate_docs_impl


def register_docs_tools(mcp: FastMCP, settings: Settings, logger):
    """Register documentation related MCP tools."""

    @mcp.tool(
        name="lookup_crate_docs",
        description="Lookup documentation for a Rust crate from docs.rs",
    )
    async def lookup_crate_docs(
        ctx: Context,
        # Parameter name is part of the wire contract
        crateName: Annotated[
            Optional[str],
            Field(description="Name of the Rust crate to lookup documentation for"),
        ] = None,
    ) -> str:
        """
        Lookup documentation for a Rust crate from docs.rs.

        Args:
            crateName: Name of the crate, defaults to tokio

        Returns:
            Plain text of the crate's documentation index page
        """
        response = await lookup_crate_docs_impl(crateName, settings, logger, ctx)
        text = response.content[0].text
        if response.isError:
            # Reported by the SDK as a result with isError set and this text
            raise ToolError(text)
        return text
