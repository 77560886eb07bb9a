#!/usr/bin/env python3
"""
FastMCP server for Rust crate documentation lookup.

This server provides one tool, lookup_crate_docs, which fetches a crate's
documentation index page from docs.rs and returns it as plain text.

Usage:
    python server.py [stdio|sse] [--host HOST] [--port PORT]
    rust-docs-mcp
    rust-docs-mcp-sse [--host HOST] [--port PORT]
"""

import argparse
import sys
from typing import Optional, Sequence

import uvicorn
from fastmcp import FastMCP
from fastmcp.server.http import create_sse_app

from rust_docs.config import Settings
from rust_docs.logger import setup_logging
from rust_docs_tools.docs_tools import register_docs_tools

SERVER_NAME = "rust-docs"
SERVER_VERSION = "1.0.0"
SSE_PATH = "/sse"
MESSAGE_PATH = "/message/"
TRANSPORTS = ("stdio", "sse")


def create_server(settings: Optional[Settings] = None, logger=None) -> FastMCP:
    """Build the MCP server with every tool registered."""
    if settings is None:
        settings = Settings.from_env()
    if logger is None:
        logger = setup_logging(settings.log_level, settings.log_dir)

    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    register_docs_tools(mcp, settings, logger)
    logger.info("Tool registration completed", extra={'extra_data': {'server': SERVER_NAME}})
    return mcp


def build_sse_app(mcp: FastMCP):
    """Event stream on GET /sse, client messages on POST /message/?session_id=..."""
    return create_sse_app(server=mcp, message_path=MESSAGE_PATH, sse_path=SSE_PATH)


def parse_args(
    argv: Optional[Sequence[str]],
    settings: Settings,
    transport: Optional[str] = None,
) -> argparse.Namespace:
    """
    Parse the command line.

    When transport is given it is fixed by the entry point and the
    positional transport argument is not accepted.
    """
    parser = argparse.ArgumentParser(description="MCP server for Rust crate documentation from docs.rs")
    if transport is None:
        parser.add_argument(
            "transport",
            nargs="?",
            choices=TRANSPORTS,
            default="stdio",
            help="Transport to serve on (default: stdio)",
        )
    else:
        parser.set_defaults(transport=transport)
    parser.add_argument("--host", default=settings.host, help="Interface for the SSE transport")
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=settings.port,
        help="Port for the SSE transport (default: $PORT or 3001)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, transport: Optional[str] = None):
    settings = Settings.from_env()
    args = parse_args(argv, settings, transport)

    logger = setup_logging(settings.log_level, settings.log_dir)
    mcp = create_server(settings, logger)

    logger.info("Rust Docs Server starting up", extra={'extra_data': {'transport': args.transport}})
    try:
        if args.transport == "sse":
            logger.info(
                f"Running with SSE transport on http://{args.host}:{args.port}{SSE_PATH}",
                extra={'extra_data': {'host': args.host, 'port': args.port, 'message_path': MESSAGE_PATH}}
            )
            # Access logs would go to stdout
            uvicorn.run(build_sse_app(mcp), host=args.host, port=args.port, log_level="info", access_log=False)
        else:
            logger.info("Running with STDIO transport")
            mcp.run(transport="stdio")
    except Exception:
        logger.error("Failed to start MCP server", exc_info=True)
        sys.exit(1)


def main_stdio():
    main(sys.argv[1:], transport="stdio")


def main_sse():
    main(sys.argv[1:], transport="sse")


if __name__ == "__main__":
    main()
