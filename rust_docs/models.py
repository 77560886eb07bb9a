#!/usr/bin/env python3
"""
Request-scoped types for the documentation lookup pipeline.

Nothing defined here outlives a single tool call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from mcp.types import CallToolResult

# The MCP envelope returned by every tool call: content items plus isError.
ToolResponse = CallToolResult


class FailureKind(str, Enum):
    """Why a documentation fetch did not produce HTML."""
    TIMEOUT = "timeout"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"


@dataclass
class FetchSuccess:
    """Raw HTML returned by the documentation host."""
    html_body: str
    status_code: int
    url: str


@dataclass
class FetchFailure:
    """
    A classified fetch failure.

    Attributes:
        kind: Failure classification
        message: Human-readable description, surfaced to the caller
        url: URL that was requested
        status_code: HTTP status for HTTP_ERROR failures, otherwise None
    """
    kind: FailureKind
    message: str
    url: str
    status_code: Optional[int] = None


FetchResult = Union[FetchSuccess, FetchFailure]


class ExtractionError(Exception):
    """Raised when HTML cannot be converted to text."""
