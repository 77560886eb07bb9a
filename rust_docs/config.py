#!/usr/bin/env python3
"""
Configuration for the Rust documentation MCP server.

All knobs are read from environment variables once at startup and carried
around as an immutable Settings object.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_BASE_URL = "https://docs.rs"
DEFAULT_CRATE = "tokio"
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_MAX_LENGTH = 8000
DEFAULT_WORDWRAP = 130
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001


def _int_from_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the server.

    Attributes:
        docs_base_url: Scheme and host the crate URL is built on
        default_crate: Crate looked up when the caller gives no name
        timeout_ms: Total deadline for one documentation fetch
        max_body_bytes: Largest response body accepted from the docs host
        max_redirects: Redirects followed before the fetch is abandoned
        max_length: Characters of extracted text returned before truncation
        wordwrap: Column the extracted text is wrapped at
        host: Interface the SSE transport binds to
        port: Port the SSE transport listens on
        log_level: Level name for the diagnostic logger
        log_dir: Optional directory for rotating JSON log files
    """
    docs_base_url: str = DEFAULT_BASE_URL
    default_crate: str = DEFAULT_CRATE
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    max_length: int = DEFAULT_MAX_LENGTH
    wordwrap: int = DEFAULT_WORDWRAP
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        if environ is None:
            environ = os.environ

        return cls(
            docs_base_url=environ.get("RUST_DOCS_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            default_crate=environ.get("RUST_DOCS_DEFAULT_CRATE", DEFAULT_CRATE),
            timeout_ms=_int_from_env(environ, "RUST_DOCS_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            max_body_bytes=_int_from_env(environ, "RUST_DOCS_MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
            max_redirects=_int_from_env(environ, "RUST_DOCS_MAX_REDIRECTS", DEFAULT_MAX_REDIRECTS),
            max_length=_int_from_env(environ, "RUST_DOCS_MAX_LENGTH", DEFAULT_MAX_LENGTH),
            wordwrap=_int_from_env(environ, "RUST_DOCS_WORDWRAP", DEFAULT_WORDWRAP),
            host=environ.get("HOST", DEFAULT_HOST),
            port=_int_from_env(environ, "PORT", DEFAULT_PORT),
            log_level=environ.get("RUST_DOCS_LOG_LEVEL", "INFO").upper(),
            log_dir=environ.get("RUST_DOCS_LOG_DIR") or None,
        )
