"""
Core modules for the Rust documentation MCP server.

This package contains the core business logic modules:
- config: Settings read from the environment
- logger: Logging infrastructure
- models: Fetch results, failure kinds and the tool response envelope
- fetcher: Bounded HTTP fetch of docs.rs crate pages
- extractor: HTML to plain text conversion
- formatter: Truncation and tool response envelopes
- core: The lookup pipeline tying the above together
"""
