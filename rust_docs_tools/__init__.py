"""
MCP tools for the Rust documentation server.

This package contains MCP tool wrappers organized by functionality:
- docs_tools: Documentation lookup
"""
