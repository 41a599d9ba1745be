"""Tool functions exposed by the MCP server."""
