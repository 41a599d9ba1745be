"""MCP server for docindex-mcp."""

import asyncio
import json
import logging
import os
import sys

from mcp.server import Server
from mcp.types import Tool, TextContent

from .tools.import_index import import_index
from .tools.list_indexes import list_indexes
from .tools.search_docs import search_docs
from .tools.get_page import get_page
from .tools.get_index_outline import get_index_outline
from .tools.invalidate_cache import invalidate_cache

logger = logging.getLogger(__name__)

# Create server
server = Server("docindex-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="import_index",
            description="Import a documentation search index (Documenter search_index.js or plain JSON) into local storage so it can be searched.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the search index file (supports ~ for home directory)"
                    },
                    "name": {
                        "type": "string",
                        "description": "Name to store the index under. Defaults to the parent directory name."
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="list_indexes",
            description="List all imported search indexes.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="search_docs",
            description="Search documentation fragments whose title or text contains the query (case-insensitive). Results keep document order.",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "string",
                        "description": "Index name from import_index or list_indexes"
                    },
                    "query": {
                        "type": "string",
                        "description": "Text to search for. Empty string matches every fragment."
                    },
                    "category": {
                        "type": "string",
                        "description": "Optional exact category filter (e.g., 'section', 'page', 'type')"
                    },
                    "page": {
                        "type": "string",
                        "description": "Optional exact page name filter"
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of fragments to return",
                        "default": 20
                    }
                },
                "required": ["index", "query"]
            }
        ),
        Tool(
            name="get_page",
            description="Get every fragment of a documentation page with full text, in document order.",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "string",
                        "description": "Index name"
                    },
                    "page": {
                        "type": "string",
                        "description": "Exact page name (see get_index_outline)"
                    }
                },
                "required": ["index", "page"]
            }
        ),
        Tool(
            name="get_index_outline",
            description="Get a high-level overview of an index: pages with fragment counts, category counts, documented types.",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "string",
                        "description": "Index name"
                    }
                },
                "required": ["index"]
            }
        ),
        Tool(
            name="invalidate_cache",
            description="Delete an imported index. Use after the documentation is rebuilt, then import it again.",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "string",
                        "description": "Index name"
                    }
                },
                "required": ["index"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    storage_path = os.environ.get("DOC_INDEX_PATH")

    try:
        if name == "import_index":
            result = import_index(
                path=arguments["path"],
                name=arguments.get("name"),
                storage_path=storage_path,
                root=os.environ.get("DOC_INDEX_ROOT"),
            )
        elif name == "list_indexes":
            result = list_indexes(storage_path=storage_path)
        elif name == "search_docs":
            result = search_docs(
                index=arguments["index"],
                query=arguments["query"],
                category=arguments.get("category"),
                page=arguments.get("page"),
                max_results=arguments.get("max_results", 20),
                storage_path=storage_path
            )
        elif name == "get_page":
            result = get_page(
                index=arguments["index"],
                page=arguments["page"],
                storage_path=storage_path
            )
        elif name == "get_index_outline":
            result = get_index_outline(
                index=arguments["index"],
                storage_path=storage_path
            )
        elif name == "invalidate_cache":
            result = invalidate_cache(
                index=arguments["index"],
                storage_path=storage_path
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("DOC_INDEX_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
