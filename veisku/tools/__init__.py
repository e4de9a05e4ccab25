"""MCP tool definitions for document queries.

Importing this package registers every @mcp.tool() decorated function with
the server.
"""

from veisku.tools import query_tools

__all__ = [
    "query_tools",
]
