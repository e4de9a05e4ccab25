"""Document query tools.

This module contains the MCP tool wrappers for document queries:
- describe_document_root: Show the resolved document root and its patterns
- which_document: Resolve a query to exactly one document
- list_documents: List documents matching a query
- read_document_metadata: Read the front-matter of the selected document
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from mcp.server.fastmcp import Context

from veisku.server import mcp
from veisku.config import discover_document_root
from veisku.data_models import DocumentRoot
from veisku.models import (
    DescribeRootInput,
    WhichDocumentInput,
    ListDocumentsInput,
    ReadDocumentMetadataInput,
)
from veisku.core.document_operations import (
    which_document as which_document_core,
    list_documents as list_documents_core,
    read_document_metadata as read_document_metadata_core,
)

logger = logging.getLogger(__name__)


def _resolve_root(root: Optional[str]) -> DocumentRoot:
    return discover_document_root(Path(root) if root else None)


# ==============================================================================
# DOCUMENT QUERY TOOLS
# ==============================================================================


@mcp.tool()
async def describe_document_root(
    input: DescribeRootInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Show which document root a query would run against.

    Args:
        input (DescribeRootInput): Validated input containing:
            - root (str, optional): Directory to start discovery from

    Returns:
        {"path": str, "files": [str, ...], "exists": bool}

    Error Handling:
        - Invalid config.yaml → Error describing the expected structure
        - Configured root missing → Error naming the path
    """
    return _resolve_root(input.root).as_payload()


@mcp.tool()
async def which_document(
    input: WhichDocumentInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Resolve a query to exactly one document path.

    A smart name term prefers exact base name matches anywhere in the root,
    and only falls back to prefix matches when no exact match exists.

    Args:
        input (WhichDocumentInput): Validated input containing:
            - criteria (list[str]): Conjunctive search criteria
            - preset (str): Predefined filter name ("default" or "")
            - root (str, optional): Directory to start discovery from

    Returns:
        {"root": str, "status": "selected", "path": str}
        {"root": str, "status": "empty", "path": None, "message": str}
        {
            "root": str,
            "status": "ambiguous",
            "path": None,
            "candidates": [str, ...],  # at most 10
            "truncated": bool,
            "message": str
        }

    Examples:
        - Use when: User names a note ("open my meeting note")
        - Don't use: User wants every match (use list_documents)

    Error Handling:
        - ValidationError: Malformed or unsupported criteria
        - Unreadable document or broken front-matter → Error naming the path
    """
    root = _resolve_root(input.root)
    return which_document_core(root, input.criteria, input.preset)


@mcp.tool()
async def list_documents(
    input: ListDocumentsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List every document matching a query.

    Args:
        input (ListDocumentsInput): Validated input containing:
            - criteria (list[str]): Conjunctive search criteria (empty lists all)
            - preset (str): Predefined filter name ("default" or "")
            - include_metadata (bool): If True, include parsed front-matter
            - root (str, optional): Directory to start discovery from

    Returns (without metadata):
        {"root": str, "matches": [str, ...], "errors": [...]}

    Returns (with metadata):
        {"root": str, "matches": [{"path": str, "meta": Any}, ...], "errors": [...]}

    Error Handling:
        - ValidationError: Malformed or unsupported criteria
        - Per-document failures are reported in "errors" as {"path", "error"}
    """
    root = _resolve_root(input.root)
    return list_documents_core(root, input.criteria, input.preset, input.include_metadata)


@mcp.tool()
async def read_document_metadata(
    input: ReadDocumentMetadataInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read the front-matter of the one document a query selects.

    Args:
        input (ReadDocumentMetadataInput): Validated input containing:
            - criteria (list[str]): Conjunctive search criteria
            - preset (str): Predefined filter name ("default" or "")
            - root (str, optional): Directory to start discovery from

    Returns:
        {"root": str, "path": str, "metadata": Any, "has_metadata": bool}

    Error Handling:
        - No match or several matches → Error with the candidate list
        - Broken front-matter → Error naming the path
    """
    root = _resolve_root(input.root)
    return read_document_metadata_core(root, input.criteria, input.preset)
