"""veisku

Personal file-oriented document finder: front-matter extraction, a small
conjunctive query language, and smart name selection over a document root.
"""

from veisku.config import discover_document_root, load_root_configuration
from veisku.data_models import DocumentRoot, RootConfiguration
from veisku.errors import (
    AmbiguousSelection,
    ConfigurationError,
    DocumentError,
    DocumentReadError,
    EmptySelection,
    MetadataEncodingError,
    MetadataSyntaxError,
    QueryParseError,
    SelectionError,
    SelectionFailed,
    UnsupportedSyntaxError,
    VeiskuError,
)
from veisku.core.criteria import parse_criterion
from veisku.core.document import DocumentHandle
from veisku.core.metadata_reader import extract_metadata
from veisku.core.query import Query, compile_query
from veisku.core.selection import select_all, select_one
from veisku.core.document_operations import (
    list_documents,
    read_document_metadata,
    which_document,
)
from veisku.server import mcp, run_server

# Import tools to register them with the MCP server
from veisku import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "AmbiguousSelection",
    "ConfigurationError",
    "DocumentError",
    "DocumentHandle",
    "DocumentReadError",
    "DocumentRoot",
    "EmptySelection",
    "MetadataEncodingError",
    "MetadataSyntaxError",
    "Query",
    "QueryParseError",
    "RootConfiguration",
    "SelectionError",
    "SelectionFailed",
    "UnsupportedSyntaxError",
    "VeiskuError",
    "compile_query",
    "discover_document_root",
    "extract_metadata",
    "list_documents",
    "load_root_configuration",
    "mcp",
    "parse_criterion",
    "read_document_metadata",
    "run_server",
    "select_all",
    "select_one",
    "which_document",
]
