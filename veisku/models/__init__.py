"""Pydantic input models for MCP tool validation.

Each model represents the input schema for one tool, with field-level
validation and descriptive error messages.

Architecture:
- base: Base models (BaseRootInput, BaseQueryInput) for common validation
- query_models: Input models for document query operations

Usage:
    from veisku.models import WhichDocumentInput, ListDocumentsInput
"""

from .base import BaseRootInput, BaseQueryInput
from .query_models import (
    DescribeRootInput,
    WhichDocumentInput,
    ListDocumentsInput,
    ReadDocumentMetadataInput,
)

__all__ = [
    # Base models
    "BaseRootInput",
    "BaseQueryInput",
    # Query models
    "DescribeRootInput",
    "WhichDocumentInput",
    "ListDocumentsInput",
    "ReadDocumentMetadataInput",
]
