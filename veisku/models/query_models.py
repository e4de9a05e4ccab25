"""Pydantic input models for document query operations.

This module defines input models for the query tools:
- Describe the document root
- Resolve a query to one document
- List documents matching a query
- Read the metadata of the selected document
"""

from __future__ import annotations

from pydantic import Field

from .base import BaseQueryInput, BaseRootInput


class DescribeRootInput(BaseRootInput):
    """Input model for describe_document_root tool.

    Examples:
        >>> DescribeRootInput()
        >>> DescribeRootInput(root="~/notes")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [{}, {"root": "~/notes"}]
        }


class WhichDocumentInput(BaseQueryInput):
    """Input model for which_document tool.

    The criteria must select exactly one document; otherwise the result
    reports an empty or ambiguous selection.

    Examples:
        >>> WhichDocumentInput(criteria=["meeting"])
        >>> WhichDocumentInput(criteria=["tags:work", "/^2025-/"], root="~/notes")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"criteria": ["meeting"]},
                {"criteria": ["tags:work", "/^2025-/"], "root": "~/notes"}
            ]
        }


class ListDocumentsInput(BaseQueryInput):
    """Input model for list_documents tool.

    Examples:
        >>> ListDocumentsInput(criteria=["tags:work"])
        >>> ListDocumentsInput(criteria=[], include_metadata=True)
    """

    include_metadata: bool = Field(
        False,
        description=(
            "If True, include each document's parsed front-matter. "
            "Reads every matching file's header."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"criteria": ["tags:work"], "include_metadata": False},
                {"criteria": [], "include_metadata": True}
            ]
        }


class ReadDocumentMetadataInput(BaseQueryInput):
    """Input model for read_document_metadata tool.

    Examples:
        >>> ReadDocumentMetadataInput(criteria=["meeting"])
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [{"criteria": ["meeting"]}]
        }
