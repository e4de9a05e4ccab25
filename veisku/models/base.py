"""Base Pydantic models for MCP tool input validation.

Base Models:
- BaseRootInput: Common validation for the document root location
- BaseQueryInput: Adds query criteria and preset validation
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from veisku.core.query import compile_query


class BaseRootInput(BaseModel):
    """Base model for operations scoped to a document root."""

    root: Optional[str] = Field(
        None,
        description=(
            "Directory to start document root discovery from (omit to use the "
            "server's working directory). The nearest ancestor holding a "
            "'.veisku' directory is used."
        )
    )

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: Optional[str]) -> Optional[str]:
        """Validate the root directory string.

        Raises:
            ValueError: If root is an empty or whitespace-only string
        """
        if v is not None and not v.strip():
            raise ValueError(
                "Root directory cannot be empty. "
                "Either omit the root parameter or provide a directory path."
            )
        return v.strip() if v else None


class BaseQueryInput(BaseRootInput):
    """Base model for operations that run a document query.

    Criteria are compiled during validation so syntax errors, unsupported
    syntax and invalid regexes are reported before any file is touched.
    """

    criteria: list[str] = Field(
        default_factory=list,
        description=(
            "Conjunctive search criteria. 'NAME' is a smart name search (once per "
            "query), '/REGEX/' matches base names, 'KEY:VALUE' and 'KEY:/REGEX/' "
            "match metadata fields ('path' matches the full path), and a leading "
            "'!' negates any criterion except a smart name search."
        ),
        examples=[["meeting"], ["tags:work", "!status:done"], ["/^2025-/", "path:/journal/"]]
    )

    preset: str = Field(
        "default",
        description="Predefined filter. An empty string disables the default filter."
    )

    @field_validator('criteria')
    @classmethod
    def validate_criteria(cls, v: list[str]) -> list[str]:
        """Compile the criteria to surface parse errors early.

        Raises:
            ValueError: If any criterion is malformed or unsupported, or more
                than one smart name search is given
        """
        compile_query(v)
        return v

    @field_validator('preset')
    @classmethod
    def validate_preset(cls, v: str) -> str:
        """Validate the preset name is recognized."""
        compile_query([], v)
        return v
