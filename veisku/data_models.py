"""Data models for document root configuration."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from veisku.constants import DEFAULT_FILE_PATTERNS


@dataclass(frozen=True)
class RootConfiguration:
    """Settings read from ``.veisku/config.yaml``."""

    root: str = ""
    files: tuple[str, ...] = field(default=DEFAULT_FILE_PATTERNS)

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {"root": self.root, "files": list(self.files)}


@dataclass(frozen=True)
class DocumentRoot:
    """A resolved document root and the patterns selecting its documents.

    Built once per invocation by :func:`veisku.config.discover_document_root`,
    or directly by callers that already know where their documents live.
    """

    path: Path
    files: tuple[str, ...] = DEFAULT_FILE_PATTERNS

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "path": str(self.path),
            "files": list(self.files),
            "exists": self.path.is_dir(),
        }
