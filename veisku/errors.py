"""Exception hierarchy shared by the query, metadata and selection layers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from veisku.core.document import DocumentHandle


class VeiskuError(Exception):
    """Base class for every error raised by veisku."""


class QueryParseError(VeiskuError, ValueError):
    """A query criterion, preset or pattern could not be compiled."""


class UnsupportedSyntaxError(QueryParseError):
    """The criterion uses query syntax that is recognized but not implemented."""


class ConfigurationError(VeiskuError, ValueError):
    """The document root or its configuration file is unusable."""


class DocumentError(VeiskuError):
    """Evaluating a single document failed.

    Attributes:
        path: The document the failure belongs to, when known.
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class DocumentReadError(DocumentError):
    """The document (or a directory being enumerated) could not be read."""


class MetadataEncodingError(DocumentError):
    """The front-matter block is not valid UTF-8."""


class MetadataSyntaxError(DocumentError):
    """The front-matter block was rejected by the YAML parser."""


class SelectionError(VeiskuError):
    """A query did not resolve to exactly one document."""


class EmptySelection(SelectionError):
    def __init__(self) -> None:
        super().__init__("Did not match anything")


class AmbiguousSelection(SelectionError):
    """More than one document matched.

    Attributes:
        candidates: At most ``MAX_DISPLAYED_CANDIDATES`` matching documents, in
            selection order.
        truncated: ``True`` when more matches existed than are listed.
    """

    def __init__(self, candidates: Sequence["DocumentHandle"], truncated: bool) -> None:
        self.candidates = list(candidates)
        self.truncated = truncated
        lines = ["Ambiguous document selection. Candidates:"]
        lines.extend(f" - {doc}" for doc in self.candidates)
        if truncated:
            lines.append(" - (truncated)")
        super().__init__("\n".join(lines))


class SelectionFailed(SelectionError):
    """An error surfaced while resolving a single document."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error
