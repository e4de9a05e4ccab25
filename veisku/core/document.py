"""Document handles with lazily loaded, memoized front-matter."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional

from veisku.core.metadata_reader import extract_metadata
from veisku.errors import DocumentError, DocumentReadError

logger = logging.getLogger(__name__)

Opener = Callable[[Path], BinaryIO]

_UNFETCHED = object()


def _open_binary(path: Path) -> BinaryIO:
    return path.open("rb")


class DocumentHandle:
    """A reference to a document file whose metadata is read on demand.

    The metadata slot starts unfetched and transitions exactly once, either to
    the parsed value or to the error raised while reading it. Subsequent calls to
    :meth:`metadata` return the stored value (or re-raise the stored error)
    without touching the file again. Each re-raise is a fresh copy of the stored
    error, chained to it.
    """

    def __init__(self, path: Path, opener: Opener = _open_binary) -> None:
        self.path = Path(path)
        self._opener = opener
        self._metadata: Any = _UNFETCHED
        self._error: Optional[DocumentError] = None
        self._lock = threading.Lock()

    @property
    def name(self) -> Optional[str]:
        """Base name of the file without its extension, if there is one."""
        stem = self.path.stem
        return stem or None

    @property
    def is_loaded(self) -> bool:
        return self._metadata is not _UNFETCHED or self._error is not None

    def metadata(self) -> Any:
        """Return the document's front-matter, reading the file on first use.

        Returns:
            The parsed YAML value, or ``None`` when the document has no
            front-matter block.

        Raises:
            DocumentReadError: If the file cannot be opened or read.
            MetadataEncodingError: If the block is not valid UTF-8.
            MetadataSyntaxError: If the block is not valid YAML.
        """
        with self._lock:
            if self._metadata is _UNFETCHED and self._error is None:
                try:
                    self._metadata = self._load()
                except DocumentError as exc:
                    self._error = exc
            if self._error is not None:
                raise type(self._error)(str(self._error), self._error.path) from self._error
            return self._metadata

    def _load(self) -> Any:
        logger.debug("Reading the metadata of %s", self.path)
        try:
            with self._opener(self.path) as stream:
                return extract_metadata(stream, path=self.path)
        except OSError as exc:
            raise DocumentReadError(f"Failed to read metadata from {self.path}: {exc}", self.path) from exc

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"DocumentHandle({str(self.path)!r})"
