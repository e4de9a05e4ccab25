"""Document lookup operations returning serializable payloads."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Union

from veisku.core.criteria import Criterion
from veisku.core.document import DocumentHandle
from veisku.core.query import compile_query
from veisku.core.selection import select_all, select_one
from veisku.data_models import DocumentRoot
from veisku.errors import AmbiguousSelection, DocumentError, EmptySelection, SelectionError

logger = logging.getLogger(__name__)

Criteria = Iterable[Union[Criterion, str]]


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _jsonable(value: Any) -> Any:
    """Convert parsed front-matter into JSON-compatible values."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(item) for item in value]
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return str(value)


def _error_payload(error: DocumentError) -> dict[str, Any]:
    return {
        "path": str(error.path) if error.path is not None else None,
        "error": str(error),
    }


# ==============================================================================
# DOCUMENT OPERATIONS
# ==============================================================================


def which_document(root: DocumentRoot, criteria: Criteria, preset: str = "default") -> dict[str, Any]:
    """Resolve a query to a single document.

    Empty and ambiguous selections are reported in the payload rather than
    raised, since they are ordinary query outcomes.

    Returns:
        Dictionary with root, status (``"selected"``, ``"empty"`` or
        ``"ambiguous"``) and either the selected ``path`` or the ``candidates``
        with a ``truncated`` flag and a display ``message``.

    Raises:
        QueryParseError: If the criteria or preset are invalid.
        SelectionFailed: If a document could not be evaluated.
    """
    query = compile_query(criteria, preset)
    payload: dict[str, Any] = {"root": str(root.path)}

    try:
        doc = select_one(root, query)
    except EmptySelection as exc:
        logger.info("Query matched nothing in root '%s'", root.path)
        payload.update(status="empty", path=None, message=str(exc))
        return payload
    except AmbiguousSelection as exc:
        logger.info(
            "Query matched %s%s documents in root '%s'",
            len(exc.candidates),
            "+" if exc.truncated else "",
            root.path,
        )
        payload.update(
            status="ambiguous",
            path=None,
            candidates=[str(candidate.path) for candidate in exc.candidates],
            truncated=exc.truncated,
            message=str(exc),
        )
        return payload

    logger.info("Query selected '%s'", doc.path)
    payload.update(status="selected", path=str(doc.path))
    return payload


def list_documents(
    root: DocumentRoot,
    criteria: Criteria,
    preset: str = "default",
    include_metadata: bool = False,
) -> dict[str, Any]:
    """List every document matching a query.

    Documents that fail to evaluate (unreadable files, broken front-matter) are
    reported under ``errors`` and the listing continues.

    Returns:
        Dictionary with root, ``matches`` (paths, or ``{"path", "meta"}``
        objects when ``include_metadata`` is set) and ``errors``.

    Raises:
        QueryParseError: If the criteria or preset are invalid.
    """
    query = compile_query(criteria, preset)
    matches: list[Any] = []
    errors: list[dict[str, Any]] = []

    for item in select_all(root, query):
        if isinstance(item, DocumentError):
            logger.warning("Skipping document during listing: %s", item)
            errors.append(_error_payload(item))
            continue

        if not include_metadata:
            matches.append(str(item.path))
            continue

        try:
            meta = item.metadata()
        except DocumentError as exc:
            logger.warning("Skipping document during listing: %s", exc)
            errors.append(_error_payload(exc))
            continue
        matches.append({"path": str(item.path), "meta": _jsonable(meta)})

    logger.info(
        "Listed %d documents in root '%s' (errors=%d)",
        len(matches),
        root.path,
        len(errors),
    )
    return {
        "root": str(root.path),
        "matches": matches,
        "errors": errors,
    }


def read_document_metadata(root: DocumentRoot, criteria: Criteria, preset: str = "default") -> dict[str, Any]:
    """Read the front-matter of the single document a query selects.

    Returns:
        Dictionary with root, path, metadata and has_metadata.

    Raises:
        QueryParseError: If the criteria or preset are invalid.
        ValueError: If the query does not select exactly one document.
        DocumentError: If the selected document's metadata cannot be read.
    """
    query = compile_query(criteria, preset)
    try:
        doc: DocumentHandle = select_one(root, query)
    except SelectionError as exc:
        raise ValueError(str(exc)) from exc

    meta = doc.metadata()
    logger.info("Read metadata for document '%s' (present=%s)", doc.path, meta is not None)
    return {
        "root": str(root.path),
        "path": str(doc.path),
        "metadata": _jsonable(meta),
        "has_metadata": meta is not None,
    }
