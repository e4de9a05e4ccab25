"""Selection of documents matching a compiled query."""

from __future__ import annotations

import logging
from itertools import islice
from pathlib import Path
from typing import Callable, Iterable, Iterator, Union

from veisku.constants import MAX_DISPLAYED_CANDIDATES
from veisku.core import matchers
from veisku.core.document import DocumentHandle
from veisku.core.query import Query
from veisku.core.root_operations import iter_document_paths
from veisku.data_models import DocumentRoot
from veisku.errors import (
    AmbiguousSelection,
    DocumentError,
    EmptySelection,
    SelectionFailed,
)

logger = logging.getLogger(__name__)

SelectionItem = Union[DocumentHandle, DocumentError]
PathItem = Union[Path, DocumentError]
PathSource = Union[DocumentRoot, Callable[[], Iterable[PathItem]], Iterable[PathItem]]


class _ReplayingSource:
    """Records a one-shot iterator on its first pass and replays it afterwards."""

    def __init__(self, iterator: Iterator[PathItem]) -> None:
        self._iterator: Iterator[PathItem] | None = iterator
        self._seen: list[PathItem] = []

    def __call__(self) -> Iterator[PathItem]:
        if self._iterator is None:
            return iter(self._seen)
        iterator, self._iterator = self._iterator, None
        return self._record(iterator)

    def _record(self, iterator: Iterator[PathItem]) -> Iterator[PathItem]:
        for item in iterator:
            self._seen.append(item)
            yield item


def _path_factory(source: PathSource, query: Query) -> Callable[[], Iterable[PathItem]]:
    """Return a callable producing a fresh pass over ``source`` for each phase."""
    if isinstance(source, DocumentRoot):
        return lambda: iter_document_paths(source)
    if callable(source):
        return source
    if iter(source) is source and query.smart_name is not None:
        return _ReplayingSource(source)
    return lambda: source


def _smart_name_matcher(query: Query, phase: int) -> matchers.Matcher:
    if query.smart_name is None:
        return matchers.Always() if phase == 0 else matchers.Never()
    if phase == 0:
        return matchers.SmartNameExact(query.smart_name)
    return matchers.SmartNamePrefix(query.smart_name)


def _filter(
    paths: Iterable[PathItem],
    query: Query,
    smart_name: matchers.Matcher,
) -> Iterator[SelectionItem]:
    for item in paths:
        if isinstance(item, DocumentError):
            yield item
            continue

        doc = DocumentHandle(item)
        try:
            if smart_name.matches(doc) and all(m.matches(doc) for m in query.matchers):
                yield doc
        except DocumentError as exc:
            yield exc


def select_all(source: PathSource, query: Query) -> Iterator[SelectionItem]:
    """Lazily yield the documents matching ``query``.

    Documents are visited in enumeration order. For each one the smart name
    matcher runs first, then every compiled matcher in order, stopping at the
    first mismatch or error. Evaluation errors are yielded in place as
    :class:`DocumentError` instances, so the caller decides whether to stop.

    With a smart name, the whole enumeration is first filtered on an exact base
    name match. Only if that pass yields nothing at all is the enumeration run
    again, this time accepting base names that start with the smart name.

    Args:
        source: A :class:`DocumentRoot` to enumerate, a zero-argument callable
            returning a fresh iterable of paths (and enumeration errors) per
            pass, or such an iterable itself. A one-shot iterator is recorded
            during the exact pass and replayed for the prefix pass.
        query: The compiled query.
    """
    paths = _path_factory(source, query)
    for phase in range(2):
        smart_name = _smart_name_matcher(query, phase)
        if isinstance(smart_name, matchers.Never):
            return

        produced = False
        for item in _filter(paths(), query, smart_name):
            produced = True
            yield item

        if produced:
            return
        if query.smart_name is not None:
            logger.debug("No exact match for smart name %r; retrying with a prefix match", query.smart_name)


def select_one(source: PathSource, query: Query) -> DocumentHandle:
    """Return the single document matching ``query``.

    Raises:
        EmptySelection: If nothing matched.
        AmbiguousSelection: If more than one document matched. Up to
            ``MAX_DISPLAYED_CANDIDATES`` candidates are attached and ``truncated``
            records whether there were more.
        SelectionFailed: If an error was encountered before the outcome was known,
            including while collecting ambiguity candidates.
    """
    results = select_all(source, query)

    def _take(item: SelectionItem) -> DocumentHandle:
        if isinstance(item, DocumentError):
            raise SelectionFailed(item) from item
        return item

    first = next(results, None)
    if first is None:
        raise EmptySelection()
    first = _take(first)

    second = next(results, None)
    if second is None:
        return first
    candidates = [first, _take(second)]

    # One past the display limit tells us whether the list is truncated.
    for item in islice(results, MAX_DISPLAYED_CANDIDATES - 1):
        candidates.append(_take(item))

    truncated = len(candidates) > MAX_DISPLAYED_CANDIDATES
    if truncated:
        candidates.pop()
    raise AmbiguousSelection(candidates, truncated)
