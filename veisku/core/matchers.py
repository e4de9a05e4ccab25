"""Matchers evaluating compiled criteria against documents.

Every matcher is immutable after construction and exposes
``matches(doc) -> bool``. Errors raised while loading a document's metadata
propagate unchanged to the caller.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from veisku.core.criteria import PATH_KEY
from veisku.core.document import DocumentHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Always:
    def matches(self, doc: DocumentHandle) -> bool:
        return True


@dataclass(frozen=True)
class Never:
    def matches(self, doc: DocumentHandle) -> bool:
        return False


@dataclass(frozen=True)
class Negate:
    inner: "Matcher"

    def matches(self, doc: DocumentHandle) -> bool:
        return not self.inner.matches(doc)


@dataclass(frozen=True)
class NameRegex:
    """Applies a regex to document base names."""

    regex: re.Pattern

    def matches(self, doc: DocumentHandle) -> bool:
        name = doc.name
        if name is None:
            return False
        return self.regex.search(name) is not None


@dataclass(frozen=True)
class SmartNameExact:
    pattern: str

    def matches(self, doc: DocumentHandle) -> bool:
        name = doc.name
        return name is not None and name == self.pattern


@dataclass(frozen=True)
class SmartNamePrefix:
    pattern: str

    def matches(self, doc: DocumentHandle) -> bool:
        name = doc.name
        return name is not None and name.startswith(self.pattern)


@dataclass(frozen=True)
class Eq:
    value: str

    def test(self, text: str) -> bool:
        return text == self.value


@dataclass(frozen=True)
class Regex:
    regex: re.Pattern

    def test(self, text: str) -> bool:
        return self.regex.search(text) is not None


MetaOp = Union[Eq, Regex]


def compare(op: MetaOp, value: Any) -> Optional[bool]:
    """Apply ``op`` to a metadata value.

    Returns:
        ``True`` or ``False`` for a definite outcome, ``None`` when the value has
        a shape that cannot be compared. Strings are compared directly, null never
        matches, and sequences fold their elements with the priority
        ``True > False > None``.
    """
    if isinstance(value, str):
        return op.test(value)
    if value is None:
        return False
    if isinstance(value, list):
        if not value:
            return False
        outcome: Optional[bool] = None
        for element in value:
            result = compare(op, element)
            if result:
                return True
            if result is False:
                outcome = False
        return outcome
    return None


def lookup(metadata: Any, key: str) -> Any:
    """Return ``metadata[key]``, or ``None`` when there is no such field."""
    if isinstance(metadata, dict):
        return metadata.get(key)
    return None


@dataclass(frozen=True)
class Meta:
    """Compares a metadata field (or the ``path`` pseudo-field) using ``op``."""

    key: str
    op: MetaOp

    def matches(self, doc: DocumentHandle) -> bool:
        if self.key == PATH_KEY:
            value: Any = str(doc.path)
        else:
            value = lookup(doc.metadata(), self.key)

        result = compare(self.op, value)
        if result is None:
            logger.warning(
                "The field '%s' of document '%s' contains an object of an "
                "uncomparable type; can't apply Meta matcher",
                self.key,
                doc,
            )
            return False
        return result


Matcher = Union[Always, Never, Negate, NameRegex, SmartNameExact, SmartNamePrefix, Meta]
