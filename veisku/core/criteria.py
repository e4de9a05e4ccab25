"""Parsing of textual query criteria.

Criterion syntax:

- ``STRING`` performs a smart name search (at most once per query). Documents
  whose base name equals ``STRING`` are preferred; if there are none, documents
  whose base name starts with ``STRING`` are returned instead.
- ``/REGEX/`` matches documents whose base names match ``REGEX``.
- ``KEY:VALUE`` matches a metadata field ``KEY`` equal to ``VALUE``.
  ``path:VALUE`` matches the full path of a document.
- ``KEY:/REGEX/`` matches a metadata field ``KEY`` against ``REGEX``.
- A leading ``!`` negates any criterion except a smart name search.

Recognized but unimplemented: ``=EXPRESSION``, ``KEY:<VALUE`` and the other
range operators, and ``contents:TEXT``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from veisku.errors import QueryParseError, UnsupportedSyntaxError

PATH_KEY = "path"
CONTENTS_KEY = "contents"


@dataclass(frozen=True)
class NameRegex:
    pattern: str


@dataclass(frozen=True)
class MetaEq:
    key: str
    value: str


@dataclass(frozen=True)
class MetaRegex:
    key: str
    pattern: str


SimpleCriterion = Union[NameRegex, MetaEq, MetaRegex]


@dataclass(frozen=True)
class NameSmart:
    pattern: str


@dataclass(frozen=True)
class Simple:
    inner: SimpleCriterion
    negate: bool = False


Criterion = Union[NameSmart, Simple]


def _strip_slashes(text: str) -> Optional[str]:
    """Return the inside of ``/.../``, or ``None`` if ``text`` is not wrapped."""
    if len(text) >= 2 and text.startswith("/") and text.endswith("/"):
        return text[1:-1]
    return None


def validate_regex(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern``, turning a syntax error into a :class:`QueryParseError`."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise QueryParseError(f"Failed to compile the regex '{pattern}': {exc}") from exc


def parse_criterion(token: str) -> Criterion:
    """Parse one command-line criterion.

    Args:
        token: A single criterion such as ``"foo"``, ``"!tag:work"`` or ``"/^a/"``.

    Returns:
        A :class:`NameSmart` or :class:`Simple` criterion.

    Raises:
        UnsupportedSyntaxError: For expression, range and content syntax.
        QueryParseError: For a negated smart name search or an invalid regex.
    """
    negate = token.startswith("!")
    body = token[1:] if negate else token

    regex = _strip_slashes(body)
    if regex is not None:
        validate_regex(regex)
        return Simple(NameRegex(regex), negate)

    if body.startswith("="):
        raise UnsupportedSyntaxError(f"`=EXPRESSION` syntax is not implemented: '{token}'")

    key, sep, value = body.partition(":")
    if sep:
        if value.startswith("<") or value.startswith(">"):
            raise UnsupportedSyntaxError(f"Range comparisons are not implemented: '{token}'")
        if key == CONTENTS_KEY:
            raise UnsupportedSyntaxError(f"Full-text content search is not implemented: '{token}'")

        regex = _strip_slashes(value)
        if regex is not None:
            validate_regex(regex)
            return Simple(MetaRegex(key, regex), negate)
        return Simple(MetaEq(key, value), negate)

    if negate:
        raise QueryParseError(f"Smart name search cannot be used with negation: '{token}'")
    return NameSmart(body)


def parse_criteria(tokens: list[str]) -> list[Criterion]:
    return [parse_criterion(token) for token in tokens]
