"""Compilation of parsed criteria into an executable query."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from veisku.constants import NO_OP_PRESETS
from veisku.core import matchers
from veisku.core.criteria import (
    Criterion,
    MetaEq,
    MetaRegex,
    NameRegex,
    NameSmart,
    SimpleCriterion,
    parse_criterion,
    validate_regex,
)
from veisku.errors import QueryParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Query:
    """Compiled document query.

    Attributes:
        smart_name: The smart name search term, if the query has one.
        matchers: Conjunctive matchers, evaluated in order.
    """

    smart_name: Optional[str]
    matchers: tuple[matchers.Matcher, ...]


def _compile_simple(criterion: SimpleCriterion) -> matchers.Matcher:
    if isinstance(criterion, NameRegex):
        return matchers.NameRegex(validate_regex(criterion.pattern))
    if isinstance(criterion, MetaEq):
        return matchers.Meta(criterion.key, matchers.Eq(criterion.value))
    if isinstance(criterion, MetaRegex):
        return matchers.Meta(criterion.key, matchers.Regex(validate_regex(criterion.pattern)))
    raise TypeError(f"Unknown criterion: {criterion!r}")


def compile_query(
    criteria: Iterable[Union[Criterion, str]],
    preset: str = "default",
) -> Query:
    """Build a :class:`Query` from parsed criteria.

    Args:
        criteria: Parsed criteria, or raw criterion strings which are parsed first.
        preset: Name of a predefined filter. Only ``""`` and ``"default"`` are
            recognized and neither adds any filtering.

    Returns:
        The compiled query.

    Raises:
        QueryParseError: On an unknown preset, a repeated smart name search, or
            an invalid criterion.
    """
    # TODO: load named presets from the root configuration
    if preset not in NO_OP_PRESETS:
        raise QueryParseError(f"Unknown query preset: '{preset}'")

    smart_name: Optional[str] = None
    compiled: list[matchers.Matcher] = []

    for criterion in criteria:
        if isinstance(criterion, str):
            criterion = parse_criterion(criterion)

        if isinstance(criterion, NameSmart):
            if smart_name is not None:
                raise QueryParseError("Smart name search criteria can only appear once")
            smart_name = criterion.pattern
            continue

        matcher = _compile_simple(criterion.inner)
        if criterion.negate:
            matcher = matchers.Negate(matcher)
        compiled.append(matcher)

    query = Query(smart_name=smart_name, matchers=tuple(compiled))
    logger.debug("compiled query = %r", query)
    return query
