import re

import pytest

from veisku import QueryParseError, compile_query, parse_criterion
from veisku.core import matchers


def test_empty_query():
    query = compile_query([])
    assert query.smart_name is None
    assert query.matchers == ()


def test_smart_name_goes_to_its_own_slot():
    query = compile_query(["meeting", "tag:work"])
    assert query.smart_name == "meeting"
    assert query.matchers == (matchers.Meta("tag", matchers.Eq("work")),)


def test_matchers_keep_input_order():
    query = compile_query(["/^a/", "!tag:work", "path:/x/"])
    first, second, third = query.matchers
    assert isinstance(first, matchers.NameRegex)
    assert first.regex.pattern == "^a"
    assert second == matchers.Negate(matchers.Meta("tag", matchers.Eq("work")))
    assert isinstance(third, matchers.Meta)
    assert isinstance(third.op, matchers.Regex)
    assert third.op.regex.pattern == "x"


def test_accepts_parsed_criteria():
    query = compile_query([parse_criterion("foo"), parse_criterion("!/bar/")])
    assert query.smart_name == "foo"
    assert query.matchers == (matchers.Negate(matchers.NameRegex(re.compile("bar"))),)


def test_second_smart_name_is_rejected():
    with pytest.raises(QueryParseError, match="only appear once"):
        compile_query(["foo", "bar"])


@pytest.mark.parametrize("preset", ["", "default"])
def test_known_presets(preset):
    assert compile_query(["tag:x"], preset).matchers


def test_unknown_preset_is_rejected():
    with pytest.raises(QueryParseError, match="'recent'"):
        compile_query([], "recent")


def test_parse_errors_surface_from_compile():
    with pytest.raises(QueryParseError):
        compile_query(["size:>3"])
