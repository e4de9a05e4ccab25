import pytest

from veisku import QueryParseError, UnsupportedSyntaxError, parse_criterion
from veisku.core.criteria import MetaEq, MetaRegex, NameRegex, NameSmart, Simple


def test_bare_word_is_smart_name():
    assert parse_criterion("foo") == NameSmart("foo")


def test_negated_smart_name_is_rejected():
    with pytest.raises(QueryParseError, match="negation"):
        parse_criterion("!foo")


def test_slashes_make_a_name_regex():
    assert parse_criterion("/^a.*/") == Simple(NameRegex("^a.*"))


def test_negated_name_regex():
    assert parse_criterion("!/draft/") == Simple(NameRegex("draft"), negate=True)


def test_key_value_is_meta_eq():
    assert parse_criterion("tag:work") == Simple(MetaEq("tag", "work"))


def test_negated_meta_eq():
    assert parse_criterion("!tag:work") == Simple(MetaEq("tag", "work"), negate=True)


def test_key_regex_is_meta_regex():
    assert parse_criterion("tag:/^w/") == Simple(MetaRegex("tag", "^w"))


def test_path_regex():
    assert parse_criterion("path:/foo/") == Simple(MetaRegex("path", "foo"))


def test_value_may_contain_colons():
    """Only the first colon separates key and value."""
    assert parse_criterion("url:http://example.com") == Simple(MetaEq("url", "http://example.com"))


def test_empty_value_is_meta_eq():
    assert parse_criterion("status:") == Simple(MetaEq("status", ""))


def test_lone_slash_is_smart_name():
    assert parse_criterion("/") == NameSmart("/")


def test_expression_syntax_is_unsupported():
    with pytest.raises(UnsupportedSyntaxError, match="EXPRESSION"):
        parse_criterion("=1+1")


@pytest.mark.parametrize("token", ["size:>10", "date:<2020", "date:<=2020", "n:>=3", "n:<>3"])
def test_range_comparisons_are_unsupported(token):
    with pytest.raises(UnsupportedSyntaxError, match="Range"):
        parse_criterion(token)


def test_content_search_is_unsupported():
    with pytest.raises(UnsupportedSyntaxError, match="content search"):
        parse_criterion("contents:hello")


def test_invalid_regex_names_the_pattern():
    with pytest.raises(QueryParseError, match=r"'\(unclosed'"):
        parse_criterion("/(unclosed/")


def test_invalid_meta_regex_is_rejected():
    with pytest.raises(QueryParseError):
        parse_criterion("tag:/[a-/")


def test_unsupported_syntax_is_a_value_error():
    with pytest.raises(ValueError):
        parse_criterion("=expr")
