"""Tests for matcher evaluation, including the tri-state metadata comparison."""

import io
import logging
import re
from pathlib import Path

import pytest

from veisku import DocumentHandle, MetadataSyntaxError
from veisku.core import matchers
from veisku.core.matchers import Eq, Meta, Regex, compare


def make_doc(name: str, header: str = "", path: str = "/notes") -> DocumentHandle:
    """Build a handle whose file content is served from memory."""
    data = header.encode("utf-8")
    return DocumentHandle(Path(path) / name, opener=lambda _: io.BytesIO(data))


class TestCompare:
    def test_string_equality(self):
        assert compare(Eq("work"), "work") is True
        assert compare(Eq("work"), "Work") is False

    def test_string_regex_searches(self):
        assert compare(Regex(re.compile("^w")), "work") is True
        assert compare(Regex(re.compile("ork")), "work") is True
        assert compare(Regex(re.compile("^o")), "work") is False

    def test_null_is_false(self):
        assert compare(Eq("x"), None) is False

    def test_sequence_with_match_is_true(self):
        assert compare(Eq("b"), ["a", "b"]) is True

    def test_sequence_without_match_is_false(self):
        assert compare(Eq("c"), ["a", "b"]) is False

    def test_sequence_of_uncomparables_is_uncomparable(self):
        assert compare(Eq("1"), [1, 2]) is None
        assert compare(Regex(re.compile(".")), [1, 2]) is None

    def test_one_comparable_match_wins(self):
        assert compare(Eq("b"), [1, "b"]) is True

    def test_comparable_mismatch_beats_uncomparable(self):
        assert compare(Eq("c"), [1, "b"]) is False

    def test_nested_sequences(self):
        assert compare(Eq("b"), [["a"], ["b"]]) is True

    def test_empty_sequence_is_false(self):
        assert compare(Eq("a"), []) is False

    @pytest.mark.parametrize("value", [{"a": "b"}, 1, 1.5, True, False])
    def test_other_shapes_are_uncomparable(self, value):
        assert compare(Eq("b"), value) is None


class TestMetaMatcher:
    def test_absent_key_is_false(self):
        doc = make_doc("a.md", "---\ntitle: A\n---\n")
        assert Meta("tags", Eq("work")).matches(doc) is False

    def test_document_without_metadata_is_false(self):
        doc = make_doc("a.md", "plain body")
        assert Meta("tags", Eq("work")).matches(doc) is False

    def test_sequence_field(self):
        doc = make_doc("a.md", "---\ntags: [a, b]\n---\n")
        assert Meta("tags", Eq("b")).matches(doc) is True

    def test_uncomparable_is_logged_and_false(self, caplog):
        doc = make_doc("a.md", "---\nnumbers: [1, 2]\n---\n")
        with caplog.at_level(logging.WARNING, logger="veisku.core.matchers"):
            assert Meta("numbers", Eq("1")).matches(doc) is False
        assert "uncomparable" in caplog.text
        assert "numbers" in caplog.text

    def test_boolean_field_never_matches(self):
        doc = make_doc("a.md", "---\ndone: true\n---\n")
        assert Meta("done", Eq("true")).matches(doc) is False

    def test_path_pseudo_field_does_not_read_metadata(self):
        doc = make_doc("a.md", "---\npath: elsewhere\n---\n", path="/notes/journal")
        assert Meta("path", Regex(re.compile("journal"))).matches(doc) is True
        assert Meta("path", Eq("/notes/journal/a.md")).matches(doc) is True
        assert not doc.is_loaded

    def test_metadata_errors_propagate(self):
        doc = make_doc("a.md", "---\ntitle: [oops\n---\n")
        with pytest.raises(MetadataSyntaxError):
            Meta("title", Eq("x")).matches(doc)

    def test_negate_propagates_errors(self):
        doc = make_doc("a.md", "---\ntitle: [oops\n---\n")
        with pytest.raises(MetadataSyntaxError):
            matchers.Negate(Meta("title", Eq("x"))).matches(doc)


class TestNameMatchers:
    def test_name_regex_uses_stem(self):
        doc = make_doc("2025-01-01.md")
        assert matchers.NameRegex(re.compile(r"^\d{4}-")).matches(doc) is True
        assert matchers.NameRegex(re.compile(r"\.md$")).matches(doc) is False

    def test_smart_name_exact_and_prefix(self):
        doc = make_doc("foobar.md")
        assert matchers.SmartNameExact("foobar").matches(doc) is True
        assert matchers.SmartNameExact("foo").matches(doc) is False
        assert matchers.SmartNamePrefix("foo").matches(doc) is True
        assert matchers.SmartNamePrefix("bar").matches(doc) is False

    def test_missing_base_name_is_false(self):
        doc = DocumentHandle(Path("/"))
        assert matchers.NameRegex(re.compile("")).matches(doc) is False
        assert matchers.SmartNameExact("").matches(doc) is False
        assert matchers.SmartNamePrefix("").matches(doc) is False

    def test_always_never_negate(self):
        doc = make_doc("a.md")
        assert matchers.Always().matches(doc) is True
        assert matchers.Never().matches(doc) is False
        assert matchers.Negate(matchers.Never()).matches(doc) is True
