import pytest
from django.core.exceptions import SuspiciousOperation
from django.http import QueryDict

from pagelinks.utils.query import (
    InvalidParameterError,
    ParamsTooDeepError,
    build_nested_query,
    deep_merge,
    except_keys,
    parse_nested_query,
    params_from_querydict,
)


class TestParseNestedQuery:
    def test_flat_and_nested_keys(self):
        params = parse_nested_query("q=rails&user[name]=yuki&user[page]=2")
        assert params == {"q": "rails", "user": {"name": "yuki", "page": "2"}}

    def test_lists(self):
        params = parse_nested_query("tag[]=a&tag[]=b&filter[state][]=open")
        assert params == {"tag": ["a", "b"], "filter": {"state": ["open"]}}

    def test_list_of_hashes_starts_a_new_hash_when_key_repeats(self):
        params = parse_nested_query("x[][a]=1&x[][b]=2&x[][a]=3")
        assert params == {"x": [{"a": "1", "b": "2"}, {"a": "3"}]}

    def test_decoding_and_separators(self):
        params = parse_nested_query("q=a+b;amp=%26&empty=")
        assert params == {"q": "a b", "amp": "&", "empty": ""}

    def test_nameless_keys_are_ignored(self):
        assert parse_nested_query("=x&[]=y&a=1") == {"a": "1"}

    def test_empty(self):
        assert parse_nested_query("") == {}
        assert parse_nested_query(None) == {}

    def test_conflicting_shapes(self):
        with pytest.raises(InvalidParameterError):
            parse_nested_query("a=1&a[b]=2")
        with pytest.raises(InvalidParameterError):
            parse_nested_query("a[b]=1&a[]=2")

    def test_too_deep(self):
        with pytest.raises(ParamsTooDeepError):
            parse_nested_query("a" + "[b]" * 101 + "=1")

    def test_errors_are_bad_requests(self):
        assert issubclass(InvalidParameterError, SuspiciousOperation)


def test_params_from_querydict():
    querydict = QueryDict("page=1&page=2&user[name]=yuki&ids[]=3&ids[]=4")
    assert params_from_querydict(querydict) == {
        "page": "2",
        "user": {"name": "yuki"},
        "ids": ["3", "4"],
    }


class TestBuildNestedQuery:
    def test_flat(self):
        assert build_nested_query({"q": "a b", "page": 2}) == "q=a+b&page=2"

    def test_nested_keys_are_bracketed(self):
        query = build_nested_query({"user": {"name": "yuki", "page": "3"}, "ids": ["1", "2"]})
        assert query == "user%5Bname%5D=yuki&user%5Bpage%5D=3&ids%5B%5D=1&ids%5B%5D=2"

    def test_none_is_omitted(self):
        assert build_nested_query({"q": "x", "page": None}) == "q=x"
        assert build_nested_query({"user": {"page": None}}) == ""
        assert build_nested_query({"ids": []}) == ""

    def test_parses_back(self):
        params = {"q": "ruby & python", "user": {"name": "yuki", "tags": ["a", "b"]}}
        assert parse_nested_query(build_nested_query(params)) == params


def test_deep_merge():
    base = {"q": "x", "user": {"name": "yuki", "page": "4"}}
    merged = deep_merge(base, {"user": {"page": "2"}, "sort": "name"})
    assert merged == {"q": "x", "user": {"name": "yuki", "page": "2"}, "sort": "name"}
    # the original stays untouched
    assert base["user"]["page"] == "4"


def test_deep_merge_replaces_non_mappings():
    assert deep_merge({"user": "yuki"}, {"user": {"page": "2"}}) == {"user": {"page": "2"}}


def test_except_keys():
    params = {"q": "x", "_method": "put", "utf8": "✓"}
    assert except_keys(params, ("_method", "utf8")) == {"q": "x"}
    assert params["_method"] == "put"
