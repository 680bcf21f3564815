"""Unit tests for the search operator parser."""

from __future__ import annotations

from search_operators.search.operators import OperatorRegistry, build_registry
from search_operators.search.parser import ParseResult, parse, parse_search_query
from search_operators.search.pattern import compile_pattern
from search_operators.search.providers import OperatorCollector


def _parse(search: str, registry: OperatorRegistry) -> ParseResult:
    return parse(search, registry, compile_pattern(registry))


# ---------------------------------------------------------------------------
# Pass-through
# ---------------------------------------------------------------------------


class TestPassThrough:
    def test_no_colon(self, post_registry: OperatorRegistry) -> None:
        result = _parse("hello world", post_registry)
        assert result.fields == {}
        assert result.residual_text == "hello world"

    def test_no_colon_keeps_whitespace(self, post_registry: OperatorRegistry) -> None:
        result = _parse("  hello  ", post_registry)
        assert result.residual_text == "  hello  "

    def test_no_pattern(self) -> None:
        result = parse("title:community", build_registry({}), None)
        assert result.fields == {}
        assert result.residual_text == "title:community"

    def test_empty_registry(self) -> None:
        result = _parse("p:42 title:community", build_registry({}))
        assert result.fields == {}
        assert result.residual_text == "p:42 title:community"

    def test_unknown_operator(self, post_registry: OperatorRegistry) -> None:
        result = _parse("foo:bar baz", post_registry)
        assert result.fields == {}
        assert result.residual_text == "foo:bar baz"

    def test_unknown_operator_kept_in_residual(self, post_registry: OperatorRegistry) -> None:
        result = _parse("foo:bar title:community", post_registry)
        assert result.fields == {"title": "community", "s": "foo:bar"}

    def test_operator_inside_word_ignored(self, post_registry: OperatorRegistry) -> None:
        result = _parse("subtitle:community", post_registry)
        assert result.fields == {}

    def test_value_not_matching_pattern(self, post_registry: OperatorRegistry) -> None:
        result = _parse("p:0 hello", post_registry)
        assert result.fields == {}
        assert result.residual_text == "p:0 hello"


# ---------------------------------------------------------------------------
# Extraction with the post operators
# ---------------------------------------------------------------------------


class TestPostOperators:
    def test_title(self, post_registry: OperatorRegistry) -> None:
        result = _parse("hello world title:community", post_registry)
        assert result.fields == {"title": "community", "s": "hello world"}
        assert result.residual_text == "hello world"

    def test_post_id_and_status(self, post_registry: OperatorRegistry) -> None:
        result = _parse("p:42 draft post_status:draft", post_registry)
        assert result.fields == {"post_id": "42", "post_status": "draft", "s": "draft"}

    def test_page_id(self, post_registry: OperatorRegistry) -> None:
        result = _parse("page_id:12", post_registry)
        assert result.fields == {"page_id": "12", "s": ""}

    def test_post_type_with_hyphen(self, post_registry: OperatorRegistry) -> None:
        result = _parse("post_type:wp-block reusable", post_registry)
        assert result.fields == {"post_type": "wp-block", "s": "reusable"}

    def test_double_quoted_title(self, post_registry: OperatorRegistry) -> None:
        result = _parse('title:"hello world"', post_registry)
        assert result.fields == {"title": "hello world", "s": ""}

    def test_single_quoted_title(self, post_registry: OperatorRegistry) -> None:
        result = _parse("title:'hello world' news", post_registry)
        assert result.fields == {"title": "hello world", "s": "news"}

    def test_quoted_value_whitespace_trimmed(self, post_registry: OperatorRegistry) -> None:
        result = _parse('title:" spaced out "', post_registry)
        assert result.fields["title"] == "spaced out"

    def test_inner_text_not_collapsed(self, post_registry: OperatorRegistry) -> None:
        result = _parse('find title:"hello world" now', post_registry)
        assert result.fields == {"title": "hello world", "s": "find  now"}


# ---------------------------------------------------------------------------
# Repeated operators
# ---------------------------------------------------------------------------


class TestRepeatedOperators:
    def test_repeats_become_list(self) -> None:
        registry = build_registry({"title": r"\w+"})
        result = _parse("a title:alpha title:beta", registry)
        assert result.fields == {"title": ["alpha", "beta"], "s": "a"}

    def test_list_keeps_first_seen_order(self) -> None:
        registry = build_registry({"title": r"\w+"})
        result = _parse("title:c title:a title:b", registry)
        assert result.fields["title"] == ["c", "a", "b"]

    def test_different_keys_same_query_var(self) -> None:
        registry = build_registry(
            {
                "p": {"query_var": "post_id", "pattern": r"\d+"},
                "id": {"query_var": "post_id", "pattern": r"\d+"},
            }
        )
        result = _parse("id:1 p:2", registry)
        assert result.fields == {"post_id": ["1", "2"], "s": ""}

    def test_identical_tokens_all_removed(self) -> None:
        registry = build_registry({"title": r"\w+"})
        result = _parse("title:x foo title:x", registry)
        assert result.fields == {"title": ["x", "x"], "s": "foo"}

    def test_literal_value_outside_operator_kept(self, post_registry: OperatorRegistry) -> None:
        result = _parse("draft post_status:draft draft", post_registry)
        assert result.fields["s"] == "draft  draft"


# ---------------------------------------------------------------------------
# Quotes and edge cases
# ---------------------------------------------------------------------------


class TestValues:
    def test_strips_exactly_one_layer_of_quotes(self) -> None:
        registry = build_registry({"q": r"\S+"})
        result = _parse("q:''x''", registry)
        assert result.fields["q"] == "'x'"

    def test_mismatched_quotes_kept(self) -> None:
        registry = build_registry({"q": r"\S+"})
        result = _parse("q:\"x'", registry)
        assert result.fields["q"] == "\"x'"

    def test_value_with_colon_split_on_first(self) -> None:
        registry = build_registry({"time": r"\d+:\d+"})
        result = _parse("meet time:10:30", registry)
        assert result.fields == {"time": "10:30", "s": "meet"}

    def test_registry_changed_after_compile(self) -> None:
        compiled_from = build_registry({"title": r"\w+"})
        pattern = compile_pattern(compiled_from)
        result = parse("hello title:x", build_registry({"other": r"\w+"}), pattern)
        assert result.fields == {"s": "hello title:x"}

    def test_residual_is_stable(self, post_registry: OperatorRegistry) -> None:
        first = _parse("p:42 draft post_status:draft title:'a b'", post_registry)
        second = _parse(first.residual_text, post_registry)
        assert second.fields == {}
        assert second.residual_text == first.residual_text


# ---------------------------------------------------------------------------
# parse_search_query
# ---------------------------------------------------------------------------


class TestParseSearchQuery:
    def test_merges_into_mapping(self) -> None:
        query = {"posts_per_page": 5, "s": "hello title:community"}
        result = parse_search_query("hello title:community", query)
        assert result == {"posts_per_page": 5, "s": "hello", "title": "community"}
        assert query == {"posts_per_page": 5, "s": "hello title:community"}

    def test_default_query(self) -> None:
        assert parse_search_query("p:42") == {"post_id": "42", "s": ""}

    def test_no_colon_returns_same_object(self) -> None:
        query = {"s": "hello"}
        assert parse_search_query("hello", query) is query

    def test_no_match_returns_same_object(self) -> None:
        query = {"s": "foo:bar"}
        assert parse_search_query("foo:bar", query) is query

    def test_non_string_search(self) -> None:
        query: dict[str, object] = {}
        assert parse_search_query(None, query) is query  # type: ignore[arg-type]

    def test_empty_collector(self) -> None:
        query = {"s": "title:community"}
        assert parse_search_query("title:community", query, OperatorCollector()) is query

    def test_custom_collector(self) -> None:
        collector = OperatorCollector([lambda operators: {"artist": r"\w+"}])
        result = parse_search_query("artist:basinski loops title:x", {}, collector)
        assert result == {"artist": "basinski", "s": "loops title:x"}

    def test_stateful_query_object(self, fake_query: type) -> None:
        query = fake_query(s="hello title:community", posts_per_page=5)
        result = parse_search_query("hello title:community", query)
        assert result is query
        assert query.query_vars == {"s": "hello", "posts_per_page": 5, "title": "community"}
        assert query.set_calls == [("title", "community"), ("s", "hello")]
