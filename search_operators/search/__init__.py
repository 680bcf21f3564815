"""Search operator parsing for free-text search terms."""

from search_operators.search.adapter import (
    IGNORE_FLAG,
    MappingQueryArgs,
    ObjectQueryArgs,
    QueryArgs,
    parse_query_args,
    wrap_query,
)
from search_operators.search.operators import (
    SEARCH_FIELD,
    DroppedOperator,
    OperatorDefinition,
    OperatorRegistry,
    build_registry,
    parse_search_operator,
)
from search_operators.search.parser import ParseResult, parse, parse_search_query
from search_operators.search.pattern import build_pattern_source, compile_pattern
from search_operators.search.providers import (
    OperatorCollector,
    add_post_search_operators,
    config_operator_provider,
    default_collector,
    get_post_search_operators,
)

__all__ = [
    "IGNORE_FLAG",
    "SEARCH_FIELD",
    "DroppedOperator",
    "MappingQueryArgs",
    "ObjectQueryArgs",
    "OperatorCollector",
    "OperatorDefinition",
    "OperatorRegistry",
    "ParseResult",
    "QueryArgs",
    "add_post_search_operators",
    "build_pattern_source",
    "build_registry",
    "compile_pattern",
    "config_operator_provider",
    "default_collector",
    "get_post_search_operators",
    "parse",
    "parse_query_args",
    "parse_search_operator",
    "parse_search_query",
    "wrap_query",
]
