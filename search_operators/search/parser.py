"""Extract search operators from a free-text search term."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Union

from search_operators.search.adapter import wrap_query
from search_operators.search.operators import SEARCH_FIELD, OperatorRegistry
from search_operators.search.pattern import compile_pattern
from search_operators.search.providers import OperatorCollector, default_collector

logger = logging.getLogger(__name__)

FieldValue = Union[str, list[str]]

_QUOTES = ("'", '"')


@dataclass
class ParseResult:
    """Outcome of parsing a search term.

    Attributes:
        fields: Query variables resolved from operators. When any operator
            matched, also holds the residual search term under ``s``.
        residual_text: The search term with matched operators removed.
    """

    fields: dict[str, FieldValue] = field(default_factory=dict)
    residual_text: str = ""


def _unquote(value: str) -> str:
    """Strip one layer of matching quotes, then surrounding whitespace."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return value.strip()


def parse(
    search_text: str,
    registry: OperatorRegistry,
    pattern: re.Pattern[str] | None,
) -> ParseResult:
    """Parse search operators out of ``search_text``.

    Example: ``hello world title:community`` yields
    ``{"title": "community", "s": "hello world"}``.

    A query variable seen once holds a string. Repeats turn it into a list
    in the order the operators appear.

    Every copy of a matched token is removed from the search term, not
    only the matched one.
    """
    if ":" not in search_text or pattern is None:
        return ParseResult(residual_text=search_text)

    fields: dict[str, FieldValue] = {}
    remaining = search_text
    matched = False

    for match in pattern.finditer(search_text):
        token = match.group(0)
        if not token or ":" not in token:
            continue
        matched = True

        key, raw_value = token.split(":", 1)
        operator = registry.get(key)
        if operator is None:
            continue

        value = _unquote(raw_value)
        query_var = operator.query_var or key

        if query_var in fields:
            existing = fields[query_var]
            if not isinstance(existing, list):
                existing = [existing]
                fields[query_var] = existing
            existing.append(value)
        else:
            fields[query_var] = value

        logger.debug("Search operator %s matched %r -> %s", key, token, query_var)
        remaining = remaining.replace(token, "")

    if not matched:
        return ParseResult(residual_text=search_text)

    fields[SEARCH_FIELD] = remaining.strip()
    return ParseResult(fields=fields, residual_text=fields[SEARCH_FIELD])


def parse_search_query(
    search: str,
    query: Any = None,
    collector: OperatorCollector | None = None,
) -> Any:
    """Parse any search operators in ``search`` and merge them into ``query``.

    Args:
        search: The search term to parse.
        query: A mapping of query variables or a stateful query object
            with ``get``/``set`` accessors. Defaults to an empty dict.
        collector: Source of search operators. Defaults to the built-in
            post operators.

    Returns:
        The query with resolved variables, in the representation it was
        given. Returned unchanged when no operator matched.
    """
    if query is None:
        query = {}

    if not isinstance(search, str) or ":" not in search:
        return query

    if collector is None:
        collector = default_collector()

    registry = collector.get_search_operators()
    pattern = compile_pattern(registry)

    result = parse(search, registry, pattern)
    if not result.fields:
        return query

    args = wrap_query(query)
    for query_var, value in result.fields.items():
        args.set(query_var, value)
    return args.value
