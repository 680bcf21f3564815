"""Bridge between query representations and the search operator parser.

A query arrives either as a plain mapping of query variables or as a
stateful query object exposing ``get(name, default)`` and
``set(name, value)``. This module is the only place that tells them apart.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from search_operators.search.operators import SEARCH_FIELD

if TYPE_CHECKING:
    from search_operators.search.providers import OperatorCollector

# Query variable that disables operator parsing when truthy.
IGNORE_FLAG = "ignore_search_operators"


@runtime_checkable
class QueryArgs(Protocol):
    """Common accessors over a query representation."""

    def get(self, name: str, default: Any = None) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    @property
    def value(self) -> Any: ...


class MappingQueryArgs:
    """Query variables held in a plain mapping.

    Writes go to a copy; the caller's mapping is left untouched.
    """

    def __init__(self, query: Mapping[str, Any]) -> None:
        self._query: dict[str, Any] = dict(query)

    def get(self, name: str, default: Any = None) -> Any:
        return self._query.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._query[name] = value

    @property
    def value(self) -> dict[str, Any]:
        return self._query


class ObjectQueryArgs:
    """Query variables held by a stateful query object."""

    def __init__(self, query: Any) -> None:
        self._query = query

    def get(self, name: str, default: Any = None) -> Any:
        return self._query.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._query.set(name, value)

    @property
    def value(self) -> Any:
        return self._query


def wrap_query(query: Any) -> QueryArgs:
    """Wrap a query representation in the matching accessor.

    Raises:
        TypeError: If ``query`` is neither a mapping nor an object with
            ``get`` and ``set`` methods.
    """
    if isinstance(query, Mapping):
        return MappingQueryArgs(query)
    if callable(getattr(query, "get", None)) and callable(getattr(query, "set", None)):
        return ObjectQueryArgs(query)
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


def parse_query_args(query: Any, collector: OperatorCollector | None = None) -> Any:
    """Parse search operators found in a query's search term.

    Returns ``query`` unchanged when operators are disabled through
    ``ignore_search_operators``, when there is no usable search term, or
    when ``query`` is of an unsupported type.
    """
    from search_operators.search.parser import parse_search_query

    try:
        args = wrap_query(query)
    except TypeError:
        return query

    if bool(args.get(IGNORE_FLAG, False)):
        return query

    search = args.get(SEARCH_FIELD, "")
    if not search or not isinstance(search, str):
        return query

    return parse_search_query(search, query, collector)
