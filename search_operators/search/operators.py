"""Search operator definitions and the registry built from them."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping, ValuesView
from dataclasses import dataclass, field
from typing import Any, Union

from search_operators.exceptions import OperatorDefinitionError

logger = logging.getLogger(__name__)

# Query variable holding the free-text search term.
SEARCH_FIELD = "s"


@dataclass(frozen=True)
class OperatorDefinition:
    """A normalized search operator.

    Attributes:
        key: Operator keyword as typed in the search text (``key:value``).
        query_var: Query variable the extracted value is written into.
        pattern: Regular expression fragment matching the value.
    """

    key: str
    query_var: str
    pattern: str


# A contributed operator: a value pattern shorthand, a mapping with
# ``pattern`` and optional ``query_var``, or an already normalized definition.
RawOperator = Union[str, Mapping[str, Any], OperatorDefinition]


@dataclass(frozen=True)
class DroppedOperator:
    """An operator excluded from the registry, kept for diagnostics."""

    key: str
    reason: str


def operator_fragment(key: str, pattern: str) -> str:
    """Return the alternative matching ``key:pattern`` in the combined pattern."""
    return f"({re.escape(key)}:{pattern})"


def combine_fragments(fragments: list[str]) -> str:
    """Join operator alternatives into a pattern matching a whole token."""
    # Lookarounds instead of \b so values ending in a quote still match
    return r"(?<!\w)(?:" + "|".join(fragments) + r")(?!\w)"


def _check_pattern(key: str, pattern: str) -> None:
    try:
        re.compile(combine_fragments([operator_fragment(key, pattern)]))
    except re.error as e:
        raise OperatorDefinitionError(key, f"'pattern' is not a valid expression: {e}") from e


def parse_search_operator(key: str, operator: RawOperator) -> OperatorDefinition:
    """Normalize a single contributed search operator.

    Args:
        key: The operator keyword.
        operator: The value pattern, or a mapping of operator properties.

    Returns:
        The normalized operator definition.

    Raises:
        OperatorDefinitionError: If the search operator is invalid.
    """
    if not key or not isinstance(key, str):
        raise OperatorDefinitionError(str(key), "expected the key to not be empty")

    if isinstance(operator, OperatorDefinition):
        operator = {"query_var": operator.query_var, "pattern": operator.pattern}

    if isinstance(operator, str):
        if not operator:
            raise OperatorDefinitionError(key, "expected the 'pattern' to be valid")
        _check_pattern(key, operator)
        return OperatorDefinition(key=key, query_var=key, pattern=operator)

    if not isinstance(operator, Mapping):
        raise OperatorDefinitionError(
            key, f"expected a pattern or a mapping, got {type(operator).__name__}"
        )

    query_var = operator.get("query_var", operator.get("target_field", key))
    if not query_var or not isinstance(query_var, str) or query_var == SEARCH_FIELD:
        raise OperatorDefinitionError(key, "expected the 'query_var' to be valid")

    pattern = operator.get("pattern")
    if not pattern or not isinstance(pattern, str):
        raise OperatorDefinitionError(key, "expected the 'pattern' to be valid")
    _check_pattern(key, pattern)

    return OperatorDefinition(key=key, query_var=query_var, pattern=pattern)


@dataclass
class OperatorRegistry:
    """Read-only mapping of operator keys to their definitions.

    Keys keep the order in which operators were contributed; that order
    decides precedence between overlapping patterns.
    """

    operators: dict[str, OperatorDefinition] = field(default_factory=dict)
    dropped: list[DroppedOperator] = field(default_factory=list)

    def __getitem__(self, key: str) -> OperatorDefinition:
        return self.operators[key]

    def __contains__(self, key: object) -> bool:
        return key in self.operators

    def __iter__(self) -> Iterator[str]:
        return iter(self.operators)

    def __len__(self) -> int:
        return len(self.operators)

    def get(self, key: str, default: OperatorDefinition | None = None) -> OperatorDefinition | None:
        return self.operators.get(key, default)

    def values(self) -> ValuesView[OperatorDefinition]:
        return self.operators.values()


def build_registry(raw_operators: Mapping[str, RawOperator]) -> OperatorRegistry:
    """Build a registry from contributed operators.

    Invalid entries are silently excluded so that one bad contributor
    does not break all others. They are recorded in
    :attr:`OperatorRegistry.dropped`. An entry whose pattern is valid on
    its own but cannot be combined with the operators accepted before it
    (e.g. a reused group name) is dropped the same way.
    """
    registry = OperatorRegistry()
    fragments: list[str] = []

    for key, operator in raw_operators.items():
        try:
            definition = parse_search_operator(key, operator)
            fragment = operator_fragment(key, definition.pattern)
            try:
                re.compile(combine_fragments(fragments + [fragment]))
            except re.error as e:
                raise OperatorDefinitionError(
                    key, f"conflicts with earlier operators: {e}"
                ) from e
        except OperatorDefinitionError as e:
            logger.debug("Dropping search operator %r: %s", key, e.reason)
            registry.dropped.append(DroppedOperator(key=str(key), reason=e.reason))
            continue

        registry.operators[key] = definition
        fragments.append(fragment)

    return registry
