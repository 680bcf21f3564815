"""Collection of search operators from registered providers.

Providers are plain callables. Each receives the mapping of operators
contributed so far and returns the updated mapping (or ``None`` after
updating it in place). They run in registration order, so later providers
can override earlier contributions.

Provided post search operators:

| Operator        | Query var     | Description                                  |
| --------------- | ------------- | -------------------------------------------- |
| `p:*`           | `post_id`     | Post ID.                                     |
| `page_id:*`     | `page_id`     | Page ID.                                     |
| `post_status:*` | `post_status` | A post status, or a list of post statuses.   |
| `post_type:*`   | `post_type`   | A post type slug, or a list of slugs.        |
| `title:*`       | `title`       | Post title; a word or a quoted phrase.       |
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Optional

from search_operators.search.operators import OperatorRegistry, RawOperator, build_registry

logger = logging.getLogger(__name__)

OperatorProvider = Callable[[dict[str, RawOperator]], Optional[Mapping[str, RawOperator]]]


def get_post_search_operators() -> dict[str, RawOperator]:
    """Return the built-in post-related search operators."""
    return {
        "p": {
            "query_var": "post_id",
            "pattern": r"[1-9]\d*",
        },
        "page_id": r"[1-9]\d*",
        "post_status": r"[\w\-]+",
        "post_type": r"[\w\-]+",
        "title": r"""(?:\w+|"[^"]+?"|'[^']+?')""",
    }


def add_post_search_operators(operators: dict[str, RawOperator]) -> dict[str, RawOperator]:
    """Add the post search operators without replacing existing keys."""
    merged = dict(operators)
    for key, operator in get_post_search_operators().items():
        merged.setdefault(key, operator)
    return merged


def config_operator_provider(config_operators: Mapping[str, RawOperator]) -> OperatorProvider:
    """Create a provider that overlays operators from configuration."""

    def provide(operators: dict[str, RawOperator]) -> dict[str, RawOperator]:
        merged = dict(operators)
        merged.update(config_operators)
        return merged

    return provide


class OperatorCollector:
    """Ordered chain of operator providers."""

    def __init__(self, providers: list[OperatorProvider] | None = None) -> None:
        self._providers: list[OperatorProvider] = list(providers or [])

    @property
    def providers(self) -> tuple[OperatorProvider, ...]:
        return tuple(self._providers)

    def register(self, provider: OperatorProvider) -> OperatorProvider:
        """Append a provider. Returns it, so this can be used as a decorator."""
        self._providers.append(provider)
        return provider

    def collect(self) -> dict[str, RawOperator]:
        """Run every provider in order and return the contributed operators."""
        operators: dict[str, RawOperator] = {}

        for provider in self._providers:
            # A failing provider must leave earlier contributions untouched
            working = dict(operators)
            name = getattr(provider, "__name__", repr(provider))
            try:
                result = provider(working)
                if result is not None and not isinstance(result, Mapping):
                    raise TypeError(f"expected a mapping, got {type(result).__name__}")
                operators = working if result is None else dict(result)
            except Exception as e:
                logger.warning("Search operator provider %s failed: %s", name, e)

        return operators

    def get_search_operators(self) -> OperatorRegistry:
        """Collect and normalize the registered search operators."""
        return build_registry(self.collect())


def default_collector() -> OperatorCollector:
    """Create a collector with the built-in post search operators."""
    return OperatorCollector([add_post_search_operators])
