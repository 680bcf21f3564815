"""Combine registered search operators into a single match pattern."""

from __future__ import annotations

import logging
import re

from search_operators.search.operators import OperatorRegistry, combine_fragments, operator_fragment

logger = logging.getLogger(__name__)


def build_pattern_source(registry: OperatorRegistry) -> str | None:
    """Build the regular expression source matching any registered operator.

    Each operator contributes one ``(key:pattern)`` alternative, in registry
    order. The alternation is anchored so that a match is a whole token:
    it may not start or end inside a word.

    Returns:
        The expression source, or None if no operator has a pattern.
    """
    fragments: list[str] = []
    for key, operator in registry.operators.items():
        if operator.pattern:
            fragments.append(operator_fragment(key, operator.pattern))

    if not fragments:
        return None

    return combine_fragments(fragments)


def compile_pattern(registry: OperatorRegistry) -> re.Pattern[str] | None:
    """Compile the combined operator pattern.

    Python's ``re`` tries alternatives left to right, so the first
    registered operator wins when two patterns overlap.

    Returns:
        The compiled pattern, or None when there is nothing to parse.
    """
    source = build_pattern_source(registry)
    if source is None:
        return None

    try:
        return re.compile(source)
    except re.error as e:
        logger.warning("Could not compile search operators pattern: %s", e)
        return None
