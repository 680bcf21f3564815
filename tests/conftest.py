"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from search_operators.search.operators import OperatorRegistry, build_registry
from search_operators.search.providers import get_post_search_operators

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[search]
include_default_operators = true

[operators]
author = "[\\\\w\\\\-]+"

[operators.id]
query_var = "post_id"
pattern = "[1-9]\\\\d*"

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def post_registry() -> OperatorRegistry:
    """Registry with the built-in post search operators."""
    return build_registry(get_post_search_operators())


class FakeQuery:
    """Stateful query object with get/set accessors."""

    def __init__(self, **query_vars: object) -> None:
        self.query_vars: dict[str, object] = dict(query_vars)
        self.set_calls: list[tuple[str, object]] = []

    def get(self, name: str, default: object = None) -> object:
        return self.query_vars.get(name, default)

    def set(self, name: str, value: object) -> None:
        self.set_calls.append((name, value))
        self.query_vars[name] = value


@pytest.fixture
def fake_query() -> type[FakeQuery]:
    """The stateful query object class."""
    return FakeQuery
