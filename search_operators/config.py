"""Configuration management for search-operators."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from search_operators.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from search_operators.search.operators import OperatorDefinition, RawOperator, build_registry
from search_operators.search.providers import (
    OperatorCollector,
    add_post_search_operators,
    config_operator_provider,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "search-operators" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        include_default_operators: Whether the built-in post operators
            are registered before the configured ones.
        operators: Additional search operators, keyed by operator keyword.
            Values are a value pattern or a table with ``pattern`` and
            optional ``query_var``. These override built-in operators.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    include_default_operators: bool = True
    operators: dict[str, RawOperator] = field(default_factory=dict)
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        # Invalid operators are dropped at parse time, not rejected here
        for dropped in build_registry(self.operators).dropped:
            warnings.append(f"Search operator '{dropped.key}' will be ignored: {dropped.reason}")

        return warnings

    def build_collector(
        self,
        *,
        include_defaults: bool | None = None,
        extra_operators: dict[str, RawOperator] | None = None,
    ) -> OperatorCollector:
        """Create an operator collector for this configuration.

        Providers run in this order: built-in post operators, configured
        operators, then ``extra_operators`` (e.g. from the command line).

        Args:
            include_defaults: Overrides ``include_default_operators`` when set.
            extra_operators: Operators registered after the configured ones.
        """
        if include_defaults is None:
            include_defaults = self.include_default_operators

        collector = OperatorCollector()
        if include_defaults:
            collector.register(add_post_search_operators)
        if self.operators:
            collector.register(config_operator_provider(self.operators))
        if extra_operators:
            collector.register(config_operator_provider(extra_operators))
        return collector


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: search-operators init-config"
        )
        return config, warnings + config.validate()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [search] section
    search = data.get("search", {})
    if "include_default_operators" in search:
        value = search["include_default_operators"]
        if not isinstance(value, bool):
            raise ConfigValidationError(
                "search.include_default_operators", value, "must be a boolean"
            )
        config.include_default_operators = value

    # Parse [operators] section
    operators = data.get("operators", {})
    if not isinstance(operators, dict):
        raise ConfigValidationError("operators", operators, "must be a table")
    for key, value in operators.items():
        if not isinstance(value, (str, dict)):
            raise ConfigValidationError(
                f"operators.{key}", value, "must be a pattern string or a table"
            )
        config.operators[key] = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def _operator_to_toml(operator: RawOperator) -> str | dict[str, Any]:
    if isinstance(operator, str):
        return operator
    if isinstance(operator, OperatorDefinition):
        return {"query_var": operator.query_var, "pattern": operator.pattern}
    return dict(operator)


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "search": {
            "include_default_operators": config.include_default_operators,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    if config.operators:
        data["operators"] = {
            key: _operator_to_toml(operator) for key, operator in config.operators.items()
        }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
