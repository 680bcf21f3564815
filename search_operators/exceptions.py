"""Exception hierarchy for search-operators."""

from pathlib import Path


class SearchOperatorsError(Exception):
    """Base exception for all search-operators errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all search-operators errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(SearchOperatorsError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Operator Errors
class OperatorDefinitionError(SearchOperatorsError):
    """A search operator definition is invalid.

    Raised while normalizing a single contributed operator. The registry
    builder catches it and drops the offending entry.
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid search operator '{key}': {reason}")
