"""search-operators: extract ``key:value`` operators from free-text search strings."""

__version__ = "1.0.0"
