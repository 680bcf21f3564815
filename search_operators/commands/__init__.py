"""Subcommands of the search-operators CLI."""
