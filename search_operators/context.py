"""State shared between the CLI group and its subcommands."""

from __future__ import annotations

from dataclasses import dataclass

import click

from search_operators.config import Config


@dataclass
class Context:
    """Loaded configuration and output flags for the running command."""

    config: Config | None = None
    quiet: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)
