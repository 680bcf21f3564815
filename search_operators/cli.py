"""Command-line interface for search-operators."""

from __future__ import annotations

import os
from pathlib import Path

import click
from rich.markup import escape

from search_operators import __version__
from search_operators.commands import init_config, operators, parse
from search_operators.config import load_config
from search_operators.context import Context
from search_operators.exceptions import SearchOperatorsError
from search_operators.utils.output import error, set_color, set_verbosity, warning


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/search-operators/config.toml)",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log extraction details to stderr (implies --verbose)",
)
@click.option("--quiet", "-q", is_flag=True, default=False, help="Suppress non-error output")
@click.version_option(version=__version__, prog_name="search-operators")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """Turn key:value operators in search terms into query variables.

    Operators such as "title:community" or "post_status:draft" are
    extracted from the search term and returned as separate query
    variables. The remaining text is kept as the search term "s".

    \b
    Examples:
      search-operators parse "hello world title:community"
      search-operators operators --format json
      search-operators --config ./operators.toml parse "tag:news launch"
    """
    app_ctx = ctx.ensure_object(Context)
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)

    # NO_COLOR and --no-color win over the config file
    color_forced_off = no_color or "NO_COLOR" in os.environ
    if color_forced_off:
        set_color(False)

    try:
        app_ctx.config, warnings = load_config(config_path)
    except (SearchOperatorsError, OSError) as e:
        error(escape(str(e)))
        ctx.exit(1)

    if not app_ctx.config.colored_output and not color_forced_off:
        set_color(False)

    if not quiet:
        for message in warnings:
            warning(escape(message))


cli.add_command(parse.cli)
cli.add_command(operators.cli)
cli.add_command(init_config.cli)
