"""Write a starter configuration file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from search_operators.commands.parse import parse_operator_option
from search_operators.config import Config, get_default_config_path, save_config
from search_operators.context import Context, pass_context
from search_operators.utils.output import error, info, success, warning


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing config file")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/search-operators/config.toml)",
)
@click.option(
    "--operator",
    "operators",
    multiple=True,
    callback=parse_operator_option,
    metavar="KEY=PATTERN",
    help="Add an operator to the [operators] table (repeatable)",
)
@click.option(
    "--no-defaults",
    is_flag=True,
    default=False,
    help="Write include_default_operators = false",
)
@pass_context
def cli(
    ctx: Context,
    force: bool,
    output: Path | None,
    operators: dict[str, str],
    no_defaults: bool,
) -> None:
    """Create a configuration file.

    The file holds the [search], [operators] and [display] sections with
    their default values, plus any operators given with --operator.

    \b
    Examples:
      search-operators init-config
      search-operators init-config --output ./operators.toml
      search-operators init-config --operator tag='[\\w\\-]+' --force
    """
    config_path = (output or get_default_config_path()).expanduser().resolve()

    if config_path.exists() and not force:
        error(f"Config file already exists: {config_path}", hint="Use --force to overwrite")
        raise SystemExit(1)

    config = Config(include_default_operators=not no_defaults, operators=dict(operators))

    try:
        save_config(config, config_path)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {config_path}")
    if ctx.quiet:
        return
    for warn in config.validate():
        warning(escape(warn))
    info(escape("Edit the [operators] table to add your own search operators."))
