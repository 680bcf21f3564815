"""List the registered search operators."""

from __future__ import annotations

import json

import click
from rich.markup import escape
from rich.text import Text

from search_operators.commands.parse import parse_operator_option
from search_operators.config import Config
from search_operators.context import Context, pass_context
from search_operators.search.pattern import build_pattern_source
from search_operators.utils.output import console, create_table, info, verbose, warning

EXIT_SUCCESS = 0


@click.command("operators")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--operator",
    "-o",
    "extra_operators",
    multiple=True,
    callback=parse_operator_option,
    metavar="KEY=PATTERN",
    help="Register an extra operator (repeatable)",
)
@click.option(
    "--no-defaults",
    is_flag=True,
    default=False,
    help="Do not register the built-in post operators",
)
@pass_context
def cli(
    ctx: Context,
    output_format: str,
    extra_operators: dict[str, str],
    no_defaults: bool,
) -> None:
    """List the search operators available to the parse command.

    Operators come from the built-in post operators, the [operators]
    section of the config file and any --operator options, in that
    order. Later sources override earlier ones. Invalid operators are
    reported and skipped.

    \b
    Examples:
      search-operators operators
      search-operators operators --no-defaults -o artist='[\\w\\-]+'
      search-operators operators --format json
    """
    config = ctx.config or Config()
    collector = config.build_collector(
        include_defaults=False if no_defaults else None,
        extra_operators=extra_operators,
    )
    registry = collector.get_search_operators()

    if not ctx.quiet:
        for dropped in registry.dropped:
            warning(escape(f"Ignoring search operator '{dropped.key}': {dropped.reason}"))

    if output_format == "json":
        data = {
            key: {"query_var": operator.query_var, "pattern": operator.pattern}
            for key, operator in registry.operators.items()
        }
        click.echo(json.dumps(data, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    if not registry.operators:
        info("No search operators registered")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Operator", style="operator.key", no_wrap=True)
    table.add_column("Query var", style="operator.var", no_wrap=True)
    table.add_column("Pattern", style="operator.pattern")
    for key, operator in registry.operators.items():
        table.add_row(f"{key}:*", operator.query_var, Text(operator.pattern))
    console.print(table)

    verbose(f"Combined pattern: {escape(build_pattern_source(registry) or '')}")

    raise SystemExit(EXIT_SUCCESS)
