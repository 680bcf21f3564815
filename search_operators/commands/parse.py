"""Parse search operators out of a search term."""

from __future__ import annotations

import json

import click
from rich.markup import escape
from rich.text import Text

from search_operators.config import Config
from search_operators.context import Context, pass_context
from search_operators.search.adapter import IGNORE_FLAG, parse_query_args
from search_operators.search.operators import SEARCH_FIELD
from search_operators.utils.output import console, create_table, error, info, verbose

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1


def parse_operator_option(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Convert repeated ``KEY=PATTERN`` options into an operator mapping."""
    operators: dict[str, str] = {}
    for item in values:
        key, sep, pattern = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=PATTERN, got '{item}'", ctx=ctx, param=param)
        operators[key] = pattern
    return operators


def _format_value(value: str | list[str]) -> str:
    if isinstance(value, list):
        return ", ".join(value)
    return value


@click.command("parse")
@click.argument("query", nargs=-1, required=True)
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
@click.option(
    "--ignore-operators",
    is_flag=True,
    default=False,
    help="Pass the search term through without parsing operators",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    output_format: str,
    extra_operators: dict[str, str],
    no_defaults: bool,
    ignore_operators: bool,
) -> None:
    """Extract search operators from QUERY.

    QUERY is a free-text search term. Multiple arguments are joined
    with spaces.

    \b
    Examples:
      search-operators parse "hello world title:community"
      search-operators parse "p:42 draft post_status:draft"
      search-operators parse 'title:"hello world" post_type:page'
      search-operators parse -o artist='[\\w\\-]+' "artist:basinski loops"

    \b
    Output formats:
      --format table   Rich table of query variables (default)
      --format json    JSON object of query variables
    """
    config = ctx.config or Config()

    search = " ".join(query)
    if not search.strip():
        error("Empty search term")
        raise SystemExit(EXIT_USAGE_ERROR)

    collector = config.build_collector(
        include_defaults=False if no_defaults else None,
        extra_operators=extra_operators,
    )

    query_args: dict[str, object] = {SEARCH_FIELD: search}
    if ignore_operators:
        query_args[IGNORE_FLAG] = True

    result = dict(parse_query_args(query_args, collector))
    result.pop(IGNORE_FLAG, None)

    if output_format == "json":
        click.echo(json.dumps(result, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    if not ctx.quiet:
        info(f"Search: {escape(search)}")
    if result == {SEARCH_FIELD: search}:
        verbose("No search operators found")

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Query var", style="operator.var", no_wrap=True)
    table.add_column("Value")
    for query_var, value in result.items():
        style = "search.term" if query_var == SEARCH_FIELD else None
        table.add_row(query_var, Text(_format_value(value)), style=style)
    console.print(table)

    raise SystemExit(EXIT_SUCCESS)
