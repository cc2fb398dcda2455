"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from dotenv import load_dotenv

from MibigSearch.cli.commands import AvailableCommand, ConvertCommand, OverviewCommand, SearchCommand
from MibigSearch.cli.runner import CommandRunner
from MibigSearch.config import DEFAULT_CONFIG_PATH, load_config_with_defaults
from MibigSearch.core.query import QueryTerm, query_from_dict
from MibigSearch.renderers import create_output_writer

_query_options = [
    click.option("--query", "query_json", help="Query tree as a JSON string."),
    click.option(
        "--query-file",
        type=click.Path(path_type=Path, dir_okay=False, exists=True),
        help="Path to a JSON file holding the query tree.",
    ),
]


def _with_query_options(func):
    for option in reversed(_query_options):
        func = option(func)
    return func


def _load_query(query_json: str | None, query_file: Path | None) -> QueryTerm:
    """Parse the query tree given on the command line.

    Raises:
        click.UsageError: If neither or both sources are given, or the tree is malformed.
    """
    if (query_json is None) == (query_file is None):
        raise click.UsageError("Provide exactly one of --query or --query-file")
    text = query_json if query_json is not None else query_file.read_text(encoding="utf-8")
    try:
        return query_from_dict(json.loads(text))
    except (ValueError, TypeError) as e:
        raise click.UsageError(f"Invalid query: {e}") from e


@click.group(help="MibigSearch: query the biosynthetic gene cluster catalogue.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file, merged over the defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file before reading config.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("search")
@_with_query_options
@click.pass_context
def search_cmd(ctx: click.Context, query_json: str | None, query_file: Path | None) -> None:
    """Evaluate a query and write matching entries with statistics."""
    query = _load_query(query_json, query_file)
    output_writer = create_output_writer(ctx.obj)

    def body(service) -> None:
        SearchCommand(search_service=service, output_writer=output_writer).execute(query)
        output_writer.finalize(ctx.command.name)

    CommandRunner(ctx.obj).run(ctx.command.name, body)


@cli.command("convert")
@_with_query_options
@click.pass_context
def convert_cmd(ctx: click.Context, query_json: str | None, query_file: Path | None) -> None:
    """Resolve unknown categories of a query and print the tree."""
    query = _load_query(query_json, query_file)
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda service: ConvertCommand(search_service=service, emit=click.echo).execute(query),
    )


@cli.command("available")
@click.argument("category")
@click.argument("prefix", default="")
@click.pass_context
def available_cmd(ctx: click.Context, category: str, prefix: str) -> None:
    """Print autocomplete suggestions for CATEGORY starting with PREFIX."""
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda service: AvailableCommand(search_service=service, emit=click.echo).execute(category, prefix),
    )


@cli.command("overview")
@click.pass_context
def overview_cmd(ctx: click.Context) -> None:
    """Print catalogue-wide counts and type/genus breakdowns."""
    CommandRunner(ctx.obj).run(
        ctx.command.name,
        lambda service: OverviewCommand(search_service=service).execute(),
    )
