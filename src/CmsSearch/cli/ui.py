"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from CmsSearch.cli.commands import ImportCommand, SearchCommand, SuggestCommand, describe_filters
from CmsSearch.cli.runner import CommandRunner
from CmsSearch.config import DEFAULT_CONFIG_PATH, load_config_with_defaults
from CmsSearch.core.models import ALL_KINDS, EntityKind
from CmsSearch.renderers import OUTPUT_FORMATS

_KIND_CHOICE = click.Choice([kind.value for kind in ALL_KINDS], case_sensitive=False)


def _parse_filter_options(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a parameter mapping."""
    params: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected key=value, got {item!r}", ctx=ctx, param=param)
        params[key.strip()] = value
    return params


_filter_option = click.option(
    "--filter",
    "-f",
    "params",
    multiple=True,
    callback=_parse_filter_options,
    help="Filter parameter as key=value (e.g. status=draft,published). Repeatable.",
)


@click.group(help="CmsSearch: search and filter CMS content.")
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

    Loads environment variables from a .env file before processing config.
    """
    load_dotenv()
    default_path = DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else config_path
    ctx.obj = load_config_with_defaults(config_path, default_path=default_path)


@cli.command("search")
@click.argument("query")
@click.option("--type", "-t", "entity_types", multiple=True, type=_KIND_CHOICE, help="Entity kind to search. Repeatable.")
@_filter_option
@click.option("--limit", type=int, default=None, help="Page size and per-kind fetch cap.")
@click.option("--offset", type=int, default=0, show_default=True, help="Ranked results to skip.")
@click.option("--format", "fmt", type=click.Choice(OUTPUT_FORMATS), default="json", show_default=True)
@click.pass_context
def search_cmd(
    ctx: click.Context,
    query: str,
    entity_types: tuple[str, ...],
    params: dict[str, str],
    limit: int | None,
    offset: int,
    fmt: str,
) -> None:
    """Search pages, templates, media and sections for QUERY."""
    runner = CommandRunner(ctx.obj)
    output = runner.run(
        ctx.command.name,
        lambda service, _repo: SearchCommand(service).execute(
            query,
            entity_types=entity_types,
            params=params,
            limit=limit,
            offset=offset,
            fmt=fmt,
        ),
    )
    click.echo(output, nl=False)


@cli.command("suggest")
@click.argument("query")
@click.pass_context
def suggest_cmd(ctx: click.Context, query: str) -> None:
    """Suggest existing titles containing QUERY."""
    runner = CommandRunner(ctx.obj)
    click.echo(runner.run(ctx.command.name, lambda service, _repo: SuggestCommand(service).execute(query)))


@cli.command("filters")
@_filter_option
@click.option("--kind", "-k", type=_KIND_CHOICE, default="page", show_default=True)
def filters_cmd(params: dict[str, str], kind: str) -> None:
    """Show how filter parameters are parsed and compiled for one kind."""
    try:
        click.echo(describe_filters(params, EntityKind.parse(kind)))
    except ValueError as e:
        raise click.UsageError(str(e)) from e


@cli.command("import")
@click.argument("path", type=click.Path(path_type=Path, exists=True, dir_okay=False))
@click.pass_context
def import_cmd(ctx: click.Context, path: Path) -> None:
    """Import records from a JSON file keyed by entity kind."""
    runner = CommandRunner(ctx.obj)
    click.echo(runner.run(ctx.command.name, lambda _service, repo: ImportCommand(repo).execute(path)))
