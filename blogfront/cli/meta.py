"""Meta command for Blogfront CLI."""

from __future__ import annotations

import click

from ..frontmatter import dump_metadata, parse_front_matter
from ..sources import PostLoadError
from ._common import BlogfrontCliError, get_app


@click.command(name="meta")
@click.argument("file")
@click.pass_context
def meta(ctx: click.Context, file: str) -> None:
    """Print the front matter of FILE as YAML."""

    app = get_app(ctx)
    try:
        raw = app.source.fetch_document(file)
    except PostLoadError as exc:
        raise BlogfrontCliError(str(exc)) from exc

    document = parse_front_matter(raw)
    if not document.metadata:
        click.echo("(no front matter)")
        return
    click.echo(dump_metadata(document.metadata))


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(meta)
