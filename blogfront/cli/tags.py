"""Tags command for Blogfront CLI."""

from __future__ import annotations

import click

from ._common import get_app, get_catalog


@click.command(name="tags")
@click.option("-c", "--count", "with_count", is_flag=True, help="Show posts per tag")
@click.pass_context
def tags(ctx: click.Context, with_count: bool) -> None:
    """List every tag used by the posts, sorted."""

    catalog = get_catalog(get_app(ctx))

    for tag in catalog.tags:
        if with_count:
            total = sum(1 for post in catalog if tag in post.tags)
            click.echo(f"{tag}  ({total})")
        else:
            click.echo(tag)


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(tags)
