"""Show command for Blogfront CLI."""

from __future__ import annotations

import click

from ..render import format_date
from ._common import BlogfrontCliError, get_app


@click.command(name="show")
@click.argument("file")
@click.option("--html", "as_html", is_flag=True, help="Print the rendered HTML view")
@click.pass_context
def show(ctx: click.Context, file: str, as_html: bool) -> None:
    """Display the post stored as FILE (a name or a 'post.html?file=' URL)."""

    app = get_app(ctx)
    page = app.post_page()
    try:
        view = page.open_url(file) if "?" in file else page.open(file)
    finally:
        page.close()

    if view.error is not None or view.document is None:
        raise BlogfrontCliError(view.error or "Post not found.")

    if as_html:
        click.echo(view.html)
        return

    metadata = view.document.metadata
    click.echo(view.page_title)
    date = metadata.get("date")
    if isinstance(date, str) and date:
        click.echo(f"Date     : {format_date(date)}")
    category = metadata.get("category")
    if isinstance(category, str) and category:
        click.echo(f"Category : {category}")
    tags = metadata.get("tags")
    if isinstance(tags, list) and tags:
        click.echo(f"Tags     : {', '.join(str(tag) for tag in tags)}")
    click.echo("")
    click.echo(view.document.body.rstrip())


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(show)
