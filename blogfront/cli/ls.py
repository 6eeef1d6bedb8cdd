"""List command for Blogfront CLI."""

from __future__ import annotations

import click

from ..filtering import filter_posts
from ..render import format_date
from ._common import get_app, get_catalog


@click.command(name="ls")
@click.option("-t", "--tag", default=None, help="Only posts carrying this tag")
@click.option(
    "-q", "--query", default="", help="Case-insensitive text in title, excerpt or tags"
)
@click.option("-n", "--limit", type=int, default=0, help="Maximum posts to list (0 = all)")
@click.option("-r", "--reverse", is_flag=True, help="Reverse index order")
@click.option("--html", "as_html", is_flag=True, help="Print the list as HTML")
@click.pass_context
def ls(
    ctx: click.Context,
    tag: str | None,
    query: str,
    limit: int,
    reverse: bool,
    as_html: bool,
) -> None:
    """List posts from the index, optionally filtered by tag and text."""

    app = get_app(ctx)
    catalog = get_catalog(app)

    posts = list(filter_posts(catalog, tag, query.strip()))
    if reverse:
        posts.reverse()
    if limit > 0:
        posts = posts[:limit]

    if as_html:
        click.echo(app.renderer.render_tag_bar(catalog.tags, tag))
        click.echo(app.renderer.render_post_list(posts))
        return

    if not posts:
        click.echo("No posts found.")
        return

    for post in posts:
        category = f"  ({post.category})" if post.category else ""
        tag_suffix = f"  [tags: {', '.join(post.tags)}]" if post.tags else ""
        click.echo(
            f"{format_date(post.date):<12}  {post.file}  {post.title}{category}{tag_suffix}"
        )


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(ls)
