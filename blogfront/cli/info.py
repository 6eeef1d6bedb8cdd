"""Info command for Blogfront CLI."""

from __future__ import annotations

import click

from ..catalog import load_catalog
from ..config import BlogfrontConfig
from ..sources import IndexLoadError
from ._common import get_app


@click.command(name="info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Display the post source summary and current configuration."""

    app = get_app(ctx)
    config: BlogfrontConfig = app.config

    try:
        catalog = load_catalog(app.source)
    except IndexLoadError as exc:
        posts_display = f"(unavailable: {exc})"
        tags_display = "-"
    else:
        posts_display = str(len(catalog))
        tags_display = ", ".join(catalog.tags) if catalog.tags else "(none)"

    click.echo("Blogfront info:\n")
    click.echo(f"  Source        : {app.source!r}")
    click.echo(f"  Total posts   : {posts_display}")
    click.echo(f"  Tags          : {tags_display}")
    click.echo(f"  Theme         : {app.theme.theme}")
    click.echo("\nConfiguration:\n")
    click.echo(_format_config(config))


def _format_config(config: BlogfrontConfig) -> str:
    def quote(value: str | None) -> str:
        if value is None:
            return '""'
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'

    lines = [
        "[blogfront]",
        f"source = {quote(config.source)}",
        f"index_path = {quote(config.index_path)}",
        f"pages_dir = {quote(config.pages_dir)}",
        f"site_title = {quote(config.site_title)}",
        f"renderer = {quote(config.renderer)}",
        f"state_dir = {quote(str(config.state_dir))}",
    ]
    if config.color_scheme is not None:
        lines.append(f"color_scheme = {quote(config.color_scheme)}")
    if config.giscus is not None:
        lines.extend(
            [
                "",
                "[giscus]",
                f"repo = {quote(config.giscus.repo)}",
                f"repo_id = {quote(config.giscus.repo_id)}",
                f"category = {quote(config.giscus.category)}",
            ]
        )
    return "\n".join(lines)


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(info)
