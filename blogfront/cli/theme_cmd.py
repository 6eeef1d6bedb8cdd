"""Theme command for Blogfront CLI."""

from __future__ import annotations

import click

from ..preferences import PreferenceError
from ..theme import read_theme_preference
from ._common import BlogfrontCliError, get_app


@click.command(name="theme")
@click.option("--toggle", is_flag=True, help="Switch between dark and light")
@click.option("--reset", is_flag=True, help="Forget the choice and follow the system")
@click.pass_context
def theme(ctx: click.Context, toggle: bool, reset: bool) -> None:
    """Show or change the persisted light/dark theme."""

    if toggle and reset:
        raise BlogfrontCliError("Use either --toggle or --reset, not both.")

    app = get_app(ctx)
    controller = app.theme

    try:
        if toggle:
            controller.toggle()
        elif reset:
            controller.reset()
    except PreferenceError as exc:
        raise BlogfrontCliError(str(exc)) from exc

    saved = read_theme_preference(app.preferences)
    origin = "saved preference" if saved is not None else "system"
    click.echo(f"{controller.theme} ({origin})")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(theme)
