"""Shared helpers for Blogfront CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..app import AppContext, bootstrap
from ..catalog import Catalog, load_catalog
from ..config import ConfigError, MissingConfigError
from ..plugins import PluginRegistrationError
from ..preferences import PreferenceError
from ..sources import IndexLoadError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class BlogfrontCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")

    try:
        app = bootstrap(config_path_opt)
    except MissingConfigError as exc:
        raise BlogfrontCliError(
            "Configuration not found. Run 'bf config' once to set up Blogfront."
        ) from exc
    except (ConfigError, PluginRegistrationError, PreferenceError) as exc:
        raise BlogfrontCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app


def get_catalog(app: AppContext) -> Catalog:
    """Load the post catalog, mapping index failures to a CLI error."""

    try:
        return load_catalog(app.source)
    except IndexLoadError as exc:
        raise BlogfrontCliError(str(exc)) from exc
