"""Built-in Blogfront plugins."""

from __future__ import annotations

from . import markdown, plain

BUILTIN_PLUGINS = (markdown, plain)

__all__ = ["BUILTIN_PLUGINS"]
