"""Load, validate, and inspect the configuration and content of a static blog.

This package models the inputs of a theme-driven static site: the
``hugo.toml`` configuration document, the Markdown posts under ``content/``
with their front matter, and the navigation menus that link them. The
``pages`` CLI runs a build pass over a site root and reports on it.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from blog_pages import main
>>> main(["check"])  # doctest: +SKIP
>>> from blog_pages import app
>>> app(["list", "--mode", "preview"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
