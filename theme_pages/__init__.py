"""Compose storefront theme pages from their section schemas and documents.

This package reads a theme directory, parses the ``{% schema %}`` block of
each section, composes templates with their header and footer groups,
validates resolved settings, and resolves the directives embedded in theme
stylesheets and scripts. The ``theme-pages`` console script exposes these
operations.

Exports
-------
- ``app``: Cyclopts application with the subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from theme_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
