"""Typed dataclasses describing the theme-pages project configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from theme_pages._constants import DEFAULT_TEMPLATE

DEFAULT_ASSET_URL_TEMPLATE = "/assets/{filename}"
DEFAULT_REPORT_OUTPUT = Path("public/report.html")


@dc.dataclass(slots=True)
class ProjectConfig:
    """Where the theme lives and how its pages and assets are rendered.

    Attributes
    ----------
    theme_dir : Path
        Root of the theme directory.
    template : str
        Template composed when a command does not name one.
    asset_url_template : str
        Format string with a ``{filename}`` placeholder used for
        ``asset_url`` directives.
    legacy_conditionals : bool
        Keep every asset ``{% if %}`` body regardless of its condition.
    report_output : Path
        Destination of the HTML diagnostics report.
    """

    theme_dir: Path = Path("theme")
    template: str = DEFAULT_TEMPLATE
    asset_url_template: str = DEFAULT_ASSET_URL_TEMPLATE
    legacy_conditionals: bool = False
    report_output: Path = DEFAULT_REPORT_OUTPUT


__all__ = ["DEFAULT_ASSET_URL_TEMPLATE", "DEFAULT_REPORT_OUTPUT", "ProjectConfig"]
