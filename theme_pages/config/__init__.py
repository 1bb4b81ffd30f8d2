"""Load the project configuration for the theme-pages command line.

The configuration lives in ``theme-pages.yaml`` and names the theme
directory, the default template, how asset URLs are built, and where the
diagnostics report is written.

Examples
--------
>>> from pathlib import Path
>>> from theme_pages.config import load_project_config
>>> load_project_config(Path("theme-pages.yaml")).template  # doctest: +SKIP
'index'
"""

from .loader import DEFAULT_CONFIG_PATH, load_project_config
from .models import DEFAULT_ASSET_URL_TEMPLATE, DEFAULT_REPORT_OUTPUT, ProjectConfig

__all__ = [
    "DEFAULT_ASSET_URL_TEMPLATE",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_REPORT_OUTPUT",
    "ProjectConfig",
    "load_project_config",
]
