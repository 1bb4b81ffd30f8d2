"""Load ``theme-pages.yaml`` into a :class:`ProjectConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from theme_pages._constants import DEFAULT_TEMPLATE
from theme_pages.errors import ProjectConfigError

from .models import DEFAULT_ASSET_URL_TEMPLATE, DEFAULT_REPORT_OUTPUT, ProjectConfig

DEFAULT_CONFIG_PATH = Path("theme-pages.yaml")
KNOWN_KEYS = frozenset(
    {"theme_dir", "template", "asset_url_template", "legacy_conditionals", "report_output"}
)


def load_project_config(path: Path) -> ProjectConfig:
    """Load the project configuration file.

    Relative ``theme_dir`` and ``report_output`` paths are resolved against
    the directory containing the configuration file.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file.

    Returns
    -------
    ProjectConfig
        Parsed configuration with defaults applied for omitted keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ProjectConfigError
        If the document is not a mapping, a key is unknown, or a value has
        the wrong type.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_project_config(Path("theme-pages.yaml"))  # doctest: +SKIP
    >>> config.asset_url_template  # doctest: +SKIP
    '/assets/{filename}'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ProjectConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}"
        raise ProjectConfigError(msg)

    base_dir = path.parent
    template = _require_str(raw, "template", DEFAULT_TEMPLATE)
    url_template = _require_str(raw, "asset_url_template", DEFAULT_ASSET_URL_TEMPLATE)
    if "{filename}" not in url_template:
        msg = "asset_url_template must contain a '{filename}' placeholder."
        raise ProjectConfigError(msg)
    legacy = raw.get("legacy_conditionals", False)
    if not isinstance(legacy, bool):
        msg = "legacy_conditionals must be true or false."
        raise ProjectConfigError(msg)

    return ProjectConfig(
        theme_dir=base_dir / _require_str(raw, "theme_dir", "theme"),
        template=template,
        asset_url_template=url_template,
        legacy_conditionals=legacy,
        report_output=base_dir
        / _require_str(raw, "report_output", str(DEFAULT_REPORT_OUTPUT)),
    )


def _require_str(raw: dict[str, typ.Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        msg = f"{key} must be a non-empty string."
        raise ProjectConfigError(msg)
    return value.strip()


__all__ = ["DEFAULT_CONFIG_PATH", "load_project_config"]
