"""Assemble the inputs the asset directive processor needs."""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ
import urllib.parse

from theme_pages.schema import theme_settings_defaults

log = logging.getLogger(__name__)

DEFAULT_PRESET = "Default"


@dc.dataclass(slots=True)
class AssetContext:
    """Settings namespace and URL resolver used while processing an asset.

    ``legacy_conditionals`` keeps every ``{% if %}`` body regardless of its
    condition, which is how older themes were rendered.
    """

    settings: cabc.Mapping[str, typ.Any]
    resolve_asset_url: cabc.Callable[[str], str]
    legacy_conditionals: bool = False


def build_settings_context(
    settings_data: cabc.Mapping[str, typ.Any] | None,
    settings_schema: cabc.Sequence[typ.Any] | None = None,
) -> dict[str, typ.Any]:
    """Return the ``settings`` namespace for a settings-data document.

    Parameters
    ----------
    settings_data : Mapping | None
        Decoded ``config/settings_data.json``. ``current`` is used when it is
        an object; a string ``current`` names one of ``presets``; otherwise
        ``presets.Default`` applies.
    settings_schema : Sequence | None
        Decoded ``config/settings_schema.json``. When given, its defaults are
        merged underneath the stored values.

    Examples
    --------
    >>> build_settings_context({"current": "Bold", "presets": {"Bold": {"x": 1}}})
    {'x': 1}
    >>> build_settings_context(None)
    {}
    """
    base = theme_settings_defaults(settings_schema) if settings_schema else {}
    return {**base, **copy.deepcopy(_select_values(settings_data or {}))}


def url_resolver(template: str) -> cabc.Callable[[str], str]:
    """Return a resolver that formats ``{filename}`` into ``template``.

    >>> url_resolver("/cdn/{filename}")("hero image.png")
    '/cdn/hero%20image.png'
    """

    def resolve(filename: str) -> str:
        return template.format(filename=urllib.parse.quote(filename))

    return resolve


def _select_values(settings_data: cabc.Mapping[str, typ.Any]) -> cabc.Mapping[str, typ.Any]:
    current = settings_data.get("current")
    presets = settings_data.get("presets")
    if not isinstance(presets, cabc.Mapping):
        presets = {}
    if isinstance(current, cabc.Mapping):
        return current
    if isinstance(current, str):
        named = presets.get(current)
        if isinstance(named, cabc.Mapping):
            return named
        log.warning("Settings preset '%s' not found; falling back to defaults", current)
    fallback = presets.get(DEFAULT_PRESET)
    if isinstance(fallback, cabc.Mapping):
        return fallback
    return {}


__all__ = ["AssetContext", "build_settings_context", "url_resolver"]
