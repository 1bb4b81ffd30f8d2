"""Type-directed default values for schema settings."""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

from theme_pages._constants import DEFAULT_COLOR, DEFAULT_FONT

from .extractor import parse_settings
from .models import (
    BlockDefinition,
    BooleanSetting,
    ChoiceSetting,
    ColorSetting,
    DisplaySetting,
    FontSetting,
    NumberSetting,
    OpaqueSetting,
    RangeSetting,
    ResourceListSetting,
    ResourceSetting,
    SettingDefinition,
    TextSetting,
)


def type_default(setting: SettingDefinition) -> typ.Any:
    """Return the value a setting takes when its schema declares no default."""
    match setting:
        case BooleanSetting():
            return False
        case NumberSetting() | RangeSetting():
            return 0
        case TextSetting() | ChoiceSetting():
            return ""
        case ColorSetting():
            return DEFAULT_COLOR
        case FontSetting():
            return DEFAULT_FONT
        case ResourceListSetting():
            return []
        case ResourceSetting() | OpaqueSetting() | DisplaySetting():
            return None


def compute_defaults(settings: cabc.Iterable[SettingDefinition]) -> dict[str, typ.Any]:
    """Map every value-holding setting id to its default.

    Parameters
    ----------
    settings : Iterable[SettingDefinition]
        Setting definitions in declaration order.

    Returns
    -------
    dict[str, Any]
        A fresh mapping. Explicit defaults win (including an explicit
        ``null``); other settings fall back to :func:`type_default`.
        Display-only entries contribute nothing. Mutable defaults are copied
        so callers may modify the result freely.
    """
    defaults: dict[str, typ.Any] = {}
    for setting in settings:
        if isinstance(setting, DisplaySetting) or not setting.id:
            continue
        value = setting.default if setting.has_default else type_default(setting)
        defaults[setting.id] = copy.deepcopy(value)
    return defaults


def compute_block_defaults(block: BlockDefinition) -> dict[str, typ.Any]:
    """Return defaults for the settings declared by ``block``."""
    return compute_defaults(block.settings)


def theme_settings_defaults(settings_schema: object) -> dict[str, typ.Any]:
    """Return defaults across every category of a ``settings_schema.json``.

    The ``theme_info`` entry and categories without settings are skipped.
    Later categories win when two declare the same id.
    """
    defaults: dict[str, typ.Any] = {}
    if not isinstance(settings_schema, list):
        return defaults
    for category in settings_schema:
        if not isinstance(category, cabc.Mapping) or category.get("name") == "theme_info":
            continue
        name = str(category.get("name") or "category")
        settings = parse_settings(category.get("settings"), where=f"category '{name}'")
        defaults.update(compute_defaults(settings))
    return defaults


__all__ = [
    "compute_block_defaults",
    "compute_defaults",
    "theme_settings_defaults",
    "type_default",
]
