"""Process template directives in theme stylesheets and scripts."""

from .catalog import (
    AssetInfo,
    bundle_assets,
    classify_asset,
    css_assets,
    js_assets,
    list_assets,
)
from .conditions import evaluate_condition, is_truthy
from .context import AssetContext, build_settings_context, url_resolver
from .directives import process_asset
from .values import render_value, resolve_setting_path

__all__ = [
    "AssetContext",
    "AssetInfo",
    "build_settings_context",
    "bundle_assets",
    "classify_asset",
    "css_assets",
    "evaluate_condition",
    "is_truthy",
    "js_assets",
    "list_assets",
    "process_asset",
    "render_value",
    "resolve_setting_path",
    "url_resolver",
]
