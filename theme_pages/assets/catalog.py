"""List theme assets, order stylesheets and scripts, and bundle them.

Files under a theme's ``assets/`` directory are classified by extension.
Stylesheets load in a fixed priority order (base, resets, components,
sections, templates, then everything else) and minified scripts are dropped
when an unminified sibling is present.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from .directives import process_asset

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import AssetContext

log = logging.getLogger(__name__)

AssetKind = typ.Literal["css", "js", "image", "font", "other"]

LIQUID_SUFFIX = ".liquid"
MINIFIED_MARKER = ".min."
CSS_EXTENSIONS = frozenset({".css", ".scss", ".sass"})
JS_EXTENSIONS = frozenset({".js", ".mjs", ".cjs"})
IMAGE_EXTENSIONS = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".ico", ".avif"}
)
FONT_EXTENSIONS = frozenset({".woff", ".woff2", ".ttf", ".otf", ".eot"})
CSS_NAMED_PRIORITY = {"base.css": 0, "reset.css": 1, "normalize.css": 1}
CSS_PREFIX_PRIORITY = (("component-", 2), ("section-", 3), ("template-", 4))
CSS_FALLBACK_PRIORITY = 5


@dc.dataclass(slots=True, frozen=True)
class AssetInfo:
    """A file in the theme's assets directory."""

    filename: str
    path: Path
    kind: AssetKind
    is_liquid: bool = False

    @property
    def is_text(self) -> bool:
        return self.kind in ("css", "js")


def classify_asset(filename: str) -> AssetKind:
    """Return the asset kind for ``filename``.

    >>> classify_asset("theme.css.liquid"), classify_asset("logo.SVG")
    ('css', 'image')
    """
    name = filename.lower()
    suffix = Path(name).suffix
    if suffix in CSS_EXTENSIONS or name.endswith(".css" + LIQUID_SUFFIX):
        return "css"
    if suffix in JS_EXTENSIONS or name.endswith(".js" + LIQUID_SUFFIX):
        return "js"
    if suffix in IMAGE_EXTENSIONS:
        return "image"
    if suffix in FONT_EXTENSIONS:
        return "font"
    return "other"


def list_assets(assets_dir: Path) -> list[AssetInfo]:
    """Return every file in ``assets_dir`` sorted by filename.

    A missing directory yields an empty list.
    """
    if not assets_dir.is_dir():
        return []
    return [
        AssetInfo(
            filename=path.name,
            path=path,
            kind=classify_asset(path.name),
            is_liquid=path.name.endswith(LIQUID_SUFFIX),
        )
        for path in sorted(assets_dir.iterdir(), key=lambda item: item.name)
        if path.is_file()
    ]


def css_priority(filename: str) -> int:
    """Return the load priority of a stylesheet; lower loads first."""
    name = filename.removesuffix(LIQUID_SUFFIX)
    if name in CSS_NAMED_PRIORITY:
        return CSS_NAMED_PRIORITY[name]
    for prefix, priority in CSS_PREFIX_PRIORITY:
        if name.startswith(prefix):
            return priority
    return CSS_FALLBACK_PRIORITY


def css_assets(assets: cabc.Iterable[AssetInfo]) -> list[AssetInfo]:
    """Return the stylesheets in load order, ties broken by filename."""
    stylesheets = [asset for asset in assets if asset.kind == "css"]
    return sorted(stylesheets, key=lambda asset: (css_priority(asset.filename), asset.filename))


def js_assets(assets: cabc.Iterable[AssetInfo]) -> list[AssetInfo]:
    """Return the scripts, dropping ``*.min.*`` files with an unminified sibling."""
    scripts = [asset for asset in assets if asset.kind == "js"]
    names = {asset.filename for asset in scripts}
    return [
        asset
        for asset in scripts
        if MINIFIED_MARKER not in asset.filename
        or asset.filename.replace(MINIFIED_MARKER, ".", 1) not in names
    ]


def bundle_assets(assets: cabc.Iterable[AssetInfo], context: AssetContext) -> str:
    """Concatenate text assets into one bundle.

    Each asset is introduced by a ``/* <filename> */`` comment; liquid assets
    are run through :func:`~theme_pages.assets.directives.process_asset`
    first. Non-text assets are skipped.
    """
    parts: list[str] = []
    for asset in assets:
        if not asset.is_text:
            log.debug("Skipping non-text asset %s", asset.filename)
            continue
        text = asset.path.read_text(encoding="utf-8")
        if asset.is_liquid:
            text = process_asset(text, context)
        parts.append(f"/* {asset.filename} */\n{text.strip()}\n")
    return "\n".join(parts)


__all__ = [
    "AssetInfo",
    "AssetKind",
    "bundle_assets",
    "classify_asset",
    "css_assets",
    "css_priority",
    "js_assets",
    "list_assets",
]
