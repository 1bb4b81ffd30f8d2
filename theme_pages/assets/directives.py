r"""Resolve the templating subset embedded in CSS and JavaScript assets.

Theme stylesheets and scripts (``*.css.liquid``, ``*.js.liquid``) embed a
handful of template directives. :func:`process_asset` resolves them in one
ordered, non-recursive pass:

1. ``{{ 'file.png' | asset_url }}`` becomes the caller's asset URL;
2. ``{{ settings.path }}`` becomes the stringified setting value;
3. ``{% if %}`` / ``{% unless %}`` blocks keep the branch selected by their
   condition (or, in legacy mode, always keep the body);
4. remaining ``{% ... %}`` tags are removed;
5. remaining ``{{ ... }}`` output expressions are removed.

The order matters: later steps delete whatever the earlier steps did not
recognise. Text produced by steps 1 and 2 is never scanned again, so a setting
value that itself contains ``{{ ... }}`` or ``{% ... %}`` is output verbatim.
Nested conditionals, loops, and variables outside ``settings`` are not
supported.

Example
-------
>>> from theme_pages.assets import AssetContext, process_asset
>>> context = AssetContext(
...     settings={"accent": {"red": 10, "green": 20, "blue": 30}},
...     resolve_asset_url=lambda name: f"/cdn/{name}",
... )
>>> process_asset("a{color:{{ settings.accent }}}", context)
'a{color:rgb(10, 20, 30)}'
>>> process_asset("{{ 'logo.png' | asset_url }}", context)
'/cdn/logo.png'
"""

from __future__ import annotations

import functools
import logging
import re
import typing as typ

from theme_pages.errors import ConditionSyntaxError

from .conditions import evaluate_condition
from .values import render_value, resolve_setting_path

if typ.TYPE_CHECKING:
    from .context import AssetContext

log = logging.getLogger(__name__)

ASSET_URL_PATTERN = re.compile(
    r"\{\{-?\s*(?P<quote>['\"])(?P<filename>[^'\"]+)(?P=quote)\s*\|\s*asset_url\s*-?\}\}"
)
SETTINGS_OUTPUT_PATTERN = re.compile(
    r"\{\{-?\s*settings\.(?P<path>[\w-]+(?:\.[\w-]+)*)\s*-?\}\}"
)
CONDITIONAL_PATTERN = re.compile(
    r"\{%-?\s*(?P<tag>if|unless)\s+(?P<condition>.+?)\s*-?%\}"
    r"(?P<body>.*?)"
    r"\{%-?\s*end(?P=tag)\s*-?%\}",
    re.DOTALL,
)
ELSE_PATTERN = re.compile(r"\{%-?\s*else\s*-?%\}")
LEFTOVER_TAG_PATTERN = re.compile(r"\{%.*?%\}", re.DOTALL)
LEFTOVER_OUTPUT_PATTERN = re.compile(r"\{\{.*?\}\}", re.DOTALL)

# Rendered setting values are parked behind private-use markers until the
# cleanup steps have run, so text inside a value is never treated as a tag.
HELD_VALUE_OPEN = "\ue000"
HELD_VALUE_CLOSE = "\ue001"
HELD_VALUE_PATTERN = re.compile(f"{HELD_VALUE_OPEN}(?P<slot>\\d+){HELD_VALUE_CLOSE}")


def process_asset(text: str, context: AssetContext) -> str:
    """Resolve asset directives in ``text``.

    Parameters
    ----------
    text : str
        Asset source containing template directives.
    context : AssetContext
        Settings namespace, asset URL resolver, and conditional mode.

    Returns
    -------
    str
        The asset with every directive resolved or removed.
    """
    result = ASSET_URL_PATTERN.sub(
        lambda match: context.resolve_asset_url(match.group("filename")), text
    )
    rendered: list[str] = []
    result = SETTINGS_OUTPUT_PATTERN.sub(
        functools.partial(_hold_setting_value, context=context, rendered=rendered),
        result,
    )
    result = CONDITIONAL_PATTERN.sub(
        functools.partial(_resolve_conditional, context=context), result
    )
    result = LEFTOVER_TAG_PATTERN.sub("", result)
    result = LEFTOVER_OUTPUT_PATTERN.sub("", result)
    return HELD_VALUE_PATTERN.sub(
        lambda match: _release_setting_value(match, rendered), result
    )


def _hold_setting_value(
    match: re.Match[str], *, context: AssetContext, rendered: list[str]
) -> str:
    rendered.append(
        render_value(resolve_setting_path(context.settings, match.group("path")))
    )
    return f"{HELD_VALUE_OPEN}{len(rendered) - 1}{HELD_VALUE_CLOSE}"


def _release_setting_value(match: re.Match[str], rendered: list[str]) -> str:
    slot = int(match.group("slot"))
    return rendered[slot] if slot < len(rendered) else match.group(0)


def _resolve_conditional(match: re.Match[str], *, context: AssetContext) -> str:
    body = match.group("body")
    if context.legacy_conditionals:
        return body

    branches = ELSE_PATTERN.split(body, maxsplit=1)
    when_true = branches[0]
    when_false = branches[1] if len(branches) > 1 else ""
    condition = match.group("condition")
    try:
        outcome = evaluate_condition(condition, context.settings)
    except ConditionSyntaxError as exc:
        log.warning("Treating unsupported asset condition %r as false: %s", condition, exc)
        outcome = False
    if match.group("tag") == "unless":
        outcome = not outcome
    return when_true if outcome else when_false


__all__ = [
    "ASSET_URL_PATTERN",
    "CONDITIONAL_PATTERN",
    "SETTINGS_OUTPUT_PATTERN",
    "process_asset",
]
