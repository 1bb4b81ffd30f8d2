"""Look up and stringify values from the ``settings`` namespace."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

COLOR_CHANNELS = ("red", "green", "blue")


def resolve_setting_path(settings: cabc.Mapping[str, typ.Any], path: str) -> typ.Any:
    """Return the value at dotted ``path`` below ``settings`` or ``None``.

    >>> resolve_setting_path({"colors": {"accent": "#f00"}}, "colors.accent")
    '#f00'
    >>> resolve_setting_path({}, "missing.key") is None
    True
    """
    current: typ.Any = settings
    for segment in path.split("."):
        if not isinstance(current, cabc.Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current


def is_color_object(value: object) -> bool:
    """Return True for mappings carrying numeric red/green/blue channels."""
    if not isinstance(value, cabc.Mapping):
        return False
    return all(_is_number(value.get(channel)) for channel in COLOR_CHANNELS)


def render_color(value: cabc.Mapping[str, typ.Any]) -> str:
    """Render a colour object as ``rgb(...)`` or, with a non-1 alpha, ``rgba(...)``."""
    red, green, blue = (format_number(value[channel]) for channel in COLOR_CHANNELS)
    alpha = value.get("alpha")
    if alpha is None or alpha == 1:
        return f"rgb({red}, {green}, {blue})"
    return f"rgba({red}, {green}, {blue}, {format_number(alpha)})"


def render_value(value: object) -> str:
    """Stringify a settings value the way the asset output tag prints it.

    >>> render_value({"red": 10, "green": 20, "blue": 30, "alpha": 0.5})
    'rgba(10, 20, 30, 0.5)'
    >>> render_value(None), render_value(True), render_value(2.0)
    ('', 'true', '2')
    >>> render_value(["a", 1.0, None])
    'a,1,'
    """
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case int() | float():
            return format_number(value)
        case str():
            return value
        case cabc.Mapping() if is_color_object(value):
            return render_color(value)
        case cabc.Mapping():
            return ""
        case list() | tuple():
            return ",".join(render_value(item) for item in value)
        case _:
            return str(value)


def format_number(value: object) -> str:
    """Render integral floats without a fractional part."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


__all__ = [
    "format_number",
    "is_color_object",
    "render_color",
    "render_value",
    "resolve_setting_path",
]
