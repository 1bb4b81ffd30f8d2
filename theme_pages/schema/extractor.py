"""Locate and parse the ``{% schema %}`` block embedded in section source.

Section templates carry their editor schema as a JSON document wrapped in
``{% schema %}`` / ``{% endschema %}`` tags. This module isolates that block,
strips comments from it with :func:`~theme_pages.schema.comments.strip_json_comments`
and converts the decoded payload into :class:`~theme_pages.schema.models.SectionSchema`.

Two entry points are provided:

* :func:`load_schema` is strict and raises :class:`MalformedSchemaError`.
* :func:`extract_schema` recovers from that error by logging a warning and
  returning ``None``, so a broken schema behaves like a schema-less section.

Examples
--------
>>> from theme_pages.schema import extract_schema
>>> source = '<div></div>{% schema %}{"name": "Banner"}{% endschema %}'
>>> extract_schema(source).name
'Banner'
>>> extract_schema("<div>no schema here</div>") is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import json
import logging
import math
import re
import typing as typ

from theme_pages.errors import MalformedSchemaError

from .comments import strip_json_comments
from .models import (
    UNSET,
    BlockDefinition,
    BooleanSetting,
    ChoiceOption,
    ChoiceSetting,
    ColorSetting,
    DisplaySetting,
    FontSetting,
    NumberSetting,
    OpaqueSetting,
    PresetBlock,
    RangeSetting,
    ResourceListSetting,
    ResourceSetting,
    SectionPreset,
    SectionSchema,
    SettingDefinition,
    TemplateRestriction,
    TextSetting,
)

log = logging.getLogger(__name__)

SCHEMA_PATTERN = re.compile(
    r"{%[-\s]*schema[-\s]*%}(.*?){%[-\s]*endschema[-\s]*%}",
    re.IGNORECASE | re.DOTALL,
)

SETTING_VARIANTS: dict[str, type[SettingDefinition]] = {
    "checkbox": BooleanSetting,
    "number": NumberSetting,
    "range": RangeSetting,
    "text": TextSetting,
    "textarea": TextSetting,
    "html": TextSetting,
    "richtext": TextSetting,
    "inline_richtext": TextSetting,
    "liquid": TextSetting,
    "url": TextSetting,
    "select": ChoiceSetting,
    "radio": ChoiceSetting,
    "color": ColorSetting,
    "color_background": ColorSetting,
    "font_picker": FontSetting,
    "image_picker": ResourceSetting,
    "video": ResourceSetting,
    "video_url": ResourceSetting,
    "product": ResourceSetting,
    "collection": ResourceSetting,
    "page": ResourceSetting,
    "blog": ResourceSetting,
    "article": ResourceSetting,
    "link_list": ResourceSetting,
    "color_scheme": ResourceSetting,
    "color_scheme_group": ResourceSetting,
    "product_list": ResourceListSetting,
    "collection_list": ResourceListSetting,
    "header": DisplaySetting,
    "paragraph": DisplaySetting,
}


def find_schema_block(source: str) -> str | None:
    """Return the body of the first schema block in ``source``, if any."""
    match = SCHEMA_PATTERN.search(source)
    if match is None:
        return None
    return match.group(1)


def load_schema(source: str) -> SectionSchema | None:
    """Parse the embedded schema block strictly.

    Parameters
    ----------
    source : str
        Full section template source.

    Returns
    -------
    SectionSchema | None
        The parsed schema, or ``None`` when the source has no schema block.

    Raises
    ------
    MalformedSchemaError
        If a schema block exists but its JSON is invalid or structurally
        unusable.
    """
    body = find_schema_block(source)
    if body is None:
        return None
    cleaned = strip_json_comments(body.strip())
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        msg = f"Schema JSON is invalid: {exc}"
        raise MalformedSchemaError(msg) from exc
    return parse_schema_payload(payload)


def extract_schema(
    source: str, *, source_name: str | None = None
) -> SectionSchema | None:
    """Return the section schema, treating malformed schemas as absent.

    A :class:`MalformedSchemaError` is logged as a warning (naming
    ``source_name`` when given) and ``None`` is returned in its place.
    """
    try:
        return load_schema(source)
    except MalformedSchemaError as exc:
        log.warning("Ignoring malformed schema in %s: %s", source_name or "section", exc)
        return None


def parse_schema_payload(payload: object) -> SectionSchema:
    """Convert a decoded schema payload into a :class:`SectionSchema`.

    Raises
    ------
    MalformedSchemaError
        If ``payload`` is not a mapping or one of its members has the wrong
        shape.
    """
    if not isinstance(payload, cabc.Mapping):
        msg = "Schema payload must be a JSON object."
        raise MalformedSchemaError(msg)
    data: dict[str, typ.Any] = dict(payload)
    return SectionSchema(
        name=str(data.get("name") or ""),
        settings=parse_settings(data.get("settings"), where="schema"),
        blocks=_parse_blocks(data.get("blocks")),
        presets=_parse_presets(data.get("presets")),
        tag=_optional_str(data.get("tag")),
        class_name=_optional_str(data.get("class")),
        limit=_optional_int(data.get("limit"), "limit"),
        max_blocks=_optional_int(data.get("max_blocks"), "max_blocks"),
        enabled_on=_parse_restriction(data.get("enabled_on"), "enabled_on"),
        disabled_on=_parse_restriction(data.get("disabled_on"), "disabled_on"),
        locales=_optional_mapping(data.get("locales"), "locales"),
        raw=data,
    )


def parse_settings(value: object, *, where: str) -> list[SettingDefinition]:
    """Parse a list of setting payloads declared under ``where``."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'settings' in {where} must be a list."
        raise MalformedSchemaError(msg)
    return [
        parse_setting(entry, where=f"{where} setting #{position}")
        for position, entry in enumerate(value)
    ]


def parse_setting(payload: object, *, where: str = "setting") -> SettingDefinition:
    """Build the setting variant matching the payload's declared ``type``."""
    if not isinstance(payload, cabc.Mapping):
        msg = f"{where} must be an object."
        raise MalformedSchemaError(msg)
    setting_type = payload.get("type")
    if not isinstance(setting_type, str) or not setting_type:
        msg = f"{where} is missing 'type'."
        raise MalformedSchemaError(msg)

    variant = SETTING_VARIANTS.get(setting_type, OpaqueSetting)
    common: dict[str, typ.Any] = {
        "type": setting_type,
        "id": _optional_str(payload.get("id")),
        "label": str(payload.get("label") or ""),
        "info": _optional_str(payload.get("info")),
        "default": payload["default"] if "default" in payload else UNSET,
    }
    label = f"{where} ({setting_type})"
    if variant is DisplaySetting:
        common["id"] = None
        return DisplaySetting(**common, content=str(payload.get("content") or ""))
    if variant is RangeSetting:
        return RangeSetting(
            **common,
            min=_optional_number(payload.get("min"), f"{label} min"),
            max=_optional_number(payload.get("max"), f"{label} max"),
            step=_optional_number(payload.get("step"), f"{label} step"),
            unit=_optional_str(payload.get("unit")),
        )
    if variant is NumberSetting:
        return NumberSetting(
            **common,
            placeholder=_optional_number(
                payload.get("placeholder"), f"{label} placeholder"
            ),
        )
    if variant is TextSetting:
        return TextSetting(**common, placeholder=_optional_str(payload.get("placeholder")))
    if variant is ChoiceSetting:
        return ChoiceSetting(**common, options=_parse_options(payload.get("options")))
    if variant is ResourceListSetting:
        return ResourceListSetting(
            **common, limit=_optional_int(payload.get("limit"), f"{label} limit")
        )
    return variant(**common)


def _parse_options(value: object) -> list[ChoiceOption]:
    """Return choice options, skipping entries that are not objects."""
    if not isinstance(value, list):
        return []
    options: list[ChoiceOption] = []
    for entry in value:
        if not isinstance(entry, cabc.Mapping):
            continue
        options.append(
            ChoiceOption(
                value=entry.get("value"),
                label=str(entry.get("label") or ""),
                group=_optional_str(entry.get("group")),
            )
        )
    return options


def _parse_blocks(value: object) -> list[BlockDefinition]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = "'blocks' must be a list."
        raise MalformedSchemaError(msg)
    blocks: list[BlockDefinition] = []
    for position, entry in enumerate(value):
        if not isinstance(entry, cabc.Mapping) or not entry.get("type"):
            msg = f"Block #{position} must be an object with a 'type'."
            raise MalformedSchemaError(msg)
        block_type = str(entry["type"])
        blocks.append(
            BlockDefinition(
                type=block_type,
                name=str(entry.get("name") or ""),
                limit=_optional_int(entry.get("limit"), f"block '{block_type}' limit"),
                settings=parse_settings(
                    entry.get("settings"), where=f"block '{block_type}'"
                ),
            )
        )
    return blocks


def _parse_presets(value: object) -> list[SectionPreset]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = "'presets' must be a list."
        raise MalformedSchemaError(msg)
    presets: list[SectionPreset] = []
    for entry in value:
        if not isinstance(entry, cabc.Mapping):
            continue
        name = str(entry.get("name") or "")
        raw_blocks = entry.get("blocks") or []
        if not isinstance(raw_blocks, list):
            msg = f"'blocks' of preset '{name}' must be a list."
            raise MalformedSchemaError(msg)
        blocks = [
            PresetBlock(
                type=str(block["type"]),
                settings=_optional_mapping(
                    block.get("settings"), f"preset '{name}' block settings"
                ),
            )
            for block in raw_blocks
            if isinstance(block, cabc.Mapping) and block.get("type")
        ]
        presets.append(
            SectionPreset(
                name=name,
                settings=_optional_mapping(
                    entry.get("settings"), f"preset '{name}' settings"
                ),
                blocks=blocks,
            )
        )
    return presets


def _parse_restriction(value: object, field: str) -> TemplateRestriction | None:
    if value is None:
        return None
    if not isinstance(value, cabc.Mapping):
        msg = f"'{field}' must be an object."
        raise MalformedSchemaError(msg)
    return TemplateRestriction(
        templates=_optional_str_list(value.get("templates")),
        groups=_optional_str_list(value.get("groups")),
    )


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_str_list(value: object | None) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]
    return None


def _optional_mapping(value: object | None, field: str) -> dict[str, typ.Any]:
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = f"'{field}' must be an object, got {value!r}."
        raise MalformedSchemaError(msg)
    return dict(value)


def _optional_number(value: object | None, field: str) -> float | None:
    if value is None:
        return None
    if (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    ):
        return value
    msg = f"{field} must be a finite number, got {value!r}."
    raise MalformedSchemaError(msg)


def _optional_int(value: object | None, field: str) -> int | None:
    number = _optional_number(value, field)
    if number is None:
        return None
    return int(number)


__all__ = [
    "SCHEMA_PATTERN",
    "SETTING_VARIANTS",
    "extract_schema",
    "find_schema_block",
    "load_schema",
    "parse_schema_payload",
    "parse_setting",
    "parse_settings",
]
