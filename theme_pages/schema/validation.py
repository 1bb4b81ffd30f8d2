"""Check resolved setting values against their schema constraints.

Validation never raises and never mutates its inputs: every problem is
reported as a :class:`ValidationIssue` for the caller to surface or ignore,
and composition carries on with the value exactly as supplied.
:func:`validate_schema` applies the same reporting to the schema declarations
themselves.

Examples
--------
>>> from theme_pages.schema import RangeSetting, validate
>>> padding = RangeSetting(type="range", id="padding", min=0, max=100)
>>> [issue.severity for issue in validate({"padding": 150}, [padding])]
['warning']
>>> validate({"padding": 50}, [padding])
[]
"""

from __future__ import annotations

import collections
import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from .models import (
    ChoiceSetting,
    ColorSetting,
    DisplaySetting,
    RangeSetting,
    ResourceListSetting,
    SectionSchema,
    SettingDefinition,
)

if typ.TYPE_CHECKING:
    from theme_pages.composer.models import SectionInstance

Severity = typ.Literal["warning", "error"]

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
FUNCTIONAL_COLOR_PATTERN = re.compile(r"^rgba?\(\s*[0-9.%\s,/]+\)$")


@dc.dataclass(slots=True, frozen=True)
class ValidationIssue:
    """A non-fatal diagnostic attached to one setting id."""

    setting_id: str
    message: str
    severity: Severity = "warning"


def validate(
    resolved_settings: cabc.Mapping[str, typ.Any],
    setting_defs: cabc.Iterable[SettingDefinition],
) -> list[ValidationIssue]:
    """Validate ``resolved_settings`` against ``setting_defs``.

    Parameters
    ----------
    resolved_settings : Mapping[str, Any]
        Setting values keyed by id, typically a composed section's settings.
    setting_defs : Iterable[SettingDefinition]
        The definitions the values were resolved from.

    Returns
    -------
    list[ValidationIssue]
        Issues in declaration order. Missing or ``None`` values are never
        reported.
    """
    issues: list[ValidationIssue] = []
    for setting in setting_defs:
        if not setting.id:
            continue
        value = resolved_settings.get(setting.id)
        if value is None:
            continue
        issue = _check_setting(setting, value)
        if issue is not None:
            issues.append(issue)
    return issues


def validate_schema(schema: SectionSchema) -> list[ValidationIssue]:
    """Check a section schema for problems in its own declarations.

    A duplicate setting id or block type is an error, since only the last
    declaration would take effect; a blank section name is an error and a
    blank block name a warning. Settings without an id are reported by
    position, except display-only settings, which never carry one.

    Examples
    --------
    >>> from theme_pages.schema import parse_schema_payload
    >>> schema = parse_schema_payload(
    ...     {"name": "Hero", "settings": [{"type": "text", "id": "a"}] * 2}
    ... )
    >>> [(issue.setting_id, issue.severity) for issue in validate_schema(schema)]
    [('a', 'error')]
    """
    issues: list[ValidationIssue] = []
    if not schema.name.strip():
        issues.append(ValidationIssue("name", "Section name is required", "error"))
    issues.extend(_check_setting_ids(schema.settings, prefix=""))

    seen_types: set[str] = set()
    for definition in schema.blocks:
        if definition.type in seen_types:
            issues.append(
                ValidationIssue(
                    "blocks", f"Duplicate block type '{definition.type}'", "error"
                )
            )
        seen_types.add(definition.type)
        if not definition.name.strip():
            issues.append(
                ValidationIssue(
                    "blocks", f"Block type '{definition.type}' has no name"
                )
            )
        issues.extend(
            _check_setting_ids(definition.settings, prefix=f"{definition.type}.")
        )
    return issues


def validate_section(section: SectionInstance) -> list[ValidationIssue]:
    """Validate a composed section against its schema and block limits.

    Schema declaration problems from :func:`validate_schema` come first.
    Block setting issues are reported with ``<block_id>.<setting_id>`` ids;
    block count problems use the id ``blocks``. Sections without a schema
    produce no issues.
    """
    schema = section.schema
    if schema is None:
        return []
    issues = validate_schema(schema)
    issues.extend(validate(section.settings, schema.settings))

    for block in section.blocks:
        definition = schema.find_block(block.type)
        if definition is None:
            continue
        for issue in validate(block.settings, definition.settings):
            issues.append(dc.replace(issue, setting_id=f"{block.id}.{issue.setting_id}"))

    if schema.max_blocks is not None and len(section.blocks) > schema.max_blocks:
        issues.append(
            ValidationIssue(
                "blocks",
                f"Section has {len(section.blocks)} blocks; "
                f"at most {schema.max_blocks} allowed",
            )
        )
    counts = collections.Counter(block.type for block in section.blocks)
    for definition in schema.blocks:
        if definition.limit is not None and counts[definition.type] > definition.limit:
            issues.append(
                ValidationIssue(
                    "blocks",
                    f"Block type '{definition.type}' used {counts[definition.type]} "
                    f"times; limit is {definition.limit}",
                )
            )
    return issues


def _check_setting(setting: SettingDefinition, value: typ.Any) -> ValidationIssue | None:
    match setting:
        case RangeSetting():
            return _check_range(setting, value)
        case ChoiceSetting():
            if value and setting.options and value not in setting.option_values():
                return ValidationIssue(setting.id, f'Value "{value}" is not a valid option')
        case ColorSetting():
            if isinstance(value, str) and value and not _is_color(value):
                return ValidationIssue(setting.id, f"Invalid color format: {value}")
        case ResourceListSetting():
            if (
                setting.limit is not None
                and isinstance(value, list)
                and len(value) > setting.limit
            ):
                return ValidationIssue(
                    setting.id,
                    f"{len(value)} items selected; at most {setting.limit} allowed",
                )
    return None


def _check_setting_ids(
    settings: cabc.Iterable[SettingDefinition], *, prefix: str
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    seen: set[str] = set()
    for position, setting in enumerate(settings, start=1):
        if isinstance(setting, DisplaySetting):
            continue
        if not setting.id:
            issues.append(
                ValidationIssue(
                    f"{prefix}settings[{position}]",
                    f"Setting {position} ({setting.type}) has no id",
                    "error",
                )
            )
            continue
        if setting.id in seen:
            issues.append(
                ValidationIssue(
                    f"{prefix}{setting.id}",
                    f"Duplicate setting id '{setting.id}'",
                    "error",
                )
            )
        seen.add(setting.id)
    return issues


def _check_range(setting: RangeSetting, value: typ.Any) -> ValidationIssue | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return ValidationIssue(setting.id, f"Value {value!r} is not a number", "error")
    low, high = setting.min, setting.max
    if (low is not None and value < low) or (high is not None and value > high):
        return ValidationIssue(
            setting.id, f"Value {value} is outside range [{low}, {high}]"
        )
    return None


def _is_color(value: str) -> bool:
    text = value.strip()
    return bool(HEX_COLOR_PATTERN.match(text) or FUNCTIONAL_COLOR_PATTERN.match(text))


__all__ = [
    "Severity",
    "ValidationIssue",
    "validate",
    "validate_schema",
    "validate_section",
]
